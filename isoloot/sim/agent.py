"""Agent runtime state and its action-queue state machine."""

from __future__ import annotations

import math
import random
from collections import deque
from dataclasses import dataclass, field

from isoloot.sim.contracts import (
    Action,
    AgentSnapshot,
    AgentState,
    BuildAction,
    ExploreAction,
    GatherAction,
    MoveAction,
    SayAction,
)
from isoloot.sim.world_tiles import round_half_up

MOVE_SPEED = 3.0  # tiles per second
ARRIVAL_DISTANCE = 0.05
TASK_DURATION = 2.0  # seconds per gather/build
EXPLORE_RADIUS = 2
DEFAULT_MAP_SIZE = 12


@dataclass
class Agent:
    agent_id: int
    name: str
    x: float = 0.0
    y: float = 0.0
    color: str = "#ff5555"
    map_width: int = DEFAULT_MAP_SIZE
    map_height: int = DEFAULT_MAP_SIZE
    state: AgentState = AgentState.IDLE
    inventory: list[str] = field(default_factory=list)
    current_action: Action | None = None
    action_queue: deque[Action] = field(default_factory=deque)
    last_message: str = ""
    action_timer: float = 0.0
    speed: float = MOVE_SPEED
    task_duration: float = TASK_DURATION
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def tile_x(self) -> int:
        return round_half_up(self.x)

    @property
    def tile_y(self) -> int:
        return round_half_up(self.y)

    def enqueue_move(self, x: float, y: float) -> MoveAction:
        action = MoveAction(x=x, y=y)
        self.action_queue.append(action)
        return action

    def enqueue_explore(self) -> ExploreAction:
        """Queue a short hop to a random nearby tile.

        The destination is picked now, not when the action starts, and is
        clamped to the map bounds this agent was created with.
        """
        dx = self.rng.randint(-EXPLORE_RADIUS, EXPLORE_RADIUS)
        dy = self.rng.randint(-EXPLORE_RADIUS, EXPLORE_RADIUS)
        action = ExploreAction(
            x=_clamp(round_half_up(self.x) + dx, 0, self.map_width - 1),
            y=_clamp(round_half_up(self.y) + dy, 0, self.map_height - 1),
        )
        self.action_queue.append(action)
        return action

    def enqueue_gather(self, resource: str) -> GatherAction:
        action = GatherAction(resource=resource)
        self.action_queue.append(action)
        return action

    def enqueue_build(self, structure: str) -> BuildAction:
        action = BuildAction(structure=structure)
        self.action_queue.append(action)
        return action

    def enqueue_say(self, message: str) -> SayAction:
        # Shown right away; applied again when the action reaches the front.
        self.last_message = message
        action = SayAction(message=message)
        self.action_queue.append(action)
        return action

    def update(self, dt: float) -> None:
        """Advance the state machine by ``dt`` seconds (one branch per call)."""
        if self.state in (AgentState.MOVING, AgentState.EXPLORING):
            self._advance_movement(dt)
        elif self.state in (AgentState.GATHERING, AgentState.BUILDING):
            if self.current_action is not None:
                self._advance_task(dt)
        elif self.state == AgentState.IDLE and self.action_queue:
            self._start_next_action()

    def status_text(self) -> str:
        action = self.current_action
        if self.state == AgentState.IDLE:
            return f"{self.name} is idle at ({self.tile_x}, {self.tile_y})"
        if self.state == AgentState.MOVING and isinstance(action, MoveAction):
            target = f"{_format_coord(action.x)}, {_format_coord(action.y)}"
            return f"{self.name} is moving to ({target})"
        if self.state == AgentState.GATHERING:
            resource = (
                action.resource if isinstance(action, GatherAction) else "resources"
            )
            return f"{self.name} is gathering {resource}"
        if self.state == AgentState.BUILDING:
            structure = (
                action.structure if isinstance(action, BuildAction) else "something"
            )
            return f"{self.name} is building {structure}"
        if self.state == AgentState.EXPLORING:
            return f"{self.name} is exploring"
        return f"{self.name}: {self.state.value}"

    def snapshot(self) -> AgentSnapshot:
        return AgentSnapshot(
            id=self.agent_id,
            name=self.name,
            x=self.x,
            y=self.y,
            color=self.color,
            state=self.state,
            inventory=list(self.inventory),
            last_message=self.last_message,
            current_action=self.current_action,
            queued=len(self.action_queue),
            status=self.status_text(),
        )

    def _advance_movement(self, dt: float) -> None:
        action = self.current_action
        if not isinstance(action, (MoveAction, ExploreAction)):
            self._finish_action()
            return
        dx = action.x - self.x
        dy = action.y - self.y
        distance = math.hypot(dx, dy)
        if distance < ARRIVAL_DISTANCE:
            self.x = float(action.x)
            self.y = float(action.y)
            self._finish_action()
            return
        step = min(self.speed * dt, distance)
        self.x += dx / distance * step
        self.y += dy / distance * step

    def _advance_task(self, dt: float) -> None:
        self.action_timer += dt
        if self.action_timer < self.task_duration:
            return
        if self.state == AgentState.GATHERING and isinstance(
            self.current_action, GatherAction
        ):
            self.inventory.append(self.current_action.resource)
        self._finish_action()

    def _start_next_action(self) -> None:
        action = self.action_queue.popleft()
        self.current_action = action
        self.action_timer = 0.0
        if isinstance(action, MoveAction):
            self.state = AgentState.MOVING
        elif isinstance(action, ExploreAction):
            self.state = AgentState.EXPLORING
        elif isinstance(action, GatherAction):
            self.state = AgentState.GATHERING
        elif isinstance(action, BuildAction):
            self.state = AgentState.BUILDING
        elif isinstance(action, SayAction):
            self.last_message = action.message
            self._finish_action()
        else:
            self._finish_action()

    def _finish_action(self) -> None:
        self.state = AgentState.IDLE
        self.current_action = None
        self.action_timer = 0.0


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _format_coord(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"
