"""World registry, tick integrator and message log."""

from __future__ import annotations

import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from isoloot.sim.agent import DEFAULT_MAP_SIZE, Agent
from isoloot.sim.contracts import MessageEntry, StateSnapshot, TickPayload
from isoloot.sim.world_tiles import TileGrid, generate_tiles

logger = logging.getLogger(__name__)

MAX_MESSAGES = 50


def normalize_name(name: str) -> str:
    return name.casefold()


@dataclass
class WorldState:
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.time
    agents: dict[str, Agent] = field(default_factory=dict)
    tiles: TileGrid = ()
    map_width: int = DEFAULT_MAP_SIZE
    map_height: int = DEFAULT_MAP_SIZE
    tick: int = 0
    _messages: deque[MessageEntry] = field(
        default_factory=lambda: deque(maxlen=MAX_MESSAGES), init=False, repr=False
    )
    _next_id: int = field(default=1, init=False, repr=False)

    @property
    def messages(self) -> list[MessageEntry]:
        return list(self._messages)

    def add_agent(self, name: str, x: float, y: float, color: str) -> Agent:
        agent = Agent(
            agent_id=self._next_id,
            name=name,
            x=float(x),
            y=float(y),
            color=color,
            map_width=self.map_width,
            map_height=self.map_height,
            rng=self.rng,
        )
        self._next_id += 1
        key = normalize_name(name)
        if key in self.agents:
            logger.debug("Replacing agent registered as %r", key)
        self.agents[key] = agent
        logger.debug("Added agent %s (id=%d) at (%s, %s)", name, agent.agent_id, x, y)
        return agent

    def remove_agent(self, name: str) -> None:
        self.agents.pop(normalize_name(name), None)

    def get_agent(self, name: str) -> Agent | None:
        return self.agents.get(normalize_name(name))

    def get_all_agents(self) -> list[Agent]:
        return list(self.agents.values())

    def add_message(self, text: str) -> MessageEntry:
        entry = MessageEntry(text=text, timestamp=self.clock())
        self._messages.append(entry)
        return entry

    def generate_map(self, width: int, height: int) -> TileGrid:
        self.tiles = generate_tiles(width, height, rng=self.rng)
        self.map_width = width
        self.map_height = height
        return self.tiles

    def update(self, dt: float) -> None:
        self.tick += 1
        for agent in self.agents.values():
            agent.update(dt)

    def snapshot(self) -> TickPayload:
        return TickPayload(
            tick=self.tick,
            state=StateSnapshot(
                agents=[agent.snapshot() for agent in self.agents.values()],
                tiles=[list(row) for row in self.tiles],
                messages=self.messages,
            ),
        )
