"""Core data contracts for commands, queued actions and tick snapshots."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TileKind(str, Enum):
    GRASS = "grass"
    SAND = "sand"
    STONE = "stone"
    WATER = "water"


class AgentState(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    EXPLORING = "exploring"
    GATHERING = "gathering"
    BUILDING = "building"


class ActionKind(str, Enum):
    MOVE = "move"
    EXPLORE = "explore"
    GATHER = "gather"
    BUILD = "build"
    SAY = "say"


BROADCAST_TARGET = "all"


class MoveArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: int
    y: int


class GatherArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resource: str


class BuildArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    structure: str


class SayArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str


class Command(BaseModel):
    """One parsed line of user input."""

    model_config = ConfigDict(extra="forbid")

    target: str
    kind: ActionKind
    move: MoveArgs | None = None
    gather: GatherArgs | None = None
    build: BuildArgs | None = None
    say: SayArgs | None = None

    @model_validator(mode="after")
    def validate_command(self) -> "Command":
        expected = {
            ActionKind.MOVE: "move",
            ActionKind.GATHER: "gather",
            ActionKind.BUILD: "build",
            ActionKind.SAY: "say",
        }.get(self.kind)
        for field_name in ("move", "gather", "build", "say"):
            present = getattr(self, field_name) is not None
            if field_name == expected and not present:
                raise ValueError(f"{self.kind.value.upper()} requires {field_name} args")
            if field_name != expected and present:
                raise ValueError(
                    f"{self.kind.value.upper()} cannot include {field_name} args"
                )
        return self

    @property
    def is_broadcast(self) -> bool:
        return self.target.casefold() == BROADCAST_TARGET


class MoveAction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[ActionKind.MOVE] = ActionKind.MOVE
    x: float
    y: float


class ExploreAction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[ActionKind.EXPLORE] = ActionKind.EXPLORE
    x: int
    y: int


class GatherAction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[ActionKind.GATHER] = ActionKind.GATHER
    resource: str


class BuildAction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[ActionKind.BUILD] = ActionKind.BUILD
    structure: str


class SayAction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[ActionKind.SAY] = ActionKind.SAY
    message: str


Action = Annotated[
    Union[MoveAction, ExploreAction, GatherAction, BuildAction, SayAction],
    Field(discriminator="kind"),
]


class MessageEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str
    timestamp: float


class AgentSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    name: str
    x: float
    y: float
    color: str
    state: AgentState
    inventory: list[str] = Field(default_factory=list)
    last_message: str = ""
    current_action: Action | None = None
    queued: int = 0
    status: str = ""


class StateSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    agents: list[AgentSnapshot] = Field(default_factory=list)
    tiles: list[list[TileKind]] = Field(default_factory=list)
    messages: list[MessageEntry] = Field(default_factory=list)


class TickPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tick: int
    state: StateSnapshot


class RunHeader(BaseModel):
    """Settings a headless run was recorded with, written once per replay log."""

    model_config = ConfigDict(extra="forbid")

    run_id: str
    created_at: str
    ticks: int | None = None
    dt: float
    seed: int | None = None
    world: str | None = None
    script: str | None = None
    agents: list[str] = Field(default_factory=list)
    map_width: int
    map_height: int
