"""Load world setup (map size, roster) from JSON and command scripts from text."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from pathlib import Path

from isoloot.sim.world_state import WorldState

DEFAULT_MAP_WIDTH = 12
DEFAULT_MAP_HEIGHT = 12
DEFAULT_WELCOME = "Welcome to ISO Loot! Type a command below."
DEFAULT_SCRIPT_TICK = 1


@dataclass(frozen=True)
class AgentDef:
    name: str
    x: float
    y: float
    color: str


DEFAULT_ROSTER: tuple[AgentDef, ...] = (
    AgentDef(name="Atlas", x=2, y=2, color="#e74c3c"),
    AgentDef(name="Nova", x=6, y=4, color="#3498db"),
    AgentDef(name="Echo", x=9, y=8, color="#2ecc71"),
)


@dataclass(frozen=True)
class WorldConfig:
    map_width: int = DEFAULT_MAP_WIDTH
    map_height: int = DEFAULT_MAP_HEIGHT
    agents: list[AgentDef] = field(default_factory=lambda: list(DEFAULT_ROSTER))
    welcome: str | None = DEFAULT_WELCOME


def load_world_config(path: Path | None = None) -> WorldConfig:
    """Read a world config file, or return the default world when no path is given."""
    if path is None:
        return WorldConfig()
    data = _load_json(path)
    map_data = data.get("map", {})
    width = int(map_data.get("width", DEFAULT_MAP_WIDTH))
    height = int(map_data.get("height", DEFAULT_MAP_HEIGHT))
    if width <= 0 or height <= 0:
        raise ValueError(f"Map size must be positive, got {width}x{height}.")

    raw_agents = data.get("agents")
    if raw_agents is None:
        agents = list(DEFAULT_ROSTER)
    else:
        agents = [_parse_agent(raw) for raw in raw_agents]
    _validate_unique_names(agents)
    return WorldConfig(
        map_width=width,
        map_height=height,
        agents=agents,
        welcome=data.get("welcome", DEFAULT_WELCOME),
    )


def build_world(
    config: WorldConfig | None = None, *, seed: int | None = None
) -> WorldState:
    config = config or WorldConfig()
    state = WorldState(rng=random.Random(seed))
    state.generate_map(config.map_width, config.map_height)
    for agent in config.agents:
        state.add_agent(agent.name, agent.x, agent.y, agent.color)
    if config.welcome:
        state.add_message(config.welcome)
    return state


def load_command_script(path: Path) -> dict[int, list[str]]:
    """Read one prompt per line, keyed by the tick it is submitted before.

    Lines may start with ``@<tick>`` to schedule them later; everything else
    goes in before the first tick. Blank lines and ``#`` comments are skipped.
    """
    schedule: dict[int, list[str]] = {}
    text = path.read_text(encoding="utf-8")
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tick = DEFAULT_SCRIPT_TICK
        if line.startswith("@"):
            marker, _, rest = line.partition(" ")
            try:
                tick = int(marker[1:])
            except ValueError as exc:
                raise ValueError(
                    f"{path}:{line_no}: bad tick marker {marker!r}"
                ) from exc
            if tick < 1:
                raise ValueError(f"{path}:{line_no}: tick must be >= 1")
            line = rest.strip()
            if not line:
                continue
        schedule.setdefault(tick, []).append(line)
    return schedule


def _parse_agent(raw: dict) -> AgentDef:
    try:
        return AgentDef(
            name=str(raw["name"]),
            x=float(raw.get("x", 0)),
            y=float(raw.get("y", 0)),
            color=str(raw.get("color", "#ff5555")),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid agent entry: {raw!r}") from exc


def _validate_unique_names(agents: list[AgentDef]) -> None:
    seen: set[str] = set()
    for agent in agents:
        key = agent.name.casefold()
        if key in seen:
            raise ValueError(f"Agent name {agent.name} is defined twice.")
        seen.add(key)


def _load_json(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing world data file: {path}") from exc
    return json.loads(text)
