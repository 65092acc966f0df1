"""Application entry for running the simulation loop."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from rich.logging import RichHandler

from isoloot.db.replay_log import create_run_folder, record_run
from isoloot.render.play_screen import run_play_screen
from isoloot.sim.contracts import RunHeader
from isoloot.sim.tick_loop import DEFAULT_FRAME_DT, run_ticks
from isoloot.sim.world_loader import build_world, load_command_script, load_world_config
from isoloot.sim.world_state import WorldState

DEFAULT_TICKS = 600
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    resolved = (level or os.getenv("ISOLOOT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def run_simulation(
    base_dir: Path,
    *,
    ticks: int | None = DEFAULT_TICKS,
    dt: float = DEFAULT_FRAME_DT,
    world_path: Path | None = None,
    script_path: Path | None = None,
    seed: int | None = None,
) -> Path:
    run_dir = create_run_folder(base_dir)
    resolved_seed = _resolve_seed(seed)
    resolved_world = _resolve_world_path(world_path)
    state = _build_state(resolved_world, resolved_seed)
    commands = load_command_script(script_path) if script_path else None
    header = RunHeader(
        run_id=run_dir.name,
        created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        ticks=ticks,
        dt=dt,
        seed=resolved_seed,
        world=str(resolved_world) if resolved_world else None,
        script=str(script_path) if script_path else None,
        agents=[agent.name for agent in state.get_all_agents()],
        map_width=state.map_width,
        map_height=state.map_height,
    )
    logger.info("Running %s ticks into %s", ticks or "unbounded", run_dir)
    written = record_run(
        run_dir, header, run_ticks(state, ticks=ticks, dt=dt, commands=commands)
    )
    logger.info("Recorded %d ticks", written)
    return run_dir


def run_interactive(
    *, world_path: Path | None = None, seed: int | None = None
) -> WorldState:
    state = _build_state(_resolve_world_path(world_path), _resolve_seed(seed))
    run_play_screen(state)
    return state


def _build_state(world_path: Path | None, seed: int | None) -> WorldState:
    config = load_world_config(world_path)
    return build_world(config, seed=seed)


def _resolve_world_path(world_path: Path | None) -> Path | None:
    if world_path is not None:
        return world_path
    env_path = os.getenv("ISOLOOT_WORLD")
    return Path(env_path) if env_path else None


def _resolve_seed(seed: int | None) -> int | None:
    if seed is not None:
        return seed
    env_seed = os.getenv("ISOLOOT_SEED")
    if not env_seed:
        return None
    try:
        return int(env_seed)
    except ValueError as exc:
        raise ValueError(f"ISOLOOT_SEED must be an integer, got {env_seed!r}") from exc
