"""Module entry point for `python -m isoloot`."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from isoloot.app import (
    DEFAULT_TICKS,
    configure_logging,
    run_interactive,
    run_simulation,
)
from isoloot.render.replay_reader import open_run, select_ticks
from isoloot.render.viewer import render_run_header, render_tick
from isoloot.sim.tick_loop import DEFAULT_FRAME_DT

DEFAULT_REPLAY_DIR = Path("replay")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the ISO Loot agent simulation.")
    parser.add_argument(
        "--play",
        action="store_true",
        help="Open the interactive map with a command prompt.",
    )
    parser.add_argument(
        "--script",
        type=Path,
        default=None,
        help="Command script to feed a headless run (one prompt per line).",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=DEFAULT_TICKS,
        help="Number of ticks for a headless run. Use 0 for infinite.",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=DEFAULT_FRAME_DT,
        help="Seconds simulated per tick (capped at 0.1).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for map generation and explore offsets.",
    )
    parser.add_argument(
        "--world",
        type=Path,
        default=None,
        help="World config JSON (map size, agent roster, welcome text).",
    )
    parser.add_argument(
        "--replay-dir",
        type=Path,
        default=DEFAULT_REPLAY_DIR,
        help="Base replay directory for new runs.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print a saved run folder through the viewer.",
    )
    parser.add_argument(
        "--every",
        type=int,
        default=60,
        help="When replaying, print every Nth tick.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to ISOLOOT_LOG_LEVEL or WARNING).",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.replay is not None:
        _replay_run(args.replay, every=args.every)
        return

    if args.play:
        run_interactive(world_path=args.world, seed=args.seed)
        return

    created_run = run_simulation(
        args.replay_dir,
        ticks=args.ticks or None,
        dt=args.dt,
        world_path=args.world,
        script_path=args.script,
        seed=args.seed,
    )
    print(f"Run saved to {created_run}")


def _replay_run(run_folder: Path, *, every: int = 1) -> None:
    try:
        run = open_run(run_folder)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    console = Console()
    console.print(render_run_header(run.header))
    for payload in select_ticks(run.payloads(), every=every):
        console.print(render_tick(payload))


if __name__ == "__main__":
    main()
