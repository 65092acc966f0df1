"""Tick loop orchestration for headless and scripted runs."""

from __future__ import annotations

from typing import Iterable, Mapping

from isoloot.sim.contracts import TickPayload
from isoloot.sim.dispatcher import handle_prompt
from isoloot.sim.world_state import WorldState

MAX_FRAME_DT = 0.1
DEFAULT_FRAME_DT = 1 / 60


def clamp_frame_delta(elapsed: float, *, max_dt: float = MAX_FRAME_DT) -> float:
    """Bound one frame's elapsed seconds to ``[0, max_dt]``."""
    return max(0.0, min(elapsed, max_dt))


def run_ticks(
    state: WorldState,
    ticks: int | None,
    *,
    dt: float = DEFAULT_FRAME_DT,
    commands: Mapping[int, list[str]] | None = None,
) -> Iterable[TickPayload]:
    schedule = commands or {}
    frame_dt = clamp_frame_delta(dt)
    step_count = 0
    while ticks is None or step_count < ticks:
        tick_id = state.tick + 1
        for prompt in schedule.get(tick_id, []):
            handle_prompt(prompt, state)
        state.update(frame_dt)
        yield state.snapshot()
        step_count += 1
