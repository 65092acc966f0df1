"""Load recorded runs back into RunHeader and TickPayload models."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import ValidationError

from isoloot.db.replay_log import RUN_LOG_NAME, SCHEMA_VERSION
from isoloot.sim.contracts import RunHeader, TickPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayRun:
    header: RunHeader
    log_path: Path

    def payloads(self) -> Iterator[TickPayload]:
        for body in _bodies(self.log_path, "tick"):
            try:
                yield TickPayload.model_validate(body)
            except ValidationError as exc:
                logger.warning("Skipping invalid tick in %s: %s", self.log_path, exc)


def open_run(run_dir: Path) -> ReplayRun:
    """Validate a run folder's header; raises if the log or header is missing."""
    log_path = run_dir / RUN_LOG_NAME
    if not log_path.exists():
        raise FileNotFoundError(f"No replay log found in {run_dir}.")
    for body in _bodies(log_path, "header"):
        return ReplayRun(header=RunHeader.model_validate(body), log_path=log_path)
    raise ValueError(f"Replay log {log_path} has no run header.")


def select_ticks(
    payloads: Iterable[TickPayload], *, every: int = 1
) -> Iterator[TickPayload]:
    """Yield every Nth tick, plus the final tick when the stride skips it."""
    step = max(1, every)
    last: TickPayload | None = None
    for payload in payloads:
        last = payload
        if payload.tick % step == 0:
            yield payload
    if last is not None and last.tick % step != 0:
        yield last


def _bodies(log_path: Path, record_type: str) -> Iterator[dict]:
    with log_path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.debug("Skipping unreadable line %s:%d", log_path, line_no)
                continue
            if not isinstance(record, dict) or record.get("type") != record_type:
                continue
            if record.get("schema_version") != SCHEMA_VERSION:
                logger.warning(
                    "Skipping %s record with schema %r in %s:%d",
                    record_type,
                    record.get("schema_version"),
                    log_path,
                    line_no,
                )
                continue
            body = record.get("body")
            if isinstance(body, dict):
                yield body
