"""Append-only JSONL replay log: one header record, then one record per tick."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, TextIO

from isoloot.sim.contracts import RunHeader, TickPayload

SCHEMA_VERSION = 2
RUN_LOG_NAME = "run.jsonl"


def create_run_folder(base_dir: Path, *, timestamp: str | None = None) -> Path:
    run_dir = base_dir / (timestamp or format_run_id(datetime.now(timezone.utc)))
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def format_run_id(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")


class ReplayWriter:
    """Keeps the run log open for the length of a run.

    The header must be written before any tick; a log without one cannot be
    replayed with its seed and script.
    """

    def __init__(self, run_dir: Path) -> None:
        self.path = run_dir / RUN_LOG_NAME
        self.ticks_written = 0
        self._handle: TextIO | None = None
        self._has_header = False

    def __enter__(self) -> ReplayWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def write_header(self, header: RunHeader) -> None:
        if self._has_header:
            raise RuntimeError(f"Header already written to {self.path}")
        self._write("header", header.model_dump(mode="json"))
        self._has_header = True

    def write_tick(self, payload: TickPayload) -> None:
        if not self._has_header:
            raise RuntimeError(f"Write a run header to {self.path} before ticks")
        self._write("tick", payload.model_dump(mode="json"))
        self.ticks_written += 1

    def _write(self, record_type: str, body: dict[str, Any]) -> None:
        if self._handle is None:
            raise RuntimeError("ReplayWriter used outside a with block")
        record = {"type": record_type, "schema_version": SCHEMA_VERSION, "body": body}
        self._handle.write(json.dumps(record, ensure_ascii=False))
        self._handle.write("\n")
        self._handle.flush()


def record_run(
    run_dir: Path, header: RunHeader, payloads: Iterable[TickPayload]
) -> int:
    """Write a header and every payload to ``run_dir``; returns the tick count."""
    with ReplayWriter(run_dir) as writer:
        writer.write_header(header)
        for payload in payloads:
            writer.write_tick(payload)
        return writer.ticks_written
