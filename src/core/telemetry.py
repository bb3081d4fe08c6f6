"""Telemetry interfaces for deck conversion.

A minimal, pluggable heartbeat/event sink so the CLI can report progress
while the library and tests stay silent.
"""
from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Telemetry(Protocol):
    """A sink for heartbeat and event notifications.

    Implementations can print to a terminal, log, or collect events in memory.
    """

    def heartbeat(self, op_id: str, elapsed_s: float, note: str | None = None) -> None:
        """Emit a periodic heartbeat for a long-running operation."""

    def event(self, op_id: str, level: str, msg: str, data: dict | None = None) -> None:
        """Emit a structured event for diagnostics or user feedback."""


class NullTelemetry:
    """A no-op telemetry sink suitable for tests and library callers."""

    def heartbeat(self, op_id: str, elapsed_s: float, note: str | None = None) -> None:  # noqa: D401
        return None

    def event(self, op_id: str, level: str, msg: str, data: dict | None = None) -> None:  # noqa: D401
        return None


class StdoutTelemetry:
    """Print progress lines; the CLI points ``stream`` at stderr."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout)

    def heartbeat(self, op_id: str, elapsed_s: float, note: str | None = None) -> None:
        note_suffix = f" ({note})" if note else ""
        self._write(f"[heartbeat] {op_id} +{elapsed_s:.1f}s{note_suffix}")

    def event(self, op_id: str, level: str, msg: str, data: dict | None = None) -> None:
        data_suffix = f" data={data}" if data else ""
        self._write(f"[{level}] {op_id} {msg}{data_suffix}")
