"""
Trace events for tool calls.

A Tracer stamps each event with the run id and a timestamp and hands the
resulting dict to a TraceSink. JsonlTraceSink appends one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TRACE_SCHEMA_VERSION = 1


class TraceSink(ABC):
    @abstractmethod
    def emit(self, event: dict[str, Any]) -> None:
        """Write a single event."""

    @abstractmethod
    def close(self) -> None:
        """Flush and release resources."""


class MemoryTraceSink(TraceSink):
    """Keeps events in a list; handy for tests and in-process inspection."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def emit(self, event: dict[str, Any]) -> None:
        self.events.append(event)

    def close(self) -> None:
        return


class JsonlTraceSink(TraceSink):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._fh = open(self.path, "a", encoding="utf-8")

    def emit(self, event: dict[str, Any]) -> None:
        line = json.dumps(event, ensure_ascii=False, default=str)
        with self._lock:
            if self._fh.closed:
                logger.warning("Dropping trace event after close: %s", event.get("type"))
                return
            self._fh.write(line + "\n")
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            if not self._fh.closed:
                self._fh.close()

    def __enter__(self) -> JsonlTraceSink:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class Tracer:
    def __init__(self, run_id: str, sink: TraceSink) -> None:
        self.run_id = run_id
        self.sink = sink

    def emit(self, event_type: str, data: dict[str, Any], step_id: str | None = None) -> None:
        event = {
            "v": TRACE_SCHEMA_VERSION,
            "type": event_type,
            "ts": int(time.time() * 1000),
            "run_id": self.run_id,
            "step_id": step_id,
            "data": data,
        }
        self.sink.emit(event)

    def close(self) -> None:
        self.sink.close()
