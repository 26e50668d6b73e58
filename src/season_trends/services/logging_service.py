"""Logging service.

Captures recent log records into a ring buffer so a run's activity (dropped
rows, clamped filters, redraws) can be written out as JSON Lines afterwards.
The buffer sees whatever the root logger lets through; it never changes the
root level.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from threading import RLock
from typing import Deque, List

__all__ = ["LogEntry", "LoggingService"]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach_root(self) -> None:
        if self._attached:
            return
        logging.getLogger().addHandler(self._handler)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)

    # Query ------------------------------------------------------------
    def recent(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    def filter(self, *, level: str | None = None) -> List[LogEntry]:
        return [e for e in self.recent() if not level or e.level == level]

    def export_jsonl(self, path: str, *, level: str | None = None) -> int:
        """Write entries (optionally one level only) as JSON Lines; returns the count."""
        entries = self.filter(level=level)
        with open(path, "w", encoding="utf-8") as f:
            for e in entries:
                f.write(json.dumps(asdict(e), sort_keys=True) + "\n")
        return len(entries)
