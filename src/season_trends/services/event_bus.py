"""Synchronous publish/subscribe used to propagate chart state changes.

Handlers run inline inside ``publish``. A failing handler is recorded in
``errors`` and logged; remaining handlers still run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol
import logging

log = logging.getLogger(__name__)

__all__ = [
    "ChartEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class ChartEvent(str, Enum):
    FILTERS_CHANGED = "filters_changed"
    REDRAW_COMPLETE = "redraw_complete"
    TOOLTIP_CHANGED = "tooltip_changed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    active: bool = True


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked with the lock released (subscribers are snapshotted
    first) so a handler may subscribe or unsubscribe without deadlocking.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    @staticmethod
    def _key(name: str | ChartEvent) -> str:
        return name.value if isinstance(name, ChartEvent) else name

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(self, name: str | ChartEvent, handler: EventHandler) -> Subscription:
        key = self._key(name)
        sub = Subscription(event=key, handler=handler)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | ChartEvent, payload: Any = None) -> Event:
        key = self._key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                log.exception("Handler for %s failed", key)
                with self._lock:
                    self._errors.append((evt, exc))
        return evt

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
