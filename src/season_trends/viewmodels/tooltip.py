"""Hover tooltip state machine.

States are Hidden and Shown(payload, position):
  pointer_enter  Hidden/Shown -> Shown with the hovered point's payload
  pointer_move   Shown -> Shown, repositioned; payload replaced only when the
                 pointer is over a different point
  pointer_leave  Shown -> Hidden

Only one tooltip exists at a time. No timers: every transition happens
synchronously inside the pointer callback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
import math

from season_trends.config import settings
from season_trends.charting.types import PointMarker
from season_trends.domain.metrics import METRICS
from season_trends.domain.models import SeriesRole
from season_trends.services.event_bus import ChartEvent, EventBus

__all__ = [
    "TooltipPayload",
    "TooltipState",
    "HIDDEN",
    "TooltipController",
    "format_tooltip",
    "marker_at",
]

Position = Tuple[float, float]


@dataclass(frozen=True)
class TooltipPayload:
    year: int
    series_label: str
    value: float
    text: str

    @classmethod
    def from_marker(cls, marker: PointMarker) -> "TooltipPayload":
        return cls(
            year=marker.year,
            series_label=marker.series_label,
            value=marker.value,
            text=format_tooltip(marker),
        )


@dataclass(frozen=True)
class TooltipState:
    payload: Optional[TooltipPayload] = None
    position: Optional[Position] = None
    marker: Optional[PointMarker] = None

    @property
    def visible(self) -> bool:
        return self.payload is not None


HIDDEN = TooltipState()


def format_tooltip(marker: PointMarker) -> str:
    spec = METRICS[marker.metric]
    if marker.role is SeriesRole.TEAM:
        rate = spec.tooltip_label[0].upper() + spec.tooltip_label[1:]
        return f"{marker.subject}\nYear: {marker.year}\n{rate}: {marker.value:.2f}"
    return (
        f"Year: {marker.year}\nLeague {spec.tooltip_label}: {marker.value:.2f}\n"
        f"League: {marker.subject}"
    )


def marker_at(
    markers: Iterable[PointMarker],
    x: float | None,
    y: float | None,
    *,
    x_tolerance: float = settings.HIT_TOLERANCE,
    y_tolerance: float,
) -> PointMarker | None:
    """Nearest marker to (x, y) in data coordinates, or None if none is close.

    Distances are scaled by the per-axis tolerance so years and per-game
    values are compared on an equal footing.
    """
    if x is None or y is None or x_tolerance <= 0 or y_tolerance <= 0:
        return None
    best: PointMarker | None = None
    best_dist = 1.0
    for m in markers:
        d = math.hypot((m.year - x) / x_tolerance, (m.value - y) / y_tolerance)
        if d <= best_dist:
            best, best_dist = m, d
    return best


class TooltipController:
    def __init__(
        self, *, event_bus: EventBus | None = None, offset: Position = settings.TOOLTIP_OFFSET
    ) -> None:
        self._bus = event_bus
        self._offset = offset
        self._state = HIDDEN

    @property
    def state(self) -> TooltipState:
        return self._state

    def _place(self, position: Position) -> Position:
        return (position[0] + self._offset[0], position[1] + self._offset[1])

    def _set(self, state: TooltipState) -> TooltipState:
        self._state = state
        if self._bus is not None:
            self._bus.publish(ChartEvent.TOOLTIP_CHANGED, state)
        return state

    def pointer_enter(self, marker: PointMarker, position: Position) -> TooltipState:
        return self._set(
            TooltipState(TooltipPayload.from_marker(marker), self._place(position), marker)
        )

    def pointer_move(self, marker: PointMarker | None, position: Position) -> TooltipState:
        if not self._state.visible:
            return self._state
        if marker is not None and marker != self._state.marker:
            return self.pointer_enter(marker, position)
        return self._set(TooltipState(self._state.payload, self._place(position), self._state.marker))

    def pointer_leave(self) -> TooltipState:
        if not self._state.visible:
            return self._state
        return self._set(HIDDEN)

    def hide(self) -> TooltipState:
        return self.pointer_leave()

    def track(self, marker: PointMarker | None, position: Position) -> TooltipState:
        """Route a raw pointer motion (already hit-tested) to the transitions."""
        if marker is None:
            return self.pointer_leave()
        if not self._state.visible:
            return self.pointer_enter(marker, position)
        return self.pointer_move(marker, position)
