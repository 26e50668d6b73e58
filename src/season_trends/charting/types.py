"""Core charting types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from season_trends.domain.metrics import MetricKey
from season_trends.domain.models import ChartDomain, SeriesRole

from .palette import ChartStyle


@dataclass(frozen=True)
class LegendEntry:
    role: SeriesRole
    metric: MetricKey
    label: str
    style: ChartStyle


@dataclass(frozen=True)
class PointMarker:
    """A drawn point marker; hit target for tooltips."""

    series_label: str
    role: SeriesRole
    metric: MetricKey
    year: int
    value: float
    subject: str = ""


@dataclass
class RenderResult:
    """Outcome of one full redraw.

    ``figure`` is the matplotlib Figure that now holds the chart (kept typed
    as Any so callers without matplotlib imports can pass it around).
    """

    figure: Any
    title: str
    domain: ChartDomain
    legend: Tuple[LegendEntry, ...] = ()
    markers: Tuple[PointMarker, ...] = ()
    meta: Dict[str, Any] = field(default_factory=dict)

    def legend_labels(self) -> list[str]:
        return [e.label for e in self.legend]
