"""Metric dispatch table.

Every supported metric is a per-game rate: a raw counting column of the
team-season row divided by games played. Adding a metric is a data change
here; nothing else branches on metric names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

__all__ = [
    "MetricKey",
    "MetricSpec",
    "METRICS",
    "COMBINED_METRICS",
    "PER_GAME",
    "metric_spec",
    "parse_metric",
]

PER_GAME = "per game"


class MetricKey(str, Enum):
    RUNS = "runs"
    HITS = "hits"
    HOME_RUNS = "home_runs"
    WALKS = "walks"
    STRIKEOUTS = "strikeouts"
    RUNS_ALLOWED = "runs_allowed"


@dataclass(frozen=True)
class MetricSpec:
    """Static description of one metric.

    Attributes:
        key: Enumerated identifier.
        column: Numerator column in the raw rows.
        label: Short display name ("Runs").
        axis_label: Y-axis caption when plotted alone.
        tooltip_label: Lower-case rate label used in tooltips ("runs/game").
        unit: Unit family; series sharing a y-domain must agree on it.
    """

    key: MetricKey
    column: str
    label: str
    axis_label: str
    tooltip_label: str
    unit: str = PER_GAME

    @property
    def legend_label(self) -> str:
        return f"{self.label}/Game"


METRICS: Dict[MetricKey, MetricSpec] = {
    spec.key: spec
    for spec in (
        MetricSpec(MetricKey.RUNS, "R", "Runs", "Runs per Game", "runs/game"),
        MetricSpec(MetricKey.HITS, "H", "Hits", "Hits per Game", "hits/game"),
        MetricSpec(MetricKey.HOME_RUNS, "HR", "Home Runs", "Home Runs per Game", "home runs/game"),
        MetricSpec(MetricKey.WALKS, "BB", "Walks", "Walks per Game", "walks/game"),
        MetricSpec(MetricKey.STRIKEOUTS, "SO", "Strikeouts", "Strikeouts per Game", "strikeouts/game"),
        MetricSpec(
            MetricKey.RUNS_ALLOWED, "RA", "Runs Allowed", "Runs Allowed per Game", "runs allowed/game"
        ),
    )
}

# Metrics plotted together in "combined" mode
COMBINED_METRICS: Tuple[MetricKey, ...] = (MetricKey.RUNS, MetricKey.HITS)


def metric_spec(key: MetricKey | str) -> MetricSpec:
    return METRICS[MetricKey(key)]


def parse_metric(value: object) -> MetricKey | None:
    """Return the ``MetricKey`` for ``value`` or None if it names no metric."""
    if isinstance(value, MetricKey):
        return value
    try:
        return MetricKey(str(value).strip().lower())
    except ValueError:
        return None
