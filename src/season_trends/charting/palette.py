"""Deterministic style assignment for chart series.

League-average lines get one solid color per metric; team lines share a
single accent color and are told apart by a per-metric dash pattern. The
mapping depends only on (role, metric), so the legend keeps its meaning
across redraws.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from season_trends.domain.metrics import MetricKey
from season_trends.domain.models import SeriesRole

__all__ = ["ChartStyle", "StyleAssignment", "LEAGUE_COLORS", "TEAM_COLOR", "TEAM_DASHES"]

LineStyle = Union[str, Tuple[float, Tuple[float, ...]]]

LEAGUE_COLORS: Dict[MetricKey, str] = {
    MetricKey.RUNS: "#1f77b4",
    MetricKey.HITS: "#d62728",
    MetricKey.HOME_RUNS: "#2ca02c",
    MetricKey.WALKS: "#9467bd",
    MetricKey.STRIKEOUTS: "#8c564b",
    MetricKey.RUNS_ALLOWED: "#17becf",
}
TEAM_COLOR = "#ff7f0e"
TEAM_DASHES: Dict[MetricKey, LineStyle] = {
    MetricKey.RUNS: "solid",
    MetricKey.HITS: (0, (4, 3)),
    MetricKey.HOME_RUNS: (0, (1, 2)),
    MetricKey.WALKS: "dashdot",
    MetricKey.STRIKEOUTS: (0, (6, 2, 1, 2)),
    MetricKey.RUNS_ALLOWED: (0, (2, 2)),
}


@dataclass(frozen=True)
class ChartStyle:
    color: str
    linestyle: LineStyle = "solid"
    linewidth: float = 2.0
    marker_size: float = 3.0


class StyleAssignment:
    """Maps (role, metric) to a ``ChartStyle``."""

    def __init__(
        self,
        league_colors: Dict[MetricKey, str] | None = None,
        team_color: str = TEAM_COLOR,
        team_dashes: Dict[MetricKey, LineStyle] | None = None,
    ) -> None:
        self._league_colors = dict(league_colors or LEAGUE_COLORS)
        self._team_color = team_color
        self._team_dashes = dict(team_dashes or TEAM_DASHES)

    def style_for(self, role: SeriesRole, metric: MetricKey) -> ChartStyle:
        if role is SeriesRole.TEAM:
            return ChartStyle(
                color=self._team_color,
                linestyle=self._team_dashes.get(metric, "solid"),
                marker_size=3.5,
            )
        return ChartStyle(color=self._league_colors.get(metric, "#4E79A7"))
