"""Aggregation engine: dataset + filter selection -> yearly series.

Algorithm:
 1. Restrict the dataset to the league selector and the inclusive year range.
 2. For each requested metric, group by year and take the arithmetic mean of
    the metric over the records that carry it. Years where no record carries
    the metric are skipped rather than emitted as null/zero points.
 3. When a team is selected, restrict the same subset to that team and
    repeat. A team contributes at most one record per year, so this yields
    its own per-game values.

Output series are sorted ascending by year; the renderer relies on this.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from season_trends.domain.metrics import METRICS, MetricKey
from season_trends.domain.models import (
    Dataset,
    FilterSelection,
    SeasonRecord,
    Series,
    SeriesPoint,
    SeriesRole,
)

__all__ = ["AggregationResult", "yearly_mean", "aggregate"]


@dataclass(frozen=True)
class AggregationResult:
    league_series: Tuple[Series, ...]
    team_series: Tuple[Series, ...]

    def all_series(self) -> Tuple[Series, ...]:
        return self.league_series + self.team_series

    def displayed(self) -> Tuple[Series, ...]:
        """Series carrying at least one point."""
        return tuple(s for s in self.all_series() if not s.is_empty)


def yearly_mean(records: Iterable[SeasonRecord], metric: MetricKey) -> Tuple[SeriesPoint, ...]:
    by_year: Dict[int, List[float]] = {}
    for r in records:
        value = r.value(metric)
        if value is None:
            continue
        by_year.setdefault(r.year, []).append(value)
    return tuple(
        SeriesPoint(year=year, value=sum(values) / len(values))
        for year, values in sorted(by_year.items())
    )


def _league_label(metric: MetricKey) -> str:
    return f"League {METRICS[metric].legend_label}"


def _team_label(selection: FilterSelection, metric: MetricKey) -> str:
    return f"{selection.team} {METRICS[metric].legend_label}"


def aggregate(dataset: Dataset | Iterable[SeasonRecord], selection: FilterSelection) -> AggregationResult:
    scoped = selection.with_records(dataset)
    metrics = selection.requested_metrics()
    league_series = tuple(
        Series(
            role=SeriesRole.LEAGUE_AVERAGE,
            metric=m,
            label=_league_label(m),
            points=yearly_mean(scoped, m),
            subject=selection.league,
        )
        for m in metrics
    )
    team_series: Tuple[Series, ...] = ()
    if selection.team_selected:
        team_records = tuple(r for r in scoped if r.team == selection.team)
        team_series = tuple(
            Series(
                role=SeriesRole.TEAM,
                metric=m,
                label=_team_label(selection, m),
                points=yearly_mean(team_records, m),
                subject=selection.team,
            )
            for m in metrics
        )
    return AggregationResult(league_series=league_series, team_series=team_series)
