"""Core immutable data types shared by the chart pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from season_trends.config import settings
from season_trends.domain.errors import EmptyDataset
from season_trends.domain.metrics import COMBINED_METRICS, METRICS, MetricKey, parse_metric

__all__ = [
    "League",
    "SeasonRecord",
    "Dataset",
    "SeriesRole",
    "SeriesPoint",
    "Series",
    "ChartDomain",
    "FilterSelection",
]


class League(str, Enum):
    AL = "AL"
    NL = "NL"


@dataclass(frozen=True)
class SeasonRecord:
    """One team-season with its derived per-game metrics.

    ``metrics`` only holds metrics whose numerator was present in the source
    row, so a record may support runs but not strikeouts.
    """

    league: League
    team: str
    year: int
    games: int
    metrics: Mapping[MetricKey, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.metrics, MappingProxyType):
            object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    def value(self, metric: MetricKey) -> float | None:
        return self.metrics.get(metric)


@dataclass(frozen=True)
class Dataset:
    """Read-only working dataset, built once after loading."""

    records: Tuple[SeasonRecord, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        if not self.records:
            raise EmptyDataset("dataset contains no records")

    @cached_property
    def min_year(self) -> int:
        return min(r.year for r in self.records)

    @cached_property
    def max_year(self) -> int:
        return max(r.year for r in self.records)

    @cached_property
    def leagues(self) -> Tuple[str, ...]:
        return tuple(sorted({r.league.value for r in self.records}))

    def teams_for(self, league: str) -> Tuple[str, ...]:
        """Sorted team names playing in ``league`` (every team for ``"All"``)."""
        if league == settings.ALL:
            return self._all_teams
        return self._teams_by_league.get(league, ())

    @cached_property
    def _all_teams(self) -> Tuple[str, ...]:
        return tuple(sorted({r.team for r in self.records}))

    @cached_property
    def _teams_by_league(self) -> Mapping[str, Tuple[str, ...]]:
        grouped: dict[str, set[str]] = {}
        for r in self.records:
            grouped.setdefault(r.league.value, set()).add(r.team)
        return {k: tuple(sorted(v)) for k, v in grouped.items()}

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


class SeriesRole(str, Enum):
    LEAGUE_AVERAGE = "league"
    TEAM = "team"


@dataclass(frozen=True)
class SeriesPoint:
    year: int
    value: float


@dataclass(frozen=True)
class Series:
    """Ordered (year, value) points for one (role, metric) pair.

    Points are strictly increasing by year; the renderer draws them as given.
    """

    role: SeriesRole
    metric: MetricKey
    label: str
    points: Tuple[SeriesPoint, ...] = ()
    subject: str = ""  # league scope or team name the values describe

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    @property
    def unit(self) -> str:
        return METRICS[self.metric].unit

    @property
    def is_empty(self) -> bool:
        return not self.points

    def years(self) -> list[int]:
        return [p.year for p in self.points]

    def values(self) -> list[float]:
        return [p.value for p in self.points]


@dataclass(frozen=True)
class ChartDomain:
    x_domain: Tuple[int, int]
    y_domain: Tuple[float, float]

    def contains(self, point: SeriesPoint) -> bool:
        x_lo, x_hi = self.x_domain
        y_lo, y_hi = self.y_domain
        return x_lo <= point.year <= x_hi and y_lo <= point.value <= y_hi


@dataclass(frozen=True)
class FilterSelection:
    """Immutable snapshot of the filter state handed to aggregation."""

    league: str
    team: str
    metric: str
    year_range: Tuple[int, int]

    def requested_metrics(self) -> Tuple[MetricKey, ...]:
        if self.metric == settings.COMBINED:
            return COMBINED_METRICS
        key = parse_metric(self.metric)
        return (key,) if key is not None else COMBINED_METRICS

    @property
    def team_selected(self) -> bool:
        return self.team != settings.ALL

    def with_records(self, records: Iterable[SeasonRecord]) -> Tuple[SeasonRecord, ...]:
        """Records matching the league selector and inclusive year range."""
        lo, hi = self.year_range
        return tuple(
            r
            for r in records
            if (self.league == settings.ALL or r.league.value == self.league)
            and lo <= r.year <= hi
        )
