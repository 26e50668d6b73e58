"""Filter state for the trend chart.

Holds the league, team, metric and year-range selection. Every setter
validates against the currently legal domain, clamps invalid input to a
valid default (never raising), then publishes ``FILTERS_CHANGED`` exactly
once with the new ``FilterSelection``.

Invariants:
 - the selected team always belongs to the selected league (changing the
   league resets the team to "All" before subscribers run)
 - year_range lo <= hi, both inside the dataset's year bounds
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Tuple
import logging

from season_trends.config import settings
from season_trends.domain.metrics import COMBINED_METRICS, METRICS, parse_metric
from season_trends.domain.models import Dataset, FilterSelection
from season_trends.services.event_bus import ChartEvent, Event, EventBus, Subscription

log = logging.getLogger(__name__)

__all__ = ["FilterState", "FilterOptions", "derive_options", "year_label"]

Option = Tuple[str, str]  # (value, display text)


class FilterState:
    def __init__(
        self,
        dataset: Dataset,
        *,
        event_bus: EventBus | None = None,
        league: str | None = None,
        metric: str = settings.COMBINED,
    ) -> None:
        self._dataset = dataset
        self._bus = event_bus or EventBus()
        default_league = league or settings.DEFAULT_LEAGUE
        self._league = self._valid_league(default_league)
        self._team = settings.ALL
        self._metric = self._valid_metric(metric)
        self._year_range = (dataset.min_year, dataset.max_year)

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    def _valid_league(self, code: Any) -> str:
        text = str(code or "").strip()
        if text.lower() == settings.ALL.lower():
            return settings.ALL
        if text.upper() in self._dataset.leagues:
            return text.upper()
        log.debug("League %r not in dataset; using %s", code, settings.ALL)
        return settings.ALL

    def _valid_metric(self, key: Any) -> str:
        if str(key).strip().lower() == settings.COMBINED:
            return settings.COMBINED
        metric = parse_metric(key)
        if metric is None:
            log.debug("Unknown metric %r; using %s", key, settings.COMBINED)
            return settings.COMBINED
        return metric.value

    def _clamp_year(self, value: int) -> int:
        return max(self._dataset.min_year, min(self._dataset.max_year, value))

    # ------------------------------------------------------------------
    # Setters (one notification each)
    # ------------------------------------------------------------------
    def set_league(self, code: str) -> FilterSelection:
        self._league = self._valid_league(code)
        self._team = settings.ALL
        return self._notify()

    def set_team(self, name: str) -> FilterSelection:
        text = str(name or "").strip()
        if text in self._dataset.teams_for(self._league):
            self._team = text
        else:
            if text and text != settings.ALL:
                log.debug("Team %r not in league %s; using %s", name, self._league, settings.ALL)
            self._team = settings.ALL
        return self._notify()

    def set_metric(self, key: str) -> FilterSelection:
        self._metric = self._valid_metric(key)
        return self._notify()

    def set_year_range(self, lo: Any, hi: Any) -> FilterSelection:
        try:
            lo_i, hi_i = int(lo), int(hi)
        except (TypeError, ValueError):
            log.debug("Invalid year range %r-%r; using full range", lo, hi)
            lo_i, hi_i = self._dataset.min_year, self._dataset.max_year
        if lo_i > hi_i:
            # a low handle dragged past the high handle
            lo_i, hi_i = hi_i, lo_i
        self._year_range = (self._clamp_year(lo_i), self._clamp_year(hi_i))
        return self._notify()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    def snapshot(self) -> FilterSelection:
        return FilterSelection(
            league=self._league,
            team=self._team,
            metric=self._metric,
            year_range=self._year_range,
        )

    def subscribe(self, handler: Callable[[Event], None]) -> Subscription:
        """Register ``handler``; ``event.payload`` is the new FilterSelection."""
        return self._bus.subscribe(ChartEvent.FILTERS_CHANGED, handler)

    def _notify(self) -> FilterSelection:
        selection = self.snapshot()
        self._bus.publish(ChartEvent.FILTERS_CHANGED, selection)
        return selection


@dataclass(frozen=True)
class FilterOptions:
    """Option lists a UI binding layer needs to populate its controls."""

    leagues: Tuple[Option, ...]
    teams: Tuple[Option, ...]
    metrics: Tuple[Option, ...]
    year_bounds: Tuple[int, int]
    year_label: str


def year_label(year_range: Tuple[int, int]) -> str:
    lo, hi = year_range
    return f"{lo} – {hi}"


def derive_options(dataset: Dataset, selection: FilterSelection) -> FilterOptions:
    leagues = ((settings.ALL, "All leagues"),) + tuple((code, code) for code in dataset.leagues)
    teams = ((settings.ALL, "All teams"),) + tuple(
        (name, name) for name in dataset.teams_for(selection.league)
    )
    combined_label = " and ".join(METRICS[m].label for m in COMBINED_METRICS)
    metrics = ((settings.COMBINED, combined_label),) + tuple(
        (key.value, spec.label) for key, spec in METRICS.items()
    )
    return FilterOptions(
        leagues=leagues,
        teams=teams,
        metrics=metrics,
        year_bounds=(dataset.min_year, dataset.max_year),
        year_label=year_label(selection.year_range),
    )
