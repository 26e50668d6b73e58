"""Trend chart view model.

Owns the whole application state: the load gate, the read-only dataset, the
filter state, the last render and the tooltip. UI code only feeds it
discrete ``(field, value)`` events and pointer positions; it answers with a
``REDRAW_COMPLETE`` event carrying the title and legend to host.

Flow per filter change (synchronous, runs to completion):
    apply -> FilterState setter (publishes FILTERS_CHANGED) -> aggregate
    -> compute_domains -> render -> REDRAW_COMPLETE
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping
import logging
import os

from season_trends.charting import MatplotlibChartBackend, StyleAssignment, RenderResult
from season_trends.charting.export import export_chart
from season_trends.charting.renderer import chart_title, render, y_axis_label
from season_trends.domain.models import ChartDomain, Dataset, FilterSelection
from season_trends.services.aggregation import AggregationResult, aggregate
from season_trends.services.csv_source import read_team_seasons
from season_trends.services.dataset_loader import DatasetLoader, LoadState
from season_trends.services.event_bus import ChartEvent, EventBus
from season_trends.services.normalizer import NormalizerConfig
from season_trends.services.scales import compute_domains

from .filter_state import FilterOptions, FilterState, derive_options, year_label
from .tooltip import Position, TooltipController, TooltipState, marker_at

log = logging.getLogger(__name__)

__all__ = ["ChartState", "TrendChartViewModel", "FILTER_FIELDS"]

FILTER_FIELDS = ("league", "team", "metric", "year_min", "year_max", "year_range")

# share of the y-span a pointer may be away from a marker and still hit it
_Y_HIT_FRACTION = 0.03


@dataclass(frozen=True)
class ChartState:
    selection: FilterSelection
    aggregation: AggregationResult
    domain: ChartDomain
    render: RenderResult

    @property
    def title(self) -> str:
        return self.render.title

    def legend_labels(self) -> list[str]:
        return self.render.legend_labels()


class TrendChartViewModel:
    def __init__(
        self,
        *,
        event_bus: EventBus | None = None,
        backend: MatplotlibChartBackend | None = None,
        styles: StyleAssignment | None = None,
        config: NormalizerConfig | None = None,
    ) -> None:
        self.bus = event_bus or EventBus()
        self._backend = backend or MatplotlibChartBackend()
        self._styles = styles or StyleAssignment()
        self._loader = DatasetLoader(config=config)
        self._figure = self._backend.create_figure()
        self.filters: FilterState | None = None
        self.tooltip = TooltipController(event_bus=self.bus)
        self.chart: ChartState | None = None
        self.redraws = 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @property
    def load_state(self) -> LoadState:
        return self._loader.state

    @property
    def dataset(self) -> Dataset | None:
        return self._loader.dataset

    @property
    def figure(self):
        return self._figure

    def load(self, source: Callable[[], Iterable[Mapping[str, Any]]]) -> LoadState:
        state = self._loader.load(source)
        if state.ready and self.filters is None:
            assert self._loader.dataset is not None
            self.filters = FilterState(self._loader.dataset, event_bus=self.bus)
            self._redraw(self.filters.snapshot())
        return state

    def load_csv(self, path: str | os.PathLike[str] | None = None) -> LoadState:
        return self.load(lambda: read_team_seasons(path))

    # ------------------------------------------------------------------
    # Filter events from the UI
    # ------------------------------------------------------------------
    def _require_filters(self) -> FilterState:
        if self.filters is None:
            raise RuntimeError(f"filters unavailable while dataset is {self.load_state.status.value}")
        return self.filters

    def apply(self, field: str, value: Any) -> FilterSelection:
        """Apply one UI event and redraw once for the resulting selection.

        Redraw errors propagate to the caller; the chart always reflects the
        last selection that rendered.
        """
        filters = self._require_filters()
        lo, hi = filters.snapshot().year_range
        handlers: Dict[str, Callable[[], FilterSelection]] = {
            "league": lambda: filters.set_league(value),
            "team": lambda: filters.set_team(value),
            "metric": lambda: filters.set_metric(value),
            "year_min": lambda: filters.set_year_range(value, hi),
            "year_max": lambda: filters.set_year_range(lo, value),
            "year_range": lambda: filters.set_year_range(*value),
        }
        try:
            handler = handlers[field]
        except KeyError:
            raise ValueError(f"Unknown filter field: {field}") from None
        selection = handler()
        self._redraw(selection)
        return selection

    def options(self) -> FilterOptions:
        filters = self._require_filters()
        return derive_options(filters.dataset, filters.snapshot())

    # ------------------------------------------------------------------
    # Recomputation
    # ------------------------------------------------------------------
    def _redraw(self, selection: FilterSelection) -> ChartState:
        assert self._loader.dataset is not None
        aggregation = aggregate(self._loader.dataset, selection)
        domain = compute_domains(aggregation.all_series(), fallback_years=selection.year_range)
        result = render(
            aggregation.all_series(),
            domain,
            self._styles,
            title=chart_title(selection),
            y_label=y_axis_label(selection.requested_metrics()),
            figure=self._figure,
        )
        self.tooltip.hide()
        self.chart = ChartState(selection, aggregation, domain, result)
        self.redraws += 1
        log.debug("Redraw %d for %s", self.redraws, selection)
        self.bus.publish(
            ChartEvent.REDRAW_COMPLETE,
            {
                "title": result.title,
                "legend": result.legend_labels(),
                "year_label": year_label(selection.year_range),
            },
        )
        return self.chart

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------
    def pointer_at(self, x: float | None, y: float | None, position: Position) -> TooltipState:
        """Hit-test a pointer at data coords (x, y); ``position`` is in pixels."""
        if self.chart is None:
            return self.tooltip.state
        y_lo, y_hi = self.chart.domain.y_domain
        marker = marker_at(
            self.chart.render.markers, x, y, y_tolerance=(y_hi - y_lo) * _Y_HIT_FRACTION
        )
        return self.tooltip.track(marker, position)

    def pointer_leave(self) -> TooltipState:
        return self.tooltip.pointer_leave()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export(self, path: str, *, format: str = "png", dpi: int = 120) -> None:
        if self.chart is None:
            raise RuntimeError("nothing rendered yet")
        export_chart(self.chart.render, path, format=format, dpi=dpi, backend=self._backend)

