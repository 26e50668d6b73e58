"""Tests for the trend chart view model (load gate -> filters -> redraw)."""

from __future__ import annotations

import math

import pytest

from season_trends.domain.errors import LoadFailure
from season_trends.services.dataset_loader import LoadStatus
from season_trends.services.event_bus import ChartEvent
from season_trends.viewmodels.trend_chart_viewmodel import TrendChartViewModel

from factories import make_row, scenario_rows


def test_initial_render_after_load(vm):
    assert vm.load_state.ready
    assert vm.redraws == 1
    assert vm.chart.title == "League-Average Runs and Hits per Game by Year (AL)"
    assert vm.chart.legend_labels() == ["League Runs/Game", "League Hits/Game"]


def test_each_filter_event_redraws_once(vm):
    payloads = []
    vm.bus.subscribe(ChartEvent.REDRAW_COMPLETE, lambda e: payloads.append(e.payload))
    vm.apply("team", "Boston")
    assert vm.redraws == 2
    assert payloads[-1]["legend"][-2:] == ["Boston Runs/Game", "Boston Hits/Game"]
    assert payloads[-1]["year_label"] == "2010 – 2011"

    vm.apply("league", "NL")
    assert vm.redraws == 3
    assert len(payloads) == 2
    assert vm.filters.snapshot().team == "All"
    assert payloads[-1]["title"].endswith("(NL)")


def test_year_events_keep_range_ordered(vm):
    vm.apply("year_min", 2011)
    assert vm.chart.selection.year_range == (2011, 2011)
    vm.apply("year_max", 2010)
    assert vm.chart.selection.year_range == (2010, 2011)
    vm.apply("year_range", (2011, 2011))
    assert vm.chart.domain.x_domain == (2011, 2011)


def test_unknown_field_rejected(vm):
    with pytest.raises(ValueError):
        vm.apply("colour", "red")


def test_options_follow_selection(vm):
    assert [v for v, _ in vm.options().teams] == ["All", "Boston", "NY"]
    vm.apply("league", "NL")
    assert [v for v, _ in vm.options().teams] == ["All", "Chicago"]


def test_failed_load_blocks_filters():
    model = TrendChartViewModel()

    def broken():
        raise LoadFailure("timeout")

    state = model.load(broken)
    assert state.status is LoadStatus.FAILED and state.kind == "load"
    assert model.chart is None
    with pytest.raises(RuntimeError):
        model.apply("league", "NL")


def test_empty_source_reports_empty_kind():
    model = TrendChartViewModel()
    assert model.load(lambda: []).kind == "empty"


def test_missing_csv_reports_load_kind(tmp_path):
    model = TrendChartViewModel()
    assert model.load_csv(tmp_path / "nope.csv").kind == "load"


def test_pointer_shows_and_hides_tooltip(vm):
    state = vm.pointer_at(2010, 750 / 162, (100, 100))
    assert state.visible
    assert state.position == (112, 72)
    assert state.payload.text == "Year: 2010\nLeague runs/game: 4.63\nLeague: AL"
    assert not vm.pointer_at(2010.5, 6.0, (120, 100)).visible


def test_pointer_leave_hides_tooltip(vm):
    vm.pointer_at(2010, 750 / 162, (100, 100))
    assert not vm.pointer_leave().visible


def test_redraw_hides_tooltip(vm):
    assert vm.pointer_at(2011, 1485 / 162, (10, 10)).visible
    vm.apply("metric", "runs")
    assert not vm.tooltip.state.visible


def test_pointer_before_load_is_noop():
    assert not TrendChartViewModel().pointer_at(2010, 4.6, (0, 0)).visible


def test_export(vm, tmp_path):
    out = tmp_path / "chart.svg"
    vm.export(str(out), format="svg")
    assert out.exists() and out.stat().st_size > 0


def test_load_runs_once():
    model = TrendChartViewModel()
    model.load(scenario_rows)
    model.load(scenario_rows)
    assert model.redraws == 1


@pytest.mark.parametrize(
    "field,value",
    [
        ("team", "Boston"),
        ("league", "NL"),
        ("league", "XX"),
        ("metric", "hits"),
        ("metric", "bogus"),
        ("year_min", 2011),
        ("year_max", 1900),
        ("year_range", (2011, 2010)),
    ],
)
def test_chart_matches_filters_after_every_event(vm, field, value):
    before = vm.redraws
    vm.apply(field, value)
    assert vm.redraws == before + 1
    assert vm.chart.selection == vm.filters.snapshot()


def test_non_finite_source_values_still_redraw():
    rows = scenario_rows() + [make_row(2011, "NL", "Denver", R="inf", H=1400)]
    model = TrendChartViewModel()
    model.load(lambda: rows)
    model.apply("league", "NL")
    assert model.chart.selection.league == "NL"
    assert model.bus.errors == []
    lo, hi = model.chart.domain.y_domain
    assert math.isfinite(lo) and math.isfinite(hi)


def test_redraw_failure_reaches_caller(vm, monkeypatch):
    from season_trends.viewmodels import trend_chart_viewmodel as module

    def broken(*args, **kwargs):
        raise ValueError("renderer unavailable")

    monkeypatch.setattr(module, "render", broken)
    with pytest.raises(ValueError):
        vm.apply("league", "NL")
    assert vm.bus.errors == []
    assert vm.chart.selection.league == "AL"  # last successful draw

    monkeypatch.undo()
    vm.apply("league", "NL")
    assert vm.chart.selection == vm.filters.snapshot()
