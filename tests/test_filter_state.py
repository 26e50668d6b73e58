"""Tests for FilterState validation and change propagation."""

from __future__ import annotations

from season_trends.services.event_bus import ChartEvent
from season_trends.viewmodels.filter_state import derive_options


def test_defaults(filters):
    sel = filters.snapshot()
    assert sel.league == "AL"
    assert sel.team == "All"
    assert sel.metric == "combined"
    assert sel.year_range == (2010, 2011)


def test_set_team_outside_league_falls_back_to_all(filters):
    assert filters.set_team("Chicago").team == "All"  # NL team while AL selected
    assert filters.set_team("Boston").team == "Boston"
    assert filters.set_team("Nobody").team == "All"


def test_team_always_belongs_to_league(filters, dataset):
    for league in ("AL", "NL", "All", "XX"):
        filters.set_league(league)
        for team in ("Boston", "NY", "Chicago", "All", ""):
            sel = filters.set_team(team)
            assert sel.team == "All" or sel.team in dataset.teams_for(sel.league)


def test_league_change_resets_team_before_subscribers_run(filters):
    filters.set_team("Boston")
    seen = []
    filters.subscribe(lambda evt: seen.append(evt.payload.team))
    filters.set_league("NL")
    assert seen == ["All"]


def test_unknown_league_clamps_to_all(filters):
    assert filters.set_league("XX").league == "All"
    assert filters.set_league("nl").league == "NL"


def test_year_range_swaps_and_clamps(filters):
    assert filters.set_year_range(2011, 2010).year_range == (2010, 2011)
    assert filters.set_year_range(1900, 3000).year_range == (2010, 2011)
    assert filters.set_year_range(2011, 2011).year_range == (2011, 2011)
    assert filters.set_year_range("x", None).year_range == (2010, 2011)


def test_year_range_lo_never_exceeds_hi(filters):
    for lo in range(2005, 2016, 3):
        for hi in range(2004, 2016, 2):
            a, b = filters.set_year_range(lo, hi).year_range
            assert a <= b


def test_metric_validation(filters):
    assert filters.set_metric("RUNS").metric == "runs"
    assert filters.set_metric("strikeouts").metric == "strikeouts"
    assert filters.set_metric("batting").metric == "combined"


def test_each_setter_notifies_exactly_once(filters, bus):
    calls = []
    bus.subscribe(ChartEvent.FILTERS_CHANGED, lambda evt: calls.append(evt.payload))
    filters.set_league("AL")
    filters.set_team("Boston")
    filters.set_metric("hits")
    filters.set_year_range(2011, 2010)
    assert len(calls) == 4
    assert calls[-1] == filters.snapshot()


def test_derive_options(dataset, filters):
    opts = derive_options(dataset, filters.snapshot())
    assert [v for v, _ in opts.teams] == ["All", "Boston", "NY"]
    assert opts.leagues[0] == ("All", "All leagues")
    assert ("combined", "Runs and Hits") in opts.metrics
    assert opts.year_bounds == (2010, 2011)
    assert opts.year_label == "2010 – 2011"
    filters.set_league("NL")
    assert [v for v, _ in derive_options(dataset, filters.snapshot()).teams] == ["All", "Chicago"]
