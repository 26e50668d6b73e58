"""Tests for the aggregation engine."""

from __future__ import annotations

import random

import pytest

from season_trends.domain.metrics import MetricKey
from season_trends.domain.models import FilterSelection, SeriesRole
from season_trends.services.aggregation import aggregate

from factories import make_dataset, make_row, scenario_rows


def _sel(**kw) -> FilterSelection:
    base = dict(league="AL", team="All", metric="runs", year_range=(2010, 2011))
    base.update(kw)
    return FilterSelection(**base)


def _pairs(series):
    return [(p.year, p.value) for p in series.points]


def test_league_average_is_mean_of_per_game_values(dataset):
    result = aggregate(dataset, _sel())
    (league,) = result.league_series
    assert league.role is SeriesRole.LEAGUE_AVERAGE
    assert league.metric is MetricKey.RUNS
    assert [y for y, _ in _pairs(league)] == [2010, 2011]
    # mean of season totals 750 and 765 over a common 162 games
    assert league.points[0].value == pytest.approx(750 / 162)
    assert league.points[1].value == pytest.approx(765 / 162)
    assert result.team_series == ()


def test_team_series_uses_runs_over_games(dataset):
    result = aggregate(dataset, _sel(team="Boston"))
    (team,) = result.team_series
    assert team.role is SeriesRole.TEAM
    assert team.label == "Boston Runs/Game"
    assert team.points[0].value == pytest.approx(4.938271, rel=1e-6)
    assert team.points[1].value == pytest.approx(4.629629, rel=1e-6)


def test_team_absent_from_range_yields_empty_series():
    rows = scenario_rows() + [make_row(y, "AL", "NY", R=700) for y in range(2012, 2016)]
    result = aggregate(make_dataset(rows), _sel(team="Boston", year_range=(2012, 2015)))
    assert [p.year for p in result.league_series[0].points] == [2012, 2013, 2014, 2015]
    assert result.team_series[0].is_empty
    assert all(s.role is SeriesRole.LEAGUE_AVERAGE for s in result.displayed())


def test_combined_mode_returns_one_series_per_metric(dataset):
    result = aggregate(dataset, _sel(metric="combined", team="NY"))
    assert [s.metric for s in result.league_series] == [MetricKey.RUNS, MetricKey.HITS]
    assert [s.metric for s in result.team_series] == [MetricKey.RUNS, MetricKey.HITS]


def test_all_leagues_includes_every_league(dataset):
    result = aggregate(dataset, _sel(league="All"))
    expected_2010 = (800 + 700 + 650) / 3 / 162
    assert result.league_series[0].points[0].value == pytest.approx(expected_2010)


def test_years_without_metric_are_skipped():
    rows = [
        make_row(2010, "AL", "Boston", R=800, SO=1000),
        make_row(2011, "AL", "Boston", R=750),
        make_row(2011, "AL", "NY", R=780),
        make_row(2012, "AL", "NY", R=700, SO=1100),
    ]
    result = aggregate(make_dataset(rows), _sel(metric="strikeouts", year_range=(2010, 2012)))
    assert [p.year for p in result.league_series[0].points] == [2010, 2012]


def test_mean_skips_records_missing_the_metric():
    rows = [
        make_row(2010, "AL", "Boston", R=800, SO=1000),
        make_row(2010, "AL", "NY", R=700),
    ]
    result = aggregate(make_dataset(rows), _sel(metric="strikeouts", year_range=(2010, 2010)))
    assert result.league_series[0].points[0].value == pytest.approx(1000 / 162)


def test_aggregate_is_idempotent(dataset):
    sel = _sel(metric="combined", team="Boston")
    assert aggregate(dataset, sel) == aggregate(dataset, sel)


def test_series_strictly_increasing_regardless_of_row_order():
    teams = (("AL", "A"), ("AL", "B"), ("NL", "C"))
    rows = [make_row(y, lg, t, R=600 + y % 37) for y in range(1990, 2011) for lg, t in teams]
    random.Random(7).shuffle(rows)
    result = aggregate(make_dataset(rows), _sel(league="All", team="A", year_range=(1990, 2010)))
    for series in result.all_series():
        years = [p.year for p in series.points]
        assert years == sorted(set(years))
        assert len(years) == 21
