# Shared fixtures. Rendering runs headless: matplotlib uses Agg figures and Qt
# (only needed by the view tests) is forced onto the offscreen platform.

import os

os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

from season_trends.services.event_bus import EventBus  # noqa: E402
from season_trends.viewmodels.filter_state import FilterState  # noqa: E402
from season_trends.viewmodels.trend_chart_viewmodel import TrendChartViewModel  # noqa: E402

from factories import make_dataset, scenario_rows  # noqa: E402


@pytest.fixture
def dataset():
    return make_dataset()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def filters(dataset, bus):
    return FilterState(dataset, event_bus=bus)


@pytest.fixture
def vm():
    model = TrendChartViewModel()
    model.load(scenario_rows)
    return model
