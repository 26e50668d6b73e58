"""Charting layer.

Wraps matplotlib behind a small API so the view model asks for a redraw
with series, domains and styles without touching artists directly.
"""

from .backends import MatplotlibChartBackend  # noqa: F401
from .palette import ChartStyle, StyleAssignment  # noqa: F401
from .renderer import chart_title, render, y_axis_label  # noqa: F401
from .types import LegendEntry, PointMarker, RenderResult  # noqa: F401
