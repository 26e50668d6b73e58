"""Chart renderer.

``render`` is stateless across calls: it clears the target figure and draws
everything again (axes, one line with point markers per non-empty series, a
legend entry per displayed (role, metric)). Redraws only follow discrete user
actions, so a full redraw is cheap enough and avoids stale artists.
"""

from __future__ import annotations

from typing import Iterable, List, Set, Tuple
import logging

from matplotlib.figure import Figure
from matplotlib.ticker import FormatStrFormatter, MaxNLocator

from season_trends.config import settings
from season_trends.domain.metrics import METRICS, MetricKey
from season_trends.domain.models import ChartDomain, FilterSelection, Series, SeriesRole

from .backends import MatplotlibChartBackend
from .palette import StyleAssignment
from .types import LegendEntry, PointMarker, RenderResult

log = logging.getLogger(__name__)

__all__ = ["DEFAULT_Y_LABEL", "EMPTY_MESSAGE", "chart_title", "y_axis_label", "render"]

DEFAULT_Y_LABEL = "Value per Game"
EMPTY_MESSAGE = "No data for the selected filters"


def _join_labels(labels: List[str]) -> str:
    if len(labels) <= 1:
        return "".join(labels)
    return ", ".join(labels[:-1]) + " and " + labels[-1]


def chart_title(selection: FilterSelection) -> str:
    """Title text derived only from the filter selection."""
    metrics = _join_labels([METRICS[m].label for m in selection.requested_metrics()])
    scope = "All Leagues" if selection.league == settings.ALL else selection.league
    if selection.team_selected:
        scope = f"{scope}, {selection.team}"
    return f"League-Average {metrics} per Game by Year ({scope})"


def y_axis_label(metrics: Tuple[MetricKey, ...]) -> str:
    if len(metrics) == 1:
        return METRICS[metrics[0]].axis_label
    return DEFAULT_Y_LABEL


def render(
    series_list: Iterable[Series],
    domain: ChartDomain,
    styles: StyleAssignment,
    *,
    title: str,
    y_label: str = DEFAULT_Y_LABEL,
    figure: Figure | None = None,
    backend: MatplotlibChartBackend | None = None,
) -> RenderResult:
    fig = figure if figure is not None else (backend or MatplotlibChartBackend()).create_figure()
    fig.clear()
    ax = fig.add_subplot(111)

    x_lo, x_hi = domain.x_domain
    if x_lo == x_hi:
        ax.set_xlim(x_lo - 1, x_hi + 1)
    else:
        ax.set_xlim(x_lo, x_hi)
    ax.set_ylim(*domain.y_domain)
    ax.xaxis.set_major_locator(MaxNLocator(integer=True))
    ax.xaxis.set_major_formatter(FormatStrFormatter("%d"))
    ax.set_xlabel("Year")
    ax.set_ylabel(y_label)
    ax.set_title(title)

    legend: List[LegendEntry] = []
    markers: List[PointMarker] = []
    seen: Set[Tuple[SeriesRole, MetricKey]] = set()
    drawn = 0
    for s in series_list:
        if s.is_empty:
            continue
        style = styles.style_for(s.role, s.metric)
        ax.plot(
            s.years(),
            s.values(),
            color=style.color,
            linestyle=style.linestyle,
            linewidth=style.linewidth,
            marker="o",
            markersize=style.marker_size * 2,  # radius -> diameter
            label=s.label,
        )
        drawn += 1
        markers.extend(
            PointMarker(s.label, s.role, s.metric, p.year, p.value, s.subject) for p in s.points
        )
        if (s.role, s.metric) not in seen:
            seen.add((s.role, s.metric))
            legend.append(LegendEntry(s.role, s.metric, s.label, style))

    if legend:
        ax.legend(loc="upper left", bbox_to_anchor=(1.02, 1.0), frameon=False)
        fig.subplots_adjust(left=0.08, right=0.78)
    else:
        ax.text(0.5, 0.5, EMPTY_MESSAGE, transform=ax.transAxes, ha="center", va="center")
    log.debug("Rendered %d lines, %d markers", drawn, len(markers))
    return RenderResult(
        figure=fig,
        title=title,
        domain=domain,
        legend=tuple(legend),
        markers=tuple(markers),
        meta={"lines": drawn, "points": len(markers)},
    )
