"""Trend chart window.

Thin PyQt6 binding around ``TrendChartViewModel``: combo boxes for league,
team and metric, two year spin boxes, the matplotlib canvas and a hover
tooltip. All state lives in the view model; widgets only forward
``(field, value)`` events. Controls follow ``FILTERS_CHANGED``; the title and
canvas follow ``REDRAW_COMPLETE``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import logging
import sys

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from PyQt6.QtCore import QPoint
from PyQt6.QtGui import QCursor
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QToolTip,
    QVBoxLayout,
    QWidget,
)

from season_trends.domain.errors import SeasonTrendsError
from season_trends.services.event_bus import ChartEvent, Event
from season_trends.viewmodels.trend_chart_viewmodel import TrendChartViewModel
from season_trends.viewmodels.tooltip import TooltipState

log = logging.getLogger(__name__)

__all__ = ["TrendChartView", "launch"]


class TrendChartView(QWidget):
    def __init__(self, vm: TrendChartViewModel, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._vm = vm
        self.setWindowTitle("Season Trends")
        self._title = QLabel("")
        self._status = QLabel("")
        self._league = QComboBox()
        self._team = QComboBox()
        self._metric = QComboBox()
        self._year_min = QSpinBox()
        self._year_max = QSpinBox()
        self._year_label = QLabel("")
        self._canvas = FigureCanvasQTAgg(vm.figure)

        controls = QHBoxLayout()
        for caption, widget in (
            ("League", self._league),
            ("Team", self._team),
            ("Metric", self._metric),
            ("From", self._year_min),
            ("To", self._year_max),
        ):
            controls.addWidget(QLabel(caption))
            controls.addWidget(widget)
        controls.addWidget(self._year_label)
        lay = QVBoxLayout(self)
        lay.addLayout(controls)
        lay.addWidget(self._title)
        lay.addWidget(self._status)
        lay.addWidget(self._canvas, 1)

        self._subs = [
            vm.bus.subscribe(ChartEvent.FILTERS_CHANGED, self._on_filters_changed),
            vm.bus.subscribe(ChartEvent.REDRAW_COMPLETE, self._on_redraw),
            vm.bus.subscribe(ChartEvent.TOOLTIP_CHANGED, self._on_tooltip),
        ]
        self._wired = False
        self.refresh()

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        state = self._vm.load_state
        if not state.ready:
            self._canvas.setVisible(False)
            if state.kind == "empty":
                self._status.setText(f"No data in range: {state.reason}")
            elif state.kind == "load":
                self._status.setText(f"Failed to load data: {state.reason}")
            else:
                self._status.setText("Loading…")
            for w in (self._league, self._team, self._metric, self._year_min, self._year_max):
                w.setEnabled(False)
            return
        self._status.setText("")
        self._canvas.setVisible(True)
        self._sync_controls()
        if not self._wired:
            self._wire()
        if self._vm.chart is not None:
            self._title.setText(self._vm.chart.title)
        self._canvas.draw_idle()

    def _apply(self, field: str, value) -> None:
        try:
            self._vm.apply(field, value)
        except (SeasonTrendsError, ValueError) as e:
            log.exception("Redraw for %s=%r failed", field, value)
            self._status.setText(f"Could not draw chart: {e}")

    def _wire(self) -> None:
        self._league.activated.connect(lambda _i: self._apply("league", self._league.currentData()))
        self._team.activated.connect(lambda _i: self._apply("team", self._team.currentData()))
        self._metric.activated.connect(lambda _i: self._apply("metric", self._metric.currentData()))
        self._year_min.valueChanged.connect(lambda v: self._apply("year_min", v))
        self._year_max.valueChanged.connect(lambda v: self._apply("year_max", v))
        self._canvas.mpl_connect("motion_notify_event", self._on_motion)
        self._canvas.mpl_connect("figure_leave_event", lambda _e: self._vm.pointer_leave())
        self._wired = True

    def _sync_controls(self) -> None:
        opts = self._vm.options()
        selection = self._vm.filters.snapshot() if self._vm.filters else None
        if selection is None:
            return
        _fill(self._league, opts.leagues, selection.league)
        _fill(self._team, opts.teams, selection.team)
        _fill(self._metric, opts.metrics, selection.metric)
        lo, hi = opts.year_bounds
        for box in (self._year_min, self._year_max):
            box.blockSignals(True)
            box.setRange(lo, hi)
            box.setEnabled(True)
        self._year_min.setValue(selection.year_range[0])
        self._year_max.setValue(selection.year_range[1])
        for box in (self._year_min, self._year_max):
            box.blockSignals(False)
        self._year_label.setText(opts.year_label)

    # ------------------------------------------------------------------
    def _on_filters_changed(self, _evt: Event) -> None:
        self._sync_controls()

    def _on_redraw(self, _evt: Event) -> None:
        self.refresh()

    def _on_motion(self, event) -> None:
        local = self._canvas.mapFromGlobal(QCursor.pos())
        self._vm.pointer_at(event.xdata, event.ydata, (local.x(), local.y()))

    def _on_tooltip(self, evt: Event) -> None:
        state: TooltipState = evt.payload
        if not state.visible or state.position is None or state.payload is None:
            QToolTip.hideText()
            return
        x, y = state.position
        QToolTip.showText(self._canvas.mapToGlobal(QPoint(int(x), int(y))), state.payload.text)

    def closeEvent(self, event) -> None:  # noqa: N802
        for sub in self._subs:
            self._vm.bus.unsubscribe(sub)
        super().closeEvent(event)


def _fill(combo: QComboBox, options: Sequence[Tuple[str, str]], current: str) -> None:
    combo.blockSignals(True)
    combo.clear()
    for value, text in options:
        combo.addItem(text, value)
    idx = combo.findData(current)
    combo.setCurrentIndex(max(idx, 0))
    combo.setEnabled(True)
    combo.blockSignals(False)


def launch(vm: TrendChartViewModel, argv: Sequence[str] | None = None) -> int:  # pragma: no cover
    app = QApplication.instance() or QApplication(list(argv or sys.argv))
    view = TrendChartView(vm)
    view.resize(1100, 640)
    view.show()
    return app.exec()
