"""Matplotlib chart backend.

Figures are created with the Agg canvas so rendering and export work
headless; the Qt view re-parents the same Figure onto a FigureCanvasQTAgg.
"""

from __future__ import annotations

from typing import Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

__all__ = ["MatplotlibChartBackend", "EXPORT_FORMATS"]

EXPORT_FORMATS = {"png", "svg"}


class MatplotlibChartBackend:
    def __init__(self, figsize: Tuple[float, float] = (9.0, 5.0), dpi: int = 100) -> None:
        self.figsize = figsize
        self.dpi = dpi

    def create_figure(self) -> Figure:
        fig = Figure(figsize=self.figsize, dpi=self.dpi)
        FigureCanvasAgg(fig)
        return fig

    def export_figure(self, fig: Figure, path: str, *, format: str = "png", dpi: int = 120) -> None:
        fmt = format.lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError("format must be 'png' or 'svg'")
        if not isinstance(fig, Figure):
            raise ValueError("Unsupported figure type for export")
        fig.savefig(path, format=fmt, dpi=dpi if fmt == "png" else None)
