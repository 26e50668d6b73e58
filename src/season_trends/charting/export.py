"""Chart export helper.

Keeps callers decoupled from the backend's concrete export API.
"""
from __future__ import annotations

from .backends import MatplotlibChartBackend
from .types import RenderResult


def export_chart(
    result: RenderResult,
    path: str,
    *,
    format: str = "png",
    dpi: int = 120,
    backend: MatplotlibChartBackend | None = None,
) -> None:
    """Write the rendered chart to disk.

    Args:
        result: Outcome of ``render``.
        path: Destination file path (existing directory required).
        format: 'png' or 'svg'.
        dpi: Raster resolution for PNG.
    """
    (backend or MatplotlibChartBackend()).export_figure(result.figure, path, format=format, dpi=dpi)
