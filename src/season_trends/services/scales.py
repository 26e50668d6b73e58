"""Scale calculator: shared x/y domains for series drawn together.

The y-domain is "niced" with the same tick-increment rule used by d3's
linear scales (steps of 1, 2 or 5 times a power of ten, aiming at roughly
ten ticks) so axis ticks land on round numbers.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple
import math

from season_trends.domain.errors import IncompatibleUnitsError
from season_trends.domain.models import ChartDomain, Series

__all__ = ["tick_increment", "nice_extent", "compute_domains", "DEFAULT_Y_DOMAIN"]

DEFAULT_Y_DOMAIN: Tuple[float, float] = (0.0, 1.0)
DEFAULT_TICK_COUNT = 10

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int = DEFAULT_TICK_COUNT) -> float:
    """Signed tick step; negative values encode 1/step for sub-unit steps."""
    step = (stop - start) / max(0, count)
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return float(factor * 10**power)
    return -(10 ** -power) / factor


def nice_extent(lo: float, hi: float, count: int = DEFAULT_TICK_COUNT) -> Tuple[float, float]:
    """Widen ``[lo, hi]`` to round tick boundaries; never narrows it."""
    if lo > hi:
        lo, hi = hi, lo
    if lo == hi:
        pad = abs(lo) * 0.05 or 0.5
        lo, hi = lo - pad, hi + pad
    data_lo, data_hi = lo, hi
    prestep = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step == prestep or step == 0:
            break
        if step > 0:
            lo = math.floor(lo / step) * step
            hi = math.ceil(hi / step) * step
        else:
            lo = math.ceil(lo * step) / step
            hi = math.floor(hi * step) / step
        prestep = step
    # float rounding in the division above may shave an ulp off the extent
    return min(lo, data_lo), max(hi, data_hi)


def _check_units(series_list: Sequence[Series]) -> None:
    units = {s.unit for s in series_list}
    if len(units) > 1:
        raise IncompatibleUnitsError(
            f"cannot share one y-domain across units: {', '.join(sorted(units))}"
        )


def compute_domains(
    series_list: Iterable[Series], *, fallback_years: Tuple[int, int]
) -> ChartDomain:
    """Union extents of every series slated for simultaneous display.

    ``fallback_years`` (the filter year range) keeps the x-axis stable when no
    series carries a point. Raises ValueError on a non-finite value.
    """
    series_list = list(series_list)
    _check_units(series_list)
    points = [p for s in series_list for p in s.points]
    bad = next((p for p in points if not math.isfinite(p.value)), None)
    if bad is not None:
        raise ValueError(f"non-finite value {bad.value!r} for {bad.year}")
    if not points:
        lo, hi = sorted(fallback_years)
        return ChartDomain(x_domain=(int(lo), int(hi)), y_domain=DEFAULT_Y_DOMAIN)
    years = [p.year for p in points]
    values = [p.value for p in points]
    return ChartDomain(
        x_domain=(min(years), max(years)),
        y_domain=nice_extent(min(values), max(values)),
    )
