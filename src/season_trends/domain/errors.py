"""Error taxonomy for the chart pipeline.

``LoadFailure`` and ``EmptyDataset`` are surfaced to the caller through the
load gate. Invalid filter combinations are never raised; the filter state
clamps them to a valid default instead.
"""

from __future__ import annotations

__all__ = [
    "SeasonTrendsError",
    "LoadFailure",
    "EmptyDataset",
    "IncompatibleUnitsError",
]


class SeasonTrendsError(Exception):
    """Base class for all pipeline errors."""


class LoadFailure(SeasonTrendsError):
    """Raised when the data source is unreachable or malformed."""


class EmptyDataset(SeasonTrendsError):
    """Raised when no record survives normalization."""


class IncompatibleUnitsError(SeasonTrendsError, ValueError):
    """Raised when series with different units would share one y-domain."""
