"""One-shot dataset load gate.

States: LOADING -> READY | FAILED(reason, kind). ``kind`` separates a source
that could not be read ("load") from one that read fine but produced no
usable records ("empty"), so the UI can say "no data in range" instead of
"failed to load". No retry happens automatically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping
import logging

from season_trends.domain.errors import EmptyDataset, LoadFailure
from season_trends.domain.models import Dataset
from .normalizer import NormalizerConfig, normalize

log = logging.getLogger(__name__)

__all__ = ["LoadStatus", "LoadState", "DatasetLoader"]

RowSource = Callable[[], Iterable[Mapping[str, Any]]]


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus
    reason: str | None = None
    kind: str | None = None  # "load" | "empty" when FAILED

    @property
    def ready(self) -> bool:
        return self.status is LoadStatus.READY


class DatasetLoader:
    def __init__(self, *, config: NormalizerConfig | None = None) -> None:
        self._config = config
        self.state = LoadState(LoadStatus.LOADING)
        self.dataset: Dataset | None = None

    def load(self, source: RowSource) -> LoadState:
        """Run ``source`` once, normalize its rows and settle the gate."""
        if self.state.status is not LoadStatus.LOADING:
            return self.state
        try:
            records = normalize(source(), config=self._config)
            self.dataset = Dataset(records)
        except LoadFailure as e:
            return self._fail(str(e), "load")
        except EmptyDataset as e:
            return self._fail(str(e), "empty")
        self.state = LoadState(LoadStatus.READY)
        log.info(
            "Dataset ready: %d records, %d-%d",
            len(self.dataset),
            self.dataset.min_year,
            self.dataset.max_year,
        )
        return self.state

    def _fail(self, reason: str, kind: str) -> LoadState:
        self.state = LoadState(LoadStatus.FAILED, reason=reason, kind=kind)
        log.error("Dataset load failed (%s): %s", kind, reason)
        return self.state
