"""Record normalizer.

Turns raw team-season rows into ``SeasonRecord`` objects with per-game
metrics. Rows are dropped (never propagated as NaN) when:
  - the year lies outside the configured window
  - games played is missing, fractional or not positive
  - the league code is not supported
  - the team name is blank

A missing numerator only marks that single metric unavailable for the row.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Tuple
import logging
import math

from season_trends.config import settings
from season_trends.domain.errors import EmptyDataset
from season_trends.domain.metrics import METRICS, MetricKey
from season_trends.domain.models import League, SeasonRecord

log = logging.getLogger(__name__)

__all__ = ["NormalizerConfig", "normalize"]


@dataclass(frozen=True)
class NormalizerConfig:
    min_year: int = settings.MIN_YEAR
    max_year: int = settings.MAX_YEAR
    leagues: Tuple[str, ...] = settings.SUPPORTED_LEAGUES
    year_column: str = settings.YEAR_COLUMN
    league_column: str = settings.LEAGUE_COLUMN
    team_column: str = settings.TEAM_COLUMN
    games_column: str = settings.GAMES_COLUMN
    metrics: Tuple[MetricKey, ...] = field(default_factory=lambda: tuple(METRICS))


def _number(value: Any) -> float | None:
    """Finite float for ``value``; None when missing, non-numeric or inf/NaN."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value if isinstance(value, (int, float)) else str(value).strip())
    except (ValueError, OverflowError):
        return None
    return parsed if math.isfinite(parsed) else None


def _normalize_row(row: Mapping[str, Any], cfg: NormalizerConfig) -> SeasonRecord | str:
    """Return a record, or the reason the row was dropped."""
    year = _number(row.get(cfg.year_column))
    if year is None or not year.is_integer() or not cfg.min_year <= year <= cfg.max_year:
        return "year"
    games = _number(row.get(cfg.games_column))
    if games is None or games <= 0 or not games.is_integer():
        return "games"
    code = str(row.get(cfg.league_column) or "").strip().upper()
    if code not in cfg.leagues or code not in League._value2member_map_:
        return "league"
    team = str(row.get(cfg.team_column) or "").strip()
    if not team:
        return "team"
    metrics: dict[MetricKey, float] = {}
    for key in cfg.metrics:
        numerator = _number(row.get(METRICS[key].column))
        if numerator is not None:
            metrics[key] = numerator / games
    return SeasonRecord(
        league=League(code), team=team, year=int(year), games=int(games), metrics=metrics
    )


def normalize(
    raw_rows: Iterable[Mapping[str, Any]], *, config: NormalizerConfig | None = None
) -> Tuple[SeasonRecord, ...]:
    """Validate raw rows and derive per-game metrics.

    Raises EmptyDataset when the input is empty or every row is dropped.
    """
    cfg = config or NormalizerConfig()
    records: list[SeasonRecord] = []
    dropped: Counter[str] = Counter()
    seen = 0
    for row in raw_rows:
        seen += 1
        result = _normalize_row(row, cfg)
        if isinstance(result, str):
            dropped[result] += 1
        else:
            records.append(result)
    if seen == 0:
        raise EmptyDataset("source yielded no rows")
    if dropped:
        log.debug("Dropped %d of %d rows: %s", sum(dropped.values()), seen, dict(dropped))
    if not records:
        raise EmptyDataset(
            f"no rows within {cfg.min_year}-{cfg.max_year} for leagues {', '.join(cfg.leagues)}"
        )
    return tuple(records)
