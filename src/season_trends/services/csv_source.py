"""CSV data source for team-season rows.

Reads a Lahman style ``Teams.csv`` and yields one dict per row with values
coerced the way a browser ``autoType`` parse would: numeric strings become
int/float, empty cells become None, everything else stays a string.
"""

from __future__ import annotations

import csv
import logging
import os
from typing import Any, Dict, Iterable, List, Sequence

from season_trends.config import settings
from season_trends.domain.errors import LoadFailure

log = logging.getLogger(__name__)

__all__ = ["REQUIRED_COLUMNS", "coerce_value", "read_rows", "read_team_seasons"]

REQUIRED_COLUMNS: Sequence[str] = (
    settings.YEAR_COLUMN,
    settings.LEAGUE_COLUMN,
    settings.TEAM_COLUMN,
    settings.GAMES_COLUMN,
)


def coerce_value(raw: str | None) -> Any:
    if raw is None:
        return None
    text = raw.strip()
    if not text or text.upper() == "NA":
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def read_rows(lines: Iterable[str]) -> List[Dict[str, Any]]:
    """Parse CSV text lines into typed row dicts.

    Raises LoadFailure when the header lacks a required column or the CSV is
    malformed.
    """
    reader = csv.DictReader(lines)
    header = reader.fieldnames or []
    missing = [c for c in REQUIRED_COLUMNS if c not in header]
    if missing:
        raise LoadFailure(f"malformed source: missing columns {', '.join(missing)}")
    try:
        return [{k: coerce_value(v) for k, v in row.items() if k is not None} for row in reader]
    except csv.Error as e:
        raise LoadFailure(f"malformed source: {e}") from e


def read_team_seasons(path: str | os.PathLike[str] | None = None) -> List[Dict[str, Any]]:
    """Load all rows from ``path`` (defaults to ``settings.DATA_PATH``)."""
    target = os.fspath(path) if path is not None else settings.DATA_PATH
    try:
        with open(target, newline="", encoding="utf-8") as fh:
            rows = read_rows(fh)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadFailure(f"cannot read {target}: {e}") from e
    log.info("Loaded %d raw rows from %s", len(rows), target)
    return rows
