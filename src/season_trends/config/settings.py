"""Global configuration and constants for the season trends chart."""

from __future__ import annotations

import os
from typing import Final

DATA_PATH: Final = os.environ.get("SEASON_TRENDS_DATA", os.path.join("data", "Teams.csv"))

# Modern-era window; rows outside are dropped at load time
MIN_YEAR: Final = int(os.environ.get("SEASON_TRENDS_MIN_YEAR", "1960"))
MAX_YEAR: Final = int(os.environ.get("SEASON_TRENDS_MAX_YEAR", "2015"))

SUPPORTED_LEAGUES: Final = ("AL", "NL")
DEFAULT_LEAGUE: Final = "AL"

# Column names of the Lahman Teams.csv export
YEAR_COLUMN: Final = "yearID"
LEAGUE_COLUMN: Final = "lgID"
TEAM_COLUMN: Final = "name"
GAMES_COLUMN: Final = "G"

ALL: Final = "All"
COMBINED: Final = "combined"

TOOLTIP_OFFSET: Final = (12, -28)  # px relative to pointer
HIT_TOLERANCE: Final = 0.35  # data units, used for pointer hit testing
