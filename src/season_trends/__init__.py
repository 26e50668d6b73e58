"""Season trends: league and team per-game statistics over time."""

__version__ = "0.1.0"
