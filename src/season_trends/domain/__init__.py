"""Domain types: metrics table, season records, series and errors."""
