"""Headless services of the chart pipeline (no Qt imports)."""
