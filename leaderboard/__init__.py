"""Leaderboard Live — ranked student scores served from Google Sheets."""

__version__ = "0.1.0"
