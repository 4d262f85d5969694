"""
Utilities package for the Futsal Roster application.

This package contains helpers and configuration used throughout the application.
"""
from .time_utils import new_id, now_iso, now_ts
from .formatting import avatar_url, fmt_change, fmt_currency, fmt_rank
from .config import AppConfig
from .constants import (
    APP_TITLE, PLAYERS_KEY, GAMES_KEY, LEDGER_KEY,
    MIN_RANK, MAX_RANK, DEFAULT_RANK, TEAM1, TEAM2,
)

__all__ = [
    "new_id", "now_iso", "now_ts", "avatar_url", "fmt_change", "fmt_currency",
    "fmt_rank", "AppConfig", "APP_TITLE", "PLAYERS_KEY", "GAMES_KEY", "LEDGER_KEY",
    "MIN_RANK", "MAX_RANK", "DEFAULT_RANK", "TEAM1", "TEAM2",
]
