"""
Constants for the Futsal Roster application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Futsal Roster"

# Storage keys (one JSON array per key)
PLAYERS_KEY = "futsal-players"
GAMES_KEY = "futsal-games"
LEDGER_KEY = "futsal-cofrinho"

# Rank scale
MIN_RANK = 1.0
MAX_RANK = 10.0
DEFAULT_RANK = 5.0

# Team balancing
MIN_PLAYERS_FOR_TEAMS = 6
REBALANCE_MIN_PLAYERS = 8
REBALANCE_THRESHOLD = 1.0

# Rank adjustment presets offered when recording a result
RANK_ADJUSTMENT_OPTIONS = [0.25, 0.5, 0.75, 1.0]
DEFAULT_RANK_ADJUSTMENT = 0.5

# Team labels
TEAM1 = "team1"
TEAM2 = "team2"
TEAM_LABELS = {
    TEAM1: "Equipa Vermelha",
    TEAM2: "Equipa Azul",
}

# Fines charged when registering a payment (code -> label, amount in EUR)
FINE_OPTIONS = {
    "late_short": ("Atraso até 5min", 0.50),
    "late_long": ("Atraso mais de 5min", 1.00),
    "no_bib": ("Falta de colete", 0.50),
}

# Dashboard / statistics windows
DASHBOARD_RECENT_GAMES = 3
STATS_RECENT_GAMES = 5

# Generated avatar used when a player has no image
AVATAR_URL_TEMPLATE = (
    "https://ui-avatars.com/api/?name={name}&background=22c55e&color=fff&size=200"
)

CURRENCY_SYMBOL = "€"
