"""
Models package for the Futsal Roster application.

This package contains the core data models used throughout the application.
"""
from .player import Player, RankHistoryEntry, clamp_rank, find_player
from .game import Game, GamePlayer, RankChange
from .transaction import CofrinhoTransaction, TransactionCategory, TransactionType
from .teams import BalancedTeams
from .reports import DashboardSummary, PlayerStatistics, RankPoint, RecentGame

__all__ = [
    "Player", "RankHistoryEntry", "clamp_rank", "find_player",
    "Game", "GamePlayer", "RankChange",
    "CofrinhoTransaction", "TransactionCategory", "TransactionType",
    "BalancedTeams", "DashboardSummary", "PlayerStatistics", "RankPoint", "RecentGame",
]
