"""
Services package for the Futsal Roster application.

This package contains the business logic: the pure team balancer, rank rule
and ledger fold, plus the services that apply them to the persisted store.
"""
from .errors import (
    ErrorKind, RosterError, InsufficientPlayersError, SelectionError,
    LedgerError, ValidationError, NotFoundError,
)
from .persistence_service import JsonFileStore, KeyValueStore, MemoryStore, PersistenceService
from .team_balancer import generate_balanced_teams, regenerate_teams, team_strength
from .rank_service import apply_result, validate_result
from .ledger_service import LedgerService, ledger_balance, validate_transaction
from .player_service import PlayerService
from .game_service import GameService
from .analytics_service import AnalyticsService
from .service_factory import ServiceFactory

__all__ = [
    "ErrorKind", "RosterError", "InsufficientPlayersError", "SelectionError",
    "LedgerError", "ValidationError", "NotFoundError",
    "JsonFileStore", "KeyValueStore", "MemoryStore", "PersistenceService",
    "generate_balanced_teams", "regenerate_teams", "team_strength",
    "apply_result", "validate_result",
    "LedgerService", "ledger_balance", "validate_transaction",
    "PlayerService", "GameService", "AnalyticsService", "ServiceFactory",
]
