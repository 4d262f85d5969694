"""
Futsal Roster

Roster and match tracking for a recreational futsal group: player ranks,
balanced team generation, game results, payments with fines and the shared
cofrinho ledger.

This package provides the domain services and a Flask JSON API over a local
key-value store.
"""
from .models import Player, Game, CofrinhoTransaction, BalancedTeams
from .services import (
    ServiceFactory, MemoryStore, JsonFileStore,
    generate_balanced_teams, apply_result, ledger_balance,
)
from .ui import create_app, run_web_app
from .utils import APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Player", "Game", "CofrinhoTransaction", "BalancedTeams",
    "ServiceFactory", "MemoryStore", "JsonFileStore",
    "generate_balanced_teams", "apply_result", "ledger_balance",
    "create_app", "run_web_app", "APP_TITLE",
]
