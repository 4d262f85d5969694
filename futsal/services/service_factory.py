"""
Service Factory for dependency injection.

This module provides a factory for creating service instances that all share
one persistence service, and therefore one key-value store.
"""
import random
from typing import Optional

from .analytics_service import AnalyticsService
from .game_service import GameService
from .ledger_service import LedgerService
from .persistence_service import JsonFileStore, KeyValueStore, PersistenceService
from .player_service import PlayerService


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    Services are created lazily and cached, so callers asking twice get the
    same instance.
    """

    def __init__(self, store: KeyValueStore, rng: Optional[random.Random] = None):
        """
        Initialize factory around a store.

        Args:
            store: Key-value store holding the roster, games and ledger
            rng: Random source used when regenerating teams
        """
        self.store = store
        self._rng = rng
        self._persistence_service: Optional[PersistenceService] = None
        self._player_service: Optional[PlayerService] = None
        self._game_service: Optional[GameService] = None
        self._ledger_service: Optional[LedgerService] = None
        self._analytics_service: Optional[AnalyticsService] = None

    @classmethod
    def for_directory(cls, data_dir: str) -> "ServiceFactory":
        """Create a factory persisting to JSON files in ``data_dir``."""
        return cls(JsonFileStore(data_dir))

    @property
    def persistence(self) -> PersistenceService:
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(self.store)
        return self._persistence_service

    @property
    def players(self) -> PlayerService:
        if self._player_service is None:
            self._player_service = PlayerService(self.persistence)
        return self._player_service

    @property
    def games(self) -> GameService:
        if self._game_service is None:
            self._game_service = GameService(self.persistence, rng=self._rng)
        return self._game_service

    @property
    def ledger(self) -> LedgerService:
        if self._ledger_service is None:
            self._ledger_service = LedgerService(self.persistence)
        return self._ledger_service

    @property
    def analytics(self) -> AnalyticsService:
        if self._analytics_service is None:
            self._analytics_service = AnalyticsService(self.persistence)
        return self._analytics_service
