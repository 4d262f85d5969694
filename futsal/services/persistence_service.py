"""
Persistence service for the Futsal Roster application.

This module provides the key-value store the services read and write, plus
typed load/save helpers for the three persisted collections. Each key holds a
whole JSON array that is replaced on every write.
"""
import copy
import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional, Protocol

from ..models import CofrinhoTransaction, Game, Player
from ..utils.constants import GAMES_KEY, LEDGER_KEY, PLAYERS_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Abstract store interface - the only shared mutable state."""

    def read(self, key: str) -> Optional[Any]:
        """Return the JSON value stored under key, or None."""
        ...

    def write(self, key: str, value: Any) -> None:
        """Replace the whole value stored under key."""
        ...


class MemoryStore:
    """In-process store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def read(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def write(self, key: str, value: Any) -> None:
        # Round-trip through JSON so only serializable values are accepted
        self._data[key] = json.loads(json.dumps(value))


class JsonFileStore:
    """
    Store keeping one ``<key>.json`` file per key inside a directory.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a reader never sees a half-written document.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def read(self, key: str) -> Optional[Any]:
        """
        Load the value stored under key.

        Args:
            key: Storage key

        Returns:
            Decoded JSON value, or None if the key was never written

        Raises:
            json.JSONDecodeError: If the file contains invalid JSON
        """
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, key: str, value: Any) -> None:
        """
        Replace the value stored under key.

        Args:
            key: Storage key
            value: JSON-serializable value

        Raises:
            OSError: If the directory or file cannot be written
        """
        if not os.path.exists(self.directory):
            os.makedirs(self.directory)

        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug("Wrote key %s to %s", key, self.directory)


class PersistenceService:
    """
    Typed access to the persisted collections.

    Every load reads the latest document; every save replaces the whole
    document for its key.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load_list(self, key: str) -> List[Dict[str, Any]]:
        data = self.store.read(key)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Stored value for '{key}' is not a list")
        return data

    def load_players(self) -> List[Player]:
        return [Player.from_dict(item) for item in self._load_list(PLAYERS_KEY)]

    def save_players(self, players: List[Player]) -> None:
        self.store.write(PLAYERS_KEY, [p.to_dict() for p in players])

    def load_games(self) -> List[Game]:
        return [Game.from_dict(item) for item in self._load_list(GAMES_KEY)]

    def save_games(self, games: List[Game]) -> None:
        self.store.write(GAMES_KEY, [g.to_dict() for g in games])

    def load_transactions(self) -> List[CofrinhoTransaction]:
        return [CofrinhoTransaction.from_dict(item) for item in self._load_list(LEDGER_KEY)]

    def save_transactions(self, transactions: List[CofrinhoTransaction]) -> None:
        self.store.write(LEDGER_KEY, [t.to_dict() for t in transactions])
