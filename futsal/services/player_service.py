"""
Player service for the Futsal Roster application.

This module provides business logic for managing the roster: validation,
creation with a generated avatar, edits that keep the win/loss record, and
hard deletion.
"""
import logging
from dataclasses import replace
from typing import Any, List, Optional

from ..models import Player, RankHistoryEntry, find_player
from ..utils import avatar_url, new_id, now_iso
from ..utils.constants import DEFAULT_RANK, MAX_RANK, MIN_RANK
from .errors import ErrorKind, NotFoundError, raise_for
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


def _parse_rank(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


class PlayerService:
    """
    Service class for managing player data and operations.

    Reads the latest roster from the persistence service before every change
    and writes the whole roster back afterwards.
    """

    def __init__(self, persistence_service: PersistenceService):
        """
        Initialize PlayerService.

        Args:
            persistence_service: Persistence service holding the roster
        """
        self.persistence_service = persistence_service

    def validate_player_data(self, name: Optional[str], rank: Any) -> List[ErrorKind]:
        """
        Validate player form data and return list of validation errors.

        Args:
            name: Display name, anything but a non-blank string is rejected
            rank: Rank as number or numeric string

        Returns:
            List of error kinds (empty if valid)
        """
        errors = []
        if not isinstance(name, str) or not name.strip():
            errors.append(ErrorKind.EMPTY_DESCRIPTION)
        parsed = _parse_rank(rank)
        if parsed is None or not MIN_RANK <= parsed <= MAX_RANK:
            errors.append(ErrorKind.INVALID_RANK)
        return errors

    def list_players(self) -> List[Player]:
        return self.persistence_service.load_players()

    def get_player(self, player_id: int) -> Player:
        """
        Get a player by id.

        Raises:
            NotFoundError: If the player does not exist
        """
        player = find_player(self.persistence_service.load_players(), player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def create_player(self, name: str, rank: Any = DEFAULT_RANK, image: Optional[str] = None) -> Player:
        """
        Create a new player with validation and add it to the roster.

        Args:
            name: Player's display name
            rank: Initial rank (1-10)
            image: Avatar URI, a generated avatar when empty

        Returns:
            The stored Player

        Raises:
            ValidationError: If the name is empty or the rank is out of range
        """
        raise_for(self.validate_player_data(name, rank))

        name = name.strip()
        rank = _parse_rank(rank)
        player = Player(
            id=new_id(),
            name=name,
            rank=rank,
            image=(image or "").strip() or avatar_url(name),
            rank_history=[RankHistoryEntry(date=now_iso(), rank=rank)],
        )

        players = self.persistence_service.load_players()
        players.append(player)
        self.persistence_service.save_players(players)
        logger.info("Created player %s (%s) with rank %.2f", player.name, player.id, player.rank)
        return player

    def update_player(
        self,
        player_id: int,
        name: str,
        rank: Any,
        image: Optional[str] = None,
    ) -> Player:
        """
        Edit a player's name, rank and avatar.

        Games played, wins, losses and the rank history are kept as they are.

        Raises:
            NotFoundError: If the player does not exist
            ValidationError: If the name is empty or the rank is out of range
        """
        raise_for(self.validate_player_data(name, rank))

        players = self.persistence_service.load_players()
        current = find_player(players, player_id)
        if current is None:
            raise NotFoundError(f"Player {player_id} not found")

        name = name.strip()
        updated = replace(
            current,
            name=name,
            rank=_parse_rank(rank),
            image=(image or "").strip() or avatar_url(name),
        )
        self.persistence_service.save_players([updated if p.id == player_id else p for p in players])
        logger.info("Updated player %s (%s)", updated.name, player_id)
        return updated

    def delete_player(self, player_id: int) -> None:
        """
        Remove a player from the roster.

        Games already recorded keep their frozen copy of the player.

        Raises:
            NotFoundError: If the player does not exist
        """
        players = self.persistence_service.load_players()
        if find_player(players, player_id) is None:
            raise NotFoundError(f"Player {player_id} not found")
        self.persistence_service.save_players([p for p in players if p.id != player_id])
        logger.info("Deleted player %s", player_id)
