"""
Game service for the Futsal Roster application.

This module records match results (rank update plus the frozen game record),
generates teams from a selection of roster ids and registers participants'
payments, charging fines into the cofrinho when one applies.
"""
import logging
import random
from typing import Any, List, Optional, Sequence

from ..models import BalancedTeams, Game, GamePlayer, Player, find_player
from ..utils import new_id, now_iso
from ..utils.constants import DEFAULT_RANK_ADJUSTMENT
from .errors import ErrorKind, LedgerError, NotFoundError, raise_for
from .ledger_service import fine_transaction, parse_amount
from .persistence_service import PersistenceService
from .rank_service import apply_result, validate_result
from .team_balancer import generate_balanced_teams, regenerate_teams

logger = logging.getLogger(__name__)


class GameService:
    """Record games and manage their payment state."""

    def __init__(self, persistence_service: PersistenceService, rng: Optional[random.Random] = None):
        self.persistence_service = persistence_service
        self._rng = rng or random.Random()

    def _select(self, players: List[Player], player_ids: Sequence[int]) -> List[Player]:
        selected = []
        for player_id in player_ids:
            player = find_player(players, player_id)
            if player is None:
                raise NotFoundError(f"Player {player_id} not found")
            selected.append(player)
        return selected

    def generate_teams(self, player_ids: Sequence[int], shuffle: bool = False) -> BalancedTeams:
        """
        Balance the selected roster players into two teams.

        Args:
            player_ids: Ids of the selected players (duplicates are ignored)
            shuffle: Shuffle the selection first to get a different split

        Returns:
            The generated teams

        Raises:
            NotFoundError: If an id is not on the roster
            InsufficientPlayersError: If fewer than 6 players are selected
        """
        unique_ids = list(dict.fromkeys(player_ids))
        selected = self._select(self.persistence_service.load_players(), unique_ids)
        if shuffle:
            return regenerate_teams(selected, self._rng)
        return generate_balanced_teams(selected)

    def list_games(self, newest_first: bool = True) -> List[Game]:
        games = self.persistence_service.load_games()
        if newest_first:
            games.reverse()
        return games

    def get_game(self, game_id: int) -> Game:
        game = next((g for g in self.persistence_service.load_games() if g.id == game_id), None)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        return game

    def record_result(
        self,
        team1_ids: Sequence[int],
        team2_ids: Sequence[int],
        winner: Optional[str],
        rank_adjustment: Any = DEFAULT_RANK_ADJUSTMENT,
    ) -> Game:
        """
        Record a game result.

        Updates every participant's rank and record, then appends the game
        with frozen copies of both teams as they were before the update.
        Nothing is written unless all checks pass.

        Args:
            team1_ids: Ids of the red team
            team2_ids: Ids of the blue team
            winner: ``"team1"`` or ``"team2"``
            rank_adjustment: Rank points won by winners and lost by losers

        Returns:
            The recorded Game

        Raises:
            SelectionError: If a team is empty, a player is on both teams or
                no winner was given
            LedgerError: If the rank adjustment is not a positive number
            NotFoundError: If an id is not on the roster
        """
        team1_ids = list(dict.fromkeys(team1_ids or []))
        team2_ids = list(dict.fromkeys(team2_ids or []))
        errors = validate_result(team1_ids, team2_ids, winner)
        if errors:
            logger.warning("Rejected game result: %s", ", ".join(e.value for e in errors))
            raise_for(errors)

        delta = parse_amount(rank_adjustment)
        if delta is None or delta <= 0:
            raise LedgerError("Rank adjustment must be a positive number", kind=ErrorKind.INVALID_AMOUNT)

        players = self.persistence_service.load_players()
        team1 = self._select(players, team1_ids)
        team2 = self._select(players, team2_ids)

        date = now_iso()
        updated_players, rank_changes = apply_result(players, team1_ids, team2_ids, winner, delta, date=date)

        game = Game(
            id=new_id(),
            date=date,
            team1=tuple(GamePlayer(player=p) for p in team1),
            team2=tuple(GamePlayer(player=p) for p in team2),
            winner_team=winner,
            rank_adjustment=delta,
            rank_changes=tuple(rank_changes),
        )

        games = self.persistence_service.load_games()
        games.append(game)
        self.persistence_service.save_players(updated_players)
        self.persistence_service.save_games(games)
        logger.info(
            "Recorded game %s: %s won, %d vs %d players, adjustment %.2f",
            game.id, winner, len(team1), len(team2), delta,
        )
        return game

    def register_payment(self, game_id: int, player_id: int, fine_code: Optional[str] = None) -> Game:
        """
        Mark a participant as paid, optionally charging a fine.

        Args:
            game_id: Game the payment belongs to
            player_id: Paying participant
            fine_code: Key of ``FINE_OPTIONS`` to charge, or None

        Returns:
            The updated Game

        Raises:
            NotFoundError: If the game or the participant does not exist
            LedgerError: If already paid or the fine is unknown
        """
        games = self.persistence_service.load_games()
        game = next((g for g in games if g.id == game_id), None)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        participant = game.find_participant(player_id)
        if participant is None:
            raise NotFoundError(f"Player {player_id} did not play game {game_id}")
        if participant.paid:
            raise LedgerError(kind=ErrorKind.ALREADY_PAID)

        fine = fine_transaction(fine_code, participant.name) if fine_code else None

        updated = game.with_payment(player_id)
        # paid flag goes first so a retry after a failed ledger write hits ALREADY_PAID
        self.persistence_service.save_games([updated if g.id == game_id else g for g in games])
        logger.info("Payment registered for %s in game %s", participant.name, game_id)

        if fine is not None:
            transactions = self.persistence_service.load_transactions()
            transactions.append(fine)
            self.persistence_service.save_transactions(transactions)
            logger.info("Fine %s of %.2f charged to %s", fine_code, fine.amount, participant.name)
        return updated

