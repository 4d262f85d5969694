"""Rank update rule applied when a game result is recorded."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import Player, RankChange, RankHistoryEntry, clamp_rank
from ..utils import now_iso
from ..utils.constants import TEAM1, TEAM2
from .errors import ErrorKind, raise_for

logger = logging.getLogger(__name__)


def validate_result(
    team1_ids: Sequence[int],
    team2_ids: Sequence[int],
    winner: Optional[str],
) -> List[ErrorKind]:
    """Return the error kinds preventing a result from being applied."""
    errors = []
    if not team1_ids or not team2_ids:
        errors.append(ErrorKind.MISSING_SELECTION)
    elif set(team1_ids) & set(team2_ids):
        # the same player cannot play for both sides
        errors.append(ErrorKind.MISSING_SELECTION)
    if winner not in (TEAM1, TEAM2):
        errors.append(ErrorKind.NO_WINNER)
    return errors


def _updated_player(player: Player, won: bool, delta: float, date: str) -> Player:
    new_rank = clamp_rank(player.rank + (delta if won else -delta))
    change = new_rank - player.rank
    return replace(
        player,
        rank=new_rank,
        games_played=player.games_played + 1,
        wins=player.wins + (1 if won else 0),
        losses=player.losses + (0 if won else 1),
        rank_history=player.rank_history + [RankHistoryEntry(date=date, rank=new_rank, change=change)],
    )


def apply_result(
    players: Iterable[Player],
    team1_ids: Sequence[int],
    team2_ids: Sequence[int],
    winner: Optional[str],
    delta: float,
    date: Optional[str] = None,
) -> Tuple[List[Player], List[RankChange]]:
    """
    Apply a game outcome to the roster.

    Winners gain ``delta`` and losers lose it, clamped to the rank scale. The
    history entry records the change actually applied, so a player already at
    a boundary gets a change of 0.0.

    Args:
        players: Full roster
        team1_ids: Ids of the first team
        team2_ids: Ids of the second team
        winner: ``"team1"`` or ``"team2"``
        delta: Rank adjustment magnitude
        date: Timestamp for the history entries (now when omitted)

    Returns:
        (updated roster in input order, rank changes in roster order)

    Raises:
        SelectionError: If a team is empty or no winner was designated
    """
    raise_for(validate_result(team1_ids, team2_ids, winner))

    date = date or now_iso()
    team1 = set(team1_ids)
    team2 = set(team2_ids)
    winners = team1 if winner == TEAM1 else team2

    updated: List[Player] = []
    changes: List[RankChange] = []
    for player in players:
        if player.id not in team1 and player.id not in team2:
            updated.append(player)
            continue
        new_player = _updated_player(player, player.id in winners, delta, date)
        updated.append(new_player)
        changes.append(RankChange(
            player_id=player.id,
            player_name=player.name,
            old_rank=player.rank,
            new_rank=new_player.rank,
            change=new_player.rank - player.rank,
        ))

    logger.debug("Applied result for %s with delta %.2f to %d players", winner, delta, len(changes))
    return updated, changes
