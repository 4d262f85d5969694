"""
Team balancing for the Futsal Roster application.

Splits the selected players into two sides of near-equal average rank: a snake
deal over the rank-sorted list seeds the split, then one pass over every
cross-team pair applies the single swap that narrows the gap the most.
"""
import logging
import random
from typing import List, Optional, Sequence, Tuple

from ..models import BalancedTeams, Player
from ..utils.constants import (
    MIN_PLAYERS_FOR_TEAMS, REBALANCE_MIN_PLAYERS, REBALANCE_THRESHOLD
)
from .errors import ErrorKind, InsufficientPlayersError

logger = logging.getLogger(__name__)


def team_strength(team: Sequence[Player]) -> float:
    """
    Average rank of a team.

    Args:
        team: Team members

    Returns:
        Arithmetic mean of member ranks, 0.0 for an empty team
    """
    if not team:
        return 0.0
    return sum(p.rank for p in team) / len(team)


def validate_selection_size(players: Sequence[Player]) -> List[ErrorKind]:
    """Return the error kinds preventing a split of these players."""
    if len(players) < MIN_PLAYERS_FOR_TEAMS:
        return [ErrorKind.INSUFFICIENT_PLAYERS]
    return []


def _best_single_swap(team1: List[Player], team2: List[Player]) -> Optional[Tuple[int, int]]:
    """
    Find the swap that most reduces the strength difference.

    Every (i, j) pair is evaluated; only a strict improvement over the best
    difference so far replaces it, so among equal candidates the first pair
    in iteration order wins.

    Returns:
        (index in team1, index in team2), or None if no swap improves
    """
    best_difference = abs(team_strength(team1) - team_strength(team2))
    best_pair = None

    for i in range(len(team1)):
        for j in range(len(team2)):
            new_team1 = list(team1)
            new_team2 = list(team2)
            new_team1[i], new_team2[j] = team2[j], team1[i]

            difference = abs(team_strength(new_team1) - team_strength(new_team2))
            if difference < best_difference:
                best_difference = difference
                best_pair = (i, j)

    return best_pair


def generate_balanced_teams(players: Sequence[Player]) -> BalancedTeams:
    """
    Partition players into two balanced teams.

    Args:
        players: Selected players (at least 6)

    Returns:
        BalancedTeams with both rosters and their strengths

    Raises:
        InsufficientPlayersError: If fewer than 6 players are given
    """
    if validate_selection_size(players):
        raise InsufficientPlayersError()

    # sorted() is stable, so equal ranks keep their input order
    ordered = sorted(players, key=lambda p: p.rank, reverse=True)

    team1 = ordered[0::2]
    team2 = ordered[1::2]
    result = BalancedTeams(
        team1=team1,
        team2=team2,
        team1_strength=team_strength(team1),
        team2_strength=team_strength(team2),
    )

    if result.strength_difference > REBALANCE_THRESHOLD and len(ordered) >= REBALANCE_MIN_PLAYERS:
        swap = _best_single_swap(team1, team2)
        if swap is not None:
            i, j = swap
            team1 = list(team1)
            team2 = list(team2)
            team1[i], team2[j] = team2[j], team1[i]
            logger.debug("Rebalanced by swapping %s and %s", team2[j].name, team1[i].name)
            result = BalancedTeams(
                team1=team1,
                team2=team2,
                team1_strength=team_strength(team1),
                team2_strength=team_strength(team2),
                rebalanced=True,
            )

    logger.info(
        "Generated teams of %d and %d players (%.2f vs %.2f)",
        len(result.team1), len(result.team2), result.team1_strength, result.team2_strength,
    )
    return result


def regenerate_teams(players: Sequence[Player], rng: Optional[random.Random] = None) -> BalancedTeams:
    """
    Shuffle the selection and balance it again.

    Different input order only changes which equally ranked players end up on
    each side; the result is not necessarily better.

    Args:
        players: Selected players
        rng: Random source, the module generator when omitted

    Returns:
        A freshly generated split
    """
    shuffled = list(players)
    (rng or random).shuffle(shuffled)
    return generate_balanced_teams(shuffled)
