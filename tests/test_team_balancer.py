"""Tests for the team balancer."""

import random

import pytest

from futsal.models import Player
from futsal.services import ErrorKind, InsufficientPlayersError
from futsal.services.team_balancer import (
    generate_balanced_teams, regenerate_teams, team_strength, validate_selection_size
)


def _players(ranks):
    return [Player(id=index + 1, name=f"Player {index + 1}", rank=rank) for index, rank in enumerate(ranks)]


def _ids(team):
    return [p.id for p in team]


def test_snake_deal_without_rebalance():
    players = _players([9, 8, 7, 6, 5, 4])

    teams = generate_balanced_teams(players)

    assert [p.rank for p in teams.team1] == [9, 7, 5]
    assert [p.rank for p in teams.team2] == [8, 6, 4]
    assert teams.team1_strength == 7.0
    assert teams.team2_strength == 6.0
    assert teams.rebalanced is False


def test_input_order_does_not_matter_for_distinct_ranks():
    players = _players([4, 9, 6, 5, 8, 7])

    teams = generate_balanced_teams(players)

    assert [p.rank for p in teams.team1] == [9, 7, 5]
    assert [p.rank for p in teams.team2] == [8, 6, 4]


def test_lopsided_eight_keeps_seed_when_no_swap_improves():
    # Every cross swap either changes nothing or mirrors the gap
    players = _players([10, 10, 10, 1, 1, 1, 1, 1])

    teams = generate_balanced_teams(players)

    assert [p.rank for p in teams.team1] == [10, 10, 1, 1]
    assert [p.rank for p in teams.team2] == [10, 1, 1, 1]
    assert teams.team1_strength == 5.5
    assert teams.team2_strength == 3.25
    assert teams.rebalanced is False


def test_best_single_swap_is_applied_in_place():
    players = _players([10, 10, 9, 2, 2, 1, 1, 1])

    teams = generate_balanced_teams(players)

    # seed: team1 = [1, 3, 5, 7], team2 = [2, 4, 6, 8]; best swap is 3 <-> 4
    assert _ids(teams.team1) == [1, 4, 5, 7]
    assert _ids(teams.team2) == [2, 3, 6, 8]
    assert teams.team1_strength == 3.75
    assert teams.team2_strength == 5.25
    assert teams.rebalanced is True


def test_only_one_swap_is_applied():
    players = _players([10, 10, 9, 2, 2, 1, 1, 1])

    teams = generate_balanced_teams(players)

    # a second pass could do better, the balancer stops after one swap
    assert teams.strength_difference == pytest.approx(1.5)


def test_small_groups_never_rebalance():
    players = _players([10, 10, 10, 1, 1, 1, 1])

    teams = generate_balanced_teams(players)

    assert teams.rebalanced is False
    assert [p.rank for p in teams.team1] == [10, 10, 1, 1]
    assert [p.rank for p in teams.team2] == [10, 1, 1]


@pytest.mark.parametrize("count", [0, 1, 5])
def test_fewer_than_six_players_is_rejected(count):
    players = _players([5] * count)

    assert validate_selection_size(players) == [ErrorKind.INSUFFICIENT_PLAYERS]
    with pytest.raises(InsufficientPlayersError) as excinfo:
        generate_balanced_teams(players)
    assert excinfo.value.kind is ErrorKind.INSUFFICIENT_PLAYERS


def test_random_selections_are_exact_partitions():
    rng = random.Random(1234)
    for _ in range(200):
        count = rng.randint(6, 24)
        players = _players([round(rng.uniform(1, 10), 2) for _ in range(count)])

        teams = generate_balanced_teams(players)

        combined = _ids(teams.team1) + _ids(teams.team2)
        assert sorted(combined) == sorted(_ids(players))
        assert len(set(combined)) == len(combined)
        assert abs(len(teams.team1) - len(teams.team2)) <= 1


def test_equal_ranks_keep_input_order():
    players = _players([5, 5, 5, 5, 5, 5])

    teams = generate_balanced_teams(players)

    assert _ids(teams.team1) == [1, 3, 5]
    assert _ids(teams.team2) == [2, 4, 6]


def test_regenerate_shuffles_but_still_partitions():
    players = _players([7, 7, 7, 7, 3, 3, 3, 3])

    teams = regenerate_teams(players, random.Random(3))

    assert sorted(_ids(teams.team1) + _ids(teams.team2)) == list(range(1, 9))
    assert teams.team1_strength == teams.team2_strength == 5.0


def test_team_strength():
    assert team_strength([]) == 0.0
    assert team_strength(_players([4, 6, 8])) == 6.0
