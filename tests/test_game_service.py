"""Tests for recording games, payments and the dashboard/statistics reports."""

import random

import pytest

from futsal.models import TransactionCategory
from futsal.services import (
    ErrorKind, InsufficientPlayersError, LedgerError, MemoryStore, NotFoundError,
    SelectionError, ServiceFactory,
)
from futsal.utils.constants import LEDGER_KEY


@pytest.fixture
def factory():
    return ServiceFactory(MemoryStore(), rng=random.Random(3))


@pytest.fixture
def roster(factory):
    ranks = [9, 8, 7, 6, 5, 4, 3, 2]
    return [factory.players.create_player(f"Player {i}", rank) for i, rank in enumerate(ranks)]


def test_generate_teams_from_ids(factory, roster):
    teams = factory.games.generate_teams([p.id for p in roster[:6]])

    assert [p.rank for p in teams.team1] == [9, 7, 5]
    assert [p.rank for p in teams.team2] == [8, 6, 4]


def test_generate_teams_ignores_duplicate_ids(factory, roster):
    ids = [p.id for p in roster[:5]]

    with pytest.raises(InsufficientPlayersError):
        factory.games.generate_teams(ids + ids[:2])


def test_generate_teams_unknown_id(factory, roster):
    with pytest.raises(NotFoundError):
        factory.games.generate_teams([p.id for p in roster[:5]] + [123])


def test_shuffled_generation_is_a_partition(factory, roster):
    ids = [p.id for p in roster]

    teams = factory.games.generate_teams(ids, shuffle=True)

    assert sorted(p.id for p in teams.team1 + teams.team2) == sorted(ids)
    assert abs(len(teams.team1) - len(teams.team2)) <= 1


def test_record_result_updates_ranks_and_stores_snapshots(factory, roster):
    team1 = [p.id for p in roster[:3]]
    team2 = [p.id for p in roster[3:6]]

    game = factory.games.record_result(team1, team2, "team2", rank_adjustment="0.75")

    assert game.rank_adjustment == 0.75
    assert [p.player.rank for p in game.team1] == [9, 8, 7]
    assert all(not p.paid for p in game.team1 + game.team2)

    players = {p.id: p for p in factory.players.list_players()}
    assert players[roster[0].id].rank == 8.25
    assert players[roster[3].id].rank == 6.75
    assert players[roster[6].id] == roster[6]
    assert players[roster[3].id].wins == 1
    assert players[roster[0].id].losses == 1

    assert factory.games.list_games() == [game]
    assert factory.games.get_game(game.id) == game
    change = game.rank_change_for(roster[0].id)
    assert (change.old_rank, change.new_rank, change.change) == (9, 8.25, -0.75)


@pytest.mark.parametrize(
    "team1, team2, winner, error, kind",
    [
        ([], [1], "team1", SelectionError, ErrorKind.MISSING_SELECTION),
        ([1], [2], None, SelectionError, ErrorKind.NO_WINNER),
        ([1], [2], "team1", LedgerError, ErrorKind.INVALID_AMOUNT),
    ],
)
def test_invalid_result_writes_nothing(factory, roster, team1, team2, winner, error, kind):
    ids = [p.id for p in roster]
    team1 = [ids[i - 1] for i in team1]
    team2 = [ids[i - 1] for i in team2]
    adjustment = 0 if error is LedgerError else 0.5

    with pytest.raises(error) as excinfo:
        factory.games.record_result(team1, team2, winner, rank_adjustment=adjustment)

    assert excinfo.value.kind is kind
    assert factory.games.list_games() == []
    assert factory.players.list_players() == roster


def test_unknown_participant_writes_nothing(factory, roster):
    with pytest.raises(NotFoundError):
        factory.games.record_result([roster[0].id], [999], "team1")

    assert factory.players.list_players() == roster


def test_player_on_both_teams_is_rejected(factory, roster):
    with pytest.raises(SelectionError):
        factory.games.record_result([roster[0].id, roster[1].id], [roster[1].id], "team1")


def test_list_games_newest_first(factory, roster):
    first = factory.games.record_result([roster[0].id], [roster[1].id], "team1")
    second = factory.games.record_result([roster[2].id], [roster[3].id], "team2")

    assert factory.games.list_games() == [second, first]
    assert factory.games.list_games(newest_first=False) == [first, second]
    with pytest.raises(NotFoundError):
        factory.games.get_game(1)


def test_register_payment_with_fine(factory, roster):
    game = factory.games.record_result([roster[0].id], [roster[1].id], "team1")

    updated = factory.games.register_payment(game.id, roster[1].id, fine_code="late_short")

    assert updated.find_participant(roster[1].id).paid
    assert not updated.find_participant(roster[0].id).paid
    assert factory.games.get_game(game.id) == updated

    transactions = factory.ledger.list_transactions()
    assert len(transactions) == 1
    assert transactions[0].category is TransactionCategory.FINE
    assert transactions[0].description == "Multa: Atraso até 5min - Player 1"
    assert factory.ledger.balance() == pytest.approx(0.5)


def test_register_payment_twice(factory, roster):
    game = factory.games.record_result([roster[0].id], [roster[1].id], "team1")
    factory.games.register_payment(game.id, roster[0].id)

    with pytest.raises(LedgerError) as excinfo:
        factory.games.register_payment(game.id, roster[0].id, fine_code="no_bib")

    assert excinfo.value.kind is ErrorKind.ALREADY_PAID
    assert factory.ledger.list_transactions() == []


def test_register_payment_unknown_fine_changes_nothing(factory, roster):
    game = factory.games.record_result([roster[0].id], [roster[1].id], "team1")

    with pytest.raises(LedgerError):
        factory.games.register_payment(game.id, roster[0].id, fine_code="late_forever")

    assert not factory.games.get_game(game.id).find_participant(roster[0].id).paid


def test_register_payment_unknown_game_or_player(factory, roster):
    game = factory.games.record_result([roster[0].id], [roster[1].id], "team1")

    with pytest.raises(NotFoundError):
        factory.games.register_payment(1, roster[0].id)
    with pytest.raises(NotFoundError):
        factory.games.register_payment(game.id, roster[5].id)


def test_deleted_player_stays_in_past_games(factory, roster):
    game = factory.games.record_result([roster[0].id], [roster[1].id], "team1")

    factory.players.delete_player(roster[0].id)

    stored = factory.games.get_game(game.id)
    assert stored.find_participant(roster[0].id).name == "Player 0"
    assert stored.rank_change_for(roster[0].id).new_rank == 9.5


def test_dashboard(factory, roster):
    for i in range(4):
        factory.games.record_result([roster[0].id, roster[1].id], [roster[2].id], "team1")
    factory.ledger.add_transaction("add", 12.5, "Quotas")

    summary = factory.analytics.dashboard()

    assert summary.total_players == 8
    assert summary.total_games == 4
    assert summary.balance == 12.5
    assert [g["number"] for g in summary.recent_games] == [4, 3, 2]
    assert summary.recent_games[0]["winnerLabel"] == "Equipa Vermelha"
    assert summary.recent_games[0]["players"] == 3


def test_dashboard_empty():
    summary = ServiceFactory(MemoryStore()).analytics.dashboard()

    assert summary.average_rank == 0.0
    assert summary.recent_games == []
    assert summary.balance == 0


def test_player_statistics(factory, roster):
    ana = roster[4]
    results = ["team1", "team2", "team1", "team1", "team1", "team2"]
    for winner in results:
        factory.games.record_result([ana.id], [roster[5].id], winner, rank_adjustment=0.25)

    stats = factory.analytics.player_statistics(ana.id)

    assert (stats.games_played, stats.wins, stats.losses) == (6, 4, 2)
    assert stats.win_rate == 66.7
    assert [point.game for point in stats.rank_chart] == [1, 2, 3, 4, 5, 6, 7]
    assert stats.rank_chart[-1].rank == stats.rank == 5.5
    assert len(stats.recent_games) == 5
    assert stats.recent_games[0].won is False
    assert stats.recent_games[0].rank_change == -0.25
    assert stats.recent_games[1].team == "team1"


def test_player_statistics_unknown_player(factory):
    with pytest.raises(NotFoundError):
        factory.analytics.player_statistics(1)


class LedgerWriteFails(MemoryStore):
    def write(self, key, value):
        if key == LEDGER_KEY:
            raise OSError("disk full")
        super().write(key, value)


def test_failed_fine_write_never_charges_twice():
    store = LedgerWriteFails()
    factory = ServiceFactory(store)
    ana = factory.players.create_player("Ana", 5)
    rui = factory.players.create_player("Rui", 5)
    game = factory.games.record_result([ana.id], [rui.id], "team1")

    with pytest.raises(OSError):
        factory.games.register_payment(game.id, ana.id, fine_code="late_long")

    assert factory.games.get_game(game.id).find_participant(ana.id).paid
    assert factory.ledger.list_transactions() == []
    with pytest.raises(LedgerError) as excinfo:
        factory.games.register_payment(game.id, ana.id, fine_code="late_long")
    assert excinfo.value.kind is ErrorKind.ALREADY_PAID
