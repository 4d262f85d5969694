"""
Unit tests for the key-value stores and PersistenceService.
"""
import json
import os

import pytest

from futsal.models import CofrinhoTransaction, Player, TransactionType
from futsal.services import JsonFileStore, MemoryStore, PersistenceService
from futsal.utils.constants import GAMES_KEY, LEDGER_KEY, PLAYERS_KEY


def test_memory_store_returns_copies():
    store = MemoryStore()
    store.write("k", [{"a": 1}])

    value = store.read("k")
    value[0]["a"] = 2

    assert store.read("k") == [{"a": 1}]
    assert store.read("missing") is None


def test_memory_store_rejects_unserializable_values():
    with pytest.raises(TypeError):
        MemoryStore().write("k", {"when": object()})


def test_json_file_store(tmp_path):
    directory = tmp_path / "data"
    store = JsonFileStore(str(directory))

    assert store.read(PLAYERS_KEY) is None

    store.write(PLAYERS_KEY, [{"id": 1, "name": "João"}])

    path = directory / f"{PLAYERS_KEY}.json"
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 1, "name": "João"}]
    assert store.read(PLAYERS_KEY) == [{"id": 1, "name": "João"}]
    # no temporary files left behind
    assert sorted(os.listdir(directory)) == [f"{PLAYERS_KEY}.json"]


def test_json_file_store_replaces_whole_document(tmp_path):
    store = JsonFileStore(str(tmp_path))
    store.write(LEDGER_KEY, [1, 2, 3])
    store.write(LEDGER_KEY, [4])

    assert store.read(LEDGER_KEY) == [4]


def test_failed_write_keeps_previous_document(tmp_path):
    store = JsonFileStore(str(tmp_path))
    store.write(GAMES_KEY, [{"id": 1}])

    with pytest.raises(TypeError):
        store.write(GAMES_KEY, [{"id": object()}])

    assert store.read(GAMES_KEY) == [{"id": 1}]
    assert sorted(os.listdir(tmp_path)) == [f"{GAMES_KEY}.json"]


def test_persistence_round_trip(tmp_path):
    persistence = PersistenceService(JsonFileStore(str(tmp_path)))
    players = [Player(id=1, name="Ana", rank=6.5), Player(id=2, name="Rui", rank=4.0)]
    transactions = [
        CofrinhoTransaction(id=3, type=TransactionType.ADD, amount=10.0, description="Quotas", date="2025-01-01"),
    ]

    persistence.save_players(players)
    persistence.save_transactions(transactions)

    reloaded = PersistenceService(JsonFileStore(str(tmp_path)))
    assert reloaded.load_players() == players
    assert reloaded.load_transactions() == transactions
    assert reloaded.load_games() == []


def test_stored_value_must_be_a_list():
    persistence = PersistenceService(MemoryStore({PLAYERS_KEY: {"id": 1}}))

    with pytest.raises(ValueError):
        persistence.load_players()
