"""Tests for environment configuration and display helpers."""

import pytest

from futsal.utils import AppConfig, avatar_url, fmt_change, fmt_currency, fmt_rank, new_id


def test_defaults(monkeypatch):
    for name in ("FUTSAL_DATA_DIR", "FUTSAL_HOST", "FUTSAL_PORT", "FUTSAL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig.from_env()

    assert config == AppConfig(data_dir="data", host="127.0.0.1", port=7122, log_level="INFO")


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("FUTSAL_DATA_DIR", "/tmp/futsal")
    monkeypatch.setenv("FUTSAL_HOST", "0.0.0.0")
    monkeypatch.setenv("FUTSAL_PORT", "8080")
    monkeypatch.setenv("FUTSAL_LOG_LEVEL", "debug")

    config = AppConfig.from_env()

    assert config.data_dir == "/tmp/futsal"
    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("raw, expected", [("nope", 7122), ("0", 1), ("70000", 65535)])
def test_port_fallback_and_bounds(monkeypatch, raw, expected):
    monkeypatch.setenv("FUTSAL_PORT", raw)

    assert AppConfig.from_env().port == expected


def test_invalid_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("FUTSAL_LOG_LEVEL", "loud")

    assert AppConfig.from_env().log_level == "INFO"


def test_formatting():
    assert fmt_currency(12.5) == "€12.50"
    assert fmt_currency(-3) == "-€3.00"
    assert fmt_currency(0) == "€0.00"
    assert fmt_rank(7.5) == "7.5/10"
    assert fmt_change(0.5) == "+0.5"
    assert fmt_change(-0.5) == "-0.5"
    assert fmt_change(0.0) == "0.0"


def test_avatar_url():
    assert avatar_url("Zé Tó") == (
        "https://ui-avatars.com/api/?name=Z%C3%A9%20T%C3%B3&background=22c55e&color=fff&size=200"
    )


def test_new_id_is_strictly_increasing():
    ids = [new_id() for _ in range(100)]

    assert ids == sorted(set(ids))
