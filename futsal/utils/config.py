"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "FUTSAL_DATA_DIR"
HOST_ENV = "FUTSAL_HOST"
PORT_ENV = "FUTSAL_PORT"
LOG_LEVEL_ENV = "FUTSAL_LOG_LEVEL"

DEFAULT_DATA_DIR = "data"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
DEFAULT_LOG_LEVEL = "INFO"


def _env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if level not in logging.getLevelNamesMapping():
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return level


@dataclass
class AppConfig:
    data_dir: str = DEFAULT_DATA_DIR
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            data_dir=os.getenv(DATA_DIR_ENV, DEFAULT_DATA_DIR),
            host=os.getenv(HOST_ENV, DEFAULT_HOST),
            port=_env_int(PORT_ENV, DEFAULT_PORT, min_value=1, max_value=65535),
            log_level=_env_log_level(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
        )
