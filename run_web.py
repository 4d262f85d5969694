#!/usr/bin/env python3
"""
Main entry point for the Futsal Roster web application.

This script configures logging and launches the Flask-based JSON API.
Settings come from FUTSAL_DATA_DIR, FUTSAL_HOST, FUTSAL_PORT and
FUTSAL_LOG_LEVEL.
"""
import logging

from futsal.ui.web_app import run_web_app
from futsal.utils import AppConfig

if __name__ == "__main__":
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_web_app(config)
