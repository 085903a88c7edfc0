"""
Configuration read from the environment.

A `.env` file in the working directory is loaded on import so local runs do
not need exported variables.
"""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./przepisy.db"


def get_database_url() -> str:
    return os.environ.get("PRZEPISY_DATABASE_URL", DEFAULT_DATABASE_URL)


def get_log_level() -> int:
    """Return the numeric log level named by PRZEPISY_LOG_LEVEL (INFO if unknown)."""
    name = os.environ.get("PRZEPISY_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
