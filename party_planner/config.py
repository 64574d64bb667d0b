# Role: Central configuration module. Loads .env into environment variables and computes runtime flags
# (DEBUG, streaming delay, session limits). Importers read party_planner.config.<FLAG> at call time.

from __future__ import annotations

import os
from dotenv import load_dotenv

DEBUG: bool = False

# Base per-word delay of the typing effect, in milliseconds.
STREAM_BASE_DELAY_MS: int = 50

SESSION_TTL_MINUTES: int = 60
MAX_HISTORY_MESSAGES: int = 50


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def load_env() -> None:
    """
    Load .env into os.environ, then recompute the module flags.
    This makes the flags correct even if load_env() is called after import.
    """
    global DEBUG, STREAM_BASE_DELAY_MS, SESSION_TTL_MINUTES, MAX_HISTORY_MESSAGES
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}
    STREAM_BASE_DELAY_MS = max(0, _int_env("STREAM_BASE_DELAY_MS", 50))
    SESSION_TTL_MINUTES = max(1, _int_env("SESSION_TTL_MINUTES", 60))
    MAX_HISTORY_MESSAGES = max(2, _int_env("MAX_HISTORY_MESSAGES", 50))
