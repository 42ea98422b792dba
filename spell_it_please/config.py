"""Configuration constants and .env loading.

WHY: Where overrides are stored, under which key, and how chatty the
logs are should be easy to find and change without editing code, e.g.
to point a test run or a portable install at its own settings file.

HOW: python-dotenv loads the .env file on import. Each setting is a
module-level constant read from the environment with a default.
store_path() expands "~" and returns a Path.

RULES:
- All defaults can be overridden via environment variables
- The overrides key matches the one earlier releases used, so existing
  settings files keep working
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

DEFAULT_STORE_PATH = "~/.spell_it_please/settings.json"

STORE_PATH = os.getenv("SPELL_IT_PLEASE_STORE_PATH", DEFAULT_STORE_PATH)
STORE_KEY = os.getenv("SPELL_IT_PLEASE_STORE_KEY", "AlphabetCache")

SAVE_FLUSH_TIMEOUT = float(os.getenv("SPELL_IT_PLEASE_SAVE_FLUSH_TIMEOUT", "2.0"))
"""Seconds the GUI waits for pending saves when the window closes."""

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("SPELL_IT_PLEASE_LOG_LEVEL", "INFO").upper()


def store_path() -> Path:
    """Return the settings file location with "~" expanded."""
    return Path(STORE_PATH).expanduser()
