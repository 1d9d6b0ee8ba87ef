from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(os.getenv("GYMDASH_DB", "data/gymdash.db"))
DEFAULT_MAX_CAPACITY = 15
DEFAULT_RECENT_LIMIT = 5
MAX_RECENT_LIMIT = 5


def get_database_url() -> str:
    """Return the SQLAlchemy database URL.

    ``GYMDASH_DATABASE_URL`` wins when set; otherwise a SQLite file at the
    configured path is used.
    """

    url = os.getenv("GYMDASH_DATABASE_URL")
    if url:
        return url
    db_path = DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %s", name, raw, default)
        return default
    return value


def get_max_capacity() -> int:
    """Capacity shown next to the occupancy figure."""
    return _int_from_env("GYMDASH_MAX_CAPACITY", DEFAULT_MAX_CAPACITY)


def clamp_recent_limit(limit: int) -> int:
    """Keep the activity feed between 1 and ``MAX_RECENT_LIMIT`` items."""
    return max(1, min(limit, MAX_RECENT_LIMIT))


def get_recent_limit() -> int:
    return clamp_recent_limit(_int_from_env("GYMDASH_RECENT_LIMIT", DEFAULT_RECENT_LIMIT))


def get_log_level() -> int:
    name = os.getenv("GYMDASH_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)
