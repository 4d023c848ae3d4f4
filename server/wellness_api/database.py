"""SQLite connection manager and schema for wellness data."""
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
import logging

from .config import get_settings

log = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS metrics (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    date TEXT NOT NULL,
    steps INTEGER NOT NULL DEFAULT 0 CHECK (steps >= 0),
    sleep_hours REAL NOT NULL DEFAULT 0 CHECK (sleep_hours BETWEEN 0 AND 24),
    mood TEXT NOT NULL DEFAULT 'Neutral'
        CHECK (mood IN ('Happy', 'Neutral', 'Tired', 'Stressed')),
    notes TEXT CHECK (notes IS NULL OR length(notes) <= 500),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (user_id, date)
);

CREATE INDEX IF NOT EXISTS idx_metrics_user_date ON metrics (user_id, date);
"""


class DatabaseManager:
    """
    SQLite database manager for users and daily metrics.
    Every operation gets its own connection; the (user_id, date)
    UNIQUE constraint is what keeps concurrent creates consistent.
    """

    def __init__(self, settings=None, db_path: str | None = None):
        self.settings = settings or get_settings()
        self.db_path = db_path or self.settings.database_path

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Open a read-write connection.
        Commits when the block exits cleanly, rolls back on any error.
        """
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        with self.connect() as conn:
            conn.executescript(SCHEMA)
        log.info(f"[DB] Schema ready at {self.db_path}")


# Singleton instance
db_manager = DatabaseManager()
