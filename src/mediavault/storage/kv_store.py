"""SQLite-backed key-value persistence for the vault."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Generator

from mediavault.core.config import DATABASE_PATH
from mediavault.core.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqliteBackend:
    """String key-value store persisted in a SQLite database."""

    def __init__(self, db_path: Path | str | None = None):
        """
        Initialize the backend.

        Args:
            db_path: Path to SQLite database (defaults to ~/.mediavault/mediavault.db)
        """
        self.db_path = Path(db_path) if db_path else DATABASE_PATH
        self._connection: sqlite3.Connection | None = None
        self._connection_lock = Lock()
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        """Create database schema if not exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get the shared connection, committing on success."""
        with self._connection_lock:
            try:
                if self._connection is None:
                    self._connection = sqlite3.connect(
                        self.db_path, check_same_thread=False
                    )
                    self._connection.row_factory = sqlite3.Row
            except sqlite3.Error as e:
                raise PersistenceError(f"Cannot open {self.db_path}: {e}") from e
            try:
                yield self._connection
                self._connection.commit()
            except sqlite3.Error as e:
                self._connection.rollback()
                raise PersistenceError(f"Database error in {self.db_path}: {e}") from e
            except Exception:
                self._connection.rollback()
                raise

    def close(self) -> None:
        """Close the shared database connection."""
        with self._connection_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        now = datetime.now().isoformat()
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT (key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now),
            )
        logger.debug("Stored %d chars under %r", len(value), key)

    def delete(self, key: str) -> None:
        """Remove key if present."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        """List stored keys, most recently updated first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT key FROM kv ORDER BY updated_at DESC"
            ).fetchall()
            return [row["key"] for row in rows]


class MemoryBackend:
    """Dict-backed store that lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
