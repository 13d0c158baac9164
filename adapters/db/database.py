"""
Database connection and local storage schema.

The ``local_storage`` table is a flat key/value store holding JSON text,
mirroring the browser storage the cookbook and shopping list live in.
"""

import logging
import sqlite3
import threading
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "littlechef.db"

SCHEMA = """
    CREATE TABLE IF NOT EXISTS local_storage (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


class Database:
    """SQLite connection and key/value storage."""

    def __init__(self, db_path: str = None):
        self.db_path = db_path or DEFAULT_DB_PATH
        self._local = threading.local()
        self._create_schema()

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection, creating it if necessary."""
        # Use thread-local storage for thread safety
        if (
            not hasattr(self._local, "connection")
            or self._local.connection is None
        ):
            self._local.connection = sqlite3.connect(
                self.db_path, check_same_thread=False
            )
            self._local.connection.row_factory = sqlite3.Row
            # Set busy timeout for concurrent access from other processes
            self._local.connection.execute("PRAGMA busy_timeout = 10000")
        return self._local.connection

    def close(self) -> None:
        """Close database connection."""
        connection = getattr(self._local, "connection", None)
        if connection is None:
            return
        try:
            connection.close()
        except sqlite3.Error as e:
            logger.warning(f"Error closing database connection: {e}")
        finally:
            self._local.connection = None

    def _create_schema(self) -> None:
        """Create the key/value table if missing."""
        try:
            self.execute_update(SCHEMA)
        except sqlite3.Error as e:
            logger.error(f"Error creating local storage schema: {e}")
            raise

    def execute_query(self, query: str, params: tuple = ()) -> list:
        """Execute a SELECT query and return results."""
        conn = self.get_connection()
        cursor = conn.execute(query, params)
        return cursor.fetchall()

    def execute_update(self, query: str, params: tuple = ()) -> int:
        """Execute an INSERT/UPDATE/DELETE query and return affected rows."""
        conn = self.get_connection()
        cursor = conn.execute(query, params)
        conn.commit()
        return cursor.rowcount

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw value stored under ``key``, or None."""
        rows = self.execute_query(
            "SELECT value FROM local_storage WHERE key = ?", (key,)
        )
        if not rows:
            return None
        return rows[0]["value"]

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self.execute_update(
            """
            INSERT INTO local_storage (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value),
        )

    def remove_item(self, key: str) -> None:
        """Delete the value stored under ``key``."""
        self.execute_update("DELETE FROM local_storage WHERE key = ?", (key,))

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
