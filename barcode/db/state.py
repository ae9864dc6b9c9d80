"""SQLite-backed storage for the application state blob."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from ..models import AppState
from ..store import STATE_KEY, StateStorage
from .schema import ensure_schema

logger = logging.getLogger(__name__)


class SQLiteStorage(StateStorage):
    """Keeps the whole state as one JSON value in the app_state table."""

    def __init__(
        self,
        db_path: str | Path = "~/.config/barcode/state.db",
        key: str = STATE_KEY,
    ) -> None:
        self._db_path = db_path
        self._key = key
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def load(self) -> AppState | None:
        """Return the stored state, or None if nothing was saved yet.

        Raises:
            ValueError: If the stored value is not a valid state.
        """
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM app_state WHERE key = ?", (self._key,)
        ).fetchone()
        if row is None:
            return None
        return AppState.from_dict(json.loads(row["value"]))

    def save(self, state: AppState) -> None:
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO app_state (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = datetime('now', 'localtime')""",
            (self._key, json.dumps(state.to_dict(), ensure_ascii=False)),
        )
        conn.commit()
        logger.debug("Estado guardado en %s", self._db_path)
