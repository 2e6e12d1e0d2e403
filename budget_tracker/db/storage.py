"""Local key/value storage backed by SQLite.

Plays the role of the browser's local storage: string keys mapped to string
values, synchronous, best-effort. Every failure is logged and swallowed so
callers always fall back to their defaults; nothing here raises to the caller.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from .schema import BASIC_UTC_NOW

logger = logging.getLogger("budget_tracker.storage")


class LocalStorage:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on error, always close."""
        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Raw string API
    def get_item(self, key: str) -> Optional[str]:
        try:
            with self._session() as conn:
                cur = conn.cursor()
                cur.execute("SELECT value FROM local_storage WHERE key = ?", (key,))
                row = cur.fetchone()
                return row[0] if row else None
        except sqlite3.Error:
            logger.warning("local storage read failed for key %s", key, exc_info=True)
            return None

    def set_item(self, key: str, value: str) -> bool:
        try:
            with self._session() as conn:
                conn.execute(
                    f"""
                    INSERT INTO local_storage (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = ({BASIC_UTC_NOW})
                    """,
                    (key, value),
                )
            return True
        except sqlite3.Error:
            logger.warning("local storage write failed for key %s", key, exc_info=True)
            return False

    def remove_item(self, key: str) -> bool:
        try:
            with self._session() as conn:
                conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            return True
        except sqlite3.Error:
            logger.warning("local storage delete failed for key %s", key, exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Typed helpers
    def load_json(self, key: str, fallback: Any) -> Any:
        raw = self.get_item(key)
        if not raw:
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("discarding undecodable value for key %s", key)
            return fallback

    def save_json(self, key: str, value: Any) -> bool:
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.warning("value for key %s is not JSON serializable", key)
            return False
        return self.set_item(key, raw)

    def load_primitive(self, key: str, fallback: str) -> str:
        raw = self.get_item(key)
        return raw if raw is not None else fallback

    def save_primitive(self, key: str, value: str) -> bool:
        return self.set_item(key, value)


__all__ = ["LocalStorage"]
