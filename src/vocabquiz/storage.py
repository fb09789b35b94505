import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .database import get_db_connection, init_db

logger = logging.getLogger(__name__)


class BlobStorage(ABC):
    """Key-value persistence for JSON-shaped values.

    Loading never raises: an absent or unparsable blob comes back as ``None``.
    Saving is fire-and-forget; backend failures are logged.
    """

    def load_blob(self, key: str) -> Optional[Any]:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding corrupt blob for key {key!r}")
            return None

    def save_blob(self, key: str, value: Any) -> None:
        self._write(key, json.dumps(value, ensure_ascii=False))

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        pass


class MemoryStorage(BlobStorage):
    """In-process storage, holding raw JSON text like a browser localStorage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.raw: Dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self.raw.get(key)

    def _write(self, key: str, raw: str) -> None:
        self.raw[key] = raw


class SQLiteStorage(BlobStorage):
    """Blobs stored in the ``kv_store`` table of the application database."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        init_db(db_path)

    def _read(self, key: str) -> Optional[str]:
        try:
            conn = get_db_connection(self.db_path)
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to read {key!r} from storage: {e}")
            return None
        return row["value"] if row else None

    def _write(self, key: str, raw: str) -> None:
        try:
            conn = get_db_connection(self.db_path)
            try:
                with conn:
                    conn.execute(
                        "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                        "updated_at = CURRENT_TIMESTAMP",
                        (key, raw),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to save {key!r} to storage: {e}")
