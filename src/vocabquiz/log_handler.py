import logging
from typing import Optional

from .database import get_db_connection


class SQLiteHandler(logging.Handler):
    """Writes warnings about discarded state and other records to the ``logs`` table."""

    def __init__(self, db_path: Optional[str] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.db_path = db_path

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            conn = get_db_connection(self.db_path)
            with conn:
                conn.execute(
                    "INSERT INTO logs (level, logger, message) VALUES (?, ?, ?)",
                    (record.levelname, record.name, message),
                )
            conn.close()
        except Exception:
            self.handleError(record)
