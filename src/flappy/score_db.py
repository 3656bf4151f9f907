"""
score_db.py: Persistence layer for the best score.

Stores named integer values in a small SQLite table. Absent or corrupt values
read back as 0.
"""

import logging
import math
import sqlite3
from typing import Optional

from .constants import DB_FILE

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the score database cannot be opened, read or written."""


class ScoreDatabase:
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE):
        self.db_file = db_file
        try:
            self.conn = sqlite3.connect(db_file)
            self.cur = self.conn.cursor()
            self.setup()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open score database {db_file!r}: {e}") from e

    def setup(self):
        """Creates tables if they don't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Scores (
                name TEXT PRIMARY KEY,
                value TEXT
            )
        """)
        self.conn.commit()

    def _get_raw(self, name: str) -> Optional[str]:
        try:
            self.cur.execute("SELECT value FROM Scores WHERE name=?", (name,))
            row = self.cur.fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot read {name!r}: {e}") from e
        return None if row is None else row[0]

    def read_best(self, name: str) -> int:
        """Fetches a stored score. Missing, non-numeric or negative values read as 0."""
        raw = self._get_raw(name)
        if raw is None:
            return 0
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt value %r for %s", raw, name)
            return 0
        if not math.isfinite(value) or value < 0:
            logger.warning("Ignoring out-of-range value %r for %s", raw, name)
            return 0
        return int(value)

    def write_best(self, name: str, value: int):
        """Stores a score, replacing any previous value."""
        try:
            self.cur.execute(
                "INSERT INTO Scores (name, value) VALUES (?, ?) "
                "ON CONFLICT(name) DO UPDATE SET value=excluded.value",
                (name, str(int(value))))
            self.conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot write {name!r}: {e}") from e

    def close(self):
        self.conn.close()
