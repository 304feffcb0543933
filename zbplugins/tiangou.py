"""Random entries from a stored collection of simp diary lines."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Union


class TiangouDB:
    """Diary lines stored in a ``tiangou`` table."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS tiangou (id INTEGER PRIMARY KEY, text TEXT)"
            )

    def __enter__(self) -> "TiangouDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def pick(self) -> str:
        """Return one line at random; raise LookupError if there are none."""
        row = self._conn.execute(
            "SELECT text FROM tiangou ORDER BY RANDOM() LIMIT 1"
        ).fetchone()
        if row is None:
            raise LookupError("no diary entries")
        return row[0]

    def count(self) -> int:
        """Return the number of stored lines."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM tiangou").fetchone()
        return n

    def close(self) -> None:
        """Close the database."""
        self._conn.close()