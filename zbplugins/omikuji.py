"""Senso-ji fortune slips: slip images and their written interpretations."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Union

BED = "https://gitcode.net/u011570312/senso-ji-omikuji/-/raw/main/"
SLIP_COUNT = 100


def image_names(number: int) -> tuple[str, str]:
    """Return the file names of the two images of a slip."""
    return f"{number}_0.jpg", f"{number}_1.jpg"


class KujiDB:
    """Interpretations of the fortune slips, keyed by slip number."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kuji (id INTEGER PRIMARY KEY, text TEXT)"
            )

    def __enter__(self) -> "KujiDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get(self, number: int) -> str:
        """Return the interpretation of a slip; raise LookupError if it is missing."""
        row = self._conn.execute("SELECT text FROM kuji WHERE id = ?", (int(number),)).fetchone()
        if row is None:
            raise LookupError(f"no kuji numbered {number}")
        return row[0]

    def count(self) -> int:
        """Return the number of stored interpretations."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM kuji").fetchone()
        return n

    def close(self) -> None:
        """Close the database."""
        self._conn.close()