"""Sign-in levels and scores: storage plus the level table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Union

BACKGROUND_URL = "https://img.moehu.org/pic.php?id=pc"
SIGNIN_MAX = 1
SCORE_MAX = 1200
RANK_ARRAY = (0, 10, 20, 50, 100, 200, 350, 550, 750, 1000, 1200)

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS score (uid INTEGER PRIMARY KEY, score INTEGER DEFAULT 0)",
    "CREATE TABLE IF NOT EXISTS sign_in ("
    "uid INTEGER PRIMARY KEY, count INTEGER DEFAULT 0, updated_at TEXT)",
)


@dataclass(frozen=True)
class ScoreEntry:
    """A user's level score."""

    uid: int
    score: int


@dataclass(frozen=True)
class SignIn:
    """A user's sign-in count and the time it was last changed."""

    uid: int
    count: int
    updated_at: datetime


def _stamp(t: datetime) -> str:
    return t.isoformat(sep=" ", timespec="microseconds")


class ScoreDB:
    """Level scores and daily sign-in counts per user."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def __enter__(self) -> "ScoreDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get_score(self, uid: int) -> int:
        """Return a user's score, creating a zero record if there is none."""
        row = self._conn.execute("SELECT score FROM score WHERE uid = ?", (uid,)).fetchone()
        if row is None:
            with self._conn:
                self._conn.execute("INSERT INTO score (uid, score) VALUES (?, 0)", (uid,))
            return 0
        return row[0]

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update a user's score."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> SignIn:
        """Return a user's sign-in record, creating an empty one if there is none."""
        row = self._conn.execute(
            "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
        ).fetchone()
        if row is None:
            now = datetime.now()
            with self._conn:
                self._conn.execute(
                    "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, 0, ?)",
                    (uid, _stamp(now)),
                )
            return SignIn(uid, 0, now)
        return SignIn(uid, row[0], datetime.fromisoformat(row[1]))

    def set_sign_in_count(self, uid: int, count: int) -> None:
        """Insert or update a user's sign-in count, stamping the current time."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, _stamp(datetime.now())),
            )

    def top_scores(self, n: int) -> list[ScoreEntry]:
        """Return the ``n`` highest scores, highest first."""
        rows = self._conn.execute(
            "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
        ).fetchall()
        return [ScoreEntry(uid, score) for uid, score in rows]

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


def get_rank(count: int) -> int:
    """Return the level reached with a score, or -1 beyond the table."""
    for rank, threshold in enumerate(RANK_ARRAY):
        if count == threshold:
            return rank
        if count < threshold:
            return rank - 1
    return -1


def get_hour_word(hour: int) -> str:
    """Return the greeting for an hour of the day."""
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def next_rank_score(rank: int) -> int:
    """Return the score needed for the level after ``rank``."""
    if rank < len(RANK_ARRAY) - 1:
        return RANK_ARRAY[rank + 1]
    return SCORE_MAX