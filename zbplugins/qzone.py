"""Storage of QQ zone logins and confession-wall posts."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Optional, Union

LOVE_TAG = "表白"
PAGE_SIZE = 5

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS qzone_config ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, qq INTEGER UNIQUE NOT NULL, cookie TEXT)",
    "CREATE TABLE IF NOT EXISTS emotion ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, created_at TEXT, updated_at TEXT, "
    "anonymous INTEGER, qq INTEGER, msg TEXT, status INTEGER, tag TEXT)",
)
_COLUMNS = "id, qq, msg, status, tag, anonymous, created_at"


class Status(IntEnum):
    """Review state of a post; ALL selects every state in queries."""

    ALL = 0
    WAIT = 1
    AGREE = 2
    DISAGREE = 3


_STATUS_TEXT = {Status.WAIT: "审核中", Status.AGREE: "同意", Status.DISAGREE: "拒绝"}


def _stamp(t: datetime) -> str:
    return t.isoformat(sep=" ", timespec="microseconds")


def _format(t: Optional[datetime]) -> str:
    t = t or datetime.min
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )


@dataclass
class Emotion:
    """A post submitted to the confession wall."""

    qq: int
    msg: str
    status: int = Status.WAIT
    tag: str = LOVE_TAG
    anonymous: bool = False
    id: int = 0
    created_at: Optional[datetime] = None

    def text_brief(self) -> str:
        """Return the short description shown to reviewers."""
        text = f"序号: {self.id}\nQQ: {self.qq}\n创建时间: {_format(self.created_at)}\n"
        if self.status in _STATUS_TEXT:
            text += f"状态: {_STATUS_TEXT[Status(self.status)]}\n"
        return text + ("匿名: 是" if self.anonymous else "匿名: 否")


def _row_to_emotion(row: tuple) -> Emotion:
    eid, qq, msg, status, tag, anonymous, created = row
    try:
        status = Status(status)
    except ValueError:
        pass
    return Emotion(
        qq=qq,
        msg=msg or "",
        status=status,
        tag=tag or "",
        anonymous=bool(anonymous),
        id=eid,
        created_at=datetime.fromisoformat(created) if created else None,
    )


class QzoneDB:
    """Login cookies per account and the posts of the confession wall."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def __enter__(self) -> "QzoneDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def insert_or_update(self, qq: int, cookie: str) -> None:
        """Store the login cookie of an account, replacing any earlier one."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO qzone_config (qq, cookie) VALUES (?, ?) "
                "ON CONFLICT(qq) DO UPDATE SET cookie = excluded.cookie",
                (qq, cookie),
            )

    def get_by_uin(self, qq: int) -> str:
        """Return the stored cookie of an account; raise LookupError if not logged in."""
        row = self._conn.execute(
            "SELECT cookie FROM qzone_config WHERE qq = ? LIMIT 1", (qq,)
        ).fetchone()
        if row is None:
            raise LookupError(f"account {qq} has not logged in")
        return row[0] or ""

    def save_emotion(self, e: Emotion) -> int:
        """Store a post and return its new id."""
        created = e.created_at or datetime.now()
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO emotion (created_at, updated_at, anonymous, qq, msg, status, tag) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (_stamp(created), _stamp(created), int(e.anonymous), e.qq, e.msg,
                 int(e.status), e.tag),
            )
        return cur.lastrowid

    def emotions_by_ids(self, ids: Iterable[int]) -> list[Emotion]:
        """Return the posts with the given ids."""
        ids = list(ids)
        if not ids:
            return []
        marks = ", ".join("?" for _ in ids)
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM emotion WHERE id IN ({marks}) ORDER BY id", ids
        ).fetchall()
        return [_row_to_emotion(r) for r in rows]

    def love_emotions_by_status(self, status: int, page: int) -> list[Emotion]:
        """Return one page of confession posts, newest first; status 0 means any."""
        pattern = f"%{LOVE_TAG}%"
        if int(status) == Status.ALL:
            where, params = "tag LIKE ?", [pattern]
        else:
            where, params = "status = ? AND tag LIKE ?", [int(status), pattern]
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM emotion WHERE {where} "
            "ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
            (*params, PAGE_SIZE, page * PAGE_SIZE),
        ).fetchall()
        return [_row_to_emotion(r) for r in rows]

    def update_status(self, ids: Iterable[int], status: int) -> None:
        """Set the review state of the posts with the given ids."""
        ids = list(ids)
        if not ids:
            return
        marks = ", ".join("?" for _ in ids)
        with self._conn:
            self._conn.execute(
                f"UPDATE emotion SET status = ?, updated_at = ? WHERE id IN ({marks})",
                (int(status), _stamp(datetime.now()), *ids),
            )

    def close(self) -> None:
        """Close the database."""
        self._conn.close()