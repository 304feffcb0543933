"""Storage of VTuber voice quotations in three category levels."""

from __future__ import annotations

import json
import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

VTB_LIST_URL = "https://vtbkeyboard.moe/api/get_vtb_list"
VTB_PAGE_URL = "https://vtbkeyboard.moe/api/get_vtb_page?uid="

FIRST_HEADER = "请选择一个vtb并发送序号:\n"
SECOND_HEADER = "请选择一个语录类别并发送序号:\n"
THIRD_HEADER = "请选择一个语录并发送序号:\n"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS first_category ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, first_category_index INTEGER, "
    "first_category_name TEXT, first_category_uid TEXT, "
    "first_category_description TEXT, first_category_icon_path TEXT)",
    "CREATE TABLE IF NOT EXISTS second_category ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, second_category_index INTEGER, "
    "first_category_uid TEXT, second_category_name TEXT, "
    "second_category_author TEXT, second_category_description TEXT)",
    "CREATE TABLE IF NOT EXISTS third_category ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, third_category_index INTEGER, "
    "second_category_index INTEGER, first_category_uid TEXT, "
    "third_category_name TEXT, third_category_path TEXT, "
    "third_category_author TEXT, third_category_description TEXT)",
)

_FIRST_COLUMNS = (
    "first_category_index, first_category_name, first_category_uid, "
    "first_category_description, first_category_icon_path"
)
_THIRD_COLUMNS = (
    "third_category_index, second_category_index, first_category_uid, "
    "third_category_name, third_category_path, third_category_author, "
    "third_category_description"
)

_UNICODE_ESCAPE = re.compile(r"\\u(.{0,4})", re.DOTALL)
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")


@dataclass(frozen=True)
class FirstCategory:
    """A VTuber."""

    index: int
    name: str
    uid: str
    description: str = ""
    icon_path: str = ""


@dataclass(frozen=True)
class ThirdCategory:
    """A single voice quotation."""

    index: int
    second_category_index: int
    first_category_uid: str
    name: str
    path: str = ""
    author: str = ""
    description: str = ""


def decode_escaped_unicode(text: Union[bytes, str]) -> str:
    """Turn literal ``\\uXXXX`` sequences into the characters they name."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    def replace(m: re.Match) -> str:
        digits = m.group(1)
        if not _HEX4.fullmatch(digits):
            raise ValueError(f"invalid unicode escape: \\u{digits}")
        code = int(digits, 16)
        if 0xD800 <= code <= 0xDFFF:
            raise ValueError(f"invalid unicode escape: \\u{digits}")
        return chr(code)

    return _UNICODE_ESCAPE.sub(replace, text)


def _get(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _parse(data: Union[bytes, str]) -> Any:
    return json.loads(decode_escaped_unicode(data), strict=False)


class VtbDB:
    """VTubers, their quotation categories and the quotations themselves."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def __enter__(self) -> "VtbDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _first_uid_by_index(self, first_index: int) -> str:
        row = self._conn.execute(
            "SELECT first_category_uid FROM first_category "
            "WHERE first_category_index = ? ORDER BY id LIMIT 1",
            (first_index,),
        ).fetchone()
        return "" if row is None or row[0] is None else row[0]

    def first_category_message(self) -> str:
        """Return the numbered list of all VTubers."""
        rows = self._conn.execute(
            "SELECT first_category_index, first_category_name FROM first_category ORDER BY id"
        ).fetchall()
        return FIRST_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def second_category_message(self, first_index: int) -> str:
        """Return the numbered categories of one VTuber, or "" if it has none."""
        uid = self._first_uid_by_index(first_index)
        rows = self._conn.execute(
            "SELECT second_category_index, second_category_name FROM second_category "
            "WHERE first_category_uid = ? ORDER BY id",
            (uid,),
        ).fetchall()
        if not rows:
            return ""
        return SECOND_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def third_category_message(self, first_index: int, second_index: int) -> str:
        """Return the numbered quotations of one category, or "" if it has none."""
        uid = self._first_uid_by_index(first_index)
        rows = self._conn.execute(
            "SELECT third_category_index, third_category_name FROM third_category "
            "WHERE first_category_uid = ? AND second_category_index = ? ORDER BY id",
            (uid, second_index),
        ).fetchall()
        if not rows:
            return ""
        return THIRD_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def third_category(
        self, first_index: int, second_index: int, third_index: int
    ) -> Optional[ThirdCategory]:
        """Return the quotation at the given indices, or None."""
        uid = self._first_uid_by_index(first_index)
        row = self._conn.execute(
            f"SELECT {_THIRD_COLUMNS} FROM third_category WHERE first_category_uid = ? "
            "AND second_category_index = ? AND third_category_index = ? LIMIT 1",
            (uid, second_index, third_index),
        ).fetchone()
        return None if row is None else ThirdCategory(*row)

    def random_vtb(self, rng) -> Optional[ThirdCategory]:
        """Return a quotation chosen with ``rng``, or None if there are none."""
        (count,) = self._conn.execute("SELECT COUNT(*) FROM third_category").fetchone()
        if count == 0:
            return None
        row = self._conn.execute(
            f"SELECT {_THIRD_COLUMNS} FROM third_category LIMIT 1 OFFSET ?",
            (rng.randrange(count),),
        ).fetchone()
        return None if row is None else ThirdCategory(*row)

    def first_category_by_uid(self, uid: str) -> Optional[FirstCategory]:
        """Return the VTuber with a uid, or None."""
        row = self._conn.execute(
            f"SELECT {_FIRST_COLUMNS} FROM first_category WHERE first_category_uid = ? LIMIT 1",
            (uid,),
        ).fetchone()
        return None if row is None else FirstCategory(*row)

    def store_vtb_list(self, data: Union[bytes, str]) -> list[str]:
        """Store the VTuber list from a list response; return the uids in order."""
        items = _parse(data)
        if not isinstance(items, list):
            return []
        uids = []
        with self._conn:
            for i, item in enumerate(items):
                name = _text(_get(item, "name"))
                description = _text(_get(item, "description"))
                icon_path = _text(_get(item, "icon_path"))
                uid = _text(_get(item, "uid"))
                exists = self._conn.execute(
                    "SELECT 1 FROM first_category WHERE first_category_uid = ? LIMIT 1", (uid,)
                ).fetchone()
                if exists is None:
                    self._conn.execute(
                        f"INSERT INTO first_category ({_FIRST_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                        (i, name, uid, description, icon_path),
                    )
                else:
                    self._conn.execute(
                        "UPDATE first_category SET first_category_index = ?, "
                        "first_category_name = ?, first_category_description = ?, "
                        "first_category_icon_path = ? WHERE first_category_uid = ?",
                        (i, name, description, icon_path, uid),
                    )
                uids.append(uid)
        return uids

    def store_vtb(self, uid: str, data: Union[bytes, str]) -> None:
        """Store the categories and quotations of one VTuber from a page response."""
        voices = _get(_parse(data), "data", "voices")
        if not isinstance(voices, list):
            return
        with self._conn:
            for second_index, second in enumerate(voices):
                self._store_second(uid, second_index, second)
                voice_list = _get(second, "voiceList")
                if not isinstance(voice_list, list):
                    continue
                for third_index, third in enumerate(voice_list):
                    self._store_third(uid, second_index, third_index, third)

    def _store_second(self, uid: str, second_index: int, item: Any) -> None:
        name = _text(_get(item, "categoryName"))
        author = _text(_get(item, "author"))
        description = _text(_get(item, "categoryDescription", "zh-CN"))
        exists = self._conn.execute(
            "SELECT 1 FROM second_category WHERE first_category_uid = ? "
            "AND second_category_index = ? LIMIT 1",
            (uid, second_index),
        ).fetchone()
        if exists is None:
            self._conn.execute(
                "INSERT INTO second_category (second_category_index, first_category_uid, "
                "second_category_name, second_category_author, second_category_description) "
                "VALUES (?, ?, ?, ?, ?)",
                (second_index, uid, name, author, description),
            )
        else:
            self._conn.execute(
                "UPDATE second_category SET second_category_name = ?, "
                "second_category_author = ?, second_category_description = ? "
                "WHERE first_category_uid = ? AND second_category_index = ?",
                (name, author, description, uid, second_index),
            )

    def _store_third(self, uid: str, second_index: int, third_index: int, item: Any) -> None:
        name = _text(_get(item, "name"))
        description = _text(_get(item, "description", "zh-CN"))
        path = _text(_get(item, "path"))
        author = _text(_get(item, "author"))
        key = (uid, second_index, third_index)
        exists = self._conn.execute(
            "SELECT 1 FROM third_category WHERE first_category_uid = ? "
            "AND second_category_index = ? AND third_category_index = ? LIMIT 1",
            key,
        ).fetchone()
        if exists is None:
            self._conn.execute(
                f"INSERT INTO third_category ({_THIRD_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (third_index, second_index, uid, name, path, author, description),
            )
        else:
            self._conn.execute(
                "UPDATE third_category SET third_category_name = ?, "
                "third_category_description = ?, third_category_path = ?, "
                "third_category_author = ? WHERE first_category_uid = ? "
                "AND second_category_index = ? AND third_category_index = ?",
                (name, description, path, author, *key),
            )

    def close(self) -> None:
        """Close the database."""
        self._conn.close()