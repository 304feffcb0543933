"""Japanese grammar notes: storage, random look-up and command matching."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

_CHARS = "[0-9A-Za-zぁ-んァ-ヶ～]"
_TAG_QUERY = re.compile(r"日语语法[\t\n\f\r ]?(" + _CHARS + "{1,6})")
_KEYWORD_QUERY = re.compile(r"搜索日语语法[\t\n\f\r ]?(" + _CHARS + "{1,25})")

_COLUMNS = (
    "id", "tag", "name", "pronunciation", "usage",
    "meaning", "explanation", "example", "grammar_url",
)


@dataclass(frozen=True)
class Grammar:
    """One grammar note."""

    id: int
    tag: str = ""
    name: str = ""
    pronunciation: str = ""
    usage: str = ""
    meaning: str = ""
    explanation: str = ""
    example: str = ""
    grammar_url: str = ""

    def render(self) -> str:
        """Return the note as the text sent to users."""
        return (
            f"ID:\n{self.id}\n\n标签:\n{self.tag}\n\n语法名:\n{self.name}\n\n"
            f"发音:\n{self.pronunciation}\n\n用法:\n{self.usage}\n\n意思:\n{self.meaning}\n\n"
            f"解说:\n{self.explanation}\n\n示例:\n{self.example}"
        )


class GrammarDB:
    """Grammar notes stored in a ``grammar`` table."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS grammar (id INTEGER PRIMARY KEY, tag TEXT, "
                "name TEXT, pronunciation TEXT, usage TEXT, meaning TEXT, "
                "explanation TEXT, example TEXT, grammar_url TEXT)"
            )

    def __enter__(self) -> "GrammarDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _random(self, where: str, params: tuple) -> Optional[Grammar]:
        row = self._conn.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM grammar WHERE {where} ORDER BY RANDOM() LIMIT 1",
            params,
        ).fetchone()
        if row is None:
            return None
        return Grammar(*(("" if v is None else v) for v in row))

    def random_by_tag(self, tag: str) -> Optional[Grammar]:
        """Return a random note whose tag contains ``tag``, or None."""
        return self._random("tag LIKE ?", (f"%{tag}%",))

    def random_by_keyword(self, keyword: str) -> Optional[Grammar]:
        """Return a random note whose name or pronunciation contains ``keyword``, or None."""
        pattern = f"%{keyword}%"
        return self._random("(name LIKE ? OR pronunciation LIKE ?)", (pattern, pattern))

    def count(self) -> int:
        """Return the number of stored notes."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM grammar").fetchone()
        return n

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


def match_tag_query(text: str) -> Optional[str]:
    """Return the tag asked for by a ``日语语法`` command, or None."""
    m = _TAG_QUERY.fullmatch(text)
    return m.group(1) if m else None


def match_keyword_query(text: str) -> Optional[str]:
    """Return the keyword asked for by a ``搜索日语语法`` command, or None."""
    m = _KEYWORD_QUERY.fullmatch(text)
    return m.group(1) if m else None