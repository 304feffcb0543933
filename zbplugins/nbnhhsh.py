"""Query matching and answer parsing for abbreviation look-ups."""

from __future__ import annotations

import json
import re
from typing import Iterable, Optional, Union

GUESS_URL = "https://lab.magiconch.com/api/nbnhhsh/guess"
_QUERY = re.compile(r"[?？]{1,2} ?([a-z0-9]+)")


def match_query(text: str) -> Optional[str]:
    """Return the abbreviation asked about, or None."""
    m = _QUERY.fullmatch(text)
    return m.group(1) if m else None


def parse_guess(body: Union[bytes, str]) -> list[str]:
    """Return the expansions from a guess response."""
    try:
        doc = json.loads(body)
    except (ValueError, TypeError):
        return []
    if not isinstance(doc, list) or not doc or not isinstance(doc[0], dict):
        return []
    first = doc[0]
    values = first["trans"] if "trans" in first else first.get("inputting")
    if not isinstance(values, list):
        return []
    return [v if isinstance(v, str) else json.dumps(v, ensure_ascii=False) for v in values]


def format_reply(keyword: str, values: Iterable[str]) -> str:
    """Return the reply line for a keyword and its expansions."""
    return keyword + ": " + ", ".join(values)