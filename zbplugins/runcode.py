"""Parsing of online code-run commands and trimming of their output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_COMMAND = re.compile(r"^>runcode(raw)?\s(.+?)\s([\s\S]+)\Z")
_ELLIPSIS = "\n............\n............"
MAX_LINES = 30
MAX_CHARS = 1000


@dataclass(frozen=True)
class RunRequest:
    """A parsed run command."""

    raw: bool
    language: str
    code: str


def _unescape_cq_text(text: str) -> str:
    return text.replace("&#91;", "[").replace("&#93;", "]").replace("&amp;", "&")


def cut_too_long(text: str) -> str:
    """Truncate output with more than 30 line breaks or more than 1000 characters."""
    count = 0
    for i, ch in enumerate(text):
        if ch == "\r" and i < len(text) - 1 and text[i + 1] == "\n":
            pass  # counted when the "\n" is reached
        elif ch in "\n\r":
            count += 1
        if count > MAX_LINES or i > MAX_CHARS:
            return text[: i - 1] + _ELLIPSIS
    return text


def parse_command(text: str) -> Optional[RunRequest]:
    """Parse a ``>runcode`` command; return None if the text is not one."""
    m = _COMMAND.match(text)
    if m is None:
        return None
    return RunRequest(
        raw=m.group(1) is not None,
        language=m.group(2).lower(),
        code=_unescape_cq_text(m.group(3)),
    )