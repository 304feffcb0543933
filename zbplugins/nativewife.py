"""Per-group local collection of wife pictures with a daily draw."""

from __future__ import annotations

import hashlib
import os
import random
import struct
from datetime import date
from pathlib import Path
from typing import Optional, Union

NO_WIFE = "一个wife也没有哦~"
NO_NAME = "没有找到wife的名字！"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    sign = "-" if n < 0 else ""
    n = abs(n)
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_DIGITS[r])
    return sign + "".join(reversed(out))


def daily_index(nickname: str, today: date, count: int) -> int:
    """Return the index a user draws today, stable for the same name and day."""
    if count < 1:
        raise ValueError("count must be positive")
    digest = hashlib.md5(f"{nickname}{today.year}{today.month}{today.day}".encode()).digest()
    (seed,) = struct.unpack("<Q", digest[:8])
    return random.Random(seed).randrange(count)


def extract_name(text: str, command: str) -> str:
    """Return the name following the last ``command`` in the text, path separators removed."""
    name = text.replace(" ", "")
    idx = name.rfind(command)
    if idx < 0:
        return ""
    name = name[idx + len(command):]
    return name.replace("/", "").replace("\\", "")


def parse_permission_toggle(text: str) -> Optional[bool]:
    """Return whether everyone may add wives, as asked by the text, or None if unclear."""
    text = text.replace(" ", "")
    idx = text.rfind("所有人均可添加wife")
    if idx < 0:
        return None
    verb = text[:idx]
    if verb in ("设置", "授予", "让"):
        return True
    if verb in ("取消", "撤销", "不让"):
        return False
    return None


class WifeStore:
    """Wife pictures stored in one folder per group."""

    def __init__(self, base: Union[str, Path]):
        self.base = Path(base)

    def _folder(self, group_id: int) -> Path:
        return self.base / _base36(group_id)

    @staticmethod
    def _check_name(name: str) -> None:
        if not name or "/" in name or "\\" in name:
            raise ValueError(NO_NAME)

    def draw(self, group_id: int, nickname: str, today: date) -> tuple[str, Path]:
        """Return (caption, picture path) for today's wife of a user."""
        folder = self._folder(group_id)
        try:
            names = sorted(entry.name for entry in os.scandir(folder))
        except OSError:
            raise LookupError(NO_WIFE) from None
        if not names:
            raise LookupError(NO_WIFE)
        if len(names) == 1:
            return f"大家的wife都是{names[0]}\n", folder / names[0]
        name = names[daily_index(nickname, today, len(names))]
        return f"{nickname}的wife是{name}\n", folder / name

    def add(self, group_id: int, name: str, data: bytes) -> Path:
        """Store a picture under a name; return its path."""
        self._check_name(name)
        folder = self._folder(group_id)
        folder.mkdir(mode=0o755, parents=True, exist_ok=True)
        path = folder / name
        path.write_bytes(data)
        return path

    def remove(self, group_id: int, name: str) -> None:
        """Delete a stored picture; raise FileNotFoundError if there is none."""
        self._check_name(name)
        os.remove(self._folder(group_id) / name)