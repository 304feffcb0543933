"""Wording of image classification scores as short verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

THRESHOLD = 0.3
HSO_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"


@dataclass(frozen=True)
class Picture:
    """Class probabilities reported by an image classifier."""

    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0


def _flags(p: Picture) -> list[str]:
    labels = []
    if p.hentai > THRESHOLD:
        labels.append(" hentai")
    if p.porn > THRESHOLD:
        labels.append(" porn")
    if p.sexy > THRESHOLD:
        labels.append(" hso")
    return labels


def judge(p: Picture) -> str:
    """Return the verdict sent in reply to an explicit rating request."""
    if p.neutral > THRESHOLD:
        return "普通哦"
    if p.drawings > THRESHOLD or p.neutral < THRESHOLD:
        kind = "二次元"
    else:
        kind = "三次元"
    return kind + "".join(_flags(p))


def auto_judge(p: Picture) -> Optional[str]:
    """Return the verdict for automatic rating, or None when nothing is worth saying."""
    if p.neutral > THRESHOLD:
        return None
    kind = "二次元" if p.drawings > THRESHOLD else "三次元"
    flags = _flags(p)
    if not flags:
        return None
    return kind + "".join(flags)