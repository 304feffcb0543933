"""Reincarnation simulator: weighted choice of birthplace and gender."""

from __future__ import annotations

import bisect
import json
from typing import Any, Iterable, Union

FAIL_TEXT = "投胎失败！\n您没能活到出生，祝您下次好运！"
_SUCCESS_LIMIT = 1 << 27


class WeightedChooser:
    """Pick items at random in proportion to integer weights."""

    def __init__(self, choices: Iterable[tuple[Any, int]]):
        self._items: list[Any] = []
        self._totals: list[int] = []
        total = 0
        for item, weight in choices:
            weight = int(weight)
            if weight < 0:
                raise ValueError(f"negative weight for {item!r}")
            total += weight
            self._items.append(item)
            self._totals.append(total)
        if total < 1:
            raise ValueError("no valid choices")
        self._total = total

    def pick(self, rng) -> Any:
        """Return one item, drawing randomness from ``rng``."""
        r = rng.randrange(self._total) + 1
        return self._items[bisect.bisect_left(self._totals, r)]


def load_rates(data: Union[bytes, str]) -> WeightedChooser:
    """Build an area chooser from a JSON list of ``{"name", "weight"}`` objects."""
    areas = json.loads(data)
    return WeightedChooser((a["name"], int(a["weight"] * 1e9)) for a in areas)


def gender_chooser() -> WeightedChooser:
    """Return the chooser for the gender at birth."""
    return WeightedChooser([("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001)])


_GENDER = gender_chooser()


def reborn_text(rng, areas: WeightedChooser) -> str:
    """Return the outcome of one reincarnation attempt."""
    if rng.randrange(1 << 31) > _SUCCESS_LIMIT:
        return f"投胎成功！\n您出生在 {areas.pick(rng)}, 是 {_GENDER.pick(rng)}。"
    return FAIL_TEXT