"""Tarot decks: drawing cards, looking them up and laying out spreads."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Optional, Union

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
REASONS = ("您抽到的是~\n", "锵锵锵，塔罗牌的预言是~\n", "诶，让我看看您抽到了~\n")
POSITIONS = ("『正位』", "『逆位』")
MAX_DRAW = 20
MAJOR_ARCANA = 22
_REVERSE_DIR = "Reverse/"


@dataclass(frozen=True)
class Card:
    """One tarot card with its upright and reversed meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards it takes and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: tuple[tuple[str, ...], ...] = ()


Draw = tuple[Card, bool]


def card_range(kind: str) -> tuple[int, int]:
    """Return (first card number, number of cards) for a deck kind."""
    if "小" in kind:
        return 22, 55
    if kind == "混合":
        return 0, 77
    return 0, MAJOR_ARCANA


def parse_draw_count(match: str) -> int:
    """Return how many cards a ``n张`` prefix asks for; an empty prefix means one."""
    if not match:
        return 1
    digits = match[:-1] if match.endswith("张") else match
    n = int(digits)
    if n <= 0:
        raise ValueError("张数必须为正")
    if n > MAX_DRAW:
        raise ValueError("抽取张数过多")
    return n


def _image_url(card: Card, reversed_: bool) -> str:
    return BED + (_REVERSE_DIR if reversed_ else "") + card.img_url


def _image_name(card: Card, reversed_: bool) -> str:
    return ("Reverse" if reversed_ else "") + card.name


def _meaning(card: Card, reversed_: bool) -> str:
    return card.reverse_description if reversed_ else card.description


class TarotDeck:
    """A full deck of numbered cards together with the known spreads."""

    def __init__(self, cards: Mapping[str, Card], formations: Mapping[str, Formation]):
        self._cards = dict(cards)
        self._formations = dict(formations)
        self._by_name = {card.name: card for card in self._cards.values()}

    @classmethod
    def from_json(cls, tarots: Union[bytes, str], formations: Union[bytes, str]) -> "TarotDeck":
        """Build a deck from the card and spread JSON documents."""
        cards = {}
        for key, entry in json.loads(tarots).items():
            info = entry.get("info", {})
            cards[key] = Card(
                name=entry.get("name", ""),
                description=info.get("description", ""),
                reverse_description=info.get("reverseDescription", ""),
                img_url=info.get("imgUrl", ""),
            )
        spreads = {}
        for name, entry in json.loads(formations).items():
            spreads[name] = Formation(
                cards_num=int(entry.get("cards_num", 0)),
                is_cut=bool(entry.get("is_cut", False)),
                represent=tuple(tuple(row) for row in entry.get("represent", [])),
            )
        return cls(cards, spreads)

    @property
    def formation_names(self) -> list[str]:
        """Names of the known spreads."""
        return list(self._formations)

    def _card(self, number: int) -> Card:
        try:
            return self._cards[str(number)]
        except KeyError:
            raise LookupError(f"no card numbered {number}") from None

    def draw(self, count: int, kind: str, rng) -> list[Draw]:
        """Draw ``count`` distinct cards of a kind; each comes with whether it is reversed."""
        start, length = card_range(kind)
        if count < 1:
            raise ValueError("张数必须为正")
        if count > length:
            raise ValueError("抽取张数过多")
        if count == 1:
            picks = [rng.randrange(length)]
        else:
            picks = rng.sample(range(length), count)
        return [(self._card(start + j), rng.randrange(2) == 1) for j in picks]

    def lookup(self, name: str) -> Optional[Card]:
        """Return the card with a name, or None."""
        return self._by_name.get(name)

    def card_list_text(self) -> str:
        """Return the listing of card names sent when a look-up finds nothing."""
        majors = [self._card(i).name for i in range(MAJOR_ARCANA)]
        return (
            "塔罗牌列表\n大阿尔卡纳:\n"
            + " ".join(majors[:7])
            + "\n"
            + " ".join(majors[7:14])
            + "\n"
            + " ".join(majors[14:22])
            + "\n小阿尔卡纳:\n[圣杯|星币|宝剑|权杖] [0-10|侍从|骑士|王后|国王]"
        )

    def spread(self, kind: str, formation: str, rng) -> tuple[list[Draw], str]:
        """Lay out a spread; return the drawn cards and the text describing each position."""
        info = self._formations.get(formation)
        if info is None:
            raise LookupError(
                f"没有找到{formation}噢~\n现有牌阵列表: \n" + "\n".join(self._formations)
            )
        draws = self.draw(info.cards_num, kind, rng) if info.cards_num > 0 else []
        lines = []
        for i, (card, reversed_) in enumerate(draws):
            lines.append(
                f"{info.represent[0][i]}:{POSITIONS[reversed_]}的『{card.name}』\n"
                f"其释义为: \n{_meaning(card, reversed_)}\n"
            )
        return draws, "".join(lines)