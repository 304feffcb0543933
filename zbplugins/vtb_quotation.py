"""Interactive three-step choice of a VTuber voice quotation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus

from zbplugins.vtb import ThirdCategory, VtbDB

MAX_ERRORS = 3
TOO_MANY_ERRORS = "输入错误太多,请重新发指令"
NOT_A_NUMBER = "请输入正确的序号，三次输入错误，指令可退出重输"
EMPTY_CHOICE = "你选择的序号没有内容，请重新选择，三次输入错误，指令可退出重输"
EMPTY_QUOTATION = "没有内容请重新选择，三次输入错误，指令可退出重输"
EXPIRED = "vtb语录指令过期"

_LAST_SEGMENT = re.compile(r".*/(.*)")


@dataclass(frozen=True)
class StepResult:
    """What to answer after one input of a quotation session."""

    reply: str = ""
    menu: Optional[str] = None
    done: bool = False
    quotation: Optional[ThirdCategory] = None
    record_url: Optional[str] = None
    record_file: Optional[str] = None


def escape_record_url(url: str) -> str:
    """Escape the last path segment of a record URL, spaces becoming ``%20``."""
    m = _LAST_SEGMENT.search(url)
    if m is None:
        return url
    segment = m.group(1)
    url = url.replace(segment, quote_plus(segment, safe=""))
    return url.replace("+", "%20")


def _ext(url: str) -> str:
    last = url[url.rfind("/") + 1:]
    dot = last.rfind(".")
    return "" if dot < 0 else last[dot:]


def record_filename(first: int, second: int, third: int, url: str) -> str:
    """Return the cache file name of a quotation's record."""
    return f"{first}-{second}-{third}{_ext(url)}"


class QuotationSession:
    """Walks a user through choosing a VTuber, a category and a quotation."""

    def __init__(self, db: VtbDB):
        self._db = db
        self._indices = [0, 0, 0]
        self._step = 0
        self._errors = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        """Whether the session has ended."""
        return self._finished

    def start(self) -> str:
        """Return the first menu: the list of VTubers."""
        return self._db.first_category_message()

    def _fail(self, reply: str, menu: Optional[str]) -> StepResult:
        self._errors += 1
        return StepResult(reply=reply, menu=menu)

    def feed(self, text: str) -> StepResult:
        """Handle one message from the user and return what to answer."""
        if self._finished:
            raise RuntimeError("session finished")
        if self._errors >= MAX_ERRORS:
            self._finished = True
            return StepResult(reply=TOO_MANY_ERRORS, done=True)
        try:
            num = int(text.strip())
        except ValueError:
            return self._fail(NOT_A_NUMBER, None)

        if self._step == 0:
            self._indices[0] = num
            menu = self._db.second_category_message(num)
            if not menu:
                return self._fail(EMPTY_CHOICE, self._db.first_category_message())
            self._step = 1
            return StepResult(menu=menu)

        if self._step == 1:
            self._indices[1] = num
            menu = self._db.third_category_message(self._indices[0], num)
            if not menu:
                return self._fail(
                    EMPTY_CHOICE, self._db.second_category_message(self._indices[0])
                )
            self._step = 2
            return StepResult(menu=menu)

        self._indices[2] = num
        first, second, third = self._indices
        quotation = self._db.third_category(first, second, third)
        if quotation is None or not quotation.path:
            self._step = 1
            return self._fail(EMPTY_QUOTATION, self._db.first_category_message())
        url = escape_record_url(quotation.path)
        self._finished = True
        return StepResult(
            reply=f"请欣赏《{quotation.name}》",
            done=True,
            quotation=quotation,
            record_url=url,
            record_file=record_filename(first, second, third, url),
        )