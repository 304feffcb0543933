"""Good-night / good-morning bookkeeping: sleep order and durations per group."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta
from pathlib import Path
from typing import Union

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_manage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    group_id INTEGER,
    user_id INTEGER,
    sleep_time TEXT
)
"""

_HOUR_US = 60 * 60 * 1_000_000
_MINUTE_US = 60 * 1_000_000
_SECOND_US = 1_000_000


def _stamp(t: datetime) -> str:
    return t.isoformat(sep=" ", timespec="microseconds")


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return -q if a < 0 else q


class SleepDB:
    """Per-group record of the last time each member said good night or good morning."""

    def __init__(self, path: Union[str, Path]):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.execute(_SCHEMA)

    def __enter__(self) -> "SleepDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _touch(self, gid: int, uid: int, now: datetime) -> timedelta:
        row = self._conn.execute(
            "SELECT sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
            "ORDER BY id LIMIT 1",
            (gid, uid),
        ).fetchone()
        with self._conn:
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
                return timedelta(0)
            self._conn.execute(
                "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                (_stamp(now), gid, uid),
            )
        return now - datetime.fromisoformat(row[0])

    def _position(self, gid: int, now: datetime, since: datetime) -> int:
        (count,) = self._conn.execute(
            "SELECT COUNT(*) FROM sleep_manage WHERE group_id = ? "
            "AND sleep_time <= ? AND sleep_time >= ?",
            (gid, _stamp(now), _stamp(since)),
        ).fetchone()
        return count

    def sleep(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record a good night; return (place in tonight's order, time awake)."""
        clock = timedelta(minutes=now.minute, seconds=now.second)
        if now.hour >= 21:
            since = now - timedelta(hours=now.hour - 21) - clock
        elif now.hour <= 3:
            since = now - timedelta(hours=3 + now.hour) - clock
        else:
            since = datetime.min
        awake = self._touch(gid, uid, now)
        return self._position(gid, now, since), awake

    def get_up(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record a good morning; return (place in today's order, time asleep)."""
        clock = timedelta(minutes=now.minute, seconds=now.second)
        since = now - timedelta(hours=now.hour - 6) - clock
        slept = self._touch(gid, uid, now)
        return self._position(gid, now, since), slept

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


def time_duration(delta: timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds."""
    total = delta // timedelta(microseconds=1)
    hour = _trunc_div(total, _HOUR_US)
    minute = _trunc_div(total - hour * _HOUR_US, _MINUTE_US)
    second = _trunc_div(total - hour * _HOUR_US - minute * _MINUTE_US, _SECOND_US)
    return hour, minute, second


def is_morning(now: datetime) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= now.hour <= 12


def is_evening(now: datetime) -> bool:
    """Good nights count from 21 o'clock to 3 o'clock."""
    return now.hour >= 21 or now.hour <= 3


def _is_blank(duration: timedelta) -> bool:
    hour, minute, second = time_duration(duration)
    return (hour == 0 and minute == 0 and second == 0) or hour >= 24


def morning_reply(position: int, duration: timedelta) -> str:
    """Return the reply to a good morning."""
    if _is_blank(duration):
        return f"早安成功！你是今天第{position}个起床的"
    hour, minute, second = time_duration(duration)
    return f"早安成功！你的睡眠时长为{hour}时{minute}分{second}秒,你是今天第{position}个起床的"


def evening_reply(position: int, duration: timedelta) -> str:
    """Return the reply to a good night."""
    if _is_blank(duration):
        return f"晚安成功！你是今天第{position}个睡觉的"
    hour, minute, second = time_duration(duration)
    return f"晚安成功！你的清醒时长为{hour}时{minute}分{second}秒,你是今天第{position}个睡觉的"