from datetime import date

import pytest

from zbplugins.nativewife import (
    NO_NAME,
    NO_WIFE,
    WifeStore,
    daily_index,
    extract_name,
    parse_permission_toggle,
)

TODAY = date(2023, 1, 15)


@pytest.fixture
def store(tmp_path):
    return WifeStore(tmp_path)


def test_draw_without_wives_raises(store):
    with pytest.raises(LookupError) as exc:
        store.draw(1, "nick", TODAY)
    assert str(exc.value) == NO_WIFE


def test_single_wife_belongs_to_everyone(store):
    store.add(1, "alice", b"img")
    caption, path = store.draw(1, "nick", TODAY)
    assert caption == "大家的wife都是alice\n"
    assert path.read_bytes() == b"img"


def test_multiple_wives_draw_is_stable(store):
    names = {"alice", "bob", "carol"}
    for n in names:
        store.add(7, n, n.encode())
    caption, path = store.draw(7, "nick", TODAY)
    assert path.name in names
    assert caption == f"nick的wife是{path.name}\n"
    assert store.draw(7, "nick", TODAY) == (caption, path)


def test_groups_are_separate(store):
    store.add(1, "alice", b"a")
    with pytest.raises(LookupError):
        store.draw(2, "nick", TODAY)


def test_remove_deletes_file(store):
    path = store.add(1, "alice", b"a")
    store.remove(1, "alice")
    assert not path.exists()


def test_remove_missing_raises(store):
    with pytest.raises(FileNotFoundError):
        store.remove(1, "nobody")


def test_add_without_name_raises(store):
    with pytest.raises(ValueError) as exc:
        store.add(1, "", b"a")
    assert str(exc.value) == NO_NAME


@pytest.mark.parametrize("count", [1, 2, 5, 50])
def test_daily_index_in_range_and_deterministic(count):
    i = daily_index("nick", TODAY, count)
    assert 0 <= i < count
    assert daily_index("nick", TODAY, count) == i


def test_daily_index_rejects_zero():
    with pytest.raises(ValueError):
        daily_index("nick", TODAY, 0)


def test_extract_name_strips_spaces_and_separators():
    assert extract_name("添加wife a/b\\c", "添加wife") == "abc"


def test_extract_name_after_last_command():
    assert extract_name("删除wife 删除wife 老婆", "删除wife") == "老婆"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("让所有人均可添加wife", True),
        ("授予所有人均可添加wife", True),
        ("不让所有人均可添加wife", False),
        ("撤销 所有人均可添加wife", False),
        ("随便所有人均可添加wife", None),
    ],
)
def test_parse_permission_toggle(text, expected):
    assert parse_permission_toggle(text) is expected