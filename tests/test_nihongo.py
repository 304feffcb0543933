import sqlite3

import pytest

from zbplugins.nihongo import Grammar, GrammarDB, match_keyword_query, match_tag_query

ROWS = [
    (1, "N3", "ばかり", "ばかり", "u1", "m1", "e1", "x1", "url1"),
    (2, "N2", "わけ", "わけ", "u2", "m2", "e2", "x2", "url2"),
]


@pytest.fixture
def db(tmp_path):
    path = tmp_path / "nihongo.db"
    store = GrammarDB(path)
    conn = sqlite3.connect(str(path))
    with conn:
        conn.executemany("INSERT INTO grammar VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)", ROWS)
    conn.close()
    yield store
    store.close()


def test_count(db):
    assert db.count() == len(ROWS)


def test_random_by_tag(db):
    assert db.random_by_tag("N3") == Grammar(*ROWS[0])
    assert db.random_by_tag("N5") is None


def test_random_by_keyword(db):
    assert db.random_by_keyword("わけ") == Grammar(*ROWS[1])
    assert db.random_by_keyword("ない") is None


def test_render_layout():
    text = Grammar(*ROWS[0]).render()
    assert text.startswith("ID:\n1\n\n标签:\nN3\n\n语法名:\nばかり")
    assert text.endswith("示例:\nx1")
    assert "url1" not in text


def test_match_tag_query():
    assert match_tag_query("日语语法N3") == "N3"
    assert match_tag_query("日语语法 ばかり") == "ばかり"
    assert match_tag_query("日语语法abcdefg") is None
    assert match_tag_query("日语语法") is None


def test_match_keyword_query():
    assert match_keyword_query("搜索日语语法わけ") == "わけ"
    assert match_keyword_query("搜索日语语法" + "a" * 25) == "a" * 25
    assert match_keyword_query("搜索日语语法" + "a" * 26) is None
    assert match_keyword_query("搜索日语语法漢字") is None