import json
import random

import pytest

from zbplugins.vtb import (
    FIRST_HEADER,
    SECOND_HEADER,
    THIRD_HEADER,
    FirstCategory,
    ThirdCategory,
    VtbDB,
    decode_escaped_unicode,
)

VTB_LIST = json.dumps(
    [
        {"name": "Alpha", "description": "first", "icon_path": "a.png", "uid": "u1"},
        {"name": "Beta", "description": "second", "icon_path": "b.png", "uid": "u2"},
    ]
)

VTB_PAGE = json.dumps(
    {
        "data": {
            "voices": [
                {
                    "categoryName": "Greetings",
                    "author": "ann",
                    "categoryDescription": {"zh-CN": "hello set"},
                    "voiceList": [
                        {"name": "hi", "path": "/v/hi.mp3", "author": "ann",
                         "description": {"zh-CN": "says hi"}},
                        {"name": "bye", "path": "/v/bye.mp3", "author": "bob",
                         "description": {"zh-CN": "says bye"}},
                    ],
                },
                {
                    "categoryName": "Songs",
                    "author": "bob",
                    "categoryDescription": {"zh-CN": "songs"},
                    "voiceList": [],
                },
            ]
        }
    }
)


@pytest.fixture
def db(tmp_path):
    with VtbDB(tmp_path / "vtb.db") as database:
        database.store_vtb_list(VTB_LIST)
        database.store_vtb("u1", VTB_PAGE)
        yield database


def test_store_vtb_list_returns_uids(tmp_path):
    with VtbDB(tmp_path / "vtb.db") as database:
        assert database.store_vtb_list(VTB_LIST) == ["u1", "u2"]


def test_store_vtb_list_non_array(tmp_path):
    with VtbDB(tmp_path / "vtb.db") as database:
        assert database.store_vtb_list('{"a": 1}') == []


def test_first_category_message(db):
    assert db.first_category_message() == FIRST_HEADER + "0. Alpha\n1. Beta\n"


def test_first_category_message_empty(tmp_path):
    with VtbDB(tmp_path / "vtb.db") as database:
        assert database.first_category_message() == FIRST_HEADER


def test_second_category_message(db):
    assert db.second_category_message(0) == SECOND_HEADER + "0. Greetings\n1. Songs\n"


def test_second_category_message_missing(db):
    assert db.second_category_message(1) == ""
    assert db.second_category_message(7) == ""


def test_third_category_message(db):
    assert db.third_category_message(0, 0) == THIRD_HEADER + "0. hi\n1. bye\n"
    assert db.third_category_message(0, 1) == ""


def test_third_category(db):
    tc = db.third_category(0, 0, 1)
    assert tc == ThirdCategory(
        index=1,
        second_category_index=0,
        first_category_uid="u1",
        name="bye",
        path="/v/bye.mp3",
        author="bob",
        description="says bye",
    )
    assert db.third_category(0, 0, 5) is None


def test_first_category_by_uid(db):
    assert db.first_category_by_uid("u2") == FirstCategory(1, "Beta", "u2", "second", "b.png")
    assert db.first_category_by_uid("nope") is None


def test_random_vtb(db):
    tc = db.random_vtb(random.Random(3))
    assert tc is not None
    assert tc.name in {"hi", "bye"}
    assert tc.first_category_uid == "u1"


def test_random_vtb_empty(tmp_path):
    with VtbDB(tmp_path / "vtb.db") as database:
        assert database.random_vtb(random.Random(0)) is None


def test_store_again_updates_without_duplicates(db):
    changed = VTB_LIST.replace("Alpha", "Gamma")
    db.store_vtb_list(changed)
    db.store_vtb("u1", VTB_PAGE.replace('"hi"', '"hey"'))
    assert db.first_category_message() == FIRST_HEADER + "0. Gamma\n1. Beta\n"
    assert db.third_category_message(0, 0) == THIRD_HEADER + "0. hey\n1. bye\n"


def test_decode_escaped_unicode():
    assert decode_escaped_unicode(r"a\u4e2db") == "a中b"
    assert decode_escaped_unicode(b"plain") == "plain"


def test_decode_escaped_unicode_invalid():
    with pytest.raises(ValueError):
        decode_escaped_unicode(r"\u12")
    with pytest.raises(ValueError):
        decode_escaped_unicode(r"\ud83d")