from datetime import date

import pytest

from zbplugins.score import (
    RANK_ARRAY,
    SCORE_MAX,
    ScoreDB,
    ScoreEntry,
    get_hour_word,
    get_rank,
    next_rank_score,
)


@pytest.fixture
def db(tmp_path):
    with ScoreDB(tmp_path / "score.db") as d:
        yield d


def test_rank_at_thresholds():
    for rank, threshold in enumerate(RANK_ARRAY):
        assert get_rank(threshold) == rank


def test_rank_between_thresholds():
    for rank, threshold in enumerate(RANK_ARRAY[:-1]):
        assert get_rank(threshold + 1) == rank
        assert get_rank(RANK_ARRAY[rank + 1] - 1) == rank


def test_rank_out_of_table():
    assert get_rank(SCORE_MAX + 1) == -1
    assert get_rank(-1) == -1


def test_next_rank_score():
    for rank in range(len(RANK_ARRAY) - 1):
        assert next_rank_score(rank) == RANK_ARRAY[rank + 1]
    assert next_rank_score(len(RANK_ARRAY) - 1) == SCORE_MAX


@pytest.mark.parametrize(
    "hour, word",
    [(6, "早上好"), (12, "中午好"), (14, "下午好"), (19, "晚上好"), (0, "凌晨好"), (5, "凌晨好"), (24, "")],
)
def test_hour_word(hour, word):
    assert get_hour_word(hour) == word


def test_new_user_score_is_zero(db):
    assert db.get_score(42) == 0
    assert db.top_scores(10) == [ScoreEntry(42, 0)]


def test_score_round_trip(db):
    db.set_score(7, 15)
    assert db.get_score(7) == 15
    db.set_score(7, 16)
    assert db.get_score(7) == 16


def test_top_scores_ordered_and_limited(db):
    for uid, score in [(1, 5), (2, 50), (3, 20), (4, 35)]:
        db.set_score(uid, score)
    top = db.top_scores(3)
    assert len(top) == 3
    scores = [e.score for e in top]
    assert scores == sorted(scores, reverse=True)
    assert top[0] == ScoreEntry(2, 50)


def test_sign_in_default_and_update(db):
    first = db.get_sign_in(9)
    assert first.count == 0
    assert first.updated_at.date() == date.today()
    db.set_sign_in_count(9, first.count + 1)
    again = db.get_sign_in(9)
    assert again.count == first.count + 1
    assert again.updated_at >= first.updated_at


def test_persists_across_reopen(tmp_path):
    path = tmp_path / "s.db"
    with ScoreDB(path) as d:
        d.set_score(3, 77)
    with ScoreDB(path) as d:
        assert d.get_score(3) == 77