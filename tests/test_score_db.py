import pytest

from flappy.constants import BEST_SCORE_KEY
from flappy.score_db import PersistenceError, ScoreDatabase


def test_missing_key_reads_zero(store):
    assert store.read_best(BEST_SCORE_KEY) == 0


def test_write_then_overwrite(store):
    store.write_best(BEST_SCORE_KEY, 3)
    assert store.read_best(BEST_SCORE_KEY) == 3
    store.write_best(BEST_SCORE_KEY, 11)
    assert store.read_best(BEST_SCORE_KEY) == 11


def test_keys_are_independent(store):
    store.write_best("a", 5)
    assert store.read_best("b") == 0


@pytest.mark.parametrize("raw", ["banana", "", "nan", "inf", "-4", None])
def test_corrupt_values_read_zero(store, raw):
    store.cur.execute("INSERT INTO Scores (name, value) VALUES (?, ?)", (BEST_SCORE_KEY, raw))
    store.conn.commit()
    assert store.read_best(BEST_SCORE_KEY) == 0


def test_numeric_text_is_accepted(store):
    store.cur.execute("INSERT INTO Scores (name, value) VALUES (?, ?)", (BEST_SCORE_KEY, "12.0"))
    store.conn.commit()
    assert store.read_best(BEST_SCORE_KEY) == 12


def test_value_survives_reopen(tmp_path):
    path = str(tmp_path / "scores.db")
    db = ScoreDatabase(path)
    db.write_best(BEST_SCORE_KEY, 9)
    db.close()

    db = ScoreDatabase(path)
    try:
        assert db.read_best(BEST_SCORE_KEY) == 9
    finally:
        db.close()


def test_unopenable_path_raises_persistence_error(tmp_path):
    with pytest.raises(PersistenceError):
        ScoreDatabase(str(tmp_path / "missing-dir" / "scores.db"))


def test_closed_connection_raises_persistence_error(tmp_path):
    db = ScoreDatabase(str(tmp_path / "scores.db"))
    db.close()
    with pytest.raises(PersistenceError):
        db.write_best(BEST_SCORE_KEY, 1)
    with pytest.raises(PersistenceError):
        db.read_best(BEST_SCORE_KEY)
