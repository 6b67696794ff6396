# tests/test_ngram_model.py
import pytest

from predictive_text.context.tokenizer import tokenize
from predictive_text.core.ngram_model import NgramConfig, NgramModel


def build(text, order=3, phrase_length=3):
    return NgramModel.build(tokenize(text), order=order, phrase_length=phrase_length)


def test_next_word_ranked_by_count():
    m = build("I am happy\nI am sad\nI am happy")
    assert m.predict_next(["i", "am"]) == ["happy", "sad"]
    assert m.top_next("I am") == [("happy", 2), ("sad", 1)]


def test_unseen_context_is_empty():
    m = build("good morning everyone")
    assert m.predict_next("good") == ["morning"]
    assert m.predict_next("evening") == []


def test_empty_context_has_no_cold_start():
    m = build("a b c a b d")
    assert m.predict_next([]) == []
    assert m.predict_next("") == []


def test_backoff_uses_first_matching_level_only():
    m = build("x y z\nq y w\nq y w")
    # "x y" -> z only; the 1-word level would have added w (count 2)
    assert m.predict_next("x y") == ["z"]
    assert m.backoff_level("x y") == 2


def test_backoff_equals_shorter_query():
    m = build("the cat sat on the mat\na cat sat down\nthe cat ran")
    unseen3 = "zebra the cat"
    assert m.predict_next(unseen3) == m.predict_next("the cat")
    assert m.predict_next("zebra zebra cat") == m.predict_next("cat")
    assert m.predict_next("zebra zebra zebra") == []
    assert m.backoff_level("zebra zebra zebra") == 0


def test_lexicographic_tie_break():
    m = build("go north\ngo east\ngo west")
    assert m.predict_next("go") == ["east", "north", "west"]


def test_windows_do_not_cross_sentences():
    m = build("I like tea. Dogs bark")
    assert m.predict_next("tea") == []
    assert m.count("tea", "dogs") == 0


def test_commas_do_not_break_context():
    m = build("yes, please")
    assert m.predict_next("yes") == ["please"]


def test_order_limits_context():
    m = build("a b c d\nz b c e", order=1)
    assert m.predict_next("a b c") == ["d", "e"]
    m3 = build("a b c d\nz b c e", order=3)
    assert m3.predict_next("a b c") == ["d"]


def test_limit():
    m = build("go north\ngo east\ngo west")
    assert m.predict_next("go", limit=2) == ["east", "north"]
    assert m.predict_next("go", limit=0) == []


def test_phrase_prediction():
    m = build(
        "coffee is good for health\n"
        "coffee is good for the heart\n"
        "coffee is good for the brain"
    )
    assert m.predict_phrases("coffee is good for") == ["the brain", "the heart"]
    assert m.predict_phrases("coffee is") == ["good for", "good for the", "good for health"]
    assert m.predict_phrases("unknown words here") == []


def test_counts_accumulate():
    m = build("hi there\nhi there\nhi you")
    assert m.count("hi", "there") == 2
    assert m.count("hi", "you") == 1


def test_frozen_after_build():
    m = build("a b")
    with pytest.raises(RuntimeError):
        m.train_sentence(["c", "d"])


def test_config_validation():
    with pytest.raises(ValueError):
        NgramConfig(order=4)
    with pytest.raises(ValueError):
        NgramConfig(phrase_length=1)
