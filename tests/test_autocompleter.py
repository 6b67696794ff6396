# tests/test_autocompleter.py
from unittest.mock import patch

from predictive_text import AutoCompleter, Config, TextSource
from predictive_text.errors import TrainingError


def test_scenario_spelling():
    ac = AutoCompleter()
    ac.train([TextSource("a", "the cat sat"), TextSource("b", "the cat ran")])
    assert ac.get_spelling_completions("ca") == ["cat"]


def test_scenario_next_word_ranking():
    ac = AutoCompleter()
    ac.train([TextSource("a", "I am happy"), TextSource("b", "I am sad"), TextSource("c", "I am happy")])
    assert ac.get_next_word_predictions("I am") == ["happy", "sad"]


def test_scenario_unseen_context():
    ac = AutoCompleter()
    ac.train([TextSource("a", "good morning everyone")])
    assert ac.get_next_word_predictions("good") == ["morning"]
    assert ac.get_next_word_predictions("evening") == []


def test_scenario_not_ready():
    ac = AutoCompleter()
    assert ac.is_ready() is False
    assert ac.get_spelling_completions("th") == []
    assert ac.get_next_word_predictions("the") == []
    assert ac.get_next_phrase_predictions("the") == []
    assert ac.stats() == {"ready": False}


def test_scenario_history_reinforces_base():
    ac = AutoCompleter()
    base = TextSource("base", "thanks this that those")
    ac.train([base])
    assert ac.get_spelling_completions("th") == ["thanks", "that", "this", "those"]
    ac.train([base, TextSource("history", "thanks\nthanks a lot\nthanks")])
    out = ac.get_spelling_completions("th")
    assert out[0] == "thanks"
    assert ac.engine.frequency("thanks") == 4


def test_spelling_empty_fragment():
    ac = AutoCompleter()
    ac.train([TextSource("a", "hello world")])
    assert ac.get_spelling_completions("") == []
    assert ac.get_spelling_completions("hello.") == []
    assert ac.get_spelling_completions("   ") == []


def test_spelling_uses_last_word_only(ac):
    assert ac.get_spelling_completions("I saw the CA") == ["cat"]


def test_next_word_uses_last_three_words(ac):
    assert ac.get_next_word_predictions("yesterday I am") == ["happy", "sad"]
    assert ac.get_next_word_predictions("I am happy.") == []


def test_phrase_predictions(ac):
    assert ac.get_next_phrase_predictions("good") == ["morning everyone"]


def test_limit_defaults_to_config():
    ac = AutoCompleter(Config(max_suggestions=2))
    ac.train([TextSource("a", "go north\ngo east\ngo west")])
    assert ac.get_next_word_predictions("go") == ["east", "north"]
    assert ac.get_next_word_predictions("go", limit=5) == ["east", "north", "west"]


def test_preserve_case_option():
    ac = AutoCompleter(Config(preserve_case=True))
    ac.train([TextSource("a", "I went to Paris. I loved Paris")])
    assert ac.get_spelling_completions("pa") == ["Paris"]


def test_queries_do_not_mutate(ac):
    before = ac.stats()
    for q in ("th", "the ", "I am", "", "!!!", None, 42):
        ac.get_spelling_completions(q)
        ac.get_next_word_predictions(q)
    assert ac.stats() == before


def test_deterministic_across_retrains(sources):
    results = []
    for _ in range(3):
        ac = AutoCompleter()
        ac.train(sources)
        results.append((ac.get_spelling_completions("t"), ac.get_next_word_predictions("the")))
    assert results[0] == results[1] == results[2]


def test_retrain_replaces_instance_without_leak():
    ac = AutoCompleter()
    ac.train([TextSource("acct1", "private password phrase")])
    first = ac.engine
    ac.train([TextSource("acct2", "public words")])
    assert ac.engine is not first
    assert ac.get_spelling_completions("pr") == []
    assert ac.get_spelling_completions("pu") == ["public"]


def test_failed_training_keeps_previous_instance():
    ac = AutoCompleter(Config(max_corpus_tokens=5))
    assert ac.train([TextSource("small", "hello there")])
    engine = ac.engine
    assert ac.train([TextSource("big", "one two three four five six seven")]) is False
    assert ac.engine is engine
    assert ac.get_spelling_completions("he") == ["hello"]


def test_unexpected_error_keeps_previous_instance():
    ac = AutoCompleter()
    ac.train([TextSource("a", "hello")])
    engine = ac.engine
    with patch.object(ac.trainer, "train", side_effect=MemoryError("boom")):
        assert ac.train([TextSource("b", "x")]) is False
    assert ac.engine is engine


def test_failed_first_training_stays_not_ready():
    ac = AutoCompleter()
    with patch.object(ac.trainer, "train", side_effect=TrainingError("bad")):
        assert ac.train([TextSource("a", "x")]) is False
    assert not ac.is_ready()


def test_background_training_swaps_when_done():
    ac = AutoCompleter()
    ac.train([TextSource("old", "alpha")])
    fut = ac.train_in_background([TextSource("new", "beta")])
    assert fut.result(timeout=10) is True
    assert ac.get_spelling_completions("be") == ["beta"]
    assert ac.get_spelling_completions("al") == []
    ac.shutdown()


def test_stale_background_result_is_discarded():
    ac = AutoCompleter()
    gen_old = ac._next_gen()
    gen_new = ac._next_gen()
    newer = ac.trainer.train([TextSource("new", "newer")])
    older = ac.trainer.train([TextSource("old", "older")])
    assert ac._train_and_swap(gen_new, lambda: newer) is True
    assert ac._train_and_swap(gen_old, lambda: older) is False
    assert ac.engine is newer


def test_older_result_is_discarded_after_newer_request_fails():
    ac = AutoCompleter()
    ac.train([TextSource("start", "baseline")])
    engine = ac.engine
    gen_a = ac._next_gen()
    account_a = ac.trainer.train([TextSource("a", "account words")])
    with patch.object(ac.trainer, "train", side_effect=TrainingError("bad")):
        assert ac.train([TextSource("b", "x")]) is False
    assert ac._train_and_swap(gen_a, lambda: account_a) is False
    assert ac.engine is engine
    assert ac.get_spelling_completions("ba") == ["baseline"]


def test_train_for_account_uses_cache():
    calls = []

    def base():
        calls.append(1)
        return "hello everyone"

    ac = AutoCompleter()
    assert ac.train_for_account("I love hiking", ["hello mom"], base_loaders={"corpus": base})
    assert ac.train_for_account("I love hiking", ["hello dad"], base_loaders={"corpus": base})
    assert calls == [1]
    assert ac.get_next_word_predictions("hello") == ["dad", "everyone"]
    assert ac.stats()["sources"] == ["corpus", "persona", "history"]


def test_train_for_account_survives_broken_base_loader():
    def broken():
        raise OSError("corpus unavailable")

    ac = AutoCompleter()
    assert ac.train_for_account("I love hiking", ["hello mom"], base_loaders={"corpus": broken})
    assert ac.is_ready()
    assert ac.get_next_word_predictions("hello") == ["mom"]
    assert ac.stats()["sources"] == ["persona", "history"]


def test_devanagari_words_complete_whole():
    ac = AutoCompleter()
    ac.train([TextSource("hi", "नमस्ते दोस्त\nनमस्ते जी")])
    assert ac.get_spelling_completions("नम") == ["नमस्ते"]
    assert ac.get_next_word_predictions("नमस्ते ") == ["जी", "दोस्त"]


def test_stats_when_ready(ac):
    s = ac.stats()
    assert s["ready"] is True
    assert s["vocabulary_size"] > 0
    assert s["sources"] == ["base", "persona"]
