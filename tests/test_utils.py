import logging
import threading
import time

import pytest

from predictive_text.utils.cache_utils import CorpusCache, timed
from predictive_text.utils.logger_utils import LOGGER_NAME, Log
from predictive_text.utils.profile_suggest import main as profile_main
from predictive_text.utils.profile_suggest import summarize
from predictive_text.utils.threaded_runner import BackgroundRunner, run_parallel


def test_run_parallel_keeps_task_order():
    def slow(v, d):
        time.sleep(d)
        return v

    out = run_parallel([lambda: slow(1, 0.05), lambda: slow(2, 0.0), lambda: slow(3, 0.01)])
    assert out == [1, 2, 3]
    assert run_parallel([]) == []


def test_run_parallel_reraises():
    def bad():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        run_parallel([bad])


def test_background_runner_is_off_thread():
    main = threading.get_ident()
    with BackgroundRunner() as r:
        fut = r.submit(threading.get_ident)
        assert fut.result(timeout=5) != main


def test_cache_loads_once():
    calls = []
    cache = CorpusCache()

    def loader():
        calls.append(1)
        return "text"

    assert cache.get("dict", loader) == "text"
    assert cache.get("dict", loader) == "text"
    assert calls == [1]
    assert "dict" in cache
    assert (cache.hits, cache.misses) == (1, 1)
    cache.clear()
    assert len(cache) == 0


def test_cache_rejects_non_text():
    with pytest.raises(TypeError):
        CorpusCache().get("x", lambda: b"bytes")


def test_cache_prefetch_order():
    cache = CorpusCache()
    out = cache.prefetch({"b": lambda: "B", "a": lambda: "A"})
    assert out == [("b", "B"), ("a", "A")]


def test_cache_prefetch_skips_failed_loaders(caplog):
    cache = CorpusCache()

    def broken():
        raise OSError("corpus unavailable")

    loaders = {"words": lambda: "alpha", "corpus": broken}
    with pytest.raises(OSError):
        cache.prefetch(loaders)
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        assert cache.prefetch(loaders, skip_failed=True) == [("words", "alpha")]
    assert "corpus" not in cache
    assert any("corpus" in r.getMessage() for r in caplog.records)
    loaders["corpus"] = lambda: "beta"
    assert cache.prefetch(loaders, skip_failed=True) == [("words", "alpha"), ("corpus", "beta")]


def test_timed():
    res, elapsed = timed(lambda x: x * 2)(4)
    assert res == 8
    assert elapsed >= 0


def test_time_block_logs_metric(caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        with Log.time_block("unit"):
            pass
    assert any("unit done" in r.getMessage() for r in caplog.records)


def test_configure_replaces_handlers(tmp_path):
    path = tmp_path / "engine.log"
    logger = Log.configure("DEBUG", path=str(path), use_color=False)
    Log.configure("DEBUG", path=str(path), use_color=False)
    try:
        real = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(real) == 2
        Log.debug("hello file")
        for h in real:
            h.flush()
        assert "hello file" in path.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            if not isinstance(h, logging.NullHandler):
                logger.removeHandler(h)
                h.close()
        logger.setLevel(logging.NOTSET)


def test_summarize_percentiles():
    s = summarize([1.0, 2.0, 3.0, 4.0])
    assert s["count"] == 4
    assert s["mean_ms"] == pytest.approx(2.5)
    assert s["median_ms"] == pytest.approx(2.5)
    assert s["max_ms"] == 4.0
    assert summarize([]) == {"count": 0}


def test_profile_main_with_no_iterations(capsys):
    profile_main(["--warm", "0", "--iters", "0"])
    out = capsys.readouterr().out
    assert "No measured iterations." in out
    assert "Sample:" in out
