# cache_utils.py - explicit text cache and timing helpers

from __future__ import annotations

import time
from functools import wraps
from threading import Lock
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from predictive_text.utils.logger_utils import Log
from predictive_text.utils.threaded_runner import run_parallel

Loader = Callable[[], str]


def timed(func: Callable) -> Callable:
    """Decorator returns tuple: (result, elapsed)"""

    @wraps(func)
    def _wrap(*a, **kw):
        t0 = time.perf_counter()
        res = func(*a, **kw)
        t1 = time.perf_counter()
        return res, (t1 - t0)

    return _wrap


class CorpusCache:
    """
    Fetch-once store for static base text (word lists, generic corpus).

    Owned by the calling layer and passed to the trainer, so retraining for a
    new account corpus does not reload the static text.
    """

    def __init__(self) -> None:
        self._texts: Dict[str, str] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def get(self, label: str, loader: Loader) -> str:
        with self._lock:
            if label in self._texts:
                self.hits += 1
                return self._texts[label]
        text = loader()
        if not isinstance(text, str):
            raise TypeError(f"loader for {label!r} returned {type(text).__name__}, expected str")
        with self._lock:
            # a concurrent caller may have filled it first; keep the first value
            self.misses += 1
            return self._texts.setdefault(label, text)

    def prefetch(self, loaders: Mapping[str, Loader], skip_failed: bool = False) -> List[Tuple[str, str]]:
        """
        Load all missing labels in parallel; returns (label, text) in mapping order.
        With skip_failed, a label whose loader raises is logged and left out
        (and retried on the next call) instead of failing the whole batch.
        """
        labels = list(loaders)
        if not skip_failed:
            texts = run_parallel([lambda lb=lb: self.get(lb, loaders[lb]) for lb in labels])
            return list(zip(labels, texts))
        texts = run_parallel([lambda lb=lb: self._get_or_none(lb, loaders[lb]) for lb in labels])
        return [(lb, text) for lb, text in zip(labels, texts) if text is not None]

    def _get_or_none(self, label: str, loader: Loader) -> Optional[str]:
        try:
            return self.get(label, loader)
        except Exception as e:
            Log.warning(f"[CorpusCache] skipping base text {label!r}: {e}")
            return None

    def __contains__(self, label: str) -> bool:
        return label in self._texts

    def __len__(self) -> int:
        return len(self._texts)

    def clear(self) -> None:
        with self._lock:
            self._texts.clear()
