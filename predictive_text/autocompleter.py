# autocompleter.py
"""
AutoCompleter - application facade.

Purpose:
 - Own "the current ready EngineInstance" reference
 - Train synchronously or in the background; swap the reference only once a
   new instance is completely built, so readers never see a partial index
 - Keep serving the previous instance when a training pass fails
 - Simple public API for UI/CLI/tests:
     is_ready(), train(sources), train_in_background(sources), train_for_account(...),
     get_spelling_completions(q), get_next_word_predictions(q), get_next_phrase_predictions(q),
     stats()

Queries never raise and never mutate state: before the first successful
training, or for input with nothing to complete, they return [].
"""

from __future__ import annotations

from concurrent.futures import Future
from itertools import count
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, Optional

from predictive_text.context.tokenizer import context_words, last_fragment
from predictive_text.core.engine import EngineInstance
from predictive_text.core.trainer import CorpusTrainer, TextSource
from predictive_text.errors import TrainingError
from predictive_text.utils.cache_utils import CorpusCache, Loader
from predictive_text.utils.config_manager import Config
from predictive_text.utils.logger_utils import Log
from predictive_text.utils.threaded_runner import BackgroundRunner


class AutoCompleter:
    """Predictive text facade exposing spelling and next-word suggestions."""

    def __init__(
        self,
        config: Optional[Config] = None,
        cache: Optional[CorpusCache] = None,
        runner: Optional[BackgroundRunner] = None,
    ) -> None:
        self.cfg = config or Config()
        self.cache = cache if cache is not None else CorpusCache()
        self.trainer = CorpusTrainer(self.cfg, cache=self.cache)
        self._runner = runner
        self._engine: Optional[EngineInstance] = None
        # generation of the most recent training request; results from older
        # requests are discarded whether or not the newer one succeeds
        self._latest_gen = 0
        self._gen = count(1)
        self._swap_lock = Lock()

    # Training ---------------------------------------------------------
    def train(self, sources: Iterable[TextSource]) -> bool:
        """Train synchronously. Returns False (previous instance kept) on failure."""
        gen = self._next_gen()
        return self._train_and_swap(gen, lambda: self.trainer.train(sources))

    def train_in_background(self, sources: Iterable[TextSource]) -> Future:
        """
        Train on the background runner while the current instance keeps serving.
        The Future resolves to the same bool train() returns.
        """
        sources = list(sources)
        gen = self._next_gen()
        return self._background().submit(self._train_and_swap, gen, lambda: self.trainer.train(sources))

    def train_for_account(
        self,
        persona: str = "",
        messages: Iterable[str] = (),
        base_loaders: Optional[Mapping[str, Loader]] = None,
        include_messages: Optional[bool] = None,
    ) -> bool:
        """
        Retrain from cached base text plus the account's persona and message
        history; base text is loaded once per cache.
        """
        gen = self._next_gen()
        messages = list(messages)
        return self._train_and_swap(
            gen,
            lambda: self.trainer.train_cached(
                base_loaders or {}, persona=persona, history=messages, include_history=include_messages
            ),
        )

    def _next_gen(self) -> int:
        with self._swap_lock:
            self._latest_gen = next(self._gen)
            return self._latest_gen

    def _train_and_swap(self, gen: int, build) -> bool:
        try:
            instance = build()
        except TrainingError as e:
            Log.error(f"[AutoCompleter] training failed, keeping previous instance: {e}")
            return False
        except Exception:
            Log.get().exception("[AutoCompleter] unexpected training error, keeping previous instance")
            return False
        with self._swap_lock:
            if gen < self._latest_gen:
                Log.info(f"[AutoCompleter] discarding stale training result (gen {gen} < {self._latest_gen})")
                return False
            self._engine = instance
        return True

    def _background(self) -> BackgroundRunner:
        if self._runner is None:
            self._runner = BackgroundRunner()
        return self._runner

    def shutdown(self) -> None:
        if self._runner is not None:
            self._runner.shutdown()

    # Public API ---------------------------------------------------------
    @property
    def engine(self) -> Optional[EngineInstance]:
        return self._engine

    def is_ready(self) -> bool:
        engine = self._engine
        return engine is not None and engine.ready

    def _limit(self, limit: Optional[int]) -> int:
        return int(self.cfg["max_suggestions"]) if limit is None else limit

    def get_spelling_completions(self, query_text: str, limit: Optional[int] = None) -> List[str]:
        """Complete the last (possibly partial) word of the query."""
        engine = self._engine
        if engine is None:
            return []
        fragment = last_fragment(query_text)
        if not fragment:
            return []
        return engine.complete(fragment, self._limit(limit), preserve_case=bool(self.cfg["preserve_case"]))

    def get_next_word_predictions(self, query_text: str, limit: Optional[int] = None) -> List[str]:
        """Predict the word after the query's last (up to order) words."""
        engine = self._engine
        if engine is None:
            return []
        ctx = context_words(query_text, engine.ngram_model.order)
        return engine.predict_next(ctx, self._limit(limit))

    def get_next_phrase_predictions(self, query_text: str, limit: Optional[int] = None) -> List[str]:
        """Predict short multi-word continuations of the query."""
        engine = self._engine
        if engine is None:
            return []
        ctx = context_words(query_text, engine.ngram_model.order)
        return engine.predict_phrases(ctx, self._limit(limit))

    def stats(self) -> Dict[str, Any]:
        engine = self._engine
        if engine is None:
            return {"ready": False}
        out: Dict[str, Any] = dict(engine.stats())
        out["ready"] = True
        return out
