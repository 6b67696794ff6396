# ngram_model.py
# Backoff n-gram language model for next-word and next-phrase prediction.

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from predictive_text.context.tokenizer import (
    Token,
    TokenLike,
    context_words,
    sentence_segments,
    word_tokens,
)
from predictive_text.core.ranking import Candidate, rank_by_frequency

Word = str
Table = Dict[str, Counter]  # joined context -> Counter(next)


@dataclass(frozen=True)
class NgramConfig:
    """
    order: longest context (in words) recorded and tried first
    phrase_length: longest phrase continuation recorded (2..phrase_length words)
    """

    order: int = 3
    phrase_length: int = 3

    def __post_init__(self) -> None:
        if not 1 <= self.order <= 3:
            raise ValueError(f"order must be in 1..3, got {self.order}")
        if not 2 <= self.phrase_length <= 4:
            raise ValueError(f"phrase_length must be in 2..4, got {self.phrase_length}")


def context_key(words: Sequence[Word]) -> str:
    return " ".join(words)


class NgramModel:
    """
    Transition table from the last 1..order words to the words (and short
    phrases) observed right after them.

    Prediction backs off from the longest available context to a single word;
    the first level with any candidates is used on its own, counts from
    different levels are never mixed. There is no unigram fallback.
    """

    def __init__(self, config: Optional[NgramConfig] = None) -> None:
        self.cfg = config or NgramConfig()
        # n -> {context: Counter(next word)}
        self._next: Dict[int, Table] = {n: defaultdict(Counter) for n in range(1, self.cfg.order + 1)}
        # n -> {context: Counter(next phrase)}
        self._phrases: Dict[int, Table] = {n: defaultdict(Counter) for n in range(1, self.cfg.order + 1)}
        self._frozen = False

    @property
    def order(self) -> int:
        return self.cfg.order

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    @classmethod
    def build(cls, tokens: Iterable[Token], order: int = 3, phrase_length: int = 3) -> "NgramModel":
        """Count transitions sentence by sentence, then freeze."""
        model = cls(NgramConfig(order=order, phrase_length=phrase_length))
        for words in sentence_segments(tokens):
            model.train_sentence(words)
        model.freeze()
        return model

    def train_sentence(self, words: Sequence[Word]) -> None:
        """Record every window of one sentence's lower-cased words."""
        if self._frozen:
            raise RuntimeError("NgramModel is frozen; build a new model instead")
        n_words = len(words)
        max_phrase = self.cfg.phrase_length
        for i in range(1, n_words):
            nxt = words[i]
            phrases = [
                context_key(words[i:i + k])
                for k in range(2, max_phrase + 1)
                if i + k <= n_words
            ]
            for n in range(1, min(self.cfg.order, i) + 1):
                key = context_key(words[i - n:i])
                self._next[n][key][nxt] += 1
                for p in phrases:
                    self._phrases[n][key][p] += 1

    def freeze(self) -> None:
        # drop defaultdict behaviour so lookups of unseen contexts cannot insert
        self._next = {n: dict(t) for n, t in self._next.items()}
        self._phrases = {n: dict(t) for n, t in self._phrases.items()}
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Prediction (public API)
    # ------------------------------------------------------------------
    def predict_next(self, context: Union[str, Sequence[TokenLike]], limit: Optional[int] = None) -> List[Word]:
        """Ranked next words for the given context (most recent word last)."""
        return [w for w, _ in self.top_next(context, limit)]

    def predict_phrases(self, context: Union[str, Sequence[TokenLike]], limit: Optional[int] = None) -> List[str]:
        """Ranked 2..phrase_length word continuations for the context."""
        return [p for p, _ in self._backoff(self._phrases, context, limit)]

    def top_next(self, context: Union[str, Sequence[TokenLike]], limit: Optional[int] = None) -> List[Candidate]:
        """Like predict_next but keeps the follow counts."""
        return self._backoff(self._next, context, limit)

    def _backoff(self, tables: Dict[int, Table], context, limit: Optional[int]) -> List[Candidate]:
        words = context_words(context, self.cfg.order)
        for n in range(len(words), 0, -1):
            counter = tables[n].get(context_key(words[-n:]))
            if counter:
                return rank_by_frequency(counter.items(), limit)
        return []

    def backoff_level(self, context: Union[str, Sequence[TokenLike]]) -> int:
        """Context length that would answer predict_next (0 if none)."""
        words = context_words(context, self.cfg.order)
        for n in range(len(words), 0, -1):
            if self._next[n].get(context_key(words[-n:])):
                return n
        return 0

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def count(self, context: Union[str, Sequence[TokenLike]], word: Word) -> int:
        """Follow count of `word` after exactly this context (no backoff)."""
        words = word_tokens(context)
        if not words or len(words) > self.cfg.order:
            return 0
        counter = self._next[len(words)].get(context_key(words))
        return counter.get(word.lower(), 0) if counter else 0

    def context_count(self) -> int:
        """Distinct contexts across all orders."""
        return sum(len(t) for t in self._next.values())

    def contexts(self, n: int) -> Tuple[str, ...]:
        return tuple(sorted(self._next.get(n, {})))
