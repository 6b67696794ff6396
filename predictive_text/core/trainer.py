# predictive_text/core/trainer.py
"""
CorpusTrainer - builds EngineInstances from ordered text sources.

Sources are appended in precedence order (base dictionary/corpus, then account
persona text, then recent message history) and tokenized once. Counts from all
sources add up, so personal text reinforces the base vocabulary instead of
replacing it. Every call builds brand new structures; nothing from a previous
instance is reused, so one account's corpus can never leak into another's.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence

from predictive_text.context.tokenizer import tokenize
from predictive_text.core.engine import EngineInstance
from predictive_text.core.ngram_model import NgramModel
from predictive_text.core.trie import Trie
from predictive_text.errors import CorpusTooLargeError, InvalidSourceError
from predictive_text.utils.cache_utils import CorpusCache, Loader
from predictive_text.utils.config_manager import Config
from predictive_text.utils.logger_utils import Log

SOURCE_SEPARATOR = "\n"


@dataclass(frozen=True)
class TextSource:
    """One labeled chunk of training text."""

    label: str
    text: str

    @classmethod
    def from_words(cls, label: str, words: Iterable[str]) -> "TextSource":
        """A word list (e.g. the base dictionary), one word per line."""
        return cls(label, "\n".join(w.strip() for w in words if w and w.strip()))


def assemble_sources(
    base: Sequence[TextSource] = (),
    persona: str = "",
    history: Iterable[str] = (),
    include_history: bool = True,
) -> List[TextSource]:
    """Conventional precedence: base sources, then persona, then message history."""
    sources = list(base)
    if persona:
        sources.append(TextSource("persona", persona))
    if include_history:
        lines = [m for m in history if m]
        if lines:
            sources.append(TextSource("history", "\n".join(lines)))
    return sources


class CorpusTrainer:
    """
    Builds EngineInstances. Holds only configuration and the injected cache;
    each train() call is independent of the previous ones.
    """

    def __init__(self, config: Optional[Config] = None, cache: Optional[CorpusCache] = None) -> None:
        self.cfg = config or Config()
        self.cache = cache

    def train(self, sources: Iterable[TextSource]) -> EngineInstance:
        """
        Tokenize the concatenated sources once and build a fresh prefix index
        and n-gram model from that token stream.

        Raises InvalidSourceError for malformed sources and CorpusTooLargeError
        when max_corpus_tokens is set and exceeded. Nothing is published on error.
        """
        sources = list(sources)
        for src in sources:
            if not isinstance(src, TextSource) or not isinstance(src.text, str):
                raise InvalidSourceError(f"expected TextSource with str text, got {src!r:.80}")

        t0 = time.perf_counter()
        with Log.time_block("CorpusTrainer.train"):
            corpus = SOURCE_SEPARATOR.join(s.text for s in sources)
            tokens = tokenize(corpus)

            limit = int(self.cfg["max_corpus_tokens"])
            if limit and len(tokens) > limit:
                raise CorpusTooLargeError(len(tokens), limit)

            prefix_index = Trie.build(tokens)
            model = NgramModel.build(
                tokens,
                order=int(self.cfg["ngram_order"]),
                phrase_length=int(self.cfg["phrase_length"]),
            )
            instance = EngineInstance(
                prefix_index=prefix_index,
                ngram_model=model,
                sources=tuple(s.label for s in sources),
                token_count=len(tokens),
                word_count=prefix_index.total(),
                build_ms=(time.perf_counter() - t0) * 1000.0,
            )
        Log.info(
            f"[CorpusTrainer] trained sources={list(instance.sources)} tokens={instance.token_count} "
            f"vocab={prefix_index.size()} contexts={model.context_count()}"
        )
        return instance

    def train_cached(
        self,
        base_loaders: Mapping[str, Loader],
        persona: str = "",
        history: Iterable[str] = (),
        include_history: Optional[bool] = None,
    ) -> EngineInstance:
        """
        Train from static base text fetched through the cache (loaded once per
        cache), followed by the account's persona text and message history.
        A base loader that fails is skipped, so the account still trains on
        its own text.
        """
        cache = self.cache if self.cache is not None else CorpusCache()
        base = [TextSource(label, text) for label, text in cache.prefetch(base_loaders, skip_failed=True)]
        if include_history is None:
            include_history = bool(self.cfg["include_messages"])
        return self.train(assemble_sources(base, persona, history, include_history))


def train(sources: Iterable[TextSource], config: Optional[Config] = None) -> EngineInstance:
    """Module-level shortcut: one training pass with the given config."""
    return CorpusTrainer(config).train(sources)
