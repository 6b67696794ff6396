# predictive_text/core/engine.py
"""
EngineInstance - the immutable result of one training pass.

Holds exactly one prefix index and one n-gram model. It is only constructed
once both are fully built, so a reference to an instance is always safe to
query; retraining produces a new instance instead of mutating this one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from predictive_text.core.protocols import EngineStats, NgramProtocol, PrefixIndexProtocol


@dataclass(frozen=True)
class EngineInstance:
    prefix_index: PrefixIndexProtocol
    ngram_model: NgramProtocol
    sources: Tuple[str, ...] = ()
    token_count: int = 0
    word_count: int = 0
    build_ms: float = 0.0
    ready: bool = field(default=True)

    def complete(self, prefix: str, limit: Optional[int] = None, preserve_case: bool = False) -> List[str]:
        return self.prefix_index.complete(prefix, limit, preserve_case=preserve_case)

    def predict_next(self, context: Union[str, Sequence], limit: Optional[int] = None) -> List[str]:
        return self.ngram_model.predict_next(context, limit)

    def predict_phrases(self, context: Union[str, Sequence], limit: Optional[int] = None) -> List[str]:
        return self.ngram_model.predict_phrases(context, limit)

    def frequency(self, word: str) -> int:
        return self.prefix_index.frequency(word)

    def stats(self) -> EngineStats:
        return EngineStats(
            vocabulary_size=self.prefix_index.size(),
            token_count=self.token_count,
            word_count=self.word_count,
            context_count=self.ngram_model.context_count(),
            order=self.ngram_model.order,
            sources=list(self.sources),
            build_ms=round(self.build_ms, 3),
        )
