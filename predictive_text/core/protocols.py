# predictive_text/core/protocols.py
"""
Protocol interfaces for the two index structures an EngineInstance holds, plus
the typed stats payload it reports.

The facade and tests depend on these rather than on Trie/NgramModel directly so
either structure can be swapped (e.g. a sorted-array prefix index) without
touching the query path.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from typing_extensions import TypedDict


class EngineStats(TypedDict):
    """Summary of one trained EngineInstance."""

    vocabulary_size: int
    token_count: int
    word_count: int
    context_count: int
    order: int
    sources: List[str]
    build_ms: float


@runtime_checkable
class PrefixIndexProtocol(Protocol):
    """Prefix completion over the trained vocabulary."""

    def complete(self, prefix: str, limit: Optional[int] = None, preserve_case: bool = False) -> List[str]:
        ...

    def search_prefix(self, prefix: str, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """Return (word, frequency) ranked by frequency desc, then word asc."""
        ...

    def frequency(self, word: str) -> int:
        ...

    def size(self) -> int:
        ...


@runtime_checkable
class NgramProtocol(Protocol):
    """Next-token prediction with backoff."""

    @property
    def order(self) -> int:
        ...

    def predict_next(self, context: Union[str, Sequence], limit: Optional[int] = None) -> List[str]:
        ...

    def predict_phrases(self, context: Union[str, Sequence], limit: Optional[int] = None) -> List[str]:
        ...

    def context_count(self) -> int:
        ...
