# ranking.py - shared deterministic ranking for completions and predictions.

from __future__ import annotations

import heapq
from typing import Iterable, List, Optional, Tuple

Candidate = Tuple[str, int]


def ranking_key(item: Candidate) -> Tuple[int, str, int]:
    """Descending count, then ascending lexicographic, then shorter first."""
    word, count = item
    return (-count, word, len(word))


def rank_by_frequency(items: Iterable[Candidate], limit: Optional[int] = None) -> List[Candidate]:
    """
    Order (word, count) pairs by ranking_key and truncate to `limit`.
    limit=None keeps everything; limit <= 0 gives [].
    """
    if limit is None:
        return sorted(items, key=ranking_key)
    if limit <= 0:
        return []
    return heapq.nsmallest(limit, items, key=ranking_key)
