# trie.py
# Trie (prefix tree) used as the prefix index for spelling completions.
# Keeps word frequencies and surface forms for ranking/display.
# Fast enough for ~100k vocab: a query only walks the subtree under the prefix.

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from predictive_text.context.normalizer import normalize_key
from predictive_text.context.tokenizer import Token
from predictive_text.core.ranking import Candidate, rank_by_frequency


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    freq: occurrences of the word ending here (0 = not a word)
    forms: surface form -> count, for display casing
    """

    __slots__ = ("children", "freq", "forms")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.freq = 0
        self.forms: Optional[Counter] = None

    @property
    def is_word(self) -> bool:
        return self.freq > 0


class Trie:
    """
    Prefix index over the trained vocabulary.

    Built once per training pass and frozen afterwards; a new pass builds a new
    Trie rather than patching this one.
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0
        self._total = 0
        self._frozen = False

    @classmethod
    def build(cls, tokens: Iterable[Token]) -> "Trie":
        """Index every word token, then freeze."""
        trie = cls()
        for tok in tokens:
            if tok.is_word:
                trie.insert(tok.text)
        trie.freeze()
        return trie

    # insertion -----------------------------------------------------
    def insert(self, word: str, count: int = 1) -> None:
        """
        Insert a word (case-insensitive key), adding `count` to its frequency.
        The original casing is kept as a surface form.
        """
        if self._frozen:
            raise RuntimeError("Trie is frozen; build a new index instead")
        key = normalize_key(word)
        if not key or count <= 0:
            return

        node = self._root
        for ch in key:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        if node.freq == 0:
            self._size += 1
            node.forms = Counter()
        node.freq += count
        node.forms[word] += count
        self._total += count

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # search/traversal ---------------------------------------------------------
    def search_prefix(self, prefix: str, limit: Optional[int] = None) -> List[Candidate]:
        """
        Return (word, freq) for words starting with `prefix`, ranked by
         - higher freq first
         - lexicographically second
         - shorter word third
        An empty prefix returns [] rather than the whole vocabulary.
        """
        key = normalize_key(prefix)
        if not key:
            return []
        node = self._find(key)
        if node is None:
            return []
        return rank_by_frequency(self._iter_words(node, key), limit)

    def complete(
        self, prefix: str, limit: Optional[int] = None, preserve_case: bool = False
    ) -> List[str]:
        """Ranked completions for `prefix` as plain strings."""
        ranked = self.search_prefix(prefix, limit)
        if not preserve_case:
            return [w for w, _ in ranked]
        return [self.display_form(w) for w, _ in ranked]

    def display_form(self, word: str) -> str:
        """Most frequent surface casing of `word` (ties -> smallest string)."""
        node = self._find(normalize_key(word))
        if node is None or not node.forms:
            return word
        return min(node.forms.items(), key=lambda kv: (-kv[1], kv[0]))[0]

    def frequency(self, word: str) -> int:
        node = self._find(normalize_key(word))
        return node.freq if node is not None else 0

    def _find(self, key: str) -> Optional[TrieNode]:
        node = self._root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def _iter_words(self, node: TrieNode, prefix: str) -> Iterable[Candidate]:
        """Iterative DFS over the subtree (no recursion limit on long words)."""
        stack: List[Tuple[TrieNode, str]] = [(node, prefix)]
        while stack:
            cur, path = stack.pop()
            if cur.freq:
                yield (path, cur.freq)
            for ch, child in cur.children.items():
                stack.append((child, path + ch))

    # convenience/introspection -----------------------------------------------------
    def size(self) -> int:
        """Number of distinct words."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def total(self) -> int:
        """Sum of all word frequencies."""
        return self._total

    def items(self) -> List[Candidate]:
        """All (word, freq) pairs ranked; for inspection and tests, not the hot path."""
        return rank_by_frequency(self._iter_words(self._root, ""))

    def __contains__(self, word: str) -> bool:
        node = self._find(normalize_key(word))
        return node is not None and node.is_word
