# predictive_text/context/tokenizer.py
"""
Tokenizer shared by the trainer and the query facade.

Splits raw text into word, punctuation and line-break tokens. Punctuation is
classified rather than dropped because sentence boundaries reset the n-gram
context and tell consumers to switch to next-word mode.

    >>> [t.text for t in tokenize("Hello, world.")]
    ['Hello', ',', 'world', '.']
"""

from __future__ import annotations

import re
import sys
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Union

from .normalizer import normalize_key, normalize_text


class TokenKind:
    WORD = "word"
    PUNCT = "punct"
    BREAK = "break"


def _mark_class() -> str:
    """Regex character class covering every combining mark (categories Mn, Mc, Me)."""
    ranges = []
    start = prev = None
    for cp in range(sys.maxunicode + 1):
        if unicodedata.category(chr(cp)).startswith("M"):
            if start is None:
                start = cp
            prev = cp
        elif start is not None:
            ranges.append((start, prev))
            start = None
    if start is not None:
        ranges.append((start, prev))
    parts = (f"\\U{a:08x}" if a == b else f"\\U{a:08x}-\\U{b:08x}" for a, b in ranges)
    return "[" + "".join(parts) + "]"


# a letter/digit plus any combining marks it carries (vowel signs, viramas,
# accents NFC cannot compose); words join letters with single inner
# apostrophes or hyphens ("don't", "well-known")
_LETTER = r"[^\W_]" + _mark_class() + "*"
_TOKEN_RE = re.compile(
    r"(?P<break>[\r\n\u2028\u2029]+)"
    rf"|(?P<word>(?:{_LETTER})+(?:['’-](?:{_LETTER})+)*)"
    r"|(?P<punct>[^\w\s]|_)"
)

SENTENCE_END = frozenset(".!?")


@dataclass(frozen=True)
class Token:
    """One unit of text. `text` keeps the original casing, `norm` is the index key."""

    text: str
    kind: str
    norm: str = ""

    @property
    def is_word(self) -> bool:
        return self.kind == TokenKind.WORD

    @property
    def is_boundary(self) -> bool:
        """True for tokens that end a sentence (terminal punctuation, line breaks)."""
        return self.kind == TokenKind.BREAK or (
            self.kind == TokenKind.PUNCT and self.text in SENTENCE_END
        )


def tokenize(text) -> List[Token]:
    """
    Split text into tokens. Pure and deterministic; never raises.
    Empty or None input gives an empty list.
    """
    s = normalize_text(text)
    if not s:
        return []
    out: List[Token] = []
    for m in _TOKEN_RE.finditer(s):
        kind = m.lastgroup
        raw = m.group()
        if kind == TokenKind.WORD:
            out.append(Token(raw, TokenKind.WORD, normalize_key(raw)))
        elif kind == TokenKind.PUNCT:
            out.append(Token(raw, TokenKind.PUNCT, raw))
        else:
            out.append(Token("\n", TokenKind.BREAK, "\n"))
    return out


TokenLike = Union[Token, str]


def _as_tokens(tokens: Union[str, Iterable[TokenLike]]) -> List[Token]:
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        return tokenize(tokens)
    out: List[Token] = []
    for t in tokens:
        if isinstance(t, Token):
            out.append(t)
        else:
            out.extend(tokenize(t))
    return out


def word_tokens(tokens: Union[str, Iterable[TokenLike]]) -> List[str]:
    """Lower-cased words only."""
    return [t.norm for t in _as_tokens(tokens) if t.is_word]


def sentence_segments(tokens: Iterable[Token]) -> Iterator[List[str]]:
    """
    Yield the lower-cased words of each sentence. Terminal punctuation and line
    breaks end a sentence; other punctuation is skipped.
    """
    current: List[str] = []
    for t in tokens:
        if t.is_word:
            current.append(t.norm)
        elif t.is_boundary:
            if current:
                yield current
            current = []
    if current:
        yield current


def last_fragment(text) -> str:
    """
    The word being typed: the last token when it is a word, else ''.
    Trailing spaces are ignored; trailing punctuation yields ''.
    """
    toks = tokenize(text)
    if not toks or not toks[-1].is_word:
        return ""
    return toks[-1].norm


def context_words(text: Union[str, Sequence[TokenLike]], order: int = 3) -> List[str]:
    """Last `order` words of the final sentence. [] after a sentence boundary."""
    if order <= 0:
        return []
    toks = _as_tokens(text)
    ctx: List[str] = []
    for t in reversed(toks):
        if t.is_boundary:
            break
        if t.is_word:
            ctx.append(t.norm)
            if len(ctx) == order:
                break
    ctx.reverse()
    return ctx
