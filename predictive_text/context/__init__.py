from .tokenizer import (
    Token,
    TokenKind,
    tokenize,
    word_tokens,
    sentence_segments,
    last_fragment,
    context_words,
)
from .normalizer import normalize_key, normalize_text

__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "word_tokens",
    "sentence_segments",
    "last_fragment",
    "context_words",
    "normalize_key",
    "normalize_text",
]
