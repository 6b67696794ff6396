"""
predictive_text - personalizable predictive text engine.

Completes the word being typed and predicts the next word or short phrase,
trained from a base corpus merged with per-account persona text and message
history.

Example:
    from predictive_text import AutoCompleter, TextSource

    ac = AutoCompleter()
    ac.train([TextSource("base", "the cat sat"), TextSource("history", "the cat ran")])
    ac.get_spelling_completions("ca")      # ['cat']
    ac.get_next_word_predictions("the")    # ['cat']
"""

from .autocompleter import AutoCompleter
from .context.tokenizer import Token, TokenKind, tokenize
from .core.engine import EngineInstance
from .core.trainer import CorpusTrainer, TextSource, assemble_sources, train
from .errors import CorpusTooLargeError, InvalidSourceError, PredictiveTextError, TrainingError
from .utils.cache_utils import CorpusCache
from .utils.config_manager import Config

__version__ = "0.1.0"
__all__ = [
    "AutoCompleter",
    "Token",
    "TokenKind",
    "tokenize",
    "EngineInstance",
    "CorpusTrainer",
    "TextSource",
    "assemble_sources",
    "train",
    "CorpusTooLargeError",
    "InvalidSourceError",
    "PredictiveTextError",
    "TrainingError",
    "CorpusCache",
    "Config",
]
