from .engine import EngineInstance
from .ngram_model import NgramConfig, NgramModel
from .protocols import EngineStats, NgramProtocol, PrefixIndexProtocol
from .ranking import rank_by_frequency, ranking_key
from .trainer import CorpusTrainer, TextSource, assemble_sources, train
from .trie import Trie

__all__ = [
    "EngineInstance",
    "NgramConfig",
    "NgramModel",
    "EngineStats",
    "NgramProtocol",
    "PrefixIndexProtocol",
    "rank_by_frequency",
    "ranking_key",
    "CorpusTrainer",
    "TextSource",
    "assemble_sources",
    "train",
    "Trie",
]
