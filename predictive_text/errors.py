# errors.py - exceptions raised by the training side of the engine.
# Query paths never raise; absence of suggestions is the only failure they show.


class PredictiveTextError(Exception):
    """Base class for all predictive_text errors."""


class TrainingError(PredictiveTextError):
    """A training pass could not produce a new engine instance."""


class InvalidSourceError(TrainingError):
    """A training source was not a TextSource with string text."""


class CorpusTooLargeError(TrainingError):
    """The tokenized corpus exceeded the configured max_corpus_tokens bound."""

    def __init__(self, token_count: int, limit: int) -> None:
        super().__init__(f"corpus has {token_count} tokens, limit is {limit}")
        self.token_count = token_count
        self.limit = limit
