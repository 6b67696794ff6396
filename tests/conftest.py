import pytest

from predictive_text import AutoCompleter, TextSource


@pytest.fixture
def sources():
    return [
        TextSource("base", "the cat sat\nthe cat ran\nI am happy. I am sad. I am happy."),
        TextSource("persona", "Good morning everyone! Thanks for coming."),
    ]


@pytest.fixture
def ac(sources):
    a = AutoCompleter()
    assert a.train(sources)
    yield a
    a.shutdown()
