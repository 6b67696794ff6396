# intelligent text normalization helpers shared by training and querying
import unicodedata


def normalize_key(s: str) -> str:
    """
    Index key for a word: lower-cased, NFC composed.
    Accented letters stay as they are ("Café" -> "café").
    """
    if not s:
        return ""
    return unicodedata.normalize("NFC", s).lower()


def normalize_text(s) -> str:
    """Coerce arbitrary input to a str suitable for tokenizing. None -> ''."""
    if s is None:
        return ""
    if not isinstance(s, str):
        s = str(s)
    return unicodedata.normalize("NFC", s)
