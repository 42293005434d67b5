import re

TERMINATOR = "."

_WORD_SPLIT = re.compile(r"[^a-z0-9\-_'’]+")
_PUNCT_SPLIT = re.compile(r"[^a-z0-9\-_'’.]+")
_FULLSTOP = re.compile(r"([a-z0-9]+)(\.)(\s+|$)")


def tokenize_words(text):
    """Lowercased words only. Periods are treated as whitespace."""
    return [w for w in _WORD_SPLIT.split((text or "").lower()) if w]


def tokenize_with_punct(text):
    """
    Lowercased words plus the sentence terminator.

    A period ending a word is split off, so "the end." becomes
    ["the", "end", "."].
    """
    text = _FULLSTOP.sub(r"\1 \2\3", (text or "").lower())
    return [w for w in _PUNCT_SPLIT.split(text) if w]
