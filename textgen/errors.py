class TextGenError(Exception):
    pass


class InvalidFrequencyError(TextGenError, ValueError):
    """A frequency table that cannot be turned into a word distribution."""


class InternalInvariantError(TextGenError, RuntimeError):
    """A frozen model is inconsistent. This is a bug, not a data problem."""


class FrozenModelError(TextGenError, RuntimeError):
    """Text was added to a model after it was frozen."""
