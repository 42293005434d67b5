from collections import Counter

from .errors import FrozenModelError, InvalidFrequencyError
from .word_distribution import WeightedSampler


class FrequencyTable:
    """
    Word -> occurrence count, filled during ingestion.

    `freeze()` turns the counts into a WeightedSampler exactly once; after
    that the table refuses new words. Mutation is not thread-safe.
    """

    def __init__(self, name="frequency table"):
        self.name = name
        self._counts = Counter()
        self._sampler = None

    def __len__(self):
        return len(self._counts)

    def __contains__(self, word):
        return word in self._counts

    def __getitem__(self, word):
        return self._counts.get(word, 0)

    @property
    def frozen(self):
        return self._sampler is not None

    @property
    def total(self):
        return sum(self._counts.values())

    def add(self, word):
        if not word:
            return
        if self._sampler is not None:
            raise FrozenModelError(f"{self.name} is frozen; cannot add {word!r}")
        self._counts[word] += 1

    def update(self, words):
        for w in words:
            self.add(w)

    def snapshot(self):
        return dict(self._counts)

    def most_common(self, k=10):
        top = sorted(self._counts.items(), key=lambda wc: (-wc[1], wc[0]))
        return top[: max(0, k)]

    def freeze(self):
        if self._sampler is None:
            try:
                self._sampler = WeightedSampler(self._counts)
            except InvalidFrequencyError as e:
                raise InvalidFrequencyError(f"{self.name}: {e}") from e
        return self._sampler
