from bisect import bisect_right
from itertools import accumulate
import random

from .errors import InternalInvariantError, InvalidFrequencyError


class WeightedSampler:
    """
    Words laid out on an integer line according to how often they occur.

    Each word owns the half-open range [offset, offset + count). The most
    frequent word comes first, starting at 0, so a uniform draw from
    [0, total) picks words with their natural frequency: "and" comes up far
    more often than "house", which is what makes generated text look like
    the corpus when it is used to exercise a search engine or a database.

    Built once from a snapshot of word counts and never changed afterwards,
    so a sampler can be shared between threads as long as every caller
    brings its own (or a thread-safe) random source.
    """

    __slots__ = ("_words", "_offsets", "_counts", "_total")

    def __init__(self, word_counts):
        if not word_counts:
            raise InvalidFrequencyError("empty word distribution")

        for word, count in word_counts.items():
            if not word or count <= 0:
                raise InvalidFrequencyError(
                    f"illegal word {word!r} with count {count} in word distribution"
                )

        # count descending, ties by word so the layout is reproducible
        ordered = sorted(word_counts.items(), key=lambda wc: (-wc[1], wc[0]))

        self._words = tuple(w for w, _ in ordered)
        self._counts = tuple(c for _, c in ordered)
        self._offsets = (0,) + tuple(accumulate(self._counts))[:-1]
        self._total = self._offsets[-1] + self._counts[-1]

    def __len__(self):
        return len(self._words)

    def __repr__(self):
        return f"WeightedSampler(words={len(self._words)}, total={self._total})"

    @property
    def total(self):
        """Exclusive upper bound of the offset range."""
        return self._total

    @property
    def entries(self):
        return tuple(zip(self._words, self._offsets))

    def count(self, word):
        try:
            return self._counts[self._words.index(word)]
        except ValueError:
            return 0

    def draw(self, offset):
        """Return the word whose range contains `offset`.

        Offsets below 0 resolve to the first word, offsets at or past
        `total` to the last one.
        """
        if len(self._words) == 1:
            return self._words[0]

        if offset < 0:
            return self._words[0]
        if offset >= self._total:
            return self._words[-1]

        i = bisect_right(self._offsets, offset) - 1

        start = self._offsets[i] if i >= 0 else None
        end = self._offsets[i + 1] if i + 1 < len(self._offsets) else self._total
        if start is None or not start <= offset < end:
            raise InternalInvariantError(
                f"could not resolve offset {offset} in range [0-{self._total}): "
                f"index {i}, range [{start}-{end})"
            )

        return self._words[i]

    def sample(self, rng=None):
        if len(self._words) == 1:
            return self._words[0]
        return self.draw((rng or random).randrange(self._total))

    def random_sentence(self, num_words, rng=None):
        return " ".join(self.sample(rng) for _ in range(max(0, num_words)))
