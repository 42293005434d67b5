from dataclasses import dataclass
from typing import List, Tuple

from .frequency import FrequencyTable
from .tokenizer import tokenize_words


@dataclass(frozen=True)
class DictionaryStats:
    words: int
    tokens: int
    top: List[Tuple[str, int]]


class Dictionary:
    """
    Flat unigram model: every word is drawn independently, weighted by how
    often it occurred in the corpus. No ordering, no punctuation.
    """

    def __init__(self):
        self.table = FrequencyTable("dictionary")

    def __len__(self):
        return len(self.table)

    @property
    def frozen(self):
        return self.table.frozen

    def add_text(self, text):
        self.table.update(tokenize_words(text))

    def freeze(self):
        return self.table.freeze()

    def random_word(self, rng=None):
        return self.freeze().sample(rng)

    def random_sentence(self, num_words, rng=None):
        return " ".join(self.random_word(rng) for _ in range(max(0, num_words)))

    def top_words(self, k=10):
        return self.table.most_common(k)

    def stats(self, k=10):
        return DictionaryStats(
            words=len(self.table),
            tokens=self.table.total,
            top=self.top_words(k),
        )
