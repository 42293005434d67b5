from collections import defaultdict
from dataclasses import dataclass
import random
from typing import List, Tuple

from .errors import FrozenModelError, InternalInvariantError, InvalidFrequencyError
from .frequency import FrequencyTable
from .tokenizer import TERMINATOR, tokenize_with_punct
from .word_distribution import WeightedSampler

# A full stop after a full stop is redrawn at most PUNCT_RETRIES times, and
# only for words with more than PUNCT_RETRY_MIN_SUCCESSORS distinct successors.
PUNCT_RETRY_MIN_SUCCESSORS = 10
PUNCT_RETRIES = 10


@dataclass(frozen=True)
class GraphStats:
    words: int
    edges: int
    transitions: int
    top: List[Tuple[str, int]]


class WordGraph:
    """
    First-order Markov chain over words and the "." terminator.

    Every fragment passed to `add_text` contributes one transition per
    adjacent word pair plus an implicit transition from its last word to ".".
    A corpus without full stops leaves "." without successors, and walking
    into it raises InternalInvariantError.
    `freeze()` turns each word's successor counts into a WeightedSampler;
    after that the graph is read-only and safe to share between threads.
    """

    def __init__(self):
        self.bigram_counts = defaultdict(FrequencyTable)
        self._samplers = None
        self._vocabulary = ()

    def __len__(self):
        return len(self.bigram_counts)

    def __contains__(self, word):
        return word in self.bigram_counts

    @property
    def frozen(self):
        return self._samplers is not None

    @property
    def vocabulary(self):
        return self._vocabulary

    def add_text(self, text):
        if self.frozen:
            raise FrozenModelError("word graph is frozen; create a new one for a new corpus")

        tokens = tokenize_with_punct(text)
        for w1, w2 in zip(tokens, tokens[1:] + [TERMINATOR]):
            self.bigram_counts[w1].add(w2)

    def freeze(self):
        if self.frozen:
            return self

        if not self.bigram_counts:
            raise InvalidFrequencyError("word graph: corpus produced no words")

        samplers = {}
        for word, table in self.bigram_counts.items():
            next_words = table.snapshot()
            # Words after a full stop should not be another full stop.
            if word == TERMINATOR and len(next_words) > 1:
                next_words.pop(TERMINATOR, None)
            try:
                samplers[word] = WeightedSampler(next_words)
            except InvalidFrequencyError as e:
                raise InvalidFrequencyError(f"word graph, successors of {word!r}: {e}") from e

        self._vocabulary = tuple(sorted(samplers))
        self._samplers = samplers
        return self

    def successors(self, word):
        table = self.bigram_counts.get(word)
        return table.snapshot() if table is not None else {}

    def random_sentence(self, num_words, rng=None):
        """
        num_words: int (number of words generated after the random start word)

        Returns num_words + 1 space-separated tokens.
        """
        self.freeze()
        rng = rng or random

        current = rng.choice(self._vocabulary)
        out = [current]
        last_was_punct = False

        for _ in range(max(0, num_words)):
            d = self._samplers.get(current)
            if d is None:
                raise InternalInvariantError(
                    f"could not find a word distribution for word {current!r}"
                )

            if last_was_punct and len(d) > PUNCT_RETRY_MIN_SUCCESSORS:
                # Try not to have a full stop following another full stop.
                for _ in range(PUNCT_RETRIES):
                    current = d.sample(rng)
                    if current != TERMINATOR:
                        break
                last_was_punct = False
            else:
                current = d.sample(rng)

            out.append(current)
            if current == TERMINATOR:
                last_was_punct = True

        return " ".join(out)

    def stats(self, k=10):
        occurrences = {w: t.total for w, t in self.bigram_counts.items()}
        top = sorted(occurrences.items(), key=lambda wc: (-wc[1], wc[0]))
        return GraphStats(
            words=len(self.bigram_counts),
            edges=sum(len(t) for t in self.bigram_counts.values()),
            transitions=sum(occurrences.values()),
            top=top[: max(0, k)],
        )
