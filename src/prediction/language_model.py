"""
Character-level language model.

Counts every context of up to MAX_ORDER characters seen in the training text
and predicts the next character with Witten-Bell smoothing: the distribution
for a long context is blended with the one for the context minus its first
character, down to the plain character frequencies. So "x this" gently
degrades to " this" when "x this" has little or no evidence.

The alphabet is fixed (a-z, hyphen, apostrophe); everything else in the
training text is treated as a word break.
"""
import logging
from typing import Dict, Iterable, Optional

import numpy as np

from keyboard.alphabet import ASCII_SIZE, SPACE, is_symbol

from . import vectors

log = logging.getLogger(__name__)

MAX_ORDER = 7

# probability_before_space() output range
SPACE_PROB_LOW = 0.1
SPACE_PROB_HIGH = 1.0


def filter_text(text: str) -> str:
    """
    Lowercase text and keep only alphabet characters.

    Any run of other characters becomes a single space; the result is
    stripped of leading and trailing spaces.
    """
    out = []
    prev_was_space = True
    for c in text.lower():
        if is_symbol(c):
            out.append(c)
            prev_was_space = False
        elif not prev_was_space:
            out.append(SPACE)
            prev_was_space = True
    return "".join(out).strip()


class LanguageModel:
    """
    N-gram store plus unigram counts.

    Learning only ever adds counts. Not safe to learn while another caller is
    predicting.
    """

    def __init__(self, max_order: int = MAX_ORDER):
        self.max_order = max_order
        self._unigrams = np.zeros(ASCII_SIZE)
        self._ngrams: Dict[str, np.ndarray] = {}
        self._unigram_distribution: Optional[np.ndarray] = None

    @property
    def unigram_total(self) -> float:
        return float(self._unigrams.sum())

    def __len__(self):
        """Number of distinct contexts stored."""
        return len(self._ngrams)

    def learn(self, text: str) -> None:
        """
        Learn a sentence (or a single word).

        The filtered text is padded with a space on each side so word starts
        and ends are learned as transitions from and to space.
        """
        filtered = filter_text(text)
        if not filtered:
            return
        s = SPACE + filtered + SPACE
        for i, c in enumerate(s):
            code = ord(c)
            self._unigrams[code] += 1
            for j in range(max(0, i - self.max_order), i):
                context = s[j:i]
                counts = self._ngrams.get(context)
                if counts is None:
                    counts = self._ngrams[context] = np.zeros(ASCII_SIZE)
                counts[code] += 1
        self._unigram_distribution = None

    def learn_all(self, texts: Iterable[str]) -> int:
        n = 0
        for text in texts:
            self.learn(text)
            n += 1
        return n

    def counts(self, context: str) -> np.ndarray:
        """Next-character counts for an exact context (a copy)."""
        matches = self._ngrams.get(context)
        if matches is None:
            return np.zeros(ASCII_SIZE)
        return matches.copy()

    def unigram_distribution(self) -> np.ndarray:
        if self._unigram_distribution is None:
            self._unigram_distribution = vectors.normalise(self._unigrams)
        return self._unigram_distribution

    def witten_bell(self, context: str) -> np.ndarray:
        """
        Smoothed next-character distribution for context.

        Only the last max_order characters are used. An unseen context falls
        back to the context without its first character, and the empty context
        to the unigram distribution. Otherwise the context's own relative
        frequencies are weighted by lambda = 1 - types / (types + total),
        with the remainder going to the shorter context.

        Returns:
            128-long vector indexed by character code, summing to 1 once
            anything has been learned.
        """
        if len(context) > self.max_order:
            context = context[-self.max_order:]

        matches = self._ngrams.get(context)
        total = float(matches.sum()) if matches is not None else 0.0

        if total == 0:
            if not context:
                return self.unigram_distribution()
            return self.witten_bell(context[1:])

        types = vectors.count_nonzero(matches)
        lam = 1.0 - types / (types + total)
        if len(context) > 1:
            backoff = self.witten_bell(context[1:])
        else:
            backoff = self.unigram_distribution()
        return vectors.add(lam * (matches / total), (1.0 - lam) * backoff)

    def probability_before_space(self, context: str) -> float:
        """
        How likely a space (word end) is to follow context.

        Uses the raw counts for the exact context, rescaled into
        [SPACE_PROB_LOW, SPACE_PROB_HIGH] so a word end is never ruled out or
        certain. Unseen contexts, including any longer than max_order, get
        the floor.
        """
        matches = self._ngrams.get(context)
        if matches is None:
            return SPACE_PROB_LOW
        total = float(matches.sum())
        if total == 0:
            return SPACE_PROB_LOW
        p = matches[ord(SPACE)] / total
        return float(p * (SPACE_PROB_HIGH - SPACE_PROB_LOW) + SPACE_PROB_LOW)
