"""
Word predictor for tap typing on small, imprecise touch surfaces.

The current word is predicted from the committed history (the words before
it) and the taps made so far within it. Each tap is scored against every key
by the KeyboardModel and combined with the LanguageModel's next-character
distribution; a small beam of the best partial words is carried from tap to
tap.

Backspace inside a word is handled by forgetting the last tap and replaying
the rest from scratch, so the beam afterwards is exactly what it would have
been had the tap never happened. Backspace over a word boundary replays the
previous word by tapping its key centres, which can give a different beam
from the one the user's original taps produced.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence, Tuple

from keyboard.alphabet import ALPHABET, SPACE
from keyboard.keyboard_model import KeyboardModel

from . import vectors
from .beam import TopN, WeightedString
from .config import Config
from .corpus import iter_corpus, learn_corpus, load_common_words
from .errors import InvalidStateError, UnsupportedSymbolError
from .language_model import LanguageModel
from .text_stats import TextStats

log = logging.getLogger(__name__)

Tap = Tuple[float, float]


class PredictorState(Enum):
    IDLE = auto()       # No word in progress
    TYPING = auto()     # Taps recorded for the current word


@dataclass(frozen=True)
class PredictionResult:
    """
    What the display should show after an input event.

    Attributes:
        full_text: Committed history followed by the inline completion
        best: The favoured completion of the current word
        suggestions: Alternatives for the suggestion bar, best first
    """
    full_text: str
    best: str
    suggestions: Tuple[str, ...] = ()


EMPTY_RESULT = PredictionResult("", "")


class WordPredictor:
    """
    One typing session.

    All calls must come from a single caller, one at a time. The session is
    reset by on_finish_sentence() and torn down by destroy().
    """

    def __init__(self, keyboard: Optional[KeyboardModel] = None,
                 config: Optional[Config] = None,
                 language_model: Optional[LanguageModel] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            keyboard: Configured keyboard. If None, one is built from config.layout
            config: Engine settings. Defaults to Config()
            language_model: Pre-trained model. If None, one is trained from
                the corpora named in config.corpus
            clock: Returns the current time in seconds
        """
        self._config = config or Config()
        self._clock = clock

        if keyboard is None:
            keyboard = KeyboardModel()
            layout = self._config.layout
            keyboard.configure(layout.width, layout.height, layout.top_margin,
                               layout.tap_flexibility, layout.row_stretch)
        self._keyboard: Optional[KeyboardModel] = keyboard

        if language_model is None:
            language_model = LanguageModel(self._config.predictor.max_context)
            self._seed(language_model)
        self._lm: Optional[LanguageModel] = language_model

        self._destroyed = False
        self._reset_sentence()

    def _seed(self, lm: LanguageModel) -> None:
        corpus = self._config.corpus
        if corpus.use_common_words:
            learn_corpus(lm, load_common_words())
        for path in corpus.extra_paths:
            learn_corpus(lm, iter_corpus(path))

    def _reset_sentence(self) -> None:
        # History starts as a space so the first word is predicted as a word start
        self._history = SPACE
        self._committed: List[str] = []
        self._taps: List[Tap] = []
        self._hypotheses: Tuple[WeightedString, ...] = ()
        self._first_time: Optional[float] = None
        self._last_time: Optional[float] = None
        self._backspace_count = 0
        self._suggestion_pick_count = 0
        self._last_result = EMPTY_RESULT

    # ------------- read-only views -------------

    @property
    def keyboard(self) -> KeyboardModel:
        self._check_alive()
        return self._keyboard

    @property
    def language_model(self) -> LanguageModel:
        self._check_alive()
        return self._lm

    @property
    def state(self) -> PredictorState:
        return PredictorState.TYPING if self._taps else PredictorState.IDLE

    @property
    def history(self) -> str:
        """Text before the current word, with a trailing space."""
        return self._history

    @property
    def committed_words(self) -> Tuple[str, ...]:
        return tuple(self._committed)

    @property
    def taps(self) -> Tuple[Tap, ...]:
        return tuple(self._taps)

    @property
    def tap_count(self) -> int:
        return len(self._taps)

    @property
    def hypotheses(self) -> Tuple[Tuple[str, float], ...]:
        """Live partial words and their weights, best first."""
        return tuple((h.text, h.weight) for h in self._hypotheses)

    @property
    def last_result(self) -> PredictionResult:
        return self._last_result

    @property
    def backspace_count(self) -> int:
        return self._backspace_count

    @property
    def suggestion_pick_count(self) -> int:
        return self._suggestion_pick_count

    # ------------- input events -------------

    def configure_layout(self, width: int, height: int, top_margin: int,
                         tap_flexibility: float, row_stretch: Sequence[float]) -> None:
        self._check_alive()
        self._keyboard.configure(width, height, top_margin, tap_flexibility, row_stretch)

    def learn(self, sentence: str) -> None:
        self._check_alive()
        self._lm.learn(sentence)

    def on_tap(self, x: float, y: float) -> PredictionResult:
        """Extend the current word with a tap at (x, y)."""
        self._check_alive()
        self._mark_time()
        return self._tap(x, y)

    def on_space(self) -> PredictionResult:
        """Commit the current best completion and start a new word."""
        self._check_alive()
        if not self._taps:
            return self._last_result
        return self._commit(self._last_result.best)

    def on_suggestion_picked(self, text: str) -> PredictionResult:
        """Commit text in place of the current completion."""
        self._check_alive()
        self._suggestion_pick_count += 1
        return self._commit(text)

    def on_backspace(self) -> PredictionResult:
        """
        Undo the last tap, or the last word boundary if no word is in progress.

        Raises:
            UnsupportedSymbolError: A committed word being reopened holds a
                character with no key. The session is left as it was.
        """
        self._check_alive()
        self._mark_time()
        self._backspace_count += 1
        snapshot = self._snapshot()

        if self._taps:
            self._taps.pop()
            if not self._taps:
                self._hypotheses = ()
                self._last_result = PredictionResult(self._display_prefix(), "")
                return self._last_result
            return self._replay(list(self._taps), snapshot)

        if self._committed:
            word = self._committed.pop()
            self._history = self._join_history()
            try:
                centres = [self._keyboard.key_centre(c) for c in word]
            except UnsupportedSymbolError:
                self._restore(snapshot)
                raise
            return self._replay(centres, snapshot)

        log.debug("Backspace with nothing to delete")
        return self._last_result

    def on_finish_sentence(self) -> TextStats:
        """Close the sentence, return its statistics and start afresh."""
        self._check_alive()
        text = self._history.strip()
        if self._taps:
            text = f"{text} {self._last_result.best}"
        elapsed_ms = 0.0
        if self._first_time is not None:
            elapsed_ms = (self._last_time - self._first_time) * 1000.0
        stats = TextStats(text, elapsed_ms, self._backspace_count, self._suggestion_pick_count)
        self._reset_sentence()
        return stats

    def destroy(self) -> None:
        """Release the session. Any later call raises InvalidStateError."""
        self._keyboard = None
        self._lm = None
        self._committed = []
        self._taps = []
        self._hypotheses = ()
        self._destroyed = True

    # ------------- internals -------------

    def _check_alive(self) -> None:
        if self._destroyed:
            raise InvalidStateError("Predictor has been destroyed")

    def _mark_time(self) -> None:
        self._last_time = self._clock()
        if self._first_time is None:
            self._first_time = self._last_time

    def _display_prefix(self) -> str:
        history = self._history.strip()
        return f"{history} " if history else ""

    def _join_history(self) -> str:
        return " ".join(self._committed) + SPACE

    def _tap(self, x: float, y: float) -> PredictionResult:
        cfg = self._config.predictor
        self._taps.append((x, y))

        hypotheses = self._hypotheses or (WeightedString("", 1.0),)
        tap_probs = self._keyboard.likelihoods_for_tap(x, y)

        top: TopN[WeightedString] = TopN(cfg.beam_width)
        for hypothesis in hypotheses:
            lm_probs = self._lm.witten_bell(self._history + hypothesis.text)
            final_probs = vectors.multiply(tap_probs, lm_probs)
            for c in ALPHABET:
                code = ord(c)
                if tap_probs[code] > cfg.tap_floor:
                    p = final_probs[code]
                    if p > cfg.candidate_floor:
                        # Squared to sharpen the gap between likely and unlikely strings
                        top.add(WeightedString(hypothesis.text + c, hypothesis.weight * p * p))

        # Favour strings that look like whole words, so space takes the top one
        survivors = top.values()
        for candidate in survivors:
            candidate.multiply_weight(self._lm.probability_before_space(SPACE + candidate.text))
        survivors.sort(key=lambda s: s.weight, reverse=True)

        suggestions = tuple(s.text for s in survivors[:cfg.suggestion_count])
        prefix = self._display_prefix()
        if suggestions:
            result = PredictionResult(prefix + suggestions[0], suggestions[0], suggestions)
        else:
            result = PredictionResult(prefix, "")

        self._hypotheses = tuple(survivors)
        self._last_result = result
        log.debug("Tap (%s, %s) -> %s", x, y, survivors)
        return result

    def _replay(self, taps: Sequence[Tap], snapshot) -> PredictionResult:
        """Rebuild the current word from scratch by re-issuing taps in order."""
        self._hypotheses = ()
        self._taps = []
        result = self._last_result
        try:
            for x, y in taps:
                result = self._tap(x, y)
        except Exception:
            self._restore(snapshot)
            raise
        return result

    def _commit(self, word: str) -> PredictionResult:
        if word:
            self._committed.append(word)
            self._history = self._join_history()
        self._hypotheses = ()
        self._taps = []
        self._last_result = PredictionResult(self._display_prefix(), word)
        return self._last_result

    def _snapshot(self):
        return (self._history, list(self._committed), list(self._taps),
                self._hypotheses, self._last_result)

    def _restore(self, snapshot) -> None:
        (self._history, self._committed, self._taps,
         self._hypotheses, self._last_result) = snapshot
