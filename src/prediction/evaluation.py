"""
Self-evaluation: type known phrases at key centres and see what comes out.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from keyboard.alphabet import SPACE

from .predictor import WordPredictor
from .text_stats import TextStats

log = logging.getLogger(__name__)


def levenshtein(lhs: str, rhs: str) -> int:
    """Number of single-character insertions, deletions or substitutions."""
    cost = list(range(len(lhs) + 1))
    for j in range(1, len(rhs) + 1):
        new_cost = [j] + [0] * len(lhs)
        for i in range(1, len(lhs) + 1):
            match = 0 if lhs[i - 1] == rhs[j - 1] else 1
            new_cost[i] = min(cost[i] + 1, new_cost[i - 1] + 1, cost[i - 1] + match)
        cost = new_cost
    return cost[len(lhs)]


def levenshtein_ignore_case_and_padding(s1: str, s2: str) -> int:
    return levenshtein(s1.strip().lower(), s2.strip().lower())


def type_phrase(predictor: WordPredictor, phrase: str) -> TextStats:
    """
    Type phrase as perfectly centred taps, one space per word break.

    Any sentence already in progress is discarded first.
    """
    predictor.on_finish_sentence()
    for c in phrase:
        if c == SPACE:
            predictor.on_space()
        else:
            x, y = predictor.keyboard.key_centre(c)
            predictor.on_tap(x, y)
    return predictor.on_finish_sentence()


@dataclass
class EvaluationReport:
    correct: int = 0
    total: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)
    total_edit_distance: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0

    @property
    def mean_edit_distance(self) -> float:
        return self.total_edit_distance / self.total if self.total else 0.0


def evaluate(predictor: WordPredictor, phrases: Iterable[str]) -> EvaluationReport:
    """Type each phrase and compare what the predictor produced."""
    report = EvaluationReport()
    for phrase in phrases:
        typed = type_phrase(predictor, phrase).final_phrase
        report.total += 1
        report.total_edit_distance += levenshtein_ignore_case_and_padding(phrase, typed)
        if typed == phrase:
            report.correct += 1
        else:
            report.errors.append((phrase, typed))
            log.info("Mismatch >%s< != >%s<", phrase, typed)
    log.info("Got %d/%d", report.correct, report.total)
    return report
