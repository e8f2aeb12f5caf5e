"""
Per-sentence entry statistics.
"""
from dataclasses import dataclass, field

# Standard text-entry convention: a "word" is five characters
CHARS_PER_WORD = 5.0


@dataclass(frozen=True)
class TextStats:
    """
    Summary of one sentence of input.

    Time runs from the first to the last tap or backspace of the sentence.
    A record is only valid for a non-empty phrase typed over a positive time.
    """
    final_phrase: str
    elapsed_ms: float
    backspace_count: int
    suggestion_pick_count: int
    valid: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'final_phrase', self.final_phrase.strip())
        object.__setattr__(self, 'valid', bool(self.final_phrase) and self.elapsed_ms > 0)

    @property
    def input_time_seconds(self) -> float:
        return self.elapsed_ms / 1000.0

    @property
    def words_per_minute(self) -> float:
        minutes = self.elapsed_ms / (1000.0 * 60)
        if minutes <= 0:
            return 0.0
        return (len(self.final_phrase) / CHARS_PER_WORD) / minutes

    def as_dict(self) -> dict:
        return {
            'finalString': self.final_phrase,
            'inputTime': f"{self.input_time_seconds:.1f}",
            'wpm': f"{self.words_per_minute:.2f}",
            'backspaces': self.backspace_count,
            'suggestions': self.suggestion_pick_count,
        }

    def to_tsv(self) -> str:
        """Tab-separated: phrase, seconds, wpm, backspaces, suggestions."""
        return "\t".join(str(v) for v in self.as_dict().values())
