"""
Training and evaluation text bundled with the engine.
"""
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
COMMON_WORDS_PATH = DATA_DIR / "common_words.txt"
TEST_PHRASES_PATH = DATA_DIR / "test_phrases.txt"


def iter_corpus(path: Union[str, Path]) -> Iterator[str]:
    """Yield the non-empty lines of a text file, stripped."""
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                yield line


def learn_corpus(lm, lines: Iterable[str]) -> int:
    """Feed each line to the language model. Returns the number learned."""
    count = lm.learn_all(lines)
    log.debug("Learned %d lines", count)
    return count


def load_common_words() -> List[str]:
    """
    Common English words and short phrases.

    Frequent words appear several times, roughly in proportion to the log of
    their frequency.
    """
    return list(iter_corpus(COMMON_WORDS_PATH))


def load_test_phrases() -> List[str]:
    return list(iter_corpus(TEST_PHRASES_PATH))
