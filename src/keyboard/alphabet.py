"""
Fixed input alphabet.
26 Latin letters plus hyphen and apostrophe, densely indexed 0-27.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union


LETTERS = "abcdefghijklmnopqrstuvwxyz"
ALPHABET = LETTERS + "-'"
ALPHABET_SIZE = len(ALPHABET)

# Probability vectors are indexed by character code
ASCII_SIZE = 128
SPACE = " "


class UnsupportedSymbolError(ValueError):
    """Character is outside the fixed alphabet."""

    def __init__(self, symbol):
        super().__init__(f"Unsupported character {symbol!r}")
        self.symbol = symbol


def char_to_index(c: str) -> int:
    """Map an alphabet character (either case) to its dense index."""
    if len(c) == 1:
        lower = c.lower()
        if "a" <= lower <= "z":
            return ord(lower) - ord("a")
        if c == "-":
            return 26
        if c == "'":
            return 27
    raise UnsupportedSymbolError(c)


def index_to_char(i: int) -> str:
    """Inverse of char_to_index."""
    if 0 <= i < ALPHABET_SIZE:
        return ALPHABET[i]
    raise UnsupportedSymbolError(i)


def is_symbol(c: str) -> bool:
    return len(c) == 1 and c in ALPHABET


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: Exception

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Ok, Err]
