"""
Beam primitives: weighted hypotheses and a bounded top-N selector.
"""
from typing import Generic, List, Protocol, TypeVar


class Weighted(Protocol):
    weight: float


class WeightedString:
    """
    A candidate string with a relative likelihood.

    The text is fixed; the weight may be rescaled. Two instances with the same
    text are the same hypothesis, whatever their weights.
    """
    __slots__ = ('_text', 'weight')

    def __init__(self, text: str, weight: float):
        self._text = text
        self.weight = float(weight)

    @property
    def text(self) -> str:
        return self._text

    def multiply_weight(self, factor: float) -> None:
        self.weight *= factor

    def __eq__(self, other):
        if not isinstance(other, WeightedString):
            return NotImplemented
        return self._text == other._text

    def __hash__(self):
        return hash(self._text)

    def __repr__(self):
        return f"{self._text}({self.weight:.4f})"


T = TypeVar('T', bound=Weighted)


class TopN(Generic[T]):
    """
    Keeps the N heaviest items seen, best first.

    Insertion is O(N). Among equal weights the earlier item keeps the higher
    rank; a later equal item goes below it.
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError("TopN capacity must be at least 1")
        self._n = n
        self._values: List[T] = []

    @property
    def capacity(self) -> int:
        return self._n

    def add(self, item: T) -> None:
        put_at = len(self._values)
        for i in range(len(self._values) - 1, -1, -1):
            if item.weight > self._values[i].weight:
                put_at = i
            else:
                break

        if put_at < self._n:
            self._values.insert(put_at, item)
            del self._values[self._n:]

    def values(self) -> List[T]:
        """Filled entries in rank order."""
        return list(self._values)

    def __len__(self):
        return len(self._values)
