"""
Tap likelihood model.
Turns a raw tap coordinate into a probability for every key, based on a
Gaussian falloff around each key centre.
"""
import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .alphabet import (
    ALPHABET_SIZE,
    ASCII_SIZE,
    SPACE,
    Err,
    Ok,
    Result,
    UnsupportedSymbolError,
    char_to_index,
    index_to_char,
)
from .layouts import KeyLayout, Point, WIDEST_ROW, layout_for_screen

log = logging.getLogger(__name__)

# Taps further than this many standard deviations from a key on either axis
# give that key zero density.
CUTOFF_SDS = 3.0

# Replaying a committed space taps here, away from every key
SPACE_POINT: Point = (-1, -1)

# Returned by distance() for symbols outside the alphabet
INVALID_DISTANCE = 9999.0


def gaussian_2d(target: Tuple[float, float], tap: Tuple[float, float],
                sx: float, sy: float, cut_sds: float = CUTOFF_SDS) -> float:
    """
    Uncorrelated 2D Gaussian density (unnormalised).

    Short-circuits to 0 when the tap is more than cut_sds standard deviations
    away on either axis. This is a box reject, not a true truncation.
    """
    dx = tap[0] - target[0]
    dy = tap[1] - target[1]
    if abs(dx) > cut_sds * sx or abs(dy) > cut_sds * sy:
        return 0.0
    zx = dx / sx
    zy = dy / sy
    return math.exp(-(zx * zx + zy * zy) / 2)


class KeyboardModel:
    """
    Key geometry for one keyboard surface.

    configure() must be called before taps are scored, and again whenever the
    available screen size changes. Not thread-safe; one caller drives it.
    """

    def __init__(self):
        self._layout: Optional[KeyLayout] = None
        self._tap_sd: float = 0.9
        self._hidden = False

    @property
    def layout(self) -> Optional[KeyLayout]:
        return self._layout

    @property
    def tap_sd(self) -> float:
        """Standard deviation of taps, in pixels."""
        return self._tap_sd

    @property
    def is_hidden(self) -> bool:
        return self._hidden

    def configure(self, width: int, height: int, top_margin: int,
                  tap_flexibility: float,
                  row_stretch: Sequence[float] = (1.0, 1.0, 1.0)) -> None:
        """
        Set up key centres for a surface.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels
            top_margin: Extra pixels reserved above the suggestion strip
            tap_flexibility: Tap standard deviation as a fraction of a key width
            row_stretch: Per-row key width multipliers, top row first
        """
        self._hidden = False
        try:
            self._layout = layout_for_screen(width, height, top_margin, tuple(row_stretch))
        except (UnsupportedSymbolError, IndexError) as e:
            log.error("Error configuring keyboard: %s", e)
        self._tap_sd = tap_flexibility * width / WIDEST_ROW
        log.debug("Configured %dx%d keyboard, tap sd %.2fpx", width, height, self._tap_sd)

    def configure_as_hidden(self) -> None:
        """Hide the keyboard: taps score nothing until reconfigured."""
        self._hidden = True

    def key_locations(self) -> Tuple[Point, ...]:
        if self._layout is None:
            return ()
        return self._layout.centres

    def likelihoods_for_tap(self, x: float, y: float) -> np.ndarray:
        """
        Probability of each key given a tap.

        Returns a 128-long vector indexed by character code. Densities are
        normalised over the alphabet keys; every other entry stays 0. A tap
        too far from every key gives an all-zero vector.
        """
        probs = np.zeros(ASCII_SIZE)
        if self._hidden or self._layout is None:
            return probs

        densities = [
            gaussian_2d(centre, (x, y), self._tap_sd, self._tap_sd)
            for centre in self._layout.centres
        ]
        total = sum(densities)
        if total <= 0:
            return probs

        for i, density in enumerate(densities):
            try:
                probs[ord(index_to_char(i))] = density / total
            except UnsupportedSymbolError as e:
                log.error("Illegal character on keyboard: %s", e)
        return probs

    def key_centre(self, c: str) -> Point:
        """Centre of the key for c. Space maps to SPACE_POINT."""
        if c == SPACE:
            return SPACE_POINT
        if self._layout is None:
            raise RuntimeError("Keyboard has not been configured")
        return self._layout.centres[char_to_index(c)]

    def key_centre_result(self, c: str) -> Result:
        """Like key_centre, but reports an unsupported symbol as Err."""
        try:
            return Ok(self.key_centre(c))
        except UnsupportedSymbolError as e:
            return Err(e)

    def distance(self, expected_char: str, x: float, y: float) -> float:
        """Euclidean distance from (x, y) to the key for expected_char."""
        result = self.key_centre_result(expected_char)
        if not result.ok:
            return INVALID_DISTANCE
        cx, cy = result.value
        return math.hypot(x - cx, y - cy)

    def nearest_key(self, x: float, y: float) -> Optional[str]:
        """Alphabet symbol whose key centre is closest to (x, y)."""
        if self._layout is None:
            return None
        best_index = min(
            range(ALPHABET_SIZE),
            key=lambda i: math.hypot(x - self._layout.centres[i][0], y - self._layout.centres[i][1]),
        )
        return index_to_char(best_index)

    def string_distance(self, s1: str, s2: str) -> float:
        """
        Mean key-centre distance between two strings of equal length.

        Returns inf when the lengths differ.
        """
        if len(s1) != len(s2):
            return math.inf
        if not s1:
            return 0.0
        total = 0.0
        for a, b in zip(s1, s2):
            ax, ay = self.key_centre(a)
            bx, by = self.key_centre(b)
            total += math.hypot(ax - bx, ay - by)
        return total / len(s1)
