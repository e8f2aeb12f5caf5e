"""
Keyboard layout definitions.
Three fixed rows covering the input alphabet, laid out in screen pixels.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .alphabet import ALPHABET_SIZE, char_to_index


# Rows from top to bottom. Hyphen and apostrophe flank the bottom row.
ROWS: List[str] = ["qwertyuiop", "asdfghjkl", "-zxcvbnm'"]
WIDEST_ROW = max(len(row) for row in ROWS)

# Fractions of the surface kept free around the keys
SPACE_AT_TOP = 0.05
SPACE_AT_BOTTOM = 0.12
SPACE_LEFT_RIGHT = 0.05


Point = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round to the nearest pixel, halves away from zero on the positive side."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class KeyLayout:
    """
    Key centres for one screen geometry.

    Attributes:
        centres: One point per alphabet index, in alphabet order
        suggestion_bar_centre_y: Vertical centre of the suggestion strip
        suggestion_bar_bottom: Lower edge of the suggestion strip
        keyboard_bottom: Lower edge of the key area (half a key of comfort margin)
        key_width: Unstretched key width in pixels
        key_height: Row pitch in pixels
    """
    centres: Tuple[Point, ...]
    suggestion_bar_centre_y: int
    suggestion_bar_bottom: int
    keyboard_bottom: float
    key_width: float
    key_height: float

    def centre_of(self, c: str) -> Point:
        return self.centres[char_to_index(c)]


def get_key_positions(x_offset: float, y_offset: float, width: float, height: float,
                      row_stretch: Optional[Sequence[float]] = None) -> KeyLayout:
    """
    Lay the rows out inside the given rectangle.

    The top quarter-row is left free for the suggestion strip, so rows sit at
    1.5, 2.5 and 3.5 key heights below the top. Shorter rows are centred; a row
    stretch widens (or narrows) each key of that row around the row's centre.
    """
    if row_stretch and len(row_stretch) != len(ROWS):
        raise IndexError(f"Row stretches do not match the keyboard row count of {len(ROWS)}")

    key_width = width / WIDEST_ROW
    key_height = height / (len(ROWS) + 1.0)

    suggestion_centre = round_half_up(y_offset + round_half_up(0.5 * key_height))
    suggestion_bottom = round_half_up(suggestion_centre + 0.33 * key_height)

    centres: List[Optional[Point]] = [None] * ALPHABET_SIZE
    for row_idx, row in enumerate(ROWS):
        offset = (WIDEST_ROW * key_width - len(row) * key_width) / 2
        row_key_width = key_width
        if row_stretch:
            row_key_width = key_width * row_stretch[row_idx]
            offset -= (row_key_width - key_width) * len(row) / 2.0

        for col, char in enumerate(row):
            x = round_half_up(x_offset + round_half_up(offset + (0.5 + col) * row_key_width))
            y = round_half_up(y_offset + round_half_up((1.5 + row_idx) * key_height))
            centres[char_to_index(char)] = (x, y)

    return KeyLayout(
        centres=tuple(centres),
        suggestion_bar_centre_y=suggestion_centre,
        suggestion_bar_bottom=suggestion_bottom,
        keyboard_bottom=y_offset + height + key_height / 2,
        key_width=key_width,
        key_height=key_height,
    )


def layout_for_screen(width: int, height: int, top_margin: int = 0,
                      row_stretch: Optional[Sequence[float]] = None) -> KeyLayout:
    """Key layout for a full surface, leaving the standard margins free."""
    space_at_top = round_half_up(height * SPACE_AT_TOP) + top_margin
    space_at_bottom = round_half_up(height * SPACE_AT_BOTTOM)
    side = SPACE_LEFT_RIGHT * width
    return get_key_positions(
        side,
        space_at_top,
        width - 2 * side,
        height - (space_at_top + space_at_bottom),
        row_stretch,
    )

