"""
WristType Keyboard Module

Fixed alphabet, key layout and tap likelihoods.
"""
from .alphabet import (
    ALPHABET,
    ASCII_SIZE,
    Err,
    Ok,
    UnsupportedSymbolError,
    char_to_index,
    index_to_char,
)
from .layouts import ROWS, KeyLayout, get_key_positions, layout_for_screen
from .keyboard_model import KeyboardModel, SPACE_POINT

__all__ = [
    'ALPHABET',
    'ASCII_SIZE',
    'Err',
    'Ok',
    'UnsupportedSymbolError',
    'char_to_index',
    'index_to_char',
    'ROWS',
    'KeyLayout',
    'get_key_positions',
    'layout_for_screen',
    'KeyboardModel',
    'SPACE_POINT',
]
