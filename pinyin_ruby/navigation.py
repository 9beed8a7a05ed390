"""
Keyboard navigation over ruby tokens.

The selection is a plain index into the token sequence (NO_SELECTION when
nothing is selected). Moves only ever land on annotated tokens and never
wrap around; a move with no target returns the starting index.

Keys:
  ArrowRight . >   next character
  ArrowLeft  , <   previous character
  ArrowDown        next phrase start
  ArrowUp          previous phrase start
"""

from typing import Callable, Sequence

from .tokens import RubyToken

NO_SELECTION = -1

# A phrase starts at the first character after any of these
PHRASE_DELIMITERS = frozenset('。！？!?.\n\r，,、；;：:')


def is_phrase_start(tokens: Sequence[RubyToken], index: int) -> bool:
    """True if the annotated token at index begins a phrase."""
    if index < 0 or index >= len(tokens):
        return False
    if not tokens[index].is_ruby:
        return False
    if index == 0:
        return True

    prev_token = tokens[index - 1]
    if prev_token.is_ruby:
        return False
    return any(char in PHRASE_DELIMITERS for char in prev_token.text)


def _scan(
    tokens: Sequence[RubyToken],
    current_index: int,
    direction: int,
    accept: Callable[[int], bool],
) -> int:
    if direction not in (1, -1):
        return current_index
    new_index = current_index
    while True:
        new_index += direction
        if new_index < 0 or new_index >= len(tokens):
            return current_index
        if accept(new_index):
            return new_index


def move_selection(tokens: Sequence[RubyToken], current_index: int, direction: int) -> int:
    """Index of the next (+1) or previous (-1) Chinese character."""
    return _scan(tokens, current_index, direction, lambda i: tokens[i].is_ruby)


def move_to_phrase(tokens: Sequence[RubyToken], current_index: int, direction: int) -> int:
    """Index of the next (+1) or previous (-1) phrase start."""
    return _scan(tokens, current_index, direction, lambda i: is_phrase_start(tokens, i))


KEY_BINDINGS = {
    'ArrowRight': (move_selection, 1),
    '.': (move_selection, 1),
    '>': (move_selection, 1),
    'ArrowLeft': (move_selection, -1),
    ',': (move_selection, -1),
    '<': (move_selection, -1),
    'ArrowDown': (move_to_phrase, 1),
    'ArrowUp': (move_to_phrase, -1),
}


def handle_key(tokens: Sequence[RubyToken], current_index: int, key: str) -> tuple[int, bool]:
    """
    Apply a key press to the selection.

    Returns (new_index, handled). Unbound keys and empty token sequences are
    not handled and leave the index as it was.
    """
    if not tokens or key not in KEY_BINDINGS:
        return current_index, False
    move, direction = KEY_BINDINGS[key]
    return move(tokens, current_index, direction), True
