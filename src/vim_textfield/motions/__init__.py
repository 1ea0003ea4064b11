"""Pure cursor motions and the text-object finder.

``MOTIONS`` maps a motion's key sequence to its implementation so the
dispatchers can resolve plain motion keys without a switch.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from vim_textfield.buffer.state import TextRange

from .basic import (
    matching_bracket,
    motion_document_end,
    motion_document_start,
    motion_down,
    motion_first_non_blank,
    motion_left,
    motion_line_end,
    motion_line_start,
    motion_match_pair,
    motion_paragraph_backward,
    motion_paragraph_forward,
    motion_right,
    motion_up,
    paragraph_boundary,
)
from .find import (
    FIND_KINDS,
    find_char_in_line,
    find_char_index,
    find_operator_range,
    motion_find,
)
from .text_objects import TEXT_OBJECT_PAIRS, find_text_object
from .words import (
    is_bigword_char,
    is_word_char,
    motion_bigword_backward,
    motion_bigword_end,
    motion_bigword_forward,
    motion_word_backward,
    motion_word_end,
    motion_word_end_backward,
    motion_word_forward,
)

MotionFunc = Callable[[str, int, int], int]

MOTIONS: Dict[str, MotionFunc] = {
    "h": motion_left,
    "l": motion_right,
    "j": motion_down,
    "k": motion_up,
    "w": motion_word_forward,
    "b": motion_word_backward,
    "e": motion_word_end,
    "ge": motion_word_end_backward,
    "W": motion_bigword_forward,
    "B": motion_bigword_backward,
    "E": motion_bigword_end,
    "0": motion_line_start,
    "^": motion_first_non_blank,
    "$": motion_line_end,
    "gg": motion_document_start,
    "G": motion_document_end,
    "{": motion_paragraph_backward,
    "}": motion_paragraph_forward,
    "%": motion_match_pair,
}

VERTICAL_MOTIONS = frozenset({"j", "k"})


def is_motion(name: str) -> bool:
    return name in MOTIONS


def execute_motion(
    name: str,
    text: str,
    pos: int,
    count: int = 1,
    *,
    column: Optional[int] = None,
) -> int:
    """Run motion ``name`` from ``pos``; ``column`` only steers ``j``/``k``."""

    if name in VERTICAL_MOTIONS:
        vertical = motion_down if name == "j" else motion_up
        return vertical(text, pos, count, column=column)
    return MOTIONS[name](text, pos, count)


def motion_range(name: str, text: str, pos: int, count: int = 1) -> TextRange:
    """Exclusive span between ``pos`` and where motion ``name`` lands."""

    return TextRange.between(pos, execute_motion(name, text, pos, count))


__all__ = [
    "MOTIONS",
    "MotionFunc",
    "VERTICAL_MOTIONS",
    "FIND_KINDS",
    "TEXT_OBJECT_PAIRS",
    "is_motion",
    "execute_motion",
    "motion_range",
    "motion_find",
    "find_char_in_line",
    "find_char_index",
    "find_operator_range",
    "find_text_object",
    "is_word_char",
    "is_bigword_char",
    "matching_bracket",
    "paragraph_boundary",
    "motion_left",
    "motion_right",
    "motion_down",
    "motion_up",
    "motion_line_start",
    "motion_first_non_blank",
    "motion_line_end",
    "motion_document_start",
    "motion_document_end",
    "motion_paragraph_forward",
    "motion_paragraph_backward",
    "motion_match_pair",
    "motion_word_forward",
    "motion_word_backward",
    "motion_word_end",
    "motion_word_end_backward",
    "motion_bigword_forward",
    "motion_bigword_backward",
    "motion_bigword_end",
]
