"""Word (``w b e ge``) and WORD (``W B E``) motions.

A *word* is a run of ``[A-Za-z0-9_]``; every other character, whitespace
and punctuation alike, separates words. A *WORD* is a run of
non-whitespace characters.
"""

from __future__ import annotations

import string
from typing import Callable

WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")

CharClass = Callable[[str], bool]


def is_word_char(char: str) -> bool:
    return char in WORD_CHARS


def is_bigword_char(char: str) -> bool:
    return not char.isspace()


def _next_start(text: str, pos: int, inside: CharClass) -> int:
    n = len(text)
    while pos < n and inside(text[pos]):
        pos += 1
    while pos < n and not inside(text[pos]):
        pos += 1
    return pos


def _prev_start(text: str, pos: int, inside: CharClass) -> int:
    if pos > 0:
        pos -= 1
    while pos > 0 and not inside(text[pos]):
        pos -= 1
    while pos > 0 and inside(text[pos - 1]):
        pos -= 1
    return pos


def _next_end(text: str, pos: int, inside: CharClass) -> int:
    n = len(text)
    if pos < n:
        pos += 1
    while pos < n and not inside(text[pos]):
        pos += 1
    while pos < n and inside(text[pos]):
        pos += 1
    return max(0, pos - 1)


def _prev_end(text: str, pos: int, inside: CharClass) -> int:
    while pos > 0 and inside(text[pos]):
        pos -= 1
    while pos > 0 and not inside(text[pos]):
        pos -= 1
    return pos


def motion_word_forward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _next_start(text, pos, is_word_char)
    return pos


def motion_word_backward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _prev_start(text, pos, is_word_char)
    return pos


def motion_word_end(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _next_end(text, pos, is_word_char)
    return pos


def motion_word_end_backward(text: str, pos: int, count: int = 1) -> int:
    """``ge``: back over the current word, then over the separators before it."""

    if not text:
        return 0
    for _ in range(count):
        pos = _prev_end(text, min(pos, len(text) - 1), is_word_char)
    return pos


def motion_bigword_forward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _next_start(text, pos, is_bigword_char)
    return pos


def motion_bigword_backward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _prev_start(text, pos, is_bigword_char)
    return pos


def motion_bigword_end(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = _next_end(text, pos, is_bigword_char)
    return pos


__all__ = [
    "WORD_CHARS",
    "is_word_char",
    "is_bigword_char",
    "motion_word_forward",
    "motion_word_backward",
    "motion_word_end",
    "motion_word_end_backward",
    "motion_bigword_forward",
    "motion_bigword_backward",
    "motion_bigword_end",
]
