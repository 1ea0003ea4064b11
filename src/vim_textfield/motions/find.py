"""In-line character search: ``f F t T`` and their ``;`` ``,`` repeats."""

from __future__ import annotations

from typing import Optional

from vim_textfield.buffer.lines import line_end, line_start
from vim_textfield.buffer.state import LastFind, TextRange

FIND_KINDS = ("f", "F", "t", "T")


def find_char_index(text: str, pos: int, char: str, forward: bool) -> Optional[int]:
    """Offset of the nearest ``char`` on the current line, excluding ``pos``."""

    if forward:
        index = text.find(char, pos + 1, line_end(text, pos))
    else:
        index = text.rfind(char, line_start(text, pos), max(pos, 0))
    return None if index == -1 else index


def find_char_in_line(
    text: str, pos: int, char: str, *, forward: bool, till: bool
) -> int:
    """Cursor position after one ``f``/``F``/``t``/``T``; ``pos`` when absent."""

    index = find_char_index(text, pos, char, forward)
    if index is None:
        return pos
    if till:
        return index - 1 if forward else index + 1
    return index


def motion_find(text: str, pos: int, find: LastFind, count: int = 1) -> int:
    for _ in range(count):
        pos = find_char_in_line(
            text, pos, find.char, forward=find.forward, till=find.till
        )
    return pos


def find_operator_range(
    text: str, pos: int, find: LastFind, count: int = 1
) -> Optional[TextRange]:
    """Span an operator covers for ``{op}{f|F|t|T}{char}``.

    ``f`` includes the found character, ``t`` stops short of it; ``F``
    starts on it and ``T`` just after it. Both backward forms end at
    ``pos``. ``None`` when the character is not found ``count`` times.
    """

    index = pos
    for _ in range(count):
        found = find_char_index(text, index, find.char, find.forward)
        if found is None:
            return None
        index = found

    if find.forward:
        return TextRange(pos, index if find.till else index + 1)
    return TextRange(index + 1 if find.till else index, pos)


__all__ = [
    "FIND_KINDS",
    "find_char_index",
    "find_char_in_line",
    "motion_find",
    "find_operator_range",
]
