"""Delimiter-bounded text objects (``i(``, ``a"``, ...)."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from vim_textfield.buffer.state import TextRange
from vim_textfield.runtime import telemetry

TEXT_OBJECT_PAIRS: Dict[str, Tuple[str, str]] = {
    "(": ("(", ")"),
    ")": ("(", ")"),
    "[": ("[", "]"),
    "]": ("[", "]"),
    "{": ("{", "}"),
    "}": ("{", "}"),
    "<": ("<", ">"),
    ">": ("<", ">"),
    '"': ('"', '"'),
    "'": ("'", "'"),
    "`": ("`", "`"),
}


def _quote_span(text: str, pos: int, quote: str) -> Optional[Tuple[int, int]]:
    seen = 0
    opening = -1
    for index in range(min(pos, len(text) - 1) + 1):
        if text[index] == quote:
            if seen % 2 == 0:
                opening = index
            seen += 1
    if seen % 2 == 0:
        return None
    closing = text.find(quote, opening + 1)
    if closing == -1:
        return None
    return opening, closing


def _bracket_span(
    text: str, pos: int, open_char: str, close_char: str
) -> Optional[Tuple[int, int]]:
    depth = 0
    opening = -1
    for index in range(min(pos, len(text) - 1), -1, -1):
        char = text[index]
        if char == close_char:
            depth += 1
        elif char == open_char:
            if depth == 0:
                opening = index
                break
            depth -= 1
    if opening == -1:
        return None

    depth = 0
    for index in range(opening, len(text)):
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return opening, index
    return None


def find_text_object(text: str, pos: int, object_char: str, inner: bool) -> TextRange:
    """Range of the ``object_char`` pair enclosing ``pos``.

    Quotes pair up by counting occurrences from the start of the buffer;
    brackets walk outwards tracking nesting depth. ``inner`` excludes the
    delimiters, otherwise they are included. With no enclosing pair (or an
    unsupported ``object_char``) the result is an empty range at ``pos``.
    """

    pair = TEXT_OBJECT_PAIRS.get(object_char)
    if pair is None:
        telemetry.debug("text_object.unsupported", char=object_char)
        return TextRange.empty_at(pos)

    open_char, close_char = pair
    if open_char == close_char:
        span = _quote_span(text, pos, open_char)
    else:
        span = _bracket_span(text, pos, open_char, close_char)

    if span is None:
        telemetry.debug("text_object.not_found", char=object_char, pos=pos)
        return TextRange.empty_at(pos)

    start, end = span
    if inner:
        return TextRange(start + 1, end)
    return TextRange(start, end + 1)


__all__ = ["TEXT_OBJECT_PAIRS", "find_text_object"]
