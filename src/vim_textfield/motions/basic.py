"""Character, line, document, paragraph, and bracket motions.

Every motion is a pure function ``(text, pos, count) -> pos``. Counts loop
the single-step rule, feeding each result into the next step.
"""

from __future__ import annotations

from typing import Optional

from vim_textfield.buffer.lines import first_non_blank, get_line, line_end, line_start

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}", ")": "(", "]": "[", "}": "{"}
OPENING_BRACKETS = "([{"


# ─────────────────────────────────────────────────────────────────
# Horizontal (h, l)
# ─────────────────────────────────────────────────────────────────


def motion_left(text: str, pos: int, count: int = 1) -> int:
    return max(0, pos - count)


def motion_right(text: str, pos: int, count: int = 1) -> int:
    return min(len(text), pos + count)


# ─────────────────────────────────────────────────────────────────
# Vertical (j, k) with column memory
# ─────────────────────────────────────────────────────────────────


def motion_down(
    text: str, pos: int, count: int = 1, *, column: Optional[int] = None
) -> int:
    """Move down ``count`` lines, aiming for ``column`` (or the current one)."""

    for _ in range(count):
        line = get_line(text, pos)
        want = line.column(pos) if column is None else column
        if line.end + 1 >= len(text):
            break
        below = get_line(text, line.end + 1)
        pos = min(below.start + want, below.end)
    return pos


def motion_up(
    text: str, pos: int, count: int = 1, *, column: Optional[int] = None
) -> int:
    """Move up ``count`` lines, aiming for ``column`` (or the current one)."""

    for _ in range(count):
        line = get_line(text, pos)
        want = line.column(pos) if column is None else column
        if line.start == 0:
            break
        above = get_line(text, line.start - 1)
        pos = min(above.start + want, above.end)
    return pos


# ─────────────────────────────────────────────────────────────────
# Line positions (0, ^, $)
# ─────────────────────────────────────────────────────────────────


def motion_line_start(text: str, pos: int, count: int = 1) -> int:
    return line_start(text, pos)


def motion_first_non_blank(text: str, pos: int, count: int = 1) -> int:
    return first_non_blank(text, line_start(text, pos))


def motion_line_end(text: str, pos: int, count: int = 1) -> int:
    return line_end(text, pos)


# ─────────────────────────────────────────────────────────────────
# Document positions (gg, G)
# ─────────────────────────────────────────────────────────────────


def motion_document_start(text: str, pos: int, count: int = 1) -> int:
    return 0


def motion_document_end(text: str, pos: int, count: int = 1) -> int:
    return len(text)


# ─────────────────────────────────────────────────────────────────
# Paragraphs ({, })
# ─────────────────────────────────────────────────────────────────


def _line_starts(lines: list[str]) -> list[int]:
    starts = []
    offset = 0
    for line in lines:
        starts.append(offset)
        offset += len(line) + 1
    return starts


def paragraph_boundary(text: str, pos: int, forward: bool) -> int:
    """Next/previous blank line; falls back to the buffer end/start.

    Forward lands on the start of the blank line, backward on its end
    (identical for an empty line).
    """

    lines = text.split("\n")
    starts = _line_starts(lines)
    current = text.count("\n", 0, pos)

    if forward:
        for index in range(current + 1, len(lines)):
            if lines[index].strip() == "":
                return starts[index]
        return len(text)

    for index in range(current - 1, -1, -1):
        if lines[index].strip() == "":
            return starts[index] + len(lines[index])
    return 0


def motion_paragraph_forward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = paragraph_boundary(text, pos, True)
    return pos


def motion_paragraph_backward(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = paragraph_boundary(text, pos, False)
    return pos


# ─────────────────────────────────────────────────────────────────
# Bracket matching (%)
# ─────────────────────────────────────────────────────────────────


def matching_bracket(text: str, pos: int) -> int:
    """Offset of the bracket matching the one under ``pos``.

    Only works when the cursor sits exactly on one of ``(){}[]``; otherwise,
    or when the bracket is unbalanced, ``pos`` is returned unchanged.
    """

    if pos >= len(text) or text[pos] not in BRACKET_PAIRS:
        return pos

    char = text[pos]
    target = BRACKET_PAIRS[char]
    step = 1 if char in OPENING_BRACKETS else -1
    depth = 1
    index = pos + step
    while 0 <= index < len(text):
        if text[index] == char:
            depth += 1
        elif text[index] == target:
            depth -= 1
            if depth == 0:
                return index
        index += step
    return pos


def motion_match_pair(text: str, pos: int, count: int = 1) -> int:
    for _ in range(count):
        pos = matching_bracket(text, pos)
    return pos


__all__ = [
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
    "paragraph_boundary",
    "matching_bracket",
]
