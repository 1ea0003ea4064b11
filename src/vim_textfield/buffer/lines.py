"""Line geometry over a flat, newline-delimited text string.

Offsets index the string directly. A line's ``end`` is the offset of its
terminating ``\\n`` (or ``len(text)`` for the last line), so ``end`` itself is
not part of the line's text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Location = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class LineInfo:
    start: int
    end: int
    text: str

    def column(self, pos: int) -> int:
        return pos - self.start


def line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, max(0, pos)) + 1


def line_end(text: str, pos: int) -> int:
    end = text.find("\n", max(0, pos))
    return len(text) if end == -1 else end


def get_line(text: str, pos: int) -> LineInfo:
    start = line_start(text, pos)
    end = line_end(text, pos)
    return LineInfo(start=start, end=end, text=text[start:end])


def first_non_blank(text: str, start: int) -> int:
    pos = start
    while pos < len(text) and text[pos] != "\n" and text[pos].isspace():
        pos += 1
    return pos


def line_range(text: str, pos: int) -> Tuple[int, int]:
    """Whole line under ``pos`` including its newline when one follows."""

    line = get_line(text, pos)
    end = line.end + 1 if line.end < len(text) else line.end
    return line.start, end


def offset_to_location(text: str, offset: int) -> Location:
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    return row, offset - line_start(text, offset)


def location_to_offset(text: str, location: Location) -> int:
    row, col = location
    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    offset = sum(len(line) + 1 for line in lines[:row])
    return offset + max(0, min(col, len(lines[row])))


__all__ = [
    "Location",
    "LineInfo",
    "line_start",
    "line_end",
    "get_line",
    "first_non_blank",
    "line_range",
    "offset_to_location",
    "location_to_offset",
]
