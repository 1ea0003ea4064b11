"""Boundary types for the host-owned text buffer the engine edits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Tuple, runtime_checkable

from .validation import clamp_offset


@runtime_checkable
class TextBuffer(Protocol):
    """Minimal capability the engine needs from a host text control."""

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_selection(self) -> Tuple[int, int]:
        ...

    def set_selection(self, start: int, end: int) -> None:
        ...


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: int
    selection: Tuple[int, int]
    mode: str
    attributes: dict[str, str] = field(default_factory=dict)


class BufferDetached(RuntimeError):
    """Raised by host adapters whose underlying control has gone away."""


def cursor_of(buffer: TextBuffer) -> int:
    """The engine's cursor is the start of the host selection."""

    return buffer.get_selection()[0]


def move_cursor(buffer: TextBuffer, pos: int) -> int:
    pos = clamp_offset(buffer.get_text(), pos)
    buffer.set_selection(pos, pos)
    return pos


class StringBuffer:
    """In-memory ``TextBuffer`` behaving like a browser form control.

    Selection offsets are clamped to the text on every write, the same
    way ``selectionStart``/``selectionEnd`` behave on a textarea.
    """

    def __init__(self, text: str = "", *, cursor: int = 0) -> None:
        self._text = text
        pos = clamp_offset(text, cursor)
        self._selection: Tuple[int, int] = (pos, pos)

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        start, end = self._selection
        self._selection = (clamp_offset(text, start), clamp_offset(text, end))

    def get_selection(self) -> Tuple[int, int]:
        return self._selection

    def set_selection(self, start: int, end: int) -> None:
        start = clamp_offset(self._text, start)
        end = clamp_offset(self._text, end)
        self._selection = (start, max(start, end))

    @property
    def cursor(self) -> int:
        return self._selection[0]

    def __repr__(self) -> str:
        return f"StringBuffer(text={self._text!r}, selection={self._selection!r})"
