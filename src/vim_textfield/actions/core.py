"""Insert-entry actions shared across modes."""

from __future__ import annotations

from typing import Optional

from vim_textfield.buffer import (
    TextRange,
    UndoSnapshot,
    first_non_blank,
    line_end,
    line_start,
)
from vim_textfield.modes.base_mode import ModeContext, ModeResult

from .operators import begin_insert, delete_range

INSERT_COMMANDS = ("i", "a", "I", "A", "o", "O", "s")


def _enter_insert(
    context: ModeContext,
    command: str,
    *,
    snapshot: Optional[UndoSnapshot] = None,
    owns_change: bool = False,
) -> ModeResult:
    begin_insert(context, command, snapshot=snapshot, owns_change=owns_change)
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def insert_before_cursor(context: ModeContext) -> ModeResult:
    snapshot = context.history.save(context.buffer)
    return _enter_insert(context, "i", snapshot=snapshot)


def append_after_cursor(context: ModeContext) -> ModeResult:
    text = context.text
    pos = context.cursor
    snapshot = context.history.save(context.buffer)
    if pos < len(text) and text[pos] != "\n":
        context.move_cursor(pos + 1)
    return _enter_insert(context, "a", snapshot=snapshot)


def insert_at_line_start(context: ModeContext) -> ModeResult:
    text = context.text
    snapshot = context.history.save(context.buffer)
    context.move_cursor(first_non_blank(text, line_start(text, context.cursor)))
    return _enter_insert(context, "I", snapshot=snapshot)


def append_at_line_end(context: ModeContext) -> ModeResult:
    snapshot = context.history.save(context.buffer)
    context.move_cursor(line_end(context.text, context.cursor))
    return _enter_insert(context, "A", snapshot=snapshot)


def open_line_below(context: ModeContext) -> ModeResult:
    text = context.text
    end = line_end(text, context.cursor)
    context.history.save(context.buffer)
    context.buffer.set_text(text[:end] + "\n" + text[end:])
    context.move_cursor(end + 1)
    return _enter_insert(context, "o", owns_change=True)


def open_line_above(context: ModeContext) -> ModeResult:
    text = context.text
    start = line_start(text, context.cursor)
    context.history.save(context.buffer)
    context.buffer.set_text(text[:start] + "\n" + text[start:])
    context.move_cursor(start)
    return _enter_insert(context, "O", owns_change=True)


def substitute_chars(context: ModeContext, count: int = 1) -> ModeResult:
    """``s``: delete ``count`` characters on this line, then insert."""

    pos = context.cursor
    end = min(pos + count, line_end(context.text, pos))
    name = context.state.take_register()
    if end > pos:
        removed = delete_range(context, TextRange(pos, end))
        context.registers.yank_to(name, removed)
    else:
        context.history.save(context.buffer)
    return _enter_insert(context, "s", owns_change=True)


INSERT_ACTIONS = {
    "i": insert_before_cursor,
    "a": append_after_cursor,
    "I": insert_at_line_start,
    "A": append_at_line_end,
    "o": open_line_below,
    "O": open_line_above,
}


__all__ = [
    "INSERT_COMMANDS",
    "INSERT_ACTIONS",
    "insert_before_cursor",
    "append_after_cursor",
    "insert_at_line_start",
    "append_at_line_end",
    "open_line_below",
    "open_line_above",
    "substitute_chars",
]
