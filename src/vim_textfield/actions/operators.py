"""Operator engine: delete, yank, and change over a resolved ``TextRange``."""

from __future__ import annotations

from typing import Optional

from vim_textfield.buffer import InsertSession, TextRange, UndoSnapshot, line_range
from vim_textfield.modes.base_mode import ModeContext, ModeResult
from vim_textfield.runtime import telemetry

OPERATORS = ("d", "c", "y")


def whole_line_range(text: str, pos: int) -> TextRange:
    """``[lineStart, lineEnd + 1)``, without the ``+1`` on the last line."""

    start, end = line_range(text, pos)
    return TextRange(start, end)


def delete_range(context: ModeContext, text_range: TextRange) -> str:
    """Snapshot history, cut ``text_range`` out, and park the cursor at its start."""

    text = context.text
    removed = text_range.slice(text)
    context.history.save(context.buffer)
    context.buffer.set_text(text[: text_range.start] + text[text_range.end :])
    context.move_cursor(text_range.start)
    return removed


def begin_insert(
    context: ModeContext,
    command: Optional[str],
    *,
    snapshot: Optional[UndoSnapshot] = None,
    owns_change: bool = False,
) -> None:
    """Record where the upcoming Insert session starts.

    ``owns_change`` marks sessions whose command already stored
    ``last_change``; the text typed in the session is attached to it on exit.
    """

    context.state.insert_session = InsertSession(
        start_pos=context.cursor,
        start_text=context.text,
        command=command,
        snapshot=snapshot,
        owns_change=owns_change,
    )


def _enter_change(context: ModeContext, change_command: Optional[str]) -> ModeResult:
    begin_insert(context, change_command, owns_change=change_command is not None)
    return ModeResult(consumed=True, switch_to="insert", status="change")


def apply_operator(
    context: ModeContext,
    operator: str,
    text_range: TextRange,
    *,
    linewise: bool = False,
    register: Optional[str] = None,
    change_command: Optional[str] = "c",
) -> ModeResult:
    """Apply ``d``/``c``/``y`` to ``text_range``.

    An empty range leaves the buffer, registers, and history untouched,
    though ``c`` still opens an Insert session at the cursor. ``c`` ends by
    requesting a switch to Insert mode; its session reports typed text to
    ``last_change`` unless ``change_command`` is ``None``.
    """

    if operator not in OPERATORS:
        raise ValueError(f"Unknown operator '{operator}'")

    name = register or context.state.take_register()
    if text_range.is_empty:
        if operator != "c":
            return ModeResult(consumed=True, status="noop")
        return _enter_change(context, change_command)

    with telemetry.span(
        "operator::apply",
        component="operators",
        metadata={"operator": operator, "start": text_range.start, "end": text_range.end},
    ):
        if operator == "y":
            content = text_range.slice(context.text)
            context.registers.yank_to(name, content, linewise=linewise)
            context.move_cursor(min(context.cursor, text_range.start))
        else:
            content = delete_range(context, text_range)
            context.registers.yank_to(name, content, linewise=linewise)

    context.bus.emit(
        "operator.apply",
        {
            "operator": operator,
            "range": (text_range.start, text_range.end),
            "register": name,
            "linewise": linewise,
        },
    )

    if operator == "c":
        return _enter_change(context, change_command)
    if operator == "d":
        return ModeResult(consumed=True, status="delete")
    return ModeResult(consumed=True, status="yank", message=name)


__all__ = [
    "OPERATORS",
    "apply_operator",
    "begin_insert",
    "delete_range",
    "whole_line_range",
]
