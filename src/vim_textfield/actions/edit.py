"""Direct Normal-mode edits: ``x X D r p P``, undo/redo, and raw text insertion."""

from __future__ import annotations

from vim_textfield.buffer import Register, TextRange, get_line, line_end, line_start
from vim_textfield.modes.base_mode import ModeContext, ModeResult
from vim_textfield.runtime import telemetry

from .operators import delete_range


def _cut(context: ModeContext, text_range: TextRange, status: str) -> ModeResult:
    name = context.state.take_register()
    if text_range.is_empty:
        return ModeResult(consumed=True, status="noop")
    removed = delete_range(context, text_range)
    context.registers.yank_to(name, removed)
    return ModeResult(consumed=True, status=status)


def delete_char_under_cursor(context: ModeContext, count: int = 1) -> ModeResult:
    """``x``: delete ``count`` characters, never past the end of the line."""

    pos = context.cursor
    end = min(pos + count, line_end(context.text, pos))
    return _cut(context, TextRange(pos, max(pos, end)), "delete_char")


def delete_char_before_cursor(context: ModeContext, count: int = 1) -> ModeResult:
    """``X``: delete up to ``count`` characters left of the cursor on this line."""

    pos = context.cursor
    start = max(line_start(context.text, pos), pos - count)
    return _cut(context, TextRange(start, pos), "delete_char_before")


def delete_to_line_end(context: ModeContext, count: int = 1) -> ModeResult:
    del count
    pos = context.cursor
    return _cut(context, TextRange(pos, line_end(context.text, pos)), "delete_to_eol")


def replace_char(context: ModeContext, char: str, count: int = 1) -> ModeResult:
    """``r{char}``: overwrite the character under the cursor.

    ``count`` is only kept for dot-repeat; one character is replaced either way.
    """

    del count
    text = context.text
    pos = context.cursor
    if len(char) != 1 or pos >= line_end(text, pos):
        return ModeResult(consumed=True, status="noop")

    context.history.save(context.buffer)
    context.buffer.set_text(text[:pos] + char + text[pos + 1 :])
    context.move_cursor(pos)
    return ModeResult(consumed=True, status="replace")


def insert_text(context: ModeContext, content: str) -> int:
    """Type ``content`` at the cursor the way a host text control would."""

    text = context.text
    pos = context.cursor
    context.buffer.set_text(text[:pos] + content + text[pos:])
    return context.move_cursor(pos + len(content))


def _paste_charwise(
    context: ModeContext, register: Register, *, before: bool, count: int
) -> int:
    text = context.text
    pos = context.cursor
    line = get_line(text, pos)
    if before or line.start == line.end:
        at = pos
    else:
        at = min(pos + 1, len(text))
    content = register.content * count
    context.buffer.set_text(text[:at] + content + text[at:])
    return at + len(content) - 1


def _paste_linewise(
    context: ModeContext, register: Register, *, before: bool, count: int
) -> int:
    text = context.text
    pos = context.cursor
    block = register.content if register.content.endswith("\n") else register.content + "\n"
    block *= count

    if before:
        at = line_start(text, pos)
        context.buffer.set_text(text[:at] + block + text[at:])
        return at

    end = line_end(text, pos)
    if end == len(text):
        context.buffer.set_text(text + "\n" + block[:-1])
        return end + 1
    context.buffer.set_text(text[: end + 1] + block + text[end + 1 :])
    return end + 1


def paste(context: ModeContext, *, before: bool, count: int = 1) -> ModeResult:
    """``p``/``P`` from the selected register (default ``"``).

    Charwise content lands after/at the cursor and leaves the cursor on its
    last character; linewise content opens new lines below/above and leaves
    the cursor at the start of the first one.
    """

    name = context.state.take_register()
    register = context.registers.get(name)
    if not register.content:
        return ModeResult(consumed=True, status="noop")

    context.history.save(context.buffer)
    if register.linewise:
        cursor = _paste_linewise(context, register, before=before, count=count)
    else:
        cursor = _paste_charwise(context, register, before=before, count=count)
    context.move_cursor(cursor)
    telemetry.debug(
        "paste", register=name, linewise=register.linewise, count=count, before=before
    )
    return ModeResult(consumed=True, status="paste", message=name)


def undo(context: ModeContext, count: int = 1) -> ModeResult:
    restored = 0
    for _ in range(count):
        if context.history.undo(context.buffer) is None:
            break
        restored += 1
    if not restored:
        return ModeResult(consumed=True, status="noop")
    context.bus.emit("history.undo", {"steps": restored})
    return ModeResult(consumed=True, status="undo")


def redo(context: ModeContext, count: int = 1) -> ModeResult:
    restored = 0
    for _ in range(count):
        if context.history.redo(context.buffer) is None:
            break
        restored += 1
    if not restored:
        return ModeResult(consumed=True, status="noop")
    context.bus.emit("history.redo", {"steps": restored})
    return ModeResult(consumed=True, status="redo")


__all__ = [
    "delete_char_under_cursor",
    "delete_char_before_cursor",
    "delete_to_line_end",
    "replace_char",
    "insert_text",
    "paste",
    "undo",
    "redo",
]
