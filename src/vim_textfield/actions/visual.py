"""Actions dedicated to Visual mode selection management."""

from __future__ import annotations

from vim_textfield.buffer import TextRange, line_end, line_start
from vim_textfield.modes.base_mode import ModeContext, ModeResult
from vim_textfield.motions import find_text_object

from .operators import apply_operator


def begin_selection(context: ModeContext, *, linewise: bool) -> None:
    """Seed anchor and bounds from the cursor when Visual mode is entered."""

    state = context.state
    text = context.text
    pos = context.cursor
    state.visual_cursor = pos
    if linewise:
        state.visual_start = line_start(text, pos)
        state.visual_end = line_end(text, pos)
        state.visual_anchor = state.visual_end
    else:
        state.visual_start = state.visual_end = state.visual_anchor = pos
    sync_selection(context, linewise=linewise)


def switch_submode(context: ModeContext, *, linewise: bool) -> None:
    """Swap between char- and line-visual keeping the anchor in place."""

    state = context.state
    if linewise:
        _extend_linewise(context, state.visual_cursor)
    else:
        state.visual_start = state.visual_anchor
        state.visual_end = state.visual_cursor
    sync_selection(context, linewise=linewise)


def _extend_linewise(context: ModeContext, new_pos: int) -> None:
    state = context.state
    text = context.text
    anchor = state.visual_anchor
    anchor_start = line_start(text, anchor)
    anchor_end = line_end(text, anchor)
    if line_end(text, new_pos) < anchor_start:
        state.visual_start = line_start(text, new_pos)
        state.visual_end = anchor_end
    elif line_start(text, new_pos) > anchor_end:
        state.visual_start = anchor_start
        state.visual_end = line_end(text, new_pos)
    else:
        state.visual_start = anchor_start
        state.visual_end = anchor_end


def sync_selection(context: ModeContext, *, linewise: bool) -> None:
    """Mirror the visual bounds onto the host selection for highlighting."""

    state = context.state
    start = min(state.visual_start, state.visual_end)
    end = max(state.visual_start, state.visual_end)
    if not linewise:
        end = min(end + 1, len(context.text))
    context.buffer.set_selection(start, end)
    context.bus.emit(
        "visual.selection",
        {
            "anchor": state.visual_anchor,
            "cursor": state.visual_cursor,
            "range": (start, end),
            "linewise": linewise,
        },
    )


def extend_selection(context: ModeContext, new_pos: int, *, linewise: bool) -> ModeResult:
    """Move the free end of the selection to ``new_pos``."""

    state = context.state
    state.visual_cursor = new_pos
    if linewise:
        _extend_linewise(context, new_pos)
    else:
        state.visual_end = new_pos
    sync_selection(context, linewise=linewise)
    return ModeResult(consumed=True, status="visual_select")


def selection_range(context: ModeContext, *, linewise: bool) -> TextRange:
    """Operator range for the selection, inclusive of the character under its end."""

    state = context.state
    length = len(context.text)
    start = min(state.visual_start, state.visual_end)
    end = max(state.visual_start, state.visual_end)
    if linewise:
        return TextRange(start, end + 1 if end < length else end)
    return TextRange(start, min(end + 1, length))


def select_text_object(
    context: ModeContext, object_char: str, *, inner: bool, linewise: bool
) -> ModeResult:
    """Replace the selection with the text object around the visual cursor."""

    state = context.state
    found = find_text_object(context.text, state.visual_cursor, object_char, inner)
    if found.is_empty:
        sync_selection(context, linewise=linewise)
        return ModeResult(consumed=True, status="noop")
    state.visual_start = state.visual_anchor = found.start
    state.visual_end = state.visual_cursor = max(found.start, found.end - 1)
    sync_selection(context, linewise=linewise)
    return ModeResult(consumed=True, status="visual_select")


def delete_selection(context: ModeContext, *, linewise: bool) -> ModeResult:
    result = apply_operator(
        context, "d", selection_range(context, linewise=linewise), linewise=linewise
    )
    return ModeResult(
        consumed=True, switch_to="normal", status="visual_delete", message=result.message
    )


def yank_selection(context: ModeContext, *, linewise: bool) -> ModeResult:
    selected = selection_range(context, linewise=linewise)
    result = apply_operator(context, "y", selected, linewise=linewise)
    context.move_cursor(selected.start)
    return ModeResult(
        consumed=True, switch_to="normal", status="visual_yank", message=result.message
    )


def change_selection(context: ModeContext, *, linewise: bool) -> ModeResult:
    selected = selection_range(context, linewise=linewise)
    apply_operator(context, "c", selected, linewise=linewise, change_command=None)
    return ModeResult(consumed=True, switch_to="insert", status="visual_change")


def paste_over_selection(context: ModeContext, *, linewise: bool) -> ModeResult:
    """``p``/``P``: swap the selection for the register content in one undo step."""

    selected = selection_range(context, linewise=linewise)
    register = context.registers.get(context.state.take_register())
    text = context.text
    context.history.save(context.buffer)
    context.buffer.set_text(text[: selected.start] + register.content + text[selected.end :])
    context.move_cursor(selected.start)
    return ModeResult(consumed=True, switch_to="normal", status="visual_paste")


__all__ = [
    "begin_selection",
    "switch_submode",
    "sync_selection",
    "extend_selection",
    "selection_range",
    "select_text_object",
    "delete_selection",
    "yank_selection",
    "change_selection",
    "paste_over_selection",
]
