"""Buffer-mutating actions invoked by the mode dispatchers."""

from .core import (
    INSERT_ACTIONS,
    INSERT_COMMANDS,
    append_after_cursor,
    append_at_line_end,
    insert_at_line_start,
    insert_before_cursor,
    open_line_above,
    open_line_below,
    substitute_chars,
)
from .edit import (
    delete_char_before_cursor,
    delete_char_under_cursor,
    delete_to_line_end,
    insert_text,
    paste,
    redo,
    replace_char,
    undo,
)
from .operators import (
    OPERATORS,
    apply_operator,
    begin_insert,
    delete_range,
    whole_line_range,
)
from .visual import (
    begin_selection,
    change_selection,
    delete_selection,
    extend_selection,
    paste_over_selection,
    select_text_object,
    selection_range,
    switch_submode,
    sync_selection,
    yank_selection,
)

__all__ = [
    "INSERT_ACTIONS",
    "INSERT_COMMANDS",
    "OPERATORS",
    "append_after_cursor",
    "append_at_line_end",
    "apply_operator",
    "begin_insert",
    "begin_selection",
    "change_selection",
    "delete_char_before_cursor",
    "delete_char_under_cursor",
    "delete_range",
    "delete_selection",
    "delete_to_line_end",
    "extend_selection",
    "insert_at_line_start",
    "insert_before_cursor",
    "insert_text",
    "open_line_above",
    "open_line_below",
    "paste",
    "paste_over_selection",
    "redo",
    "replace_char",
    "select_text_object",
    "selection_range",
    "substitute_chars",
    "switch_submode",
    "sync_selection",
    "undo",
    "whole_line_range",
    "yank_selection",
]
