"""Host buffer boundary, parser state, registers, and undo history."""

from .host import (
    BufferDetached,
    BufferMirror,
    StringBuffer,
    TextBuffer,
    cursor_of,
    move_cursor,
)
from .lines import LineInfo, first_non_blank, get_line, line_end, line_range, line_start
from .registers import (
    CLIPBOARD_REGISTER,
    DEFAULT_REGISTER,
    ClipboardProvider,
    PyperclipClipboard,
    Register,
    RegisterBank,
    SystemClipboardUnavailable,
)
from .state import (
    CommandChange,
    EngineState,
    InsertSession,
    LastChange,
    LastFind,
    Mode,
    MotionChange,
    TextObjectChange,
    TextRange,
)
from .undo import History, UndoSnapshot
from .validation import clamp_offset

__all__ = [
    "TextBuffer",
    "StringBuffer",
    "BufferMirror",
    "BufferDetached",
    "cursor_of",
    "move_cursor",
    "LineInfo",
    "get_line",
    "line_start",
    "line_end",
    "line_range",
    "first_non_blank",
    "Register",
    "RegisterBank",
    "ClipboardProvider",
    "PyperclipClipboard",
    "SystemClipboardUnavailable",
    "DEFAULT_REGISTER",
    "CLIPBOARD_REGISTER",
    "Mode",
    "TextRange",
    "LastFind",
    "LastChange",
    "MotionChange",
    "TextObjectChange",
    "CommandChange",
    "InsertSession",
    "EngineState",
    "History",
    "UndoSnapshot",
    "clamp_offset",
]
