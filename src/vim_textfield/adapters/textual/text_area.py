"""``TextBuffer`` over a Textual ``TextArea`` widget."""

from __future__ import annotations

import weakref
from typing import Optional, Tuple

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from vim_textfield.buffer import BufferDetached
from vim_textfield.buffer.lines import location_to_offset, offset_to_location


class TextAreaBuffer:
    """Exposes a ``TextArea`` as flat text plus an offset selection.

    Textual addresses text by ``(row, column)``; conversions go through the
    current text so offsets match ``TextArea.text`` exactly. The widget is
    held weakly and ``release`` marks it gone, after which every call raises
    ``BufferDetached``.
    """

    def __init__(self, text_area: TextArea) -> None:
        self._ref = weakref.ref(text_area)
        self._released = False

    @property
    def text_area(self) -> Optional[TextArea]:
        if self._released:
            return None
        return self._ref()

    def release(self) -> None:
        self._released = True

    def _require(self) -> TextArea:
        text_area = self.text_area
        if text_area is None:
            raise BufferDetached("text area is no longer available")
        return text_area

    def get_text(self) -> str:
        return self._require().text

    def set_text(self, text: str) -> None:
        text_area = self._require()
        start, end = self.get_selection()
        text_area.load_text(text)
        self._select(text_area, text, start, end)

    def get_selection(self) -> Tuple[int, int]:
        text_area = self._require()
        text = text_area.text
        selection = text_area.selection
        start = location_to_offset(text, selection.start)
        end = location_to_offset(text, selection.end)
        return (min(start, end), max(start, end))

    def set_selection(self, start: int, end: int) -> None:
        text_area = self._require()
        self._select(text_area, text_area.text, start, end)

    @staticmethod
    def _select(text_area: TextArea, text: str, start: int, end: int) -> None:
        start = max(0, min(start, len(text)))
        end = max(start, min(end, len(text)))
        text_area.selection = Selection(
            offset_to_location(text, start), offset_to_location(text, end)
        )


__all__ = ["TextAreaBuffer"]
