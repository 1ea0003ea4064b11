"""Textual host integration."""

from .controller import TextualUIHooks, TextualVimAdapter, key_input_from_event
from .text_area import TextAreaBuffer

__all__ = [
    "TextAreaBuffer",
    "TextualUIHooks",
    "TextualVimAdapter",
    "key_input_from_event",
]
