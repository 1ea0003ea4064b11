"""Dot-repeat: replay ``last_change`` through the regular key dispatch path."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from vim_textfield.actions import insert_text
from vim_textfield.buffer import (
    LastChange,
    Mode,
    MotionChange,
    TextObjectChange,
)
from vim_textfield.runtime import telemetry

from .base_mode import KeyInput, ModeResult

if TYPE_CHECKING:
    from .mode_manager import ModeManager


class DotRepeat:
    """Primes the parser buffers for a recorded change and feeds its keys.

    Changes that ended in Insert mode are completed by typing the recorded
    text and leaving Insert mode again.
    """

    def __init__(self, manager: "ModeManager") -> None:
        self.manager = manager
        self.context = manager.context

    def replay(self, count: Optional[int] = None) -> ModeResult:
        change = self.context.state.last_change
        if change is None:
            return ModeResult(consumed=True, status="noop")

        with telemetry.span(
            "repeat::replay",
            component="repeat",
            metadata={"change": type(change).__name__, "count": count or change.count},
        ):
            self.context.state.clear_pending()
            keys = self._prime(change, count or change.count)
            for key in keys:
                self.manager.handle_key(KeyInput(key=key, text=key))

            if self.context.state.mode is Mode.INSERT:
                insert_text(self.context, change.inserted_text or "")
                self.manager.switch_mode(Mode.NORMAL.value)

        return ModeResult(consumed=True, status="repeat", message="".join(keys))

    def _prime(self, change: LastChange, count: int) -> List[str]:
        state = self.context.state
        state.count_buffer = str(count) if count > 1 else ""

        if isinstance(change, MotionChange):
            state.operator_pending = change.operator
            if change.motion == "0":
                state.count_buffer = ""
            return list(change.motion)

        if isinstance(change, TextObjectChange):
            state.operator_pending = change.operator
            state.command_buffer = change.text_object[0]
            return [change.text_object[1:]]

        if change.command == "r" and change.char is not None:
            state.command_buffer = "r"
            return [change.char]
        return [change.command]


__all__ = ["DotRepeat"]
