"""Bounded undo/redo snapshot stacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from vim_textfield.runtime import telemetry

from .host import TextBuffer

DEFAULT_UNDO_LIMIT = 100


@dataclass(frozen=True, slots=True)
class UndoSnapshot:
    text: str
    selection_start: int
    selection_end: int

    @classmethod
    def capture(cls, buffer: TextBuffer) -> "UndoSnapshot":
        start, end = buffer.get_selection()
        return cls(text=buffer.get_text(), selection_start=start, selection_end=end)

    def restore(self, buffer: TextBuffer) -> None:
        buffer.set_text(self.text)
        buffer.set_selection(self.selection_start, self.selection_end)


class History:
    """Linear snapshot history; the oldest entry is dropped past ``limit``."""

    def __init__(self, *, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._undo: List[UndoSnapshot] = []
        self._redo: List[UndoSnapshot] = []

    def save(self, buffer: TextBuffer) -> UndoSnapshot:
        """Snapshot ``buffer`` right before it is mutated."""

        snapshot = UndoSnapshot.capture(buffer)
        self._undo.append(snapshot)
        self._redo.clear()
        if len(self._undo) > self.limit:
            del self._undo[0]
        return snapshot

    def discard_last(self, snapshot: UndoSnapshot) -> bool:
        """Drop ``snapshot`` if it is still the newest undo entry."""

        if self._undo and self._undo[-1] is snapshot:
            self._undo.pop()
            return True
        return False

    def undo(self, buffer: TextBuffer) -> Optional[UndoSnapshot]:
        if not self._undo:
            return None
        self._redo.append(UndoSnapshot.capture(buffer))
        previous = self._undo.pop()
        previous.restore(buffer)
        telemetry.record_event(
            "history.undo", level="debug", data={"remaining": len(self._undo)}
        )
        return previous

    def redo(self, buffer: TextBuffer) -> Optional[UndoSnapshot]:
        if not self._redo:
            return None
        self._undo.append(UndoSnapshot.capture(buffer))
        following = self._redo.pop()
        following.restore(buffer)
        telemetry.record_event(
            "history.redo", level="debug", data={"remaining": len(self._redo)}
        )
        return following

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)


__all__ = ["DEFAULT_UNDO_LIMIT", "UndoSnapshot", "History"]
