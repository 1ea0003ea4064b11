"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from vim_textfield.buffer import (
    EngineState,
    History,
    RegisterBank,
    TextBuffer,
    cursor_of,
    move_cursor,
)

ESCAPE_KEYS = frozenset({"escape", "ESC", "<Esc>", "ctrl+[", "ctrl+left_square_bracket"})
REDO_KEYS = frozenset({"ctrl+r", "<C-r>"})


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        """Printable character when there is one, otherwise the key name."""

        if self.text and len(self.text) == 1 and self.text.isprintable():
            return self.text
        return self.key

    @property
    def is_escape(self) -> bool:
        return self.key in ESCAPE_KEYS

    @property
    def is_redo(self) -> bool:
        return self.key in REDO_KEYS


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access for one attached buffer."""

    buffer: TextBuffer
    registers: RegisterBank
    bus: "ModeBus"
    state: EngineState = field(default_factory=EngineState)
    history: History = field(default_factory=History)
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.buffer.get_text()

    @property
    def cursor(self) -> int:
        return cursor_of(self.buffer)

    def move_cursor(self, pos: int) -> int:
        return move_cursor(self.buffer, pos)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_escape(self) -> ModeResult:
        """Escape/Ctrl-[ while this mode is active; defaults to leaving for Normal."""

        self.context.state.clear_pending()
        return ModeResult(consumed=True, switch_to="normal", message="escape")
