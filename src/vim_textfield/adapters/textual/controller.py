"""Textual adapter that wires Engine results and bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from vim_textfield.buffer import BufferMirror
from vim_textfield.engine import Engine
from vim_textfield.modes import KeyInput, ModeResult
from vim_textfield.runtime import telemetry

FORWARDED_EVENTS = (
    "mode.change",
    "visual.selection",
    "operator.apply",
    "history.undo",
    "history.redo",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_mode: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    release_focus: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def key_input_from_event(event: Any) -> Optional[KeyInput]:
    """Translate a ``textual.events.Key`` into a ``KeyInput``.

    Returns ``None`` for keys the application itself reserves.
    """

    key = event.key
    if key in {"ctrl+c", "ctrl+q"}:
        return None
    modifiers = tuple(part.upper() for part in key.split("+")[:-1])
    character = event.character
    if key == "escape":
        return KeyInput(key="escape", modifiers=modifiers)
    chorded = set(modifiers) - {"SHIFT"}
    if character and len(character) == 1 and character.isprintable() and not chorded:
        return KeyInput(key=character, text=character)
    return KeyInput(key=key, modifiers=modifiers)


class TextualVimAdapter:
    """Bridges Engine + bus events to a Textual-friendly surface."""

    def __init__(self, engine: Engine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch a key synchronously; ``+`` stays local storage."""

        key_input = self._key_input(key, text, modifiers)
        result = self.engine.handle_key(key_input)
        self._after_mode_result(result)
        return result

    async def handle_textual_key_async(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch a key, syncing the ``+`` register with the system clipboard."""

        key_input = self._key_input(key, text, modifiers)
        result = await self.engine.handle_key_async(key_input)
        self._after_mode_result(result)
        return result

    def _key_input(
        self, key: str, text: Optional[str], modifiers: Iterable[str]
    ) -> KeyInput:
        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        return KeyInput(key=key, text=text, modifiers=normalized_modifiers)

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        if result.status == "release":
            self.hooks.release_focus()
        self._refresh_buffer()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "mode.change" and isinstance(payload, dict):
            self.hooks.show_mode(str(payload.get("mode", "")))

    def _refresh_buffer(self) -> None:
        mirror = self.engine.mirror()
        if mirror is not None:
            self.hooks.update_buffer(mirror)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        line = " ".join(parts)
        telemetry.debug(line, logger_name="vim_textfield.adapters.textual")
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        state = self.engine.state
        if state is None:
            return {"mode": "detached"}
        return {
            "mode": state.mode.value,
            "command": state.command_buffer,
            "count": state.count_buffer,
            "operator": state.operator_pending,
        }


__all__ = ["TextualVimAdapter", "TextualUIHooks", "key_input_from_event"]
