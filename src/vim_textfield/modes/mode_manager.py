"""Mode manager coordinating Normal/Insert/Visual dispatch and transitions."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vim_textfield.actions import redo
from vim_textfield.buffer import Mode as ModeName
from vim_textfield.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, routes host-level keys, and dispatches the rest.

    Escape/Ctrl-[ go to the active mode's ``handle_escape``; Ctrl-r is
    redo in Normal mode. Everything else reaches ``Mode.handle_key``.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("vim_textfield.modes")
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._activate(mode.name, None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._activate(name, previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"mode": name, "previous": previous.name if previous else None},
        )

    def _activate(self, name: str, previous: Optional[str]) -> None:
        self._active = name
        self.context.state.mode = ModeName(name)
        self._modes[name].on_enter(previous)
        self.context.bus.emit("mode.change", {"mode": name, "previous": previous})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=f"mode::{mode.name}",
            metadata={"key": key.key, "mode": mode.name},
        ):
            if key.is_escape:
                result = mode.handle_escape()
            elif key.is_redo and mode.name == ModeName.NORMAL.value:
                self.context.state.clear_pending()
                result = redo(self.context)
            else:
                result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
