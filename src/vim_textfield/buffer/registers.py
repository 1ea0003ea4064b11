"""Register storage and system clipboard integration."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Protocol

import pyperclip  # type: ignore[import]

from vim_textfield.runtime import telemetry

DEFAULT_REGISTER = '"'
CLIPBOARD_REGISTER = "+"


@dataclass(frozen=True, slots=True)
class Register:
    content: str = ""
    linewise: bool = False


class SystemClipboardUnavailable(RuntimeError):
    """The host offers no usable system clipboard."""


class ClipboardProvider(Protocol):
    """Async access to the system clipboard backing the ``+`` register."""

    async def read_async(self) -> str:
        ...

    async def write_async(self, text: str) -> None:
        ...


class PyperclipClipboard:
    """``ClipboardProvider`` backed by pyperclip, run off the event loop."""

    async def read_async(self) -> str:
        try:
            return await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as exc:
            raise SystemClipboardUnavailable(str(exc)) from exc

    async def write_async(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as exc:
            raise SystemClipboardUnavailable(str(exc)) from exc


class RegisterBank:
    """Default, named, and clipboard-backed registers.

    Writing any register other than the default one mirrors the value into
    the default register. The ``+`` register is plain storage until
    ``load_clipboard``/``flush_clipboard`` synchronise it with the provider.
    """

    def __init__(self, clipboard: Optional[ClipboardProvider] = None) -> None:
        self._registers: Dict[str, Register] = {DEFAULT_REGISTER: Register()}
        self.clipboard = clipboard
        self._clipboard_dirty = False
        self._listeners: List[Callable[[str, Register], None]] = []

    def add_listener(self, callback: Callable[[str, Register], None]) -> None:
        """Call ``callback(name, value)`` after every register write."""

        self._listeners.append(callback)

    def get(self, name: Optional[str] = None) -> Register:
        return self._registers.get(name or DEFAULT_REGISTER, Register())

    def set(self, name: Optional[str], value: Register) -> None:
        name = name or DEFAULT_REGISTER
        self._registers[name] = value
        if name != DEFAULT_REGISTER:
            self._registers[DEFAULT_REGISTER] = value
        if name == CLIPBOARD_REGISTER:
            self._clipboard_dirty = True
        telemetry.record_event(
            "register.write",
            level="debug",
            data={"register": name, "linewise": value.linewise, "size": len(value.content)},
        )
        for callback in self._listeners:
            callback(name, value)

    def yank_to(self, name: Optional[str], text: str, *, linewise: bool = False) -> None:
        self.set(name, Register(content=text, linewise=linewise))

    def serialize(self) -> Mapping[str, Register]:
        return dict(self._registers)

    def load(self, data: Mapping[str, Register]) -> None:
        self._registers.update(data)

    @property
    def clipboard_dirty(self) -> bool:
        return self._clipboard_dirty

    async def load_clipboard(self) -> Register:
        """Refresh ``+`` from the system clipboard before a paste reads it."""

        if self.clipboard is None:
            raise SystemClipboardUnavailable("no clipboard provider configured")
        text = await self.clipboard.read_async()
        current = self._registers.get(CLIPBOARD_REGISTER)
        linewise = current.linewise if current and current.content == text else False
        value = Register(content=text, linewise=linewise)
        self._registers[CLIPBOARD_REGISTER] = value
        return value

    async def flush_clipboard(self) -> None:
        """Push a pending ``+`` write out to the system clipboard."""

        if not self._clipboard_dirty:
            return
        self._clipboard_dirty = False
        if self.clipboard is None:
            raise SystemClipboardUnavailable("no clipboard provider configured")
        await self.clipboard.write_async(self.get(CLIPBOARD_REGISTER).content)


__all__ = [
    "DEFAULT_REGISTER",
    "CLIPBOARD_REGISTER",
    "Register",
    "RegisterBank",
    "ClipboardProvider",
    "PyperclipClipboard",
    "SystemClipboardUnavailable",
]
