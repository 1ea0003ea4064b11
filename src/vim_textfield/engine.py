"""Engine facade: attaches host buffers and feeds them keys.

One ``Engine`` serves any number of host buffers, one at a time. Parser
state and undo history are kept per buffer and restored when that buffer
is attached again, until ``forget`` drops it; registers are shared by every
buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from vim_textfield.actions import insert_text
from vim_textfield.adapters.render import NoopRenderer, Renderer
from vim_textfield.buffer import (
    CLIPBOARD_REGISTER,
    BufferDetached,
    BufferMirror,
    ClipboardProvider,
    EngineState,
    History,
    Mode,
    Register,
    RegisterBank,
    SystemClipboardUnavailable,
    TextBuffer,
)
from vim_textfield.config import EngineConfig
from vim_textfield.modes import (
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
    VisualLineMode,
    VisualMode,
)
from vim_textfield.runtime import telemetry

KeyLike = Union[KeyInput, str]


@dataclass(slots=True)
class BufferSession:
    """Everything the engine keeps for one host buffer."""

    context: ModeContext
    manager: ModeManager

    @property
    def state(self) -> EngineState:
        return self.context.state

    @property
    def history(self) -> History:
        return self.context.history


def as_key_input(key: KeyLike) -> KeyInput:
    if isinstance(key, KeyInput):
        return key
    return KeyInput(key=key, text=key if len(key) == 1 else None)


class Engine:
    def __init__(
        self,
        *,
        config: EngineConfig | Mapping[str, Any] | None = None,
        clipboard: Optional[ClipboardProvider] = None,
        registers: Optional[RegisterBank] = None,
        renderer: Optional[Renderer] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        if config is None or isinstance(config, EngineConfig):
            self.config = config or EngineConfig()
        else:
            self.config = EngineConfig.from_mapping(config)
        self.registers = registers or RegisterBank(clipboard)
        if renderer is None or self.config.disable_custom_caret:
            renderer = NoopRenderer()
        self.renderer: Renderer = renderer
        self.bus = bus or ModeBus()
        self.registers.add_listener(self._on_register_write)
        self.logger = telemetry.get_logger("vim_textfield.engine")
        self._sessions: Dict[TextBuffer, BufferSession] = {}
        self._buffer: Optional[TextBuffer] = None

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    @property
    def buffer(self) -> Optional[TextBuffer]:
        return self._buffer

    @property
    def attached(self) -> bool:
        return self._buffer is not None

    def attach(self, buffer: TextBuffer) -> BufferSession:
        """Make ``buffer`` the target of key events, restoring its old session."""

        if self._buffer is not None and self._buffer is not buffer:
            self.detach()
        session = self._sessions.get(buffer)
        restored = session is not None
        if session is None:
            session = self._create_session(buffer)
            self._sessions[buffer] = session
        self._buffer = buffer
        telemetry.record_event(
            "buffer.attach",
            data={"restored": restored, "mode": session.state.mode.value},
        )
        self.renderer.show(self._mirror(session))
        return session

    def detach(self) -> None:
        """Stop routing keys; the buffer's session is kept for a later attach."""

        if self._buffer is None:
            return
        session = self._sessions.get(self._buffer)
        if session is not None:
            session.state.clear_pending()
            session.state.register_name = None
        self._buffer = None
        self.renderer.hide()
        telemetry.record_event("buffer.detach")

    def forget(self, buffer: TextBuffer) -> None:
        """Drop the retained session for ``buffer``."""

        if buffer is self._buffer:
            self.detach()
        self._sessions.pop(buffer, None)

    def close(self) -> None:
        self.detach()
        self.renderer.destroy()

    def _create_session(self, buffer: TextBuffer) -> BufferSession:
        context = ModeContext(
            buffer=buffer,
            registers=self.registers,
            bus=self.bus,
            state=EngineState(),
            history=History(limit=self.config.undo_limit),
            extras={"config": self.config},
        )
        manager = ModeManager(context)
        manager.register_mode(NormalMode)
        manager.register_mode(InsertMode)
        manager.register_mode(VisualMode)
        manager.register_mode(VisualLineMode)
        if self.config.initial_mode != Mode.NORMAL.value:
            manager.switch_mode(self.config.initial_mode)
        return BufferSession(context=context, manager=manager)

    @property
    def session(self) -> Optional[BufferSession]:
        if self._buffer is None:
            return None
        return self._sessions.get(self._buffer)

    @property
    def state(self) -> Optional[EngineState]:
        session = self.session
        return session.state if session else None

    @property
    def history(self) -> Optional[History]:
        session = self.session
        return session.history if session else None

    @property
    def mode(self) -> Optional[Mode]:
        session = self.session
        return session.state.mode if session else None

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------

    def handle_key(self, key: KeyLike) -> ModeResult:
        """Resolve one key synchronously.

        The ``+`` register is used as plain storage here; ``handle_key_async``
        synchronises it with the system clipboard.
        """

        session = self.session
        if session is None:
            return ModeResult(consumed=False, status="detached")
        try:
            result = session.manager.handle_key(as_key_input(key))
        except BufferDetached:
            self._on_buffer_lost()
            return ModeResult(consumed=False, status="detached")
        self.renderer.update(self._mirror(session))
        return result

    async def handle_key_async(self, key: KeyLike) -> ModeResult:
        """Resolve one key, awaiting the system clipboard around ``+`` access."""

        key_input = as_key_input(key)
        session = self.session
        if session is None:
            return ModeResult(consumed=False, status="detached")

        if self._reads_clipboard(session, key_input):
            try:
                await self.registers.load_clipboard()
            except SystemClipboardUnavailable as exc:
                self._clipboard_unavailable(exc, "read")
                session.state.register_name = None

        result = self.handle_key(key_input)

        if self.registers.clipboard_dirty:
            try:
                await self.registers.flush_clipboard()
            except SystemClipboardUnavailable as exc:
                self._clipboard_unavailable(exc, "write")
        return result

    def _reads_clipboard(self, session: BufferSession, key: KeyInput) -> bool:
        state = session.state
        if state.register_name != CLIPBOARD_REGISTER or state.operator_pending:
            return False
        if state.command_buffer or state.mode is Mode.INSERT:
            return False
        return key.token in ("p", "P")

    def _clipboard_unavailable(self, exc: Exception, action: str) -> None:
        telemetry.record_event(
            "clipboard.unavailable",
            level="warning",
            data={"action": action, "reason": str(exc)},
        )

    def _on_register_write(self, name: str, value: Register) -> None:
        self.bus.emit(
            "register.write",
            {"register": name, "content": value.content, "linewise": value.linewise},
        )

    def _on_buffer_lost(self) -> None:
        lost = self._buffer
        self.detach()
        if lost is not None:
            self._sessions.pop(lost, None)

    # ------------------------------------------------------------------
    # Host helpers
    # ------------------------------------------------------------------

    def feed(self, keys: str) -> ModeResult:
        """Send each character of ``keys`` through ``handle_key``."""

        result = ModeResult(consumed=False, status="noop")
        for char in keys:
            result = self.handle_key(char)
        return result

    def type_text(self, text: str) -> None:
        """Insert ``text`` at the cursor as the host control would in Insert mode."""

        session = self.session
        if session is None:
            return
        insert_text(session.context, text)
        self.renderer.update(self._mirror(session))

    def mirror(self) -> Optional[BufferMirror]:
        session = self.session
        return self._mirror(session) if session else None

    def _mirror(self, session: BufferSession) -> BufferMirror:
        buffer = session.context.buffer
        selection = buffer.get_selection()
        state = session.state
        attributes = {}
        if state.command_buffer or state.count_buffer or state.operator_pending:
            attributes["pending"] = (
                f"{state.count_buffer}{state.operator_pending or ''}{state.command_buffer}"
            )
        if state.mode.is_visual:
            attributes["visual"] = f"{state.visual_start}:{state.visual_end}"
        return BufferMirror(
            text=buffer.get_text(),
            cursor=selection[0],
            selection=selection,
            mode=state.mode.value,
            attributes=attributes,
        )


__all__ = ["Engine", "BufferSession", "KeyLike", "as_key_input"]
