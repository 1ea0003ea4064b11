"""Insert mode: the host edits the text; the engine only tracks the session."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from vim_textfield.actions import begin_insert
from vim_textfield.buffer import CommandChange, InsertSession, get_line
from vim_textfield.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

DISCARDABLE_COMMANDS = frozenset({"i", "a", "I", "A"})


def inserted_text(session: InsertSession, text: str, cursor: int) -> str:
    """Text typed since ``session`` began, found by diffing against its start."""

    before = session.start_text[: session.start_pos]
    after = session.start_text[session.start_pos :]
    if (
        len(text) >= len(session.start_text)
        and text.startswith(before)
        and text.endswith(after)
    ):
        return text[session.start_pos : len(text) - len(after)]
    if cursor > session.start_pos:
        return text[session.start_pos : cursor]
    return ""


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_textfield.modes.insert")

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        if self.context.state.insert_session is None:
            begin_insert(self.context, None)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._finish_session()

    def handle_key(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="passthrough")

    def _finish_session(self) -> None:
        context = self.context
        state = context.state
        session = state.insert_session
        state.insert_session = None
        if session is None:
            return

        text = context.text
        pos = context.cursor
        typed = inserted_text(session, text, pos)

        if session.owns_change and state.last_change is not None:
            state.last_change = replace(state.last_change, inserted_text=typed)
        elif session.command is not None and (
            typed or session.command not in DISCARDABLE_COMMANDS
        ):
            state.last_change = CommandChange(session.command, 1, inserted_text=typed)

        if (
            session.command in DISCARDABLE_COMMANDS
            and session.snapshot is not None
            and text == session.start_text
        ):
            context.history.discard_last(session.snapshot)

        line = get_line(text, pos)
        if pos > line.start:
            context.move_cursor(pos - 1)

        telemetry.debug(
            "insert.exit",
            logger_name="vim_textfield.modes.insert",
            command=session.command,
            inserted=typed,
        )


__all__ = ["InsertMode", "inserted_text"]
