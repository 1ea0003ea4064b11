"""Visual and Visual-Line modes."""

from __future__ import annotations

from typing import Optional

from vim_textfield.actions import (
    begin_selection,
    change_selection,
    delete_selection,
    extend_selection,
    paste_over_selection,
    select_text_object,
    switch_submode,
    yank_selection,
)
from vim_textfield.buffer import LastFind, get_line
from vim_textfield.motions import MOTIONS, VERTICAL_MOTIONS, execute_motion, motion_find
from vim_textfield.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .pending import (
    FIND_PREFIXES,
    REGISTER_PREFIX,
    TEXT_OBJECT_PREFIXES,
    AwaitingPrefixArg,
    pending_state,
)

VISUAL_MODES = frozenset({"visual", "visual-line"})
PREFIX_KEYS = frozenset({"g", REGISTER_PREFIX}) | FIND_PREFIXES | TEXT_OBJECT_PREFIXES
COLUMN_KEEPING_STATUSES = frozenset({"pending", "vertical_motion"})


class VisualMode(Mode):
    """Character-wise selection; motions move ``visual_end`` only."""

    name = "visual"
    linewise = False

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vim_textfield.modes.{self.name}")

    def on_enter(self, previous: Optional[str]) -> None:
        self.context.state.clear_pending()
        if previous in VISUAL_MODES:
            switch_submode(self.context, linewise=self.linewise)
        else:
            begin_selection(self.context, linewise=self.linewise)

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key.token
        pending = pending_state(self.context.state)
        if isinstance(pending, AwaitingPrefixArg):
            result = self._resolve_prefix(pending.kind, token)
        else:
            result = self._dispatch(token)
        if result.status not in COLUMN_KEEPING_STATUSES:
            self.context.state.wanted_column = None
        return result

    def handle_escape(self) -> ModeResult:
        return self._leave("escape")

    def _leave(self, message: str) -> ModeResult:
        state = self.context.state
        state.clear_pending()
        state.register_name = None
        self.context.move_cursor(min(state.visual_start, state.visual_end))
        return ModeResult(consumed=True, switch_to="normal", message=message)

    def _finish(self, result: ModeResult) -> ModeResult:
        self.context.state.clear_pending()
        return result

    def _take_count(self) -> int:
        state = self.context.state
        count = state.count
        state.count_buffer = ""
        return count

    def _extend_to(self, target: int, status: str = "visual_select") -> ModeResult:
        result = extend_selection(self.context, target, linewise=self.linewise)
        result.status = status
        return self._finish(result)

    def _move(self, motion: str, count: int) -> ModeResult:
        state = self.context.state
        text = self.context.text
        pos = state.visual_cursor
        if motion in VERTICAL_MOTIONS:
            if state.wanted_column is None:
                state.wanted_column = get_line(text, pos).column(pos)
            target = execute_motion(motion, text, pos, count, column=state.wanted_column)
            return self._extend_to(target, "vertical_motion")
        return self._extend_to(execute_motion(motion, text, pos, count))

    def _find(self, find: LastFind, count: int) -> ModeResult:
        state = self.context.state
        return self._extend_to(
            motion_find(self.context.text, state.visual_cursor, find, count)
        )

    def _resolve_prefix(self, kind: str, token: str) -> ModeResult:
        state = self.context.state
        if len(token) != 1:
            return self._abort()

        if kind == "g":
            if token in ("g", "e"):
                return self._move("g" + token, self._take_count())
            return self._abort()

        if kind in FIND_PREFIXES:
            find = LastFind(char=token, kind=kind)
            state.last_find = find
            return self._find(find, self._take_count())

        if kind in TEXT_OBJECT_PREFIXES:
            return self._finish(
                select_text_object(
                    self.context, token, inner=kind == "i", linewise=self.linewise
                )
            )

        if kind == REGISTER_PREFIX:
            state.register_name = token
            state.command_buffer = ""
            return ModeResult(consumed=True, status="pending")

        return self._abort()

    def _dispatch(self, token: str) -> ModeResult:
        context = self.context
        state = context.state

        if len(token) == 1 and token.isdigit() and (token != "0" or state.count_buffer):
            state.count_buffer += token
            return ModeResult(consumed=True, status="pending")

        if token in MOTIONS:
            return self._move(token, self._take_count())

        if token in PREFIX_KEYS:
            state.command_buffer = token
            return ModeResult(consumed=True, status="pending")

        if token in (";", ","):
            count = self._take_count()
            if state.last_find is None:
                return self._finish(ModeResult(consumed=True, status="noop"))
            find = state.last_find if token == ";" else state.last_find.reversed()
            return self._find(find, count)

        if token in ("d", "x"):
            return self._finish(delete_selection(context, linewise=self.linewise))
        if token == "y":
            return self._finish(yank_selection(context, linewise=self.linewise))
        if token == "c":
            return self._finish(change_selection(context, linewise=self.linewise))
        if token in ("p", "P"):
            return self._finish(paste_over_selection(context, linewise=self.linewise))

        if token == "v":
            if self.linewise:
                return self._finish(ModeResult(consumed=True, switch_to="visual"))
            return self._leave("toggle")
        if token == "V":
            if not self.linewise:
                return self._finish(ModeResult(consumed=True, switch_to="visual-line"))
            return self._leave("toggle")

        return self._abort()

    def _abort(self) -> ModeResult:
        state = self.context.state
        state.clear_pending()
        state.register_name = None
        return ModeResult(consumed=True, status="abort")


class VisualLineMode(VisualMode):
    """Line-wise selection; both ends snap to whole lines around the anchor."""

    name = "visual-line"
    linewise = True


__all__ = ["VisualMode", "VisualLineMode", "VISUAL_MODES"]
