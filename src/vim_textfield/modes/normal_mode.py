"""Normal mode: the count/operator/prefix key parser and command dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, cast

from vim_textfield.actions import (
    INSERT_ACTIONS,
    OPERATORS,
    apply_operator,
    delete_char_before_cursor,
    delete_char_under_cursor,
    delete_to_line_end,
    paste,
    replace_char,
    substitute_chars,
    undo,
    whole_line_range,
)
from vim_textfield.buffer import (
    CommandChange,
    LastFind,
    MotionChange,
    TextObjectChange,
    get_line,
)
from vim_textfield.motions import (
    MOTIONS,
    VERTICAL_MOTIONS,
    execute_motion,
    find_operator_range,
    find_text_object,
    motion_find,
    motion_range,
)
from vim_textfield.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .pending import (
    FIND_PREFIXES,
    REGISTER_PREFIX,
    TEXT_OBJECT_PREFIXES,
    AwaitingPrefixArg,
    OperatorPending,
    OperatorPendingPrefixArg,
    pending_state,
)
from .repeat import DotRepeat

if TYPE_CHECKING:
    from .mode_manager import ModeManager

PREFIX_KEYS = frozenset({"g", "r", REGISTER_PREFIX}) | FIND_PREFIXES
COLUMN_KEEPING_STATUSES = frozenset({"pending", "vertical_motion"})
REPEATABLE_EDITS = {
    "x": delete_char_under_cursor,
    "X": delete_char_before_cursor,
    "D": delete_to_line_end,
}


class NormalMode(Mode):
    """Resolves one key at a time against the pending count/operator/prefix.

    Branches are tried in a fixed order and each is terminal for the key:
    operator + argument, operator alone, prefix argument, then bare keys.
    Anything unrecognised clears every pending buffer.
    """

    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_textfield.modes.normal")

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.context.state.clear_pending()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key.token
        pending = pending_state(self.context.state)
        if isinstance(pending, OperatorPendingPrefixArg):
            result = self._resolve_operator_argument(pending, token)
        elif isinstance(pending, OperatorPending):
            result = self._resolve_operator(pending.operator, token)
        elif isinstance(pending, AwaitingPrefixArg):
            result = self._resolve_prefix(pending.kind, token)
        else:
            result = self._dispatch(token)

        if result.status not in COLUMN_KEEPING_STATUSES:
            self.context.state.wanted_column = None
        return result

    def handle_escape(self) -> ModeResult:
        """Escape in Normal mode hands focus back to the host."""

        state = self.context.state
        state.clear_pending()
        state.register_name = None
        return ModeResult(consumed=True, status="release")

    # ------------------------------------------------------------------
    # Buffer bookkeeping
    # ------------------------------------------------------------------

    def _pending(self) -> ModeResult:
        return ModeResult(consumed=True, status="pending")

    def _finish(self, result: ModeResult) -> ModeResult:
        self.context.state.clear_pending()
        return result

    def _abort(self, token: str) -> ModeResult:
        state = self.context.state
        telemetry.debug(
            "normal.abort",
            logger_name="vim_textfield.modes.normal",
            key=token,
            command=state.command_buffer,
            count=state.count_buffer,
            operator=state.operator_pending,
        )
        state.clear_pending()
        state.register_name = None
        return ModeResult(consumed=True, status="abort")

    def _take_count(self) -> int:
        state = self.context.state
        count = state.count
        state.count_buffer = ""
        return count

    def _is_count_digit(self, token: str) -> bool:
        if len(token) != 1 or not token.isdigit():
            return False
        return token != "0" or bool(self.context.state.count_buffer)

    def _move(self, motion: str, count: int) -> ModeResult:
        context = self.context
        state = context.state
        text = context.text
        pos = context.cursor
        if motion in VERTICAL_MOTIONS:
            if state.wanted_column is None:
                state.wanted_column = get_line(text, pos).column(pos)
            target = execute_motion(motion, text, pos, count, column=state.wanted_column)
            status = "vertical_motion"
        else:
            target = execute_motion(motion, text, pos, count)
            status = "motion"
        context.move_cursor(target)
        return self._finish(ModeResult(consumed=True, status=status, message=motion))

    def _find(self, find: LastFind, count: int) -> ModeResult:
        context = self.context
        target = motion_find(context.text, context.cursor, find, count)
        context.move_cursor(target)
        return self._finish(ModeResult(consumed=True, status="motion", message=find.kind))

    # ------------------------------------------------------------------
    # Resolution branches
    # ------------------------------------------------------------------

    def _resolve_operator_argument(
        self, pending: OperatorPendingPrefixArg, token: str
    ) -> ModeResult:
        context = self.context
        state = context.state
        operator, kind = pending.operator, pending.kind
        if len(token) != 1:
            return self._abort(token)

        count = self._take_count()
        text = context.text
        pos = context.cursor

        if kind in FIND_PREFIXES:
            find = LastFind(char=token, kind=kind)
            state.last_find = find
            found = find_operator_range(text, pos, find, count)
            state.last_change = MotionChange(operator, kind + token, count)
            if found is None:
                state.take_register()
                return self._finish(ModeResult(consumed=True, status="noop"))
            return self._finish(apply_operator(context, operator, found))

        if kind in TEXT_OBJECT_PREFIXES:
            found = find_text_object(text, pos, token, kind == "i")
            state.last_change = TextObjectChange(operator, kind + token, count)
            return self._finish(apply_operator(context, operator, found))

        if kind == "g" and token in ("g", "e"):
            motion = "g" + token
            state.last_change = MotionChange(operator, motion, count)
            found = motion_range(motion, text, pos, count)
            return self._finish(apply_operator(context, operator, found))

        return self._abort(token)

    def _resolve_operator(self, operator: str, token: str) -> ModeResult:
        context = self.context
        state = context.state

        if token == operator:
            count = self._take_count()
            state.last_change = MotionChange(operator, operator, count)
            found = whole_line_range(context.text, context.cursor)
            return self._finish(apply_operator(context, operator, found, linewise=True))

        if token in TEXT_OBJECT_PREFIXES or token in FIND_PREFIXES or token == "g":
            state.command_buffer = token
            return self._pending()

        if self._is_count_digit(token):
            state.count_buffer += token
            return self._pending()

        if token in MOTIONS:
            count = self._take_count()
            state.last_change = MotionChange(operator, token, count)
            found = motion_range(token, context.text, context.cursor, count)
            return self._finish(apply_operator(context, operator, found))

        return self._abort(token)

    def _resolve_prefix(self, kind: str, token: str) -> ModeResult:
        context = self.context
        state = context.state

        if kind == "g":
            if token in ("g", "e"):
                return self._move("g" + token, self._take_count())
            return self._abort(token)

        if len(token) != 1:
            return self._abort(token)

        if kind in FIND_PREFIXES:
            find = LastFind(char=token, kind=kind)
            state.last_find = find
            return self._find(find, self._take_count())

        if kind == "r":
            count = self._take_count()
            result = replace_char(context, token, count)
            if result.status != "noop":
                state.last_change = CommandChange("r", count, char=token)
            return self._finish(result)

        if kind == REGISTER_PREFIX:
            state.register_name = token
            state.command_buffer = ""
            return self._pending()

        return self._abort(token)

    def _dispatch(self, token: str) -> ModeResult:
        context = self.context
        state = context.state

        if self._is_count_digit(token):
            state.count_buffer += token
            return self._pending()

        if token in MOTIONS:
            return self._move(token, self._take_count())

        if token in PREFIX_KEYS:
            state.command_buffer = token
            return self._pending()

        if token in (";", ","):
            count = self._take_count()
            if state.last_find is None:
                return self._finish(ModeResult(consumed=True, status="noop"))
            find = state.last_find if token == ";" else state.last_find.reversed()
            return self._find(find, count)

        if token in OPERATORS:
            state.operator_pending = token
            return self._pending()

        if token in INSERT_ACTIONS:
            count = self._take_count()
            result = INSERT_ACTIONS[token](context)
            if token in ("o", "O"):
                state.last_change = CommandChange(token, count)
            return self._finish(result)

        if token == "s":
            count = self._take_count()
            state.last_change = CommandChange("s", count)
            return self._finish(substitute_chars(context, count))

        if token in REPEATABLE_EDITS:
            count = self._take_count()
            result = REPEATABLE_EDITS[token](context, count)
            if result.status != "noop":
                state.last_change = CommandChange(token, count)
            return self._finish(result)

        if token in ("p", "P"):
            count = self._take_count()
            result = paste(context, before=token == "P", count=count)
            if result.status != "noop":
                state.last_change = CommandChange(token, count)
            return self._finish(result)

        if token == "u":
            return self._finish(undo(context, self._take_count()))

        if token == ".":
            typed = state.count_buffer
            state.clear_pending()
            return self._repeat(int(typed) if typed else None)

        if token == "v":
            return self._finish(ModeResult(consumed=True, switch_to="visual"))

        if token == "V":
            return self._finish(ModeResult(consumed=True, switch_to="visual-line"))

        return self._abort(token)

    def _repeat(self, count: Optional[int]) -> ModeResult:
        manager = self.context.extras.get("mode_manager")
        if manager is None:
            return ModeResult(consumed=True, status="noop")
        return DotRepeat(cast("ModeManager", manager)).replay(count)


__all__ = ["NormalMode"]
