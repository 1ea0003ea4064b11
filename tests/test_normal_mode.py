from __future__ import annotations

from typing import Tuple

import pytest

from vim_textfield import Engine
from vim_textfield.buffer import Mode, StringBuffer
from vim_textfield.buffer.state import CommandChange, MotionChange, TextObjectChange


def make_engine(text: str = "", cursor: int = 0) -> Tuple[Engine, StringBuffer]:
    engine = Engine()
    buffer = StringBuffer(text, cursor=cursor)
    engine.attach(buffer)
    return engine, buffer


def test_delete_word_fills_default_register() -> None:
    engine, buffer = make_engine("hello world")

    result = engine.feed("dw")

    assert result.status == "delete"
    assert buffer.get_text() == "world"
    assert buffer.cursor == 0
    assert engine.registers.get().content == "hello "
    assert engine.state is not None
    assert engine.state.last_change == MotionChange("d", "w", 1)


def test_delete_inner_parentheses() -> None:
    engine, buffer = make_engine("foo(bar)baz", cursor=5)

    engine.feed("di(")

    assert buffer.get_text() == "foo()baz"
    assert buffer.cursor == 4
    assert engine.state is not None
    assert engine.state.last_change == TextObjectChange("d", "i(", 1)


def test_delete_line_is_linewise() -> None:
    engine, buffer = make_engine("line1\nline2\nline3", cursor=7)

    engine.feed("dd")

    assert buffer.get_text() == "line1\nline3"
    register = engine.registers.get()
    assert register.content == "line2\n"
    assert register.linewise


def test_delete_last_line_keeps_previous_newline() -> None:
    engine, buffer = make_engine("a\nb", cursor=2)

    engine.feed("dd")

    assert buffer.get_text() == "a\n"


def test_counts_multiply_edits() -> None:
    engine, buffer = make_engine("abcdef")
    engine.feed("3x")
    assert buffer.get_text() == "def"

    engine, buffer = make_engine("one two three")
    engine.feed("2dw")
    assert buffer.get_text() == "three"

    engine, buffer = make_engine("one two three")
    engine.feed("d2w")
    assert buffer.get_text() == "three"


def test_zero_extends_a_count_but_moves_otherwise() -> None:
    engine, buffer = make_engine("hello world!")
    engine.feed("10l")
    assert buffer.cursor == 10

    engine.feed("0")
    assert buffer.cursor == 0


def test_g_prefix_motions() -> None:
    engine, buffer = make_engine("hello world", cursor=8)

    engine.feed("ge")
    assert buffer.cursor == 4

    engine.feed("G")
    assert buffer.cursor == 11
    engine.feed("gg")
    assert buffer.cursor == 0


def test_find_and_repeat_find() -> None:
    engine, buffer = make_engine("abc,def,ghi")

    engine.feed("f,")
    assert buffer.cursor == 3
    engine.feed(";")
    assert buffer.cursor == 7
    engine.feed(",")
    assert buffer.cursor == 3


def test_repeat_find_without_history_is_noop() -> None:
    engine, buffer = make_engine("abc")

    assert engine.feed(";").status == "noop"
    assert buffer.cursor == 0


def test_operator_with_find() -> None:
    engine, buffer = make_engine("abc,def")
    engine.feed("dt,")
    assert buffer.get_text() == ",def"

    engine, buffer = make_engine("abc,def")
    engine.feed("df,")
    assert buffer.get_text() == "def"


def test_operator_with_missing_find_target_changes_nothing() -> None:
    engine, buffer = make_engine("abc,def")

    result = engine.feed("dfz")

    assert result.status == "noop"
    assert buffer.get_text() == "abc,def"
    assert engine.state is not None
    assert engine.state.is_idle


def test_replace_characters() -> None:
    engine, buffer = make_engine("hello")
    engine.feed("rx")
    assert buffer.get_text() == "xello"
    assert buffer.cursor == 0

    engine, buffer = make_engine("abcdef")
    engine.feed("3rx")
    assert buffer.get_text() == "xbcdef"
    assert buffer.cursor == 0
    assert engine.state is not None
    assert engine.state.last_change == CommandChange("r", 3, char="x")


def test_replace_near_line_end_ignores_count() -> None:
    engine, buffer = make_engine("hello", cursor=4)

    engine.feed("9rx")

    assert buffer.get_text() == "hellx"
    assert buffer.cursor == 4


def test_replace_on_empty_line_is_refused() -> None:
    engine, buffer = make_engine("ab\n\ncd", cursor=3)

    engine.feed("rx")

    assert buffer.get_text() == "ab\n\ncd"
    assert engine.history is not None
    assert engine.history.undo_depth == 0


def test_delete_before_cursor_and_to_line_end() -> None:
    engine, buffer = make_engine("hello", cursor=3)
    engine.feed("X")
    assert buffer.get_text() == "helo"
    assert buffer.cursor == 2

    engine, buffer = make_engine("hello world", cursor=5)
    engine.feed("D")
    assert buffer.get_text() == "hello"
    assert engine.registers.get().content == " world"


def test_delete_char_stops_at_line_end() -> None:
    engine, buffer = make_engine("ab\ncd", cursor=1)

    engine.feed("5x")

    assert buffer.get_text() == "a\ncd"


def test_x_then_p_swaps_characters() -> None:
    engine, buffer = make_engine("hello")

    engine.feed("xp")

    assert buffer.get_text() == "ehllo"
    assert buffer.cursor == 1


def test_linewise_put_below_and_above() -> None:
    engine, buffer = make_engine("one\ntwo")
    engine.feed("yy")
    assert buffer.cursor == 0

    engine.feed("jp")
    assert buffer.get_text() == "one\ntwo\none"
    assert buffer.cursor == 8

    engine, buffer = make_engine("one\ntwo")
    engine.feed("yyjP")
    assert buffer.get_text() == "one\none\ntwo"
    assert buffer.cursor == 4


def test_named_register_yank_and_put() -> None:
    engine, buffer = make_engine("hello world")

    engine.feed('"ayw')
    assert engine.registers.get("a").content == "hello "
    engine.feed("x")
    assert engine.registers.get("a").content == "hello "

    engine.feed('w"aP')
    assert buffer.get_text() == "ello hello world"


def test_change_line_on_empty_buffer_enters_insert() -> None:
    engine, buffer = make_engine("")

    result = engine.feed("cc")

    assert result.switch_to == "insert"
    assert engine.mode is Mode.INSERT
    engine.type_text("new")
    engine.handle_key("escape")
    assert buffer.get_text() == "new"


def test_change_line_on_empty_last_line_enters_insert() -> None:
    engine, buffer = make_engine("abc\n", cursor=4)

    engine.feed("cc")

    assert engine.mode is Mode.INSERT
    assert buffer.get_text() == "abc\n"
    assert buffer.cursor == 4


def test_change_to_line_end_at_line_end_enters_insert() -> None:
    engine, buffer = make_engine("abc\ndef", cursor=3)

    engine.feed("c$")

    assert engine.mode is Mode.INSERT
    assert buffer.get_text() == "abc\ndef"
    assert engine.history is not None
    assert engine.history.undo_depth == 0
    engine.type_text("!")
    engine.handle_key("escape")
    assert buffer.get_text() == "abc!\ndef"
    assert engine.state is not None
    assert engine.state.last_change == MotionChange("c", "$", 1, inserted_text="!")


def test_unknown_key_aborts_pending_command() -> None:
    engine, buffer = make_engine("hello")

    result = engine.feed("2dz")

    assert result.status == "abort"
    assert buffer.get_text() == "hello"
    assert engine.state is not None
    assert engine.state.is_idle


def test_pending_state_shows_in_mirror() -> None:
    engine, _ = make_engine("hello")

    engine.feed("2d")

    mirror = engine.mirror()
    assert mirror is not None
    assert mirror.attributes["pending"] == "2d"


def test_vertical_column_memory() -> None:
    engine, buffer = make_engine("hello world\nshort\nhello again", cursor=10)

    engine.feed("j")
    assert buffer.cursor == 17
    engine.feed("j")
    assert buffer.cursor == 28
    engine.feed("kk")
    assert buffer.cursor == 10


def test_horizontal_motion_resets_column_memory() -> None:
    engine, buffer = make_engine("hello world\nshort\nhello again", cursor=10)

    engine.feed("jhj")

    assert buffer.cursor == 22


def test_undo_and_redo() -> None:
    engine, buffer = make_engine("hello")
    engine.feed("x")

    assert engine.feed("u").status == "undo"
    assert buffer.get_text() == "hello"

    assert engine.handle_key("ctrl+r").status == "redo"
    assert buffer.get_text() == "ello"


def test_undo_with_empty_history_is_noop() -> None:
    engine, buffer = make_engine("hello")

    assert engine.feed("u").status == "noop"
    assert buffer.get_text() == "hello"


def test_escape_in_normal_releases_focus() -> None:
    engine, _ = make_engine("hello")
    engine.feed('"a2')

    result = engine.handle_key("escape")

    assert result.consumed
    assert result.status == "release"
    assert engine.state is not None
    assert engine.state.is_idle
    assert engine.state.register_name is None


def test_append_at_line_end_and_escape() -> None:
    engine, buffer = make_engine("abc")

    engine.feed("A")
    assert engine.mode is Mode.INSERT
    assert buffer.cursor == 3
    engine.type_text("d")
    engine.handle_key("escape")

    assert engine.mode is Mode.NORMAL
    assert buffer.get_text() == "abcd"
    assert buffer.cursor == 3
    assert engine.state is not None
    assert engine.state.last_change == CommandChange("A", 1, inserted_text="d")

    engine.feed("u")
    assert buffer.get_text() == "abc"


def test_insert_without_typing_leaves_no_undo_step() -> None:
    engine, _ = make_engine("abc", cursor=1)

    engine.feed("i")
    engine.handle_key("escape")

    assert engine.history is not None
    assert engine.history.undo_depth == 0


def test_open_line_below() -> None:
    engine, buffer = make_engine("one\ntwo")

    engine.feed("o")
    assert buffer.get_text() == "one\n\ntwo"
    assert buffer.cursor == 4
    engine.type_text("new")
    engine.handle_key("escape")

    assert buffer.get_text() == "one\nnew\ntwo"
    assert buffer.cursor == 6


def test_substitute_deletes_then_inserts() -> None:
    engine, buffer = make_engine("hello")

    engine.feed("2s")
    assert buffer.get_text() == "llo"
    assert engine.mode is Mode.INSERT
    engine.type_text("j")
    engine.handle_key("escape")

    assert buffer.get_text() == "jllo"
    assert engine.registers.get().content == "he"


@pytest.mark.parametrize("motion", ["w", "b", "e", "$", "0", "G", "gg", "}", "j"])
def test_delete_then_undo_restores_text_and_selection(motion: str) -> None:
    text = "alpha beta\ngamma (delta)\n\nomega"
    engine, buffer = make_engine(text, cursor=13)

    engine.feed("d" + motion)
    engine.feed("u")

    assert buffer.get_text() == text
    assert buffer.get_selection() == (13, 13)


@pytest.mark.parametrize("pair", ["(", "[", "{", "<", '"', "'", "`"])
def test_inner_delete_then_retype_reconstructs(pair: str) -> None:
    closing = {"(": ")", "[": "]", "{": "}", "<": ">"}.get(pair, pair)
    text = f"x {pair}inner text{closing} y"
    engine, buffer = make_engine(text, cursor=5)

    engine.feed("ci" + pair)
    engine.type_text("inner text")
    engine.handle_key("escape")

    assert buffer.get_text() == text
