from __future__ import annotations

from typing import Any, List, Tuple

from vim_textfield import Engine
from vim_textfield.buffer import Mode, StringBuffer


def make_engine(text: str = "", cursor: int = 0) -> Tuple[Engine, StringBuffer]:
    engine = Engine()
    buffer = StringBuffer(text, cursor=cursor)
    engine.attach(buffer)
    return engine, buffer


def test_visual_line_yank_then_put_at_end() -> None:
    engine, buffer = make_engine("line1\nline2\nline3\nline4")

    engine.feed("Vjy")

    register = engine.registers.get()
    assert register.content == "line1\nline2\n"
    assert register.linewise
    assert engine.mode is Mode.NORMAL
    assert buffer.cursor == 0

    engine.feed("Gp")

    assert buffer.get_text() == "line1\nline2\nline3\nline4\nline1\nline2"
    assert buffer.cursor == 24


def test_charwise_selection_highlights_inclusive_range() -> None:
    engine, buffer = make_engine("hello world")

    engine.feed("vll")

    assert engine.mode is Mode.VISUAL
    assert buffer.get_selection() == (0, 3)
    mirror = engine.mirror()
    assert mirror is not None
    assert mirror.attributes["visual"] == "0:2"


def test_charwise_delete_is_inclusive() -> None:
    engine, buffer = make_engine("hello world")

    engine.feed("ved")

    assert buffer.get_text() == " world"
    assert engine.registers.get().content == "hello"
    assert engine.mode is Mode.NORMAL


def test_selection_backwards_from_anchor() -> None:
    engine, buffer = make_engine("hello world", cursor=4)

    engine.feed("vhhy")

    assert engine.registers.get().content == "llo"
    assert buffer.cursor == 2


def test_visual_line_extends_upwards() -> None:
    engine, buffer = make_engine("one\ntwo\nthree", cursor=9)

    engine.feed("Vk")
    assert buffer.get_selection() == (4, 13)

    engine.feed("d")
    assert buffer.get_text() == "one\n"


def test_toggle_between_submodes_keeps_anchor() -> None:
    engine, buffer = make_engine("ab\ncd", cursor=1)

    engine.feed("vj")
    assert buffer.get_selection() == (1, 5)

    engine.feed("V")
    assert engine.mode is Mode.VISUAL_LINE
    assert buffer.get_selection() == (0, 5)

    engine.feed("v")
    assert engine.mode is Mode.VISUAL


def test_same_key_leaves_visual_mode() -> None:
    engine, buffer = make_engine("hello", cursor=3)

    engine.feed("vhv")

    assert engine.mode is Mode.NORMAL
    assert buffer.cursor == 2
    assert buffer.get_selection() == (2, 2)


def test_escape_collapses_to_selection_start() -> None:
    engine, buffer = make_engine("hello world", cursor=2)

    engine.feed("vw")
    engine.handle_key("escape")

    assert engine.mode is Mode.NORMAL
    assert buffer.get_selection() == (2, 2)


def test_select_text_object_then_delete() -> None:
    engine, buffer = make_engine("foo(bar)baz", cursor=5)

    engine.feed("vi(")
    assert buffer.get_selection() == (4, 7)

    engine.feed("d")
    assert buffer.get_text() == "foo()baz"


def test_change_selection_enters_insert() -> None:
    engine, buffer = make_engine("hello world")

    engine.feed("vec")
    assert engine.mode is Mode.INSERT
    engine.type_text("bye")
    engine.handle_key("escape")

    assert buffer.get_text() == "bye world"
    assert engine.state is not None
    assert engine.state.last_change is None


def test_paste_replaces_selection_and_keeps_register() -> None:
    engine, buffer = make_engine("hello world")
    engine.registers.yank_to(None, "XY")

    engine.feed("vep")

    assert buffer.get_text() == "XY world"
    assert buffer.cursor == 0
    assert engine.registers.get().content == "XY"
    engine.feed("u")
    assert buffer.get_text() == "hello world"


def test_yank_into_named_register() -> None:
    engine, _ = make_engine("hello world")

    engine.feed('ve"by')

    assert engine.registers.get("b").content == "hello"


def test_visual_selection_events_are_emitted() -> None:
    engine, _ = make_engine("hello")
    events: List[Any] = []
    engine.bus.subscribe("visual.selection", events.append)

    engine.feed("vl")

    assert events[-1]["range"] == (0, 2)
    assert events[-1]["linewise"] is False
