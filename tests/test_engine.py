from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from vim_textfield import Engine, EngineConfig
from vim_textfield.adapters import HostRenderer, NoopRenderer
from vim_textfield.buffer import (
    BufferDetached,
    BufferMirror,
    Mode,
    StringBuffer,
)


class FakeClipboard:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes: List[str] = []

    async def read_async(self) -> str:
        return self.text

    async def write_async(self, text: str) -> None:
        self.writes.append(text)
        self.text = text


class VanishingBuffer(StringBuffer):
    """StringBuffer whose host control can disappear mid-session."""

    gone = False

    def get_text(self) -> str:
        if self.gone:
            raise BufferDetached("control removed")
        return super().get_text()


def make_engine(
    text: str = "",
    cursor: int = 0,
    *,
    clipboard: Optional[FakeClipboard] = None,
    config: Any = None,
) -> Tuple[Engine, StringBuffer]:
    engine = Engine(config=config, clipboard=clipboard)
    buffer = StringBuffer(text, cursor=cursor)
    engine.attach(buffer)
    return engine, buffer


def test_keys_without_attached_buffer_are_not_consumed() -> None:
    engine = Engine()

    result = engine.handle_key("x")

    assert not result.consumed
    assert result.status == "detached"
    assert engine.mode is None
    assert engine.mirror() is None


def test_detach_stops_routing_keys() -> None:
    engine, buffer = make_engine("hello")
    engine.detach()

    assert engine.handle_key("x").status == "detached"
    assert buffer.get_text() == "hello"


def test_session_is_restored_on_reattach() -> None:
    engine = Engine()
    first = StringBuffer("hello")
    second = StringBuffer("world")

    engine.attach(first)
    engine.feed("x")
    engine.feed("d")
    engine.attach(second)
    assert engine.history is not None
    assert engine.history.undo_depth == 0
    engine.feed("x")
    assert second.get_text() == "orld"

    engine.attach(first)
    assert engine.state is not None
    assert engine.state.operator_pending is None
    engine.feed("u")
    assert first.get_text() == "hello"


def test_registers_are_shared_between_buffers() -> None:
    engine = Engine()
    first = StringBuffer("hello")
    second = StringBuffer("world")

    engine.attach(first)
    engine.feed("yw")
    engine.attach(second)
    engine.feed("P")

    assert second.get_text() == "helloworld"


def test_forget_drops_the_session() -> None:
    engine = Engine()
    buffer = StringBuffer("abc")
    session = engine.attach(buffer)
    engine.feed("x")

    engine.forget(buffer)
    assert not engine.attached

    assert engine.attach(buffer) is not session
    assert engine.history is not None
    assert engine.history.undo_depth == 0


def test_initial_mode_from_config() -> None:
    engine, buffer = make_engine("abc", config={"initialMode": "insert"})

    assert engine.mode is Mode.INSERT
    engine.type_text("x")
    engine.handle_key("escape")

    assert engine.mode is Mode.NORMAL
    assert buffer.get_text() == "xabc"
    assert buffer.cursor == 0


def test_undo_limit_from_config() -> None:
    engine, buffer = make_engine("abcdef", config=EngineConfig(undo_limit=2))

    engine.feed("xxxx")
    engine.feed("uuuu")

    assert buffer.get_text() == "cdef"


def test_renderer_receives_mirrors() -> None:
    mirrors: List[BufferMirror] = []
    hidden: List[bool] = []
    renderer = HostRenderer(mirrors.append, on_hide=lambda: hidden.append(True))
    engine = Engine(renderer=renderer)
    buffer = StringBuffer("hello")

    engine.attach(buffer)
    assert renderer.visible
    engine.feed("v")

    assert mirrors[-1].mode == "visual"
    assert mirrors[-1].selection == (0, 1)

    engine.close()
    assert hidden == [True]
    assert renderer.destroyed


def test_disabled_caret_uses_noop_renderer() -> None:
    renderer = HostRenderer(lambda mirror: None)

    engine = Engine(config={"disableCustomCaret": True}, renderer=renderer)

    assert isinstance(engine.renderer, NoopRenderer)


def test_register_writes_are_published_on_the_bus() -> None:
    engine, _ = make_engine("hello world")
    events: List[Any] = []
    engine.bus.subscribe("register.write", events.append)

    engine.feed('"qyw')

    assert events == [{"register": "q", "content": "hello ", "linewise": False}]


def test_mode_changes_are_published_on_the_bus() -> None:
    engine, _ = make_engine("hello")
    events: List[Any] = []
    engine.bus.subscribe("mode.change", events.append)

    engine.feed("i")
    engine.handle_key("escape")

    assert events == [
        {"mode": "insert", "previous": "normal"},
        {"mode": "normal", "previous": "insert"},
    ]


def test_insert_mode_keys_pass_through_to_host() -> None:
    engine, _ = make_engine("hello")
    engine.feed("i")

    result = engine.handle_key("a")

    assert not result.consumed
    assert result.status == "passthrough"


def test_lost_host_control_detaches() -> None:
    engine = Engine()
    buffer = VanishingBuffer("hello")
    engine.attach(buffer)

    buffer.gone = True
    result = engine.handle_key("x")

    assert result.status == "detached"
    assert not engine.attached


@pytest.mark.asyncio
async def test_clipboard_register_reads_system_clipboard() -> None:
    clipboard = FakeClipboard("clip")
    engine, buffer = make_engine("ab", clipboard=clipboard)

    for key in '"+p':
        await engine.handle_key_async(key)

    assert buffer.get_text() == "aclipb"
    assert buffer.cursor == 4


@pytest.mark.asyncio
async def test_clipboard_register_writes_system_clipboard() -> None:
    clipboard = FakeClipboard()
    engine, _ = make_engine("hello world", clipboard=clipboard)

    for key in '"+yw':
        await engine.handle_key_async(key)

    assert clipboard.writes == ["hello "]
    assert engine.registers.get().content == "hello "


@pytest.mark.asyncio
async def test_unavailable_clipboard_falls_back_to_default_register() -> None:
    engine, buffer = make_engine("ab")
    engine.registers.yank_to(None, "Z")

    for key in '"+p':
        await engine.handle_key_async(key)

    assert buffer.get_text() == "aZb"


@pytest.mark.asyncio
async def test_unavailable_clipboard_keeps_yank_local() -> None:
    engine, _ = make_engine("hello world")

    for key in '"+yw':
        result = await engine.handle_key_async(key)

    assert result.status == "yank"
    assert engine.registers.get("+").content == "hello "
    assert not engine.registers.clipboard_dirty
