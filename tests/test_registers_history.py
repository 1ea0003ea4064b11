from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from vim_textfield.buffer import (
    CLIPBOARD_REGISTER,
    DEFAULT_REGISTER,
    History,
    Register,
    RegisterBank,
    StringBuffer,
    SystemClipboardUnavailable,
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


def make_bank(clipboard: Optional[FakeClipboard] = None) -> RegisterBank:
    return RegisterBank(clipboard)


def test_named_register_mirrors_into_default() -> None:
    bank = make_bank()

    bank.yank_to("a", "hello", linewise=True)

    assert bank.get("a") == Register("hello", linewise=True)
    assert bank.get(DEFAULT_REGISTER) == Register("hello", linewise=True)
    assert bank.get() == bank.get(DEFAULT_REGISTER)


def test_default_write_leaves_named_registers() -> None:
    bank = make_bank()
    bank.yank_to("a", "keep")

    bank.yank_to(None, "other")

    assert bank.get("a").content == "keep"
    assert bank.get().content == "other"


def test_unknown_register_reads_empty() -> None:
    assert make_bank().get("z") == Register()


def test_listeners_see_every_write() -> None:
    bank = make_bank()
    seen: List[Tuple[str, str]] = []
    bank.add_listener(lambda name, value: seen.append((name, value.content)))

    bank.yank_to("b", "x")
    bank.yank_to(None, "y")

    assert seen == [("b", "x"), (DEFAULT_REGISTER, "y")]


def test_serialize_and_load_round_trip_contents() -> None:
    bank = make_bank()
    bank.yank_to("a", "one")

    other = make_bank()
    other.load(bank.serialize())

    assert other.get("a").content == "one"
    assert other.get().content == "one"


@pytest.mark.asyncio
async def test_clipboard_write_is_flushed_once() -> None:
    clipboard = FakeClipboard()
    bank = make_bank(clipboard)

    bank.yank_to(CLIPBOARD_REGISTER, "copied")
    assert bank.clipboard_dirty

    await bank.flush_clipboard()
    await bank.flush_clipboard()

    assert clipboard.writes == ["copied"]
    assert not bank.clipboard_dirty


@pytest.mark.asyncio
async def test_load_clipboard_keeps_linewise_flag_for_same_text() -> None:
    clipboard = FakeClipboard()
    bank = make_bank(clipboard)
    bank.yank_to(CLIPBOARD_REGISTER, "line\n", linewise=True)
    await bank.flush_clipboard()

    value = await bank.load_clipboard()
    assert value.linewise

    clipboard.text = "from elsewhere"
    value = await bank.load_clipboard()
    assert value == Register("from elsewhere", linewise=False)
    assert bank.get(CLIPBOARD_REGISTER).content == "from elsewhere"


@pytest.mark.asyncio
async def test_missing_clipboard_provider_raises() -> None:
    bank = make_bank()

    with pytest.raises(SystemClipboardUnavailable):
        await bank.load_clipboard()

    bank.yank_to(CLIPBOARD_REGISTER, "x")
    with pytest.raises(SystemClipboardUnavailable):
        await bank.flush_clipboard()
    assert not bank.clipboard_dirty


def test_history_undo_and_redo_restore_text_and_selection() -> None:
    buffer = StringBuffer("abc", cursor=1)
    history = History()

    history.save(buffer)
    buffer.set_text("xyz")
    buffer.set_selection(2, 2)

    assert history.undo(buffer) is not None
    assert buffer.get_text() == "abc"
    assert buffer.get_selection() == (1, 1)

    assert history.redo(buffer) is not None
    assert buffer.get_text() == "xyz"
    assert buffer.get_selection() == (2, 2)


def test_history_drops_oldest_past_limit() -> None:
    buffer = StringBuffer("0")
    history = History()

    for index in range(105):
        history.save(buffer)
        buffer.set_text(str(index + 1))

    assert history.undo_depth == 100
    while history.undo(buffer) is not None:
        pass
    assert buffer.get_text() == "5"


def test_new_save_clears_redo() -> None:
    buffer = StringBuffer("a")
    history = History()
    history.save(buffer)
    buffer.set_text("b")
    history.undo(buffer)
    assert history.redo_depth == 1

    history.save(buffer)

    assert history.redo_depth == 0
    assert history.redo(buffer) is None


def test_discard_last_only_drops_newest_snapshot() -> None:
    buffer = StringBuffer("a")
    history = History()
    first = history.save(buffer)
    second = history.save(buffer)

    assert not history.discard_last(first)
    assert history.discard_last(second)
    assert history.undo_depth == 1


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        History(limit=0)
