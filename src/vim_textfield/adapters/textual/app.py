"""Executable Textual app that hosts the modal engine on a ``TextArea``."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static, TextArea

from vim_textfield.buffer import BufferMirror, PyperclipClipboard
from vim_textfield.config import EngineConfig
from vim_textfield.engine import Engine
from vim_textfield.runtime import telemetry

from .controller import TextualUIHooks, TextualVimAdapter, key_input_from_event
from .text_area import TextAreaBuffer


class VimTextArea(TextArea):
    """``TextArea`` that offers every key to the engine before editing."""

    adapter: Optional[TextualVimAdapter] = None

    async def _on_key(self, event: events.Key) -> None:
        key_input = key_input_from_event(event) if self.adapter else None
        if self.adapter is None or key_input is None:
            await super()._on_key(event)
            return
        result = await self.adapter.handle_textual_key_async(
            key_input.key, text=key_input.text, modifiers=key_input.modifiers
        )
        if result.consumed:
            event.stop()
            event.prevent_default()
            return
        await super()._on_key(event)


@dataclass
class UIState:
    mode_text: str = "normal"
    status_text: str = ""


class VimTextfieldApp(App[None]):
    """Minimal Textual UI embedding the engine in a text area."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        config: Optional[EngineConfig] = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._state = UIState()
        self.engine = Engine(config=config, clipboard=PyperclipClipboard())
        self.adapter: TextualVimAdapter | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield VimTextArea(
            self._initial_text,
            id="editor",
            show_line_numbers=self.engine.config.show_line_numbers,
        )
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one(VimTextArea)
        self.engine.attach(TextAreaBuffer(editor))
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_mode=self._show_mode,
            handle_event=self._handle_event,
            release_focus=self._release_focus,
        )
        self.adapter = TextualVimAdapter(self.engine, hooks)
        editor.adapter = self.adapter
        editor.focus()

    def on_unmount(self) -> None:
        self.engine.close()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        pending = mirror.attributes.get("pending", "")
        self._render_status(pending or self._state.status_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status

    def _show_mode(self, mode: str) -> None:
        self._state.mode_text = mode

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "operator.apply" and isinstance(payload, dict):
            self._state.status_text = f"{payload.get('operator')} -> {payload.get('register')}"

    def _release_focus(self) -> None:
        self.screen.set_focus(None)

    def _render_status(self, detail: str) -> None:
        if self._status_widget:
            self._status_widget.update(f"-- {self._state.mode_text.upper()} --  {detail}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal text field demo.")
    parser.add_argument("path", nargs="?", help="Optional file to load into the editor")
    parser.add_argument(
        "--insert",
        action="store_true",
        help="Start in Insert mode instead of Normal mode",
    )
    parser.add_argument(
        "--line-numbers",
        action="store_true",
        help="Show the line-number gutter",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else ""
    config = EngineConfig.from_mapping(
        {
            "initialMode": "insert" if args.insert else "normal",
            "showLineNumbers": args.line_numbers,
        }
    )
    VimTextfieldApp(text=text, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
