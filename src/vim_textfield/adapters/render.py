"""Renderer capability the engine notifies after every resolved key."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from vim_textfield.buffer import BufferMirror


@runtime_checkable
class Renderer(Protocol):
    """Caret/selection/gutter drawing owned by the host."""

    def show(self, mirror: BufferMirror) -> None:
        ...

    def update(self, mirror: BufferMirror) -> None:
        ...

    def hide(self) -> None:
        ...

    def destroy(self) -> None:
        ...


class NoopRenderer:
    """Renderer used when the host draws nothing of its own."""

    def show(self, mirror: BufferMirror) -> None:
        del mirror

    def update(self, mirror: BufferMirror) -> None:
        del mirror

    def hide(self) -> None:
        return None

    def destroy(self) -> None:
        return None


class HostRenderer:
    """Forwards mirrors to host callbacks; ``on_hide`` also runs on destroy."""

    def __init__(
        self,
        on_update: Callable[[BufferMirror], None],
        *,
        on_hide: Optional[Callable[[], None]] = None,
    ) -> None:
        self._on_update = on_update
        self._on_hide = on_hide
        self.visible = False
        self.destroyed = False

    def show(self, mirror: BufferMirror) -> None:
        self.visible = True
        self._on_update(mirror)

    def update(self, mirror: BufferMirror) -> None:
        if self.visible:
            self._on_update(mirror)

    def hide(self) -> None:
        if self.visible and self._on_hide is not None:
            self._on_hide()
        self.visible = False

    def destroy(self) -> None:
        self.hide()
        self.destroyed = True


__all__ = ["Renderer", "NoopRenderer", "HostRenderer"]
