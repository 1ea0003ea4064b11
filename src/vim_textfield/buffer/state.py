"""Parser working memory, modes, ranges, and change records for one buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .undo import UndoSnapshot


class Mode(str, Enum):
    """Editor modes; exactly one is active per attached buffer."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual-line"

    @property
    def is_visual(self) -> bool:
        return self in (Mode.VISUAL, Mode.VISUAL_LINE)


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` span of buffer offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    @classmethod
    def between(cls, a: int, b: int) -> "TextRange":
        return cls(min(a, b), max(a, b))

    @classmethod
    def empty_at(cls, pos: int) -> "TextRange":
        return cls(pos, pos)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class LastFind:
    """Last ``f``/``F``/``t``/``T`` invocation, replayed by ``;`` and ``,``."""

    char: str
    kind: str

    @property
    def forward(self) -> bool:
        return self.kind in ("f", "t")

    @property
    def till(self) -> bool:
        return self.kind in ("t", "T")

    def reversed(self) -> "LastFind":
        return LastFind(char=self.char, kind=self.kind.swapcase())


@dataclass(frozen=True, slots=True)
class MotionChange:
    operator: str
    motion: str
    count: int = 1
    inserted_text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TextObjectChange:
    operator: str
    text_object: str
    count: int = 1
    inserted_text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CommandChange:
    command: str
    count: int = 1
    char: Optional[str] = None
    inserted_text: Optional[str] = None


LastChange = Union[MotionChange, TextObjectChange, CommandChange]


@dataclass(slots=True)
class InsertSession:
    """Bookkeeping captured when Insert mode is entered."""

    start_pos: int
    start_text: str
    command: Optional[str] = None
    snapshot: Optional["UndoSnapshot"] = None
    owns_change: bool = False


@dataclass(slots=True)
class EngineState:
    """Mutable key-parser state owned by the engine for one attached buffer."""

    mode: Mode = Mode.NORMAL
    command_buffer: str = ""
    count_buffer: str = ""
    operator_pending: Optional[str] = None
    register_name: Optional[str] = None
    last_find: Optional[LastFind] = None
    last_change: Optional[LastChange] = None
    visual_anchor: int = 0
    visual_start: int = 0
    visual_end: int = 0
    visual_cursor: int = 0
    wanted_column: Optional[int] = None
    insert_session: Optional[InsertSession] = None
    extras: dict[str, object] = field(default_factory=dict)

    @property
    def count(self) -> int:
        try:
            return int(self.count_buffer) or 1
        except ValueError:
            return 1

    def clear_pending(self) -> None:
        """Abort-to-idle: drop every partially typed command."""

        self.command_buffer = ""
        self.count_buffer = ""
        self.operator_pending = None

    def take_register(self) -> str:
        name = self.register_name or '"'
        self.register_name = None
        return name

    @property
    def is_idle(self) -> bool:
        return not (self.command_buffer or self.count_buffer or self.operator_pending)


__all__ = [
    "Mode",
    "TextRange",
    "LastFind",
    "MotionChange",
    "TextObjectChange",
    "CommandChange",
    "LastChange",
    "InsertSession",
    "EngineState",
]
