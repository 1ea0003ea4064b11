"""Mode manager, key dispatchers, and dot-repeat."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .pending import (
    AwaitingPrefixArg,
    Idle,
    OperatorPending,
    OperatorPendingPrefixArg,
    PendingState,
    pending_state,
)
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualLineMode, VisualMode
from .mode_manager import ModeManager
from .repeat import DotRepeat

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ModeManager",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "VisualLineMode",
    "DotRepeat",
    "Idle",
    "AwaitingPrefixArg",
    "OperatorPending",
    "OperatorPendingPrefixArg",
    "PendingState",
    "pending_state",
]
