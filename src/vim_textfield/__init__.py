"""Vim-style modal editing engine for host-owned text fields."""

# modes must finish loading before actions, which import modes.base_mode
from . import modes
from .config import EngineConfig
from .engine import BufferSession, Engine

__all__ = [
    "Engine",
    "EngineConfig",
    "BufferSession",
    "adapters",
    "actions",
    "buffer",
    "modes",
    "motions",
    "runtime",
]

__version__ = "0.1.0"
