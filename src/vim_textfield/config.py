"""Host-facing engine configuration.

The host persists a flat ``key -> value`` record. Reading it must tolerate
missing keys, unknown keys, and values of the wrong type, so older and
newer hosts can share one record; unknown keys are carried through
untouched by ``to_mapping``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from vim_textfield.buffer.undo import DEFAULT_UNDO_LIMIT
from vim_textfield.runtime import telemetry

INITIAL_MODES = ("normal", "insert")

_FIELD_KEYS = {
    "disableCustomCaret": "disable_custom_caret",
    "showLineNumbers": "show_line_numbers",
    "relativeLineNumbers": "relative_line_numbers",
    "undoLimit": "undo_limit",
    "initialMode": "initial_mode",
}


@dataclass
class EngineConfig:
    """Rendering toggles plus the few knobs the engine itself reads."""

    disable_custom_caret: bool = False
    show_line_numbers: bool = False
    relative_line_numbers: bool = False
    undo_limit: int = DEFAULT_UNDO_LIMIT
    initial_mode: str = "normal"
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "EngineConfig":
        config = cls()
        for key, value in (data or {}).items():
            attr = _FIELD_KEYS.get(key)
            if attr is None:
                config.extras[key] = value
                continue
            if _accepts(attr, value):
                setattr(config, attr, value)
            else:
                telemetry.record_event(
                    "config.invalid",
                    level="warning",
                    data={"key": key, "value": value},
                )
        return config

    def to_mapping(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extras)
        for key, attr in _FIELD_KEYS.items():
            data[key] = getattr(self, attr)
        return data


def _accepts(attr: str, value: Any) -> bool:
    if attr == "undo_limit":
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if attr == "initial_mode":
        return value in INITIAL_MODES
    return isinstance(value, bool)


__all__ = ["EngineConfig", "INITIAL_MODES"]
