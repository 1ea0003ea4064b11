"""Clamping helpers shared across buffer services."""

from __future__ import annotations


def clamp_offset(text: str, pos: int) -> int:
    return max(0, min(pos, len(text)))

