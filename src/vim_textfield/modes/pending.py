"""What the key parser is waiting for, derived from the ``EngineState`` buffers.

The string buffers stay the source of truth (they are what dot-repeat
primes); dispatchers branch on these tagged states instead of re-reading
the strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from vim_textfield.buffer import EngineState

FIND_PREFIXES = frozenset({"f", "F", "t", "T"})
TEXT_OBJECT_PREFIXES = frozenset({"i", "a"})
REGISTER_PREFIX = '"'


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class AwaitingPrefixArg:
    """A prefix (``g``, ``f``..``T``, ``r``, ``"``, or visual ``i``/``a``) wants one more key."""

    kind: str


@dataclass(frozen=True, slots=True)
class OperatorPending:
    operator: str


@dataclass(frozen=True, slots=True)
class OperatorPendingPrefixArg:
    """An operator has seen a prefix and wants its argument (``di(``, ``dfx``, ``dgg``)."""

    operator: str
    kind: str


PendingState = Union[Idle, AwaitingPrefixArg, OperatorPending, OperatorPendingPrefixArg]


def pending_state(state: EngineState) -> PendingState:
    operator = state.operator_pending
    prefix = state.command_buffer
    if operator and prefix:
        return OperatorPendingPrefixArg(operator=operator, kind=prefix)
    if operator:
        return OperatorPending(operator=operator)
    if prefix:
        return AwaitingPrefixArg(kind=prefix)
    return Idle()


__all__ = [
    "FIND_PREFIXES",
    "TEXT_OBJECT_PREFIXES",
    "REGISTER_PREFIX",
    "Idle",
    "AwaitingPrefixArg",
    "OperatorPending",
    "OperatorPendingPrefixArg",
    "PendingState",
    "pending_state",
]
