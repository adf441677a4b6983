"""
Formatter states.

The formatter is always in exactly one of these states. A test is
running in the report only in ``InScenario`` and ``InOutlineRow``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Idle:
    """Between test units."""


@dataclass(frozen=True)
class PendingScenario:
    """A plain scenario was announced; its name is not known yet."""


@dataclass(frozen=True)
class InScenario:
    """A plain scenario's test is running."""
    name: str


@dataclass(frozen=True)
class PendingOutline:
    """An outline was announced; examples have not begun."""
    base_name: str | None = None


@dataclass(frozen=True)
class InOutlineHeader:
    """An examples section began; the next row is its header."""
    base_name: str


@dataclass(frozen=True)
class InOutlineExamples:
    """Between data rows of an examples section."""
    base_name: str


@dataclass(frozen=True)
class InOutlineRow:
    """The test for one example row is running."""
    base_name: str
    name: str


@dataclass(frozen=True)
class InMultilineArg:
    """A multiline argument is open; ``resume`` is restored when it closes."""
    resume: State


State = Union[
    Idle,
    PendingScenario,
    InScenario,
    PendingOutline,
    InOutlineHeader,
    InOutlineExamples,
    InOutlineRow,
    InMultilineArg,
]


def base_state(state: State) -> State:
    """Unwrap any open multiline arguments."""
    while isinstance(state, InMultilineArg):
        state = state.resume
    return state


def is_started(state: State) -> bool:
    """Return True if a test is running in the report."""
    return isinstance(base_state(state), (InScenario, InOutlineRow))


def active_test_name(state: State) -> str | None:
    """Name of the running test, if any."""
    state = base_state(state)
    if isinstance(state, (InScenario, InOutlineRow)):
        return state.name
    return None


def outline_base_name(state: State) -> str | None:
    """Cached outline name for outline states, else None."""
    state = base_state(state)
    if isinstance(state, (PendingOutline, InOutlineHeader, InOutlineExamples, InOutlineRow)):
        return state.base_name
    return None


def is_outline(state: State) -> bool:
    return isinstance(
        base_state(state),
        (PendingOutline, InOutlineHeader, InOutlineExamples, InOutlineRow),
    )
