"""
Runner-side event payloads.

These are the objects a test runner hands to the formatter callbacks.
Any object with the same attributes works; the dataclasses here are
what the package and its tests build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RunnerStatus(str, Enum):
    """Step and scenario statuses reported by the test runner."""
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    SKIPPED = "skipped"
    UNDEFINED = "undefined"


@dataclass
class TestStep:
    """A step (or hook) about to run or just finished."""
    __test__ = False  # not a pytest class

    name: str
    location: str = ""


@dataclass
class StepOutcome:
    """Outcome of a step, a scenario's steps, or a hook."""
    status: RunnerStatus | str
    exception: BaseException | None = None


@dataclass
class TableRow:
    """
    A row of an examples table or a nested multiline table.

    Attributes:
        values: Cell values in column order
        status: Outcome status once the row has run
        exception: Failure cause once the row has run
    """
    values: list[str] = field(default_factory=list)
    status: RunnerStatus | str = RunnerStatus.PASSED
    exception: BaseException | None = None
