"""
Deferred step buffer.

A runner may report background steps before the scenario they belong
to has a name, so before the test can be started in the report. Those
steps are held here and replayed once the test starts.

Each step is one PendingStep entry: appended when the step starts and
completed in place when its outcome arrives. Outcomes are matched to
entries by step identity, so a step whose outcome never arrives cannot
shift the pairing of the steps after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .models import StepOutcome, TestStep

logger = logging.getLogger(__name__)


def first_line(location: Any) -> str:
    """Return the first line of a step location."""
    lines = str(location or "").splitlines()
    return lines[0] if lines else ""


@dataclass
class PendingStep:
    """A step received before its test was started."""
    name: str
    location: str = ""
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    multiline_arg: Any = None
    outcome: StepOutcome | None = None

    @property
    def completed(self) -> bool:
        return self.outcome is not None

    def matches(self, step: TestStep) -> bool:
        return self.name == step.name and self.location == first_line(step.location)


class DeferredSteps:
    """Ordered buffer of pending steps."""

    def __init__(self) -> None:
        self._entries: list[PendingStep] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    @property
    def started_at(self) -> datetime | None:
        """Arrival time of the earliest pending step, if any."""
        return self._entries[0].received_at if self._entries else None

    def add_step(self, step: TestStep) -> PendingStep:
        """Record a step that started while no test was running."""
        entry = PendingStep(name=step.name, location=first_line(step.location))
        self._entries.append(entry)
        return entry

    def complete_step(self, step: TestStep, outcome: StepOutcome) -> PendingStep:
        """
        Attach an outcome to the oldest incomplete entry for ``step``.

        An outcome for a step that was never started is kept as an
        already completed entry of its own.
        """
        for entry in self._entries:
            if not entry.completed and entry.matches(step):
                entry.outcome = outcome
                return entry

        logger.warning(f"Outcome for step '{step.name}' arrived without a matching start")
        entry = self.add_step(step)
        entry.outcome = outcome
        return entry

    def attach_multiline_arg(self, multiline_arg: Any) -> bool:
        """
        Store a multiline argument on the most recent entry.

        Returns:
            False if there is no entry to hold it
        """
        if not self._entries:
            return False
        self._entries[-1].multiline_arg = multiline_arg
        return True

    def clear(self) -> None:
        self._entries.clear()
