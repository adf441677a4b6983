"""
Report data models for BDD test runs.

This module defines the data structures for capturing suite, test and
step records, including timing, labels, and attachments.
"""

from __future__ import annotations

import json
import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ReportStatus(str, Enum):
    """Status of a reported test or step."""
    PASSED = "passed"
    FAILED = "failed"
    BROKEN = "broken"
    CANCELED = "canceled"
    PENDING = "pending"


class Severity(str, Enum):
    """Severity levels accepted from scenario tags."""
    BLOCKER = "blocker"
    CRITICAL = "critical"
    NORMAL = "normal"
    MINOR = "minor"
    TRIVIAL = "trivial"


class ReportStateError(RuntimeError):
    """Raised when sink operations are called out of order."""


class UndefinedStepsError(Exception):
    """Stand-in cause for a failed test that carries no exception."""

    def __init__(self, message: str = "Some steps were undefined"):
        super().__init__(message)


@dataclass
class Result:
    """
    Final outcome of a test, handed to ``stop_test``.

    Attributes:
        status: Report status of the test
        exception: Failure cause, if any
        started_at: Overrides the test start time when set
    """
    status: ReportStatus
    exception: BaseException | None = None
    started_at: datetime | None = None


@dataclass
class Attachment:
    """A file attached to a step, test or suite."""
    name: str
    source: str
    type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "source": self.source, "type": self.type}


@dataclass
class StepRecord:
    """
    Record of a single reported step.

    Steps may nest; a step started while another is open becomes its child.
    """
    name: str
    status: ReportStatus | None = None

    # Timing
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None

    steps: list[StepRecord] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def complete(self, status: ReportStatus) -> None:
        """Mark the step as completed with given status."""
        self.status = status
        self.ended_at = datetime.now(timezone.utc)

    @property
    def duration_ms(self) -> float | None:
        return _duration_ms(self.started_at, self.ended_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name,
            "status": self.status.value if self.status else None,
            "started_at": _isoformat(self.started_at),
            "ended_at": _isoformat(self.ended_at),
            "duration_ms": self.duration_ms,
            "steps": [step.to_dict() for step in self.steps],
            "attachments": [a.to_dict() for a in self.attachments],
        }


@dataclass
class TestRecord:
    """
    Record of a single test (a scenario or one outline example row).

    Labels carry the scenario tag mapping: ``testId``, ``issue``,
    ``severity``, ``feature`` and ``story``.
    """
    __test__ = False  # not a pytest class

    name: str
    labels: dict[str, Any] = field(default_factory=dict)
    status: ReportStatus | None = None

    # Timing
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None

    # Failure details
    failure_message: str | None = None
    failure_trace: str | None = None

    steps: list[StepRecord] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def complete(self, result: Result) -> None:
        """Apply the final result to the record."""
        self.status = result.status
        self.ended_at = datetime.now(timezone.utc)
        if result.started_at:
            self.started_at = result.started_at
        if result.exception is not None:
            self.failure_message = str(result.exception) or type(result.exception).__name__
            self.failure_trace = "".join(
                traceback.format_exception(
                    type(result.exception), result.exception, result.exception.__traceback__
                )
            )

    @property
    def duration_ms(self) -> float | None:
        return _duration_ms(self.started_at, self.ended_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name,
            "status": self.status.value if self.status else None,
            "labels": {key: _safe_serialize(value) for key, value in self.labels.items()},
            "started_at": _isoformat(self.started_at),
            "ended_at": _isoformat(self.ended_at),
            "duration_ms": self.duration_ms,
            "failure": {
                "message": self.failure_message,
                "trace": self.failure_trace,
            } if self.failure_message else None,
            "steps": [step.to_dict() for step in self.steps],
            "attachments": [a.to_dict() for a in self.attachments],
        }


@dataclass
class SuiteRecord:
    """
    Complete record of one feature run.

    Contains the tests started between ``start_suite`` and ``stop_suite``.
    """
    name: str
    suite_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Timing
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None

    tests: list[TestRecord] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def complete(self) -> None:
        """Mark the suite as finished."""
        self.ended_at = datetime.now(timezone.utc)

    def count(self, status: ReportStatus) -> int:
        return sum(1 for t in self.tests if t.status == status)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "suite_id": self.suite_id,
            "name": self.name,
            "started_at": _isoformat(self.started_at),
            "ended_at": _isoformat(self.ended_at),
            "duration_ms": _duration_ms(self.started_at, self.ended_at),
            "summary": {
                "total": len(self.tests),
                **{status.value: self.count(status) for status in ReportStatus},
            },
            "tests": [test.to_dict() for test in self.tests],
            "attachments": [a.to_dict() for a in self.attachments],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _duration_ms(start: datetime | None, end: datetime | None) -> float | None:
    if start is None or end is None:
        return None
    return (end - start).total_seconds() * 1000


def _safe_serialize(value: Any) -> Any:
    """Safely serialize a value, handling non-JSON types."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)
