"""
Base report sink interface.

This module defines the abstract base class that every report sink
must follow. The event formatter only talks to a sink through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ReportStatus, Result


class ReportSink(ABC):
    """
    Abstract base class for report sinks.

    Sinks receive suite, test and step lifecycle calls in a valid order:
    a test is always started before any of its steps, and every start
    is matched by a stop.
    """

    @abstractmethod
    def start_suite(self, name: str) -> None:
        """Open a suite (one feature)."""

    @abstractmethod
    def stop_suite(self) -> None:
        """Close the current suite."""

    @abstractmethod
    def start_test(self, name: str, labels: dict[str, Any]) -> None:
        """
        Open a test inside the current suite.

        Args:
            name: Display name of the test
            labels: Scenario tag mapping (testId, issue, severity, feature, story)
        """

    @abstractmethod
    def stop_test(self, result: Result) -> None:
        """Close the current test with its final result."""

    @abstractmethod
    def start_step(self, name: str) -> None:
        """Open a step inside the current test."""

    @abstractmethod
    def stop_step(self, status: ReportStatus) -> None:
        """Close the innermost open step."""

    @abstractmethod
    def attach(self, name: str, source: str | Path, mime_type: str | None = None) -> None:
        """
        Attach a file to whatever is currently open.

        Args:
            name: Label shown for the attachment
            source: Path of the file to attach
            mime_type: Optional MIME type of the file
        """
