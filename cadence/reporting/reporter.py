"""
File-backed report sink.

This module provides the FileReporter class which builds suite records
from sink calls and saves each finished suite as a JSON file.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import Any

from .models import (
    Attachment,
    ReportStateError,
    ReportStatus,
    Result,
    StepRecord,
    SuiteRecord,
    TestRecord,
)
from .sink import ReportSink

logger = logging.getLogger(__name__)


class FileReporter(ReportSink):
    """
    Builds suite records and writes them to an output directory.

    Example:
        reporter = FileReporter("reports/data")

        reporter.start_suite("Checkout")
        reporter.start_test("Pay by card", {"severity": Severity.CRITICAL})
        reporter.start_step("Given a basket")
        reporter.stop_step(ReportStatus.PASSED)
        reporter.stop_test(Result(ReportStatus.PASSED))
        reporter.stop_suite()  # writes reports/data/<uuid>-suite.json
    """

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.suite: SuiteRecord | None = None
        self.test: TestRecord | None = None
        self._open_steps: list[StepRecord] = []
        self.saved: list[Path] = []

    def start_suite(self, name: str) -> None:
        if self.suite is not None:
            logger.warning(f"Suite '{self.suite.name}' was not stopped; saving it now")
            self.stop_suite()
        self.suite = SuiteRecord(name=name)
        logger.debug(f"Suite started: {name}")

    def stop_suite(self) -> None:
        suite = self._require_suite()
        if self.test is not None:
            raise ReportStateError(f"Test '{self.test.name}' is still running")
        suite.complete()
        self.saved.append(self.save_json(suite))
        self.suite = None

    def start_test(self, name: str, labels: dict[str, Any]) -> None:
        suite = self._require_suite()
        if self.test is not None:
            raise ReportStateError(
                f"Cannot start test '{name}': '{self.test.name}' is still running"
            )
        self.test = TestRecord(name=name, labels=dict(labels))
        suite.tests.append(self.test)
        logger.debug(f"Test started: {name}")

    def stop_test(self, result: Result) -> None:
        test = self._require_test()
        if self._open_steps:
            logger.warning(
                f"Test '{test.name}' stopped with {len(self._open_steps)} open step(s)"
            )
            # Leftover steps inherit the test status.
            while self._open_steps:
                self._open_steps.pop().complete(result.status)
        test.complete(result)
        self.test = None
        logger.debug(f"Test stopped: {test.name} ({result.status.value})")

    def start_step(self, name: str) -> None:
        test = self._require_test()
        step = StepRecord(name=name)
        if self._open_steps:
            self._open_steps[-1].steps.append(step)
        else:
            test.steps.append(step)
        self._open_steps.append(step)

    def stop_step(self, status: ReportStatus) -> None:
        if not self._open_steps:
            raise ReportStateError("No step is running")
        self._open_steps.pop().complete(status)

    def attach(self, name: str, source: str | Path, mime_type: str | None = None) -> None:
        source = Path(source)
        if source.resolve().parent != self.output_dir.resolve():
            target = self.output_dir / f"{uuid.uuid4()}-attachment{source.suffix}"
            shutil.copyfile(source, target)
            source = target

        attachment = Attachment(name=name, source=source.name, type=mime_type)
        if self._open_steps:
            self._open_steps[-1].attachments.append(attachment)
        elif self.test is not None:
            self.test.attachments.append(attachment)
        else:
            self._require_suite().attachments.append(attachment)

    def save_json(self, suite: SuiteRecord) -> Path:
        """
        Save a suite to ``<output_dir>/<suite_id>-suite.json``.

        Returns:
            Path of the written file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{suite.suite_id}-suite.json"
        path.write_text(suite.to_json())
        logger.debug(f"Suite saved: {path}")
        return path

    def _require_suite(self) -> SuiteRecord:
        if self.suite is None:
            raise ReportStateError("No suite is running")
        return self.suite

    def _require_test(self) -> TestRecord:
        if self.test is None:
            raise ReportStateError("No test is running")
        return self.test


def prepare_output_dir(output_dir: str | Path, clean: bool = True) -> Path:
    """
    Create the output directory, removing any previous content first.

    Args:
        output_dir: Directory that receives results and attachments
        clean: When False, existing content is left in place

    Returns:
        The directory as a Path
    """
    path = Path(output_dir)
    if clean and path.exists():
        shutil.rmtree(path)
        logger.debug(f"Removed previous results in {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path
