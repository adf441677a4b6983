"""
Reporting for BDD Test Runs

This package provides the report sink interface used by the event
formatter and a file-backed implementation of it.

Features:
    - Suite, test and step records with timing
    - Scenario labels (test id, issue, severity, feature, story)
    - Failure messages and traces
    - File attachments
    - JSON serialization

Usage:
    from cadence.reporting import FileReporter, ReportStatus, Result

    reporter = FileReporter("reports/data")
    reporter.start_suite("Checkout")
    reporter.start_test("Pay by card", {})
    reporter.start_step("Given a basket")
    reporter.stop_step(ReportStatus.PASSED)
    reporter.stop_test(Result(ReportStatus.PASSED))
    reporter.stop_suite()
"""

# Models
from .models import (
    Attachment,
    ReportStateError,
    ReportStatus,
    Result,
    Severity,
    StepRecord,
    SuiteRecord,
    TestRecord,
    UndefinedStepsError,
)

# Sinks
from .reporter import FileReporter, prepare_output_dir
from .sink import ReportSink

__all__ = [
    # Models
    "Attachment",
    "ReportStatus",
    "Result",
    "Severity",
    "StepRecord",
    "SuiteRecord",
    "TestRecord",
    # Errors
    "ReportStateError",
    "UndefinedStepsError",
    # Sinks
    "ReportSink",
    "FileReporter",
    "prepare_output_dir",
]
