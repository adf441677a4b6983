"""Mapping from runner statuses to report statuses."""

from __future__ import annotations

from ..reporting.models import ReportStatus
from .models import RunnerStatus

_STATUS_MAP = {
    RunnerStatus.PASSED: ReportStatus.PASSED,
    RunnerStatus.FAILED: ReportStatus.FAILED,
    RunnerStatus.PENDING: ReportStatus.PENDING,
    RunnerStatus.SKIPPED: ReportStatus.CANCELED,
    RunnerStatus.UNDEFINED: ReportStatus.BROKEN,
}

# Report statuses with no runner status of the same name.
_REPORT_ONLY = {s.value for s in ReportStatus} - {s.value for s in RunnerStatus}


def to_report_status(status: RunnerStatus | ReportStatus | str) -> ReportStatus:
    """
    Map a runner status to the status shown in the report.

    ``undefined`` becomes ``broken`` and ``skipped`` becomes ``canceled``;
    everything else keeps its name, so mapping an already mapped status
    returns it unchanged.

    Raises:
        ValueError: If ``status`` is neither a runner nor a report status
    """
    if isinstance(status, ReportStatus):
        return status
    if status in _REPORT_ONLY:
        return ReportStatus(status)
    return _STATUS_MAP[RunnerStatus(status)]
