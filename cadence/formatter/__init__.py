"""
Event Formatter

This package correlates a BDD runner's lifecycle callbacks with report
tests and steps.

Usage:
    from cadence.formatter import EventFormatter, TestStep, StepOutcome

    formatter = EventFormatter.from_config()
    formatter.before_feature("Checkout")
    ...
"""

from .formatter import TEST_HOOK_NAMES_TO_IGNORE, EventFormatter
from .models import RunnerStatus, StepOutcome, TableRow, TestStep
from .naming import (
    UNNAMED_SCENARIO,
    feature_display_name,
    outline_row_name,
    resolve_scenario_name,
)
from .status import to_report_status
from .steps import DeferredSteps, PendingStep
from .tags import ALLOWED_SEVERITIES, extract_tags

__all__ = [
    # Formatter
    "EventFormatter",
    "TEST_HOOK_NAMES_TO_IGNORE",
    # Runner payloads
    "RunnerStatus",
    "StepOutcome",
    "TableRow",
    "TestStep",
    # Mapping helpers
    "to_report_status",
    "extract_tags",
    "ALLOWED_SEVERITIES",
    "resolve_scenario_name",
    "outline_row_name",
    "feature_display_name",
    "UNNAMED_SCENARIO",
    # Deferred steps
    "DeferredSteps",
    "PendingStep",
]
