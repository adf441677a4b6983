"""
Event formatter for BDD test runners.

This module provides the EventFormatter class which turns the runner's
lifecycle callbacks into ordered suite, test and step calls on a
ReportSink.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import uuid
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..config import FormatterConfig, config_from_env
from ..reporting import (
    FileReporter,
    ReportSink,
    ReportStatus,
    Result,
    UndefinedStepsError,
    prepare_output_dir,
)
from .models import RunnerStatus, StepOutcome, TableRow, TestStep
from .naming import feature_display_name, outline_row_name, resolve_scenario_name
from .state import (
    Idle,
    InMultilineArg,
    InOutlineExamples,
    InOutlineHeader,
    InOutlineRow,
    InScenario,
    PendingOutline,
    PendingScenario,
    State,
    active_test_name,
    base_state,
    is_outline,
    is_started,
    outline_base_name,
)
from .status import to_report_status
from .steps import DeferredSteps
from .tags import extract_tags

logger = logging.getLogger(__name__)

BEFORE_HOOK = "Before hook"
AFTER_HOOK = "After hook"
TEST_HOOK_NAMES_TO_IGNORE = (BEFORE_HOOK, AFTER_HOOK)

ANSI_COLOR_PATTERN = re.compile(r"\x1b\[(\d+)(;\d+)*m")


class EventFormatter:
    """
    Correlates runner callbacks with report tests and steps.

    The runner calls these methods in traversal order: feature, scenario
    or outline, tags, steps and table rows, teardown. Steps reported
    before their test can be started (background steps run before the
    scenario name is known) are buffered and replayed when it starts.

    Example:
        formatter = EventFormatter.from_config(config)

        formatter.before_feature("Checkout")
        formatter.before_feature_element(outline=False)
        formatter.after_tags(["@SEVERITY:critical"])
        formatter.scenario_name("Scenario", "Pay by card")
        formatter.before_test_step(TestStep("Given a basket"))
        formatter.after_test_step(TestStep("Given a basket"), StepOutcome("passed"))
        formatter.after_steps(StepOutcome("passed"))
        formatter.after_scenario("passed")
        formatter.after_feature()
    """

    def __init__(self, sink: ReportSink, config: FormatterConfig | None = None):
        """
        Initialize with a sink and settings.

        Use EventFormatter.from_config() to get a file-backed sink with a
        prepared output directory.
        """
        self.sink = sink
        self.config = config or FormatterConfig()
        self.output_dir = Path(self.config.output_dir)

        self.state: State = Idle()
        self.feature_name = ""
        self.step_name: str | None = None
        self.deferred = DeferredSteps()
        self.scenario_tags: dict[str, Any] = {}
        self.before_hook_exception: BaseException | None = None
        self._result: Result | None = None

    @classmethod
    def from_config(
        cls,
        config: FormatterConfig | None = None,
        output_dir: str | Path | None = None,
    ) -> EventFormatter:
        """
        Create a formatter writing to a FileReporter.

        Args:
            config: Settings (defaults plus environment overrides if omitted)
            output_dir: Overrides ``config.output_dir`` when given

        Returns:
            EventFormatter whose output directory has been prepared
        """
        config = config or config_from_env()
        if output_dir is not None:
            config = dataclasses.replace(config, output_dir=str(output_dir))

        prepare_output_dir(config.output_dir, clean=config.clean_dir)
        return cls(FileReporter(config.output_dir), config)

    @property
    def current_test_name(self) -> str | None:
        """Name of the test currently running in the report, if any."""
        return active_test_name(self.state)

    # ─────────────────────────────────────────────────────────────────────
    # Features
    # ─────────────────────────────────────────────────────────────────────

    def before_feature(self, name: str) -> None:
        """Start the suite for a feature."""
        self.feature_name = feature_display_name(name, self.config.feature_identifier)
        self.state = Idle()
        self.sink.start_suite(self.feature_name)

    def after_feature(self, *_args: Any) -> None:
        """Stop the suite."""
        self.sink.stop_suite()

    # ─────────────────────────────────────────────────────────────────────
    # Scenarios and outlines
    # ─────────────────────────────────────────────────────────────────────

    def before_feature_element(self, outline: bool = False) -> None:
        """Record whether the next test unit is a plain scenario or an outline."""
        if is_started(self.state):
            logger.warning(f"Test '{active_test_name(self.state)}' was never stopped")
        self.state = PendingOutline() if outline else PendingScenario()

    def scenario_name(self, keyword: str, name: str | None, *_args: Any) -> None:
        """
        Resolve the scenario name.

        A plain scenario's test starts here. An outline only caches the
        name; its tests start with each example row.
        """
        resolved = resolve_scenario_name(name)
        state = base_state(self.state)

        if isinstance(state, PendingOutline):
            self.state = PendingOutline(resolved)
        elif is_started(state):
            logger.warning(f"Ignoring name '{resolved}': test '{active_test_name(state)}' is running")
        else:
            self.state = InScenario(resolved)
            self._start_test(resolved)

    def after_tags(self, tags: Iterable[Any]) -> None:
        """Add label entries for the scenario's tags."""
        self.scenario_tags.update(
            extract_tags(
                tags,
                tms_prefix=self.config.tms_prefix,
                issue_prefix=self.config.issue_prefix,
                severity_prefix=self.config.severity_prefix,
            )
        )

    def after_steps(self, outcome: StepOutcome) -> None:
        """Compute the result of a plain scenario from its steps."""
        if isinstance(base_state(self.state), InScenario):
            self._result = self._test_result(outcome.status, getattr(outcome, "exception", None))

    def after_scenario(self, status: RunnerStatus | str | None = None) -> None:
        """
        Stop a plain scenario's test.

        Args:
            status: Overall scenario status; replaces the status computed
                by ``after_steps`` when given
        """
        state = base_state(self.state)

        if isinstance(state, InScenario):
            if status is not None:
                exception = self._result.exception if self._result else None
                result = self._test_result(status, exception)
            else:
                result = self._result or self._test_result(RunnerStatus.PASSED)
            self._stop_test(result)
        elif is_started(state):
            logger.warning(f"Example row test '{state.name}' was still running at scenario end")
        else:
            if self.deferred:
                logger.warning(f"Discarding {len(self.deferred)} step(s) that never joined a test")
            self._reset()

        self.state = Idle()

    after_feature_element = after_scenario

    # ─────────────────────────────────────────────────────────────────────
    # Examples tables
    # ─────────────────────────────────────────────────────────────────────

    def before_examples(self, *_args: Any) -> None:
        """Begin an examples section; its first row is the header."""
        if not is_outline(self.state):
            logger.debug("Examples outside an outline ignored")
            return
        base_name = outline_base_name(self.state) or resolve_scenario_name(None)
        self.state = InOutlineHeader(base_name)

    def before_table_row(self, row: TableRow) -> None:
        """Start the test for an example data row."""
        state = self.state
        if isinstance(state, InOutlineExamples):
            name = outline_row_name(state.base_name, row.values)
            self.state = InOutlineRow(state.base_name, name)
            self._start_test(name)

    def after_table_row(self, row: TableRow) -> None:
        """Stop the test for an example data row, or consume the header."""
        state = self.state
        if isinstance(state, InOutlineHeader):
            self.state = InOutlineExamples(state.base_name)
        elif isinstance(state, InOutlineRow):
            self._stop_test(self._test_result(row.status, getattr(row, "exception", None)))
            self.state = InOutlineExamples(state.base_name)

    # ─────────────────────────────────────────────────────────────────────
    # Steps
    # ─────────────────────────────────────────────────────────────────────

    def before_test_step(self, step: TestStep) -> None:
        """Start a report step, or buffer it until the test starts."""
        if step.name in TEST_HOOK_NAMES_TO_IGNORE:
            return

        if is_started(self.state):
            self.step_name = step.name
            self.sink.start_step(step.name)
        else:
            self.deferred.add_step(step)

    def after_test_step(self, step: TestStep, outcome: StepOutcome) -> None:
        """Stop a report step, or record its outcome in the buffer."""
        if step.name == BEFORE_HOOK:
            exception = getattr(outcome, "exception", None)
            if self.before_hook_exception is None and exception is not None:
                self.before_hook_exception = exception
            return
        if step.name == AFTER_HOOK:
            return

        if is_started(self.state):
            self.step_name = step.name
            self.sink.stop_step(to_report_status(outcome.status))
        else:
            self.deferred.complete_step(step, outcome)

    def before_multiline_arg(self, multiline_arg: Any) -> None:
        """Attach a step's table or doc string; table rows are ignored until it ends."""
        started = is_started(self.state)
        self.state = InMultilineArg(self.state)

        if started:
            self._attach_multiline_arg(multiline_arg)
        elif not self.deferred.attach_multiline_arg(multiline_arg):
            logger.warning("Multiline argument arrived with no step to hold it; dropped")

    def after_multiline_arg(self, *_args: Any) -> None:
        """Close the multiline argument and resume the previous state."""
        if isinstance(self.state, InMultilineArg):
            self.state = self.state.resume

    # ─────────────────────────────────────────────────────────────────────
    # Attachments
    # ─────────────────────────────────────────────────────────────────────

    def embed(self, src: str | Path, mime_type: str | None, label: str) -> None:
        """Attach a file produced by the test code."""
        self.sink.attach(label, src, mime_type)

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _test_result(
        self,
        status: RunnerStatus | str,
        exception: BaseException | None = None,
    ) -> Result:
        report_status = to_report_status(status)
        if self.before_hook_exception is not None:
            cause = self.before_hook_exception
        elif report_status == ReportStatus.FAILED and exception is None:
            cause = UndefinedStepsError()
        else:
            cause = exception
        return Result(report_status, cause)

    def _start_test(self, name: str) -> None:
        self.scenario_tags["feature"] = self.feature_name
        self.scenario_tags["story"] = name
        self.sink.start_test(name, dict(self.scenario_tags))
        logger.debug(f"Started test '{name}' with {len(self.deferred)} deferred step(s)")
        self._post_deferred_steps()

    def _post_deferred_steps(self) -> None:
        for entry in self.deferred:
            self.step_name = entry.name
            self.sink.start_step(entry.name)
            if entry.multiline_arg is not None:
                self._attach_multiline_arg(entry.multiline_arg)
            if entry.outcome is not None:
                self.sink.stop_step(to_report_status(entry.outcome.status))
            else:
                logger.warning(f"Step '{entry.name}' never reported an outcome; closing it as broken")
                self.sink.stop_step(ReportStatus.BROKEN)

    def _stop_test(self, result: Result) -> None:
        if self.deferred:
            result.started_at = self.deferred.started_at
        self.sink.stop_test(result)
        self._reset()

    def _reset(self) -> None:
        self.deferred.clear()
        self.scenario_tags = {}
        self.before_hook_exception = None
        self._result = None
        self.step_name = None

    def _attach_multiline_arg(self, multiline_arg: Any) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{uuid.uuid4()}.txt"
        with open(path, "w") as f:
            f.write(ANSI_COLOR_PATTERN.sub("", str(multiline_arg)))
        self.sink.attach("multiline_arg", path, "text/plain")
