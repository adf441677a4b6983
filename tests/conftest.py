"""Shared fixtures: a sink that records calls and a formatter wired to it."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cadence.config import FormatterConfig
from cadence.formatter import EventFormatter
from cadence.reporting import ReportSink, ReportStatus, Result


class RecordingSink(ReportSink):
    """Report sink that keeps every call as a tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def start_suite(self, name: str) -> None:
        self.calls.append(("start_suite", name))

    def stop_suite(self) -> None:
        self.calls.append(("stop_suite",))

    def start_test(self, name: str, labels: dict[str, Any]) -> None:
        self.calls.append(("start_test", name, labels))

    def stop_test(self, result: Result) -> None:
        self.calls.append(("stop_test", result))

    def start_step(self, name: str) -> None:
        self.calls.append(("start_step", name))

    def stop_step(self, status: ReportStatus) -> None:
        self.calls.append(("stop_step", status))

    def attach(self, name: str, source: str | Path, mime_type: str | None = None) -> None:
        self.calls.append(("attach", name, Path(source), mime_type))

    def named(self, kind: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == kind]

    @property
    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]

    @property
    def results(self) -> list[Result]:
        return [call[1] for call in self.named("stop_test")]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def config(tmp_path: Path) -> FormatterConfig:
    return FormatterConfig(output_dir=str(tmp_path / "results"))


@pytest.fixture
def formatter(sink: RecordingSink, config: FormatterConfig) -> EventFormatter:
    return EventFormatter(sink, config)
