"""
Cadence - BDD Runner Event Reporter

This package listens to a behaviour-driven test runner's lifecycle
callbacks and records features, scenarios and steps as structured
results on disk.

Subpackages:
    - config: Formatter settings from YAML files and the environment
    - formatter: Callback correlation, tag and status mapping
    - reporting: Report sink interface and the JSON file reporter

Usage:
    from cadence import EventFormatter, load_config

    config, result = load_config("cadence.yaml")
    formatter = EventFormatter.from_config(config)

    # Hand the formatter to the runner, which then calls
    # before_feature(), scenario_name(), before_test_step(), ...
"""

__version__ = "0.1.0"

# Re-export config for convenience
from .config import (
    FormatterConfig,
    ValidationError,
    ValidationResult,
    config_from_env,
    load_config,
    validate_config_yaml,
)

# Re-export formatter for convenience
from .formatter import (
    EventFormatter,
    RunnerStatus,
    StepOutcome,
    TableRow,
    TestStep,
    extract_tags,
    to_report_status,
)

# Re-export reporting for convenience
from .reporting import (
    FileReporter,
    ReportSink,
    ReportStateError,
    ReportStatus,
    Result,
    Severity,
    SuiteRecord,
    UndefinedStepsError,
)

__all__ = [
    # Package info
    "__version__",
    # Config
    "FormatterConfig",
    "ValidationError",
    "ValidationResult",
    "config_from_env",
    "load_config",
    "validate_config_yaml",
    # Formatter
    "EventFormatter",
    "RunnerStatus",
    "StepOutcome",
    "TableRow",
    "TestStep",
    "extract_tags",
    "to_report_status",
    # Reporting
    "FileReporter",
    "ReportSink",
    "ReportStateError",
    "ReportStatus",
    "Result",
    "Severity",
    "SuiteRecord",
    "UndefinedStepsError",
]
