"""
Typed configuration for the event formatter.

Settings are resolved once at startup and stay fixed for the run.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_OUTPUT_DIR = "reports/data"
DEFAULT_TMS_PREFIX = "@TMS:"
DEFAULT_ISSUE_PREFIX = "@ISSUE:"
DEFAULT_SEVERITY_PREFIX = "@SEVERITY:"

# Environment variable -> FormatterConfig field
ENV_VARS = {
    "CADENCE_OUTPUT_DIR": "output_dir",
    "CADENCE_CLEAN_DIR": "clean_dir",
    "CADENCE_TMS_PREFIX": "tms_prefix",
    "CADENCE_ISSUE_PREFIX": "issue_prefix",
    "CADENCE_SEVERITY_PREFIX": "severity_prefix",
    "FEATURE_IDENTIFIER": "feature_identifier",
}


@dataclass(frozen=True)
class FormatterConfig:
    """
    Configuration for an EventFormatter run.

    Attributes:
        output_dir: Directory receiving suite files and attachments
        clean_dir: Remove previous content of output_dir at startup
        tms_prefix: Tag prefix marking a test-management id
        issue_prefix: Tag prefix marking an issue key
        severity_prefix: Tag prefix marking a severity level
        feature_identifier: Optional text prepended to every feature name
    """
    output_dir: str = DEFAULT_OUTPUT_DIR
    clean_dir: bool = True
    tms_prefix: str | None = DEFAULT_TMS_PREFIX
    issue_prefix: str = DEFAULT_ISSUE_PREFIX
    severity_prefix: str = DEFAULT_SEVERITY_PREFIX
    feature_identifier: str | None = None
