"""
Scenario tag extraction.

Tags such as ``@TMS:9901`` or ``@SEVERITY:critical`` are turned into
the label mapping sent with every started test.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..reporting.models import Severity

ALLOWED_SEVERITIES = {s.value for s in Severity}


def tag_text(tag: Any) -> str:
    """Return the text of a tag given as a string or an object with ``.name``."""
    return tag if isinstance(tag, str) else str(tag.name)


def remove_tag_prefix(tag: str, prefix: str) -> str:
    return tag.replace(prefix, "")


def extract_tags(
    tags: Iterable[Any],
    tms_prefix: str | None,
    issue_prefix: str,
    severity_prefix: str,
) -> dict[str, Any]:
    """
    Build the label mapping for a scenario's tags.

    Args:
        tags: Tags attached to the scenario, in source order
        tms_prefix: Marks a test-management id (``testId``); None disables it
        issue_prefix: Marks an issue key (``issue``)
        severity_prefix: Marks a severity level (``severity``)

    Returns:
        Mapping with any of the keys ``testId``, ``issue``, ``severity``.
        When several tags match the same key, the last one wins.
        Severity values outside the known levels are ignored.
    """
    labels: dict[str, Any] = {}
    for tag in tags:
        text = tag_text(tag)

        if tms_prefix and tms_prefix in text:
            labels["testId"] = remove_tag_prefix(text, tms_prefix)

        if issue_prefix in text:
            labels["issue"] = remove_tag_prefix(text, issue_prefix)

        if severity_prefix in text:
            level = remove_tag_prefix(text, severity_prefix).lower()
            if level in ALLOWED_SEVERITIES:
                labels["severity"] = Severity(level)

    return labels
