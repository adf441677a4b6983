"""Display names for features, scenarios and outline example rows."""

from __future__ import annotations

from collections.abc import Iterable

UNNAMED_SCENARIO = "Unnamed scenario"
ROW_SEPARATOR = " | "


def _single_line(text: str) -> str:
    return text.replace("\n", " ")


def resolve_scenario_name(name: str | None) -> str:
    """Return the scenario name on one line, or a placeholder when blank."""
    if name is None or not name.strip():
        return UNNAMED_SCENARIO
    return _single_line(name)


def outline_row_name(base_name: str, values: Iterable[object]) -> str:
    """
    Name the test for one example row of a scenario outline.

    Example:
        >>> outline_row_name("Checkout", ["alice", "10"])
        'Checkout: alice | 10'
    """
    return f"{base_name}: {ROW_SEPARATOR.join(str(v) for v in values)}"


def feature_display_name(name: str, identifier: str | None = None) -> str:
    """Return the suite name for a feature, prefixed with ``identifier`` if set."""
    prefix = f"{identifier} - " if identifier else ""
    return f"{prefix}{_single_line(name or '')}"
