"""
Validation for formatter configuration files.

This module checks raw parsed YAML against the known settings and
reports errors with helpful messages.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Any

from .models import ENV_VARS


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

# FormatterConfig field -> environment variable that overrides it
_OVERRIDES = {field_name: var for var, field_name in ENV_VARS.items()}


@dataclass
class ValidationError:
    """
    A problem with one setting, or with the source as a whole.

    ``setting`` is None when the problem is not tied to a single key,
    such as unreadable files or malformed YAML.
    """
    setting: str | None
    message: str
    value: Any = None
    suggestion: str | None = None

    @property
    def env_var(self) -> str | None:
        """Environment variable that can override this setting, if any."""
        return _OVERRIDES.get(self.setting) if self.setting else None

    def __str__(self) -> str:
        head = f"{self.setting}: {self.message}" if self.setting else self.message
        parts = [f"❌ {head}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        if self.env_var:
            parts.append(f"   (can also be set with ${self.env_var})")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Errors collected while reading one configuration source."""
    source: str = "yaml"
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def settings(self) -> list[str]:
        """Names of the settings that failed, in report order."""
        return [e.setting for e in self.errors if e.setting]

    def add_error(
        self,
        setting: str | None,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(setting, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return f"✅ {self.source} is valid"
        lines = [f"{self.source}: {len(self.errors)} error(s)\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Config Validator
# ─────────────────────────────────────────────────────────────────────────────

class ConfigValidator:
    """Validates raw parsed YAML against the formatter settings."""

    STRING_KEYS = {"output_dir", "issue_prefix", "severity_prefix"}
    OPTIONAL_STRING_KEYS = {"tms_prefix", "feature_identifier"}
    BOOL_KEYS = {"clean_dir"}
    KNOWN_KEYS = STRING_KEYS | OPTIONAL_STRING_KEYS | BOOL_KEYS

    def __init__(self, data: dict[str, Any], source: str = "yaml"):
        self.data = data
        self.result = ValidationResult(source)

    def validate(self) -> ValidationResult:
        """Run all checks and return the collected result."""
        self._validate_keys()
        self._validate_types()
        self._validate_prefixes()
        return self.result

    def _validate_keys(self) -> None:
        for key in self.data:
            if key not in self.KNOWN_KEYS:
                close = difflib.get_close_matches(str(key), sorted(self.KNOWN_KEYS), n=1)
                self.result.add_error(
                    str(key),
                    "Unknown setting",
                    suggestion=f"Did you mean '{close[0]}'?" if close else
                    f"Known settings: {', '.join(sorted(self.KNOWN_KEYS))}",
                )

    def _validate_types(self) -> None:
        for key in sorted(self.STRING_KEYS):
            if key in self.data and not isinstance(self.data[key], str):
                self.result.add_error(key, "Must be a string", value=self.data[key])

        for key in sorted(self.OPTIONAL_STRING_KEYS):
            value = self.data.get(key)
            if value is not None and not isinstance(value, str):
                self.result.add_error(
                    key,
                    "Must be a string or null",
                    value=value,
                )

        for key in sorted(self.BOOL_KEYS):
            if key in self.data and not isinstance(self.data[key], bool):
                self.result.add_error(
                    key,
                    "Must be true or false",
                    value=self.data[key],
                    suggestion="Use an unquoted YAML boolean",
                )

    def _validate_prefixes(self) -> None:
        for key in ("issue_prefix", "severity_prefix"):
            if self.data.get(key) == "":
                self.result.add_error(
                    key,
                    "Prefix cannot be empty",
                    suggestion="An empty prefix would match every tag",
                )

        if self.data.get("output_dir") == "":
            self.result.add_error("output_dir", "Output directory cannot be empty")
