"""
Configuration loader for the event formatter.

This module provides the public API for loading and validating
formatter settings from YAML files, YAML strings and the environment.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from .models import ENV_VARS, FormatterConfig
from .validation import ConfigValidator, ValidationResult

_FALSE_VALUES = {"0", "false", "no", "off"}


def load_config(path: str | Path) -> tuple[FormatterConfig | None, ValidationResult]:
    """
    Load and validate formatter settings from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Tuple of (FormatterConfig or None, ValidationResult)
        If validation fails, FormatterConfig will be None.

    Example:
        config, result = load_config("cadence.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult(str(path))
        result.add_error(
            None,
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path) as f:
            text = f.read()
    except OSError as e:
        result = ValidationResult(str(path))
        result.add_error(None, f"Cannot read file: {e}")
        return None, result

    return _parse(text, str(path))


def validate_config_yaml(yaml_string: str) -> tuple[FormatterConfig | None, ValidationResult]:
    """
    Validate formatter settings from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (FormatterConfig or None, ValidationResult)
    """
    return _parse(yaml_string, "yaml")


def config_from_env(
    base: FormatterConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> FormatterConfig:
    """
    Overlay environment variables on a configuration.

    Args:
        base: Starting configuration (defaults when omitted)
        environ: Variables to read (``os.environ`` when omitted)

    Returns:
        A new FormatterConfig with overrides applied
    """
    base = base or FormatterConfig()
    environ = os.environ if environ is None else environ

    overrides: dict[str, object] = {}
    for var, field_name in ENV_VARS.items():
        value = environ.get(var)
        if value is None:
            continue
        if field_name == "clean_dir":
            overrides[field_name] = value.strip().lower() not in _FALSE_VALUES
        else:
            overrides[field_name] = value

    return dataclasses.replace(base, **overrides)


def _parse(text: str, source: str) -> tuple[FormatterConfig | None, ValidationResult]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        result = ValidationResult(source)
        result.add_error(
            None,
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    # An empty file means "all defaults".
    if data is None:
        return FormatterConfig(), ValidationResult(source)

    if not isinstance(data, dict):
        result = ValidationResult(source)
        result.add_error(
            None,
            "Configuration must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    result = ConfigValidator(data, source).validate()
    if not result.is_valid:
        return None, result

    return FormatterConfig(**data), result
