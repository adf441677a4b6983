"""
Configuration for the Event Formatter

Usage:
    from cadence.config import load_config, config_from_env

    config, result = load_config("cadence.yaml")
    if not result.is_valid:
        print(result)

    # Environment variables win over file settings
    config = config_from_env(config)
"""

from .loader import config_from_env, load_config, validate_config_yaml
from .models import (
    DEFAULT_ISSUE_PREFIX,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SEVERITY_PREFIX,
    DEFAULT_TMS_PREFIX,
    ENV_VARS,
    FormatterConfig,
)
from .validation import ConfigValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_yaml",
    "config_from_env",
    "ENV_VARS",
    # Models
    "FormatterConfig",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_TMS_PREFIX",
    "DEFAULT_ISSUE_PREFIX",
    "DEFAULT_SEVERITY_PREFIX",
    # Validation
    "ValidationResult",
    "ValidationError",
    "ConfigValidator",
]
