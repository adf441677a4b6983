"""Tests for configuration loading, validation and environment overrides."""

from __future__ import annotations

import textwrap
from pathlib import Path

from cadence.config import (
    DEFAULT_OUTPUT_DIR,
    FormatterConfig,
    config_from_env,
    load_config,
    validate_config_yaml,
)


def test_defaults() -> None:
    config = FormatterConfig()

    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.clean_dir is True
    assert config.tms_prefix == "@TMS:"
    assert config.issue_prefix == "@ISSUE:"
    assert config.severity_prefix == "@SEVERITY:"
    assert config.feature_identifier is None


def test_valid_yaml() -> None:
    config, result = validate_config_yaml(textwrap.dedent(
        """
        output_dir: out/results
        clean_dir: false
        issue_prefix: "@JIRA:"
        tms_prefix: null
        """
    ))

    assert result.is_valid
    assert config == FormatterConfig(
        output_dir="out/results",
        clean_dir=False,
        issue_prefix="@JIRA:",
        tms_prefix=None,
    )


def test_empty_yaml_means_defaults() -> None:
    config, result = validate_config_yaml("")

    assert result.is_valid
    assert config == FormatterConfig()


def test_unknown_key_gets_suggestion() -> None:
    config, result = validate_config_yaml("output_directory: out\n")

    assert config is None
    assert not result.is_valid
    assert result.errors[0].setting == "output_directory"
    assert "output_dir" in result.errors[0].suggestion


def test_wrong_types_are_reported() -> None:
    config, result = validate_config_yaml("clean_dir: 'yes'\nissue_prefix: 5\n")

    assert config is None
    assert {e.setting for e in result.errors} == {"clean_dir", "issue_prefix"}
    assert "2 error(s)" in str(result)


def test_empty_prefix_is_rejected() -> None:
    _, result = validate_config_yaml("severity_prefix: ''\n")

    assert [e.setting for e in result.errors] == ["severity_prefix"]


def test_non_mapping_yaml_is_rejected() -> None:
    config, result = validate_config_yaml("- a\n- b\n")

    assert config is None
    assert "YAML object" in result.errors[0].message


def test_invalid_yaml_syntax() -> None:
    config, result = validate_config_yaml("output_dir: [unclosed\n")

    assert config is None
    assert "Invalid YAML syntax" in result.errors[0].message


def test_load_config_from_file(tmp_path: Path) -> None:
    path = tmp_path / "cadence.yaml"
    path.write_text("feature_identifier: Nightly\n")

    config, result = load_config(path)

    assert result.is_valid
    assert config.feature_identifier == "Nightly"


def test_load_config_missing_file(tmp_path: Path) -> None:
    config, result = load_config(tmp_path / "missing.yaml")

    assert config is None
    assert result.errors[0].message == "File not found"


def test_environment_overrides() -> None:
    base = FormatterConfig(output_dir="from/file")
    config = config_from_env(
        base,
        {
            "CADENCE_OUTPUT_DIR": "from/env",
            "CADENCE_CLEAN_DIR": "false",
            "CADENCE_SEVERITY_PREFIX": "@sev=",
            "FEATURE_IDENTIFIER": "Build 12",
            "UNRELATED": "x",
        },
    )

    assert config.output_dir == "from/env"
    assert config.clean_dir is False
    assert config.severity_prefix == "@sev="
    assert config.feature_identifier == "Build 12"
    assert config.issue_prefix == base.issue_prefix
    assert base.output_dir == "from/file"


def test_environment_without_overrides_keeps_base() -> None:
    base = FormatterConfig(clean_dir=False)

    assert config_from_env(base, {}) == base
    assert config_from_env(None, {"CADENCE_CLEAN_DIR": "1"}).clean_dir is True


def test_errors_name_their_source_and_env_override(tmp_path: Path) -> None:
    path = tmp_path / "cadence.yaml"
    path.write_text("clean_dir: 'yes'\nbogus: 1\n")

    config, result = load_config(path)

    assert config is None
    assert result.source == str(path)
    assert result.settings == ["bogus", "clean_dir"]
    by_setting = {e.setting: e for e in result.errors}
    assert by_setting["clean_dir"].env_var == "CADENCE_CLEAN_DIR"
    assert by_setting["bogus"].env_var is None

    text = str(result)
    assert text.startswith(f"{path}: 2 error(s)")
    assert "$CADENCE_CLEAN_DIR" in text


def test_source_level_errors_have_no_setting(tmp_path: Path) -> None:
    _, result = load_config(tmp_path / "missing.yaml")

    assert result.errors[0].setting is None
    assert result.settings == []
    assert str(result.errors[0]).startswith("❌ File not found")
