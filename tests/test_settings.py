"""
Settings Tests

Tests for resolving settings from defaults, YAML, environment and overrides.
"""
from pathlib import Path

import pytest

from stf import ConfigError
from stf.settings import SETTINGS, HarnessSettings, load_settings, load_yaml_settings


class TestDefaults:
    """Test built-in defaults."""

    def test_defaults(self, clean_env):
        settings = load_settings(environ={})

        assert settings == HarnessSettings()
        assert settings.log_file is None
        assert settings.color == "auto"
        assert settings.result_column == 60
        assert settings.log_level == "WARNING"

    def test_every_setting_has_an_env_name(self):
        for key, setting in SETTINGS.items():
            assert setting.env == f"STF_{key.upper()}"


class TestYamlSettings:
    """Test loading settings from YAML files."""

    def test_flat_mapping(self, clean_env):
        path = clean_env / "custom.yaml"
        path.write_text("color: never\nresult_column: 72\n")

        settings = load_settings(config_file=path, environ={})
        assert settings.color == "never"
        assert settings.result_column == 72

    def test_nested_under_stf(self, clean_env):
        path = clean_env / "custom.yaml"
        path.write_text("stf:\n  log_file: out/results.txt\n  log_level: debug\n")

        settings = load_settings(config_file=path, environ={})
        assert settings.log_file == Path("out/results.txt")
        assert settings.log_level == "DEBUG"

    def test_default_file_in_working_directory(self, clean_env):
        (clean_env / "stf.yaml").write_text("result_column: 40\n")
        assert load_settings(environ={}).result_column == 40

    def test_empty_file(self, clean_env):
        path = clean_env / "empty.yaml"
        path.write_text("")
        assert load_yaml_settings(path) == {}

    def test_explicit_missing_file(self, clean_env):
        with pytest.raises(ConfigError):
            load_settings(config_file=clean_env / "nope.yaml", environ={})

    def test_invalid_yaml(self, clean_env):
        path = clean_env / "bad.yaml"
        path.write_text("color: [never\n")
        with pytest.raises(ConfigError):
            load_yaml_settings(path)

    def test_non_mapping(self, clean_env):
        path = clean_env / "list.yaml"
        path.write_text("- color\n- never\n")
        with pytest.raises(ConfigError):
            load_yaml_settings(path)

    def test_unknown_key(self, clean_env):
        path = clean_env / "typo.yaml"
        path.write_text("colour: never\n")
        with pytest.raises(ConfigError) as exc_info:
            load_yaml_settings(path)
        assert "colour" in str(exc_info.value)


class TestPrecedence:
    """Test override order: defaults < YAML < environment < command line."""

    def test_environment_beats_yaml(self, clean_env):
        path = clean_env / "custom.yaml"
        path.write_text("color: never\nresult_column: 72\n")

        settings = load_settings(config_file=path, environ={"STF_COLOR": "always"})
        assert settings.color == "always"
        assert settings.result_column == 72

    def test_overrides_beat_environment(self, clean_env):
        settings = load_settings(
            environ={"STF_LOG_FILE": "env.txt", "STF_LOG_LEVEL": "info"},
            overrides={"log_file": "cli.txt", "log_level": None},
        )
        assert settings.log_file == Path("cli.txt")
        assert settings.log_level == "INFO"

    def test_empty_environment_value_ignored(self, clean_env):
        assert load_settings(environ={"STF_COLOR": ""}).color == "auto"

    def test_reads_os_environ_by_default(self, clean_env, monkeypatch):
        monkeypatch.setenv("STF_RESULT_COLUMN", "80")
        assert load_settings().result_column == 80

    def test_unknown_override(self, clean_env):
        with pytest.raises(ConfigError):
            load_settings(environ={}, overrides={"verbose": True})


class TestValidation:
    """Test value validation."""

    @pytest.mark.parametrize("value", ["wide", "19", "201"])
    def test_invalid_result_column(self, clean_env, value):
        with pytest.raises(ConfigError):
            load_settings(environ={"STF_RESULT_COLUMN": value})

    def test_invalid_color(self, clean_env):
        with pytest.raises(ConfigError) as exc_info:
            load_settings(environ={"STF_COLOR": "rainbow"})
        assert "not a valid choice" in str(exc_info.value)

    def test_boolean_is_not_an_integer(self, clean_env):
        path = clean_env / "custom.yaml"
        path.write_text("result_column: true\n")
        with pytest.raises(ConfigError):
            load_settings(config_file=path, environ={})

    def test_case_normalised(self, clean_env):
        settings = load_settings(environ={"STF_COLOR": "NEVER", "STF_LOG_LEVEL": "error"})
        assert settings.color == "never"
        assert settings.log_level == "ERROR"

    def test_to_dict(self, clean_env):
        assert load_settings(environ={}).to_dict() == {
            "log_file": None,
            "color": "auto",
            "result_column": 60,
            "log_level": "WARNING",
        }
