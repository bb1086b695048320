"""Tests for configuration loading and validation."""

import logging

import pytest
from pydantic import ValidationError

from elapsed_time.config import Config, get_config, load_config, reset_config, set_config
from elapsed_time.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory without ELAPSED_TIME_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "ELAPSED_TIME_CONFIG",
        "ELAPSED_TIME_LOG_LEVEL",
        "ELAPSED_TIME_LOG_FILE",
        "ELAPSED_TIME_JSON_LOGS",
        "ELAPSED_TIME_COMPLETION_LEVEL",
        "ELAPSED_TIME_ABANDONMENT_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigModel:
    """Test the settings model."""

    def test_defaults(self):
        """Test default values."""
        config = Config()

        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.json_logs is False
        assert config.completion_level_no == logging.INFO
        assert config.abandonment_level_no == logging.WARNING

    def test_environment_override(self, monkeypatch):
        """Test ELAPSED_TIME_ prefixed environment variables."""
        monkeypatch.setenv("ELAPSED_TIME_LOG_LEVEL", "debug")
        monkeypatch.setenv("ELAPSED_TIME_JSON_LOGS", "true")

        config = Config()

        assert config.log_level == "DEBUG"
        assert config.json_logs is True

    def test_unknown_level_rejected(self):
        """Test level validation."""
        with pytest.raises(ValidationError):
            Config(completion_level="LOUD")

    def test_log_file_parsed(self, tmp_path):
        """Test that log_file strings become paths."""
        config = Config(log_file=str(tmp_path / "ops.log"))

        assert config.log_file == tmp_path / "ops.log"
        assert Config(log_file="").log_file is None


class TestLoadConfig:
    """Test loading configuration files."""

    def test_without_file_uses_defaults(self):
        """Test that a missing file is not an error."""
        config = load_config()

        assert config.log_level == "INFO"

    def test_yaml_file(self, tmp_path):
        """Test values from an explicit YAML file."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "log_level: warning\ncompletion_level: DEBUG\nabandonment_level: ERROR\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.log_level == "WARNING"
        assert config.completion_level_no == logging.DEBUG
        assert config.abandonment_level_no == logging.ERROR

    def test_default_file_in_cwd(self, tmp_path):
        """Test discovery of ./elapsed-time.yaml."""
        (tmp_path / "elapsed-time.yaml").write_text("json_logs: true\n", encoding="utf-8")

        assert load_config().json_logs is True

    def test_file_from_environment(self, tmp_path, monkeypatch):
        """Test discovery through ELAPSED_TIME_CONFIG."""
        path = tmp_path / "from-env.yaml"
        path.write_text("log_level: ERROR\n", encoding="utf-8")
        monkeypatch.setenv("ELAPSED_TIME_CONFIG", str(path))

        assert load_config().log_level == "ERROR"

    def test_malformed_yaml_strict(self, tmp_path):
        """Test that parse errors raise in strict mode."""
        path = tmp_path / "bad.yaml"
        path.write_text("log_level: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.error_code == "CFG-YAML-001"
        assert exc_info.value.suggestion

    def test_malformed_yaml_lenient(self, tmp_path):
        """Test that parse errors are skipped when not strict."""
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        config = load_config(path, strict_config=False)

        assert config.log_level == "INFO"

    def test_invalid_value(self, tmp_path):
        """Test that validation errors become ConfigurationError."""
        path = tmp_path / "invalid.yaml"
        path.write_text("abandonment_level: NOPE\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.error_code == "CFG-VALUE-001"
        assert exc_info.value.context["errors"]


class TestConfigSingleton:
    """Test the module-level config instance."""

    def test_set_get_reset(self):
        """Test replacing and resetting the shared config."""
        custom = Config(log_level="ERROR")
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config() is not custom
        assert get_config().log_level == "INFO"
