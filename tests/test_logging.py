"""Tests for logging configuration."""

import json
import logging

import pytest

from elapsed_time.exceptions import InvalidArgumentError
from elapsed_time.sinks import StructlogSink
from elapsed_time.utils.logging import configure_logging, get_logger, resolve_level


class TestResolveLevel:
    """Test level name resolution."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("info", logging.INFO),
            ("Warn", logging.WARNING),
            ("INFORMATION", logging.INFO),
            (" error ", logging.ERROR),
            ("TRACE", 5),
            (logging.CRITICAL, logging.CRITICAL),
            (25, 25),
        ],
    )
    def test_known_levels(self, level, expected):
        """Test names and numbers that resolve."""
        assert resolve_level(level) == expected

    @pytest.mark.parametrize("level", ["LOUD", -1, True, None, 2.5])
    def test_unknown_levels(self, level):
        """Test values that are rejected."""
        with pytest.raises(InvalidArgumentError):
            resolve_level(level)


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_log_file(self, tmp_path):
        """Test that operation events reach the JSON log file."""
        log_file = tmp_path / "logs" / "ops.log"
        configure_logging(log_level="WARNING", log_file=log_file)

        sink = StructlogSink(get_logger("elapsed_time.tests"))
        with sink.time_operation("Job {Id}", 7, run="nightly"):
            pass

        logging.shutdown()

        entries = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
        event = next(e for e in entries if e.get("Outcome") == "completed")
        assert event["Id"] == 7
        assert event["level"] == "info"
        assert event["logger"] == "elapsed_time.tests"
        assert event["run"] == "nightly"
        assert event["event"].startswith("Job 7 completed in ")

    def test_reconfigure_replaces_handlers(self, tmp_path):
        """Test that repeated configuration does not stack handlers."""
        configure_logging(log_level="INFO")
        first = len(logging.getLogger().handlers)
        configure_logging(log_level="INFO")

        assert len(logging.getLogger().handlers) == first

    def test_stdlib_level_check_through_structlog(self):
        """Test that a configured structlog logger reports enabled levels."""
        configure_logging(log_level="INFO")
        sink = StructlogSink(get_logger("elapsed_time.tests.configured"))

        assert sink.is_level_enabled(logging.INFO)
