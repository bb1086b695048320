"""Pytest configuration and fixtures for the test suite."""

import pytest
import structlog

from elapsed_time.config import reset_config
from elapsed_time.utils.logging import reset_logging
from tests.fixtures import FakeClock, MockLogSink


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Give every test default structlog config and empty context vars."""
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    reset_config()
    yield
    reset_logging()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    reset_config()


@pytest.fixture
def mock_sink():
    """Provide a recording sink with every level enabled."""
    return MockLogSink()


@pytest.fixture
def fake_clock():
    """Provide a manually advanced clock."""
    return FakeClock()
