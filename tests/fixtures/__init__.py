"""Test fixtures package."""

from .fake_clock import FakeClock
from .mock_log_sink import LoggedEvent, MockLogSink

__all__ = [
    "FakeClock",
    "LoggedEvent",
    "MockLogSink",
]
