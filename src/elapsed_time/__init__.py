"""Timed logging operations that record elapsed time and outcome."""

from .exceptions import ConfigurationError, ElapsedTimeError, InvalidArgumentError
from .factories import LevelledOperation, begin_operation, operation_at, time_operation
from .operation import CompletionBehaviour, Operation, Outcome, Properties
from .sinks import LogSink, OperationsMixin, StdlibSink, StructlogSink

__version__ = "0.1.0"

__all__ = [
    "CompletionBehaviour",
    "ConfigurationError",
    "ElapsedTimeError",
    "InvalidArgumentError",
    "LevelledOperation",
    "LogSink",
    "Operation",
    "OperationsMixin",
    "Outcome",
    "Properties",
    "StdlibSink",
    "StructlogSink",
    "begin_operation",
    "operation_at",
    "time_operation",
]
