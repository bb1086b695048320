"""Log sinks that timed operations write their outcome event to.

A sink is anything with ``is_level_enabled(level)`` and
``log(level, exception, message_template, args)``. The adapters here render
the message template and forward the event, with one structured field per
template hole, to structlog or to the standard library.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import structlog

from .factories import LevelledOperation, begin_operation, operation_at, time_operation
from .operation import Operation
from .templates import render

# Keys structlog, its processors and StructlogSink already use in an event dict
_RESERVED_KEYS = frozenset(
    {
        "event",
        "level",
        "log_level",
        "logger",
        "timestamp",
        "exc_info",
        "exception",
        "message_template",
        "extra_args",
    }
)


@runtime_checkable
class LogSink(Protocol):
    """Capability set a timed operation writes through."""

    def is_level_enabled(self, level: int) -> bool:
        """Return True if events at ``level`` would be written."""
        ...

    def log(
        self,
        level: int,
        exception: BaseException | None,
        message_template: str,
        args: Sequence[Any],
    ) -> None:
        """Write one event synchronously."""
        ...


class OperationsMixin:
    """Adds operation entry points to a sink class."""

    def time_operation(
        self, message_template: str, *args: Any, **context: Any
    ) -> Operation:
        """Begin an operation that is completed when its scope closes."""
        return time_operation(self, message_template, *args, **context)  # type: ignore[arg-type]

    def begin_operation(
        self, message_template: str, *args: Any, **context: Any
    ) -> Operation:
        """Begin an operation that is abandoned unless completed explicitly."""
        return begin_operation(self, message_template, *args, **context)  # type: ignore[arg-type]

    def operation_at(
        self, completion: int | str, abandonment: int | str | None = None
    ) -> LevelledOperation:
        """Start operations at custom completion and abandonment levels."""
        return operation_at(self, completion, abandonment)  # type: ignore[arg-type]


def _standard_level(level: int) -> int:
    """Round a custom level down to the nearest level structlog knows by name."""
    for known in (logging.CRITICAL, logging.ERROR, logging.WARNING, logging.INFO):
        if level >= known:
            return known
    return logging.DEBUG


def _event_fields(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        (f"{name}_" if name in _RESERVED_KEYS else name): value
        for name, value in properties.items()
    }


class StructlogSink(OperationsMixin):
    """Writes operation events through a structlog logger.

    The rendered message becomes the event; every template hole is added as
    a field of the same name, alongside the raw ``message_template``.
    """

    def __init__(self, logger: Any = None) -> None:
        """
        Initialize the sink.

        Args:
            logger: Structlog logger to write to (defaults to the
                ``elapsed_time`` logger)
        """
        self._logger = logger if logger is not None else structlog.get_logger("elapsed_time")

    @property
    def logger(self) -> Any:
        return self._logger

    def is_level_enabled(self, level: int) -> bool:
        for name in ("is_enabled_for", "isEnabledFor"):
            check = getattr(self._logger, name, None)
            if callable(check):
                return bool(check(level))
        return True

    def log(
        self,
        level: int,
        exception: BaseException | None,
        message_template: str,
        args: Sequence[Any],
    ) -> None:
        rendered = render(message_template, tuple(args))
        fields = _event_fields(rendered.properties)
        if rendered.extra_args:
            fields["extra_args"] = list(rendered.extra_args)
        if exception is not None:
            fields["exc_info"] = exception

        self._logger.log(
            _standard_level(level),
            rendered.text,
            message_template=message_template,
            **fields,
        )


class StdlibSink(OperationsMixin):
    """Writes operation events through a standard library logger.

    Template properties are attached to the record as ``record.properties``
    and the template itself as ``record.message_template``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger("elapsed_time")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_level_enabled(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def log(
        self,
        level: int,
        exception: BaseException | None,
        message_template: str,
        args: Sequence[Any],
    ) -> None:
        rendered = render(message_template, tuple(args))
        exc_info: Any = None
        if exception is not None:
            exc_info = (type(exception), exception, exception.__traceback__)

        self._logger.log(
            level,
            rendered.text,
            exc_info=exc_info,
            extra={
                "properties": rendered.properties,
                "message_template": message_template,
            },
        )
