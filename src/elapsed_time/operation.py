"""Timed operations that write exactly one outcome event to a log sink."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import timedelta
from enum import Enum
from types import TracebackType
from typing import TYPE_CHECKING, Any

import structlog

from .error_codes import ErrorCode
from .exceptions import InvalidArgumentError
from .stopwatch import Stopwatch

if TYPE_CHECKING:
    from .sinks import LogSink


class CompletionBehaviour(str, Enum):
    """What closing the operation's scope does."""

    ABANDON = "abandon"
    COMPLETE = "complete"
    SILENT = "silent"


class Outcome(str, Enum):
    """Outcome tag attached to the written event."""

    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Properties(str, Enum):
    """Property names attached to events by operations."""

    ELAPSED = "Elapsed"
    """The timing, in milliseconds."""

    OUTCOME = "Outcome"
    """Completion status, either *completed* or *abandoned*."""


_TEMPLATE_SUFFIX = (
    f" {{{Properties.OUTCOME.value}}} in {{{Properties.ELAPSED.value}:0.0}} ms"
)


def missing_argument(argument: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        f"{argument} must not be None",
        error_code=ErrorCode.ARG_NULL.value,
        context={"argument": argument},
    )


class Operation:
    """Records the timing of one unit of work through a log sink.

    Use as a context manager; leaving the ``with`` block completes or
    abandons the operation depending on how it was started, unless
    ``complete()``, ``abandon()`` or ``cancel()`` was called first. An error
    leaving the block is not attached to the event; use ``set_exception``.

    Instances are designed for use by a single thread. Only one event is
    ever written per instance.
    """

    def __init__(
        self,
        sink: LogSink,
        message_template: str,
        args: Sequence[Any],
        behaviour: CompletionBehaviour,
        completion_level: int,
        abandonment_level: int,
        *,
        context: Mapping[str, Any] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """
        Start a timed operation.

        Args:
            sink: Destination of the outcome event; borrowed, never closed.
            message_template: Message template describing the operation.
            args: Values for the template's holes, captured now and rendered
                when the event is written.
            behaviour: What closing the scope does.
            completion_level: Level of the completion event.
            abandonment_level: Level of the abandonment event.
            context: Properties bound into structlog's context variables
                until the operation finishes.
            clock: Optional time provider for testing.

        Raises:
            InvalidArgumentError: If sink, message_template or args is None.
        """
        if sink is None:
            raise missing_argument("sink")
        if message_template is None:
            raise missing_argument("message_template")
        if args is None:
            raise missing_argument("args")

        self._sink = sink
        self._message_template = message_template
        self._args = tuple(args)
        self._behaviour = behaviour
        self._completion_level = completion_level
        self._abandonment_level = abandonment_level
        self._exception: BaseException | None = None
        self._context_tokens = (
            structlog.contextvars.bind_contextvars(**context) if context else None
        )
        self._stopwatch = Stopwatch.start_new(clock)

    def __enter__(self) -> Operation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Operation({self._message_template!r}, behaviour={self._behaviour.value}, "
            f"elapsed_ms={self.elapsed_ms:.1f})"
        )

    @property
    def elapsed(self) -> timedelta:
        """Elapsed time; frozen once the operation is finished."""
        return self._stopwatch.elapsed

    @property
    def elapsed_ms(self) -> float:
        return self._stopwatch.elapsed_ms

    @property
    def behaviour(self) -> CompletionBehaviour:
        return self._behaviour

    @property
    def message_template(self) -> str:
        return self._message_template

    @property
    def args(self) -> tuple[Any, ...]:
        return self._args

    @property
    def exception(self) -> BaseException | None:
        return self._exception

    def set_exception(self, exception: BaseException | None) -> Operation:
        """Attach an exception to the event that will be written.

        Args:
            exception: Exception related to the operation

        Returns:
            The same operation, for chaining
        """
        self._exception = exception
        return self

    def complete(self) -> None:
        """Complete the operation, writing the event and elapsed time."""
        self._stopwatch.stop()

        if self._behaviour is CompletionBehaviour.SILENT:
            return

        self._write(self._completion_level, Outcome.COMPLETED)

    def abandon(self) -> None:
        """Abandon the operation, writing the event and elapsed time."""
        if self._behaviour is CompletionBehaviour.SILENT:
            return

        self._write(self._abandonment_level, Outcome.ABANDONED)

    def cancel(self) -> None:
        """Cancel the operation. No event is written, now or on scope exit."""
        self._stopwatch.stop()
        self._behaviour = CompletionBehaviour.SILENT
        self._pop_context()

    def close(self) -> None:
        """Finish the operation's scope.

        Operations started with ``time_operation`` are completed; those
        started with ``begin_operation`` are recorded as abandoned. Nothing
        is written if the operation already finished or was cancelled.
        """
        try:
            if self._behaviour is CompletionBehaviour.ABANDON:
                self._write(self._abandonment_level, Outcome.ABANDONED)
            elif self._behaviour is CompletionBehaviour.COMPLETE:
                self._write(self._completion_level, Outcome.COMPLETED)
        finally:
            self._pop_context()

    def _pop_context(self) -> None:
        tokens, self._context_tokens = self._context_tokens, None
        if tokens:
            structlog.contextvars.reset_contextvars(**tokens)

    def _write(self, level: int, outcome: Outcome) -> None:
        self._behaviour = CompletionBehaviour.SILENT
        self._stopwatch.stop()

        try:
            self._sink.log(
                level,
                self._exception,
                self._message_template + _TEMPLATE_SUFFIX,
                (*self._args, outcome.value, self._stopwatch.elapsed_ms),
            )
        finally:
            self._pop_context()
