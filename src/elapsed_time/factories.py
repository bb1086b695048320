"""Entry points that start timed operations against a log sink."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .operation import CompletionBehaviour, Operation, missing_argument
from .utils.logging import resolve_level

if TYPE_CHECKING:
    from .sinks import LogSink

COMPLETION_LEVEL = logging.INFO
ABANDONMENT_LEVEL = logging.WARNING


def time_operation(
    sink: LogSink, message_template: str, *args: Any, **context: Any
) -> Operation:
    """Begin a timed operation that is completed when its scope closes.

    Args:
        sink: The sink through which the timing will be recorded.
        message_template: A log message describing the operation, in message
            template format.
        *args: Arguments to the log message. These are captured now and
            rendered only when the operation completes, so do not pass
            arguments that are mutated during the operation.
        **context: Properties bound into the logging context while the
            operation runs.

    Returns:
        An ``Operation`` to use as a context manager.
    """
    return Operation(
        sink,
        message_template,
        args,
        CompletionBehaviour.COMPLETE,
        COMPLETION_LEVEL,
        ABANDONMENT_LEVEL,
        context=context,
    )


def begin_operation(
    sink: LogSink, message_template: str, *args: Any, **context: Any
) -> Operation:
    """Begin a timed operation that must be completed explicitly.

    Call ``complete()`` on success; closing the scope without it records
    the operation as abandoned.

    Args:
        sink: The sink through which the timing will be recorded.
        message_template: A log message describing the operation, in message
            template format.
        *args: Arguments to the log message, captured now.
        **context: Properties bound into the logging context while the
            operation runs.

    Returns:
        An ``Operation`` to use as a context manager.
    """
    return Operation(
        sink,
        message_template,
        args,
        CompletionBehaviour.ABANDON,
        COMPLETION_LEVEL,
        ABANDONMENT_LEVEL,
        context=context,
    )


class LevelledOperation:
    """Starts operations at configured completion and abandonment levels.

    A disabled instance (see ``operation_at``) still hands out operations,
    so callers keep their ``with`` blocks, but they never write anything.
    """

    def __init__(
        self,
        sink: LogSink,
        completion_level: int,
        abandonment_level: int,
        *,
        enabled: bool = True,
    ) -> None:
        self.sink = sink
        self.completion_level = completion_level
        self.abandonment_level = abandonment_level
        self.enabled = enabled

    def _start(
        self,
        behaviour: CompletionBehaviour,
        message_template: str,
        args: tuple[Any, ...],
        context: dict[str, Any],
    ) -> Operation:
        return Operation(
            self.sink,
            message_template,
            args,
            behaviour if self.enabled else CompletionBehaviour.SILENT,
            self.completion_level,
            self.abandonment_level,
            context=context if self.enabled else None,
        )

    def time(self, message_template: str, *args: Any, **context: Any) -> Operation:
        """Begin an operation that is completed when its scope closes."""
        return self._start(CompletionBehaviour.COMPLETE, message_template, args, context)

    def begin(self, message_template: str, *args: Any, **context: Any) -> Operation:
        """Begin an operation that is abandoned unless completed explicitly."""
        return self._start(CompletionBehaviour.ABANDON, message_template, args, context)


def operation_at(
    sink: LogSink,
    completion: int | str,
    abandonment: int | str | None = None,
) -> LevelledOperation:
    """Configure the levels used for completion and abandonment events.

    If neither level is enabled on the sink at the time of the call, a
    disabled ``LevelledOperation`` is returned.

    Args:
        sink: The sink through which timings will be recorded.
        completion: Level of the event written on completion.
        abandonment: Level of the event written on abandonment; defaults to
            ``completion``.

    Raises:
        InvalidArgumentError: If sink is None or a level is unknown.
    """
    if sink is None:
        raise missing_argument("sink")

    completion_level = resolve_level(completion)
    abandonment_level = (
        completion_level if abandonment is None else resolve_level(abandonment)
    )

    if not sink.is_level_enabled(completion_level) and (
        abandonment_level == completion_level
        or not sink.is_level_enabled(abandonment_level)
    ):
        return LevelledOperation(
            sink, completion_level, abandonment_level, enabled=False
        )

    return LevelledOperation(sink, completion_level, abandonment_level)
