"""Logging configuration using structlog for structured JSON logging."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

from elapsed_time.error_codes import ErrorCode
from elapsed_time.exceptions import InvalidArgumentError

# Standard library logging levels mapping
_LOG_LEVELS = {
    "TRACE": logging.DEBUG - 5,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "INFORMATION": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Global state for handlers
_configured = False
_handlers: list[logging.Handler] = []


def _get_level_no(level_name: str) -> int:
    """Get numeric log level from name, falling back to INFO."""
    return _LOG_LEVELS.get(level_name.upper(), logging.INFO)


def resolve_level(level: int | str) -> int:
    """Resolve a level name or number to a stdlib level number.

    Args:
        level: Level number (e.g. ``logging.INFO``) or name (``"warning"``)

    Returns:
        Numeric log level

    Raises:
        InvalidArgumentError: If the level is not a known name or a
            non-negative integer
    """
    if isinstance(level, int) and not isinstance(level, bool):
        if level >= 0:
            return level
    elif isinstance(level, str):
        level_no = _LOG_LEVELS.get(level.strip().upper())
        if level_no is not None:
            return level_no

    msg = f"Unknown log level: {level!r}"
    raise InvalidArgumentError(
        msg,
        suggestion=f"Use one of {', '.join(sorted(_LOG_LEVELS))} or a level number",
        error_code=ErrorCode.ARG_LEVEL_UNKNOWN.value,
        context={"level": repr(level)},
    )


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _create_console_renderer() -> ConsoleRenderer:
    """Create console renderer with custom formatting."""
    return ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def _create_json_renderer() -> JSONRenderer:
    """Create JSON renderer for file logs."""
    return JSONRenderer(default=str)


def _setup_structlog() -> None:
    """Route structlog through standard library logging."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Configure structlog logging.

    Console output goes to stderr, rendered for humans unless ``json_logs``
    is set. When ``log_file`` is given, a size-rotated JSON log is written
    there as well, at DEBUG level.

    Args:
        log_level: Minimum console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a JSON log file
        json_logs: If True, render console output as JSON lines
    """
    global _configured  # noqa: PLW0603

    _setup_structlog()
    _remove_handlers()
    root_logger = logging.getLogger()

    level = _get_level_no(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_renderer: Any = (
        _create_json_renderer() if json_logs else _create_console_renderer()
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                console_renderer,
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(exist_ok=True, parents=True)
        # 10MB per file, keep 5 backups
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _create_json_renderer(),
                ],
                foreign_pre_chain=_shared_processors(),
            )
        )
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    _configured = True

    logger = get_logger("elapsed_time.utils.logging")
    logger.debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_file) if log_file else None,
        json_logs=json_logs,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the given name
    """
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)


def _remove_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()


def reset_logging() -> None:
    """Remove handlers installed by configure_logging (for testing only)."""
    global _configured  # noqa: PLW0603

    _remove_handlers()
    _configured = False
