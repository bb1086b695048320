"""Exception hierarchy for elapsed-time.

Exception Hierarchy:
    ElapsedTimeError (base)
     InvalidArgumentError - A required constructor argument was missing
     ConfigurationError - Configuration loading/validation errors

Errors raised by a sink while writing an operation event are never wrapped:
they reach the caller that triggered the write unchanged.

Usage Examples:
    try:
        op = begin_operation(None, "Import {file}", path)
    except InvalidArgumentError as e:
        print(e.to_dict())
"""

from typing import Any


class ElapsedTimeError(Exception):
    """Base exception for all errors raised by this package.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "ARG-NULL-001")
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


class InvalidArgumentError(ElapsedTimeError, ValueError):
    """A required argument was missing or unusable.

    Raised synchronously when:
    - An operation is constructed without a sink or message template
    - The captured argument sequence is None
    - A log level cannot be resolved
    """


class ConfigurationError(ElapsedTimeError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed YAML
    - Configuration values fail validation
    """
