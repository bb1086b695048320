"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    ARG - Invalid arguments passed to operation constructors and factories
    CFG - Configuration errors

Usage:
    from elapsed_time.error_codes import ErrorCode

    raise InvalidArgumentError(
        "sink must not be None",
        error_code=ErrorCode.ARG_NULL.value,
        context={"argument": "sink"},
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    Format: {DOMAIN}-{CATEGORY}-{NUMBER}
    """

    # =========================================================================
    # Argument Errors (ARG-xxx-xxx)
    # =========================================================================
    ARG_NULL = "ARG-NULL-001"
    """A required argument was None."""

    ARG_LEVEL_UNKNOWN = "ARG-LEVEL-001"
    """A log level name or number could not be resolved."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_YAML_INVALID = "CFG-YAML-001"
    """Configuration file could not be parsed as YAML."""

    CFG_INVALID = "CFG-VALUE-001"
    """Configuration validation failed."""

