"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config_settings import Config
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "ELAPSED_TIME_CONFIG"
DEFAULT_CONFIG_NAME = "elapsed-time.yaml"

_config: Config | None = None


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]

    candidates: list[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / DEFAULT_CONFIG_NAME)
    return candidates


def load_config(
    config_path: Path | None = None, *, strict_config: bool = True
) -> Config:
    """Load configuration from environment, .env and an optional YAML file.

    Values from the YAML file take precedence over environment variables.

    Args:
        config_path: Explicit YAML file; otherwise ``$ELAPSED_TIME_CONFIG``
            then ``./elapsed-time.yaml`` are tried
        strict_config: If True, an unreadable YAML file raises instead of
            being skipped

    Raises:
        ConfigurationError: If the YAML is malformed (strict mode) or the
            resulting values fail validation
    """
    import yaml

    logger = get_logger(__name__)

    candidate_paths = _candidate_paths(config_path)
    resolved_config_path: Path | None = None
    for candidate in candidate_paths:
        if candidate.exists():
            resolved_config_path = candidate
            logger.debug("config_file_found", config_path=str(candidate))
            break

    if not resolved_config_path:
        logger.debug(
            "config_file_not_found", searched_paths=[str(p) for p in candidate_paths]
        )

    yaml_data: dict[str, Any] = {}
    if resolved_config_path:
        try:
            with open(resolved_config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                msg = f"top-level YAML value must be a mapping, got {type(loaded).__name__}"
                raise yaml.YAMLError(msg)
            yaml_data = loaded
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved_config_path),
                error=str(e),
                error_type=type(e).__name__,
            )
            if strict_config:
                msg = f"Failed to parse config file: {resolved_config_path}"
                raise ConfigurationError(
                    msg,
                    suggestion="Check YAML syntax and that the file holds a mapping",
                    error_code=ErrorCode.CFG_YAML_INVALID.value,
                    context={"config_path": str(resolved_config_path)},
                ) from e

    try:
        config = Config(**yaml_data)
    except ValidationError as e:
        logger.error(
            "config_validation_error",
            error=str(e),
            config_path=str(resolved_config_path) if resolved_config_path else None,
        )
        msg = "Invalid configuration"
        raise ConfigurationError(
            msg,
            suggestion="Check log levels and paths in the config file or environment",
            error_code=ErrorCode.CFG_INVALID.value,
            context={"errors": [err["msg"] for err in e.errors()]},
        ) from e

    logger.debug(
        "config_loaded",
        log_level=config.log_level,
        completion_level=config.completion_level,
        abandonment_level=config.abandonment_level,
    )
    return config


def get_config() -> Config:
    """Get singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Set singleton config instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config instance (for testing only)."""
    global _config
    _config = None


__all__ = ["Config", "get_config", "load_config", "reset_config", "set_config"]
