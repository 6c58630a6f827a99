"""Configuration validation helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import ReqlogError

if TYPE_CHECKING:  # pragma: no cover
    from ..config.schema import FormatterConfig, ReqlogConfig

_STREAMS = {"stdout", "stderr"}


class ConfigurationError(ReqlogError, ValueError):
    """Raised when configuration validation fails."""


def validate_formatter_config(config: "FormatterConfig") -> None:
    """Ensure formatter options have usable types and values."""

    for name in ("template", "separator", "time_layout", "prefix"):
        value = getattr(config, name)
        if not isinstance(value, str):
            raise ConfigurationError(f"Formatter option '{name}' must be a string, got {type(value).__name__}")

    if not config.time_layout:
        raise ConfigurationError("Formatter option 'time_layout' must not be empty")


def validate_configuration(config: "ReqlogConfig") -> None:
    """Ensure the whole configuration is consistent."""

    validate_formatter_config(config.formatter)

    if config.logging.stream not in _STREAMS:
        raise ConfigurationError(
            f"Unknown stream '{config.logging.stream}', expected one of: {', '.join(sorted(_STREAMS))}"
        )
