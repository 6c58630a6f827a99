"""Configuration schema definition for reqlog."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping

from ..core.levels import ensure_level
from ..core.template import DEFAULT_TEMPLATE
from ..core.validation import validate_formatter_config
from ..utils.time import RFC3339

__all__ = [
    "DEFAULT_SEPARATOR",
    "DEFAULT_CONFIG",
    "FormatterBuilder",
    "FormatterConfig",
    "LoggingConfig",
    "ReqlogConfig",
    "build_config",
    "default_config",
]

DEFAULT_SEPARATOR = " |"

DEFAULT_CONFIG: Dict[str, Any] = {
    "formatter": {
        "template": DEFAULT_TEMPLATE,
        "default_template": True,
        "separator": DEFAULT_SEPARATOR,
        "json_output": False,
        "time_layout": RFC3339,
        "prefix": "",
    },
    "logging": {
        "level": "INFO",
        "stream": "stderr",
        "enable_levels": True,
        "capture_warnings": False,
    },
}


def default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration mapping."""

    return deepcopy(DEFAULT_CONFIG)


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Immutable formatter settings.

    Build instances through :class:`FormatterBuilder`; once built they are
    safe to share between threads.
    """

    template: str = ""
    is_default_template: bool = False
    json_output: bool = False
    separator: str = DEFAULT_SEPARATOR
    time_layout: str = RFC3339
    prefix: str = ""

    def builder(self) -> "FormatterBuilder":
        """Return a builder seeded with this configuration."""

        return FormatterBuilder(_base=self)


class FormatterBuilder:
    """Chainable builder producing a validated :class:`FormatterConfig`."""

    def __init__(self, *, _base: FormatterConfig | None = None) -> None:
        self._config = _base or FormatterConfig()

    @classmethod
    def default(cls, prefix: str = "") -> "FormatterBuilder":
        """Start from the default template with segment elision enabled."""

        return cls(
            _base=FormatterConfig(
                template=DEFAULT_TEMPLATE,
                is_default_template=True,
                prefix=prefix,
            )
        )

    def _set(self, **changes: Any) -> "FormatterBuilder":
        self._config = replace(self._config, **changes)
        return self

    def with_template(self, template: str) -> "FormatterBuilder":
        return self._set(template=template)

    def with_prefix(self, prefix: str) -> "FormatterBuilder":
        return self._set(prefix=prefix)

    def with_separator(self, separator: str) -> "FormatterBuilder":
        return self._set(separator=separator)

    def with_json_output(self, enabled: bool = True) -> "FormatterBuilder":
        return self._set(json_output=enabled)

    def with_time_layout(self, layout: str) -> "FormatterBuilder":
        return self._set(time_layout=layout)

    def build(self) -> FormatterConfig:
        validate_formatter_config(self._config)
        return self._config


@dataclass(slots=True)
class LoggingConfig:
    level: str | int = "INFO"
    stream: str = "stderr"
    enable_levels: bool = True
    capture_warnings: bool = False

    @property
    def levelno(self) -> int:
        return ensure_level(self.level)


@dataclass(slots=True)
class ReqlogConfig:
    formatter: FormatterConfig
    logging: LoggingConfig
    raw: Dict[str, Any] = field(repr=False, default_factory=dict)


def _to_formatter(data: Mapping[str, Any]) -> FormatterConfig:
    return FormatterConfig(
        template=data.get("template", ""),
        is_default_template=bool(data.get("default_template", False)),
        json_output=bool(data.get("json_output", False)),
        separator=data.get("separator", DEFAULT_SEPARATOR),
        time_layout=data.get("time_layout", RFC3339),
        prefix=data.get("prefix", ""),
    )


def _to_logging(data: Mapping[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=data.get("level", "INFO"),
        stream=str(data.get("stream", "stderr")).lower(),
        enable_levels=bool(data.get("enable_levels", True)),
        capture_warnings=bool(data.get("capture_warnings", False)),
    )


def build_config(data: Mapping[str, Any]) -> ReqlogConfig:
    formatter_data = data.get("formatter", {})
    logging_data = data.get("logging", {})
    if not isinstance(formatter_data, Mapping):
        formatter_data = {}
    if not isinstance(logging_data, Mapping):
        logging_data = {}

    raw_copy: Dict[str, Any] = deepcopy({k: v for k, v in data.items()})

    return ReqlogConfig(
        formatter=_to_formatter(formatter_data),
        logging=_to_logging(logging_data),
        raw=raw_copy,
    )
