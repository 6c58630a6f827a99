"""Configuration loading pipeline.

Sources are merged over :data:`~reqlog.config.schema.DEFAULT_CONFIG`, later
ones winning: user config directory, working directory files,
``[tool.reqlog]`` in ``pyproject.toml``, ``REQLOG__`` environment variables
and finally explicit overrides.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple, cast

import yaml
from platformdirs import user_config_dir

from ..core.validation import ConfigurationError
from .schema import DEFAULT_CONFIG, ReqlogConfig, build_config, default_config

if sys.version_info >= (3, 11):  # pragma: no cover
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

logger = logging.getLogger(__name__)

_ENV_PREFIX = "REQLOG__"
_FILENAMES = ("reqlog.toml", "reqlog.yaml", "reqlog.yml")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

Source = Callable[[], Dict[str, Any]]


def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if isinstance(data, Mapping):
        return {str(key): value for key, value in data.items()}
    return {}


def _merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in incoming.items():
        existing = base.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge(existing, value)
        elif isinstance(value, Mapping):
            base[key] = _merge(dict(existing) if isinstance(existing, Mapping) else {}, value)
        else:
            base[key] = value
    return base


def _load_directory(directory: Path) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for filename in _FILENAMES:
        path = directory / filename
        payload = _load_toml(path) if path.suffix == ".toml" else _load_yaml(path)
        if payload:
            data = _merge(data, payload)
    return data


def _user_source() -> Dict[str, Any]:
    cfg_dir = Path(user_config_dir("reqlog"))
    return _load_directory(cfg_dir) if cfg_dir.exists() else {}


def _local_source() -> Dict[str, Any]:
    return _load_directory(Path.cwd())


def _pyproject_source() -> Dict[str, Any]:
    tool = _load_toml(Path("pyproject.toml")).get("tool", {})
    section = tool.get("reqlog", {}) if isinstance(tool, Mapping) else {}
    if isinstance(section, Mapping):
        return {str(key): value for key, value in section.items()}
    return {}


def _default_at(path: Sequence[str]) -> Any:
    node: Any = DEFAULT_CONFIG
    for segment in path:
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node


def _coerce_env(env_key: str, path: Sequence[str], raw: str) -> Any:
    """Convert ``raw`` to the type of the matching default setting.

    String settings keep the raw text, whitespace included, since
    templates and separators depend on it.
    """

    default = _default_at(path)
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ConfigurationError(f"{env_key} expects a boolean, got {raw!r}")
    if isinstance(default, str):
        return raw
    if isinstance(default, int):
        try:
            return int(raw.strip())
        except ValueError:
            raise ConfigurationError(f"{env_key} expects an integer, got {raw!r}") from None

    stripped = raw.strip()
    if stripped[:1] in {"[", "{"}:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass
    return raw


def _env_source() -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for env_key, raw_value in os.environ.items():
        if not env_key.startswith(_ENV_PREFIX):
            continue
        path = [segment.lower() for segment in env_key[len(_ENV_PREFIX) :].split("__")]
        target: Dict[str, Any] = data
        for segment in path[:-1]:
            target = cast(Dict[str, Any], target.setdefault(segment, {}))
        target[path[-1]] = _coerce_env(env_key, path, raw_value)
    return data


SOURCES: Tuple[Tuple[str, Source], ...] = (
    ("user", _user_source),
    ("local", _local_source),
    ("pyproject", _pyproject_source),
    ("env", _env_source),
)


def load_configuration(overrides: Dict[str, Any] | None = None) -> ReqlogConfig:
    """Load configuration from supported sources in precedence order."""

    merged: Dict[str, Any] = default_config()
    for name, source in SOURCES:
        payload = source()
        if payload:
            logger.debug("merging %s configuration: %s", name, sorted(payload))
            _merge(merged, payload)
    if overrides:
        _merge(merged, overrides)
    return build_config(merged)
