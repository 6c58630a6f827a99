"""Public API surface for reqlog."""

from __future__ import annotations

import logging
from typing import Any, Dict

from .config.loader import load_configuration
from .core.context import RequestAdapter
from .core.formatter import Formatter
from .core.manager import GLOBAL_MANAGER

_CONFIGURED = False


def configure(overrides: Dict[str, Any] | None = None) -> None:
    """Configure reqlog using the provided overrides."""

    global _CONFIGURED
    config = load_configuration(overrides or {})
    GLOBAL_MANAGER.configure(config)
    _CONFIGURED = True


def _ensure_configured() -> None:
    if not _CONFIGURED:
        configure({})


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name."""

    _ensure_configured()
    return GLOBAL_MANAGER.get_logger(name)


def get_request_logger(name: str, request_id: str | None = None, **fields: Any) -> RequestAdapter:
    """Return a request-scoped logger carrying ``request_id`` and static fields."""

    _ensure_configured()
    return GLOBAL_MANAGER.get_request_logger(name, request_id, **fields)


def get_formatter() -> Formatter:
    """Return a :class:`Formatter` for the active configuration."""

    _ensure_configured()
    return GLOBAL_MANAGER.get_formatter()
