"""Severity levels and their bridge to stdlib logging."""

from __future__ import annotations

import enum
import logging
from typing import Any

__all__ = [
    "Level",
    "TRACE_LEVEL_NUM",
    "PANIC_LEVEL_NUM",
    "register_levels",
    "ensure_level",
]

TRACE_LEVEL_NUM = 5
PANIC_LEVEL_NUM = 60


class Level(enum.IntEnum):
    """Record severity, ordered by stdlib logging level numbers."""

    TRACE = TRACE_LEVEL_NUM
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL
    PANIC = PANIC_LEVEL_NUM

    @property
    def label(self) -> str:
        """Upper-case name right-justified to five columns."""

        return f"{self.name:>5}"

    @classmethod
    def from_levelno(cls, levelno: int) -> "Level":
        """Return the highest level not above ``levelno``."""

        resolved = cls.TRACE
        for level in cls:
            if level <= levelno:
                resolved = level
        return resolved

    @classmethod
    def from_name(cls, name: str) -> "Level":
        key = name.strip().upper()
        if key == "WARNING":
            return cls.WARN
        if key == "CRITICAL":
            return cls.FATAL
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown level: {name!r}") from None


def _install_method(name: str, levelno: int) -> None:
    method = name.lower()
    if hasattr(logging.Logger, method):
        return

    def log_at(self: logging.Logger, message: str, *args: object, **kwargs: Any) -> None:
        if self.isEnabledFor(levelno):
            self._log(levelno, message, args, **kwargs)

    setattr(logging.Logger, method, log_at)


def register_levels(enable: bool = True) -> None:
    """Register the TRACE and PANIC levels on the stdlib logging module.

    When ``enable`` is ``False`` the function becomes a no-op. Each level is
    installed only once even if called repeatedly.
    """

    if not enable:
        return

    for name, levelno in (("TRACE", TRACE_LEVEL_NUM), ("PANIC", PANIC_LEVEL_NUM)):
        if logging.getLevelName(levelno) != name:
            logging.addLevelName(levelno, name)
        if not hasattr(logging, name):
            setattr(logging, name, levelno)
        _install_method(name, levelno)


def ensure_level(value: int | str | Level) -> int:
    """Normalize user supplied level values to a stdlib level number."""

    if isinstance(value, int):
        return int(value)
    if value.isdigit():
        return int(value)
    try:
        return int(Level.from_name(value))
    except ValueError:
        return logging.INFO
