"""Console handler helpers."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any

from ..config.schema import FormatterConfig
from ..formatters.bridge import TemplateFormatter

__all__ = ["ConsoleHandlerConfig", "build_console_handler"]


@dataclass(slots=True)
class ConsoleHandlerConfig:
    """Configuration for console handlers."""

    formatter: FormatterConfig
    stream: str = "stderr"
    level: int = logging.NOTSET


def build_console_handler(config: ConsoleHandlerConfig) -> logging.Handler:
    """Construct a :class:`logging.StreamHandler` rendering through reqlog."""

    stream: Any = sys.stdout if config.stream == "stdout" else sys.stderr
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(config.level)
    handler.setFormatter(TemplateFormatter(config.formatter))
    return handler
