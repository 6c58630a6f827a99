"""Logging manager responsible for runtime configuration and lifecycle."""

from __future__ import annotations

import logging
from typing import Any

from ..config.schema import FormatterConfig, ReqlogConfig
from ..handlers.console import ConsoleHandlerConfig, build_console_handler
from .context import RequestAdapter
from .formatter import Formatter
from .levels import register_levels
from .validation import validate_configuration

logger = logging.getLogger(__name__)


class LogManager:
    """Central coordinator installing the reqlog console handler."""

    def __init__(self) -> None:
        self._config: ReqlogConfig | None = None
        self._handler: logging.Handler | None = None

    # ------------------------------------------------------------------
    @property
    def config(self) -> ReqlogConfig | None:
        return self._config

    def configure(self, config: ReqlogConfig) -> None:
        """Apply the supplied configuration."""

        validate_configuration(config)
        self._teardown()

        self._config = config
        register_levels(config.logging.enable_levels)
        logging.captureWarnings(config.logging.capture_warnings)

        handler = build_console_handler(
            ConsoleHandlerConfig(formatter=config.formatter, stream=config.logging.stream)
        )
        root_logger = logging.getLogger()
        root_logger.setLevel(config.logging.levelno)
        root_logger.addHandler(handler)
        self._handler = handler
        logger.debug(
            "installed %s console handler (json_output=%s)",
            config.logging.stream,
            config.formatter.json_output,
        )

    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        """Detach and close the installed handler."""

        self._teardown()
        self._config = None

    # ------------------------------------------------------------------
    def formatter_config(self) -> FormatterConfig:
        if self._config is None:
            raise RuntimeError("reqlog is not configured")
        return self._config.formatter

    def get_formatter(self) -> Formatter:
        return Formatter(self.formatter_config())

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def get_request_logger(self, name: str, request_id: str | None = None, **fields: Any) -> RequestAdapter:
        prefix = self._config.formatter.prefix if self._config else ""
        return RequestAdapter(self.get_logger(name), request_id=request_id, fields=fields, prefix=prefix)

    # ------------------------------------------------------------------
    def _teardown(self) -> None:
        handler = self._handler
        if handler is None:
            return
        logging.getLogger().removeHandler(handler)
        try:
            handler.flush()
        except (OSError, ValueError):
            pass
        handler.close()
        self._handler = None


GLOBAL_MANAGER = LogManager()
