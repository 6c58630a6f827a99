"""stdlib ``logging.Formatter`` adapter around :class:`~reqlog.core.formatter.Formatter`."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict

from ..config.schema import FormatterConfig
from ..core.errors import EncodingError
from ..core.formatter import Formatter
from ..core.levels import Level
from ..core.record import Record

__all__ = ["TemplateFormatter", "to_record"]

logger = logging.getLogger(__name__)

_STANDARD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "asctime",
    "message",
}


def to_record(record: logging.LogRecord, *, error_text: str | None = None) -> Record:
    """Convert a stdlib ``LogRecord`` into a :class:`Record`."""

    fields: Dict[str, Any] = {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS
    }
    if error_text and "error" not in fields:
        fields["error"] = error_text
    return Record(
        time=datetime.fromtimestamp(record.created).astimezone(),
        level=Level.from_levelno(record.levelno),
        message=record.getMessage(),
        fields=fields,
    )


class TemplateFormatter(logging.Formatter):
    """Formatter rendering stdlib records through a reqlog template.

    Extra attributes passed via ``extra=`` become record fields. Records that
    cannot be JSON encoded are emitted in their best-effort form.
    """

    def __init__(self, config: FormatterConfig) -> None:
        super().__init__()
        self.formatter = Formatter(config)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        error_text = self.formatException(record.exc_info) if record.exc_info else None
        try:
            line = self.formatter.format(to_record(record, error_text=error_text))
        except EncodingError as exc:
            logger.debug("emitting best-effort line for %s: %s", record.name, exc)
            line = exc.partial
        return line.decode("utf-8").removesuffix("\n")
