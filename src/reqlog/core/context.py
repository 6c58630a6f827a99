"""Request-scoped logging adapter."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, MutableMapping, Tuple

from .levels import PANIC_LEVEL_NUM, TRACE_LEVEL_NUM
from .record import REQUEST_ID_KEY

__all__ = [
    "PREFIX_REQUEST_INCOMING",
    "PREFIX_REQUEST_HANDLING",
    "PREFIX_REQUEST_OUTGOING",
    "RequestAdapter",
]

PREFIX_REQUEST_INCOMING = ">>>"
PREFIX_REQUEST_HANDLING = "==="
PREFIX_REQUEST_OUTGOING = "<<<"


class RequestAdapter(logging.LoggerAdapter):
    """Logger adapter that carries persistent fields for one request.

    Fields end up as attributes on each ``LogRecord``, where
    :class:`~reqlog.formatters.bridge.TemplateFormatter` picks them up. The
    request id is stored under :data:`~reqlog.core.record.REQUEST_ID_KEY`.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        request_id: str | None = None,
        fields: Mapping[str, Any] | None = None,
        prefix: str = "",
    ) -> None:
        super().__init__(logger, {})
        self.prefix = prefix
        self._fields: Dict[str, Any] = dict(fields or {})
        if request_id is not None:
            self._fields[REQUEST_ID_KEY] = request_id

    # -- Field management ---------------------------------------------------
    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    @property
    def request_id(self) -> str | None:
        value = self._fields.get(REQUEST_ID_KEY)
        return None if value is None else str(value)

    def set_request_id(self, request_id: str | None) -> None:
        if request_id is None:
            self._fields.pop(REQUEST_ID_KEY, None)
        else:
            self._fields[REQUEST_ID_KEY] = request_id

    def add_fields(self, **kwargs: Any) -> None:
        self._fields.update(kwargs)

    def clear_fields(self) -> None:
        request_id = self._fields.get(REQUEST_ID_KEY)
        self._fields.clear()
        if request_id is not None:
            self._fields[REQUEST_ID_KEY] = request_id

    # -- LoggingAdapter API -------------------------------------------------
    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> Tuple[str, MutableMapping[str, Any]]:
        call_extra = kwargs.get("extra")
        merged: Dict[str, Any] = dict(self._fields)
        if isinstance(call_extra, Mapping):
            merged.update(call_extra)
        kwargs["extra"] = merged
        if self.prefix:
            msg = f"{self.prefix} {msg}"
        return msg, kwargs

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.logger.isEnabledFor(TRACE_LEVEL_NUM):
            self.log(TRACE_LEVEL_NUM, msg, *args, **kwargs)

    def panic(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(PANIC_LEVEL_NUM, msg, *args, **kwargs)

    # -- Request lifecycle helpers ------------------------------------------
    def incoming(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.info(f"{PREFIX_REQUEST_INCOMING} {msg}", *args, **kwargs)

    def handling(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.info(f"{PREFIX_REQUEST_HANDLING} {msg}", *args, **kwargs)

    def outgoing(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.info(f"{PREFIX_REQUEST_OUTGOING} {msg}", *args, **kwargs)
