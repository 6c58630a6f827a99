"""JSON rendering."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, MutableMapping

from ..core.errors import EncodingError
from ..core.record import Record, to_plain
from ..core.template import render_message
from ..utils.time import RFC3339, format_time

if TYPE_CHECKING:  # pragma: no cover
    from ..config.schema import FormatterConfig

__all__ = ["render_json"]


def _dumps(payload: MutableMapping[str, Any], **kwargs: Any) -> bytes:
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), **kwargs)
    return (text + "\n").encode("utf-8")


def _best_effort(payload: MutableMapping[str, Any]) -> bytes:
    try:
        return _dumps(payload, default=str)
    except (TypeError, ValueError):
        return b""


def _plain_or_raw(value: Any) -> Any:
    # self-referencing maps are left for json.dumps to reject
    try:
        return to_plain(value)
    except RecursionError:
        return value


def render_json(config: "FormatterConfig", record: Record) -> bytes:
    """Render ``record`` as one JSON object followed by a newline.

    The timestamp always uses RFC 3339, whatever ``config.time_layout`` is.
    The ``data`` object carries every field, request id included.
    """

    payload: MutableMapping[str, Any] = {
        "timestamp": format_time(record.time, RFC3339),
        "level": record.level.name,
    }
    request_id = record.request_id
    if request_id is not None:
        payload["id"] = request_id
    payload["message"] = render_message(config, record).text

    data: Dict[str, Any] = {key: _plain_or_raw(value) for key, value in record.sorted_fields()}
    if data:
        payload["data"] = data

    try:
        return _dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(
            f"Cannot encode log record as JSON: {exc}",
            partial=_best_effort(payload),
        ) from exc
