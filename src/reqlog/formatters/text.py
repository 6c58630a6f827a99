"""Human readable text rendering."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, List

from ..core.record import REQUEST_ID_KEY, FieldKind, Record, field_kind, to_plain
from ..core.template import render_message

if TYPE_CHECKING:  # pragma: no cover
    from ..config.schema import FormatterConfig

__all__ = ["render_text", "render_value"]

logger = logging.getLogger(__name__)


def render_value(value: Any) -> str:
    """Render a field value for the trailing ``key = value`` list.

    Mappings are embedded as compact JSON; anything else uses ``str``.
    """

    if field_kind(value) is not FieldKind.MAP:
        return str(value)
    try:
        return json.dumps(to_plain(value), ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug("falling back to str() for nested field value: %s", exc)
        return str(value)


def render_text(config: "FormatterConfig", record: Record) -> bytes:
    """Render ``record`` as one newline-terminated text line."""

    rendered = render_message(config, record)
    parts: List[str] = [rendered.text]
    for key, value in record.sorted_fields():
        if key == REQUEST_ID_KEY or key in rendered.consumed:
            continue
        parts.append(f"{config.separator} {key} = {render_value(value)}")
    parts.append("\n")
    return "".join(parts).encode("utf-8")
