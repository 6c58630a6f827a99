"""Baseline logfmt rendering used when no template is configured."""

from __future__ import annotations

from typing import Any, List

from ..core.record import Record
from ..utils.time import RFC3339, format_time
from .text import render_value

__all__ = ["render_baseline"]


def _escape(value: Any) -> str:
    text = render_value(value)
    if not text:
        return '""'
    if any(ch.isspace() for ch in text) or "=" in text or "\"" in text:
        escaped = (
            text.replace("\\", "\\\\")
            .replace("\"", "\\\"")
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f'"{escaped}"'
    return text


def render_baseline(record: Record) -> bytes:
    """Render ``record`` as a logfmt (key=value) line."""

    parts: List[str] = [
        f"time={_escape(format_time(record.time, RFC3339))}",
        f"level={record.level.name.lower()}",
        f"msg={_escape(record.message)}",
    ]
    for key, value in record.sorted_fields():
        parts.append(f"{key}={_escape(value)}")
    return (" ".join(parts) + "\n").encode("utf-8")
