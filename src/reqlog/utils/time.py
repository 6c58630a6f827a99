"""Time utilities for reqlog."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict

__all__ = ["RFC3339", "RFC3339_NANO", "ISO8601", "ensure_aware", "format_time"]

RFC3339 = "RFC3339"
RFC3339_NANO = "RFC3339Nano"
ISO8601 = "ISO8601"


def ensure_aware(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _rfc3339(moment: datetime, *, fraction: bool) -> str:
    text = moment.isoformat(timespec="microseconds" if fraction else "seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


_NAMED_LAYOUTS: Dict[str, Callable[[datetime], str]] = {
    RFC3339: lambda moment: _rfc3339(moment, fraction=False),
    RFC3339_NANO: lambda moment: _rfc3339(moment, fraction=True),
    ISO8601: lambda moment: moment.isoformat(),
}


def format_time(moment: datetime, layout: str = RFC3339) -> str:
    """Format ``moment`` with a named layout or a ``strftime`` pattern."""

    aware = ensure_aware(moment)
    named = _NAMED_LAYOUTS.get(layout)
    if named is not None:
        return named(aware)
    return aware.strftime(layout)
