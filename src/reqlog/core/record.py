"""Log record value consumed by the formatters."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from numbers import Number
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Tuple

from .levels import Level

__all__ = [
    "REQUEST_ID_KEY",
    "FieldKind",
    "Record",
    "field_kind",
    "to_plain",
]

REQUEST_ID_KEY = "X-Request-ID"


class FieldKind(enum.Enum):
    """Shape of a field value, used by renderers to pick an encoding."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    MAP = "map"
    OTHER = "other"


def field_kind(value: Any) -> FieldKind:
    # bool before Number: bool is an int subclass
    if isinstance(value, bool):
        return FieldKind.BOOL
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, Number):
        return FieldKind.NUMBER
    if isinstance(value, Mapping):
        return FieldKind.MAP
    return FieldKind.OTHER


def to_plain(value: Any) -> Any:
    """Turn nested mappings of any type into ``dict`` for JSON encoding."""

    if field_kind(value) is FieldKind.MAP:
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class Record:
    """One structured log event.

    ``fields`` is copied into a read-only mapping on construction. The
    request id lives in the same mapping under :data:`REQUEST_ID_KEY`.
    """

    time: datetime
    level: Level
    message: str = ""
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def request_id(self) -> str | None:
        if REQUEST_ID_KEY not in self.fields:
            return None
        return str(self.fields[REQUEST_ID_KEY])

    def sorted_fields(self) -> Iterator[Tuple[str, Any]]:
        """Yield ``(key, value)`` pairs in key order."""

        for key in sorted(self.fields):
            yield key, self.fields[key]
