"""Placeholder substitution for message templates.

A template is plain text holding tokens such as ``<time>`` or ``<user>``.
Rendering applies a fixed, ordered list of rules to a working copy of the
template:

1. ``<time>``
2. ``<level>``
3. ``<id>`` (or elision of ``" [<id>]"``)
4. one ``<key>`` per remaining field, in key order
5. ``<msg>`` (or elision of the message segment)

Each rule replaces only the first occurrence of its token. Elision only
happens when the configuration marks the template as the default one;
otherwise unresolved tokens stay in the output verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, FrozenSet, List, Set

from ..utils.time import format_time
from .record import REQUEST_ID_KEY, Record

if TYPE_CHECKING:  # pragma: no cover
    from ..config.schema import FormatterConfig

__all__ = [
    "TIME_TOKEN",
    "LEVEL_TOKEN",
    "ID_TOKEN",
    "MSG_TOKEN",
    "DEFAULT_TEMPLATE",
    "RenderedMessage",
    "render_message",
    "token",
]


def token(key: str) -> str:
    """Return the placeholder token for ``key``."""

    return f"<{key}>"


TIME_TOKEN = token("time")
LEVEL_TOKEN = token("level")
ID_TOKEN = token("id")
MSG_TOKEN = token("msg")

DEFAULT_TEMPLATE = f"[{TIME_TOKEN}] [{LEVEL_TOKEN}] [{ID_TOKEN}] {MSG_TOKEN}"

_ID_SEGMENT = f" [{ID_TOKEN}]"
_MSG_SEGMENTS = (f" [{MSG_TOKEN}]", f" {MSG_TOKEN}")


@dataclass(frozen=True, slots=True)
class RenderedMessage:
    """Templated text plus the field keys that were inlined into it."""

    text: str
    consumed: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(slots=True)
class _Buffer:
    text: str
    consumed: Set[str] = field(default_factory=set)

    def replace(self, needle: str, value: str) -> bool:
        if needle not in self.text:
            return False
        self.text = self.text.replace(needle, value, 1)
        return True


Rule = Callable[["FormatterConfig", Record, _Buffer], None]


def _time_rule(config: "FormatterConfig", record: Record, buf: _Buffer) -> None:
    buf.replace(TIME_TOKEN, format_time(record.time, config.time_layout))


def _level_rule(config: "FormatterConfig", record: Record, buf: _Buffer) -> None:
    buf.replace(LEVEL_TOKEN, record.level.label)


def _id_rule(config: "FormatterConfig", record: Record, buf: _Buffer) -> None:
    request_id = record.request_id
    if request_id is not None:
        buf.replace(ID_TOKEN, request_id)
    elif config.is_default_template:
        buf.replace(_ID_SEGMENT, "")


def _fields_rule(config: "FormatterConfig", record: Record, buf: _Buffer) -> None:
    for key, value in record.sorted_fields():
        if key == REQUEST_ID_KEY:
            continue
        if buf.replace(token(key), str(value)):
            buf.consumed.add(key)


def _msg_rule(config: "FormatterConfig", record: Record, buf: _Buffer) -> None:
    if record.message:
        buf.replace(MSG_TOKEN, record.message)
        return
    if not config.is_default_template:
        return
    for segment in _MSG_SEGMENTS:
        if buf.replace(segment, ""):
            return


RULES: List[Rule] = [_time_rule, _level_rule, _id_rule, _fields_rule, _msg_rule]


def render_message(config: "FormatterConfig", record: Record) -> RenderedMessage:
    """Apply :data:`RULES` to ``config.template`` for ``record``."""

    buf = _Buffer(config.template)
    for rule in RULES:
        rule(config, record, buf)
    return RenderedMessage(text=buf.text, consumed=frozenset(buf.consumed))
