from __future__ import annotations

from collections import UserDict
from datetime import datetime
from types import MappingProxyType

from reqlog.config.schema import FormatterBuilder
from reqlog.core.formatter import Formatter
from reqlog.core.levels import Level
from reqlog.core.record import REQUEST_ID_KEY, Record
from reqlog.formatters.text import render_text, render_value


def test_unmatched_field_is_appended(moment: datetime) -> None:
    config = FormatterBuilder.default().build()
    record = Record(time=moment, level=Level.INFO, message="hello", fields={"region": "us-east"})

    line = render_text(config, record)

    assert line.endswith(b" | region = us-east\n")
    assert line.count(b"\n") == 1


def test_fields_are_appended_in_key_order(moment: datetime) -> None:
    config = FormatterBuilder().with_template("<msg>").with_separator(" ;").build()
    record = Record(time=moment, level=Level.INFO, message="m", fields={"b": 2, "a": 1, "c": True})

    assert render_text(config, record) == b"m ; a = 1 ; b = 2 ; c = True\n"


def test_id_and_consumed_fields_are_not_repeated(moment: datetime) -> None:
    config = FormatterBuilder.default().with_template("[<id>] <user>: <msg>").build()
    record = Record(
        time=moment,
        level=Level.INFO,
        message="ok",
        fields={REQUEST_ID_KEY: "abc", "user": "ann", "path": "/x"},
    )

    assert render_text(config, record) == b"[abc] ann: ok | path = /x\n"


def test_nested_map_is_embedded_as_json(moment: datetime) -> None:
    config = FormatterBuilder().with_template("<msg>").build()
    record = Record(time=moment, level=Level.INFO, message="m", fields={"req": {"b": [1, 2], "a": "x"}})

    assert render_text(config, record) == b'm | req = {"a":"x","b":[1,2]}\n'


def test_unencodable_nested_map_falls_back_to_str() -> None:
    value = {"obj": object()}

    assert render_value(value) == str(value)


def test_text_output_is_idempotent(moment: datetime) -> None:
    formatter = Formatter(FormatterBuilder.default().build())
    record = Record(
        time=moment,
        level=Level.ERROR,
        message="boom",
        fields={REQUEST_ID_KEY: "r1", "z": 1, "a": {"k": "v"}},
    )

    assert formatter.format(record) == formatter.format(record)


def test_non_dict_mappings_are_embedded_as_json(moment: datetime) -> None:
    config = FormatterBuilder().with_template("<msg>").build()
    record = Record(
        time=moment,
        level=Level.INFO,
        message="m",
        fields={"a": UserDict({"x": 1}), "b": MappingProxyType({"inner": UserDict({"y": [1, 2]})})},
    )

    assert render_text(config, record) == b'm | a = {"x":1} | b = {"inner":{"y":[1,2]}}\n'
