from __future__ import annotations

import json
import math
from collections import UserDict
from datetime import datetime
from types import MappingProxyType

import pytest

from reqlog.config.schema import FormatterBuilder
from reqlog.core.errors import EncodingError
from reqlog.core.formatter import Formatter
from reqlog.core.levels import Level
from reqlog.core.record import REQUEST_ID_KEY, Record
from reqlog.formatters.text import render_text


def _json_formatter(template: str = "[<id>] <msg>") -> Formatter:
    return Formatter(FormatterBuilder.default().with_template(template).with_json_output().build())


def test_json_round_trip_with_id(moment: datetime) -> None:
    record = Record(time=moment, level=Level.WARN, message="hello", fields={REQUEST_ID_KEY: "abc123"})

    line = _json_formatter().format(record)
    payload = json.loads(line)

    assert line.endswith(b"\n")
    assert list(payload) == ["timestamp", "level", "id", "message", "data"]
    assert payload["level"] == "WARN"
    assert payload["id"] == "abc123"
    assert payload["message"] == "[abc123] hello"
    assert payload["data"] == {REQUEST_ID_KEY: "abc123"}


def test_json_omits_missing_id_and_empty_data(moment: datetime) -> None:
    payload = json.loads(_json_formatter("<msg>").format(Record(time=moment, level=Level.INFO, message="hi")))

    assert "id" not in payload
    assert "data" not in payload
    assert payload["message"] == "hi"


def test_json_keeps_nested_values(moment: datetime) -> None:
    record = Record(time=moment, level=Level.INFO, message="m", fields={"nested": {"a": 1}})

    payload = json.loads(_json_formatter().format(record))

    assert payload["data"]["nested"] == {"a": 1}


def test_json_ignores_custom_time_layout(moment: datetime) -> None:
    config = FormatterBuilder.default().with_time_layout("%H:%M").with_json_output().build()

    payload = json.loads(Formatter(config).format(Record(time=moment, level=Level.INFO, message="m")))

    assert payload["timestamp"] == "2024-05-01T12:30:45Z"
    assert payload["message"].startswith("[12:30]")


def test_text_and_json_agree_on_message(moment: datetime) -> None:
    builder = FormatterBuilder.default().with_template("<user> did <msg>")
    record = Record(time=moment, level=Level.INFO, message="login", fields={"user": "ann"})

    text_line = render_text(builder.build(), record).decode("utf-8")
    payload = json.loads(Formatter(builder.with_json_output().build()).format(record))

    assert payload["message"] == "ann did login"
    assert text_line.startswith(payload["message"])


def test_json_encoding_failure_carries_partial_output(moment: datetime) -> None:
    record = Record(time=moment, level=Level.ERROR, message="m", fields={"obj": object(), "n": 1})

    with pytest.raises(EncodingError) as excinfo:
        _json_formatter().format(record)

    partial = json.loads(excinfo.value.partial)
    assert partial["level"] == "ERROR"
    assert partial["data"]["n"] == 1
    assert isinstance(excinfo.value, ValueError)


def test_json_rejects_nan(moment: datetime) -> None:
    record = Record(time=moment, level=Level.INFO, message="m", fields={"ratio": math.nan})

    with pytest.raises(EncodingError) as excinfo:
        _json_formatter().format(record)

    assert b"NaN" in excinfo.value.partial


def test_json_output_is_idempotent(moment: datetime) -> None:
    formatter = _json_formatter()
    record = Record(time=moment, level=Level.INFO, message="m", fields={"b": 1, "a": {"x": [1]}})

    assert formatter.format(record) == formatter.format(record)


def test_json_accepts_non_dict_mappings(moment: datetime) -> None:
    record = Record(
        time=moment,
        level=Level.INFO,
        message="m",
        fields={"nested": MappingProxyType({"a": 1, "b": UserDict({"c": (1, 2)})})},
    )

    payload = json.loads(_json_formatter().format(record))

    assert payload["data"]["nested"] == {"a": 1, "b": {"c": [1, 2]}}
