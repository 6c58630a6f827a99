from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from reqlog.config.schema import DEFAULT_SEPARATOR, FormatterBuilder, FormatterConfig
from reqlog.core.formatter import Formatter
from reqlog.core.levels import Level
from reqlog.core.record import REQUEST_ID_KEY, Record
from reqlog.core.template import DEFAULT_TEMPLATE
from reqlog.core.validation import ConfigurationError
from reqlog.utils.time import RFC3339


def test_default_builder() -> None:
    config = FormatterBuilder.default(">>>").build()

    assert config.template == DEFAULT_TEMPLATE
    assert config.is_default_template
    assert not config.json_output
    assert config.separator == DEFAULT_SEPARATOR
    assert config.time_layout == RFC3339
    assert config.prefix == ">>>"


def test_plain_builder_has_no_template() -> None:
    config = FormatterBuilder().build()

    assert config.template == ""
    assert not config.is_default_template
    assert config.time_layout == RFC3339


def test_setters_chain_on_the_same_builder() -> None:
    builder = FormatterBuilder()

    assert builder.with_template("<msg>") is builder
    assert builder.with_prefix("===") is builder
    assert builder.with_separator(" ,") is builder
    assert builder.with_json_output() is builder
    assert builder.with_time_layout("%H") is builder

    config = builder.build()
    assert (config.template, config.prefix, config.separator, config.json_output, config.time_layout) == (
        "<msg>",
        "===",
        " ,",
        True,
        "%H",
    )


def test_custom_template_keeps_default_flag() -> None:
    config = FormatterBuilder.default().with_template("<level> [<id>]").build()

    assert config.is_default_template


def test_built_config_is_frozen() -> None:
    config = FormatterBuilder.default().build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.template = "<msg>"  # type: ignore[misc]


def test_builder_from_existing_config_leaves_original_untouched() -> None:
    original = FormatterBuilder.default().build()
    derived = original.builder().with_json_output().build()

    assert derived.json_output
    assert not original.json_output
    assert derived.template == original.template


def test_build_rejects_invalid_options() -> None:
    with pytest.raises(ConfigurationError):
        FormatterBuilder().with_time_layout("").build()
    with pytest.raises(ConfigurationError):
        FormatterBuilder().with_separator(None).build()  # type: ignore[arg-type]


def test_empty_template_uses_baseline_renderer(moment: datetime) -> None:
    record = Record(
        time=moment,
        level=Level.WARN,
        message="disk almost full",
        fields={REQUEST_ID_KEY: "abc", "path": "/var", "note": ""},
    )

    line = Formatter(FormatterConfig(json_output=True)).format(record)

    assert line == (
        b'time=2024-05-01T12:30:45Z level=warn msg="disk almost full" '
        b'X-Request-ID=abc note="" path=/var\n'
    )


def test_dispatch_selects_text_or_json(moment: datetime) -> None:
    record = Record(time=moment, level=Level.INFO, message="m")
    text = Formatter(FormatterBuilder().with_template("<msg>").build()).format(record)
    json_line = Formatter(FormatterBuilder().with_template("<msg>").with_json_output().build()).format(record)

    assert text == b"m\n"
    assert json_line.startswith(b'{"timestamp":')


def test_baseline_keeps_multiline_values_on_one_line(moment: datetime) -> None:
    record = Record(time=moment, level=Level.ERROR, message="first\nsecond", fields={"trace": "a\r\nb"})

    line = Formatter(FormatterConfig()).format(record)

    assert line.count(b"\n") == 1
    assert line.endswith(b'msg="first\\nsecond" trace="a\\r\\nb"\n')
