"""Formatter dispatch between the text, JSON and baseline renderers."""

from __future__ import annotations

from ..config.schema import FormatterConfig
from ..formatters.jsonfmt import render_json
from ..formatters.logfmt import render_baseline
from ..formatters.text import render_text
from .record import Record

__all__ = ["Formatter"]


class Formatter:
    """Render records according to a frozen :class:`FormatterConfig`.

    Formatting is stateless; one instance may be shared across threads.
    """

    __slots__ = ("config",)

    def __init__(self, config: FormatterConfig) -> None:
        self.config = config

    def format(self, record: Record) -> bytes:
        """Return one newline-terminated line for ``record``.

        Raises :class:`~reqlog.core.errors.EncodingError` in JSON mode when
        a field value cannot be encoded.
        """

        if not self.config.template:
            return render_baseline(record)
        if self.config.json_output:
            return render_json(self.config, record)
        return render_text(self.config, record)
