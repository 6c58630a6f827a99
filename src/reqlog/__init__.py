"""reqlog public API."""

from .api import configure, get_formatter, get_logger, get_request_logger
from .config.schema import FormatterBuilder, FormatterConfig
from .core.context import (
    PREFIX_REQUEST_HANDLING,
    PREFIX_REQUEST_INCOMING,
    PREFIX_REQUEST_OUTGOING,
    RequestAdapter,
)
from .core.errors import EncodingError, ReqlogError
from .core.formatter import Formatter
from .core.levels import Level
from .core.record import REQUEST_ID_KEY, Record
from .core.template import DEFAULT_TEMPLATE, token
from .core.validation import ConfigurationError
from .formatters.bridge import TemplateFormatter
from .version import __version__

__all__ = [
    "configure",
    "get_formatter",
    "get_logger",
    "get_request_logger",
    "ConfigurationError",
    "DEFAULT_TEMPLATE",
    "EncodingError",
    "Formatter",
    "FormatterBuilder",
    "FormatterConfig",
    "Level",
    "PREFIX_REQUEST_HANDLING",
    "PREFIX_REQUEST_INCOMING",
    "PREFIX_REQUEST_OUTGOING",
    "REQUEST_ID_KEY",
    "Record",
    "ReqlogError",
    "RequestAdapter",
    "TemplateFormatter",
    "token",
    "__version__",
]
