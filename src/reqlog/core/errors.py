"""Exception types raised by reqlog."""

from __future__ import annotations

__all__ = ["ReqlogError", "EncodingError"]


class ReqlogError(Exception):
    """Base class for reqlog errors."""


class EncodingError(ReqlogError, ValueError):
    """Raised when a record cannot be encoded as JSON.

    ``partial`` holds a best-effort rendering of the same record so callers
    can still emit something.
    """

    def __init__(self, message: str, *, partial: bytes = b"") -> None:
        super().__init__(message)
        self.partial = partial
