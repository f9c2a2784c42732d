"""
Exceptions used by restserial.

Decoding never lets these escape: path and construction problems are raised
internally and reported as a failed :class:`~restserial.result.Result`.
"""

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any


class RestSerialError(Exception):
    """Base exception for all errors raised by ``restserial``."""


class PathError(RestSerialError):
    """A path could not be resolved against a JSON document."""

    def __init__(self, message: str, *, path: Sequence[Any] = ()) -> None:
        self.path = tuple(path)
        super().__init__(message)


class PathTooLongError(PathError):
    def __init__(self, *, path: Sequence[Any], max_length: int) -> None:
        self.max_length = max_length
        super().__init__(
            f"path has {len(path)} segments, at most {max_length} are supported",
            path=path,
        )


class InvalidSegmentError(PathError):
    """A segment is neither a ``str`` key nor an ``int`` index."""


class KeyNotFoundError(PathError):
    pass


class IndexOutOfRangeError(PathError):
    pass


class UnexpectedSubscriptError(PathError):
    """A key was applied to a non-object, or an index to a non-array."""


class NotAnArrayError(PathError):
    pass


class APIError(RestSerialError):
    """
    An API-level failure: an error envelope in the body or a bad HTTP status.

    Attributes:
        status_code: HTTP status code, when known.
        code: Optional application-level error code from the payload.
        message: Human readable message if provided by the server.
        error: Raw error field from the payload.
        payload: The full parsed JSON payload.
    """

    def __init__(
        self,
        *,
        status_code: int | None = None,
        code: int | None = None,
        message: str | None = None,
        error: str | None = None,
        payload: Mapping[str, Any] | MutableMapping[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.error = error
        self.payload = payload
        details = message or error or "API request failed"
        prefix = status_code if status_code is not None else code
        super().__init__(f"{prefix}: {details}" if prefix is not None else details)


class TransportError(RestSerialError):
    """Raised when a request is issued through an adapter that is already closed."""
