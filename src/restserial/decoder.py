"""
Decoding of raw HTTP responses into typed values.

Both entry points follow the same order: a transport failure wins, then a
missing payload, then the caller's sniffer, and only then is the body parsed
as JSON, navigated by ``path`` and handed to the target type. Every failure is
returned as a rejected :class:`~restserial.result.Result`.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ._constants import INPUT_DATA_NIL_REASON, JSON_PARSE_FAILED_REASON
from .config import DecoderConfig
from .decodable import decode_node
from .env import CONFIG
from .error_code import Code
from .errors import NotAnArrayError, RestSerialError
from .path import JSONPath, PathSegment, format_path, navigate, validate_path
from .result import Result
from .transport import RawResponse

T = TypeVar("T")

Sniffer = Callable[[bytes], Any]

# what a malformed or too deeply nested document, a bad path or a failed
# construction raise
_MALFORMED = (RestSerialError, ValueError, TypeError, LookupError, RecursionError)


def _preflight(
    raw: RawResponse,
    sniffer: Sniffer | None,
    path: JSONPath | None,
    config: DecoderConfig,
) -> tuple[tuple[PathSegment, ...], Result | None]:
    if raw.error is not None:
        return (), Result.reject(
            str(raw.error) or type(raw.error).__name__,
            Code.TRANSPORT_ERROR,
            cause=raw.error,
        )

    if raw.data is None:
        return (), Result.reject(INPUT_DATA_NIL_REASON, Code.PAYLOAD_ABSENT)

    if sniffer is not None:
        failure = sniffer(raw.data)
        if failure is not None:
            return (), Result.reject(
                str(failure) or type(failure).__name__,
                Code.SNIFFER_REPORTED_ERROR,
                cause=failure,
            )

    try:
        segments = validate_path(path, config.max_path_length)
    except RestSerialError as exc:
        return (), Result.reject(JSON_PARSE_FAILED_REASON, detail=str(exc))
    return segments, None


def decode_object(
    raw: RawResponse,
    target: type[T],
    *,
    sniffer: Sniffer | None = None,
    path: JSONPath | None = None,
    config: DecoderConfig | None = None,
) -> Result[T]:
    """
    Decode a single ``target`` from ``raw``.

    Args:
        raw: The finished request.
        target: Type to construct from the resolved JSON node.
        sniffer: Optional callable inspecting the raw bytes; a non-``None``
            return value is reported as the failure and the body is not parsed.
        path: Keys and indices leading from the document root to the node.
        config: Overrides the module configuration.
    """
    config = config if config is not None else CONFIG
    segments, failure = _preflight(raw, sniffer, path, config)
    if failure is not None:
        return failure

    try:
        document = json.loads(raw.data)
        node = navigate(document, segments)
        value = decode_node(node, target, strict=config.strict_decoding)
    except _MALFORMED as exc:
        return Result.reject(JSON_PARSE_FAILED_REASON, detail=str(exc))
    return Result.resolve(value)


def decode_array(
    raw: RawResponse,
    target: type[T],
    *,
    sniffer: Sniffer | None = None,
    path: JSONPath | None = None,
    config: DecoderConfig | None = None,
) -> Result[list[T]]:
    """
    Decode a list of ``target`` from the JSON array found at ``path``.

    A single element that fails to decode fails the whole list.
    """
    config = config if config is not None else CONFIG
    segments, failure = _preflight(raw, sniffer, path, config)
    if failure is not None:
        return failure

    index: int | None = None
    try:
        document = json.loads(raw.data)
        node = navigate(document, segments)
        if not isinstance(node, list):
            raise NotAnArrayError(
                f"expected an array at {format_path(segments)}", path=segments
            )
        values = []
        for index, element in enumerate(node):
            values.append(decode_node(element, target, strict=config.strict_decoding))
    except _MALFORMED as exc:
        detail = str(exc)
        if index is not None:
            detail = f"element {format_path((*segments, index))}: {detail}"
        return Result.reject(JSON_PARSE_FAILED_REASON, detail=detail)
    return Result.resolve(values)


@dataclass(frozen=True)
class ObjectSerializer(Generic[T]):
    """A reusable :func:`decode_object` call, applied to each finished request."""

    target: type[T]
    sniffer: Sniffer | None = None
    path: JSONPath | None = None
    config: DecoderConfig | None = None

    def __call__(self, raw: RawResponse) -> Result[T]:
        return decode_object(
            raw, self.target, sniffer=self.sniffer, path=self.path, config=self.config
        )


@dataclass(frozen=True)
class ArraySerializer(Generic[T]):
    """A reusable :func:`decode_array` call, applied to each finished request."""

    target: type[T]
    sniffer: Sniffer | None = None
    path: JSONPath | None = None
    config: DecoderConfig | None = None

    def __call__(self, raw: RawResponse) -> Result[list[T]]:
        return decode_array(
            raw, self.target, sniffer=self.sniffer, path=self.path, config=self.config
        )
