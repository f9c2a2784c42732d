"""
Navigation of parsed JSON documents by a sequence of keys and indices.
"""

from collections.abc import Sequence
from typing import Any, Union

from .errors import (
    IndexOutOfRangeError,
    InvalidSegmentError,
    KeyNotFoundError,
    PathTooLongError,
    UnexpectedSubscriptError,
)

PathSegment = Union[str, int]
JSONPath = Sequence[PathSegment]


def format_path(segments: Sequence[Any]) -> str:
    rendered = "$"
    for segment in segments:
        if isinstance(segment, int) and not isinstance(segment, bool):
            rendered += f"[{segment}]"
        else:
            rendered += f".{segment}"
    return rendered


def validate_path(
    path: JSONPath | None, max_length: int | None = None
) -> tuple[PathSegment, ...]:
    """
    Normalize ``path`` into a tuple of segments.

    ``None`` and an empty sequence both address the document root. A bare
    string is rejected rather than being read as a sequence of characters.
    """
    if path is None:
        return ()
    if isinstance(path, (str, bytes)):
        raise InvalidSegmentError(
            "path must be a sequence of segments, not a string", path=(path,)
        )
    segments = tuple(path)
    for segment in segments:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise InvalidSegmentError(
                f"unsupported path segment {segment!r} of type {type(segment).__name__}",
                path=segments,
            )
    if max_length is not None and len(segments) > max_length:
        raise PathTooLongError(path=segments, max_length=max_length)
    return segments


def step(node: Any, segment: PathSegment, *, walked: Sequence[PathSegment] = ()) -> Any:
    here = (*walked, segment)
    if isinstance(segment, str):
        if not isinstance(node, dict):
            raise UnexpectedSubscriptError(
                f"cannot look up key {segment!r} in {_kind(node)} at {format_path(walked)}",
                path=here,
            )
        if segment not in node:
            raise KeyNotFoundError(f"key not found: {format_path(here)}", path=here)
        return node[segment]

    if not isinstance(node, list):
        raise UnexpectedSubscriptError(
            f"cannot index {_kind(node)} with {segment} at {format_path(walked)}",
            path=here,
        )
    if segment < 0 or segment >= len(node):
        raise IndexOutOfRangeError(
            f"index {segment} out of range for array of length {len(node)} at {format_path(walked)}",
            path=here,
        )
    return node[segment]


def navigate(document: Any, path: JSONPath | None, *, max_length: int | None = None) -> Any:
    segments = validate_path(path, max_length)
    node = document
    for depth, segment in enumerate(segments):
        node = step(node, segment, walked=segments[:depth])
    return node


def _kind(node: Any) -> str:
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, (int, float)):
        return "number"
    if isinstance(node, str):
        return "string"
    if isinstance(node, list):
        return "array"
    if isinstance(node, dict):
        return "object"
    return type(node).__name__
