"""
Construction of target values from JSON nodes.
"""

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class JSONDecodable(Protocol):
    """A type that knows how to build itself from a parsed JSON node."""

    @classmethod
    def from_json(cls, node: Any) -> Any:
        ...


def implements_from_json(target: Any) -> bool:
    return isinstance(target, type) and callable(getattr(target, "from_json", None))


@lru_cache(maxsize=256)
def type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode_node(node: Any, target: type[T], *, strict: bool = False) -> T:
    """
    Build a ``target`` from ``node``.

    Types with a ``from_json`` classmethod decode themselves; anything else
    (pydantic models, dataclasses, builtins, typing constructs) goes through
    pydantic validation. Failures raise ``ValueError``, ``TypeError`` or
    ``LookupError``.
    """
    if implements_from_json(target):
        return target.from_json(node)  # type: ignore[attr-defined]
    return type_adapter(target).validate_python(node, strict=strict)
