from dataclasses import dataclass
from typing import Any

import httpx
import pytest
from pydantic import BaseModel

from restserial.transport import RawResponse


class Item(BaseModel):
    a: int


@dataclass
class Point:
    x: int
    y: int


class Celsius:
    """Decodes itself from a bare JSON number."""

    def __init__(self, degrees: float) -> None:
        self.degrees = degrees

    @classmethod
    def from_json(cls, node: Any) -> "Celsius":
        if isinstance(node, bool) or not isinstance(node, (int, float)):
            raise TypeError(f"expected a number, got {node!r}")
        return cls(node)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Celsius) and other.degrees == self.degrees


def make_raw(payload: bytes | str | None) -> RawResponse:
    if isinstance(payload, str):
        payload = payload.encode()
    return RawResponse.from_bytes(payload)


def make_response(status: int, payload: Any) -> httpx.Response:
    request = httpx.Request("GET", "https://api.restserial.test/resource")
    return httpx.Response(status, json=payload, request=request)


@pytest.fixture
def transport_error() -> httpx.ConnectError:
    return httpx.ConnectError(
        "boom", request=httpx.Request("GET", "https://api.restserial.test/failure")
    )
