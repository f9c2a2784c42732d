"""
The outcome of a finished HTTP request, as handed to the decoder.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from .errors import APIError


@dataclass(slots=True, frozen=True)
class RawResponse:
    """
    Either a transport failure or an optional byte payload.

    ``status_code`` and ``headers`` are carried along for callers; the decoder
    does not look at them.
    """

    error: BaseException | None = None
    data: bytes | None = None
    status_code: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: BaseException) -> "RawResponse":
        return cls(error=error)

    @classmethod
    def from_bytes(cls, data: bytes | None, *, status_code: int | None = 200) -> "RawResponse":
        return cls(data=data, status_code=status_code)

    @classmethod
    def from_response(
        cls, response: httpx.Response, *, validate_status: bool = False
    ) -> "RawResponse":
        headers = dict(response.headers)
        try:
            data: bytes | None = response.content
        except httpx.ResponseNotRead:
            data = None

        error: BaseException | None = None
        if validate_status and response.status_code >= 400:
            error = APIError(
                status_code=response.status_code,
                message=response.reason_phrase,
            )
        return cls(
            error=error,
            data=data,
            status_code=response.status_code,
            headers=headers,
        )
