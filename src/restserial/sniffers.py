"""
Sniffers that recognise API error envelopes in successful responses.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import APIError


@dataclass(frozen=True, slots=True)
class EnvelopeSniffer:
    """
    Detect bodies shaped like ``{"code": 500, "msg": "...", "error": "..."}``.

    Returns an :class:`APIError` when ``code_key`` holds an integer at or above
    ``threshold``. Bodies that are not JSON objects are left to the decoder.
    """

    code_key: str = "code"
    message_keys: tuple[str, ...] = ("msg", "message")
    error_key: str = "error"
    threshold: int = 400

    def __call__(self, data: bytes) -> APIError | None:
        try:
            payload = json.loads(data)
        except (ValueError, RecursionError):
            return None
        if not isinstance(payload, Mapping):
            return None

        code = payload.get(self.code_key)
        if not isinstance(code, int) or isinstance(code, bool) or code < self.threshold:
            return None

        message = None
        for key in self.message_keys:
            if payload.get(key):
                message = str(payload[key])
                break
        error = payload.get(self.error_key)
        return APIError(
            code=code,
            message=message,
            error=str(error) if error is not None else None,
            payload=payload,
        )


envelope_sniffer = EnvelopeSniffer()
