"""
Asyncio completion adapter built on ``httpx.AsyncClient``.
"""

import asyncio
import inspect
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, TypeVar

import httpx

from ._constants import DEFAULT_USER_AGENT
from .config import DecoderConfig
from .decoder import ArraySerializer, ObjectSerializer, Sniffer
from .env import LOG
from .errors import TransportError
from .path import JSONPath
from .result import Result
from .transport import RawResponse

T = TypeVar("T")

Serializer = Callable[[RawResponse], Result]


class AsyncResponseRequest:
    """A request scheduled on the running event loop."""

    def __init__(self, task: "asyncio.Task[RawResponse]", *, config: DecoderConfig | None = None) -> None:
        self._task = task
        self._config = config

    async def raw(self) -> RawResponse:
        try:
            return await asyncio.shield(self._task)
        except Exception as exc:
            return RawResponse.from_error(exc)

    def done(self) -> bool:
        return self._task.done()

    async def response(
        self,
        serializer: Serializer,
        handler: Callable[[Result], Any] | None = None,
    ) -> Result:
        """
        Wait for the request, decode it with ``serializer`` and hand the result
        to ``handler``. Coroutine handlers are awaited. The result is returned
        as well, so ``handler`` may be omitted.
        """
        result = serializer(await self.raw())
        if handler is not None:
            outcome = handler(result)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    async def response_object(
        self,
        target: type[T],
        handler: Callable[[Result[T]], Any] | None = None,
        *,
        sniffer: Sniffer | None = None,
        path: JSONPath | None = None,
    ) -> Result[T]:
        serializer = ObjectSerializer(target, sniffer=sniffer, path=path, config=self._config)
        return await self.response(serializer, handler)

    async def response_array(
        self,
        target: type[T],
        handler: Callable[[Result[list[T]]], Any] | None = None,
        *,
        sniffer: Sniffer | None = None,
        path: JSONPath | None = None,
    ) -> Result[list[T]]:
        serializer = ArraySerializer(target, sniffer=sniffer, path=path, config=self._config)
        return await self.response(serializer, handler)


class AsyncCompletionAdapter:
    """
    Asynchronous counterpart of :class:`~restserial.completion.CompletionAdapter`.

    Example::

        async with AsyncCompletionAdapter(base_url="https://api.example.test") as adapter:
            result = await adapter.request("GET", "/users/1").response_object(User)
            user, error = result.unpack()
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        headers: Mapping[str, str] | None = None,
        timeout: float | httpx.Timeout | None = 10.0,
        client: httpx.AsyncClient | None = None,
        validate_status: bool = False,
        config: DecoderConfig | None = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": DEFAULT_USER_AGENT,
            **(headers or {}),
        }

        if client is not None:
            self._client = client
            self._owns_client = False
            if base_url and client.base_url == httpx.URL():
                client.base_url = httpx.URL(base_url.rstrip("/"))
        else:
            self._client = httpx.AsyncClient(
                base_url=base_url.rstrip("/"), timeout=timeout
            )
            self._owns_client = True

        self._headers = default_headers
        self._validate_status = validate_status
        self._config = config
        self._closed = False
        self._pending: set["asyncio.Task[RawResponse]"] = set()

    async def aclose(self) -> None:
        """Let requests already in flight finish, then release the client."""
        self._closed = True
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncCompletionAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_data: Mapping[str, Any] | MutableMapping[str, Any] | list[Any] | None = None,
        data: Mapping[str, Any] | MutableMapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> AsyncResponseRequest:
        """Schedule the request; must be called while an event loop is running."""
        if self._closed:
            raise TransportError("adapter is closed")

        request = self._client.build_request(
            method,
            url,
            params=params,
            json=json_data,
            data=data,
            headers={**self._headers, **(headers or {})},
        )
        LOG.debug(f"dispatching {request.method} {request.url}")
        task = asyncio.get_running_loop().create_task(self._send(request))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return AsyncResponseRequest(task, config=self._config)

    async def _send(self, request: httpx.Request) -> RawResponse:
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as exc:
            LOG.debug(f"{request.method} {request.url} failed: {exc!r}")
            return RawResponse.from_error(exc)
        return RawResponse.from_response(response, validate_status=self._validate_status)
