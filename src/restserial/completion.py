"""
Threaded completion adapter: issue a request, decode it when it finishes.
"""

from collections.abc import Callable, Mapping, MutableMapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, TypeVar

import httpx

from ._constants import DEFAULT_USER_AGENT, JSON_PARSE_FAILED_REASON
from .config import DecoderConfig
from .decoder import ArraySerializer, ObjectSerializer, Sniffer
from .env import LOG
from .error_code import Code
from .errors import TransportError
from .path import JSONPath
from .result import Result
from .transport import RawResponse

T = TypeVar("T")

Serializer = Callable[[RawResponse], Result]
Handler = Callable[[Result], Any]


class ResponseRequest:
    """
    A request in flight. Handlers attached with :meth:`response_object`,
    :meth:`response_array` or :meth:`response` each receive exactly one
    :class:`Result` once the transport has finished, and all of them observe
    the same outcome.
    """

    def __init__(self, future: "Future[RawResponse]", *, config: DecoderConfig | None = None) -> None:
        self._future = future
        self._config = config

    def raw(self, timeout: float | None = None) -> RawResponse:
        """Block until the transport has finished and return its outcome."""
        return _outcome(self._future, timeout)

    def done(self) -> bool:
        return self._future.done()

    def response(
        self,
        serializer: Serializer,
        handler: Handler,
        *,
        queue: Executor | None = None,
    ) -> "ResponseRequest":
        """
        Run ``serializer`` on the finished request and pass its result to
        ``handler``.

        Args:
            serializer: Turns the :class:`RawResponse` into a :class:`Result`.
            handler: Receives the result.
            queue: Executor to run ``handler`` on. Without one the handler runs
                on the thread that completed the request, or immediately on the
                caller's thread if the request had already finished.

        A serializer that raises (for example through a broken sniffer) is
        logged and reported to ``handler`` as a ``MALFORMED_PAYLOAD`` result
        whose ``cause`` is the exception.
        """

        def _complete(future: "Future[RawResponse]") -> None:
            try:
                result = serializer(_outcome(future))
            except Exception as exc:
                LOG.exception(f"serializer {serializer!r} raised")
                result = Result.reject(
                    JSON_PARSE_FAILED_REASON,
                    Code.MALFORMED_PAYLOAD,
                    detail=f"{type(exc).__name__}: {exc}",
                    cause=exc,
                )
            if queue is None:
                handler(result)
            else:
                queue.submit(handler, result)

        self._future.add_done_callback(_complete)
        return self

    def response_object(
        self,
        target: type[T],
        handler: Callable[[Result[T]], Any],
        *,
        queue: Executor | None = None,
        sniffer: Sniffer | None = None,
        path: JSONPath | None = None,
    ) -> "ResponseRequest":
        serializer = ObjectSerializer(target, sniffer=sniffer, path=path, config=self._config)
        return self.response(serializer, handler, queue=queue)

    def response_array(
        self,
        target: type[T],
        handler: Callable[[Result[list[T]]], Any],
        *,
        queue: Executor | None = None,
        sniffer: Sniffer | None = None,
        path: JSONPath | None = None,
    ) -> "ResponseRequest":
        serializer = ArraySerializer(target, sniffer=sniffer, path=path, config=self._config)
        return self.response(serializer, handler, queue=queue)


class CompletionAdapter:
    """
    Issues HTTP requests on a worker pool and delivers decoded results to
    completion handlers.

    Example::

        from restserial import CompletionAdapter, envelope_sniffer

        with CompletionAdapter(base_url="https://api.example.test") as adapter:
            adapter.request("GET", "/users").response_array(
                User,
                on_users,
                sniffer=envelope_sniffer,
                path=["data", "items"],
            )
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        headers: Mapping[str, str] | None = None,
        timeout: float | httpx.Timeout | None = 10.0,
        client: httpx.Client | None = None,
        max_workers: int = 4,
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
            self._client = httpx.Client(
                base_url=base_url.rstrip("/"), timeout=timeout
            )
            self._owns_client = True

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="restserial"
        )
        self._headers = default_headers
        self._validate_status = validate_status
        self._config = config
        self._closed = False

    def close(self) -> None:
        self._closed = True
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "CompletionAdapter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401 - standard context manager protocol
        self.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_data: Mapping[str, Any] | MutableMapping[str, Any] | list[Any] | None = None,
        data: Mapping[str, Any] | MutableMapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseRequest:
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
        future = self._executor.submit(self._send, request)
        return ResponseRequest(future, config=self._config)

    def _send(self, request: httpx.Request) -> RawResponse:
        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            LOG.debug(f"{request.method} {request.url} failed: {exc!r}")
            return RawResponse.from_error(exc)
        return RawResponse.from_response(response, validate_status=self._validate_status)


def _outcome(future: "Future[RawResponse]", timeout: float | None = None) -> RawResponse:
    exc = future.exception(timeout)
    if exc is not None:
        return RawResponse.from_error(exc)
    return future.result()
