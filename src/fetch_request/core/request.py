"""
Chained request builder using httpx.

    r = Request(client, "GET", "https://api.example.com/items")
    r.set_param("q", "a").set_header("X-Trace", "1")
    status = r.execute(lambda req, resp: resp.status_code)

Errors met while configuring (bad body source, unreadable body file) are
stored and raised by execute(), so callers only check once.
"""
import asyncio
import inspect
import logging
import threading
import time
import weakref
from typing import Any, BinaryIO, Optional, Union

import httpx

from ..body import as_body_source
from ..config import RequestConfig, ResolvedConfig, resolve_config
from ..errors import ConfigurationError, RequestConstructionError, TransportError
from ..params import QueryParams
from ..types import AsyncHandler, AsyncTransportClient, Handler, SyncTransportClient, T
from .request_builder import (
    adrain_and_close,
    build_request,
    compose_url,
    drain_and_close,
)

_default_client: Optional[httpx.Client] = None
# One AsyncClient per event loop; pooled connections are bound to their loop
_default_async_clients: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, httpx.AsyncClient]" = (
    weakref.WeakKeyDictionary()
)
_default_lock = threading.Lock()


def get_default_client() -> httpx.Client:
    """Shared httpx.Client used when a request has no client of its own."""
    global _default_client
    with _default_lock:
        if _default_client is None:
            _default_client = httpx.Client()
        return _default_client


def get_default_async_client() -> httpx.AsyncClient:
    """httpx.AsyncClient shared by AsyncRequests without a client on the running loop.

    Must be called from a coroutine.
    """
    loop = asyncio.get_running_loop()
    with _default_lock:
        for stale in [old for old in _default_async_clients if old.is_closed()]:
            del _default_async_clients[stale]
        client = _default_async_clients.get(loop)
        if client is None:
            client = httpx.AsyncClient()
            _default_async_clients[loop] = client
        return client


class _RequestBuilder:
    """Configuration state shared by Request and AsyncRequest."""

    def __init__(
        self,
        client: Any,
        verb: str,
        base_url: Union[httpx.URL, str, None],
        config: Optional[RequestConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config: ResolvedConfig = resolve_config(config)
        self._logger = logger or logging.getLogger("fetch_request.request")
        self._client = client
        # httpx sends methods upper-cased; keep the property in line with the wire
        self._verb = verb.upper()
        self._base_url = httpx.URL("")
        self._url_error: Optional[RequestConstructionError] = None
        try:
            if base_url is not None:
                self._base_url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            self._url_error = RequestConstructionError(f"invalid base URL {base_url!r}: {exc}")
            self._url_error.__cause__ = exc
        self._params = QueryParams()
        self._headers = httpx.Headers()
        self._body: Optional[BinaryIO] = None
        self._error: Optional[ConfigurationError] = None
        self._executed = False

        for name, value in self._config.default_headers.items():
            self.set_header(name, value)

    @property
    def verb(self) -> str:
        """The HTTP method, upper-cased as it is sent."""
        return self._verb

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def params(self) -> QueryParams:
        """Copy of the accumulated query params."""
        return self._params.copy()

    @property
    def headers(self) -> httpx.Headers:
        """Copy of the accumulated headers."""
        return self._headers.copy()

    @property
    def body(self) -> Optional[BinaryIO]:
        return self._body

    @property
    def error(self) -> Optional[ConfigurationError]:
        """The stored configuration error, if any."""
        return self._error

    def set_param(self, name: str, value: Any):
        """Append a query parameter value. Repeated names are kept."""
        if self._error is not None:
            return self
        self._params.add(name, str(value))
        return self

    def set_header(self, name: str, value: str):
        """Set a header, replacing any value already set under the same name."""
        if self._error is not None:
            return self
        self._headers[name] = value
        return self

    def set_body(self, source: object):
        """Use source as the request body.

        source is a FileBody, BytesBody or StreamBody, or a plain value
        mapped onto one: str/PathLike is a file path, bytes-like is sent as
        is, and an object with read() is streamed without copying.
        """
        if self._error is not None:
            return self
        body_log = self._logger if self._config.log_bodies else None
        try:
            self._body = as_body_source(source).open(body_log)
        except ConfigurationError as exc:
            self._error = exc
        return self

    def url(self) -> httpx.URL:
        """The URL the request will be sent to."""
        if self._url_error is not None:
            raise self._url_error
        return compose_url(self._base_url, self._params)

    def _begin_execute(self) -> None:
        if self._executed:
            raise RuntimeError("Request has already been executed")
        if self._error is not None:
            self._logger.debug(f"Error in request: {self._error}")
            raise self._error
        self._executed = True

    def _trace(self, url: httpx.URL, done: bool, started: float) -> None:
        self._logger.debug(
            f"request method({self._verb}) url({url}) done({done}) "
            f"elapsed({time.monotonic() - started:.3f}s)"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(verb={self._verb!r}, base_url={str(self._base_url)!r})"


class Request(_RequestBuilder):
    """Synchronous chained request builder."""

    def __init__(
        self,
        client: Optional[SyncTransportClient],
        verb: str,
        base_url: Union[httpx.URL, str, None],
        config: Optional[RequestConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(client, verb, base_url, config=config, logger=logger)

    def execute(self, handler: Handler[T]) -> T:
        """Send the request and pass (request, response) to handler.

        The response body is drained (when small) and closed after the
        handler returns or raises. Returns whatever the handler returns.

        Raises:
            ConfigurationError: stored while configuring.
            RequestConstructionError: verb/URL cannot form a request.
            TransportError: the client failed to perform the request.
        """
        started = time.monotonic()
        self._begin_execute()

        client = self._client if self._client is not None else get_default_client()
        url = self.url()
        request = build_request(self._verb, url, self._headers.copy(), self._body)

        try:
            response = client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise TransportError(f"{self._verb} {url} failed: {exc}") from exc

        done = False
        try:
            result = handler(request, response)
            done = True
            return result
        finally:
            drain_and_close(response, self._config.max_drain_bytes, self._logger)
            self._trace(url, done, started)


class AsyncRequest(_RequestBuilder):
    """Asynchronous chained request builder."""

    def __init__(
        self,
        client: Optional[AsyncTransportClient],
        verb: str,
        base_url: Union[httpx.URL, str, None],
        config: Optional[RequestConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(client, verb, base_url, config=config, logger=logger)

    async def execute(self, handler: AsyncHandler[T]) -> T:
        """Send the request and pass (request, response) to handler.

        handler may be a plain function or a coroutine function. Cleanup and
        errors behave as in Request.execute.
        """
        started = time.monotonic()
        self._begin_execute()

        client = self._client if self._client is not None else get_default_async_client()
        url = self.url()
        request = build_request(
            self._verb, url, self._headers.copy(), self._body, async_body=True
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise TransportError(f"{self._verb} {url} failed: {exc}") from exc

        done = False
        try:
            result = handler(request, response)
            if inspect.isawaitable(result):
                result = await result
            done = True
            return result
        finally:
            await adrain_and_close(response, self._config.max_drain_bytes, self._logger)
            self._trace(url, done, started)
