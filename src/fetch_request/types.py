"""
Type definitions for fetch_request.
"""
from typing import Any, Awaitable, Callable, Literal, Protocol, TypeVar, Union

import httpx


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

T = TypeVar("T")

# Handler invoked with the sent request and the live response
Handler = Callable[[httpx.Request, httpx.Response], T]
AsyncHandler = Callable[[httpx.Request, httpx.Response], Union[T, Awaitable[T]]]


class SyncTransportClient(Protocol):
    """Anything able to perform a request synchronously (e.g. httpx.Client)."""

    def send(self, request: httpx.Request, *, stream: bool = False, **kwargs: Any) -> httpx.Response:
        """Perform the request."""
        ...


class AsyncTransportClient(Protocol):
    """Anything able to perform a request asynchronously (e.g. httpx.AsyncClient)."""

    async def send(self, request: httpx.Request, *, stream: bool = False, **kwargs: Any) -> httpx.Response:
        """Perform the request."""
        ...
