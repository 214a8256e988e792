"""
Request building and response cleanup utilities for fetch_request.
"""
import asyncio
import io
import logging
import re
from collections.abc import Iterable
from typing import AsyncIterator, BinaryIO, Iterator, Optional, Union

import httpx

from ..errors import RequestConstructionError
from ..params import QueryParams

logger = logging.getLogger("fetch_request.request_builder")

# RFC 7230 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

STREAM_CHUNK_SIZE = 64 * 1024

_CLEANUP_ERRORS = (httpx.HTTPError, httpx.StreamError, OSError)


def compose_url(base_url: httpx.URL, params: QueryParams) -> httpx.URL:
    """Build the final URL from the base URL and accumulated params.

    With no params the base URL is returned untouched, query included. Any
    param replaces the base query string entirely.
    """
    if not params:
        return base_url
    return base_url.copy_with(query=params.encode().encode("ascii"))


def validate_verb(verb: str) -> None:
    """Reject verbs that are not valid HTTP method tokens."""
    if not verb or not _TOKEN_RE.match(verb):
        raise RequestConstructionError(f"invalid method {verb!r}")


def _iter_stream(stream: BinaryIO) -> Iterator[bytes]:
    while True:
        chunk = stream.read(STREAM_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


async def _aiter_stream(stream: BinaryIO) -> AsyncIterator[bytes]:
    # In-memory buffers are read inline; anything else may block on I/O
    in_memory = isinstance(stream, io.BytesIO)
    while True:
        if in_memory:
            chunk = stream.read(STREAM_CHUNK_SIZE)
        else:
            chunk = await asyncio.to_thread(stream.read, STREAM_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


def build_request(
    verb: str,
    url: httpx.URL,
    headers: httpx.Headers,
    body: Optional[BinaryIO] = None,
    async_body: bool = False,
) -> httpx.Request:
    """Construct the transport-level request.

    Headers are used as given; nothing from a client's defaults is merged in.
    Sync requests pass iterable streams straight through to httpx, async
    requests get an async chunk iterator over the stream.

    Raises:
        RequestConstructionError: invalid verb, non-absolute or malformed URL.
    """
    validate_verb(verb)
    if not url.is_absolute_url:
        raise RequestConstructionError(f"unsupported URL {str(url)!r}: scheme and host are required")

    content: Union[BinaryIO, Iterable[bytes], AsyncIterator[bytes], None] = None
    if body is not None:
        if async_body:
            content = _aiter_stream(body)
        elif isinstance(body, Iterable):
            content = body
        else:
            content = _iter_stream(body)

    try:
        return httpx.Request(verb, url, headers=headers, content=content)
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise RequestConstructionError(f"failed to build {verb} {url}: {exc}") from exc


def declared_content_length(response: httpx.Response) -> Optional[int]:
    """Content-Length from the response headers, None when absent or invalid."""
    raw = response.headers.get("content-length")
    if raw is None:
        return None
    try:
        length = int(raw)
    except ValueError:
        return None
    return length if length >= 0 else None


def _should_drain(response: httpx.Response, max_drain_bytes: int) -> bool:
    length = declared_content_length(response)
    if length is None or length > max_drain_bytes:
        return False
    return not response.is_stream_consumed and not response.is_closed


def drain_and_close(
    response: httpx.Response,
    max_drain_bytes: int,
    log: logging.Logger = logger,
) -> None:
    """Read off a small remaining body so the connection can be reused, then close.

    Draining is skipped when the declared length is unknown or exceeds
    max_drain_bytes. Errors are logged and suppressed.
    """
    try:
        if _should_drain(response, max_drain_bytes):
            drained = 0
            for chunk in response.iter_raw():
                drained += len(chunk)
                if drained >= max_drain_bytes:
                    break
            log.debug(f"drain_and_close: drained {drained} bytes")
    except _CLEANUP_ERRORS as exc:
        log.debug(f"drain_and_close: drain failed: {exc!r}")
    finally:
        try:
            response.close()
        except _CLEANUP_ERRORS as exc:
            log.debug(f"drain_and_close: close failed: {exc!r}")


async def adrain_and_close(
    response: httpx.Response,
    max_drain_bytes: int,
    log: logging.Logger = logger,
) -> None:
    """Async counterpart of drain_and_close."""
    try:
        if _should_drain(response, max_drain_bytes):
            drained = 0
            async for chunk in response.aiter_raw():
                drained += len(chunk)
                if drained >= max_drain_bytes:
                    break
            log.debug(f"adrain_and_close: drained {drained} bytes")
    except _CLEANUP_ERRORS as exc:
        log.debug(f"adrain_and_close: drain failed: {exc!r}")
    finally:
        try:
            await response.aclose()
        except _CLEANUP_ERRORS as exc:
            log.debug(f"adrain_and_close: close failed: {exc!r}")
