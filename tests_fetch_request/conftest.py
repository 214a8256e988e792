"""
Shared fixtures for fetch_request tests.
"""
from typing import Callable, List, Optional

import httpx
import pytest


class TrackingStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body stream that records how much was read and whether it was closed."""

    def __init__(self, chunks: List[bytes]) -> None:
        self.chunks = chunks
        self.bytes_read = 0
        self.closed = False

    def __iter__(self):
        for chunk in self.chunks:
            self.bytes_read += len(chunk)
            yield chunk

    async def __aiter__(self):
        for chunk in self.chunks:
            self.bytes_read += len(chunk)
            yield chunk

    def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.closed = True


class RecordingTransport(httpx.BaseTransport):
    """Mock sync transport that records requests and their bodies."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"ok",
        headers: Optional[dict] = None,
        stream: Optional[TrackingStream] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers
        self.stream = stream
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Record the request and return the canned response."""
        self.requests.append(request)
        self.bodies.append(request.read())
        if self.stream is not None:
            return httpx.Response(self.status_code, headers=self.headers, stream=self.stream)
        return httpx.Response(self.status_code, headers=self.headers, content=self.content)


class RecordingAsyncTransport(httpx.AsyncBaseTransport):
    """Mock async transport that records requests and their bodies."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"ok",
        headers: Optional[dict] = None,
        stream: Optional[TrackingStream] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers
        self.stream = stream
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Record the request and return the canned response."""
        self.requests.append(request)
        self.bodies.append(await request.aread())
        if self.stream is not None:
            return httpx.Response(self.status_code, headers=self.headers, stream=self.stream)
        return httpx.Response(self.status_code, headers=self.headers, content=self.content)


class ErrorMockSyncTransport(httpx.BaseTransport):
    """Mock sync transport that raises errors."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Raise the configured error."""
        self.calls += 1
        raise self.error


class ErrorMockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock async transport that raises errors."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Raise the configured error."""
        self.calls += 1
        raise self.error


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Sync transport answering 200 "ok"."""
    return RecordingTransport()


@pytest.fixture
def recording_client(recording_transport):
    """httpx.Client backed by recording_transport."""
    with httpx.Client(transport=recording_transport) as client:
        yield client


@pytest.fixture
def recording_async_transport() -> RecordingAsyncTransport:
    """Async transport answering 200 "ok"."""
    return RecordingAsyncTransport()


@pytest.fixture
async def recording_async_client(recording_async_transport):
    """httpx.AsyncClient backed by recording_async_transport."""
    async with httpx.AsyncClient(transport=recording_async_transport) as client:
        yield client


@pytest.fixture
def body_file(tmp_path):
    """A small JSON file usable as a request body."""
    path = tmp_path / "body.json"
    path.write_bytes(b'{"name": "test"}')
    return path


@pytest.fixture
def status_handler() -> Callable[[httpx.Request, httpx.Response], int]:
    """Handler returning the response status code."""
    return lambda request, response: response.status_code
