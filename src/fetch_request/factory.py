"""
Factory functions for creating request builders.
"""
import logging
from typing import Optional, Union

import httpx

from .config import RequestConfig
from .core.request import AsyncRequest, Request
from .types import AsyncTransportClient, HttpMethod, SyncTransportClient


def create_request(
    verb: Union[HttpMethod, str],
    base_url: Union[httpx.URL, str],
    client: Optional[SyncTransportClient] = None,
    config: Optional[RequestConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Request:
    """
    Create a synchronous request builder.

    Args:
        verb: HTTP method, upper-cased before sending
        base_url: Absolute URL; its query string is kept unless params are set
        client: Transport client. None uses the shared default httpx.Client.
        config: Optional builder configuration
        logger: Diagnostic logger. Defaults to "fetch_request.request".

    Example:
        with httpx.Client() as client:
            status = (
                create_request("GET", "https://api.example.com/items", client)
                .set_param("page", 2)
                .execute(lambda req, resp: resp.status_code)
            )
    """
    return Request(client, verb, base_url, config=config, logger=logger)


def create_async_request(
    verb: Union[HttpMethod, str],
    base_url: Union[httpx.URL, str],
    client: Optional[AsyncTransportClient] = None,
    config: Optional[RequestConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> AsyncRequest:
    """Create an asynchronous request builder. See create_request."""
    return AsyncRequest(client, verb, base_url, config=config, logger=logger)


def get(base_url: Union[httpx.URL, str], client: Optional[SyncTransportClient] = None, **kwargs) -> Request:
    """GET request builder."""
    return create_request("GET", base_url, client, **kwargs)


def post(base_url: Union[httpx.URL, str], client: Optional[SyncTransportClient] = None, **kwargs) -> Request:
    """POST request builder."""
    return create_request("POST", base_url, client, **kwargs)


def put(base_url: Union[httpx.URL, str], client: Optional[SyncTransportClient] = None, **kwargs) -> Request:
    """PUT request builder."""
    return create_request("PUT", base_url, client, **kwargs)


def patch(base_url: Union[httpx.URL, str], client: Optional[SyncTransportClient] = None, **kwargs) -> Request:
    """PATCH request builder."""
    return create_request("PATCH", base_url, client, **kwargs)


def delete(base_url: Union[httpx.URL, str], client: Optional[SyncTransportClient] = None, **kwargs) -> Request:
    """DELETE request builder."""
    return create_request("DELETE", base_url, client, **kwargs)
