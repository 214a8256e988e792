"""
Core modules for fetch_request.
"""
from .request import (
    AsyncRequest,
    Request,
    get_default_async_client,
    get_default_client,
)
from .request_builder import (
    adrain_and_close,
    build_request,
    compose_url,
    declared_content_length,
    drain_and_close,
    validate_verb,
)

__all__ = [
    "AsyncRequest",
    "Request",
    "get_default_async_client",
    "get_default_client",
    "adrain_and_close",
    "build_request",
    "compose_url",
    "declared_content_length",
    "drain_and_close",
    "validate_verb",
]
