"""
Chained HTTP request builder for Python.

Accumulates query params, headers and a body, sends the request through an
httpx client and hands the raw response to a caller-supplied handler. The
response body is always drained (when small) and closed afterwards so the
connection can be reused.
"""
from .types import (
    HttpMethod,
    Handler,
    AsyncHandler,
    SyncTransportClient,
    AsyncTransportClient,
)
from .errors import (
    FetchRequestError,
    ConfigurationError,
    RequestConstructionError,
    TransportError,
)
from .config import RequestConfig, ResolvedConfig, resolve_config
from .params import QueryParams
from .body import (
    BodySource,
    FileBody,
    BytesBody,
    StreamBody,
    as_body_source,
    hex_dump,
    log_body,
)
from .core.request import (
    Request,
    AsyncRequest,
    get_default_client,
    get_default_async_client,
)
from .core.request_builder import compose_url
from .factory import (
    create_request,
    create_async_request,
    get,
    post,
    put,
    patch,
    delete,
)

__all__ = [
    # Types
    "HttpMethod",
    "Handler",
    "AsyncHandler",
    "SyncTransportClient",
    "AsyncTransportClient",
    # Errors
    "FetchRequestError",
    "ConfigurationError",
    "RequestConstructionError",
    "TransportError",
    # Config
    "RequestConfig",
    "ResolvedConfig",
    "resolve_config",
    # Params
    "QueryParams",
    # Body
    "BodySource",
    "FileBody",
    "BytesBody",
    "StreamBody",
    "as_body_source",
    "hex_dump",
    "log_body",
    # Request
    "Request",
    "AsyncRequest",
    "get_default_client",
    "get_default_async_client",
    "compose_url",
    # Factory
    "create_request",
    "create_async_request",
    "get",
    "post",
    "put",
    "patch",
    "delete",
]

__version__ = "0.1.0"
