"""
Exception types for fetch_request.
"""


class FetchRequestError(Exception):
    """Base class for all fetch_request errors."""


class ConfigurationError(FetchRequestError):
    """Invalid builder configuration (bad body source, unreadable body file).

    Captured while the request is being configured and raised only when the
    request is executed.
    """


class RequestConstructionError(FetchRequestError):
    """The verb/URL combination could not be turned into a request."""


class TransportError(FetchRequestError):
    """The transport client failed to perform the request."""
