"""
Configuration for fetch_request.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger("fetch_request.config")

# Responses declaring at most this many bytes are drained before closing
DEFAULT_MAX_DRAIN_BYTES = 2 << 10

DEFAULT_HEADERS: Dict[str, str] = {"Accept": "*/*"}

ENV_MAX_DRAIN_BYTES = "FETCH_REQUEST_MAX_DRAIN_BYTES"
ENV_LOG_BODIES = "FETCH_REQUEST_LOG_BODIES"


@dataclass
class RequestConfig:
    """Request builder configuration.

    Fields left as None are filled from the environment, then from defaults,
    by resolve_config().
    """

    max_drain_bytes: Optional[int] = None
    default_headers: Optional[Dict[str, str]] = None
    log_bodies: Optional[bool] = None


@dataclass
class ResolvedConfig:
    """Resolved configuration with all defaults applied."""

    max_drain_bytes: int = DEFAULT_MAX_DRAIN_BYTES
    default_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    log_bodies: bool = True


def _max_drain_bytes_from_env() -> Optional[int]:
    """Read FETCH_REQUEST_MAX_DRAIN_BYTES, if set."""
    raw = os.environ.get(ENV_MAX_DRAIN_BYTES, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_MAX_DRAIN_BYTES} must be an integer, got {raw!r}") from None


def _log_bodies_from_env() -> Optional[bool]:
    """Read FETCH_REQUEST_LOG_BODIES, if set. "0"/"false"/"no" disable."""
    raw = os.environ.get(ENV_LOG_BODIES, "").strip().lower()
    if not raw:
        return None
    return raw not in ("0", "false", "no", "off")


def resolve_config(config: Optional[RequestConfig] = None) -> ResolvedConfig:
    """Resolve config with environment overrides and defaults."""
    config = config or RequestConfig()

    max_drain_bytes = config.max_drain_bytes
    if max_drain_bytes is None:
        max_drain_bytes = _max_drain_bytes_from_env()
    if max_drain_bytes is None:
        max_drain_bytes = DEFAULT_MAX_DRAIN_BYTES
    if max_drain_bytes < 0:
        raise ValueError("max_drain_bytes must be >= 0")

    log_bodies = config.log_bodies
    if log_bodies is None:
        log_bodies = _log_bodies_from_env()
    if log_bodies is None:
        log_bodies = True

    default_headers = (
        dict(config.default_headers)
        if config.default_headers is not None
        else dict(DEFAULT_HEADERS)
    )

    logger.debug(
        f"resolve_config: max_drain_bytes={max_drain_bytes}, "
        f"log_bodies={log_bodies}, default_headers={default_headers}"
    )
    return ResolvedConfig(
        max_drain_bytes=max_drain_bytes,
        default_headers=default_headers,
        log_bodies=log_bodies,
    )
