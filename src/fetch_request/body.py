"""
Request body sources.

A body is given as one of three explicit variants:

- FileBody: path to a file, read fully when the body is resolved
- BytesBody: raw bytes, wrapped in a BytesIO
- StreamBody: an existing readable binary stream, used as-is

as_body_source() maps plain Python values onto these variants so callers can
keep writing ``set_body("payload.json")`` or ``set_body(b"...")``.
"""
import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger("fetch_request.body")

HEXDUMP_WIDTH = 16


@dataclass(frozen=True)
class FileBody:
    """Body read from a file on disk."""

    path: Union[str, "os.PathLike[str]"]

    def open(self, log: Optional[logging.Logger] = logger) -> BinaryIO:
        try:
            with open(self.path, "rb") as fh:
                data = fh.read()
        except (OSError, ValueError) as exc:
            # ValueError: paths rejected before any I/O, e.g. embedded NUL
            raise ConfigurationError(f"failed to read body file {os.fspath(self.path)!r}: {exc}") from exc
        log_body(log, "Request Body", data)
        return io.BytesIO(data)


@dataclass(frozen=True)
class BytesBody:
    """Body given directly as bytes."""

    data: bytes

    def open(self, log: Optional[logging.Logger] = logger) -> BinaryIO:
        log_body(log, "Request Body", self.data)
        return io.BytesIO(self.data)


@dataclass(frozen=True)
class StreamBody:
    """Body taken from an already open readable stream (not copied)."""

    stream: BinaryIO

    def open(self, log: Optional[logging.Logger] = logger) -> BinaryIO:
        return self.stream


BodySource = Union[FileBody, BytesBody, StreamBody]


def as_body_source(obj: object) -> BodySource:
    """Map a plain value onto a BodySource variant.

    Raises:
        ConfigurationError: obj is none of the accepted shapes.
    """
    if isinstance(obj, (FileBody, BytesBody, StreamBody)):
        return obj
    if isinstance(obj, (str, os.PathLike)):
        return FileBody(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BytesBody(bytes(obj))
    if callable(getattr(obj, "read", None)):
        return StreamBody(obj)
    raise ConfigurationError(f"unknown type used for body: {obj!r}")


def _is_printable(data: bytes) -> bool:
    # Anything below newline (NUL, control chars) is treated as binary
    return not any(b < 0x0A for b in data)


def hex_dump(data: bytes) -> str:
    """Render data like ``hexdump -C``: offset, hex bytes, ASCII column."""
    lines = []
    for offset in range(0, len(data), HEXDUMP_WIDTH):
        chunk = data[offset:offset + HEXDUMP_WIDTH]
        left = " ".join(f"{b:02x}" for b in chunk[:8])
        right = " ".join(f"{b:02x}" for b in chunk[8:])
        hex_part = f"{left:<23}  {right:<23}"
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        lines.append(f"{offset:08x}  {hex_part}  |{text}|")
    return "\n".join(lines) + ("\n" if lines else "")


def log_body(log: Optional[logging.Logger], prefix: str, body: bytes) -> None:
    """Log a body at DEBUG, as text when printable and as a hex dump otherwise.

    Nothing is formatted unless DEBUG is enabled on log. A None log disables
    the dump entirely.
    """
    if log is None or not log.isEnabledFor(logging.DEBUG):
        return
    if _is_printable(body):
        log.debug("%s: %s", prefix, body.decode("utf-8", errors="replace"))
    else:
        log.debug("%s:\n%s", prefix, hex_dump(body))
