from __future__ import annotations

import asyncio
import logging
from typing import Union

from .errors import TransportError, UnexpectedEndOfStream

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class StreamEndpoint:
    """One end of a connected TCP stream, owned by a single exchange."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.reader = reader
        self.writer = writer
        self.peername = str(writer.get_extra_info("peername"))
        self._closed = False

    async def recv(self, n: int) -> bytes:
        """Read up to n bytes. Returns b"" once the peer has closed its side."""
        return await self.reader.read(n)

    async def send(self, data: BytesLike) -> int:
        """Queue data on the transport and wait for it to drain."""
        self.writer.write(data)
        await self.writer.drain()
        return len(data)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as exc:
            logger.debug("Error during writer cleanup for %s: %s", self.peername, exc)


async def read_exact(endpoint: StreamEndpoint, n: int, what: str = "data") -> bytes:
    """
    Read exactly n bytes from the endpoint.

    Short reads are normal and simply re-issued at the next offset. An empty
    read before n bytes have arrived means the peer went away mid-frame.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    buf = bytearray(n)
    view = memoryview(buf)
    offset = 0
    operation = f"reading {what}"
    while offset < n:
        try:
            chunk = await endpoint.recv(n - offset)
        except OSError as exc:
            raise TransportError(f"read failed: {exc}", operation=operation) from exc
        if not chunk:
            raise UnexpectedEndOfStream(f"peer closed after {offset} of {n} bytes", operation=operation)
        view[offset : offset + len(chunk)] = chunk
        offset += len(chunk)
    return bytes(buf)


async def write_exact(endpoint: StreamEndpoint, data: BytesLike, what: str = "data") -> None:
    """Write every byte of data, re-issuing sends after partial writes."""
    view = memoryview(data)
    total = len(view)
    offset = 0
    operation = f"writing {what}"
    while offset < total:
        try:
            sent = await endpoint.send(view[offset:])
        except OSError as exc:
            raise TransportError(f"write failed: {exc}", operation=operation) from exc
        if sent == 0:
            raise TransportError(f"write returned 0 with {total - offset} bytes left", operation=operation)
        offset += sent


__all__ = ["StreamEndpoint", "read_exact", "write_exact"]
