from __future__ import annotations

import logging

from shared.utils import hex_preview

from .constants import BYTE_ORDER, HEADER_SIZE, MAX_MSG
from .errors import MessageTooLarge, ProtocolViolation
from .stream import BytesLike, StreamEndpoint, read_exact

logger = logging.getLogger(__name__)


def encode_frame(body: BytesLike) -> bytes:
    """
    Encode a message body as a frame: 4 bytes little-endian len + body.
    """
    if len(body) > MAX_MSG:
        raise MessageTooLarge(f"{len(body)} > {MAX_MSG} bytes", operation="encoding frame")
    return len(body).to_bytes(HEADER_SIZE, BYTE_ORDER) + bytes(body)


def parse_header(header: bytes) -> int:
    """Decode the length prefix and enforce the MAX_MSG bound."""
    if len(header) != HEADER_SIZE:
        raise ValueError(f"frame header must be {HEADER_SIZE} bytes, got {len(header)}")
    length = int.from_bytes(header, BYTE_ORDER)
    if length > MAX_MSG:
        raise ProtocolViolation(f"message too long: {length} > {MAX_MSG}", operation="decoding frame header")
    return length


async def decode_frame(endpoint: StreamEndpoint) -> bytes:
    """Read a single frame from the endpoint and return its body."""
    header = await read_exact(endpoint, HEADER_SIZE, what="frame header")
    length = parse_header(header)
    if not length:
        return b""
    body = await read_exact(endpoint, length, what=f"frame body ({length} bytes)")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Decoded frame from %s: %s", endpoint.peername, hex_preview(header + body))
    return body


__all__ = ["encode_frame", "decode_frame", "parse_header"]
