"""
Shared protocol package that centralizes wire constants, errors, framed stream I/O
and the frame codec for both client and server.
"""

from .constants import DEFAULT_REPLY, DEFAULT_REQUEST, ENCODING, HEADER_SIZE, MAX_MSG
from .errors import (
    ErrorCode,
    FramingError,
    MessageTooLarge,
    ProtocolViolation,
    TransportError,
    UnexpectedEndOfStream,
)
from .exchange import ExchangeContext, ExchangeState
from .framing import decode_frame, encode_frame, parse_header
from .messages import Message
from .stream import StreamEndpoint, read_exact, write_exact

__all__ = [
    "DEFAULT_REPLY",
    "DEFAULT_REQUEST",
    "ENCODING",
    "HEADER_SIZE",
    "MAX_MSG",
    "ErrorCode",
    "FramingError",
    "MessageTooLarge",
    "ProtocolViolation",
    "TransportError",
    "UnexpectedEndOfStream",
    "ExchangeContext",
    "ExchangeState",
    "decode_frame",
    "encode_frame",
    "parse_header",
    "Message",
    "StreamEndpoint",
    "read_exact",
    "write_exact",
]
