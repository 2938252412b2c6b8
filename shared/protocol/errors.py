from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Failure kinds surfaced by the framing layer."""

    TRANSPORT_ERROR = 1001
    UNEXPECTED_EOF = 1002
    MESSAGE_TOO_LONG = 1003
    MESSAGE_TOO_LARGE = 1004


class FramingError(Exception):
    """Structured framing exception carrying code + operation + message."""

    code: ErrorCode = ErrorCode.TRANSPORT_ERROR

    def __init__(self, message: str = "", operation: Optional[str] = None, code: Optional[ErrorCode] = None) -> None:
        if code is not None:
            self.code = code
        self.message = message
        self.operation = operation
        where = f" while {operation}" if operation else ""
        super().__init__(f"{self.code.name} ({int(self.code)}){where}: {message}")


class TransportError(FramingError):
    """Underlying stream read/write failed."""

    code = ErrorCode.TRANSPORT_ERROR


class UnexpectedEndOfStream(TransportError):
    """Peer closed the stream before a started frame was complete."""

    code = ErrorCode.UNEXPECTED_EOF


class ProtocolViolation(FramingError):
    """Peer declared a body longer than MAX_MSG; the stream cannot be resynchronised."""

    code = ErrorCode.MESSAGE_TOO_LONG


class MessageTooLarge(FramingError):
    """A locally built message exceeds MAX_MSG. Raised before any I/O."""

    code = ErrorCode.MESSAGE_TOO_LARGE


__all__ = [
    "ErrorCode",
    "FramingError",
    "TransportError",
    "UnexpectedEndOfStream",
    "ProtocolViolation",
    "MessageTooLarge",
]
