"""Wire constants shared by client and server."""

MAX_MSG = 4096  # upper bound for a frame body, in bytes
HEADER_SIZE = 4  # uint32 body length
BYTE_ORDER = "little"
ENCODING = "utf-8"  # display only, bodies are opaque bytes

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_REQUEST = b"PING"
DEFAULT_REPLY = b"Hello world!!"

__all__ = [
    "MAX_MSG",
    "HEADER_SIZE",
    "BYTE_ORDER",
    "ENCODING",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_REQUEST",
    "DEFAULT_REPLY",
]
