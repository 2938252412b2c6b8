from __future__ import annotations

from typing import List, Optional

import pytest


class ScriptedEndpoint:
    """In-memory stand-in for a stream endpoint with controllable delivery."""

    def __init__(
        self,
        incoming: bytes = b"",
        chunk_size: Optional[int] = None,
        write_limit: Optional[int] = None,
        read_error: Optional[Exception] = None,
        write_error: Optional[Exception] = None,
    ) -> None:
        self.peername = "scripted-peer"
        self._incoming = bytearray(incoming)
        self.chunk_size = chunk_size
        self.write_limit = write_limit
        self.read_error = read_error
        self.write_error = write_error
        self.written = bytearray()
        self.recv_calls: List[int] = []
        self.send_calls: List[int] = []
        self.close_calls = 0

    @property
    def remaining(self) -> bytes:
        return bytes(self._incoming)

    async def recv(self, n: int) -> bytes:
        self.recv_calls.append(n)
        if self.read_error is not None:
            raise self.read_error
        size = min(n, len(self._incoming), self.chunk_size or n)
        data = bytes(self._incoming[:size])
        del self._incoming[:size]
        return data

    async def send(self, data) -> int:
        self.send_calls.append(len(data))
        if self.write_error is not None:
            raise self.write_error
        size = len(data) if self.write_limit is None else min(len(data), self.write_limit)
        self.written.extend(bytes(data[:size]))
        return size

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def scripted():
    return ScriptedEndpoint
