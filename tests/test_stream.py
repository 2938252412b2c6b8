from __future__ import annotations

import asyncio

import pytest

from shared.protocol import ErrorCode, TransportError, UnexpectedEndOfStream, read_exact, write_exact


def test_read_exact_reassembles_single_byte_chunks(scripted):
    endpoint = scripted(b"hello world", chunk_size=1)

    data = asyncio.run(read_exact(endpoint, 11))

    assert data == b"hello world"
    assert len(endpoint.recv_calls) == 11
    assert endpoint.recv_calls[0] == 11
    assert endpoint.recv_calls[-1] == 1


def test_read_exact_leaves_following_bytes_unread(scripted):
    endpoint = scripted(b"abcdef", chunk_size=4)

    assert asyncio.run(read_exact(endpoint, 3)) == b"abc"
    assert endpoint.remaining == b"def"


def test_read_exact_zero_bytes_does_not_read(scripted):
    endpoint = scripted(b"")

    assert asyncio.run(read_exact(endpoint, 0)) == b""
    assert endpoint.recv_calls == []


def test_read_exact_rejects_negative_count(scripted):
    with pytest.raises(ValueError):
        asyncio.run(read_exact(scripted(b"x"), -1))


def test_read_exact_early_eof(scripted):
    endpoint = scripted(b"abc", chunk_size=2)

    with pytest.raises(UnexpectedEndOfStream) as excinfo:
        asyncio.run(read_exact(endpoint, 5, what="frame body"))

    assert excinfo.value.code is ErrorCode.UNEXPECTED_EOF
    assert "3 of 5" in str(excinfo.value)
    assert excinfo.value.operation == "reading frame body"


def test_read_exact_wraps_os_errors(scripted):
    cause = ConnectionResetError("reset by peer")
    endpoint = scripted(read_error=cause)

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(read_exact(endpoint, 4))

    assert not isinstance(excinfo.value, UnexpectedEndOfStream)
    assert excinfo.value.__cause__ is cause


def test_write_exact_handles_short_writes(scripted):
    endpoint = scripted(write_limit=3)

    asyncio.run(write_exact(endpoint, b"0123456789"))

    assert bytes(endpoint.written) == b"0123456789"
    assert endpoint.send_calls == [10, 7, 4, 1]


def test_write_exact_zero_write_is_fatal(scripted):
    endpoint = scripted(write_limit=0)

    with pytest.raises(TransportError, match="write returned 0"):
        asyncio.run(write_exact(endpoint, b"data"))


def test_write_exact_wraps_os_errors(scripted):
    cause = BrokenPipeError("broken pipe")
    endpoint = scripted(write_error=cause)

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(write_exact(endpoint, b"data", what="reply frame"))

    assert excinfo.value.__cause__ is cause
    assert excinfo.value.operation == "writing reply frame"


def test_write_exact_empty_buffer_sends_nothing(scripted):
    endpoint = scripted()

    asyncio.run(write_exact(endpoint, b""))

    assert endpoint.send_calls == []
