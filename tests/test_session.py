from __future__ import annotations

import asyncio

import pytest

from client.core import send_and_receive
from server.core import build_responder, echo_reply, fixed_reply, handle_one_exchange
from shared.protocol import (
    MAX_MSG,
    ExchangeContext,
    ExchangeState,
    Message,
    MessageTooLarge,
    ProtocolViolation,
    TransportError,
    UnexpectedEndOfStream,
    encode_frame,
)


def test_server_exchange_replies_with_fixed_body(scripted):
    endpoint = scripted(encode_frame(b"PING"), chunk_size=3)

    ctx = asyncio.run(handle_one_exchange(endpoint, fixed_reply()))

    assert ctx.state is ExchangeState.COMPLETE
    assert ctx.request.body == b"PING"
    assert ctx.response.body == b"Hello world!!"
    assert bytes(endpoint.written) == b"\x0d\x00\x00\x00Hello world!!"
    assert ctx.duration is not None
    # closing belongs to the acceptor
    assert endpoint.close_calls == 0


def test_server_exchange_echo_with_short_writes(scripted):
    endpoint = scripted(encode_frame(b"abc" * 100), write_limit=7)

    ctx = asyncio.run(handle_one_exchange(endpoint, echo_reply))

    assert bytes(endpoint.written) == encode_frame(b"abc" * 100)
    assert ctx.response == ctx.request


def test_server_exchange_fails_on_protocol_violation(scripted):
    endpoint = scripted((MAX_MSG + 1).to_bytes(4, "little"))
    ctx = ExchangeContext(peername=endpoint.peername, role="server")

    with pytest.raises(ProtocolViolation):
        asyncio.run(handle_one_exchange(endpoint, fixed_reply(), ctx))

    assert ctx.state is ExchangeState.FAILED
    assert isinstance(ctx.error, ProtocolViolation)
    assert endpoint.written == b""


def test_server_exchange_rejects_oversized_reply(scripted):
    endpoint = scripted(encode_frame(b"PING"))

    async def too_big(request):
        return b"x" * (MAX_MSG + 1)

    ctx = ExchangeContext(peername=endpoint.peername, role="server")
    with pytest.raises(MessageTooLarge):
        asyncio.run(handle_one_exchange(endpoint, too_big, ctx))

    assert ctx.state is ExchangeState.FAILED
    assert endpoint.send_calls == []


def test_build_responder():
    request = Message.from_text("PING")

    assert asyncio.run(build_responder("echo")(request)) is request
    assert asyncio.run(build_responder("fixed", "ack")(request)).body == b"ack"
    assert asyncio.run(build_responder("fixed")(request)).body == b"Hello world!!"
    with pytest.raises(ValueError):
        build_responder("nope")


def test_client_exchange_round_trip(scripted):
    endpoint = scripted(encode_frame(b"Hello world!!"), chunk_size=1)
    ctx = ExchangeContext(peername=endpoint.peername, role="client")

    reply = asyncio.run(send_and_receive(endpoint, b"PING", ctx))

    assert reply.body == b"Hello world!!"
    assert bytes(endpoint.written) == bytes.fromhex("0400000050494e47")
    assert ctx.state is ExchangeState.COMPLETE


def test_client_rejects_oversized_request_without_io(scripted):
    endpoint = scripted(encode_frame(b"unused"))

    with pytest.raises(MessageTooLarge):
        asyncio.run(send_and_receive(endpoint, b"x" * (MAX_MSG + 1)))

    assert endpoint.send_calls == []
    assert endpoint.recv_calls == []


def test_client_rejects_oversized_response(scripted):
    endpoint = scripted((MAX_MSG + 1).to_bytes(4, "little"))

    with pytest.raises(ProtocolViolation):
        asyncio.run(send_and_receive(endpoint, b"PING"))


def test_client_response_cut_short(scripted):
    endpoint = scripted((10).to_bytes(4, "little") + b"abc")
    ctx = ExchangeContext(peername=endpoint.peername, role="client")

    with pytest.raises(UnexpectedEndOfStream):
        asyncio.run(send_and_receive(endpoint, b"PING", ctx))

    assert ctx.state is ExchangeState.FAILED


def test_client_write_failure_is_transport_error(scripted):
    endpoint = scripted(write_error=ConnectionResetError("reset"))

    with pytest.raises(TransportError):
        asyncio.run(send_and_receive(endpoint, b"PING"))


def test_exchange_states_are_terminal():
    ctx = ExchangeContext(peername="p", role="client")
    ctx.advance(ExchangeState.SENDING)
    ctx.advance(ExchangeState.AWAITING_PEER)
    ctx.advance(ExchangeState.COMPLETE)

    with pytest.raises(RuntimeError):
        ctx.advance(ExchangeState.SENDING)
    ctx.fail(ValueError("late"))
    assert ctx.state is ExchangeState.COMPLETE
    assert ctx.error is None
