from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Optional, Union

from shared.protocol import (
    DEFAULT_REPLY,
    ExchangeContext,
    ExchangeState,
    Message,
    StreamEndpoint,
    decode_frame,
    encode_frame,
    write_exact,
)

logger = logging.getLogger(__name__)

Responder = Callable[[Message], Awaitable[Union[Message, bytes]]]


def fixed_reply(body: bytes = DEFAULT_REPLY) -> Responder:
    """Responder that acknowledges every request with the same body."""
    reply = Message.from_bytes(body)

    async def respond(request: Message) -> Message:
        return reply

    return respond


async def echo_reply(request: Message) -> Message:
    return request


def build_responder(name: str, reply_text: str = "") -> Responder:
    if name == "echo":
        return echo_reply
    if name == "fixed":
        return fixed_reply(Message.from_text(reply_text).body if reply_text else DEFAULT_REPLY)
    raise ValueError(f"Unknown responder: {name}")


async def handle_one_exchange(
    endpoint: StreamEndpoint,
    responder: Responder,
    ctx: Optional[ExchangeContext] = None,
) -> ExchangeContext:
    """
    Serve exactly one request/response exchange on an accepted endpoint.

    Errors mark the context failed and propagate. Closing the endpoint is left
    to the caller, which owns it.
    """
    ctx = ctx or ExchangeContext(peername=endpoint.peername, role="server")
    try:
        ctx.advance(ExchangeState.AWAITING_PEER)
        ctx.request = Message(body=await decode_frame(endpoint))
        logger.info("[%s] client says: %s", ctx.exchange_id, ctx.request.text)

        reply = await responder(ctx.request)
        if not isinstance(reply, Message):
            reply = Message.from_bytes(reply)

        ctx.advance(ExchangeState.SENDING)
        await write_exact(endpoint, encode_frame(reply.body), what="reply frame")
        ctx.response = reply
        ctx.advance(ExchangeState.COMPLETE)
    except Exception as exc:
        ctx.fail(exc)
        raise
    return ctx
