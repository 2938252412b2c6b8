from __future__ import annotations

import logging
from typing import Optional, Union

from shared.protocol import (
    ExchangeContext,
    ExchangeState,
    Message,
    StreamEndpoint,
    decode_frame,
    encode_frame,
    write_exact,
)

logger = logging.getLogger(__name__)


async def send_and_receive(
    endpoint: StreamEndpoint,
    request: Union[Message, bytes],
    ctx: Optional[ExchangeContext] = None,
) -> Message:
    """
    Send one request frame and wait for the single response frame.

    An oversized request raises MessageTooLarge before anything touches the
    endpoint. Every other failure marks ctx failed and propagates.
    """
    if not isinstance(request, Message):
        request = Message.from_bytes(request)
    ctx = ctx or ExchangeContext(peername=endpoint.peername, role="client")
    ctx.request = request
    try:
        ctx.advance(ExchangeState.SENDING)
        await write_exact(endpoint, encode_frame(request.body), what="request frame")

        ctx.advance(ExchangeState.AWAITING_PEER)
        ctx.response = Message(body=await decode_frame(endpoint))
        ctx.advance(ExchangeState.COMPLETE)
    except Exception as exc:
        ctx.fail(exc)
        raise
    logger.info("[%s] server says: %s", ctx.exchange_id, ctx.response.text)
    return ctx.response
