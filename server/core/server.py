from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from shared.protocol import (
    ExchangeContext,
    MessageTooLarge,
    ProtocolViolation,
    StreamEndpoint,
    TransportError,
    UnexpectedEndOfStream,
)

from .session import Responder, fixed_reply, handle_one_exchange

logger = logging.getLogger(__name__)

ExchangeCallback = Callable[[ExchangeContext], Awaitable[None]]


class FrameServer:
    """Accepts TCP connections and serves one framed exchange per connection."""

    def __init__(
        self,
        host: str,
        port: int,
        responder: Optional[Responder] = None,
        max_connections: int = 1,
        backlog: int = 128,
        on_exchange: Optional[ExchangeCallback] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.responder = responder or fixed_reply()
        self.backlog = backlog
        self.on_exchange = on_exchange
        self._slots = asyncio.Semaphore(max_connections)
        self._server: Optional[asyncio.AbstractServer] = None

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle_client, self.host, self.port, backlog=self.backlog)
        # Port 0 binds an ephemeral port; report the real one.
        self.port = self._server.sockets[0].getsockname()[1]
        logger.info("Server listening on %s:%s", self.host, self.port)

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
            logger.info("Server on %s:%s stopped", self.host, self.port)

    async def serve_forever(self) -> None:
        if not self._server:
            await self.start()
        await self._server.serve_forever()

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        endpoint = StreamEndpoint(reader, writer)
        ctx = ExchangeContext(peername=endpoint.peername, role="server")
        async with self._slots:
            logger.info("[%s] Accepted connection from %s", ctx.exchange_id, ctx.peername)
            try:
                await handle_one_exchange(endpoint, self.responder, ctx)
            except ProtocolViolation as exc:
                logger.warning("[%s] Protocol violation from %s, closing: %s", ctx.exchange_id, ctx.peername, exc)
            except UnexpectedEndOfStream as exc:
                logger.info("[%s] Client %s disconnected mid-frame: %s", ctx.exchange_id, ctx.peername, exc)
            except TransportError as exc:
                logger.info("[%s] Client %s connection error: %s", ctx.exchange_id, ctx.peername, exc)
            except MessageTooLarge as exc:
                logger.error("[%s] Responder produced an oversized reply: %s", ctx.exchange_id, exc)
            except Exception as exc:
                logger.exception("[%s] Unhandled error: %s", ctx.exchange_id, exc)
            finally:
                await endpoint.close()
                logger.debug("[%s] Connection %s closed (%s)", ctx.exchange_id, ctx.peername, ctx.state.value)
                if self.on_exchange:
                    try:
                        await self.on_exchange(ctx)
                    except Exception as e:
                        logger.error("[%s] Error in exchange callback: %s", ctx.exchange_id, e)
