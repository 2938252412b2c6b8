from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Union

from client.config import CLIENT_CONFIG
from shared.protocol import ExchangeContext, Message, StreamEndpoint, TransportError

from .session import send_and_receive

logger = logging.getLogger(__name__)


class FrameClient:
    """TCP client that runs one framed request/response exchange per connection."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or CLIENT_CONFIG
        self.host: str = self.config["server_host"]
        self.port: int = int(self.config["server_port"])
        self.backoff: float = float(self.config["reconnect_backoff"])
        self.max_backoff: float = float(self.config["max_reconnect_backoff"])
        self.max_retries: int = int(self.config["max_reconnect_retries"])
        self.timeout: float = float(self.config["request_timeout"])

    async def connect(self) -> StreamEndpoint:
        retries = 0
        delay = self.backoff
        while True:
            try:
                reader, writer = await asyncio.open_connection(self.host, self.port)
            except OSError as exc:
                retries += 1
                logger.warning("Connect attempt %s to %s:%s failed: %s", retries, self.host, self.port, exc)
                if retries > self.max_retries:
                    raise TransportError(
                        f"exceeded {self.max_retries} reconnect attempts: {exc}",
                        operation=f"connecting to {self.host}:{self.port}",
                    ) from exc
                await asyncio.sleep(delay)
                delay = min(delay * 2, self.max_backoff)
                continue
            logger.info("Connected to %s:%s", self.host, self.port)
            return StreamEndpoint(reader, writer)

    async def query(self, request: Union[Message, bytes, str], ctx: Optional[ExchangeContext] = None) -> Message:
        """Connect, exchange exactly one request/response, and close."""
        if isinstance(request, str):
            request = Message.from_text(request)
        elif not isinstance(request, Message):
            request = Message.from_bytes(request)

        endpoint = await self.connect()
        ctx = ctx or ExchangeContext(peername=endpoint.peername, role="client")
        try:
            exchange = send_and_receive(endpoint, request, ctx)
            if self.timeout > 0:
                try:
                    return await asyncio.wait_for(exchange, self.timeout)
                except asyncio.TimeoutError as exc:
                    # wait_for cancels the exchange, which never reaches its own failure path
                    err = TransportError(f"no reply within {self.timeout}s", operation="awaiting reply")
                    ctx.fail(err)
                    raise err from exc
            return await exchange
        finally:
            await endpoint.close()
            logger.info("Connection closed")
