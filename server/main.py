from __future__ import annotations

import asyncio
import logging
import sys

from server.config import SERVER_CONFIG, load_server_config
from server.core import FrameServer, build_responder
from shared.settings import ConfigError

logger = logging.getLogger(__name__)


async def run_server() -> int:
    try:
        load_server_config()
    except ConfigError as exc:
        logging.basicConfig()
        logger.error("Invalid server configuration: %s", exc)
        return 1
    logging.basicConfig(level=SERVER_CONFIG["log_level"])

    server = FrameServer(
        SERVER_CONFIG["host"],
        SERVER_CONFIG["port"],
        responder=build_responder(SERVER_CONFIG["responder"], SERVER_CONFIG["reply_text"]),
        max_connections=SERVER_CONFIG["max_connections"],
        backlog=SERVER_CONFIG["backlog"],
    )
    try:
        await server.serve_forever()
    finally:
        await server.stop()
    return 0


def main() -> int:
    return asyncio.run(run_server())


if __name__ == "__main__":
    sys.exit(main())
