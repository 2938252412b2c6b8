from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from client.config import CLIENT_CONFIG, load_config
from client.core import FrameClient
from shared.protocol import FramingError
from shared.settings import ConfigError

logger = logging.getLogger(__name__)


async def run_client(argv: Optional[List[str]] = None) -> int:
    try:
        load_config()
    except ConfigError as exc:
        logging.basicConfig()
        logger.error("Invalid client configuration: %s", exc)
        return 1
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])
    text = " ".join(argv) if argv else CLIENT_CONFIG["request_text"]

    client = FrameClient()
    try:
        reply = await client.query(text)
    except FramingError as exc:
        logger.error("Exchange failed: %s", exc)
        return 1
    print(f"server says: {reply.text}")
    return 0


def main() -> int:
    return asyncio.run(run_client(sys.argv[1:]))


if __name__ == "__main__":
    sys.exit(main())
