"""Line-delimited JSON-RPC transport over stdin/stdout.

One request per line. Each request is fully handled and its response
written before the next line is read, so responses come out in request order.
"""

import asyncio
import sys
from typing import Optional, TextIO

from shared.logging import get_logger
from mcp_server.dispatcher import ProtocolDispatcher

logger = get_logger(__name__)


class StdioServer:
    """Serves a dispatcher over a pair of text streams."""

    def __init__(
        self,
        dispatcher: ProtocolDispatcher,
        reader: Optional[TextIO] = None,
        writer: Optional[TextIO] = None
    ) -> None:
        self.dispatcher = dispatcher
        self.reader = reader or sys.stdin
        self.writer = writer or sys.stdout

    async def serve(self) -> int:
        """
        Read and answer requests until end of input.

        Returns:
            Number of requests answered
        """
        loop = asyncio.get_running_loop()
        handled = 0

        logger.info("Serving MCP over stdio")

        while True:
            # Blocking read off the event loop
            line = await loop.run_in_executor(None, self.reader.readline)
            if not line:
                break

            line = line.strip()
            if not line:
                continue

            response = await self.dispatcher.handle(line)
            self.writer.write(response + "\n")
            self.writer.flush()
            handled += 1

        logger.info("Input closed", requests=handled)
        return handled
