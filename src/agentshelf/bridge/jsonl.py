"""Line-delimited JSON transport over text streams (stdin/stdout)."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any, TextIO

from agentshelf.bridge.protocol import Transport

logger = logging.getLogger(__name__)


class JsonLinesTransport(Transport):
    """One JSON object per line in each direction.

    Blank lines are ignored; lines that are not JSON objects are logged
    and dropped.
    """

    def __init__(self, reader: TextIO, writer: TextIO) -> None:
        self._reader = reader
        self._writer = writer

    async def receive_requests(self) -> AsyncIterator[dict[str, Any]]:
        while True:
            line = await asyncio.to_thread(self._reader.readline)
            if not line:
                break

            line = line.strip()
            if not line:
                continue

            try:
                raw = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(f"Dropping malformed request line: {e}")
                continue

            if not isinstance(raw, dict):
                logger.warning("Dropping request that is not a JSON object")
                continue

            yield raw

    async def send_response(self, response: dict[str, Any]) -> None:
        self._writer.write(json.dumps(response, ensure_ascii=False) + "\n")
        self._writer.flush()
