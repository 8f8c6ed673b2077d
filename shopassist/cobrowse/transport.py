"""Outbound side of the co-browsing transport.

Each live connection owns a bounded queue; a writer task (see the WebSocket
route) drains it onto the socket. Sending never blocks: a message for a
connection that is already gone is dropped, and a full queue discards its
oldest message to make room.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 200


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class ConnectionHub:
    """Manages per-connection outbound message queues.

    Queues are bound to the event loop that opened them; sends from any
    other thread are handed over with ``call_soon_threadsafe``.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self.queue_size = queue_size
        self._queues: Dict[str, Tuple[asyncio.Queue, Optional[asyncio.AbstractEventLoop]]] = {}

    def open(self, conn_id: str) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._queues[conn_id] = (queue, _running_loop())
        return queue

    def close(self, conn_id: str) -> None:
        self._queues.pop(conn_id, None)

    def is_open(self, conn_id: str) -> bool:
        return conn_id in self._queues

    def send(self, conn_id: str, event: str, data: Dict[str, Any]) -> None:
        """Queue ``event`` for ``conn_id``; silently drops unknown connections."""
        entry = self._queues.get(conn_id)
        if entry is None:
            logger.debug(
                "Dropping event for closed connection",
                extra={"conn_id": conn_id, "event": event},
            )
            return

        queue, loop = entry
        message = {"event": event, "data": data}
        if loop is None or loop is _running_loop():
            self._put(conn_id, queue, message)
            return
        try:
            loop.call_soon_threadsafe(self._put, conn_id, queue, message)
        except RuntimeError:
            logger.debug(
                "Dropping event for connection on a closed loop",
                extra={"conn_id": conn_id, "event": event},
            )

    def _put(self, conn_id: str, queue: asyncio.Queue, message: Dict[str, Any]) -> None:
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            # drop oldest to make room
            try:
                queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning(
                    "Outbound queue full, event lost",
                    extra={"conn_id": conn_id, "event": message["event"]},
                )

    def __len__(self) -> int:
        return len(self._queues)
