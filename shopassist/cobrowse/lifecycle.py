"""Glue between the transport and the event router.

Frames on the wire are JSON objects of the form ``{"event": <name>,
"data": <payload>}`` in both directions.
"""

import asyncio
import json
import logging
import uuid
from typing import Any, Dict, Optional, Tuple

from shopassist.cobrowse.router import EventRouter
from shopassist.cobrowse.transport import ConnectionHub

# Configure module logger
logger = logging.getLogger(__name__)

# Unicast to a new connection so the client learns its own id
CONNECTED = "connected"


def decode_frame(raw: Any) -> Optional[Tuple[str, Any]]:
    """Decode a text or binary frame (or already-parsed dict) into ``(event, data)``.

    Returns None for anything that is not a JSON object with a string
    ``event`` field.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    if not isinstance(raw, dict):
        return None
    event = raw.get("event")
    if not isinstance(event, str):
        return None
    return event, raw.get("data")


class LifecycleManager:
    """Connect, receive and disconnect callbacks for co-browsing clients."""

    def __init__(self, router: EventRouter, hub: ConnectionHub) -> None:
        self.router = router
        self.hub = hub

    def connect(self) -> Tuple[str, asyncio.Queue]:
        """Register a new connection and return its id and outbound queue."""
        conn_id = uuid.uuid4().hex
        queue = self.hub.open(conn_id)
        self.hub.send(conn_id, CONNECTED, {"userId": conn_id})
        logger.info("Connection opened", extra={"conn_id": conn_id})
        return conn_id, queue

    def receive(self, conn_id: str, raw: Any) -> Optional[str]:
        """Decode and route one inbound frame.

        Returns:
            The event name, or None when the frame was malformed or named
            an event the router does not know. Callers may count the
            returned names; the set is bounded.
        """
        frame = decode_frame(raw)
        if frame is None:
            logger.debug("Ignoring malformed frame", extra={"conn_id": conn_id})
            return None
        event, data = frame
        self.router.route(conn_id, event, data)
        return event if self.router.handles(event) else None

    def disconnect(self, conn_id: str) -> None:
        """Leave any session, then close the connection's outbound queue."""
        self.router.disconnect(conn_id)
        self.hub.close(conn_id)
        logger.info("Connection closed", extra={"conn_id": conn_id})

    def stats(self) -> Dict[str, int]:
        return {**self.router.stats(), "open_connections": len(self.hub)}
