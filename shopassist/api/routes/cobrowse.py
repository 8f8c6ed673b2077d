"""Co-browsing endpoints for the ShopAssist API.

``POST /api/create-session`` mints a shareable session id, ``/ws`` is the
real-time transport. Every WebSocket connection gets its own outbound queue
drained by a writer task, so a slow client never holds up the handlers of
other connections.
"""

import asyncio
import contextlib
import logging
import uuid
from typing import Any, Dict

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from shopassist.api.dependencies import get_coordinator
from shopassist.api.exceptions import SessionNotFoundError
from shopassist.api.metrics import metrics_service
from shopassist.cobrowse import LifecycleManager

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(tags=["co-browsing"])


@router.post("/api/create-session")
def create_session() -> Dict[str, str]:
    """Generate a fresh session id.

    The session itself comes into existence when the first connection
    joins it over the WebSocket.
    """
    session_id = str(uuid.uuid4())
    logger.info("Session id issued", extra={"session_id": session_id})
    return {"sessionId": session_id}


@router.get("/api/sessions/{session_id}")
def get_session(
    session_id: str,
    coordinator: LifecycleManager = Depends(get_coordinator),
) -> Dict[str, Any]:
    """Current page, shared state and member count of a live session."""
    snapshot = coordinator.router.snapshot(session_id)
    if snapshot is None:
        raise SessionNotFoundError(session_id)
    return {"sessionId": session_id, **snapshot}


async def _pump(websocket: WebSocket, queue: asyncio.Queue, conn_id: str) -> None:
    """Forward queued events to the socket until it goes away."""
    while True:
        message = await queue.get()
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.debug(
                "Stopped sending to closed socket",
                extra={"conn_id": conn_id, "error": str(e)},
            )
            return


@router.websocket("/ws")
async def cobrowse_socket(websocket: WebSocket) -> None:
    coordinator: LifecycleManager = websocket.app.state.cobrowse
    await websocket.accept()

    conn_id, queue = coordinator.connect()
    writer = asyncio.create_task(_pump(websocket, queue, conn_id))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            # Clients may send text or binary frames
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            event = coordinator.receive(conn_id, raw)
            if event is not None:
                metrics_service.record_cobrowse_event(event)
    finally:
        coordinator.disconnect(conn_id)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await writer
