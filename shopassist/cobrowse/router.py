"""Event routing for co-browsing sessions.

The router is the single owner of the connection registry and the session
table. Every handler first mutates state under one lock and collects the
outbound messages, then dispatches them after the lock is released so a
slow or failing send can neither block other handlers nor undo the state
change.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from shopassist.cobrowse.registry import ConnectionRegistry
from shopassist.cobrowse.sessions import SessionTable

# Configure module logger
logger = logging.getLogger(__name__)

# Inbound event names
JOIN_SESSION = "join-session"
LEAVE_SESSION = "leave-session"
NAVIGATE = "navigate"
SCROLL = "scroll"
CURSOR_MOVE = "cursor-move"
PRODUCT_SELECT = "product-select"
SHARE_STATE = "share-state"
CO_BROWSE_CHAT = "co-browse-chat"

# Outbound-only event names
SESSION_STATE = "session-state"
USER_JOINED = "user-joined"
USER_LEFT = "user-left"

# Shared state key written by product-select
SELECTED_PRODUCT_KEY = "selectedProductId"

SendFn = Callable[[str, str, Dict[str, Any]], None]
Outbound = List[Tuple[str, str, Dict[str, Any]]]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EventRouter:
    """Resolves a connection's session and forwards events to its members.

    Args:
        registry: Connection to session lookup.
        table: Session membership and shared state.
        send: Callable ``send(conn_id, event, data)`` delivering one message.
        clock: Returns the timestamp string attached to chat messages.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        table: SessionTable,
        send: SendFn,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self.registry = registry
        self.table = table
        self._send = send
        self._clock = clock
        self._lock = threading.Lock()

        self._broadcast_handlers: Dict[str, Callable[[str, str, Any], Optional[Outbound]]] = {
            NAVIGATE: self._on_navigate,
            SCROLL: self._on_scroll,
            CURSOR_MOVE: self._on_cursor_move,
            PRODUCT_SELECT: self._on_product_select,
            SHARE_STATE: self._on_share_state,
            CO_BROWSE_CHAT: self._on_chat,
        }

    # --- Membership ------------------------------------------------------

    def join(self, conn_id: str, session_id: str) -> None:
        """Add ``conn_id`` to ``session_id``, leaving any other session first."""
        with self._lock:
            outbound = self._leave_locked(conn_id, keep=session_id)

            self.registry.set_session(conn_id, session_id)
            self.table.add_member(session_id, conn_id)
            snapshot = self.table.snapshot(session_id)

            outbound.append((conn_id, SESSION_STATE, snapshot))
            notice = {"userId": conn_id, "userCount": snapshot["memberCount"]}
            outbound.extend(
                (member, USER_JOINED, dict(notice))
                for member in self.table.members(session_id)
                if member != conn_id
            )

        logger.info(
            "Connection joined session",
            extra={
                "conn_id": conn_id,
                "session_id": session_id,
                "member_count": snapshot["memberCount"],
            },
        )
        self._dispatch(outbound)

    def leave(self, conn_id: str) -> None:
        """Remove ``conn_id`` from its session; no-op when it has none."""
        with self._lock:
            outbound = self._leave_locked(conn_id)
        self._dispatch(outbound)

    def disconnect(self, conn_id: str) -> None:
        """Transport-initiated cleanup; identical to an explicit leave."""
        self.leave(conn_id)

    def _leave_locked(self, conn_id: str, keep: Optional[str] = None) -> Outbound:
        session_id = self.registry.get_session(conn_id)
        if session_id is None or session_id == keep:
            return []

        remaining = self.table.remove_member(session_id, conn_id)
        self.registry.clear(conn_id)
        logger.info(
            "Connection left session",
            extra={
                "conn_id": conn_id,
                "session_id": session_id,
                "member_count": remaining,
            },
        )
        if not remaining:
            return []

        notice = {"userId": conn_id, "userCount": remaining}
        return [
            (member, USER_LEFT, dict(notice))
            for member in self.table.members(session_id)
        ]

    # --- Broadcast events ------------------------------------------------

    def handles(self, event: str) -> bool:
        """Whether ``event`` is an inbound event name this router knows."""
        return event in (JOIN_SESSION, LEAVE_SESSION) or event in self._broadcast_handlers

    def route(self, conn_id: str, event: str, payload: Any = None) -> None:
        """Dispatch one inbound event from ``conn_id``.

        Events from connections outside any session, unknown event names
        and malformed payloads are dropped without reporting back.
        """
        if event == JOIN_SESSION:
            session_id = _session_id_from(payload)
            if session_id is None:
                logger.debug("Ignoring join without session id", extra={"conn_id": conn_id})
                return
            self.join(conn_id, session_id)
            return
        if event == LEAVE_SESSION:
            self.leave(conn_id)
            return

        handler = self._broadcast_handlers.get(event)
        if handler is None:
            logger.debug("Ignoring unknown event", extra={"conn_id": conn_id, "event": event})
            return

        with self._lock:
            session_id = self.registry.get_session(conn_id)
            if session_id is None or session_id not in self.table:
                logger.debug(
                    "Dropping event from connection without session",
                    extra={"conn_id": conn_id, "event": event},
                )
                return
            outbound = handler(conn_id, session_id, payload)

        if outbound is None:
            logger.debug(
                "Dropping event with malformed payload",
                extra={"conn_id": conn_id, "event": event},
            )
            return
        self._dispatch(outbound)

    def _others(self, conn_id: str, session_id: str, event: str, data: Dict[str, Any]) -> Outbound:
        return [
            (member, event, dict(data))
            for member in self.table.members(session_id)
            if member != conn_id
        ]

    def _everyone(self, session_id: str, event: str, data: Dict[str, Any]) -> Outbound:
        return [(member, event, dict(data)) for member in self.table.members(session_id)]

    def _on_navigate(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict):
            return None
        page = payload.get("page")
        if isinstance(page, str):
            self.table.set_page(session_id, page)
        return self._others(conn_id, session_id, NAVIGATE, payload)

    def _on_scroll(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict):
            return None
        return self._others(conn_id, session_id, SCROLL, payload)

    def _on_cursor_move(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict):
            return None
        return self._others(conn_id, session_id, CURSOR_MOVE, {**payload, "userId": conn_id})

    def _on_product_select(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict):
            return None
        if "productId" in payload:
            self.table.set_shared_field(session_id, SELECTED_PRODUCT_KEY, payload["productId"])
        return self._others(conn_id, session_id, PRODUCT_SELECT, {**payload, "userId": conn_id})

    def _on_share_state(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict) or not isinstance(payload.get("key"), str):
            return None
        key, value = payload["key"], payload.get("value")
        self.table.set_shared_field(session_id, key, value)
        return self._others(
            conn_id, session_id, SHARE_STATE, {"key": key, "value": value, "userId": conn_id}
        )

    def _on_chat(self, conn_id: str, session_id: str, payload: Any) -> Optional[Outbound]:
        if not isinstance(payload, dict):
            return None
        message = {**payload, "userId": conn_id, "timestamp": self._clock()}
        return self._everyone(session_id, CO_BROWSE_CHAT, message)

    # --- Delivery --------------------------------------------------------

    def _dispatch(self, outbound: Outbound) -> None:
        for target, event, data in outbound:
            try:
                self._send(target, event, data)
            except Exception as e:
                logger.warning(
                    "Failed to deliver event",
                    extra={"conn_id": target, "event": event, "error": str(e)},
                )

    # --- Inspection ------------------------------------------------------

    def snapshot(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Snapshot of a live session, or None when it does not exist."""
        with self._lock:
            if session_id not in self.table:
                return None
            return self.table.snapshot(session_id)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "active_sessions": len(self.table),
                "joined_connections": len(self.registry),
            }


def _session_id_from(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        payload = payload.get("sessionId")
    if isinstance(payload, str) and payload:
        return payload
    return None
