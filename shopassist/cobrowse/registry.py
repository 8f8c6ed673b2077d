"""Connection to session lookup."""

from typing import Dict, Optional


class ConnectionRegistry:
    """Maps a connection id to the session it is currently a member of."""

    def __init__(self) -> None:
        self._sessions: Dict[str, str] = {}

    def set_session(self, conn_id: str, session_id: str) -> None:
        self._sessions[conn_id] = session_id

    def get_session(self, conn_id: str) -> Optional[str]:
        return self._sessions.get(conn_id)

    def clear(self, conn_id: str) -> None:
        self._sessions.pop(conn_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
