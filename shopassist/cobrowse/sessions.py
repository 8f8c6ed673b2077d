"""Shared browsing sessions and the table that owns them.

A session exists only while it has members: removing the last member
deletes it in the same call, so a later ``ensure`` with the same id starts
from a blank page and an empty shared state bag.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Set

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_PAGE = "/"


@dataclass
class Session:
    """One shared browsing context.

    Attributes:
        id: Externally shareable session identifier.
        members: Connection ids currently in the session.
        page: Current shared page path (last writer wins).
        shared_state: Arbitrary key/value state used to seed late joiners.
    """

    id: str
    members: Set[str] = field(default_factory=set)
    page: str = DEFAULT_PAGE
    shared_state: Dict[str, Any] = field(default_factory=dict)


class SessionTable:
    """In-memory mapping of session id to :class:`Session`."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def ensure(self, session_id: str) -> Session:
        """Return the session for ``session_id``, creating an empty one if needed."""
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(id=session_id)
            self._sessions[session_id] = session
            logger.info("Session created", extra={"session_id": session_id})
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def add_member(self, session_id: str, conn_id: str) -> None:
        self.ensure(session_id).members.add(conn_id)

    def remove_member(self, session_id: str, conn_id: str) -> int:
        """Remove a member, deleting the session once it is empty.

        Returns:
            Number of members left (0 when the session is gone or never existed).
        """
        session = self._sessions.get(session_id)
        if session is None:
            return 0

        session.members.discard(conn_id)
        if not session.members:
            del self._sessions[session_id]
            logger.info("Session deleted", extra={"session_id": session_id})
            return 0
        return len(session.members)

    def set_page(self, session_id: str, path: str) -> None:
        session = self._sessions.get(session_id)
        if session is not None:
            session.page = path

    def set_shared_field(self, session_id: str, key: str, value: Any) -> None:
        session = self._sessions.get(session_id)
        if session is not None:
            session.shared_state[key] = value

    def members(self, session_id: str) -> Set[str]:
        """Return a copy of the member set (empty for unknown sessions)."""
        session = self._sessions.get(session_id)
        return set(session.members) if session is not None else set()

    def snapshot(self, session_id: str) -> Dict[str, Any]:
        """Read-only view handed to a newly joining member."""
        session = self._sessions.get(session_id)
        if session is None:
            return {"page": DEFAULT_PAGE, "sharedState": {}, "memberCount": 0}
        return {
            "page": session.page,
            "sharedState": dict(session.shared_state),
            "memberCount": len(session.members),
        }

    def exists(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))
