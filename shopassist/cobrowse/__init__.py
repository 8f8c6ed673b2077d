"""Co-browsing session coordination.

Tracks which connections belong to which shared session and fans out
cursor, navigation, selection and chat events to the right members.
"""

from shopassist.cobrowse.lifecycle import LifecycleManager
from shopassist.cobrowse.registry import ConnectionRegistry
from shopassist.cobrowse.router import EventRouter
from shopassist.cobrowse.sessions import Session, SessionTable
from shopassist.cobrowse.transport import ConnectionHub

__all__ = [
    "ConnectionHub",
    "ConnectionRegistry",
    "EventRouter",
    "LifecycleManager",
    "Session",
    "SessionTable",
    "create_coordinator",
]


def create_coordinator() -> LifecycleManager:
    """Wire a hub, registry, session table and router into one coordinator."""
    hub = ConnectionHub()
    router = EventRouter(ConnectionRegistry(), SessionTable(), hub.send)
    return LifecycleManager(router, hub)
