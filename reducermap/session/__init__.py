"""
Session Module - State containers and ephemeral sessions.

A Store runs a reducer across cycles: it keeps the committed state, owns the
stable dispatch function and queues actions dispatched from handlers.

A Session wraps a Store for one built-in map:
- Created when a client picks a map
- Dispatches actions through its store
- Destroyed when ended or stale

Sessions are EPHEMERAL: no persistence.
"""

from .store import Store
from .manager import SessionManager, Session, SessionState

__all__ = [
    "Store",
    "SessionManager",
    "Session",
    "SessionState",
]
