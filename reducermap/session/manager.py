"""
Session Manager - Creates and manages store sessions.

LIFECYCLE:
1. Client picks a built-in map by name -> session created (in-memory only)
2. Client dispatches actions -> the session's store runs them
3. Client ends the session, or it goes stale -> session removed

PERSISTENCE RULES:
- NO database
- State lives only as long as the session
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
import os
import time
import uuid

from .. import log
from ..engine_core.action import Action
from ..engine_core.state import State
from ..maps import MapDefinition, get_map
from .store import Store

logger = log.get(__name__)

SESSION_MAX_AGE = int(os.getenv("REDUCERMAP_SESSION_MAX_AGE", "3600"))


class SessionState(Enum):
    """State of a session."""
    ACTIVE = "active"
    ENDED = "ended"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    An ephemeral store session.

    Owns one Store for one built-in map. Destroyed when ended.
    """
    session_id: str
    definition: MapDefinition
    store: Store
    created_at: float
    last_active_at: float
    state: SessionState = SessionState.ACTIVE
    action_count: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def map_name(self) -> str:
        return self.definition.name

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def dispatch(self, action: Action | Mapping[str, Any]) -> State | None:
        """Dispatch through the store and record activity."""
        self.last_active_at = time.time()
        new_state = self.store.dispatch(action)
        self.action_count += 1
        return new_state


class SessionManager:
    """
    Manages store sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, map_name: str) -> Session:
        """
        Create a new session for a built-in map.

        Raises:
            KeyError: if no map is registered under map_name
        """
        definition = get_map(map_name)
        if definition is None:
            raise KeyError(map_name)

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            definition=definition,
            store=definition.create_store(),
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session.session_id] = session
        logger.info("session created id=%s map=%s", session.session_id, map_name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED if reason == "completed" else SessionState.ABANDONED
        logger.info("session ended id=%s reason=%s actions=%d", session_id, reason, session.action_count)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = SESSION_MAX_AGE) -> list[str]:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the IDs that were removed.
        """
        current_time = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if current_time - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale
