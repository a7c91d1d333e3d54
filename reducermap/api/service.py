"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session/store calls
2. Manages sessions
3. Converts engine faults into ErrorResponse objects

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .. import log
from ..engine_core.errors import ReducerMapError
from ..maps import list_maps
from ..session import SessionManager, Session
from .schemas import (
    CreateSessionRequest,
    DispatchRequest,
    DispatchResponse,
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    MapInfo,
    MapListResponse,
    SessionListResponse,
    SessionResponse,
    SessionStatus,
)

logger = log.get(__name__)


def fault_response(fault: ReducerMapError, details: dict[str, Any] | None = None) -> ErrorResponse:
    """Convert an engine fault into an ErrorResponse."""
    try:
        code = ErrorCode(fault.error_code)
    except ValueError:
        code = ErrorCode.INTERNAL_ERROR
    return ErrorResponse(error=str(fault), error_code=code, details=details)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest(map_name="counter"))
        service.dispatch(session.session_id, DispatchRequest(type="increment"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def list_maps(self) -> MapListResponse:
        maps = []
        for definition in list_maps():
            action_map = definition.build()
            maps.append(MapInfo(
                name=definition.name,
                description=definition.description,
                action_types=action_map.action_types,
                has_pre=action_map.pre is not None,
                has_post=action_map.post is not None,
            ))
        return MapListResponse(maps=maps, count=len(maps))

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        try:
            session = self.session_manager.create_session(request.map_name)
        except KeyError:
            return ErrorResponse(
                error=f"Map {request.map_name} not found",
                error_code=ErrorCode.MAP_NOT_FOUND,
            )
        return self._session_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_response(session)

    def dispatch(self, session_id: str, request: DispatchRequest) -> DispatchResponse | ErrorResponse:
        """
        Dispatch an action on a session.

        The response carries the state after the action and any actions its
        handlers queued. On a fault the session keeps its previous state.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        try:
            session.dispatch(request.to_action())
        except ReducerMapError as e:
            return fault_response(e, details={"action_type": request.type})
        except (KeyError, TypeError, ValueError, RuntimeError) as e:
            logger.info("handler rejected action type=%s err=%r", request.type, e)
            return ErrorResponse(
                error=f"Handler rejected action: {e!r}",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"action_type": request.type},
            )

        return DispatchResponse(
            session_id=session_id,
            action_type=request.type,
            cycles=session.store.cycles,
            state=session.store.state,
        )

    def end_session(self, session_id: str, reason: str = "completed") -> EndSessionResponse:
        success = self.session_manager.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> SessionListResponse:
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    def _session_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            map_name=session.map_name,
            status=SessionStatus.ACTIVE if session.is_active() else SessionStatus.ENDED,
            action_count=session.action_count,
            cycles=session.store.cycles,
            created_at=session.created_at,
            state=session.store.state,
        )

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
