"""
API Module - HTTP interface.

Exposes built-in maps via REST API. A client:
1. Lists the built-in maps
2. Creates a session for one of them
3. Dispatches actions and reads back the state
4. Ends the session

All state is session-scoped. No persistent accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    DispatchRequest,
    # Responses
    MapListResponse,
    SessionResponse,
    DispatchResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    MapInfo,
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "DispatchRequest",
    # Responses
    "MapListResponse",
    "SessionResponse",
    "DispatchResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "MapInfo",
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
