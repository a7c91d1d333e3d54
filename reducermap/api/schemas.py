"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between HTTP clients and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- MAP_NOT_FOUND: No built-in map with that name
- NO_ACTION_HANDLER: The map has no handler for the dispatched type
- INVALID_HANDLER_TYPE: The map entry for the type is malformed
- INVALID_HELPER_TYPE: Options bound to a handler are not a mapping
- VALIDATION_ERROR: A handler rejected the payload
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.action import Action


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    MAP_NOT_FOUND = "MAP_NOT_FOUND"
    NO_ACTION_HANDLER = "NO_ACTION_HANDLER"
    INVALID_HANDLER_TYPE = "INVALID_HANDLER_TYPE"
    INVALID_HELPER_TYPE = "INVALID_HELPER_TYPE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class MapInfo(BaseModel):
    """A built-in action map."""
    name: str
    description: str
    action_types: list[str] = Field(default_factory=list)
    has_pre: bool = False
    has_post: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a session over a built-in map."""
    map_name: str = Field(min_length=1, description="Name of a built-in map")


class DispatchRequest(BaseModel):
    """An action to dispatch: a type plus payload fields."""
    type: str = Field(min_length=1, description="Action type")
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_action(self) -> Action:
        return Action(type=self.type, payload=dict(self.payload))


# =============================================================================
# Response Models
# =============================================================================

class MapListResponse(BaseModel):
    maps: list[MapInfo]
    count: int


class SessionResponse(BaseModel):
    """Session status and current state."""
    session_id: str
    map_name: str
    status: SessionStatus
    action_count: int = 0
    cycles: int = 0
    created_at: float
    state: Optional[dict[str, Any]] = None


class DispatchResponse(BaseModel):
    """State after the dispatched action and everything it queued."""
    session_id: str
    action_type: str
    cycles: int
    state: Optional[dict[str, Any]] = None


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
