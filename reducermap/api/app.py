"""
FastAPI Application - REST API over built-in maps.

Endpoints:
    GET    /api/v1/health                       Liveness and version
    GET    /api/v1/maps                         List built-in maps
    POST   /api/v1/sessions                     Create a session
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session status and state
    POST   /api/v1/sessions/{id}/actions        Dispatch an action
    DELETE /api/v1/sessions/{id}                End a session

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__, log
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    DispatchRequest,
    DispatchResponse,
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    MapListResponse,
    SessionListResponse,
    SessionResponse,
)

# Environment configuration
REDUCERMAP_ENV = os.getenv("REDUCERMAP_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

STATUS_BY_ERROR_CODE = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.MAP_NOT_FOUND: 404,
    ErrorCode.NO_ACTION_HANDLER: 422,
    ErrorCode.INVALID_HANDLER_TYPE: 422,
    ErrorCode.INVALID_HELPER_TYPE: 422,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}


def error_json(error: ErrorResponse) -> JSONResponse:
    """Wrap an ErrorResponse with the status code for its error code."""
    return JSONResponse(
        status_code=STATUS_BY_ERROR_CODE.get(error.error_code, 400),
        content=error.model_dump(mode="json"),
    )


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    log.setup()

    app = FastAPI(
        title="reducermap API",
        description="""
Action-map reducer sessions over HTTP.

Create a session for a built-in map, then dispatch actions to it. Every
dispatch returns the state after the action and any actions its handlers
queued. A faulting action leaves the session state unchanged.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `MAP_NOT_FOUND` | No built-in map with that name |
| `NO_ACTION_HANDLER` | No handler registered for the action type |
| `INVALID_HANDLER_TYPE` | Handler entry for the type is malformed |
| `INVALID_HELPER_TYPE` | Handler options are not a mapping |
| `VALIDATION_ERROR` | A handler rejected the payload |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Liveness check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, environment=REDUCERMAP_ENV)

    @app.get(
        "/api/v1/maps",
        response_model=MapListResponse,
        tags=["Maps"],
        summary="List built-in action maps",
    )
    async def list_maps() -> MapListResponse:
        return api_service.list_maps()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse, "description": "Unknown map"}},
        tags=["Sessions"],
        summary="Create a new session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        response = api_service.create_session(request)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        return api_service.list_sessions()

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status and state",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "completed",
    ) -> EndSessionResponse:
        return api_service.end_session(session_id, reason)

    # =========================================================================
    # Dispatch Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=DispatchResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Handler rejected payload"},
            404: {"model": ErrorResponse, "description": "Session not found"},
            422: {"model": ErrorResponse, "description": "Engine fault"},
        },
        tags=["Actions"],
        summary="Dispatch an action to a session",
    )
    async def dispatch_action(
        session_id: str,
        request: DispatchRequest,
    ) -> Union[DispatchResponse, JSONResponse]:
        response = api_service.dispatch(session_id, request)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    return app


# For running directly: uvicorn reducermap.api.app:app
app = create_app()
