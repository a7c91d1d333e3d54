"""
reducermap - Action-map state reducer

A synchronous engine that turns (state, action) into a new state by running
the handlers registered for the action's type and shallow-merging their
partial updates. Provides:
- Handler maps with single handlers, ordered sequences and option binding
- pre/post interceptors around every action
- A state container with stable dispatch and queued re-entrant actions
- In-memory sessions, a REST API and a CLI over built-in maps
"""

__version__ = "0.1.0"

from .engine_core import (
    UNDEFINED,
    Action,
    ActionMap,
    ActionMapUndefined,
    InvalidHandlerType,
    InvalidHelperType,
    Meta,
    NoActionHandler,
    Reducer,
    ReducerMapError,
    create_reducer,
)
from .session import Store

__all__ = [
    "UNDEFINED",
    "Action",
    "ActionMap",
    "ActionMapUndefined",
    "InvalidHandlerType",
    "InvalidHelperType",
    "Meta",
    "NoActionHandler",
    "Reducer",
    "ReducerMapError",
    "create_reducer",
    "Store",
]
