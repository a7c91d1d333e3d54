"""
Engine faults.

Every fault aborts the current cycle and surfaces synchronously to the
caller of Reducer.run(). Nothing is retried or recovered here; containers
decide what to do with the previous state.
"""

from __future__ import annotations


class ReducerMapError(Exception):
    """Base class for all engine faults."""
    error_code: str = "REDUCER_MAP_ERROR"


class ActionMapUndefined(ReducerMapError, TypeError):
    """The engine was constructed without an action map."""
    error_code = "ACTION_MAP_UNDEFINED"

    def __init__(self):
        super().__init__("ActionMap is not defined")


class NoActionHandler(ReducerMapError, LookupError):
    """No handler entry exists for the action type, or the entry is empty."""
    error_code = "NO_ACTION_HANDLER"

    def __init__(self, action_type: str):
        self.action_type = action_type
        super().__init__(f"No action handler for type: {action_type}")


class InvalidHandlerType(ReducerMapError, TypeError):
    """An entry, sequence element or tuple head has the wrong kind."""
    error_code = "INVALID_HANDLER_TYPE"

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Handler is an invalid type: {kind}")


class InvalidHelperType(ReducerMapError, TypeError):
    """Options bound to a handler are not a mapping."""
    error_code = "INVALID_HELPER_TYPE"

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Helper object is an invalid type: {kind}")


def kind_of(value) -> str:
    """Name of the runtime type of a value, as reported in fault messages."""
    return type(value).__name__
