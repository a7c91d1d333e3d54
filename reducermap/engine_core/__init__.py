"""
Engine Core - Action-map reducer with shallow-merge state accumulation.

The engine is the runtime that:
1. Registers an ActionMap (handlers classified once, up front)
2. Splits each action into type and payload
3. Runs the pre interceptor, the type's handler(s), the post interceptor
4. Shallow-merges every partial update into the new state
"""

from .action import Action, Meta, split_action
from .errors import (
    ReducerMapError,
    ActionMapUndefined,
    NoActionHandler,
    InvalidHandlerType,
    InvalidHelperType,
)
from .handlers import (
    UNDEFINED,
    ActionMap,
    BareHandler,
    HandlerTuple,
    HelperOptions,
    InvalidElement,
    MissingElement,
    SingleHandler,
    HandlerSequence,
    EmptySequence,
    InvalidEntry,
    classify_entry,
    classify_element,
)
from .resolver import SequenceRunner, run_sequence
from .reducer import Reducer, create_reducer, apply_action
from .state import merge

__all__ = [
    "Action",
    "Meta",
    "split_action",
    "ReducerMapError",
    "ActionMapUndefined",
    "NoActionHandler",
    "InvalidHandlerType",
    "InvalidHelperType",
    "UNDEFINED",
    "ActionMap",
    "BareHandler",
    "HandlerTuple",
    "HelperOptions",
    "InvalidElement",
    "MissingElement",
    "SingleHandler",
    "HandlerSequence",
    "EmptySequence",
    "InvalidEntry",
    "classify_entry",
    "classify_element",
    "SequenceRunner",
    "run_sequence",
    "Reducer",
    "create_reducer",
    "apply_action",
    "merge",
]
