"""
Reducer - Runs one action cycle against a state.

The reducer is the single point of state transition.
All state changes go through Reducer.run().

Design principles:
- Pure with respect to its input: (state, action) -> new_state
- pre interceptor, then the type's handler(s), then post interceptor
- Each partial update is shallow-merged onto the running state
- Faults raise immediately and abort the cycle
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping

from .. import log
from .action import Action, Dispatch, Meta, split_action
from .errors import ActionMapUndefined, InvalidHandlerType, NoActionHandler
from .handlers import ActionMap, EmptySequence, HandlerSequence, SingleHandler
from .resolver import invoke, run_sequence
from .state import State, initial

logger = log.get(__name__)


@dataclass
class Reducer:
    """
    Reducer runs actions through an action map.

    Holds no state of its own besides the initial value and the dispatch
    reference bound by its container. A plain mapping is accepted as the
    action map and converted with ActionMap.from_mapping().
    """
    action_map: ActionMap
    initial_state: State | None = None
    _dispatch: Dispatch | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.action_map is None:
            raise ActionMapUndefined()
        if not isinstance(self.action_map, ActionMap):
            self.action_map = ActionMap.from_mapping(self.action_map)

    @property
    def dispatch(self) -> Dispatch | None:
        return self._dispatch

    def bind_dispatch(self, dispatch: Dispatch | None) -> None:
        """
        Set the dispatch reference handed to type-scoped handlers.

        Containers bind the same function for the lifetime of the reducer;
        it is read into Meta at the start of every cycle.
        """
        self._dispatch = dispatch

    def run(self, state: Mapping[str, Any] | None, action: Action | Mapping[str, Any]) -> State:
        """
        Run one cycle and return the new state.

        Raises NoActionHandler, InvalidHandlerType or InvalidHelperType.
        """
        action_type, payload = split_action(action)
        new_state = initial(state)
        action_map = self.action_map
        logger.debug("cycle start type=%s", action_type)

        # Interceptors get a meta without dispatch.
        hook_meta = Meta(type=action_type)

        if action_map.pre is not None:
            new_state = invoke(action_map.pre, new_state, payload, hook_meta)

        meta = Meta(type=action_type, dispatch=self._dispatch)
        entry = action_map.entry_for(action_type)

        if entry is None or isinstance(entry, EmptySequence):
            raise NoActionHandler(action_type)
        elif isinstance(entry, SingleHandler):
            new_state = invoke(entry.fn, new_state, payload, meta)
        elif isinstance(entry, HandlerSequence):
            new_state = run_sequence(entry, new_state, payload, meta)
        else:
            raise InvalidHandlerType(entry.kind)

        if action_map.post is not None:
            new_state = invoke(action_map.post, new_state, payload, hook_meta)

        logger.debug("cycle done type=%s keys=%d", action_type, len(new_state))
        return new_state

    __call__ = run


def create_reducer(
    action_map: ActionMap | Mapping[str, Any] | None,
    initial_state: Mapping[str, Any] | None = None,
) -> Reducer:
    """Construct a reducer. Raises ActionMapUndefined when action_map is None."""
    if action_map is None:
        raise ActionMapUndefined()
    return Reducer(
        action_map=action_map,
        initial_state=dict(initial_state) if initial_state is not None else None,
    )


def apply_action(
    action_map: ActionMap | Mapping[str, Any],
    state: Mapping[str, Any] | None,
    action: Action | Mapping[str, Any],
) -> State:
    """
    Convenience function to run a single action.

    Creates a Reducer with no dispatch bound and runs the action.
    """
    return create_reducer(action_map).run(state, action)
