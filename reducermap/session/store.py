"""
Store - Holds state across cycles and owns the dispatch function.

The store is the container the reducer runs inside:
- Keeps the last committed state
- Creates one dispatch function per store and binds it into its own copy of
  the reducer, so handlers see the same function in meta.dispatch on every cycle
- Queues actions dispatched from inside a handler and runs them after the
  current cycle commits (never re-entering Reducer.run)
- Commits all-or-nothing: a faulting cycle leaves the committed state as it
  was and drops whatever was still queued
"""

from __future__ import annotations
from collections import deque
from dataclasses import replace
from typing import Any, Mapping

from .. import log
from ..engine_core.action import Action, Dispatch
from ..engine_core.handlers import ActionMap
from ..engine_core.reducer import Reducer, create_reducer
from ..engine_core.state import State

logger = log.get(__name__)


class Store:
    """
    State container for one reducer.

    Usage:
        store = Store({"increment": lambda s, p, m: {"n": s.get("n", 0) + 1}}, {})
        store.dispatch({"type": "increment"})
        store.state  # {"n": 1}
    """

    def __init__(
        self,
        action_map: ActionMap | Reducer | Mapping[str, Any] | None,
        initial_state: Mapping[str, Any] | None = None,
    ):
        if isinstance(action_map, Reducer):
            # Own copy: the dispatch binding belongs to this store alone.
            self.reducer = replace(
                action_map,
                initial_state=dict(initial_state) if initial_state is not None else action_map.initial_state,
                _dispatch=None,
            )
        else:
            self.reducer = create_reducer(action_map, initial_state)

        self._state: State | None = self.reducer.initial_state
        self._queue: deque[Action | Mapping[str, Any]] = deque()
        self._running = False
        self.cycles = 0

        def dispatch(action: Action | Mapping[str, Any]) -> State | None:
            return self._dispatch(action)

        self.dispatch: Dispatch = dispatch
        self.reducer.bind_dispatch(dispatch)

    @property
    def state(self) -> State | None:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _dispatch(self, action: Action | Mapping[str, Any]) -> State | None:
        self._queue.append(action)
        if self._running:
            # Called from a handler: the outer drain loop picks it up.
            logger.debug("queued re-entrant action pending=%d", len(self._queue))
            return None

        self._running = True
        try:
            while self._queue:
                current = self._queue.popleft()
                try:
                    new_state = self.reducer.run(self._state, current)
                except Exception as e:
                    dropped = len(self._queue)
                    self._queue.clear()
                    logger.warning("cycle aborted err=%s dropped=%d", e, dropped)
                    raise
                self._state = new_state
                self.cycles += 1
        finally:
            self._running = False
        return self._state
