"""
Handler Resolver - Runs a handler sequence against an accumulating state.

The resolver is a small state machine with a single pending-handler slot:

- A bare handler flushes whatever is pending, then becomes pending itself
  (it may still bind to options that follow it).
- A tuple flushes the pending handler, then runs with its own helpers.
- Bare options pop the pending handler and run it with those helpers.
- After the last element the pending handler, if any, runs solo.

Each handler sees the state as updated by every handler before it.
"""

from __future__ import annotations
from typing import Any, Mapping

from .. import log
from .action import Meta
from .errors import InvalidHandlerType, NoActionHandler, kind_of
from .handlers import (
    BareHandler,
    Element,
    Handler,
    HandlerSequence,
    HandlerTuple,
    HelperOptions,
    InvalidElement,
)
from .state import State, merge

logger = log.get(__name__)


def invoke(fn: Handler, state: State, payload: dict[str, Any], meta: Meta) -> State:
    """Run one handler and merge its partial update."""
    return merge(state, fn(state, payload, meta))


class SequenceRunner:
    """
    Feeds sequence elements through the pending-handler slot.

    Usage:
        runner = SequenceRunner(state, payload, meta)
        for element in sequence:
            runner.feed(element)
        new_state = runner.finish()
    """

    def __init__(self, state: State, payload: dict[str, Any], meta: Meta):
        self.state = state
        self.payload = payload
        self.meta = meta
        self._pending: Handler | None = None

    @property
    def pending(self) -> Handler | None:
        return self._pending

    def feed(self, element: Element) -> None:
        if isinstance(element, BareHandler):
            self.flush()
            self._pending = element.fn
        elif isinstance(element, HandlerTuple):
            self.flush()
            self._run_bound(element.fn, element.helpers)
        elif isinstance(element, HelperOptions):
            fn = self._pending
            if fn is None:
                raise InvalidHandlerType(kind_of(element.helpers))
            self._pending = None
            self._run_bound(fn, element.helpers)
        elif isinstance(element, InvalidElement):
            raise element.error()
        else:
            raise NoActionHandler(self.meta.type)

    def flush(self) -> None:
        """Run the pending handler solo, if there is one."""
        if self._pending is None:
            return
        fn, self._pending = self._pending, None
        self.state = invoke(fn, self.state, self.payload, self.meta)

    def finish(self) -> State:
        self.flush()
        return self.state

    def _run_bound(self, fn: Handler, helpers: Mapping[str, Any]) -> None:
        self.state = invoke(fn, self.state, self.payload, self.meta.with_helpers(helpers))


def run_sequence(
    sequence: HandlerSequence,
    state: State,
    payload: dict[str, Any],
    meta: Meta,
) -> State:
    """Run every element of a sequence in order and return the merged state."""
    runner = SequenceRunner(state, payload, meta)
    for element in sequence:
        runner.feed(element)
    new_state = runner.finish()
    logger.debug("sequence type=%s elements=%d done", meta.type, len(sequence))
    return new_state
