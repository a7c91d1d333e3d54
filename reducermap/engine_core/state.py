"""
State - Shallow-merge accumulation of partial updates.

Design principles:
- Immutable-friendly: every merge returns a new dict
- Handlers return partial updates, never the full next state
- Top-level keys of the partial win; everything else is preserved
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any


State = dict[str, Any]


def initial(state: Mapping[str, Any] | None) -> State:
    """Fresh copy of the incoming state. An undefined state starts empty."""
    if state is None:
        return {}
    return dict(state)


def merge(state: Mapping[str, Any], partial: Mapping[str, Any] | None) -> State:
    """
    Shallow-merge a partial update onto state.

    A handler that returns None contributes nothing. Anything else must be
    mapping-shaped.
    """
    new_state = dict(state)
    if partial is None:
        return new_state
    if not isinstance(partial, Mapping):
        raise TypeError(f"Handler returned {type(partial).__name__}, expected a mapping")
    new_state.update(partial)
    return new_state
