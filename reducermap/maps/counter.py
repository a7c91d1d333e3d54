"""
Counter map.

Actions:
    increment   {"by": int = 1}
    decrement   {"by": int = 1}
    reset       {}

The post interceptor counts every cycle in `actions_seen`.
"""

from __future__ import annotations

from ..engine_core.handlers import ActionMap


COUNTER_INITIAL_STATE = {"count": 0, "actions_seen": 0}


def increment(state, payload, meta):
    return {"count": state.get("count", 0) + int(payload.get("by", 1))}


def decrement(state, payload, meta):
    return {"count": state.get("count", 0) - int(payload.get("by", 1))}


def reset(state, payload, meta):
    return {"count": 0}


def count_actions(state, payload, meta):
    return {"actions_seen": state.get("actions_seen", 0) + 1}


def create_counter_map() -> ActionMap:
    return ActionMap(
        {
            "increment": increment,
            "decrement": decrement,
            "reset": reset,
        },
        post=count_actions,
    )
