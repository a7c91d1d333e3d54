"""
Todo list map.

Shows every handler shape the engine supports:
- `add` is a sequence: add_todo bound to default options, then bump_next_id
- `add_many` re-dispatches one `add` per text through meta.dispatch
- the pre interceptor records the type of the action being handled
"""

from __future__ import annotations

from ..engine_core.handlers import ActionMap


TODOS_INITIAL_STATE = {"todos": [], "next_id": 1, "last_action": None}

DEFAULT_OPTIONS = {"default_priority": "normal"}
PRIORITIES = ("low", "normal", "high")


def add_todo(state, payload, meta):
    helpers = meta.helpers or {}
    priority = payload.get("priority") or helpers.get("default_priority", "normal")
    if priority not in PRIORITIES:
        raise ValueError(f"Unknown priority: {priority}")
    todo = {
        "id": state.get("next_id", 1),
        "text": payload["text"],
        "done": False,
        "priority": priority,
    }
    return {"todos": [*state.get("todos", []), todo]}


def bump_next_id(state, payload, meta):
    return {"next_id": state.get("next_id", 1) + 1}


def toggle(state, payload, meta):
    todo_id = payload.get("id")
    todos = [
        {**todo, "done": not todo["done"]} if todo["id"] == todo_id else todo
        for todo in state.get("todos", [])
    ]
    return {"todos": todos}


def clear_done(state, payload, meta):
    return {"todos": [todo for todo in state.get("todos", []) if not todo["done"]]}


def add_many(state, payload, meta):
    if meta.dispatch is None:
        raise RuntimeError("add_many needs a store to dispatch through")
    for text in payload.get("texts", []):
        meta.dispatch({"type": "add", "text": text})
    return None


def record_last_action(state, payload, meta):
    return {"last_action": meta.type}


def create_todos_map() -> ActionMap:
    return ActionMap(
        {
            "add": [add_todo, DEFAULT_OPTIONS, bump_next_id],
            "toggle": toggle,
            "clear_done": [clear_done],
            "add_many": add_many,
        },
        pre=record_last_action,
    )
