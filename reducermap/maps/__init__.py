"""
Maps module - Built-in action maps.

Each built-in map is registered under a name with:
- A factory building its ActionMap
- The initial state a fresh store starts from
- A one-line description for listings

The CLI and the REST API only ever serve maps registered here; handlers are
Python callables and cannot be supplied over the wire.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable

from ..engine_core.handlers import ActionMap
from .counter import create_counter_map, COUNTER_INITIAL_STATE
from .todos import create_todos_map, TODOS_INITIAL_STATE


@dataclass(frozen=True)
class MapDefinition:
    """A named, buildable action map."""
    name: str
    description: str
    factory: Callable[[], ActionMap]
    initial_state: dict[str, Any] = field(default_factory=dict)

    def build(self) -> ActionMap:
        return self.factory()

    def fresh_state(self) -> dict[str, Any]:
        return deepcopy(self.initial_state)

    def create_store(self):
        """New Store over this map, starting from a copy of the initial state."""
        from ..session.store import Store
        return Store(self.build(), self.fresh_state())


BUILTIN_MAPS: dict[str, MapDefinition] = {
    "counter": MapDefinition(
        name="counter",
        description="Integer counter with increment, decrement and reset",
        factory=create_counter_map,
        initial_state=COUNTER_INITIAL_STATE,
    ),
    "todos": MapDefinition(
        name="todos",
        description="Todo list with prioritized items and batch adds",
        factory=create_todos_map,
        initial_state=TODOS_INITIAL_STATE,
    ),
}


def get_map(name: str) -> MapDefinition | None:
    """Look up a built-in map by name."""
    return BUILTIN_MAPS.get(name)


def list_maps() -> list[MapDefinition]:
    return [BUILTIN_MAPS[name] for name in sorted(BUILTIN_MAPS)]


__all__ = [
    "MapDefinition",
    "BUILTIN_MAPS",
    "get_map",
    "list_maps",
    "create_counter_map",
    "create_todos_map",
]
