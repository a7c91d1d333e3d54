"""
Action System - Actions and per-cycle metadata.

An action is a typed event: a `type` discriminator that selects the handler
entry, plus payload fields that are handed to the handlers untouched.

Actions may be given either as Action instances or as plain mappings of the
form {"type": ..., **payload}; split_action() normalizes both.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from collections.abc import Mapping
from typing import Any, Callable


Dispatch = Callable[[Any], Any]


@dataclass(frozen=True)
class Action:
    """
    A complete action to be run through the reducer.

    Actions are:
    - Ephemeral (scoped to one cycle)
    - Never mutated by the engine
    """
    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, action_type: str, **payload: Any) -> Action:
        """Factory: Action.of("add", text="milk")."""
        return cls(type=action_type, payload=payload)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Action:
        """Build an action from the {"type": ..., **payload} form."""
        payload = {k: v for k, v in data.items() if k != "type"}
        return cls(type=data.get("type"), payload=payload)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **self.payload}


@dataclass(frozen=True)
class Meta:
    """
    Per-cycle metadata handed to every handler as its third argument.

    `dispatch` is only set for type-scoped handlers, never for the pre/post
    interceptors. `helpers` is only set for handlers bound to options.
    """
    type: str
    dispatch: Dispatch | None = None
    helpers: Mapping[str, Any] | None = None

    def with_helpers(self, helpers: Mapping[str, Any]) -> Meta:
        return replace(self, helpers=helpers)


def split_action(action: Action | Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """Split an action into its type and payload."""
    if isinstance(action, Action):
        return action.type, dict(action.payload)
    if isinstance(action, Mapping):
        normalized = Action.from_dict(action)
        return normalized.type, normalized.payload
    raise TypeError(f"Action must be an Action or a mapping, got {type(action).__name__}")
