"""
Pytest fixtures for reducermap tests.
"""

import pytest

from ..engine_core.action import Meta
from ..engine_core.handlers import ActionMap
from ..session import Store, SessionManager
from ..api.service import APIService


@pytest.fixture
def meta() -> Meta:
    """Meta for a type-scoped handler with no dispatch bound."""
    return Meta(type="a")


@pytest.fixture
def calls() -> list:
    """Shared call log for ordering assertions."""
    return []


@pytest.fixture
def recording_map(calls) -> ActionMap:
    """pre, a, post all record their name and the meta they saw."""
    def pre(state, payload, meta):
        calls.append(("pre", meta))
        return {"pre_count": state.get("pre_count", 0) + 1, "order": [*state.get("order", []), "pre"]}

    def handle_a(state, payload, meta):
        calls.append(("a", meta))
        return {"a": "called", "order": [*state.get("order", []), "a"]}

    def post(state, payload, meta):
        calls.append(("post", meta))
        return {"post_count": state.get("post_count", 0) + 1, "order": [*state.get("order", []), "post"]}

    return ActionMap({"a": handle_a}, pre=pre, post=post)


@pytest.fixture
def counter_store() -> Store:
    """Store over a one-handler counter map."""
    return Store({"a": lambda s, p, m: {"n": s.get("n", 0) + 1}}, {})


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def service() -> APIService:
    """A fresh API service."""
    return APIService()
