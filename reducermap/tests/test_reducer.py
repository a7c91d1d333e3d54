"""
Tests for the reducer (one action cycle).

Tests:
- Fault classification for missing and malformed entries
- Shallow-merge accumulation
- pre/post ordering and dispatch visibility
- Action and state normalization
"""

import pytest

from ..engine_core.action import Action, Meta
from ..engine_core.errors import (
    ActionMapUndefined,
    InvalidHandlerType,
    InvalidHelperType,
    NoActionHandler,
    ReducerMapError,
)
from ..engine_core.handlers import UNDEFINED, ActionMap
from ..engine_core.reducer import Reducer, apply_action, create_reducer
from .helpers import bump, noop, returning


class TestCreate:
    """Tests for reducer construction."""

    def test_missing_map_faults(self):
        """A None action map faults at construction."""
        with pytest.raises(ActionMapUndefined, match="ActionMap is not defined"):
            create_reducer(None)

    def test_initial_state_optional(self):
        """The initial state is optional and copied when given."""
        assert create_reducer({}).initial_state is None
        assert create_reducer({}, {"a": "hi"}).initial_state == {"a": "hi"}

    def test_plain_mapping_converted(self):
        """A plain mapping becomes an ActionMap with its interceptors lifted."""
        reducer = create_reducer({"pre": noop, "a": noop})
        assert isinstance(reducer.action_map, ActionMap)
        assert reducer.action_map.pre is noop

    def test_reducer_rejects_none(self):
        """Reducer itself rejects a None action map."""
        with pytest.raises(ActionMapUndefined):
            Reducer(action_map=None)


class TestFaults:
    """Tests for cycle-aborting faults."""

    def test_unknown_type(self):
        """An unregistered type faults with its name."""
        reducer = create_reducer({"a": noop}, {})
        with pytest.raises(NoActionHandler, match="No action handler for type: b"):
            reducer.run({}, {"type": "b"})

    def test_empty_sequence(self):
        """An empty sequence has no handler."""
        reducer = create_reducer({"a": []}, {})
        with pytest.raises(NoActionHandler, match="No action handler for type: a"):
            reducer.run({}, {"type": "a"})

    def test_undefined_entry(self):
        """An UNDEFINED entry has no handler."""
        reducer = create_reducer({"a": UNDEFINED}, {})
        with pytest.raises(NoActionHandler):
            reducer.run({}, {"type": "a"})

    def test_undefined_element(self):
        """An UNDEFINED element inside a sequence has no handler."""
        reducer = create_reducer({"a": [noop, UNDEFINED]}, {})
        with pytest.raises(NoActionHandler, match="type: a"):
            reducer.run({}, {"type": "a"})

    @pytest.mark.parametrize("entry, kind", [
        ([None], "NoneType"),
        (None, "NoneType"),
        (True, "bool"),
        (False, "bool"),
        (9, "int"),
        ("", "str"),
        ({}, "dict"),
        ([9], "int"),
        ([""], "str"),
        ([{}], "dict"),
        ([noop, 9], "int"),
        ([noop, ""], "str"),
        ([noop, [""]], "str"),
        ([noop, [None]], "NoneType"),
        ([noop, [9]], "int"),
        ([noop, [{}]], "dict"),
        ([noop, [True]], "bool"),
        ([noop, [False]], "bool"),
    ])
    def test_invalid_handler_type(self, entry, kind):
        """Malformed entries and elements fault with their kind."""
        reducer = create_reducer({"a": entry}, {})
        with pytest.raises(InvalidHandlerType, match=f"Handler is an invalid type: {kind}"):
            reducer.run({}, {"type": "a"})

    @pytest.mark.parametrize("entry, kind", [
        ([[noop, ""]], "str"),
        ([[noop, None]], "NoneType"),
        ([[noop, 9]], "int"),
        ([[noop, True]], "bool"),
        ([[noop, False]], "bool"),
    ])
    def test_invalid_helper_type(self, entry, kind):
        """Tuples with non-mapping helpers fault with the helpers' kind."""
        reducer = create_reducer({"a": entry}, {})
        with pytest.raises(InvalidHelperType, match=f"Helper object is an invalid type: {kind}"):
            reducer.run({}, {"type": "a"})

    def test_faults_share_a_base(self):
        """Faults share ReducerMapError and carry an error code."""
        reducer = create_reducer({"a": 9}, {})
        with pytest.raises(ReducerMapError) as exc_info:
            reducer.run({}, {"type": "a"})
        assert exc_info.value.error_code == "INVALID_HANDLER_TYPE"

    def test_pre_does_not_mask_missing_type(self):
        """Interceptors alone do not handle a type."""
        reducer = create_reducer({"pre": noop, "post": noop}, {})
        with pytest.raises(NoActionHandler, match="type: a"):
            reducer.run({}, {"type": "a"})

    def test_non_mapping_partial_rejected(self):
        """A handler returning a non-mapping raises TypeError."""
        reducer = create_reducer({"a": returning(5)}, {})
        with pytest.raises(TypeError):
            reducer.run({}, {"type": "a"})


class TestMerge:
    """Tests for shallow-merge accumulation."""

    def test_counter_four_times(self):
        """Running the same action four times counts to four."""
        reducer = create_reducer({"a": lambda s, p, m: {"n": s.get("n", 0) + 1}}, {})
        state = reducer.initial_state
        for _ in range(4):
            state = reducer.run(state, {"type": "a"})
        assert state == {"n": 4}

    def test_sequence_reads_previous_update(self):
        """A later handler reads the earlier handler's update."""
        reducer = create_reducer({
            "a": [
                lambda s, p, m: {"v": "x", "len": None},
                lambda s, p, m: {"len": len(s["v"])},
            ],
        }, {})
        assert reducer.run({}, {"type": "a"}) == {"v": "x", "len": 1}

    def test_same_partial_twice_is_idempotent(self):
        """Merging the same partial twice changes nothing."""
        reducer = create_reducer({"a": returning({"k": 1})}, {})
        once = reducer.run({"other": "kept"}, {"type": "a"})
        twice = reducer.run(once, {"type": "a"})
        assert twice == once == {"other": "kept", "k": 1}

    def test_two_handlers_same_key(self):
        """Two handlers on one key both apply."""
        reducer = create_reducer({"a": [bump("n"), bump("n")]}, {})
        state = reducer.run({}, {"type": "a"})
        assert state == {"n": 2}
        assert reducer.run(state, {"type": "a"}) == {"n": 4}

    def test_none_partial_keeps_state(self):
        """A None result keeps the state as it was."""
        reducer = create_reducer({"a": noop}, {})
        assert reducer.run({"x": 1}, {"type": "a"}) == {"x": 1}

    def test_undefined_state_starts_empty(self):
        """A None state starts from an empty dict."""
        reducer = create_reducer({"a": returning({"x": 1})})
        assert reducer.run(None, {"type": "a"}) == {"x": 1}

    def test_input_state_not_mutated(self):
        """The caller's state is never mutated."""
        start = {"n": 1}
        reducer = create_reducer({"a": lambda s, p, m: {"n": s["n"] + 1}}, {})
        new_state = reducer.run(start, {"type": "a"})
        assert start == {"n": 1}
        assert new_state is not start


class TestPayloadAndMeta:
    """Tests for what handlers receive."""

    def test_payload_excludes_type(self):
        """Handlers get the payload without the type field."""
        seen = []
        reducer = create_reducer({"a": lambda s, p, m: seen.append(p)}, {})
        reducer.run({}, {"type": "a", "data": "This is a string"})
        assert seen == [{"data": "This is a string"}]

    def test_action_object_accepted(self):
        """Action instances are accepted as well as mappings."""
        reducer = create_reducer({"a": lambda s, p, m: {"sData": p["data"], "sMeta": m.type}}, {})
        state = reducer.run({}, Action.of("a", data="x"))
        assert state == {"sData": "x", "sMeta": "a"}

    def test_non_action_rejected(self):
        """Anything other than an Action or mapping raises TypeError."""
        reducer = create_reducer({"a": noop}, {})
        with pytest.raises(TypeError):
            reducer.run({}, "a")

    def test_dispatch_visible_to_handlers(self):
        """Type handlers get the bound dispatch in meta."""
        seen = []

        def dispatch(action):
            return None

        reducer = create_reducer({"a": lambda s, p, m: seen.append(m)}, {})
        reducer.bind_dispatch(dispatch)
        reducer.run({}, {"type": "a"})

        assert seen == [Meta(type="a", dispatch=dispatch)]

    def test_helpers_absent_for_plain_handler(self):
        """A plain handler gets no helpers."""
        seen = []
        reducer = create_reducer({"a": lambda s, p, m: seen.append(m.helpers)}, {})
        reducer.run({}, {"type": "a"})
        assert seen == [None]


class TestInterceptors:
    """Tests for pre/post interceptors."""

    def test_pre_then_handler_then_post(self, recording_map):
        """pre runs before the handler and post after it."""
        reducer = create_reducer(recording_map, {})
        state = reducer.run({}, {"type": "a"})
        assert state["order"] == ["pre", "a", "post"]
        assert state["pre_count"] == 1
        assert state["post_count"] == 1

    def test_interceptors_never_see_dispatch(self, recording_map, calls):
        """Only the type handler sees dispatch."""
        reducer = create_reducer(recording_map, {})
        reducer.bind_dispatch(lambda action: None)
        reducer.run({}, {"type": "a", "someData": "hey"})

        metas = dict(calls)
        assert metas["pre"].dispatch is None
        assert metas["post"].dispatch is None
        assert metas["a"].dispatch is not None
        assert metas["pre"].type == metas["post"].type == "a"

    def test_interceptors_receive_payload(self):
        """Interceptors get the action payload."""
        seen = []
        action_map = ActionMap(
            {"a": noop},
            pre=lambda s, p, m: seen.append(("pre", p)),
            post=lambda s, p, m: seen.append(("post", p)),
        )
        apply_action(action_map, {}, {"type": "a", "x": 1})
        assert seen == [("pre", {"x": 1}), ("post", {"x": 1})]

    def test_post_sees_handler_update(self):
        """post sees the handler's merged update."""
        action_map = ActionMap(
            {"a": returning({"v": 2})},
            post=lambda s, p, m: {"doubled": s["v"] * 2},
        )
        assert apply_action(action_map, {}, {"type": "a"}) == {"v": 2, "doubled": 4}

    def test_type_named_pre_is_a_handler(self):
        """A type named "pre" is an ordinary action type."""
        action_map = ActionMap({"pre": returning({"ran": "pre-type"})})
        assert apply_action(action_map, {}, {"type": "pre"}) == {"ran": "pre-type"}
