"""
Handler registration - Tagged variants for action map entries.

Raw handler entries are classified once, when the ActionMap is built:

    entry    := SingleHandler | HandlerSequence | EmptySequence | InvalidEntry
    element  := BareHandler | HandlerTuple | HelperOptions
              | InvalidElement | MissingElement

Faults that belong to one action type are stored in its variant and only
raised when that type is dispatched, so a map with one broken entry still
serves every other type. ActionMap(strict=True) raises them up front instead.
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Union

from .errors import (
    ActionMapUndefined,
    InvalidHandlerType,
    InvalidHelperType,
    NoActionHandler,
    ReducerMapError,
    kind_of,
)


class _Undefined:
    """Marker for an undefined handler slot."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNDEFINED"

    def __bool__(self):
        return False


UNDEFINED = _Undefined()

Handler = Callable[..., Any]


# =============================================================================
# Sequence elements
# =============================================================================

@dataclass(frozen=True)
class BareHandler:
    """A callable that may still bind to a following HelperOptions."""
    fn: Handler


@dataclass(frozen=True)
class HandlerTuple:
    """A (handler, options) pair, run immediately with its own helpers."""
    fn: Handler
    helpers: Mapping[str, Any]


@dataclass(frozen=True)
class HelperOptions:
    """Options that bind to the pending bare handler before them."""
    helpers: Mapping[str, Any]


@dataclass(frozen=True)
class InvalidElement:
    """An element that faults when reached."""
    fault: type[ReducerMapError]
    kind: str

    def error(self) -> ReducerMapError:
        return self.fault(self.kind)


@dataclass(frozen=True)
class MissingElement:
    """An UNDEFINED element; faults as a missing handler for the action type."""


Element = Union[BareHandler, HandlerTuple, HelperOptions, InvalidElement, MissingElement]


# =============================================================================
# Entries
# =============================================================================

@dataclass(frozen=True)
class SingleHandler:
    fn: Handler


@dataclass(frozen=True)
class HandlerSequence:
    elements: tuple[Element, ...]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)


@dataclass(frozen=True)
class EmptySequence:
    pass


@dataclass(frozen=True)
class InvalidEntry:
    kind: str


Entry = Union[SingleHandler, HandlerSequence, EmptySequence, InvalidEntry]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def classify_element(raw: Any) -> Element:
    """Classify one element of a handler sequence."""
    if raw is UNDEFINED:
        return MissingElement()
    if callable(raw):
        return BareHandler(raw)
    if _is_sequence(raw):
        return _classify_tuple(raw)
    if isinstance(raw, Mapping):
        return HelperOptions(raw)
    return InvalidElement(InvalidHandlerType, kind_of(raw))


def _classify_tuple(raw: list | tuple) -> Element:
    # Only the first two slots are read; a missing options slot is None.
    head = raw[0] if len(raw) > 0 else None
    helpers = raw[1] if len(raw) > 1 else None
    if not callable(head):
        return InvalidElement(InvalidHandlerType, kind_of(head))
    if not isinstance(helpers, Mapping):
        return InvalidElement(InvalidHelperType, kind_of(helpers))
    return HandlerTuple(head, helpers)


def classify_entry(raw: Any) -> Entry | None:
    """Classify a raw action map entry. Returns None for an undefined entry."""
    if raw is UNDEFINED:
        return None
    if callable(raw):
        return SingleHandler(raw)
    if _is_sequence(raw):
        if len(raw) == 0:
            return EmptySequence()
        return HandlerSequence(tuple(classify_element(e) for e in raw))
    return InvalidEntry(kind_of(raw))


def entry_problem(action_type: str, entry: Entry | None) -> ReducerMapError | None:
    """
    The first fault dispatching `action_type` would raise, found without
    running any handler. None if the entry is well-formed.
    """
    if entry is None or isinstance(entry, EmptySequence):
        return NoActionHandler(action_type)
    if isinstance(entry, InvalidEntry):
        return InvalidHandlerType(entry.kind)
    if isinstance(entry, SingleHandler):
        return None

    pending = False
    for element in entry:
        if isinstance(element, BareHandler):
            pending = True
        elif isinstance(element, HandlerTuple):
            pending = False
        elif isinstance(element, HelperOptions):
            if not pending:
                return InvalidHandlerType(kind_of(element.helpers))
            pending = False
        elif isinstance(element, InvalidElement):
            return element.error()
        else:
            return NoActionHandler(action_type)
    return None


class ActionMap:
    """
    Read-only registry of handler entries, keyed by action type.

    `pre` and `post` are explicit interceptor fields, so an action type named
    "pre" or "post" is an ordinary entry here. Use from_mapping() for the
    single-mapping form where those keys double as interceptors.
    """

    def __init__(
        self,
        handlers: Mapping[str, Any] | None,
        pre: Handler | None = None,
        post: Handler | None = None,
        strict: bool = False,
    ):
        if handlers is None:
            raise ActionMapUndefined()
        if not isinstance(handlers, Mapping):
            raise TypeError(f"ActionMap handlers must be a mapping, got {kind_of(handlers)}")
        for hook in (pre, post):
            if hook is not None and not callable(hook):
                raise InvalidHandlerType(kind_of(hook))

        self.pre = pre
        self.post = post
        self._entries: Mapping[str, Entry | None] = MappingProxyType(
            {action_type: classify_entry(raw) for action_type, raw in handlers.items()}
        )

        if strict:
            problems = self.problems()
            if problems:
                raise problems[0]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None, strict: bool = False) -> ActionMap:
        """Build from a single mapping, lifting "pre"/"post" keys into interceptors."""
        if mapping is None:
            raise ActionMapUndefined()
        if not isinstance(mapping, Mapping):
            raise TypeError(f"ActionMap must be a mapping, got {kind_of(mapping)}")
        handlers = {k: v for k, v in mapping.items() if k not in ("pre", "post")}
        # Falsy interceptors are treated as absent.
        return cls(
            handlers,
            pre=mapping.get("pre") or None,
            post=mapping.get("post") or None,
            strict=strict,
        )

    def entry_for(self, action_type: str) -> Entry | None:
        return self._entries.get(action_type)

    @property
    def action_types(self) -> list[str]:
        return sorted(t for t, entry in self._entries.items() if entry is not None)

    def problems(self) -> list[ReducerMapError]:
        """Faults that dispatching each registered type would raise."""
        found = []
        for action_type, entry in self._entries.items():
            problem = entry_problem(action_type, entry)
            if problem is not None:
                found.append(problem)
        return found

    def __contains__(self, action_type: object) -> bool:
        return self._entries.get(action_type) is not None

    def __len__(self) -> int:
        return len(self.action_types)

    def __repr__(self):
        return f"ActionMap(types={self.action_types}, pre={self.pre is not None}, post={self.post is not None})"
