"""Context — request-scoped value carrier passed as the first operator argument.

Invariants:
    - A Context never changes its values; with_value() returns a derived Context
    - Cancelling a Context cancels every Context derived from it, never its parent
    - cancel() is thread-safe and idempotent

Design Decisions:
    - threading.Event for the cancellation flag: readable from any thread
    - Parent chain instead of copied dicts: deriving is O(1)
"""

import threading
from types import MappingProxyType
from typing import Any, Mapping


class Context:
    """Immutable values plus a cancellation signal, shared by one request."""

    __slots__ = ("_parent", "_values", "_done")

    def __init__(
        self, parent: "Context | None" = None,
        values: Mapping[Any, Any] | None = None,
    ):
        self._parent = parent
        self._values = MappingProxyType(dict(values or {}))
        self._done = threading.Event()

    @classmethod
    def background(cls) -> "Context":
        """Empty root context."""
        return cls()

    def with_value(self, key: Any, value: Any) -> "Context":
        return Context(self, {key: value})

    def with_values(self, values: Mapping[Any, Any]) -> "Context":
        return Context(self, values)

    def value(self, key: Any, default: Any = None) -> Any:
        """Look up key in this context, then in its ancestors."""
        ctx: Context | None = self
        while ctx is not None:
            if key in ctx._values:
                return ctx._values[key]
            ctx = ctx._parent
        return default

    def cancel(self) -> None:
        self._done.set()

    @property
    def cancelled(self) -> bool:
        ctx: Context | None = self
        while ctx is not None:
            if ctx._done.is_set():
                return True
            ctx = ctx._parent
        return False

    def __repr__(self) -> str:
        return f"Context(values={dict(self._values)!r}, cancelled={self.cancelled})"
