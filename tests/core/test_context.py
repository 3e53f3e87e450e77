"""Context — tests for value lookup and cancellation propagation.

Tests cover:
    - with_value derives without mutating the parent
    - Lookups fall back through ancestors
    - Cancellation flows to derived contexts, never upward
"""

import threading

from apibind.core.context import Context


def test_background_is_empty_and_live():
    ctx = Context.background()
    assert ctx.value("missing") is None
    assert ctx.value("missing", 7) == 7
    assert not ctx.cancelled


def test_with_value_does_not_touch_parent():
    parent = Context.background()
    child = parent.with_value("user", "ada")
    assert child.value("user") == "ada"
    assert parent.value("user") is None


def test_lookup_walks_ancestors_and_child_shadows():
    root = Context().with_values({"a": 1, "b": 2})
    child = root.with_value("b", 3)
    assert child.value("a") == 1
    assert child.value("b") == 3
    assert root.value("b") == 2


def test_cancel_propagates_to_children_only():
    parent = Context.background()
    child = parent.with_value("k", "v")
    sibling = parent.with_value("k", "w")

    child.cancel()
    assert child.cancelled
    assert not parent.cancelled
    assert not sibling.cancelled

    parent.cancel()
    assert sibling.cancelled


def test_cancel_from_another_thread():
    ctx = Context.background()
    t = threading.Thread(target=ctx.cancel)
    t.start()
    t.join()
    assert ctx.cancelled


def test_cancel_is_idempotent():
    ctx = Context.background()
    ctx.cancel()
    ctx.cancel()
    assert ctx.cancelled
