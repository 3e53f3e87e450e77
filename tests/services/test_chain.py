"""Operator Chain — tests for ordered execution and error short-circuit.

Tests cover:
    - Stages run in declared order, each consuming the previous output
    - Empty chain is pass-through
    - First error stops the chain and is returned untouched (and logged)
    - Cancelled context stops before the next stage
    - bind_parameter applies defaults and uses the parameter name as field
    - Absent required parameters fail; absent optional ones run the chain
    - bind_result attributes errors to the destination
"""

import logging

from apibind.core.bindings import (
    Parameter,
    body_parameter_for,
    data_result_for,
    query_parameter_for,
)
from apibind.core.context import Context
from apibind.core.domain_types import Source
from apibind.core.errors import CancelledError, MissingParameterError
from apibind.core.operator import new_operator, operator_func
from apibind.services.chain import bind_parameter, bind_result, run_chain


def _recording(kind: str, calls: list, fn=lambda v: v):
    def operate(ctx, field, value):
        calls.append((kind, field, value))
        return fn(value), None
    return new_operator(kind, object, object, operate)


def _failing(kind: str, err: Exception):
    return new_operator(kind, object, object, lambda c, f, v: (None, err))


def parse_int(ctx: Context, field: str, value: str) -> tuple[int, Exception | None]:
    try:
        return int(value), None
    except ValueError as exc:
        return 0, exc


def test_stages_run_in_order(ctx):
    calls = []
    ops = [
        _recording("strip", calls, str.strip),
        operator_func("toInt", parse_int),
        _recording("double", calls, lambda v: v * 2),
    ]
    assert run_chain(ctx, "n", " 21 ", ops) == (42, None)
    assert calls == [("strip", "n", " 21 "), ("double", "n", 21)]


def test_empty_chain_is_pass_through(ctx):
    value = object()
    assert run_chain(ctx, "x", value, ()) == (value, None)


def test_first_error_stops_chain(ctx, caplog):
    calls = []
    err = ValueError("nope")
    ops = [_failing("check", err), _recording("after", calls)]
    with caplog.at_level(logging.WARNING, logger="apibind.services.chain"):
        result = run_chain(ctx, "age", "x", ops)
    assert result == (None, err)
    assert result[1] is err
    assert calls == []
    record = caplog.records[-1]
    assert record.operator_kind == "check"
    assert record.field == "age"
    assert record.stage == 0


def test_cancelled_context_stops_chain():
    calls = []
    ctx = Context.background()
    ctx.cancel()
    value, err = run_chain(ctx, "age", "1", [_recording("a", calls)])
    assert value is None
    assert isinstance(err, CancelledError)
    assert err.context.field == "age"
    assert calls == []


def test_cancellation_between_stages():
    ctx = Context.background()
    calls = []

    def cancel_then_pass(c, f, v):
        c.cancel()
        return v, None

    ops = [new_operator("cancel", object, object, cancel_then_pass), _recording("next", calls)]
    _, err = run_chain(ctx, "x", 1, ops)
    assert isinstance(err, CancelledError)
    assert calls == []


def test_bind_parameter_uses_name_as_field(ctx):
    calls = []
    p = query_parameter_for("limit", "", _recording("rec", calls))
    assert bind_parameter(ctx, p, "10") == ("10", None)
    assert calls == [("rec", "limit", "10")]


def test_bind_parameter_unnamed_uses_source_as_field(ctx):
    calls = []
    p = body_parameter_for("payload", _recording("rec", calls))
    bind_parameter(ctx, p, {"a": 1})
    assert calls[0][1] == "body"


def test_bind_parameter_applies_default(ctx):
    p = Parameter(
        source=Source.QUERY, name="limit", default="20",
        operators=(operator_func("toInt", parse_int),),
    )
    assert bind_parameter(ctx, p, None) == (20, None)
    assert bind_parameter(ctx, p, "5") == (5, None)


def test_bind_result_attributes_destination(ctx):
    calls = []
    r = data_result_for("user", _recording("rec", calls))
    assert bind_result(ctx, r, {"id": 1}) == ({"id": 1}, None)
    assert calls == [("rec", "data", {"id": 1})]


def test_bind_parameter_required_and_absent_returns_error(ctx, caplog):
    calls = []
    p = query_parameter_for("limit", "", _recording("rec", calls))
    with caplog.at_level(logging.WARNING, logger="apibind.services.chain"):
        value, err = bind_parameter(ctx, p, None)
    assert value is None
    assert isinstance(err, MissingParameterError)
    assert err.field == "limit"
    assert err.code == "MISSING_PARAMETER"
    assert err.http_status == 400
    assert calls == []
    assert caplog.records[-1].field == "limit"


def test_bind_parameter_optional_and_absent_runs_chain(ctx):
    def inc(ctx: Context, field: str, value: int) -> tuple[int, Exception | None]:
        return value + 1, None

    p = Parameter(
        source=Source.QUERY, name="page", optional=True,
        operators=(operator_func("inc", inc),),
    )
    assert bind_parameter(ctx, p, None) == (1, None)
    bare = Parameter(source=Source.QUERY, name="q", optional=True)
    assert bind_parameter(ctx, bare, None) == (None, None)
