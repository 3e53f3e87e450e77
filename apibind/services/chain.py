"""Operator Chain — drives a Parameter's or Result's operators in declared order.

Invariants:
    - Stage N receives stage N-1's output; stage 0 receives the wire value
    - The first error stops the chain and is returned untouched
    - A cancelled context stops the chain before the next stage runs,
      returning CancelledError
    - Empty operator sequence returns the input unchanged
    - A required parameter with no value and no default never reaches its chain
    - Nothing here raises for invocation failures; exceptions raised by an
      operator itself propagate

Design Decisions:
    - Failures logged at WARNING with operator_kind/field/stage extras;
      mapping the error onto a wire response is the caller's job
"""

import logging
from typing import Any, Sequence

from apibind.core.bindings import Parameter, Result
from apibind.core.context import Context
from apibind.core.errors import BindingError, CancelledError, MissingParameterError
from apibind.core.operator import Operator

logger = logging.getLogger(__name__)


def run_chain(
    ctx: Context, field: str, value: Any, operators: Sequence[Operator],
) -> tuple[Any, Exception | None]:
    """Apply operators to value in order. Returns (output, None) or (None, error)."""
    for stage, op in enumerate(operators):
        if ctx.cancelled:
            return None, CancelledError(field)
        value, err = op.operate(ctx, field, value)
        if err is not None:
            logger.warning(
                f"Operator '{op.kind}' failed on field '{field}': {err}",
                extra={
                    "operator_kind": op.kind,
                    "field": field,
                    "stage": stage,
                    "error_code": err.code if isinstance(err, BindingError) else None,
                },
            )
            return None, err
    return value, None


def bind_parameter(
    ctx: Context, parameter: Parameter, raw: Any,
) -> tuple[Any, Exception | None]:
    """Turn a raw wire value into the handler argument.

    An absent raw value is replaced by parameter.default when one is set.
    Otherwise an absent value is passed to the chain only for optional
    parameters; a required one yields MissingParameterError.
    """
    field = parameter.name or parameter.source.value
    if raw is None:
        if parameter.default is not None:
            raw = parameter.default
        elif not parameter.optional:
            logger.warning(
                f"Required parameter '{field}' is missing",
                extra={"field": field, "error_code": "MISSING_PARAMETER"},
            )
            return None, MissingParameterError(field)
    return run_chain(ctx, field, raw, parameter.operators)


def bind_result(
    ctx: Context, result: Result, value: Any,
) -> tuple[Any, Exception | None]:
    """Turn a handler return value into its wire representation."""
    return run_chain(ctx, result.destination.value, value, result.operators)
