"""Operators — typed, kind-tagged transform stages invoked as (ctx, field, value).

Invariants:
    - kind, in_type and out_type are fixed at construction (read-only properties)
    - operate() returns (output, None) or (None, error), never both non-None
    - operator_func() validates the wrapped function's shape at construction:
      exactly 3 parameters (Context, str, T), return annotation tuple[U, E]
      with E an exception type. A mismatch raises OperatorSignatureError
      before any Operator is returned
    - An introspected operator never receives None for its input: the zero
      value of in_type is built fresh for each call instead
    - Exceptions raised (not returned) by a wrapped function propagate as-is

Design Decisions:
    - Two construction paths share one Operator base: new_operator() trusts
      the caller, operator_func() derives types from annotations
    - Annotations resolved with typing.get_type_hints, so modules using
      postponed annotations work
"""

import dataclasses
import functools
import inspect
import types
from abc import ABC, abstractmethod
from enum import Enum
from typing import (
    Annotated, Any, Callable, Generic, Literal, TypeVar, Union,
    get_args, get_origin, get_type_hints,
)

from pydantic import BaseModel

from apibind.core.context import Context
from apibind.core.errors import (
    ArityError,
    ContextParameterError,
    ErrorResultError,
    FieldParameterError,
    MissingAnnotationError,
    NotCallableError,
    OperatorSignatureError,
    ResultCountError,
    ZeroValueError,
)

In = TypeVar("In")
Out = TypeVar("Out")

OperatorResult = tuple[Any, Exception | None]
OperatorFn = Callable[[Context, str, Any], OperatorResult]


class Operator(ABC, Generic[In, Out]):
    """A transform stage. Shared across concurrent requests; must be reentrant."""

    __slots__ = ("_kind", "_in", "_out")

    def __init__(self, kind: str, in_type: Any, out_type: Any):
        self._kind = kind
        self._in = in_type
        self._out = out_type

    @property
    def kind(self) -> str:
        """Transform category, e.g. "converter" or "validator"."""
        return self._kind

    @property
    def in_type(self) -> Any:
        return self._in

    @property
    def out_type(self) -> Any:
        return self._out

    @abstractmethod
    def operate(
        self, ctx: Context, field: str, value: In | None,
    ) -> tuple[Out | None, Exception | None]:
        """Transform value. field identifies the bound input for error attribution."""

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} kind={self._kind!r} "
            f"in={type_name(self._in)} out={type_name(self._out)}>"
        )


class _ExplicitOperator(Operator[In, Out]):
    __slots__ = ("_fn",)

    def __init__(self, kind: str, in_type: Any, out_type: Any, fn: OperatorFn):
        super().__init__(kind, in_type, out_type)
        self._fn = fn

    def operate(self, ctx, field, value):
        output, err = self._fn(ctx, field, value)
        if err is None:
            return output, None
        return None, err


class _IntrospectedOperator(Operator[In, Out]):
    __slots__ = ("_fn",)

    def __init__(self, kind: str, in_type: Any, out_type: Any, fn: Callable):
        super().__init__(kind, in_type, out_type)
        self._fn = fn

    def operate(self, ctx, field, value):
        if value is None:
            try:
                value = zero_value(self._in)
            except ZeroValueError as exc:
                exc.context.operator_kind = self._kind
                exc.context.field = field
                return None, exc
        output, err = self._fn(ctx, field, value)
        if err is None:
            return output, None
        return None, err


# ─── Construction ────────────────────────────────────────────────

def new_operator(
    kind: str, in_type: Any, out_type: Any, fn: OperatorFn,
) -> Operator:
    """Build an operator from a function already shaped (ctx, field, value) -> (value, error).

    No validation is performed: in_type/out_type must describe what fn
    actually accepts and returns.
    """
    return _ExplicitOperator(kind, in_type, out_type, fn)


def operator_func(kind: str, fn: Callable) -> Operator:
    """Build an operator from an annotated function.

    fn must have the signature::

        def fn(ctx: Context, field: str, value: T) -> tuple[U, Exception | None]

    in_type is T and out_type is U. Raises an OperatorSignatureError subclass
    if fn does not match.
    """
    in_type, out_type = _check_signature(kind, fn)
    return _IntrospectedOperator(kind, in_type, out_type, fn)


def _check_signature(kind: str, fn: Any) -> tuple[Any, Any]:
    if isinstance(fn, type) or not callable(fn):
        raise NotCallableError(kind, fn)
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise NotCallableError(kind, fn) from exc

    params = list(sig.parameters.values())
    if len(params) != 3 or any(
        p.kind not in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) for p in params
    ):
        raise ArityError(kind, len(params))

    hints = _type_hints(kind, fn)
    ctx_param, field_param, value_param = params
    ctx_ann = hints.get(ctx_param.name, inspect.Parameter.empty)
    if not (isinstance(ctx_ann, type) and issubclass(ctx_ann, Context)):
        raise ContextParameterError(kind, ctx_ann)
    field_ann = hints.get(field_param.name, inspect.Parameter.empty)
    if field_ann is not str:
        raise FieldParameterError(kind, field_ann)
    if value_param.name not in hints:
        raise MissingAnnotationError(kind, f"parameter '{value_param.name}'")
    if "return" not in hints:
        raise MissingAnnotationError(kind, "return value")

    ret = hints["return"]
    results = get_args(ret) if get_origin(ret) is tuple else ()
    if len(results) != 2 or results[1] is Ellipsis:
        raise ResultCountError(kind, ret)
    if not _is_error_type(results[1]):
        raise ErrorResultError(kind, results[1])
    return hints[value_param.name], results[0]


def _type_hints(kind: str, fn: Any) -> dict[str, Any]:
    target = fn
    while isinstance(target, functools.partial):
        target = target.func
    if not (inspect.isfunction(target) or inspect.ismethod(target)):
        # callable instance: annotations live on the class's __call__
        target = type(target).__call__
    try:
        return get_type_hints(target)
    except (NameError, TypeError) as exc:
        raise OperatorSignatureError(
            kind, f"cannot resolve annotations: {exc}",
        ) from exc


def _is_error_type(annotation: Any) -> bool:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [a for a in get_args(annotation) if a is not type(None)]
    else:
        members = [annotation]
    return bool(members) and all(
        isinstance(m, type) and issubclass(m, Exception) for m in members
    )


# ─── Zero Values ─────────────────────────────────────────────────

def zero_value(tp: Any) -> Any:
    """Return a fresh zero value of tp. Raises ZeroValueError if tp has none.

    Required fields of pydantic models and dataclasses are filled with their
    own zero values, recursively. A record that requires itself has none.
    """
    return _zero(tp, frozenset())


def _zero(tp: Any, building: frozenset) -> Any:
    if tp is Any or tp is None or tp is type(None):
        return None
    supertype = getattr(tp, "__supertype__", None)  # typing.NewType
    if supertype is not None:
        return _zero(supertype, building)

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        args = get_args(tp)
        if type(None) in args:
            return None
        return _zero(args[0], building)
    if origin is Annotated:
        return _zero(get_args(tp)[0], building)
    if origin is Literal:
        return get_args(tp)[0]
    if origin is not None:
        tp = origin

    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return next(iter(tp), None)
        if issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp):
            if tp in building:
                raise ZeroValueError(tp)
            return _zero_record(tp, building | {tp})
    try:
        return tp()
    except TypeError as exc:
        raise ZeroValueError(tp) from exc


def _zero_record(tp: type, building: frozenset) -> Any:
    if issubclass(tp, BaseModel):
        # model_construct: zeros may violate field constraints
        return tp.model_construct(**{
            name: _zero(f.annotation, building)
            for name, f in tp.model_fields.items() if f.is_required()
        })
    try:
        hints = get_type_hints(tp)
    except (NameError, TypeError):
        hints = {}
    required = {
        f.name: _zero(hints.get(f.name, Any), building)
        for f in dataclasses.fields(tp)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }
    try:
        return tp(**required)
    except (TypeError, ValueError) as exc:
        raise ZeroValueError(tp) from exc


def type_name(tp: Any) -> str:
    """Readable name for a type descriptor."""
    if tp is Any:
        return "Any"
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
