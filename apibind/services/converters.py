"""Standard Converters — ready-made operators for common wire-string conversions.

Invariants:
    - Every converter has kind "converter" unless built with another kind
    - A failed conversion returns ConversionError naming the field; it never raises
    - Converters hold no state and are safe to share across routes
"""

from typing import Any, Callable

from apibind.core.context import Context
from apibind.core.errors import ConversionError
from apibind.core.operator import Operator, new_operator

CONVERTER = "converter"

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def converter_for(
    in_type: Any, out_type: Any, fn: Callable[[Any], Any], kind: str = CONVERTER,
) -> Operator:
    """Wrap a plain raising function value -> value as an operator.

    ValueError, TypeError or AttributeError raised by fn become a returned
    ConversionError.
    """

    def operate(ctx: Context, field: str, value: Any):
        try:
            return fn(value), None
        except (ValueError, TypeError, AttributeError) as exc:
            return None, ConversionError(kind, field, value, str(exc))

    return new_operator(kind, in_type, out_type, operate)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError("not a boolean")


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


to_int = converter_for(str, int, int)
to_float = converter_for(str, float, float)
to_bool = converter_for(str, bool, _parse_bool)
split_csv = converter_for(str, list[str], _split_csv)
