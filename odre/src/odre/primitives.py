"""Host-native semantics for operators applied to primitive operands.

Primitives never own handlers, so when both sides are primitive the engine
falls back to these functions.  Each one raises :class:`TypeError` when the
operand kinds are incompatible; the resolver turns that into the category's
default policy.
"""
from __future__ import annotations

import math
import operator
from typing import Any, Callable, Dict, Final

from .selectors import Selector

_UINT32: Final = 0xFFFFFFFF
_INT32_SIGN: Final = 0x80000000


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, str)


def _numbers(lhs: Any, rhs: Any) -> tuple[Any, Any]:
    if not (_is_number(lhs) and _is_number(rhs)):
        raise TypeError("operands are not numbers")
    return lhs, rhs


def _integer(value: Any) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise TypeError("operand is not an integral number")
        return int(value)
    if isinstance(value, int):
        return int(value)
    raise TypeError("operand is not an integer")


def _int32(value: int) -> int:
    """Wrap to a signed 32-bit integer.  ``>>>`` alone yields unsigned results."""
    value &= _UINT32
    return value - 0x100000000 if value & _INT32_SIGN else value


def _to_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _add(lhs: Any, rhs: Any) -> Any:
    if isinstance(lhs, str) or isinstance(rhs, str):
        return _to_text(lhs) + _to_text(rhs)
    lhs, rhs = _numbers(lhs, rhs)
    return lhs + rhs


def _divide(lhs: Any, rhs: Any) -> float:
    lhs, rhs = _numbers(lhs, rhs)
    if rhs == 0:
        if lhs == 0 or lhs != lhs:
            return math.nan
        return (math.inf if lhs > 0 else -math.inf) * math.copysign(1.0, rhs)
    try:
        return lhs / rhs
    except OverflowError:
        return math.inf if (lhs < 0) == (rhs < 0) else -math.inf


def _modulus(lhs: Any, rhs: Any) -> Any:
    lhs, rhs = _numbers(lhs, rhs)
    if rhs == 0:
        return math.nan
    if isinstance(lhs, float) or isinstance(rhs, float):
        try:
            return math.fmod(lhs, rhs)
        except OverflowError:
            return math.nan
    # Remainder takes the sign of the dividend.
    remainder = abs(lhs) % abs(rhs)
    return -remainder if lhs < 0 else remainder


def _exponent(lhs: Any, rhs: Any) -> Any:
    lhs, rhs = _numbers(lhs, rhs)
    try:
        result = lhs ** rhs
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return result


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def _apply(lhs: Any, rhs: Any) -> bool:
        if isinstance(lhs, str) and isinstance(rhs, str):
            return op(lhs, rhs)
        lhs, rhs = _numbers(lhs, rhs)
        return op(lhs, rhs)

    return _apply


def _bitwise(op: Callable[[int, int], int]) -> Callable[[Any, Any], int]:
    def _apply(lhs: Any, rhs: Any) -> int:
        return _int32(op(_int32(_integer(lhs)), _int32(_integer(rhs))))

    return _apply


def _left_shift(lhs: Any, rhs: Any) -> int:
    return _int32(_integer(lhs) << (_integer(rhs) & 31))


def _right_shift(lhs: Any, rhs: Any) -> int:
    return _int32(_integer(lhs)) >> (_integer(rhs) & 31)


def _unsigned_right_shift(lhs: Any, rhs: Any) -> int:
    return (_integer(lhs) & _UINT32) >> (_integer(rhs) & 31)


BINARY_SEMANTICS: Final[Dict[Selector, Callable[[Any, Any], Any]]] = {
    Selector.GREATER_THAN: _compare(operator.gt),
    Selector.GREATER_THAN_EQUAL: _compare(operator.ge),
    Selector.LESS_THAN: _compare(operator.lt),
    Selector.LESS_THAN_EQUAL: _compare(operator.le),
    Selector.ADD: _add,
    Selector.SUBTRACT: lambda lhs, rhs: operator.sub(*_numbers(lhs, rhs)),
    Selector.MULTIPLY: lambda lhs, rhs: operator.mul(*_numbers(lhs, rhs)),
    Selector.DIVIDE: _divide,
    Selector.MODULUS: _modulus,
    Selector.EXPONENT: _exponent,
    Selector.BITWISE_AND: _bitwise(operator.and_),
    Selector.BITWISE_OR: _bitwise(operator.or_),
    Selector.BITWISE_XOR: _bitwise(operator.xor),
    Selector.LEFT_SHIFT: _left_shift,
    Selector.RIGHT_SHIFT: _right_shift,
    Selector.UNSIGNED_RIGHT_SHIFT: _unsigned_right_shift,
}


def _negate(value: Any) -> Any:
    if not _is_number(value):
        raise TypeError("operand is not a number")
    return -value


def _step(delta: int) -> Callable[[Any], Any]:
    def _apply(value: Any) -> Any:
        if not _is_number(value):
            raise TypeError("operand is not a number")
        return value + delta

    return _apply


UNARY_SEMANTICS: Final[Dict[Selector, Callable[[Any], Any]]] = {
    Selector.UNARY_NEGATE: _negate,
    Selector.UNARY_ADD: _step(1),
    Selector.UNARY_SUBTRACT: _step(-1),
    Selector.BITWISE_COMPLEMENT: lambda value: ~_int32(_integer(value)),
}


def apply_binary(selector: Selector, lhs: Any, rhs: Any) -> Any:
    return BINARY_SEMANTICS[selector](lhs, rhs)


def apply_unary(selector: Selector, value: Any) -> Any:
    return UNARY_SEMANTICS[selector](value)


def strict_equal(lhs_kind: str, lhs: Any, rhs_kind: str, rhs: Any) -> bool:
    return lhs_kind == rhs_kind and lhs == rhs


def loose_equal(lhs: Any, rhs: Any) -> bool:
    return lhs == rhs


__all__ = [
    "BINARY_SEMANTICS",
    "UNARY_SEMANTICS",
    "apply_binary",
    "apply_unary",
    "strict_equal",
    "loose_equal",
]
