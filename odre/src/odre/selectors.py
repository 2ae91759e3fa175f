"""Operator selectors and the categories that group them.

The selector set is closed: members are created when this module is imported
and nothing in the engine adds to it afterwards.  Host code refers to them by
their camelCase identifier (``Selector.ADD.value == "add"``).
"""
from __future__ import annotations

from enum import Enum, unique
from typing import Dict, Final, Iterable


@unique
class Selector(str, Enum):
    EQUALS = "equals"
    STRICT_EQUALS = "strictEquals"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_EQUAL = "greaterThanEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_EQUAL = "lessThanEqual"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULUS = "modulus"
    EXPONENT = "exponent"
    UNARY_NEGATE = "unaryNegate"
    UNARY_ADD = "unaryAdd"
    UNARY_SUBTRACT = "unarySubtract"
    BITWISE_AND = "bitwiseAnd"
    BITWISE_OR = "bitwiseOr"
    BITWISE_XOR = "bitwiseXor"
    BITWISE_COMPLEMENT = "bitwiseComplement"
    LEFT_SHIFT = "leftShift"
    RIGHT_SHIFT = "rightShift"
    UNSIGNED_RIGHT_SHIFT = "unsignedRightShift"

    def __str__(self) -> str:
        return self.value


@unique
class OperatorCategory(str, Enum):
    EQUALITY = "Equality"
    RELATIONAL = "Relational"
    ARITHMETIC_BINARY = "ArithmeticBinary"
    UNARY_ARITHMETIC = "UnaryArithmetic"
    BITWISE_BINARY = "BitwiseBinary"
    BITWISE_UNARY = "BitwiseUnary"
    SHIFT = "Shift"

    def __str__(self) -> str:
        return self.value


_CATEGORY_MEMBERS: Final[dict[OperatorCategory, tuple[Selector, ...]]] = {
    OperatorCategory.EQUALITY: (Selector.EQUALS, Selector.STRICT_EQUALS),
    OperatorCategory.RELATIONAL: (
        Selector.GREATER_THAN,
        Selector.GREATER_THAN_EQUAL,
        Selector.LESS_THAN,
        Selector.LESS_THAN_EQUAL,
    ),
    OperatorCategory.ARITHMETIC_BINARY: (
        Selector.ADD,
        Selector.SUBTRACT,
        Selector.MULTIPLY,
        Selector.DIVIDE,
        Selector.MODULUS,
        Selector.EXPONENT,
    ),
    OperatorCategory.UNARY_ARITHMETIC: (
        Selector.UNARY_NEGATE,
        Selector.UNARY_ADD,
        Selector.UNARY_SUBTRACT,
    ),
    OperatorCategory.BITWISE_BINARY: (
        Selector.BITWISE_AND,
        Selector.BITWISE_OR,
        Selector.BITWISE_XOR,
    ),
    OperatorCategory.BITWISE_UNARY: (Selector.BITWISE_COMPLEMENT,),
    OperatorCategory.SHIFT: (
        Selector.LEFT_SHIFT,
        Selector.RIGHT_SHIFT,
        Selector.UNSIGNED_RIGHT_SHIFT,
    ),
}

SELECTOR_CATEGORY: Final[Dict[Selector, OperatorCategory]] = {
    selector: category
    for category, members in _CATEGORY_MEMBERS.items()
    for selector in members
}

# Selectors whose handlers mutate the receiver and take no argument.
MUTATING_SELECTORS: Final[frozenset[Selector]] = frozenset(
    {Selector.UNARY_ADD, Selector.UNARY_SUBTRACT}
)

UNARY_SELECTORS: Final[frozenset[Selector]] = frozenset(
    {
        Selector.UNARY_NEGATE,
        Selector.UNARY_ADD,
        Selector.UNARY_SUBTRACT,
        Selector.BITWISE_COMPLEMENT,
    }
)


def category_of(selector: Selector) -> OperatorCategory:
    return SELECTOR_CATEGORY[selector]


def selectors_in(category: OperatorCategory) -> tuple[Selector, ...]:
    return _CATEGORY_MEMBERS[category]


def lookup_selector(name: str) -> Selector:
    """Return the selector whose identifier is ``name``.

    Accepts the camelCase identifier (``"strictEquals"``) as well as the enum
    member name (``"STRICT_EQUALS"``).
    """
    try:
        return Selector(name)
    except ValueError:
        pass
    try:
        return Selector[name]
    except KeyError as exc:
        raise KeyError(f"Unknown operator selector '{name}'") from exc


def iter_selectors() -> Iterable[Selector]:
    yield from Selector


__all__ = [
    "Selector",
    "OperatorCategory",
    "SELECTOR_CATEGORY",
    "MUTATING_SELECTORS",
    "UNARY_SELECTORS",
    "category_of",
    "selectors_in",
    "lookup_selector",
    "iter_selectors",
]
