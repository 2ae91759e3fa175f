"""Operator literal table.

Maps the tokens a host evaluator hands over (``"+"``, ``"!=="``, ``"++"`` ...)
to the selector that implements them.  Each entry records the category and,
for ``!=``/``!==``, that the result is the negation of the underlying equality.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .errors import UnknownOperator
from .selectors import MUTATING_SELECTORS, OperatorCategory, Selector, category_of


@dataclass(frozen=True)
class OperatorSpec:
    literal: str
    arity: int
    selector: Selector
    description: str
    negated: bool = False

    @property
    def category(self) -> OperatorCategory:
        return category_of(self.selector)

    @property
    def is_mutating(self) -> bool:
        return self.selector in MUTATING_SELECTORS


BINARY_OPERATORS: Dict[str, OperatorSpec] = {}
UNARY_OPERATORS: Dict[str, OperatorSpec] = {}


def register(spec: OperatorSpec) -> OperatorSpec:
    table = BINARY_OPERATORS if spec.arity == 2 else UNARY_OPERATORS
    if spec.literal in table:
        raise ValueError(f"Operator '{spec.literal}' already registered")
    table[spec.literal] = spec
    return spec


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------

register(OperatorSpec("==", 2, Selector.EQUALS, "Loose equality"))
register(OperatorSpec("!=", 2, Selector.EQUALS, "Negated loose equality", negated=True))
register(OperatorSpec("===", 2, Selector.STRICT_EQUALS, "Strict equality"))
register(
    OperatorSpec("!==", 2, Selector.STRICT_EQUALS, "Negated strict equality", negated=True)
)
register(OperatorSpec(">", 2, Selector.GREATER_THAN, "Greater than"))
register(OperatorSpec(">=", 2, Selector.GREATER_THAN_EQUAL, "Greater than or equal"))
register(OperatorSpec("<", 2, Selector.LESS_THAN, "Less than"))
register(OperatorSpec("<=", 2, Selector.LESS_THAN_EQUAL, "Less than or equal"))
register(OperatorSpec("+", 2, Selector.ADD, "Addition"))
register(OperatorSpec("-", 2, Selector.SUBTRACT, "Subtraction"))
register(OperatorSpec("*", 2, Selector.MULTIPLY, "Multiplication"))
register(OperatorSpec("/", 2, Selector.DIVIDE, "Division"))
register(OperatorSpec("%", 2, Selector.MODULUS, "Remainder"))
register(OperatorSpec("**", 2, Selector.EXPONENT, "Exponentiation"))
register(OperatorSpec("&", 2, Selector.BITWISE_AND, "Bitwise and"))
register(OperatorSpec("|", 2, Selector.BITWISE_OR, "Bitwise or"))
register(OperatorSpec("^", 2, Selector.BITWISE_XOR, "Bitwise exclusive or"))
register(OperatorSpec("<<", 2, Selector.LEFT_SHIFT, "Left shift"))
register(OperatorSpec(">>", 2, Selector.RIGHT_SHIFT, "Sign-propagating right shift"))
register(OperatorSpec(">>>", 2, Selector.UNSIGNED_RIGHT_SHIFT, "Zero-fill right shift"))

# ---------------------------------------------------------------------------
# Unary operators
# ---------------------------------------------------------------------------

register(OperatorSpec("-", 1, Selector.UNARY_NEGATE, "Negation"))
register(OperatorSpec("++", 1, Selector.UNARY_ADD, "Increment in place"))
register(OperatorSpec("--", 1, Selector.UNARY_SUBTRACT, "Decrement in place"))
register(OperatorSpec("~", 1, Selector.BITWISE_COMPLEMENT, "Bitwise complement"))


def binary_operator(literal: str) -> OperatorSpec:
    try:
        return BINARY_OPERATORS[literal]
    except KeyError as exc:
        raise UnknownOperator(literal, arity=2) from exc


def unary_operator(literal: str) -> OperatorSpec:
    try:
        return UNARY_OPERATORS[literal]
    except KeyError as exc:
        raise UnknownOperator(literal, arity=1) from exc


def operators_for(selector: Selector) -> Iterable[OperatorSpec]:
    """Yield every literal backed by ``selector`` (``==`` and ``!=`` share one)."""
    for table in (BINARY_OPERATORS, UNARY_OPERATORS):
        for spec in table.values():
            if spec.selector is selector:
                yield spec


__all__ = [
    "OperatorSpec",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "register",
    "binary_operator",
    "unary_operator",
    "operators_for",
]
