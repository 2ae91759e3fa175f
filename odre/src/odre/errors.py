"""Errors raised by the dispatch engine.

Only engine-side failures live here.  Exceptions raised inside user handlers
are never wrapped and reach the host evaluator unchanged.
"""
from __future__ import annotations

from typing import Optional

from .policies import policy_for
from .selectors import OperatorCategory, Selector


class EngineError(Exception):
    """Base class for failures the engine itself raises."""


class OperatorNotDefined(EngineError):
    def __init__(
        self,
        category: OperatorCategory,
        operator: str,
        type_name: Optional[str] = None,
    ) -> None:
        self.category = category
        self.operator = operator
        self.type_name = type_name
        super().__init__(format_not_defined(category, operator))


class InvalidOverrideConfiguration(EngineError):
    def __init__(self, selector: Selector, owner: str, reason: str) -> None:
        self.selector = selector
        self.owner = owner
        super().__init__(f"Cannot register '{selector.value}' on {owner}: {reason}")


class RegistrySealedError(EngineError):
    def __init__(self, type_name: str, selector: Selector) -> None:
        self.type_name = type_name
        self.selector = selector
        super().__init__(
            f"Type '{type_name}' is already defined; cannot add '{selector.value}'"
        )


class UnknownOperator(EngineError):
    def __init__(self, literal: str, arity: int, detail: str = "") -> None:
        self.literal = literal
        self.arity = arity
        kind = "binary" if arity == 2 else "unary"
        message = f"Unknown {kind} operator '{literal}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def format_not_defined(category: OperatorCategory, operator: str) -> str:
    """Render the category-specific "no behavior" wording for ``operator``."""
    return policy_for(category).message(operator)


__all__ = [
    "EngineError",
    "OperatorNotDefined",
    "InvalidOverrideConfiguration",
    "RegistrySealedError",
    "UnknownOperator",
    "format_not_defined",
]
