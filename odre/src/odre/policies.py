"""Per-category default behavior when no handler resolves."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final

from .selectors import OperatorCategory


class DefaultPolicy(str, Enum):
    THROW = "throw"
    RETURN_NAN = "return_nan"
    FALSE_BY_IDENTITY = "false_by_identity"


OPERATOR_TEMPLATE: Final = "No behavior defined for operator '{operator}'"
UNARY_TEMPLATE: Final = "No behavior defined for unary operator '{operator}'"
BITWISE_TEMPLATE: Final = "No behavior defined for bitwise operator '{operator}'"
SHIFT_TEMPLATE: Final = "No behavior defined for shifting operator '{operator}'"


@dataclass(frozen=True)
class CategoryPolicy:
    """Fallbacks for one operator category.

    ``default`` applies when the left operand carries no handler.
    ``primitive_lhs`` applies when a primitive left operand meets a taggable
    right operand; the right operand's registry is never consulted.
    """

    category: OperatorCategory
    default: DefaultPolicy
    primitive_lhs: DefaultPolicy
    message_template: str

    def message(self, operator: str) -> str:
        return self.message_template.format(operator=operator)


POLICY_TABLE: Final[Dict[OperatorCategory, CategoryPolicy]] = {
    policy.category: policy
    for policy in (
        CategoryPolicy(
            OperatorCategory.EQUALITY,
            default=DefaultPolicy.FALSE_BY_IDENTITY,
            primitive_lhs=DefaultPolicy.FALSE_BY_IDENTITY,
            message_template=OPERATOR_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.RELATIONAL,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.THROW,
            message_template=OPERATOR_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.ARITHMETIC_BINARY,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.RETURN_NAN,
            message_template=OPERATOR_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.UNARY_ARITHMETIC,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.THROW,
            message_template=UNARY_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.BITWISE_BINARY,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.RETURN_NAN,
            message_template=BITWISE_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.BITWISE_UNARY,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.THROW,
            message_template=BITWISE_TEMPLATE,
        ),
        CategoryPolicy(
            OperatorCategory.SHIFT,
            default=DefaultPolicy.THROW,
            primitive_lhs=DefaultPolicy.RETURN_NAN,
            message_template=SHIFT_TEMPLATE,
        ),
    )
}


def policy_for(category: OperatorCategory) -> CategoryPolicy:
    return POLICY_TABLE[category]


__all__ = [
    "DefaultPolicy",
    "CategoryPolicy",
    "POLICY_TABLE",
    "OPERATOR_TEMPLATE",
    "UNARY_TEMPLATE",
    "BITWISE_TEMPLATE",
    "SHIFT_TEMPLATE",
    "policy_for",
]
