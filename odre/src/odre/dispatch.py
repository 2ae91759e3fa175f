"""Dispatch resolver: decides which behavior runs for an operator application.

Only the left operand defines behavior.  The right operand's handlers are
never consulted, so ``1 + v`` and ``v + 1`` may legitimately differ.
"""
from __future__ import annotations

import logging
from contextlib import nullcontext
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

from .config import DispatchConfig
from .errors import OperatorNotDefined, UnknownOperator
from .operands import Operand, Primitive, Taggable, classify, nominally_compatible, resolve
from .operators import OperatorSpec, binary_operator, unary_operator
from .policies import DefaultPolicy, policy_for
from .primitives import apply_binary, apply_unary, loose_equal, strict_equal
from .selectors import OperatorCategory, Selector
from .telemetry import increment_counter, start_span

logger = logging.getLogger(__name__)

DISPATCH_SPAN = "odre.dispatch"
DISPATCH_COUNTER = "odre_dispatch_total"

Outcome = Tuple[Any, str]


class Position(str, Enum):
    PREFIX = "prefix"
    POSTFIX = "postfix"
    NONE = "none"


def parse_position(operator_literal: str, position: Union[Position, str, None]) -> Position:
    if position is None:
        return Position.NONE
    try:
        return Position(position)
    except ValueError as exc:
        raise UnknownOperator(operator_literal, 1, f"unknown position '{position}'") from exc


def _type_name(operand: Operand) -> str:
    if isinstance(operand, Primitive):
        return operand.kind
    return operand.type_name


def _identical(left: Operand, right: Operand) -> bool:
    return isinstance(left, Taggable) and isinstance(right, Taggable) and left.value is right.value


class Dispatcher:
    def __init__(self, config: Optional[DispatchConfig] = None) -> None:
        self.config = config or DispatchConfig()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def dispatch_binary(self, operator_literal: str, lhs: Any, rhs: Any) -> Any:
        spec = binary_operator(operator_literal)
        return self._observe(spec, lambda: self._binary(spec, lhs, rhs))

    def dispatch_unary(
        self,
        operator_literal: str,
        position: Union[Position, str, None],
        operand: Any,
    ) -> Any:
        spec = unary_operator(operator_literal)
        where = parse_position(operator_literal, position)
        if spec.is_mutating:
            if where is Position.NONE:
                raise UnknownOperator(operator_literal, 1, "needs a prefix or postfix position")
            postfix = where is Position.POSTFIX
            return self._observe(spec, lambda: self._mutate(spec, operand, postfix))
        if where is Position.POSTFIX:
            raise UnknownOperator(operator_literal, 1, "has no postfix form")
        return self._observe(spec, lambda: self._unary(spec, operand))

    def apply_before(self, operator_literal: str, operand: Any) -> Any:
        """Prefix ``++``/``--``: mutate, then yield the mutated value."""
        return self.dispatch_unary(operator_literal, Position.PREFIX, operand)

    def apply_after(self, operator_literal: str, operand: Any) -> Any:
        """Postfix ``++``/``--``: yield a snapshot taken before the mutation."""
        return self.dispatch_unary(operator_literal, Position.POSTFIX, operand)

    def equals(self, lhs: Any, rhs: Any) -> Any:
        return self.dispatch_binary("==", lhs, rhs)

    def strict_equals(self, lhs: Any, rhs: Any) -> Any:
        return self.dispatch_binary("===", lhs, rhs)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _binary(self, spec: OperatorSpec, lhs: Any, rhs: Any) -> Outcome:
        left = classify(lhs)
        right = classify(rhs)

        if spec.category is OperatorCategory.EQUALITY:
            if spec.selector is Selector.STRICT_EQUALS:
                result, outcome = self._strict_equals(left, right)
            else:
                result, outcome = self._equals(left, right)
            if spec.negated:
                return not result, outcome
            return result, outcome

        policy = policy_for(spec.category)
        if isinstance(left, Primitive):
            if isinstance(right, Taggable):
                return self._default(policy.primitive_lhs, spec, _type_name(left)), "default"
            try:
                return apply_binary(spec.selector, left.value, right.value), "native"
            except TypeError:
                return self._default(policy.primitive_lhs, spec, _type_name(left)), "default"

        handler = resolve(left, spec.selector)
        if handler is None:
            return self._default(policy.default, spec, left.type_name), "default"
        return handler(lhs, rhs), "handler"

    def _equals(self, left: Operand, right: Operand) -> Outcome:
        if _identical(left, right):
            return True, "identity"
        handler = resolve(left, Selector.EQUALS)
        if handler is not None:
            return handler(left.value, right.value), "handler"
        if isinstance(left, Primitive) and isinstance(right, Primitive):
            return loose_equal(left.value, right.value), "native"
        return False, "default"

    def _strict_equals(self, left: Operand, right: Operand) -> Outcome:
        if _identical(left, right):
            return True, "identity"
        handler = resolve(left, Selector.STRICT_EQUALS)
        if handler is not None:
            return handler(left.value, right.value), "handler"
        equals = resolve(left, Selector.EQUALS)
        if equals is not None and isinstance(left, Taggable):
            if not nominally_compatible(left, right):
                return False, "derived"
            return bool(equals(left.value, right.value)), "derived"
        if isinstance(left, Primitive) and isinstance(right, Primitive):
            return strict_equal(left.kind, left.value, right.kind, right.value), "native"
        return False, "default"

    def _unary(self, spec: OperatorSpec, operand: Any) -> Outcome:
        target = classify(operand)
        policy = policy_for(spec.category)
        if isinstance(target, Primitive):
            try:
                return apply_unary(spec.selector, target.value), "native"
            except TypeError:
                return self._default(policy.primitive_lhs, spec, target.kind), "default"
        handler = resolve(target, spec.selector)
        if handler is None:
            return self._default(policy.default, spec, target.type_name), "default"
        return handler(operand), "handler"

    def _mutate(self, spec: OperatorSpec, operand: Any, postfix: bool) -> Outcome:
        target = classify(operand)
        policy = policy_for(spec.category)
        if isinstance(target, Primitive):
            # Primitives cannot change in place; the host rebinds its slot.
            try:
                updated = apply_unary(spec.selector, target.value)
            except TypeError:
                return self._default(policy.primitive_lhs, spec, target.kind), "default"
            return (target.value if postfix else updated), "native"

        handler = resolve(target, spec.selector)
        if handler is None:
            return self._default(policy.default, spec, target.type_name), "default"
        if postfix:
            before = operand.snapshot()
            handler(operand)
            return before, "handler"
        handler(operand)
        return operand, "handler"

    def _default(self, policy: DefaultPolicy, spec: OperatorSpec, type_name: str) -> Any:
        logger.debug(
            "no handler for %s on %s, applying %s", spec.literal, type_name, policy.value
        )
        if policy is DefaultPolicy.RETURN_NAN:
            return self.config.nan_sentinel
        if policy is DefaultPolicy.FALSE_BY_IDENTITY:
            return False
        raise OperatorNotDefined(spec.category, spec.literal, type_name)

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    def _observe(self, spec: OperatorSpec, run: Callable[[], Outcome]) -> Any:
        attributes = {"operator": spec.literal, "selector": spec.selector.value}
        span = start_span(DISPATCH_SPAN, attributes) if self.config.trace_spans else nullcontext()
        try:
            with span:
                result, outcome = run()
        except Exception:
            self._count(spec, "error")
            raise
        self._count(spec, outcome)
        return result

    def _count(self, spec: OperatorSpec, outcome: str) -> None:
        if self.config.record_metrics:
            increment_counter(
                DISPATCH_COUNTER, attributes={"operator": spec.literal, "outcome": outcome}
            )


__all__ = ["Dispatcher", "Position", "parse_position", "DISPATCH_SPAN", "DISPATCH_COUNTER"]
