"""Boundary between a host expression evaluator and the dispatcher.

The host evaluates operands left to right, hands the operator token and the
resulting values over, and splices the returned value (or raised error) back
into its own evaluation.  Compound assignment is plain binary dispatch
followed by a rebind of the host's slot.
"""
from __future__ import annotations

from typing import Any, Dict, Final, Generic, Optional, TypeVar, Union

from .config import DispatchConfig
from .dispatch import Dispatcher, Position, parse_position
from .errors import UnknownOperator
from .operands import Primitive, classify
from .telemetry import set_ledger_limit

T = TypeVar("T")

COMPOUND_ASSIGNMENTS: Final[Dict[str, str]] = {
    "+=": "+",
    "-=": "-",
    "*=": "*",
    "/=": "/",
    "%=": "%",
    "**=": "**",
    "&=": "&",
    "|=": "|",
    "^=": "^",
    "<<=": "<<",
    ">>=": ">>",
    ">>>=": ">>>",
}

_default_dispatcher: Optional[Dispatcher] = None


def get_default_dispatcher() -> Dispatcher:
    global _default_dispatcher
    if _default_dispatcher is None:
        config = DispatchConfig.from_env()
        set_ledger_limit(config.ledger_limit)
        _default_dispatcher = Dispatcher(config)
    return _default_dispatcher


def configure(config: Optional[DispatchConfig] = None) -> Dispatcher:
    """Replace the module-level dispatcher used by the functions below.

    Also applies the config's telemetry ledger limit process-wide.
    """
    global _default_dispatcher
    config = config or DispatchConfig()
    set_ledger_limit(config.ledger_limit)
    _default_dispatcher = Dispatcher(config)
    return _default_dispatcher


def dispatch_binary(operator_literal: str, lhs: Any, rhs: Any) -> Any:
    return get_default_dispatcher().dispatch_binary(operator_literal, lhs, rhs)


def dispatch_unary(
    operator_literal: str, position: Union[Position, str, None], operand: Any
) -> Any:
    return get_default_dispatcher().dispatch_unary(operator_literal, position, operand)


class Cell(Generic[T]):
    """A rebindable slot owned by the host: a variable, field or element."""

    def __init__(self, value: T) -> None:
        self.value = value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Cell({self.value!r})"


def assign_compound(
    cell: Cell[Any],
    operator_literal: str,
    rhs: Any,
    dispatcher: Optional[Dispatcher] = None,
) -> Any:
    """Evaluate ``cell OP= rhs`` as ``cell = cell OP rhs``."""
    try:
        binary = COMPOUND_ASSIGNMENTS[operator_literal]
    except KeyError as exc:
        raise UnknownOperator(operator_literal, 2, "not a compound assignment") from exc
    engine = dispatcher or get_default_dispatcher()
    result = engine.dispatch_binary(binary, cell.get(), rhs)
    cell.set(result)
    return result


def update(
    cell: Cell[Any],
    operator_literal: str,
    position: Union[Position, str],
    dispatcher: Optional[Dispatcher] = None,
) -> Any:
    """Evaluate ``++cell``/``cell++`` (or ``--``) against a host slot.

    Taggable values are mutated in place by their handler and the slot keeps
    pointing at them.  Primitive values cannot mutate, so the slot is rebound
    to the stepped value.
    """
    engine = dispatcher or get_default_dispatcher()
    where = parse_position(operator_literal, position)
    if where is Position.NONE:
        raise UnknownOperator(operator_literal, 1, "needs a prefix or postfix position")
    current = cell.get()
    if isinstance(classify(current), Primitive):
        stepped = engine.dispatch_unary(operator_literal, Position.PREFIX, current)
        cell.set(stepped)
        return current if where is Position.POSTFIX else stepped
    return engine.dispatch_unary(operator_literal, where, current)


__all__ = [
    "COMPOUND_ASSIGNMENTS",
    "Cell",
    "assign_compound",
    "configure",
    "dispatch_binary",
    "dispatch_unary",
    "get_default_dispatcher",
    "update",
]
