"""Operand classification and handler lookup."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from .registry import Handler, HandlerRegistry
from .selectors import Selector
from .values import Instance, TypeDefinition

NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
NULL = "null"


@dataclass(frozen=True)
class Primitive:
    kind: str
    value: Any


@dataclass(frozen=True)
class Taggable:
    """A value that may carry handlers.

    ``registries`` is the ordered lookup path: the instance registry (when the
    value has one) followed by the type registry of each definition in the
    delegation chain, most-derived first.  Untagged values have an empty path
    or only their instance registry.
    """

    value: Any
    type_name: str
    type_definition: Optional[TypeDefinition] = None
    registries: Tuple[HandlerRegistry, ...] = field(default=())

    @property
    def untagged(self) -> bool:
        return self.type_definition is None


Operand = Union[Primitive, Taggable]


def classify(value: Any) -> Operand:
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return Primitive(BOOLEAN, value)
    if isinstance(value, (int, float)):
        return Primitive(NUMBER, value)
    if isinstance(value, str):
        return Primitive(STRING, value)
    if value is None:
        return Primitive(NULL, None)
    if isinstance(value, Instance):
        registries: list[HandlerRegistry] = []
        if value.instance_registry is not None:
            registries.append(value.instance_registry)
        if value.type_definition is not None:
            registries.extend(definition.registry for definition in value.type_definition.chain())
        return Taggable(value, value.type_name, value.type_definition, tuple(registries))
    return Taggable(value, type(value).__name__)


def resolve(operand: Operand, selector: Selector) -> Optional[Handler]:
    """Return the first handler for ``selector`` along the operand's lookup path."""
    if isinstance(operand, Primitive):
        return None
    for registry in operand.registries:
        handler = registry.get(selector)
        if handler is not None:
            return handler
    return None


def nominally_compatible(lhs: Taggable, rhs: Operand) -> bool:
    """Whether ``rhs`` may be strictly equal to ``lhs`` by an ``equals`` handler.

    A tagged ``lhs`` requires ``rhs`` to be an instance of the very same type
    definition.  An untagged ``lhs`` accepts any non-primitive ``rhs``.
    """
    if not isinstance(rhs, Taggable):
        return False
    if lhs.untagged:
        return True
    return rhs.type_definition is lhs.type_definition


__all__ = [
    "NUMBER",
    "STRING",
    "BOOLEAN",
    "NULL",
    "Primitive",
    "Taggable",
    "Operand",
    "classify",
    "resolve",
    "nominally_compatible",
]
