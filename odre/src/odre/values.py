"""Taggable runtime values: type definitions and their instances."""
from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional

from .registry import Handler, HandlerRegistry, SelectorLike, coerce_selector
from .selectors import Selector

logger = logging.getLogger(__name__)


class TypeDefinition:
    """A named type with a type-level handler registry and an optional parent.

    Handlers are added while the type is being defined.  The registry is sealed
    by :meth:`seal` or, at the latest, when the first instance is created.
    """

    def __init__(self, name: str, parent: Optional["TypeDefinition"] = None) -> None:
        self.name = name
        self.parent = parent
        self.registry = HandlerRegistry(f"type '{name}'")

    @property
    def sealed(self) -> bool:
        return self.registry.sealed

    def seal(self) -> "TypeDefinition":
        if not self.registry.sealed:
            self.registry.seal()
            logger.debug("sealed type %s with %d handler(s)", self.name, len(self.registry))
        return self

    def chain(self) -> Iterator["TypeDefinition"]:
        """Walk the delegation chain from this type to its root ancestor."""
        current: Optional[TypeDefinition] = self
        while current is not None:
            yield current
            current = current.parent

    def is_subtype_of(self, other: "TypeDefinition") -> bool:
        return any(ancestor is other for ancestor in self.chain())

    def __deepcopy__(self, memo: Dict[int, Any]) -> "TypeDefinition":
        # Definitions are shared; copying a value never clones its type.
        return self

    def new(self, **fields: Any) -> "Instance":
        self.seal()
        return Instance(self, fields)

    def __repr__(self) -> str:
        if self.parent is None:
            return f"TypeDefinition({self.name!r})"
        return f"TypeDefinition({self.name!r}, parent={self.parent.name!r})"


class Instance(MutableMapping[str, Any]):
    """A value that can own operator handlers.

    ``type_definition`` is ``None`` for an untagged structural record; such a
    record has no type-level handlers but may still carry instance overrides.
    Field access goes through the mapping protocol (``value["x"]``).
    """

    def __init__(
        self,
        type_definition: Optional[TypeDefinition] = None,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        read_only: bool = False,
    ) -> None:
        self.type_definition = type_definition
        self._fields: Dict[str, Any] = dict(fields or {})
        self._registry: Optional[HandlerRegistry] = None
        self._read_only = read_only

    @property
    def type_name(self) -> str:
        if self.type_definition is None:
            return "Object"
        return self.type_definition.name

    @property
    def tagged(self) -> bool:
        return self.type_definition is not None

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def fields(self) -> Mapping[str, Any]:
        return MappingProxyType(self._fields)

    @property
    def instance_registry(self) -> Optional[HandlerRegistry]:
        return self._registry

    def override(self, selector: SelectorLike, handler: Handler) -> None:
        if self._registry is None:
            self._registry = HandlerRegistry(
                f"instance of '{self.type_name}'", allow_replace=True
            )
        self._registry.add(selector, handler)

    def snapshot(self) -> "Instance":
        """Return a read-only, deep copy of this value's current state."""
        clone = Instance(self.type_definition, copy.deepcopy(self._fields), read_only=True)
        if self._registry is not None:
            clone._registry = self._registry.copy()
        return clone

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if self._read_only:
            raise TypeError(f"snapshot of '{self.type_name}' is read-only")
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        if self._read_only:
            raise TypeError(f"snapshot of '{self.type_name}' is read-only")
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    # Values compare by identity; value equality is the engine's business.
    __eq__ = object.__eq__
    __ne__ = object.__ne__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self._fields.items())
        return f"{self.type_name}({body})"


def record(**fields: Any) -> Instance:
    """Create an untagged structural record."""
    return Instance(None, fields)


def define_type(
    name: str,
    handlers: Optional[Mapping[SelectorLike, Handler]] = None,
    parent: Optional[TypeDefinition] = None,
) -> TypeDefinition:
    """Declare a type, register its handlers and seal it.

    ``equals`` is always registered before ``strictEquals`` so that mapping
    order does not matter.
    """
    definition = TypeDefinition(name, parent)
    entries = [(coerce_selector(key), handler) for key, handler in (handlers or {}).items()]
    order = list(Selector)
    for selector, handler in sorted(entries, key=lambda item: order.index(item[0])):
        register_type_handler(definition, selector, handler)
    return definition.seal()


def register_type_handler(
    type_definition: TypeDefinition, selector: SelectorLike, handler: Handler
) -> None:
    type_definition.registry.add(selector, handler)


def register_instance_handler(value: Any, selector: SelectorLike, handler: Handler) -> None:
    if not isinstance(value, Instance):
        raise TypeError(
            f"cannot attach operator handlers to a value of type {type(value).__name__}"
        )
    value.override(selector, handler)


__all__ = [
    "TypeDefinition",
    "Instance",
    "record",
    "define_type",
    "register_type_handler",
    "register_instance_handler",
]
