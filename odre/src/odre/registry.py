"""Selector-to-handler mappings owned by type definitions and instances."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Union

from .errors import InvalidOverrideConfiguration, RegistrySealedError
from .selectors import Selector, lookup_selector

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
SelectorLike = Union[Selector, str]


def coerce_selector(selector: SelectorLike) -> Selector:
    if isinstance(selector, Selector):
        return selector
    return lookup_selector(selector)


class HandlerRegistry:
    """One level of operator handlers.

    Type-level registries are append-only until sealed.  Instance-level
    registries allow a selector to be replaced, but still refuse
    ``strictEquals`` unless ``equals`` is present on the same level.
    """

    def __init__(self, owner: str, *, allow_replace: bool = False) -> None:
        self.owner = owner
        self.allow_replace = allow_replace
        self._handlers: Dict[Selector, Handler] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def add(self, selector: SelectorLike, handler: Handler) -> None:
        selector = coerce_selector(selector)
        if self._sealed:
            raise RegistrySealedError(self.owner, selector)
        if not callable(handler):
            raise InvalidOverrideConfiguration(selector, self.owner, "handler is not callable")
        if selector is Selector.STRICT_EQUALS and Selector.EQUALS not in self._handlers:
            raise InvalidOverrideConfiguration(
                selector, self.owner, "'strictEquals' requires 'equals' on the same registry"
            )
        if selector in self._handlers and not self.allow_replace:
            raise InvalidOverrideConfiguration(selector, self.owner, "selector already registered")
        self._handlers[selector] = handler
        logger.debug("registered %s on %s", selector.value, self.owner)

    def get(self, selector: Selector) -> Optional[Handler]:
        return self._handlers.get(selector)

    def copy(self, owner: Optional[str] = None) -> "HandlerRegistry":
        clone = HandlerRegistry(owner or self.owner, allow_replace=self.allow_replace)
        clone._handlers = dict(self._handlers)
        return clone

    def __contains__(self, selector: object) -> bool:
        return selector in self._handlers

    def __iter__(self) -> Iterator[Selector]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        names = ", ".join(selector.value for selector in self._handlers)
        return f"HandlerRegistry({self.owner!r}, [{names}])"


__all__ = ["Handler", "HandlerRegistry", "SelectorLike", "coerce_selector"]
