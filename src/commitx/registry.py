"""Named-handler registry shared by getters, mutations and actions."""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, TypeVar

from commitx.errors import DuplicateError

logger = logging.getLogger("commitx.registry")

E = TypeVar("E")


class Registry(Generic[E]):
    """Maps names to entries, enforcing the duplicate-name policy.

    With validation on, a second registration under the same name raises
    `duplicate_error`. With validation off, it is ignored and the first
    registration stays in place.
    """

    kind = "handler"
    duplicate_error: type[DuplicateError] = DuplicateError

    def __init__(self, *, validation: bool = True) -> None:
        self.validation = validation
        self._entries: dict[Any, E] = {}

    def register(self, name: str, handler) -> None:
        if name in self._entries:
            if self.validation:
                raise self.duplicate_error(name)
            logger.warning("Ignoring duplicate %s %r", self.kind, name)
            return
        self._entries[name] = self._wrap(name, handler)
        logger.debug("Registered %s %r", self.kind, name)

    def _wrap(self, name: str, handler) -> E:
        return handler

    def __contains__(self, name: object) -> bool:
        try:
            return name in self._entries
        except TypeError:  # unhashable type
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
