"""Mutation registry — named, synchronous state transformers."""

from __future__ import annotations

from typing import Any, Callable

from commitx.errors import DuplicateMutationError, UnknownMutationError
from commitx.guard import WriteGuard
from commitx.registry import Registry

MutationFn = Callable[[Any, Any], None]


class MutationRegistry(Registry[MutationFn]):
    """Runs each handler as `handler(state, payload)` with the write guard open."""

    kind = "mutation"
    duplicate_error = DuplicateMutationError

    def __init__(self, state: Any, guard: WriteGuard, *, validation: bool = True) -> None:
        super().__init__(validation=validation)
        self._state = state
        self._guard = guard

    def invoke(self, name: str, payload: Any = None) -> None:
        if name not in self:
            raise UnknownMutationError(name)
        handler = self._entries[name]
        with self._guard.hold():
            handler(self._state, payload)
