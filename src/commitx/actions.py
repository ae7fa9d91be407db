"""Action registry — named, possibly asynchronous orchestration handlers.

An action receives an ActionContext exposing the store's own dispatch,
commit, getters and state, so it can read live getters and issue nested
commits and dispatches. Whatever it returns is handed back as an
awaitable. A coroutine is scheduled as a Task when an event loop is
running, so a dispatch nobody awaits still runs. Other awaitables are
returned as-is, and plain values are wrapped in a `Resolved`.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator, Generic, TypeVar

from commitx.errors import DuplicateActionError, UnknownActionError
from commitx.registry import Registry

T = TypeVar("T")


@dataclass(frozen=True)
class ActionContext:
    dispatch: Callable[..., Awaitable[Any]]
    commit: Callable[..., None]
    getters: Any
    state: Any


ActionFn = Callable[[ActionContext, Any], Any]


class Resolved(Generic[T]):
    """An awaitable that is already settled with `value`.

    Awaiting it never suspends, and dropping it without awaiting is
    harmless (unlike an un-awaited coroutine).
    """

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __await__(self) -> Generator[Any, None, T]:
        return self.value
        yield  # makes this a generator

    def __repr__(self) -> str:
        return f"Resolved({self.value!r})"


class ActionRegistry(Registry[ActionFn]):
    kind = "action"
    duplicate_error = DuplicateActionError

    def __init__(self, context: ActionContext, *, validation: bool = True) -> None:
        super().__init__(validation=validation)
        self._context = context

    def invoke(self, name: str, payload: Any = None) -> Awaitable[Any]:
        if name not in self:
            raise UnknownActionError(name)
        result = self._entries[name](self._context, payload)
        if inspect.iscoroutine(result):
            return _start(result)
        if inspect.isawaitable(result):
            return result
        return Resolved(result)


def _start(coro):
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No loop: the caller must await (or asyncio.run) the coroutine.
        return coro
    return asyncio.ensure_future(coro)
