"""Store — single state tree mutated only through named commits.

State is read freely through `store.state`, derived through memoized
`store.getters`, and changed only by mutations run via `commit`, which
actions reach through `dispatch`. Subscribers observe every commit.

Both commit and dispatch accept either `(type, payload)` or a single
mapping carrying a `type` key, which then is the payload itself.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, NamedTuple

from commitx.actions import ActionContext, ActionFn, ActionRegistry
from commitx.errors import InvalidTypeError
from commitx.getters import GetterFn, GetterRegistry, GettersView
from commitx.guard import WriteGuard
from commitx.mutations import MutationFn, MutationRegistry
from commitx.reactivity import DependencyTracker, Disposable, Reactivity
from commitx.tree import StateNode, build_state

logger = logging.getLogger("commitx.store")


class MutationRecord(NamedTuple):
    type: str
    payload: Any


Subscriber = Callable[[MutationRecord, StateNode], Any]


class Store:
    """Single-store state container.

    `validation=False` is the production profile: duplicate registrations
    are ignored, commit/dispatch types are not checked, and the write guard
    is not enforced. `strict=False` disables only the write guard.
    """

    def __init__(
        self,
        *,
        state: Mapping[str, Any] | None = None,
        getters: Mapping[str, GetterFn] | None = None,
        actions: Mapping[str, ActionFn] | None = None,
        mutations: Mapping[str, MutationFn] | None = None,
        strict: bool = True,
        validation: bool = True,
        reactivity: Reactivity | None = None,
    ) -> None:
        self.validation = validation
        self._reactivity = reactivity if reactivity is not None else DependencyTracker()
        self._guard = WriteGuard(strict=strict, enforce=validation)
        self._subscribers: set[Subscriber] = set()
        self._state = build_state(state or {}, self._reactivity, self._guard.check)

        self._getters = GetterRegistry(self._reactivity, self._state, validation=validation)
        self._mutations = MutationRegistry(self._state, self._guard, validation=validation)
        self._actions = ActionRegistry(
            ActionContext(
                dispatch=self.dispatch,
                commit=self.commit,
                getters=self._getters.view,
                state=self._state,
            ),
            validation=validation,
        )

        for name, fn in (getters or {}).items():
            self.register_getter(name, fn)
        for name, fn in (actions or {}).items():
            self.register_action(name, fn)
        for name, fn in (mutations or {}).items():
            self.register_mutation(name, fn)

    @property
    def state(self) -> StateNode:
        return self._state

    @property
    def getters(self) -> GettersView:
        return self._getters.view

    @property
    def strict(self) -> bool:
        return self._guard.strict

    @property
    def committing(self) -> bool:
        """True while a mutation handler is running."""
        return self._guard.committing

    def register_getter(self, name: str, fn: GetterFn) -> None:
        self._getters.register(name, fn)

    def register_mutation(self, name: str, fn: MutationFn) -> None:
        self._mutations.register(name, fn)

    def register_action(self, name: str, fn: ActionFn) -> None:
        self._actions.register(name, fn)

    def commit(self, type_: str | Mapping[str, Any], payload: Any = None) -> None:
        """Run a mutation synchronously, then notify subscribers."""
        type_, payload = self._normalize(type_, payload)
        logger.debug("commit %s", type_)
        with self._reactivity.batch():
            self._mutations.invoke(type_, payload)
        record = MutationRecord(type_, payload)
        # Snapshot: subscribers added during notification wait for the next commit.
        for subscriber in list(self._subscribers):
            subscriber(record, self._state)

    def dispatch(self, type_: str | Mapping[str, Any], payload: Any = None) -> Awaitable[Any]:
        """Run an action. Always returns an awaitable."""
        type_, payload = self._normalize(type_, payload)
        logger.debug("dispatch %s", type_)
        return self._actions.invoke(type_, payload)

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        """Call fn(record, state) after every commit. Returns an unsubscribe function."""
        self._subscribers.add(fn)

        def _unsubscribe() -> None:
            self._subscribers.discard(fn)

        return _unsubscribe

    def watch(
        self,
        fn: Callable[[StateNode, GettersView], Any],
        callback: Callable[[Any, Any], None],
        *,
        immediate: bool = False,
    ) -> Disposable:
        """Call callback(new, old) whenever fn(state, getters) changes.

        Changes made inside one commit are seen once, after the handler
        returns. Call .dispose() on the result to stop watching.
        """
        state, getters = self._state, self._getters.view
        return self._reactivity.reaction(
            lambda: fn(state, getters), callback, fire_immediately=immediate
        )

    def _normalize(self, type_: Any, payload: Any) -> tuple[Any, Any]:
        if isinstance(type_, Mapping) and type_.get("type"):
            type_, payload = type_["type"], type_
        if self.validation and not isinstance(type_, str):
            raise InvalidTypeError(type_)
        return type_, payload

    def __repr__(self) -> str:
        return (
            f"Store(getters={len(self._getters)}, mutations={len(self._mutations)}, "
            f"actions={len(self._actions)}, subscribers={len(self._subscribers)})"
        )
