"""Getter registry — named, memoized derivations over (state, getters)."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from commitx.errors import DuplicateGetterError
from commitx.reactivity import ComputedLike, Reactivity
from commitx.registry import Registry

GetterFn = Callable[[Any, "GettersView"], Any]


class GetterRegistry(Registry[ComputedLike]):
    """Registers getters as computeds and exposes them through `view`.

    Each getter is evaluated once, eagerly, at registration so its
    dependencies are known from the start. Afterwards it recomputes at
    most once per read, and only if something it read has changed.
    """

    kind = "getter"
    duplicate_error = DuplicateGetterError

    def __init__(self, reactivity: Reactivity, state: Any, *, validation: bool = True) -> None:
        super().__init__(validation=validation)
        self._reactivity = reactivity
        self._state = state
        self.view = GettersView(self)

    def _wrap(self, name: str, handler: GetterFn) -> ComputedLike:
        state, view = self._state, self.view
        computed = self._reactivity.computed(lambda: handler(state, view))
        computed.get()
        return computed

    def lookup(self, name: str) -> ComputedLike:
        return self._entries[name]


class GettersView:
    """Read-only live surface: `getters.name` or `getters["name"]`."""

    __slots__ = ("_registry",)

    def __init__(self, registry: GetterRegistry) -> None:
        object.__setattr__(self, "_registry", registry)

    def __getattr__(self, name: str) -> Any:
        if name == "_registry":
            raise AttributeError(name)
        try:
            computed = self._registry.lookup(name)
        except (KeyError, TypeError):
            raise AttributeError(f"unknown getter {name!r}") from None
        return computed.get()

    def __getitem__(self, name: str) -> Any:
        try:
            computed = self._registry.lookup(name)
        except (KeyError, TypeError):
            raise KeyError(f"unknown getter {name!r}") from None
        return computed.get()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("getters are read-only")

    def __setitem__(self, name: str, value: Any) -> None:
        raise TypeError("getters are read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("getters are read-only")

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)

    def __dir__(self) -> list[str]:
        return sorted(set(object.__dir__(self)) | set(self._registry))

    def __repr__(self) -> str:
        return f"GettersView({list(self._registry)!r})"
