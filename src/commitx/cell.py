"""Reactive cells — one per leaf slot of the state tree.

When a Cell is read inside a getter or watcher evaluation, the dependency
is automatically registered. When the Cell changes, every dependent is
invalidated exactly once.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from commitx._tracking import track

T = TypeVar("T")

# Compared by value; everything else is compared by identity.
_NUMBERS = (int, float)
_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)


def differs(old: object, new: object) -> bool:
    """Strict inequality: identity for composites, value for primitives.

    Behaves like a strict `!==`, so NaN always differs from NaN, even
    from the very same float object.
    """
    if isinstance(old, bool) or isinstance(new, bool):
        return type(old) is not type(new) or old != new
    if isinstance(old, _NUMBERS) and isinstance(new, _NUMBERS):
        return old != new
    if type(old) is not type(new):
        return True
    if isinstance(old, _PRIMITIVES):
        return old != new
    return old is not new


class Cell(Generic[T]):
    """A single trackable value with an optional write hook."""

    __slots__ = ("_value", "_observers", "_before_write")

    def __init__(self, value: T, before_write: Callable[[], None] | None = None) -> None:
        self._value = value
        self._observers: set = set()
        self._before_write = before_write

    def get(self) -> T:
        """Read the value. If inside a derivation, registers the dependency."""
        track(self)
        return self._value

    def peek(self) -> T:
        """Read without tracking."""
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Raises whatever the write hook raises."""
        if self._before_write is not None:
            self._before_write()
        old = self._value
        self._value = value
        if differs(old, value):
            self._notify()

    def _notify(self) -> None:
        # Snapshot: invalidation may re-register dependents.
        for observer in list(self._observers):
            observer._invalidate()

    def _remove_observer(self, observer) -> None:
        self._observers.discard(observer)

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"
