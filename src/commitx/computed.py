"""Computed values — memoized derivations with automatic dependency tracking.

A Computed wraps a function. When evaluated, it tracks which cells (and
other Computeds) the function reads and caches the result. When any
dependency changes, the cached value is only marked dirty; the function
re-runs on the next read, and dependencies are collected fresh each time.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from commitx._tracking import track, tracking

T = TypeVar("T")

_UNSET = object()


class Computed(Generic[T]):
    """A derived value that auto-tracks dependencies and caches the result."""

    __slots__ = ("_fn", "_value", "_dirty", "_dependencies", "_observers", "calls")

    def __init__(self, fn: Callable[[], T]) -> None:
        self._fn = fn
        self._value: object = _UNSET
        self._dirty = True
        self._dependencies: set = set()
        self._observers: set = set()
        self.calls = 0

    @property
    def dirty(self) -> bool:
        return self._dirty

    def get(self) -> T:
        """Read the computed value. Recomputes if dirty."""
        track(self)
        if self._dirty:
            self._recompute()
        return self._value

    def _recompute(self) -> None:
        """Re-evaluate the function, tracking dependencies."""
        self._clear_dependencies()
        self.calls += 1
        with tracking(self):
            self._value = self._fn()
        self._dirty = False

    def _invalidate(self) -> None:
        """Called when a dependency changed.

        Marks dirty and propagates to our own observers. We don't recompute
        eagerly — that happens on next .get().
        """
        if not self._dirty:
            self._dirty = True
            for observer in list(self._observers):
                observer._invalidate()

    def _clear_dependencies(self) -> None:
        for dep in self._dependencies:
            dep._remove_observer(self)
        self._dependencies.clear()

    def _remove_observer(self, observer) -> None:
        self._observers.discard(observer)

    def dispose(self) -> None:
        """Disconnect from all dependencies. The next read re-evaluates."""
        self._clear_dependencies()
        self._observers.clear()
        self._dirty = True
        self._value = _UNSET

    def __repr__(self) -> str:
        state = "dirty" if self._dirty else f"cached={self._value!r}"
        return f"Computed({getattr(self._fn, '__name__', self._fn)!r}, {state})"
