"""Reactions — side effects triggered by state changes.

Unlike Computed (which is lazy and only evaluates on read), a Reaction
re-runs its data function as soon as the scheduler lets it, and calls
its effect with (new, old) only when the result changes.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from commitx._tracking import Scheduler, tracking

T = TypeVar("T")


class Reaction(Generic[T]):
    """Tracks data_fn; calls effect_fn(new, old) when its result changes."""

    __slots__ = (
        "_data_fn",
        "_effect_fn",
        "_scheduler",
        "_dependencies",
        "_last_value",
        "_disposed",
    )

    def __init__(
        self,
        data_fn: Callable[[], T],
        effect_fn: Callable[[T, T | None], None],
        scheduler: Scheduler,
    ) -> None:
        self._data_fn = data_fn
        self._effect_fn = effect_fn
        self._scheduler = scheduler
        self._dependencies: set = set()
        self._last_value: T | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def start(self, *, fire_immediately: bool = False) -> None:
        """Run data_fn to establish dependencies."""
        value = self._evaluate()
        self._last_value = value
        if fire_immediately:
            self._effect_fn(value, None)

    def _evaluate(self) -> T:
        for dep in self._dependencies:
            dep._remove_observer(self)
        self._dependencies.clear()
        with tracking(self):
            return self._data_fn()

    def _invalidate(self) -> None:
        if not self._disposed:
            self._scheduler.schedule(self)

    def _run(self) -> None:
        if self._disposed:
            return
        new_value = self._evaluate()
        if new_value != self._last_value:
            old_value, self._last_value = self._last_value, new_value
            self._effect_fn(new_value, old_value)

    def dispose(self) -> None:
        """Stop this reaction. Disconnects from all dependencies."""
        self._disposed = True
        for dep in self._dependencies:
            dep._remove_observer(self)
        self._dependencies.clear()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Reaction({getattr(self._data_fn, '__name__', self._data_fn)!r}, {state})"
