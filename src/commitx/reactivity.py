"""The reactive primitive a Store is built on.

A Store only needs three things from its reactive layer:

- a way to wrap a value so reads and writes are interceptable (`cell`),
- a "run a function, collect every reactive read" primitive (`collect`),
- a memoized value that lazily recomputes only when a tracked dependency
  changed (`computed`).

`DependencyTracker` is the built-in implementation, using explicit
per-cell dependency sets. Anything satisfying `Reactivity` can be passed
as `Store(reactivity=...)`.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from commitx._tracking import Scheduler, tracking
from commitx.cell import Cell
from commitx.computed import Computed
from commitx.reaction import Reaction

T = TypeVar("T")


class CellLike(Protocol[T]):
    def get(self) -> T: ...

    def set(self, value: T) -> None: ...


class ComputedLike(Protocol[T]):
    def get(self) -> T: ...


class Disposable(Protocol):
    def dispose(self) -> None: ...


@runtime_checkable
class Reactivity(Protocol):
    def cell(self, value: Any, before_write: Callable[[], None] | None = None) -> CellLike: ...

    def collect(self, fn: Callable[[], T]) -> tuple[T, set]: ...

    def computed(self, fn: Callable[[], T]) -> ComputedLike: ...

    def reaction(
        self,
        data_fn: Callable[[], T],
        effect_fn: Callable[[T, T | None], None],
        *,
        fire_immediately: bool = False,
    ) -> Disposable: ...

    def batch(self) -> AbstractContextManager: ...


class _Collector:
    """Throwaway derivation that only records what it read."""

    __slots__ = ("_dependencies",)

    def __init__(self) -> None:
        self._dependencies: set = set()

    def _invalidate(self) -> None:
        pass


class DependencyTracker:
    """Default reactive layer: explicit dependency sets on every cell."""

    def __init__(self) -> None:
        self.scheduler = Scheduler()

    def cell(self, value: Any, before_write: Callable[[], None] | None = None) -> Cell:
        return Cell(value, before_write)

    def collect(self, fn: Callable[[], T]) -> tuple[T, set]:
        collector = _Collector()
        with tracking(collector):
            result = fn()
        # Detach so later writes don't call into the collector.
        for dep in collector._dependencies:
            dep._remove_observer(collector)
        return result, set(collector._dependencies)

    def computed(self, fn: Callable[[], T]) -> Computed[T]:
        return Computed(fn)

    def reaction(
        self,
        data_fn: Callable[[], T],
        effect_fn: Callable[[T, T | None], None],
        *,
        fire_immediately: bool = False,
    ) -> Reaction[T]:
        r = Reaction(data_fn, effect_fn, self.scheduler)
        r.start(fire_immediately=fire_immediately)
        return r

    def batch(self) -> AbstractContextManager:
        return self.scheduler.batch()
