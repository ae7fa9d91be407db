"""Dependency tracking engine — the heart of commitx.

Uses contextvars to track which cells are read during a getter/watcher
evaluation, building the dependency graph automatically.

Batching: watchers invalidated inside a commit accumulate in the
Scheduler and run once when the outermost commit finishes.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from commitx.computed import Computed
    from commitx.reaction import Reaction

    Derivation = Computed | Reaction

# The currently-evaluating derivation (getter or watcher).
# When set, any Cell.get() call registers it as a dependent.
current_derivation: contextvars.ContextVar[Derivation | None] = contextvars.ContextVar(
    "current_derivation", default=None
)


def track(source) -> None:
    """If a derivation is evaluating, record it as a dependent of `source`."""
    current = current_derivation.get()
    if current is not None:
        source._observers.add(current)
        current._dependencies.add(source)


@contextmanager
def tracking(derivation) -> Iterator[None]:
    """Make `derivation` the evaluating slot for the duration of the block."""
    token = current_derivation.set(derivation)
    try:
        yield
    finally:
        current_derivation.reset(token)


@contextmanager
def untracked() -> Iterator[None]:
    """Run reads without registering dependencies."""
    token = current_derivation.set(None)
    try:
        yield
    finally:
        current_derivation.reset(token)


class Scheduler:
    """Defers watcher runs while a batch is open. Nested batches are supported."""

    __slots__ = ("_depth", "_pending")

    def __init__(self) -> None:
        self._depth = 0
        self._pending: set[Reaction] = set()

    def begin_batch(self) -> None:
        self._depth += 1

    def end_batch(self) -> None:
        self._depth -= 1
        if self._depth == 0:
            self._flush_pending()

    @contextmanager
    def batch(self) -> Iterator[None]:
        self.begin_batch()
        try:
            yield
        finally:
            self.end_batch()

    def schedule(self, reaction: Reaction) -> None:
        """If inside a batch, defers. Otherwise, runs immediately."""
        if self._depth > 0:
            self._pending.add(reaction)
        else:
            reaction._run()

    def _flush_pending(self) -> None:
        while self._pending:
            # Snapshot and clear — watchers may schedule new ones during run.
            batch = list(self._pending)
            self._pending.clear()
            for reaction in batch:
                reaction._run()

    @property
    def pending_count(self) -> int:
        """Number of watchers waiting to run. Useful for testing."""
        return len(self._pending)
