"""Write guard — the reentrant "are we inside a mutation" flag."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from commitx.errors import StateMutationOutsideCommitError


class WriteGuard:
    """Permits state writes only while a mutation handler is running.

    `strict=False` or `enforce=False` (the production profile) turns
    check() into a no-op.
    """

    __slots__ = ("_committing", "strict", "enforce")

    def __init__(self, *, strict: bool = True, enforce: bool = True) -> None:
        self._committing = False
        self.strict = strict
        self.enforce = enforce

    @property
    def committing(self) -> bool:
        return self._committing

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Open the guard; the prior value is restored on every exit path."""
        previous = self._committing
        self._committing = True
        try:
            yield
        finally:
            self._committing = previous

    def check(self) -> None:
        if self.strict and self.enforce and not self._committing:
            raise StateMutationOutsideCommitError()
