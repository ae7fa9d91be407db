"""Exceptions raised by the store.

All of them surface synchronously to the caller of commit/dispatch or of
the registration that failed. Each one also derives from the builtin
exception a Python caller would reach for first.
"""


class StoreError(Exception):
    """Base class for every commitx failure."""


class InvalidTypeError(StoreError, TypeError):
    """A commit/dispatch type resolved to something other than a string."""

    def __init__(self, found: object) -> None:
        self.found = found
        super().__init__(
            f"expects string as the type, but found {type(found).__name__}."
        )


class UnknownMutationError(StoreError, KeyError):
    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"unknown mutation type: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownActionError(StoreError, KeyError):
    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"unknown action type: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateError(StoreError, ValueError):
    kind = "handler"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate {self.kind} {name}")


class DuplicateGetterError(DuplicateError):
    kind = "getter"


class DuplicateMutationError(DuplicateError):
    kind = "mutation"


class DuplicateActionError(DuplicateError):
    kind = "action"


class StateMutationOutsideCommitError(StoreError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("do not mutate store state outside mutation handlers")
