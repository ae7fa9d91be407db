"""commitx: single-store state container with commits, actions and memoized getters."""

from importlib.metadata import version as _version

__version__ = _version("commitx")

from commitx.errors import (
    StoreError,
    InvalidTypeError,
    UnknownMutationError,
    UnknownActionError,
    DuplicateGetterError,
    DuplicateMutationError,
    DuplicateActionError,
    StateMutationOutsideCommitError,
)
from commitx.cell import Cell
from commitx.computed import Computed
from commitx.reaction import Reaction
from commitx.reactivity import Reactivity, DependencyTracker
from commitx.tree import StateNode, build_state
from commitx.getters import GettersView
from commitx.actions import ActionContext, Resolved
from commitx.store import Store, MutationRecord
# textual NOT auto-imported — opt-in only

__all__ = [
    "Store",
    "MutationRecord",
    "ActionContext",
    "Resolved",
    "StateNode",
    "GettersView",
    "build_state",
    "Cell",
    "Computed",
    "Reaction",
    "Reactivity",
    "DependencyTracker",
    "StoreError",
    "InvalidTypeError",
    "UnknownMutationError",
    "UnknownActionError",
    "DuplicateGetterError",
    "DuplicateMutationError",
    "DuplicateActionError",
    "StateMutationOutsideCommitError",
]
