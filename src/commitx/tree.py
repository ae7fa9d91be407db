"""State tree — a fixed-shape tree of reactive cells.

Every key of the initial state gets its own cell. Mappings become nested
StateNodes; any other value (lists included) is stored as an opaque leaf,
so its elements are not individually reactive.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator

from commitx._tracking import untracked
from commitx.reactivity import CellLike, Reactivity


class StateNode:
    """Live view over one level of the state tree.

    Slots are read and written as attributes (`state.a`) or items
    (`state["a"]`). The key set is fixed at construction. A slot always
    wins over a method of the same name, so with a slot called `items`
    `state.items` is the slot's value and `state.items()` is unavailable.
    """

    __slots__ = ("_cells", "_wrap")

    def __init__(self, cells: dict[str, CellLike], wrap: Callable[[Any], Any]) -> None:
        object.__setattr__(self, "_cells", cells)
        object.__setattr__(self, "_wrap", wrap)

    def __getattribute__(self, key: str) -> Any:
        cells = object.__getattribute__(self, "_cells")
        if key in cells:
            return cells[key].get()
        return object.__getattribute__(self, key)

    def __getattr__(self, key: str) -> Any:
        if key in StateNode.__slots__:
            raise AttributeError(key)
        raise AttributeError(f"state has no slot {key!r}")

    def __setattr__(self, key: str, value: Any) -> None:
        try:
            cell = _cell(self, key)
        except KeyError as exc:
            raise AttributeError(exc.args[0]) from None
        cell.set(_wrap(self, value))

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"cannot remove state slot {key!r}")

    def __getitem__(self, key: str) -> Any:
        return _cell(self, key).get()

    def __setitem__(self, key: str, value: Any) -> None:
        _cell(self, key).set(_wrap(self, value))

    def __delitem__(self, key: str) -> None:
        raise KeyError(f"cannot remove state slot {key!r}")

    def __contains__(self, key: object) -> bool:
        return key in _cells(self)

    def __iter__(self) -> Iterator[str]:
        return iter(_cells(self))

    def __len__(self) -> int:
        return len(_cells(self))

    def keys(self):
        return _cells(self).keys()

    def values(self) -> list[Any]:
        return [cell.get() for cell in _cells(self).values()]

    def items(self) -> list[tuple[str, Any]]:
        return [(key, cell.get()) for key, cell in _cells(self).items()]

    def __dir__(self) -> list[str]:
        names = {key for key in _cells(self) if isinstance(key, str)}
        return sorted(set(object.__dir__(self)) | names)

    def __repr__(self) -> str:
        with untracked():
            inner = ", ".join(f"{key!r}: {cell.get()!r}" for key, cell in _cells(self).items())
        return f"StateNode({{{inner}}})"


# Slot names may shadow anything on the instance, so internals bypass
# StateNode.__getattribute__.
def _cells(node: StateNode) -> dict[str, CellLike]:
    return object.__getattribute__(node, "_cells")


def _wrap(node: StateNode, value: Any) -> Any:
    return object.__getattribute__(node, "_wrap")(value)


def _cell(node: StateNode, key: str) -> CellLike:
    try:
        return _cells(node)[key]
    except (KeyError, TypeError):
        raise KeyError(f"state has no slot {key!r}") from None


def build_state(
    data: Mapping[str, Any],
    reactivity: Reactivity,
    before_write: Callable[[], None] | None = None,
) -> StateNode:
    """Wrap a nested plain mapping into a StateNode tree."""

    def wrap(value: Any) -> Any:
        if isinstance(value, Mapping):
            return build(value)
        return value

    def build(mapping: Mapping[str, Any]) -> StateNode:
        cells = {key: reactivity.cell(wrap(value), before_write) for key, value in mapping.items()}
        return StateNode(cells, wrap)

    return build(data)
