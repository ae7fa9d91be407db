"""Tests for the pluggable reactive layer."""

from commitx import Cell, DependencyTracker, Reactivity, Store

TEST = "TEST"


class _CountingTracker(DependencyTracker):
    """Delegates everything, counting what the store asks for."""

    def __init__(self):
        super().__init__()
        self.cells = 0
        self.computeds = 0

    def cell(self, value, before_write=None):
        self.cells += 1
        return super().cell(value, before_write)

    def computed(self, fn):
        self.computeds += 1
        return super().computed(fn)


class _UncachedComputed:
    def __init__(self, fn):
        self._fn = fn

    def get(self):
        return self._fn()


class _NoMemo(DependencyTracker):
    """Swaps in a computed that never caches."""

    def computed(self, fn):
        return _UncachedComputed(fn)


class TestDependencyTracker:
    def test_satisfies_protocol(self):
        assert isinstance(DependencyTracker(), Reactivity)

    def test_collect(self):
        tracker = DependencyTracker()
        a, b, c = Cell(1), Cell(2), Cell(3)
        result, deps = tracker.collect(lambda: a.get() + b.get())
        assert result == 3
        assert deps == {a, b}
        assert c not in deps

    def test_collect_detaches(self):
        tracker = DependencyTracker()
        a = Cell(1)
        tracker.collect(lambda: a.get())
        assert a._observers == set()


class TestPluggable:
    def test_store_uses_given_reactivity(self):
        tracker = _CountingTracker()
        store = Store(
            state={"a": 1, "nested": {"b": 2}},
            getters={"a": lambda state, getters: state.a},
            reactivity=tracker,
        )
        assert tracker.cells == 3  # a, nested, nested.b
        assert tracker.computeds == 1
        assert store.getters.a == 1

    def test_alternative_computed(self):
        calls = 0

        def a(state, getters):
            nonlocal calls
            calls += 1
            return state.a

        store = Store(
            state={"a": 1},
            getters={"a": a},
            mutations={TEST: lambda state, n: setattr(state, "a", n)},
            reactivity=_NoMemo(),
        )
        store.commit(TEST, 2)
        assert store.getters.a == 2
        store.getters.a
        assert calls == 3  # registration plus two uncached reads
