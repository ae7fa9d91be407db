"""Tests for Store.watch."""

from commitx import Store

TEST = "TEST"


def _set(state, payload):
    for key, value in payload.items():
        state[key] = value


class TestWatch:
    def test_fires_after_commit(self):
        store = Store(state={"a": 1}, mutations={TEST: _set})
        log = []
        store.watch(lambda state, getters: state.a, lambda new, old: log.append((new, old)))
        assert log == []
        store.commit(TEST, {"a": 2})
        assert log == [(2, 1)]

    def test_immediate(self):
        store = Store(state={"a": 1})
        log = []
        store.watch(lambda state, getters: state.a, lambda new, old: log.append((new, old)), immediate=True)
        assert log == [(1, None)]

    def test_sees_one_consistent_value_per_commit(self):
        store = Store(state={"a": 0, "b": 0}, mutations={TEST: _set})
        log = []
        store.watch(lambda state, getters: (state.a, state.b), lambda new, old: log.append(new))
        store.commit(TEST, {"a": 1, "b": 2})
        # Should see (1, 2), not intermediate (1, 0)
        assert log == [(1, 2)]

    def test_runs_before_subscribers(self):
        store = Store(state={"a": 0}, mutations={TEST: _set})
        log = []
        store.watch(lambda state, getters: state.a, lambda new, old: log.append("watch"))
        store.subscribe(lambda mutation, state: log.append("subscriber"))
        store.commit(TEST, {"a": 1})
        assert log == ["watch", "subscriber"]

    def test_nested_commits_flush_once(self):
        store = Store(state={"a": 0, "b": 0}, mutations={TEST: _set})

        def both(state, n):
            store.commit(TEST, {"a": n})
            store.commit(TEST, {"b": n})

        store.register_mutation("both", both)
        log = []
        store.watch(lambda state, getters: (state.a, state.b), lambda new, old: log.append(new))
        store.commit("both", 3)
        assert log == [(3, 3)]

    def test_watches_getters(self):
        store = Store(
            state={"a": 0},
            getters={"status": lambda state, getters: "hasAny" if state.a > 0 else "none"},
            mutations={TEST: _set},
        )
        log = []
        store.watch(lambda state, getters: getters.status, lambda new, old: log.append(new))
        store.commit(TEST, {"a": 1})
        store.commit(TEST, {"a": 2})  # status unchanged
        assert log == ["hasAny"]

    def test_dispose(self):
        store = Store(state={"a": 0}, mutations={TEST: _set})
        log = []
        handle = store.watch(lambda state, getters: state.a, lambda new, old: log.append(new))
        store.commit(TEST, {"a": 1})
        handle.dispose()
        store.commit(TEST, {"a": 2})
        assert log == [1]

    def test_non_strict_direct_write_fires_immediately(self):
        store = Store(state={"a": 0}, strict=False)
        log = []
        store.watch(lambda state, getters: state.a, lambda new, old: log.append(new))
        store.state.a = 5
        assert log == [5]
