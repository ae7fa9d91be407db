"""Tests for commitx.textual — Textual integration layer."""

import threading

import pytest
from textual.css.query import NoMatches

from commitx import Store
from commitx import textual as ctx

TEST = "TEST"


def _store():
    return Store(state={"a": 1}, mutations={TEST: lambda state, n: setattr(state, "a", n)})


class _MockApp:
    """Minimal mock matching the Textual App interface ctx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestSubscribe:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        store = _store()
        log = []
        ctx.subscribe(app, store, lambda mutation, state: log.append(state.a))
        store.commit(TEST, 2)
        assert log == []

    def test_skips_during_pause(self):
        app = _MockApp()
        store = _store()
        log = []
        ctx.subscribe(app, store, lambda mutation, state: log.append(state.a))
        with ctx.pause(app):
            store.commit(TEST, 2)
        assert log == []

    def test_fires_when_safe(self):
        app = _MockApp()
        store = _store()
        log = []
        ctx.subscribe(app, store, lambda mutation, state: log.append(state.a))
        store.commit(TEST, 2)
        assert log == [2]

    def test_catches_nomatch(self):
        """NoMatches from widget queries are silently swallowed."""
        app = _MockApp()
        store = _store()

        def _raise_nomatch(mutation, state):
            raise NoMatches("StatusFooter")

        ctx.subscribe(app, store, _raise_nomatch)
        store.commit(TEST, 2)  # should not raise

    def test_propagates_real_errors(self):
        app = _MockApp()
        store = _store()

        def _raise_value_error(mutation, state):
            raise ValueError("boom")

        ctx.subscribe(app, store, _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            store.commit(TEST, 2)

    def test_unsubscribe(self):
        app = _MockApp()
        store = _store()
        log = []
        unsubscribe = ctx.subscribe(app, store, lambda mutation, state: log.append(state.a))
        unsubscribe()
        store.commit(TEST, 2)
        assert log == []

    def test_thread_marshal(self):
        """Commits from a background thread go through call_from_thread."""
        app = _MockApp()
        store = _store()
        log = []
        ctx.subscribe(app, store, lambda mutation, state: log.append(state.a))

        t = threading.Thread(target=lambda: store.commit(TEST, 2))
        t.start()
        t.join()

        assert log == [2]
        assert len(app._call_from_thread_log) == 1


class TestWatch:
    def test_fires_when_safe(self):
        app = _MockApp()
        store = _store()
        log = []
        ctx.watch(app, store, lambda state, getters: state.a, lambda new, old: log.append(new))
        store.commit(TEST, 2)
        assert log == [2]

    def test_skips_during_pause(self):
        app = _MockApp()
        store = _store()
        log = []
        ctx.watch(app, store, lambda state, getters: state.a, lambda new, old: log.append(new))
        with ctx.pause(app):
            store.commit(TEST, 2)
        assert log == []

    def test_catches_nomatch(self):
        app = _MockApp()
        store = _store()

        def _raise_nomatch(new, old):
            raise NoMatches("Widget")

        handle = ctx.watch(app, store, lambda state, getters: state.a, _raise_nomatch)
        store.commit(TEST, 2)
        handle.dispose()


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert ctx.is_safe(app)

        with pytest.raises(RuntimeError):
            with ctx.pause(app):
                assert not ctx.is_safe(app)
                raise RuntimeError("oops")

        assert ctx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        app = _MockApp()
        attrs_before = set(vars(app))
        with ctx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during
        assert attrs_before == set(vars(app))

    def test_multiple_apps_independent(self):
        app_a = _MockApp()
        app_b = _MockApp()
        with ctx.pause(app_a):
            assert not ctx.is_safe(app_a)
            assert ctx.is_safe(app_b)
