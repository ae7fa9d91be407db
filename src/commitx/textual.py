"""Textual integration for commitx. Opt-in — requires textual.

Store callbacks that touch widgets go through here: they are skipped
while the app is paused or not running, marshaled onto the app thread
when fired from elsewhere, and NoMatches from widget queries is dropped.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

logger = logging.getLogger("commitx.textual")

# Apps whose store callbacks are paused, by id(app); an id is present only inside pause().
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Hold back guarded store subscribers and watchers while widgets are swapped."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Can store callbacks query this app's widgets right now?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    _main = threading.get_ident()

    def _safe(*args):
        try:
            fn(*args)
        except NoMatches:
            logger.debug("Widget query found nothing; skipped %r", fn)

    def _guarded(*args):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    return _guarded


def subscribe(app, store, fn):
    """store.subscribe() that safely bridges to Textual widgets.

    Returns the unsubscribe function.
    """
    return store.subscribe(_guard(app, fn))


def watch(app, store, fn, callback, *, immediate=False):
    """store.watch() that safely bridges to Textual widgets."""
    return store.watch(fn, _guard(app, callback), immediate=immediate)
