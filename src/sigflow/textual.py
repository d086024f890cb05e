"""Textual integration for sigflow. Opt-in — requires textual.

Effects that touch widgets must not fire while the app is not running or
while its widget tree is being swapped out, and a widget that has gone away
(NoMatches) is not an error worth crashing a write over. The guard lives
here so call sites stay plain.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable

from textual.css.query import NoMatches

from sigflow.effect import Effect, Watcher
from sigflow.effect import effect as _effect
from sigflow.effect import watch as _watch
from sigflow.signal import ReadonlySignal

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn: Callable[[], None]) -> Callable[[], None]:
    def _guarded() -> None:
        if not is_safe(app):
            return
        try:
            fn()
        except NoMatches:
            pass

    _guarded.__name__ = getattr(fn, "__name__", "_guarded")
    return _guarded


def effect(app, fn: Callable[[], None]) -> Effect:
    """effect() that skips runs while the app is unsafe and ignores NoMatches.

    The first run happens at once, like the core effect(). If the app is not
    safe at that moment, nothing is read and no edges exist until the effect
    is executed again by hand.
    """
    return _effect(_guard(app, fn))


def watch(app, fn: Callable[[], None], deps: Iterable[ReadonlySignal]) -> Watcher:
    """watch() with the same guard as effect()."""
    return _watch(_guard(app, fn), deps)
