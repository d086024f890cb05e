"""Batching — coalesce several writes into one propagation pass.

Inside batch(), `with transaction()` or an @action, signal writes only queue
their dependents. When the outermost scope exits, each queued computation
runs once and sees the final values, never an intermediate state.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, ParamSpec, TypeVar

from sigflow._tracking import begin_batch, end_batch

P = ParamSpec("P")
R = TypeVar("R")


def batch(fn: Callable[[], R]) -> R:
    """Run fn with propagation deferred; return what fn returns.

    Usage:
        first = signal("Ada")
        last = signal("Lovelace")
        effect(lambda: print(first.value, last.value))

        def rename():
            first.value = "Grace"
            last.value = "Hopper"

        batch(rename)
        # prints "Grace Hopper" once, never "Grace Lovelace"
    """
    with transaction():
        return fn()


@contextmanager
def transaction():
    """Context manager for batching writes.

    Usage:
        with transaction():
            a.value = 1
            b.value = 2
            # effects run here, after both are set
    """
    begin_batch()
    try:
        yield
    finally:
        end_batch()


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: batch all signal writes inside fn."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with transaction():
            return fn(*args, **kwargs)

    return wrapper
