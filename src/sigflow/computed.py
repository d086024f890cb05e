"""Computed signals — derived state with automatic dependency tracking.

A Computed wraps a function. It is evaluated once, eagerly, at construction;
after that an internal driver re-runs the function whenever a signal it read
changes. Downstream readers are only notified when the result differs from
the stored value.

A function that raises on a re-run is logged and skipped: the previous value
stays, nothing propagates. Errors on the first evaluation go straight to the
caller of computed().
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sigflow._tracking import current_computation
from sigflow.effect import Effect
from sigflow.errors import RecursionLimitError
from sigflow.signal import ReadonlySignal

logger = logging.getLogger("sigflow.computed")

T = TypeVar("T")


class _ComputedDriver(Effect):
    """Internal: the computation that keeps a Computed up to date."""

    __slots__ = ("_target",)

    def __init__(self, target: Computed) -> None:
        super().__init__(target._compute, is_active=False)
        self._target = target

    def _run(self) -> None:
        self._unsubscribe_all()
        target = self._target
        try:
            result = target._compute()
        except RecursionLimitError:
            raise
        except Exception:
            logger.exception("Computed %r failed to recompute; keeping previous value", target)
            return
        target._write(result)


class Computed(ReadonlySignal[T]):
    """A read-only signal whose value is derived from other signals."""

    __slots__ = ("_compute", "_driver")

    def __init__(self, compute: Callable[[], T]) -> None:
        super().__init__()
        self._compute = compute
        self._driver = _ComputedDriver(self)

        token = current_computation.set(self._driver)
        try:
            self._value = compute()
        finally:
            current_computation.reset(token)

        self._driver.is_active = True

    def dispose(self) -> None:
        """Stop tracking upstream signals. The last value is kept."""
        self._driver.dispose()

    def __repr__(self) -> str:
        name = getattr(self._compute, "__name__", "compute")
        return f"Computed#{self._id}({name}, {self._value!r})"


def computed(compute: Callable[[], T]) -> Computed[T]:
    """Decorator/factory to create a Computed from a function.

    Usage:
        count = signal(2)

        @computed
        def doubled():
            return count.value * 2

        doubled.value  # 4
        count.value = 5
        doubled.value  # 10
    """
    return Computed(compute)
