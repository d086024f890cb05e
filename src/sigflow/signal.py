"""Signals — mutable cells that track their readers.

When a signal is read inside a running computation, the edge between the two
is registered on both sides. When the signal is written with a different
value, every dependent computation is scheduled (run now, or queued when
inside a batch).

Edges always go Signal -> Computation; a signal never depends on another
signal directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from sigflow import _tracking
from sigflow._equality import is_same
from sigflow._tracking import current_computation

if TYPE_CHECKING:
    from sigflow.effect import Effect

T = TypeVar("T")


class ReadonlySignal(Generic[T]):
    """A reactive value that can be read and tracked, but not assigned."""

    __slots__ = ("_id", "_value", "_dependents")

    def __init__(self, value: T | None = None) -> None:
        self._id = _tracking.new_id()
        self._value = value
        # Ordered set: insertion order decides notification order.
        self._dependents: dict[Effect, None] = {}

    @property
    def value(self) -> T:
        """Read the value. If inside a tracking computation, registers the dependency."""
        computation = current_computation.get()
        if computation is not None and not computation.is_watcher:
            self._dependents[computation] = None
            computation._subscriptions.add(self)
        return self._value

    def peek(self) -> T:
        """Read the value without subscribing anything."""
        return self._value

    def _write(self, value: T) -> None:
        if is_same(value, self._value):
            return
        self._value = value
        # Snapshot: re-runs rebuild edges while we iterate.
        for computation in list(self._dependents):
            _tracking.schedule(computation)

    def _remove_dependent(self, computation: Effect) -> None:
        self._dependents.pop(computation, None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}#{self._id}({self._value!r})"


class Signal(ReadonlySignal[T]):
    """A single mutable reactive value."""

    __slots__ = ()

    @ReadonlySignal.value.setter
    def value(self, value: T) -> None:
        """Write a new value. Equal writes are ignored."""
        self._write(value)


def signal(value: T | None = None) -> Signal[T]:
    """Create a Signal.

    Usage:
        count = signal(0)
        log = []

        effect(lambda: log.append(count.value))
        # log == [0]

        count.value = 1
        # log == [0, 1]
    """
    return Signal(value)
