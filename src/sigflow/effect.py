"""Effects — side effects re-run when the signals they read change.

An Effect runs its callback immediately, and on every run it becomes the
current computation: whatever signals the callback reads are subscribed.
Edges from the previous run are torn down first, so the dependency set
always reflects the most recent run only.

Two flavors:
- effect(fn, on_dispose=None, is_active=True): self-tracking, runs at once.
- watch(fn, deps): fixed, explicit dependency list; never runs at setup and
  never subscribes to what fn reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

from sigflow import _tracking
from sigflow._freeze import freeze_set
from sigflow._tracking import current_computation

if TYPE_CHECKING:
    from sigflow.signal import ReadonlySignal


class Effect:
    """A reactive computation: executes a callback and tracks what it reads.

    is_active can be flipped at any time. While False, triggered runs are
    ignored but edges are kept; setting it back to True does not run the
    callback by itself.
    """

    __slots__ = ("_id", "_callback", "_subscriptions", "is_active", "on_dispose")

    is_watcher = False

    def __init__(
        self,
        callback: Callable[[], None],
        on_dispose: Callable[[], None] | None = None,
        is_active: bool = True,
    ) -> None:
        self._id = _tracking.new_id()
        self._callback = callback
        self._subscriptions: set[ReadonlySignal] = set()
        self.is_active = is_active
        self.on_dispose = on_dispose
        if is_active:
            self.execute()

    @property
    def subscriptions(self) -> frozenset[ReadonlySignal]:
        """Signals this computation currently depends on."""
        return frozenset(self._subscriptions)

    def execute(self) -> None:
        """Run the body now, as the current computation.

        Raises RecursionLimitError when called too deep inside a chain of
        re-executions. Exceptions from the body propagate after the current
        computation and the depth counter are restored.
        """
        _tracking.check_recursion()
        if not self.is_active:
            return

        token = current_computation.set(self)
        depth = _tracking.enter_execution()
        try:
            self._run()
        finally:
            _tracking.exit_execution(depth)
            current_computation.reset(token)

    def _run(self) -> None:
        previous = list(self._subscriptions)
        self._unsubscribe_all()
        try:
            self._callback()
        except BaseException:
            # A run cut short only saw part of its reads; keep the last edges too.
            for dep in previous:
                dep._dependents[self] = None
                self._subscriptions.add(dep)
            raise

    def _unsubscribe_all(self) -> None:
        for dep in list(self._subscriptions):
            dep._remove_dependent(self)
            self._subscriptions.discard(dep)

    def dispose(self) -> None:
        """Disconnect from all signals, then call on_dispose.

        is_active is left alone; a caller holding the effect can still
        execute() it by hand.
        """
        self._unsubscribe_all()
        if self.on_dispose is not None:
            self.on_dispose()

    def __repr__(self) -> str:
        name = getattr(self._callback, "__name__", "callback")
        state = "active" if self.is_active else "inactive"
        return f"{type(self).__name__}#{self._id}({name}, {state})"


class Watcher(Effect):
    """An effect bound to an explicit, frozen list of signals.

    Reads inside the callback are not tracked. The dependency set is fixed
    at construction; nothing can widen or shrink it afterwards (dispose()
    only severs the signal side of the edges).
    """

    __slots__ = ()

    is_watcher = True

    def __init__(self, callback: Callable[[], None], deps: Iterable[ReadonlySignal]) -> None:
        super().__init__(callback, is_active=False)
        self._subscriptions = freeze_set(deps)
        for dep in self._subscriptions:
            dep._dependents[self] = None
        self.is_active = True

    def _run(self) -> None:
        self._callback()

    def _unsubscribe_all(self) -> None:
        for dep in self._subscriptions:
            dep._remove_dependent(self)


def effect(
    callback: Callable[[], None],
    on_dispose: Callable[[], None] | None = None,
    is_active: bool = True,
) -> Effect:
    """Run callback now, then re-run it whenever a signal it read changes.

    Returns the Effect (call .dispose() to stop).

    Usage:
        name = signal("Ada")
        log = []

        e = effect(lambda: log.append(name.value))
        # log == ["Ada"], ran immediately

        name.value = "Grace"
        # log == ["Ada", "Grace"]

        e.dispose()
        name.value = "Linus"
        # log == ["Ada", "Grace"], stopped
    """
    return Effect(callback, on_dispose, is_active)


def watch(callback: Callable[[], None], deps: Iterable[ReadonlySignal]) -> Watcher:
    """Call callback whenever one of deps is written with a new value.

    Does not run at setup. Signals read inside callback but missing from
    deps never trigger it.

    Usage:
        a = signal(1)
        b = signal(2)
        log = []

        watch(lambda: log.append(a.value + b.value), [a])
        # log == []

        b.value = 3
        # log == [] since b is not listed

        a.value = 2
        # log == [5]
    """
    return Watcher(callback, deps)
