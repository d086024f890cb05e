"""Read-only set view used to pin a watcher's explicit dependencies."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Set
from typing import Generic, TypeVar

T = TypeVar("T")


class FrozenSetView(Set, Generic[T]):
    """An insertion-ordered set whose mutators silently do nothing.

    The instance itself is frozen too: patching a method or attribute
    raises AttributeError.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        object.__setattr__(self, "_items", dict.fromkeys(items))

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is frozen")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is frozen")

    # --- Mutators (no-ops) ---

    def add(self, item: T) -> None:
        pass

    def discard(self, item: T) -> None:
        pass

    def remove(self, item: T) -> None:
        pass

    def update(self, *others: Iterable[T]) -> None:
        pass

    def clear(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"FrozenSetView({list(self._items)!r})"


def freeze_set(items: Iterable[T]) -> FrozenSetView[T]:
    """Return a frozen copy of items. Later changes to items are not seen."""
    return FrozenSetView(items)
