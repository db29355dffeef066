# MIT License (see LICENSE)
"""
Index-stable storage addressed by generation-checked handles.

Registrations never hold particles or generators directly. They hold
Handles into an Arena owned by the simulation, and resolve them when a
step runs. Removing an item bumps its slot's generation, so any handle
still pointing at the old occupant fails with StaleHandle instead of
silently reaching a different object.

Example:
    arena = Arena()
    h = arena.insert(particle)
    arena.get(h)        # -> particle
    arena.remove(h)
    arena.get(h)        # raises StaleHandle
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from ..errors import StaleHandle

T = TypeVar("T")


@dataclass(frozen=True)
class Handle:
    """
    Reference to one arena slot.

    Attributes:
        index: Slot position in the arena.
        generation: Slot generation at insert time.
    """
    index: int
    generation: int


class Arena(Generic[T]):
    """
    Slot storage with free-list reuse.

    Iteration yields live items in slot order, which is also the order
    ParticleWorld integrates particles in.
    """

    def __init__(self) -> None:
        self._items: list[T | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []
        self._count = 0

    def insert(self, item: T) -> Handle:
        """Store item and return its handle."""
        if self._free:
            idx = self._free.pop()
            self._items[idx] = item
        else:
            idx = len(self._items)
            self._items.append(item)
            self._generations.append(0)
        self._count += 1
        return Handle(idx, self._generations[idx])

    def _check(self, handle: Handle) -> int:
        idx = handle.index
        if (
            0 <= idx < len(self._items)
            and self._generations[idx] == handle.generation
            and self._items[idx] is not None
        ):
            return idx
        raise StaleHandle(f"Handle {handle} does not refer to a live item")

    def get(self, handle: Handle) -> T:
        """
        Resolve a handle.

        Raises:
            StaleHandle: If the slot was freed or reused since the handle
                was issued.
        """
        return self._items[self._check(handle)]

    def remove(self, handle: Handle) -> T:
        """Free the slot and return the item it held."""
        idx = self._check(handle)
        item = self._items[idx]
        self._items[idx] = None
        self._generations[idx] += 1
        self._free.append(idx)
        self._count -= 1
        return item

    def clear(self) -> None:
        """Free every slot. Outstanding handles all become stale."""
        for idx, item in enumerate(self._items):
            if item is not None:
                self._items[idx] = None
                self._generations[idx] += 1
                self._free.append(idx)
        self._count = 0

    def items(self) -> Iterator[tuple[Handle, T]]:
        """Yield (handle, item) pairs for live slots in slot order."""
        for idx, item in enumerate(self._items):
            if item is not None:
                yield Handle(idx, self._generations[idx]), item

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, Handle):
            return False
        try:
            self._check(handle)
        except StaleHandle:
            return False
        return True

    def __iter__(self) -> Iterator[T]:
        for item in self._items:
            if item is not None:
                yield item

    def __len__(self) -> int:
        return self._count
