"""Fixed-capacity max-heap used to keep the ``k`` best candidates of a scan."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class BoundedMaxHeap(Generic[T]):
    """Binary max-heap holding at most ``capacity`` items ranked by ``key``.

    Offering an item to a full heap replaces the current maximum only when the
    new key is strictly smaller, so after a scan the heap contains the
    ``capacity`` smallest items seen, with earlier arrivals winning ties.
    """

    def __init__(self, capacity: int, key: Callable[[T], Any]):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._key = key
        self._items: List[T] = []
        self._keys: List[Any] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def peek(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def push(self, item: T) -> bool:
        """Offer ``item``; return ``True`` when it was kept."""

        if self.capacity == 0:
            return False
        key = self._key(item)
        if len(self._items) < self.capacity:
            self._items.append(item)
            self._keys.append(key)
            self._sift_up(len(self._items) - 1)
            return True
        if key < self._keys[0]:
            self._items[0] = item
            self._keys[0] = key
            self._sift_down(0)
            return True
        return False

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from an empty heap")
        top = self._items[0]
        last_item = self._items.pop()
        last_key = self._keys.pop()
        if self._items:
            self._items[0] = last_item
            self._keys[0] = last_key
            self._sift_down(0)
        return top

    def sorted(self) -> List[T]:
        """Items in ascending key order; the heap itself is left untouched."""

        order = sorted(range(len(self._items)), key=lambda idx: self._keys[idx])
        return [self._items[idx] for idx in order]

    def _swap(self, i: int, j: int) -> None:
        self._items[i], self._items[j] = self._items[j], self._items[i]
        self._keys[i], self._keys[j] = self._keys[j], self._keys[i]

    def _sift_up(self, idx: int) -> None:
        while idx > 0:
            parent = (idx - 1) // 2
            if self._keys[parent] < self._keys[idx]:
                self._swap(parent, idx)
                idx = parent
            else:
                break

    def _sift_down(self, idx: int) -> None:
        size = len(self._items)
        while True:
            left = 2 * idx + 1
            right = left + 1
            largest = idx
            if left < size and self._keys[largest] < self._keys[left]:
                largest = left
            if right < size and self._keys[largest] < self._keys[right]:
                largest = right
            if largest == idx:
                return
            self._swap(idx, largest)
            idx = largest


__all__ = ["BoundedMaxHeap"]
