"""Incremental k-nearest-neighbour index over arbitrary point payloads."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, List, NamedTuple, Optional, Tuple, TypeVar

from .heap import BoundedMaxHeap

T = TypeVar("T")
Metric = Callable[[T, T], float]

INDEX_STRATEGIES = ("brute", "heap")


class EmptyIndexError(LookupError):
    """Raised when a query needs at least one neighbour but none qualifies."""


class Neighbor(NamedTuple):
    distance: float
    item: object


class NeighborIndex(Generic[T]):
    """Points ranked by an injected ``metric(a, b)``.

    The index never looks inside the items, so it can hold bare coordinates or
    richer wrappers as long as the metric understands them. Queries return the
    ``k`` items closest to the query, nearest first, ties going to the item
    inserted first.
    """

    def __init__(self, metric: Metric, strategy: str = "heap"):
        if strategy not in INDEX_STRATEGIES:
            raise ValueError(
                f"unknown index strategy {strategy!r}; expected one of {INDEX_STRATEGIES}"
            )
        self.metric = metric
        self.strategy = strategy
        self._items: List[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: T) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def nearest(
        self,
        query: T,
        k: int,
        where: Optional[Callable[[T], bool]] = None,
    ) -> List[Neighbor]:
        """Return up to ``k`` neighbours of ``query`` passing the ``where`` filter."""

        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        if k == 0 or not self._items:
            return []
        if self.strategy == "brute":
            ranked = self._scan_brute(query, where)
        else:
            ranked = self._scan_heap(query, k, where)
        return [Neighbor(dist, item) for (dist, _), item in ranked[:k]]

    def nearest_one(self, query: T, where: Optional[Callable[[T], bool]] = None) -> Neighbor:
        found = self.nearest(query, 1, where)
        if not found:
            raise EmptyIndexError(f"no indexed point qualifies as neighbour of {query!r}")
        return found[0]

    def _candidates(self, query: T, where: Optional[Callable[[T], bool]]):
        for seq, item in enumerate(self._items):
            if where is not None and not where(item):
                continue
            yield (self.metric(query, item), seq), item

    def _scan_brute(
        self, query: T, where: Optional[Callable[[T], bool]]
    ) -> List[Tuple[Tuple[float, int], T]]:
        return sorted(self._candidates(query, where), key=lambda entry: entry[0])

    def _scan_heap(
        self, query: T, k: int, where: Optional[Callable[[T], bool]]
    ) -> List[Tuple[Tuple[float, int], T]]:
        heap: BoundedMaxHeap[Tuple[Tuple[float, int], T]] = BoundedMaxHeap(
            k, key=lambda entry: entry[0]
        )
        for entry in self._candidates(query, where):
            heap.push(entry)
        return heap.sorted()


__all__ = [
    "EmptyIndexError",
    "INDEX_STRATEGIES",
    "Metric",
    "Neighbor",
    "NeighborIndex",
]
