"""Segment crossing tests used to keep maze corridors apart."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .geometry import Point, orientation

Segment = Tuple[Point, Point]


def segments_intersect(a: Point, b: Point, c: Point, d: Point) -> bool:
    """Return ``True`` when segments ``a-b`` and ``c-d`` properly cross.

    Collinear overlaps and contacts at an endpoint do not count: both pairs of
    endpoints must lie strictly on opposite sides of the other segment's line.
    """

    oa = orientation(c, d, a)
    ob = orientation(c, d, b)
    oc = orientation(a, b, c)
    od = orientation(a, b, d)
    return oa * ob < 0.0 and oc * od < 0.0


def shrink_segment(a: Point, b: Point, factor: float) -> Segment:
    """Scale both endpoints toward the midpoint; ``factor=1`` keeps the segment."""

    mid = a.midpoint(b)
    return mid + (a - mid) * factor, mid + (b - mid) * factor


def ribbon(a: Point, b: Point, tube_radius: float, shrink: float) -> List[Segment]:
    """The shrunk centre line followed by its left and right offset copies."""

    start, end = shrink_segment(a, b, shrink)
    offset = (b - a).normalized().rotate90() * tube_radius
    return [
        (start, end),
        (start + offset, end + offset),
        (start - offset, end - offset),
    ]


def ribbons_intersect(
    first: Segment,
    second: Segment,
    tube_radius: float,
    shrink: float,
) -> bool:
    """Width-aware crossing test between two segments drawn as tubes."""

    return ribbon_sets_intersect(
        ribbon(first[0], first[1], tube_radius, shrink),
        ribbon(second[0], second[1], tube_radius, shrink),
    )


def ribbon_sets_intersect(lhs: List[Segment], rhs: List[Segment]) -> bool:
    """True when any line of one prebuilt ribbon properly crosses a line of the other."""

    for a, b in lhs:
        for c, d in rhs:
            if segments_intersect(a, b, c, d):
                return True
    return False


def _orientations(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    # same operation order as ``orientation`` so results match bit for bit
    return (b[..., 0] - a[..., 0]) * (c[..., 1] - a[..., 1]) - (b[..., 1] - a[..., 1]) * (
        c[..., 0] - a[..., 0]
    )


def ribbon_crossings(proposed: np.ndarray, accepted: np.ndarray) -> np.ndarray:
    """Vectorised :func:`ribbon_sets_intersect` of one ribbon against many.

    ``proposed`` has shape ``(3, 2, 2)`` (lines, endpoints, xy) and
    ``accepted`` has shape ``(E, 3, 2, 2)``. Returns a boolean mask of length
    ``E`` marking the accepted ribbons that properly cross ``proposed``.
    """

    accepted = accepted.reshape(-1, 3, 2, 2)
    a = proposed[None, :, None, 0, :]
    b = proposed[None, :, None, 1, :]
    c = accepted[:, None, :, 0, :]
    d = accepted[:, None, :, 1, :]
    oa = _orientations(c, d, a)
    ob = _orientations(c, d, b)
    oc = _orientations(a, b, c)
    od = _orientations(a, b, d)
    crossing = (oa * ob < 0.0) & (oc * od < 0.0)
    return crossing.any(axis=(1, 2))


class RibbonSet:
    """Accepted ribbons in a growable ``(E, 3, 2, 2)`` buffer."""

    def __init__(self, capacity: int = 256):
        self._lines = np.empty((max(capacity, 1), 3, 2, 2), dtype=float)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def lines(self) -> np.ndarray:
        return self._lines[: self._size]

    def crosses(self, proposed: Sequence[Segment]) -> bool:
        if self._size == 0:
            return False
        mask = ribbon_crossings(np.asarray(proposed, dtype=float), self.lines())
        return bool(mask.any())

    def add(self, lines: Sequence[Segment]) -> None:
        if self._size == len(self._lines):
            grown = np.empty((2 * len(self._lines), 3, 2, 2), dtype=float)
            grown[: self._size] = self._lines
            self._lines = grown
        self._lines[self._size] = np.asarray(lines, dtype=float)
        self._size += 1


__all__ = [
    "RibbonSet",
    "Segment",
    "ribbon_crossings",
    "ribbon",
    "ribbon_sets_intersect",
    "ribbons_intersect",
    "segments_intersect",
    "shrink_segment",
]
