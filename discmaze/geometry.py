"""Plane geometry primitives shared by the sampler, oracle and growth engine."""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple

_DENOM_EPS = 1e-12


class Point(NamedTuple):
    """Immutable 2D coordinate that doubles as a vector."""

    x: float
    y: float

    @classmethod
    def from_polar(cls, angle: float, radius: float) -> "Point":
        return cls(math.cos(angle) * radius, math.sin(angle) * radius)

    def __add__(self, other: "Point") -> "Point":  # type: ignore[override]
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other[0], self.y - other[1])

    def __mul__(self, factor: float) -> "Point":  # type: ignore[override]
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        return self.x * other[0] + self.y * other[1]

    def cross(self, other: "Point") -> float:
        return self.x * other[1] - self.y * other[0]

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other[0], self.y - other[1])

    def rotate90(self) -> "Point":
        """Quarter turn counter-clockwise."""

        return Point(-self.y, self.x)

    def normalized(self) -> "Point":
        norm = self.length()
        if norm <= _DENOM_EPS:
            return Point(0.0, 0.0)
        return Point(self.x / norm, self.y / norm)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other[0]) * 0.5, (self.y + other[1]) * 0.5)


def as_point(value: Tuple[float, float]) -> Point:
    if isinstance(value, Point):
        return value
    return Point(float(value[0]), float(value[1]))


def orientation(a: Point, b: Point, c: Point) -> float:
    """Signed area test: positive when ``c`` lies left of the line ``a -> b``."""

    return (b - a).cross(c - a)


def angle_between(u: Point, v: Point) -> float:
    """Unsigned angle in ``[0, pi]`` between two direction vectors."""

    denom = u.length() * v.length()
    if denom <= _DENOM_EPS:
        return 0.0
    cos_t = u.dot(v) / denom
    return math.acos(max(-1.0, min(1.0, cos_t)))


def turn_angle(prior: Point, current: Point, candidate: Point) -> float:
    """Heading change when a path through ``prior -> current`` continues to ``candidate``."""

    return angle_between(current - prior, candidate - current)


__all__ = [
    "Point",
    "angle_between",
    "as_point",
    "orientation",
    "turn_angle",
]
