"""Point generators that scatter well-separated nodes inside a disc."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import numpy as np

from .geometry import Point
from .model import MazeConfig

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """The two draws the pipeline needs; ``numpy.random.Generator`` fits."""

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        ...

    def shuffle(self, x: list) -> None:
        ...


class PointGenerator(Protocol):
    """Protocol implemented by point layouts."""

    def generate(self, rng: Optional[RandomSource] = None) -> List[Point]:
        """Return accepted points in acceptance order."""


class SpacingGuard:
    """Pairwise-exact minimum spacing check against every accepted point."""

    def __init__(self, min_spacing: float, capacity: int = 256):
        self.min_spacing_sq = float(min_spacing) ** 2
        self._coords = np.empty((max(capacity, 1), 2), dtype=float)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def admits(self, point: Point) -> bool:
        if self._size == 0:
            return True
        delta = self._coords[: self._size] - np.asarray(point, dtype=float)
        dist_sq = np.einsum("ij,ij->i", delta, delta)
        return bool(np.all(dist_sq > self.min_spacing_sq))

    def accept(self, point: Point) -> None:
        if self._size == len(self._coords):
            grown = np.empty((2 * len(self._coords), 2), dtype=float)
            grown[: self._size] = self._coords
            self._coords = grown
        self._coords[self._size] = point
        self._size += 1


def sampling_radius(config: MazeConfig) -> float:
    """Radius actually sampled so rendered tubes stay inside the maze disc."""

    return max(config.radius - config.tube_radius * math.sqrt(2.0) * 2.0, 0.0)


@dataclass
class RejectionSampler:
    """Draw random polar points until a wall-clock or attempt budget runs out.

    Each candidate is compared with every accepted point, so the cost grows
    quadratically; the budget bounds the run instead of a target count.
    """

    radius: float
    min_spacing: float
    time_budget: Optional[float] = None
    max_attempts: Optional[int] = None
    clock: Callable[[], float] = time.monotonic
    attempts: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.time_budget is None and self.max_attempts is None:
            raise ValueError("RejectionSampler needs a time_budget or max_attempts")

    def _exhausted(self, started: float) -> bool:
        if self.max_attempts is not None and self.attempts >= self.max_attempts:
            return True
        if self.time_budget is not None and self.clock() - started >= self.time_budget:
            return True
        return False

    def generate(self, rng: Optional[RandomSource] = None) -> List[Point]:
        if rng is None:
            rng = np.random.default_rng()
        guard = SpacingGuard(self.min_spacing)
        points: List[Point] = []
        self.attempts = 0
        started = self.clock()
        while not self._exhausted(started):
            angle = float(rng.uniform(0.0, 2.0 * math.pi))
            radius = float(rng.uniform(0.0, self.radius))
            point = Point.from_polar(angle, radius)
            self.attempts += 1
            if guard.admits(point):
                guard.accept(point)
                points.append(point)
        logger.info("Scanned %d candidate point(s), accepted %d", self.attempts, len(points))
        return points


@dataclass
class SpiralLayout:
    """Walk an outward spiral from the centre, keeping well-spaced stops."""

    radius: float
    min_spacing: float
    angular_step: float
    radial_step: float
    attempts: int = field(default=0, init=False)

    def generate(self, rng: Optional[RandomSource] = None) -> List[Point]:
        if self.radial_step <= 0:
            raise ValueError(f"radial_step must be positive, got {self.radial_step}")
        guard = SpacingGuard(self.min_spacing)
        points: List[Point] = []
        self.attempts = 0
        angle = 0.0
        radius = 0.0
        while radius <= self.radius:
            point = Point.from_polar(angle, radius)
            self.attempts += 1
            if guard.admits(point):
                guard.accept(point)
                points.append(point)
            angle += self.angular_step
            radius += self.radial_step
        logger.info("Spiral layout kept %d of %d stop(s)", len(points), self.attempts)
        return points


@dataclass
class GridLayout:
    """Square lattice centred on the origin and clipped to the disc."""

    radius: float
    min_spacing: float
    step: float
    attempts: int = field(default=0, init=False)

    def generate(self, rng: Optional[RandomSource] = None) -> List[Point]:
        if self.step <= 0:
            raise ValueError(f"grid step must be positive, got {self.step}")
        guard = SpacingGuard(self.min_spacing)
        points: List[Point] = []
        self.attempts = 0
        cells = int(math.floor(self.radius / self.step))
        for row in range(-cells, cells + 1):
            for col in range(-cells, cells + 1):
                point = Point(col * self.step, row * self.step)
                if point.length() > self.radius:
                    continue
                self.attempts += 1
                if guard.admits(point):
                    guard.accept(point)
                    points.append(point)
        logger.info("Grid layout kept %d of %d lattice point(s)", len(points), self.attempts)
        return points


def make_generator(config: MazeConfig) -> PointGenerator:
    radius = sampling_radius(config)
    if config.layout == "rejection":
        return RejectionSampler(
            radius=radius,
            min_spacing=config.min_spacing,
            time_budget=config.time_budget,
            max_attempts=config.max_attempts,
        )
    if config.layout == "spiral":
        return SpiralLayout(
            radius=radius,
            min_spacing=config.min_spacing,
            angular_step=config.spiral_angular_step,
            radial_step=config.spiral_radial_step,
        )
    if config.layout == "grid":
        return GridLayout(radius=radius, min_spacing=config.min_spacing, step=config.grid_step)
    raise ValueError(f"unknown layout {config.layout!r}")


__all__ = [
    "GridLayout",
    "PointGenerator",
    "RandomSource",
    "RejectionSampler",
    "SpacingGuard",
    "SpiralLayout",
    "make_generator",
    "sampling_radius",
]
