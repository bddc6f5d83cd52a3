"""Core data structures for the maze pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from functools import total_ordering
from typing import Dict, List, Optional, Tuple

from .geometry import Point
from .knn import INDEX_STRATEGIES

MAZE_RADIUS = 500.0
LAYOUTS = ("rejection", "spiral", "grid")
TRAVERSALS = ("dfs", "bfs")

_START, _REGULAR, _END = 0, 1, 2


class MazeError(RuntimeError):
    """Raised when a maze cannot be built from the given inputs."""


@total_ordering
@dataclass(frozen=True, eq=True)
class NodeId:
    """Node identity: ``Start``, a regular insertion index, or ``End``.

    The total order is ``Start < Regular(0) < Regular(1) < ... < End`` and is
    defined here once instead of being derived from field order.
    """

    kind: int
    index: int = -1

    @classmethod
    def start(cls) -> "NodeId":
        return cls(_START)

    @classmethod
    def end(cls) -> "NodeId":
        return cls(_END)

    @classmethod
    def regular(cls, index: int) -> "NodeId":
        if index < 0:
            raise ValueError(f"regular node index must be non-negative, got {index}")
        return cls(_REGULAR, int(index))

    @property
    def is_regular(self) -> bool:
        return self.kind == _REGULAR

    def _sort_key(self) -> Tuple[int, int]:
        return (self.kind, self.index if self.kind == _REGULAR else 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __repr__(self) -> str:
        if self.kind == _START:
            return "Start"
        if self.kind == _END:
            return "End"
        return f"Regular({self.index})"


@dataclass(frozen=True)
class Node:
    point: Point
    id: NodeId


@dataclass(frozen=True)
class Edge:
    """Undirected edge stored lower identity first."""

    u: NodeId
    v: NodeId

    def __post_init__(self) -> None:
        if self.u == self.v:
            raise ValueError(f"self-loop on {self.u!r} is not an edge")
        if self.v < self.u:
            lo, hi = self.v, self.u
            object.__setattr__(self, "u", lo)
            object.__setattr__(self, "v", hi)

    def __iter__(self):
        return iter((self.u, self.v))


@dataclass(frozen=True)
class MaxDepth:
    depth: int
    node: NodeId


@dataclass
class MazeConfig:
    """Tunable constants for sampling, growth and rendering.

    Lengths are in the same units as ``radius``. Use :meth:`scaled` to derive
    the radius-relative defaults for a different disc size.
    """

    radius: float = MAZE_RADIUS
    min_spacing: float = 0.04 * MAZE_RADIUS
    tube_radius: float = 0.01 * MAZE_RADIUS
    tube_shrink: float = 0.5
    max_turn: float = 0.7 * math.pi
    fan_out: int = 10
    min_midpoint_spacing: float = 0.6 * 0.04 * MAZE_RADIUS
    node_clearance: float = 2.0 * 0.01 * MAZE_RADIUS
    layout: str = "rejection"
    time_budget: Optional[float] = 3.0
    max_attempts: Optional[int] = None
    spiral_angular_step: float = 0.1
    spiral_radial_step: float = 0.002 * MAZE_RADIUS
    grid_step: float = 0.05 * MAZE_RADIUS
    traversal: str = "dfs"
    index_strategy: str = "heap"

    @classmethod
    def scaled(cls, radius: float, **overrides: object) -> "MazeConfig":
        """Defaults for a disc of ``radius``, then ``overrides``."""

        return replace(cls().rescaled(radius), **overrides)

    def rescaled(self, radius: float) -> "MazeConfig":
        """Copy with every length field scaled to ``radius``; other settings kept."""

        factor = radius / self.radius
        return replace(
            self,
            radius=radius,
            min_spacing=self.min_spacing * factor,
            tube_radius=self.tube_radius * factor,
            min_midpoint_spacing=self.min_midpoint_spacing * factor,
            node_clearance=self.node_clearance * factor,
            spiral_radial_step=self.spiral_radial_step * factor,
            grid_step=self.grid_step * factor,
        )

    def validate(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if self.min_spacing <= 0:
            raise ValueError(f"min_spacing must be positive, got {self.min_spacing}")
        if self.tube_radius < 0:
            raise ValueError(f"tube_radius must be non-negative, got {self.tube_radius}")
        if not 0.0 < self.tube_shrink <= 1.0:
            raise ValueError(f"tube_shrink must lie in (0, 1], got {self.tube_shrink}")
        if self.max_turn < 0:
            raise ValueError(f"max_turn must be non-negative, got {self.max_turn}")
        if self.min_midpoint_spacing < 0:
            raise ValueError(
                f"min_midpoint_spacing must be non-negative, got {self.min_midpoint_spacing}"
            )
        if self.node_clearance < 0:
            raise ValueError(f"node_clearance must be non-negative, got {self.node_clearance}")
        if self.spiral_radial_step <= 0:
            raise ValueError(
                f"spiral_radial_step must be positive, got {self.spiral_radial_step}"
            )
        if self.grid_step <= 0:
            raise ValueError(f"grid_step must be positive, got {self.grid_step}")
        if self.fan_out < 0:
            raise ValueError(f"fan_out must be non-negative, got {self.fan_out}")
        if self.layout not in LAYOUTS:
            raise ValueError(f"unknown layout {self.layout!r}; expected one of {LAYOUTS}")
        if self.layout == "rejection" and self.time_budget is None and self.max_attempts is None:
            raise ValueError("rejection layout needs a time_budget or max_attempts")
        if self.traversal not in TRAVERSALS:
            raise ValueError(
                f"unknown traversal {self.traversal!r}; expected one of {TRAVERSALS}"
            )
        if self.index_strategy not in INDEX_STRATEGIES:
            raise ValueError(
                f"unknown index strategy {self.index_strategy!r}; "
                f"expected one of {INDEX_STRATEGIES}"
            )


@dataclass
class GrowthResult:
    edges: Tuple[Edge, ...]
    max_depth: MaxDepth
    visited: frozenset
    midpoints: Tuple[Point, ...] = ()


@dataclass
class MazeResult:
    """Everything a renderer needs from one run."""

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    max_depth: MaxDepth
    start: Node
    end: Node
    entry_edge: Edge
    exit_edge: Edge
    visited: frozenset = field(default_factory=frozenset)
    attempts: int = 0
    elapsed: float = 0.0

    def node_points(self) -> Dict[NodeId, Point]:
        points = {node.id: node.point for node in self.nodes}
        points[self.start.id] = self.start.point
        points[self.end.id] = self.end.point
        return points

    def edge_segments(self) -> List[Tuple[Point, Point]]:
        points = self.node_points()
        return [(points[edge.u], points[edge.v]) for edge in self.edges]


__all__ = [
    "Edge",
    "GrowthResult",
    "LAYOUTS",
    "MAZE_RADIUS",
    "MaxDepth",
    "MazeConfig",
    "MazeError",
    "MazeResult",
    "Node",
    "NodeId",
    "TRAVERSALS",
]
