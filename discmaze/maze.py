"""Constrained graph growth over a sampled node set.

Starting from a seed node, the builder repeatedly proposes edges to the
``fan_out`` nearest unvisited nodes and keeps an edge only when it turns
smoothly, stays clear of every accepted edge and keeps its midpoint away from
other corridors and unrelated nodes. The result is a tree whose deepest node
serves as the maze exit.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Sequence, Set, Tuple

import numpy as np

from .geometry import Point, turn_angle
from .knn import NeighborIndex
from .logging_utils import apply_debug_logging
from .model import Edge, GrowthResult, MaxDepth, MazeConfig, Node, NodeId
from .sampling import RandomSource, SpacingGuard
from .segments import RibbonSet, Segment, ribbon

logger = logging.getLogger(__name__)


def node_distance(a: Node, b: Node) -> float:
    """Squared Euclidean distance; ranking only needs a monotone metric."""

    return (a.point - b.point).length_squared()


def build_index(nodes: Sequence[Node], strategy: str = "heap") -> NeighborIndex:
    index: NeighborIndex = NeighborIndex(node_distance, strategy=strategy)
    index.extend(nodes)
    return index


@dataclass
class _GrowthState:
    seed: NodeId
    visited: Set[NodeId] = field(default_factory=set)
    edges: List[Edge] = field(default_factory=list)
    ribbons: RibbonSet = field(default_factory=RibbonSet)
    midpoints: List[Point] = field(default_factory=list)
    max_depth: Optional[MaxDepth] = None


@dataclass
class _Frame:
    prior: Point
    current: Node
    depth: int
    candidates: List[Node]
    cursor: int = 0


class MazeBuilder:
    """Grow a non-crossing tree over ``nodes`` using one acceptance predicate.

    ``nodes[i]`` must carry ``NodeId.regular(i)``. Depth-first growth runs on an
    explicit stack so large node sets cannot exhaust the interpreter stack.
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        config: MazeConfig,
        rng: RandomSource,
        index: Optional[NeighborIndex] = None,
    ):
        for position, node in enumerate(nodes):
            if node.id != NodeId.regular(position):
                raise ValueError(f"node at position {position} has identity {node.id!r}")
        self.nodes = tuple(nodes)
        self.config = config
        self.rng = rng
        self.index = index if index is not None else build_index(self.nodes, config.index_strategy)
        self._coords = np.asarray([node.point for node in self.nodes], dtype=float).reshape(-1, 2)
        self._clearance_sq = float(config.node_clearance) ** 2

    def grow(self, seed: Node, prior: Point, traversal: Optional[str] = None) -> GrowthResult:
        """Run one growth pass from ``seed``; ``prior`` seeds the turn check.

        The seed counts as visited from the start: its first incident edge is
        the entry edge from ``prior`` (the Start sentinel in :func:`build_maze`).
        """

        traversal = traversal or self.config.traversal
        known = seed.id.is_regular and seed.id.index < len(self.nodes)
        if not known or self.nodes[seed.id.index] != seed:
            raise ValueError(f"seed {seed.id!r} is not part of the node set")

        state = _GrowthState(seed=seed.id)
        state.visited.add(seed.id)
        state.max_depth = MaxDepth(0, seed.id)
        guard = SpacingGuard(self.config.min_midpoint_spacing)

        if traversal == "dfs":
            self._grow_depth_first(state, guard, seed, prior)
        elif traversal == "bfs":
            self._grow_breadth_first(state, guard, seed, prior)
        else:
            raise ValueError(f"unknown traversal {traversal!r}")

        logger.info(
            "Grew %d edge(s) over %d node(s) via %s; deepest node %r at depth %d",
            len(state.edges),
            len(self.nodes),
            traversal,
            state.max_depth.node,
            state.max_depth.depth,
        )
        return GrowthResult(
            edges=tuple(state.edges),
            max_depth=state.max_depth,
            visited=frozenset(state.visited),
            midpoints=tuple(state.midpoints),
        )

    def _candidates(self, state: _GrowthState, current: Node) -> List[Node]:
        found = self.index.nearest(
            current,
            self.config.fan_out,
            where=lambda node: node.id not in state.visited,
        )
        candidates = [neighbor.item for neighbor in found]
        self.rng.shuffle(candidates)
        return candidates

    def _grow_depth_first(
        self, state: _GrowthState, guard: SpacingGuard, seed: Node, prior: Point
    ) -> None:
        stack: List[_Frame] = [_Frame(prior, seed, 0, self._candidates(state, seed))]
        while stack:
            frame = stack[-1]
            if frame.cursor >= len(frame.candidates):
                stack.pop()
                continue
            candidate = frame.candidates[frame.cursor]
            frame.cursor += 1
            depth = frame.depth + 1
            if self._try_accept(state, guard, frame.prior, frame.current, candidate, depth):
                stack.append(
                    _Frame(frame.current.point, candidate, depth, self._candidates(state, candidate))
                )

    def _grow_breadth_first(
        self, state: _GrowthState, guard: SpacingGuard, seed: Node, prior: Point
    ) -> None:
        queue: Deque[Tuple[Point, Node, Node, int]] = deque()
        for candidate in self._candidates(state, seed):
            queue.append((prior, seed, candidate, 1))
        while queue:
            prior_point, current, candidate, depth = queue.popleft()
            if self._try_accept(state, guard, prior_point, current, candidate, depth):
                for follower in self._candidates(state, candidate):
                    queue.append((current.point, candidate, follower, depth + 1))

    def _try_accept(
        self,
        state: _GrowthState,
        guard: SpacingGuard,
        prior: Point,
        current: Node,
        candidate: Node,
        depth: int,
    ) -> bool:
        reason = self._rejection_reason(state, guard, prior, current, candidate)
        if reason is not None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Rejected %r -> %r: %s", current.id, candidate.id, reason)
            return False

        midpoint = current.point.midpoint(candidate.point)
        state.visited.add(candidate.id)
        state.edges.append(Edge(current.id, candidate.id))
        state.ribbons.add(self._ribbon(current, candidate))
        state.midpoints.append(midpoint)
        guard.accept(midpoint)
        if state.max_depth is None or depth > state.max_depth.depth:
            state.max_depth = MaxDepth(depth, candidate.id)
        return True

    def _rejection_reason(
        self,
        state: _GrowthState,
        guard: SpacingGuard,
        prior: Point,
        current: Node,
        candidate: Node,
    ) -> Optional[str]:
        if candidate.id in state.visited:
            return "visited"
        if turn_angle(prior, current.point, candidate.point) > self.config.max_turn:
            return "turn"
        if state.ribbons.crosses(self._ribbon(current, candidate)):
            return "crossing"
        midpoint = current.point.midpoint(candidate.point)
        if not guard.admits(midpoint):
            return "midpoint spacing"
        if not self._clear_of_nodes(midpoint, current.id, candidate.id):
            return "node clearance"
        return None

    def _ribbon(self, a: Node, b: Node) -> List[Segment]:
        # canonical edge orientation, matching Edge.u -> Edge.v
        if b.id < a.id:
            a, b = b, a
        return ribbon(a.point, b.point, self.config.tube_radius, self.config.tube_shrink)

    def _clear_of_nodes(self, point: Point, *endpoints: NodeId) -> bool:
        if not len(self._coords):
            return True
        delta = self._coords - np.asarray(point, dtype=float)
        dist_sq = np.einsum("ij,ij->i", delta, delta)
        for node_id in endpoints:
            dist_sq[node_id.index] = np.inf
        return bool(np.all(dist_sq > self._clearance_sq))


def grow_maze(
    nodes: Sequence[Node],
    config: MazeConfig,
    rng: RandomSource,
    seed: Node,
    prior: Point,
    traversal: Optional[str] = None,
) -> GrowthResult:
    """Convenience wrapper: index ``nodes`` and grow once from ``seed``."""

    return MazeBuilder(nodes, config, rng).grow(seed, prior, traversal)


def make_nodes(points: Sequence[Tuple[float, float]]) -> List[Node]:
    """Wrap points as regular nodes whose index is their position."""

    return [Node(Point(float(x), float(y)), NodeId.regular(idx)) for idx, (x, y) in enumerate(points)]


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "node_distance",
        "MazeBuilder._candidates",
        "MazeBuilder._try_accept",
        "MazeBuilder._rejection_reason",
        "MazeBuilder._ribbon",
        "MazeBuilder._clear_of_nodes",
    },
)


__all__ = [
    "MazeBuilder",
    "build_index",
    "grow_maze",
    "make_nodes",
    "node_distance",
]
