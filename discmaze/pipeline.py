"""End-to-end maze construction: sample, index, enter, grow, exit."""

from __future__ import annotations

import logging
import math
import time
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import get_default_config
from .geometry import Point
from .knn import EmptyIndexError
from .maze import MazeBuilder, build_index, make_nodes
from .model import Edge, MazeConfig, MazeError, MazeResult, Node, NodeId
from .sampling import RandomSource, make_generator

logger = logging.getLogger(__name__)

SENTINEL_OFFSET = 10.0


def sentinel_nodes(config: MazeConfig) -> Tuple[Node, Node]:
    """Start and End pseudo-nodes on opposite sides just outside the disc."""

    reach = config.radius + config.tube_radius * SENTINEL_OFFSET
    start = Node(Point.from_polar(math.pi, reach), NodeId.start())
    end = Node(Point.from_polar(0.0, reach), NodeId.end())
    return start, end


def build_maze(
    config: Optional[MazeConfig] = None,
    rng: Optional[RandomSource] = None,
    points: Optional[Sequence[Tuple[float, float]]] = None,
) -> MazeResult:
    """Build one maze.

    ``points`` bypasses the configured generator. The maze is entered from the
    node nearest the Start sentinel and exits at the deepest node reached.
    Raises :class:`MazeError` when there is no node to enter from.
    """

    config = config or get_default_config()
    config.validate()
    if rng is None:
        rng = np.random.default_rng()

    started = time.monotonic()
    if points is None:
        generator = make_generator(config)
        points = generator.generate(rng)
        attempts = getattr(generator, "attempts", len(points))
    else:
        attempts = len(points)

    nodes = make_nodes(points)
    index = build_index(nodes, config.index_strategy)
    start, end = sentinel_nodes(config)
    logger.info("Indexed %d node(s) using %s strategy", len(nodes), config.index_strategy)

    try:
        entry = index.nearest_one(start).item
    except EmptyIndexError as exc:
        raise MazeError("no nodes to enter the maze from; spacing too large for the disc?") from exc

    builder = MazeBuilder(nodes, config, rng, index=index)
    growth = builder.grow(entry, start.point)
    exit_id = growth.max_depth.node

    result = MazeResult(
        nodes=tuple(nodes),
        edges=growth.edges,
        max_depth=growth.max_depth,
        start=start,
        end=end,
        entry_edge=Edge(start.id, entry.id),
        exit_edge=Edge(exit_id, end.id),
        visited=growth.visited,
        attempts=attempts,
        elapsed=time.monotonic() - started,
    )
    logger.info(
        "Maze ready: %d node(s), %d edge(s), exit %r at depth %d (%.2fs)",
        len(result.nodes),
        len(result.edges),
        exit_id,
        growth.max_depth.depth,
        result.elapsed,
    )
    return result


__all__ = ["SENTINEL_OFFSET", "build_maze", "sentinel_nodes"]
