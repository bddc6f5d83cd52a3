from typing import Sequence, Set, Tuple

import numpy as np
from scipy.spatial.distance import pdist

from .model import Edge, MazeConfig, MazeResult, NodeId
from .segments import ribbon, ribbon_crossings


class ValidationError(Exception):
    pass


def validate_points(points: Sequence[Tuple[float, float]], min_spacing: float) -> None:
    if len(points) < 2:
        return
    distances = pdist(np.asarray(points, dtype=float))
    closest = float(distances.min())
    if closest <= min_spacing:
        raise ValidationError(f'points only {closest:.6g} apart, need more than {min_spacing:.6g}')


def _check_edge(edge: Edge, known: Set[NodeId], seen: Set[Edge]) -> None:
    for node_id in edge:
        if node_id not in known:
            raise ValidationError(f'edge {edge.u!r}-{edge.v!r} references unknown node {node_id!r}')
    if edge in seen:
        raise ValidationError(f'duplicate edge {edge.u!r}-{edge.v!r}')
    seen.add(edge)


def validate_maze(result: MazeResult, config: MazeConfig) -> None:
    """Re-check the invariants a finished maze must satisfy."""

    validate_points([node.point for node in result.nodes], config.min_spacing)

    known = {node.id for node in result.nodes}
    for position, node in enumerate(result.nodes):
        if node.id != NodeId.regular(position):
            raise ValidationError(f'node at position {position} carries identity {node.id!r}')

    seen: Set[Edge] = set()
    for edge in result.edges:
        _check_edge(edge, known, seen)

    if len(result.visited) > len(result.nodes):
        raise ValidationError(f'{len(result.visited)} visited nodes but only {len(result.nodes)} exist')
    if result.max_depth.node not in known:
        raise ValidationError(f'max-depth marker points at unknown node {result.max_depth.node!r}')

    segments = result.edge_segments()
    lines = np.asarray(
        [ribbon(a, b, config.tube_radius, config.tube_shrink) for a, b in segments], dtype=float
    ).reshape(-1, 3, 2, 2)
    for i in range(len(lines) - 1):
        crossed = np.flatnonzero(ribbon_crossings(lines[i], lines[i + 1 :]))
        if len(crossed):
            a, b = result.edges[i], result.edges[i + 1 + int(crossed[0])]
            raise ValidationError(f'edges {a.u!r}-{a.v!r} and {b.u!r}-{b.v!r} cross')
