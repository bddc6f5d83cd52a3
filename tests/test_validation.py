import dataclasses

import numpy as np
import pytest

from discmaze import ValidationError, build_maze, validate_maze, validate_points
from discmaze.geometry import Point
from discmaze.model import Edge, MazeConfig, NodeId


def _maze():
    config = MazeConfig.scaled(100.0, time_budget=None, max_attempts=120)
    return config, build_maze(config, np.random.default_rng(5))


def test_validate_points_accepts_well_spaced_points():
    validate_points([(0.0, 0.0), (5.0, 0.0), (0.0, 5.0)], 4.0)
    validate_points([], 4.0)
    validate_points([(1.0, 1.0)], 4.0)


def test_validate_points_rejects_close_pair():
    with pytest.raises(ValidationError):
        validate_points([(0.0, 0.0), (3.0, 0.0)], 4.0)
    with pytest.raises(ValidationError):
        validate_points([(0.0, 0.0), (4.0, 0.0)], 4.0)


def test_generated_maze_passes():
    config, result = _maze()

    validate_maze(result, config)


def test_duplicate_edge_is_reported():
    config, result = _maze()
    assert result.edges
    broken = dataclasses.replace(result, edges=result.edges + (result.edges[0],))

    with pytest.raises(ValidationError, match="duplicate"):
        validate_maze(broken, config)


def test_unknown_endpoint_is_reported():
    config, result = _maze()
    ghost = Edge(NodeId.regular(0), NodeId.regular(len(result.nodes) + 5))
    broken = dataclasses.replace(result, edges=result.edges + (ghost,))

    with pytest.raises(ValidationError, match="unknown node"):
        validate_maze(broken, config)


def test_crossing_edges_are_reported():
    config = MazeConfig.scaled(100.0, time_budget=None, max_attempts=10)
    points = [(0.0, 0.0), (20.0, 0.0), (10.0, -10.0), (10.0, 10.0)]
    result = build_maze(config, np.random.default_rng(0), points=points)
    crossing = (Edge(NodeId.regular(0), NodeId.regular(1)), Edge(NodeId.regular(2), NodeId.regular(3)))
    broken = dataclasses.replace(result, edges=crossing)

    with pytest.raises(ValidationError, match="cross"):
        validate_maze(broken, config)


def test_crowded_nodes_are_reported():
    config, result = _maze()
    first = result.nodes[0]
    clone = dataclasses.replace(result.nodes[1], point=Point(first.point.x + 0.1, first.point.y))
    broken = dataclasses.replace(result, nodes=(first, clone) + result.nodes[2:])

    with pytest.raises(ValidationError, match="apart"):
        validate_maze(broken, config)
