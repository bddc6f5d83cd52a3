import math

import numpy as np
import pytest

from discmaze import build_maze, sentinel_nodes, validate_maze
from discmaze.model import Edge, MaxDepth, MazeConfig, MazeError, NodeId


def _small_config(**overrides):
    values = dict(time_budget=None, max_attempts=120, grid_step=15.0, spiral_radial_step=1.0)
    values.update(overrides)
    return MazeConfig.scaled(100.0, **values)


def test_sentinels_sit_outside_the_disc_on_opposite_sides():
    config = _small_config()

    start, end = sentinel_nodes(config)

    reach = 100.0 + 10.0 * config.tube_radius
    assert start.id == NodeId.start()
    assert end.id == NodeId.end()
    assert start.point.x == pytest.approx(-reach)
    assert start.point.y == pytest.approx(0.0, abs=1e-9)
    assert end.point == (reach, 0.0)


def test_empty_point_set_cannot_be_entered():
    with pytest.raises(MazeError):
        build_maze(_small_config(), np.random.default_rng(0), points=[])


def test_single_point_maze_has_only_doors():
    result = build_maze(_small_config(), np.random.default_rng(0), points=[(0.0, 0.0)])

    assert result.edges == ()
    assert result.max_depth == MaxDepth(0, NodeId.regular(0))
    assert result.entry_edge == Edge(NodeId.start(), NodeId.regular(0))
    assert result.exit_edge == Edge(NodeId.regular(0), NodeId.end())


def test_entry_is_the_node_nearest_the_start_sentinel():
    points = [(50.0, 0.0), (-60.0, 5.0), (0.0, 0.0)]

    result = build_maze(_small_config(), np.random.default_rng(0), points=points)

    assert result.entry_edge.v == NodeId.regular(1)


@pytest.mark.parametrize("layout", ["rejection", "spiral", "grid"])
@pytest.mark.parametrize("traversal", ["dfs", "bfs"])
def test_full_run_satisfies_invariants(layout, traversal):
    config = _small_config(layout=layout, traversal=traversal)

    result = build_maze(config, np.random.default_rng(21))

    assert len(result.nodes) > 1
    assert result.attempts >= len(result.nodes)
    assert result.exit_edge.u == result.max_depth.node
    validate_maze(result, config)


def test_full_run_is_reproducible_with_a_seeded_generator():
    config = _small_config()

    first = build_maze(config, np.random.default_rng(99))
    second = build_maze(config, np.random.default_rng(99))

    assert [n.point for n in first.nodes] == [n.point for n in second.nodes]
    assert first.edges == second.edges
    assert first.max_depth == second.max_depth


def test_node_points_include_sentinels():
    result = build_maze(_small_config(), np.random.default_rng(1), points=[(0.0, 0.0), (10.0, 0.0)])

    points = result.node_points()

    assert set(points) == {NodeId.start(), NodeId.regular(0), NodeId.regular(1), NodeId.end()}
    assert math.isclose(points[NodeId.regular(1)].x, 10.0)


def test_default_scale_run_passes_validation():
    config = MazeConfig(time_budget=None, max_attempts=2500)

    result = build_maze(config, np.random.default_rng(7))

    assert len(result.nodes) > 400
    assert len(result.edges) > 200
    validate_maze(result, config)
