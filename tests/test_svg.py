from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from discmaze import MazeConfig, RenderStyle, build_maze, generate_svg_document, write_svg
from discmaze.geometry import Point
from discmaze.svg.generator import _format_float


def _result():
    config = MazeConfig.scaled(100.0, time_budget=None, max_attempts=10)
    points = [(0.0, 0.0), (-20.0, 0.0), (20.0, 0.0), (0.0, 20.0)]
    return config, build_maze(config, np.random.default_rng(3), points=points)


def test_document_has_disc_view_box_and_layers() -> None:
    config, result = _result()

    document = generate_svg_document(result, config)

    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'viewBox="-100 -100 200 200"' in document
    assert '<circle cx="0" cy="0" r="100" fill="black"/>' in document
    for layer in ("nodes", "edges", "doors"):
        assert f'<g id="{layer}">' in document
    assert document.rstrip().endswith("</svg>")


def test_element_counts_follow_maze_shape() -> None:
    config, result = _result()

    document = generate_svg_document(result, config)

    assert document.count("<line ") == len(result.edges) + 2
    assert document.count("<circle ") == len(result.nodes) + 2


def test_doors_use_entry_and_exit_colours() -> None:
    config, result = _result()
    style = RenderStyle(background="navy", corridor="ivory", entry="lime", exit="orange")

    document = generate_svg_document(result, config, style)

    assert 'fill="navy"' in document
    assert 'stroke="lime"' in document
    assert 'stroke="orange"' in document
    assert 'fill="orange"' in document
    assert 'stroke-width="2"' in document


def test_write_svg_creates_parent_directories(tmp_path) -> None:
    config, result = _result()
    target = tmp_path / "nested" / "maze.svg"

    written = write_svg(target, result, config)

    assert written == target
    assert target.read_text(encoding="utf-8") == generate_svg_document(result, config)


def test_format_float_trims_and_rejects_non_finite() -> None:
    assert _format_float(1.5) == "1.5"
    assert _format_float(2.0) == "2"
    assert _format_float(-0.00001) == "0"
    assert _format_float(0.12345) == "0.1235"
    with pytest.raises(ValueError):
        _format_float(math.nan)
    with pytest.raises(ValueError):
        _format_float(math.inf)


def test_non_finite_node_is_rejected() -> None:
    config, result = _result()
    broken_node = dataclasses.replace(result.nodes[0], point=Point(math.nan, 0.0))
    broken = dataclasses.replace(result, nodes=(broken_node,) + result.nodes[1:])

    with pytest.raises(ValueError):
        generate_svg_document(broken, config)
