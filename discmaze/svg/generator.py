"""SVG renderer for finished mazes: a dark disc with light tubes and nodes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..geometry import Point
from ..model import Edge, MazeConfig, MazeResult

logger = logging.getLogger(__name__)

svg_tpl = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="%s">
%s
</svg>
"""


@dataclass
class RenderStyle:
    """Colours of the rendered layers."""

    background: str = "black"
    corridor: str = "white"
    entry: str = "green"
    exit: str = "red"


def generate_svg_document(
    result: MazeResult,
    config: MazeConfig,
    style: Optional[RenderStyle] = None,
) -> str:
    """Render ``result`` as a standalone SVG document."""

    style = style or RenderStyle()
    radius = config.radius
    view_box = " ".join(_format_float(v) for v in (-radius, -radius, 2.0 * radius, 2.0 * radius))
    body = "\n".join(_emit_elements(result, config, style))
    return svg_tpl % (view_box, body)


def write_svg(
    path: Union[str, Path],
    result: MazeResult,
    config: MazeConfig,
    style: Optional[RenderStyle] = None,
) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_svg_document(result, config, style), encoding="utf-8")
    logger.info("Wrote SVG with %d edge(s) to %s", len(result.edges), output_path)
    return output_path


def _emit_elements(result: MazeResult, config: MazeConfig, style: RenderStyle) -> List[str]:
    points = result.node_points()
    tube = config.tube_radius
    lines: List[str] = []
    lines.append(
        f'  <circle cx="0" cy="0" r="{_format_float(config.radius)}" fill="{style.background}"/>'
    )

    lines.append('  <g id="nodes">')
    for node in result.nodes:
        lines.append("    " + _circle(node.point, tube, style.corridor))
    lines.append("  </g>")

    lines.append('  <g id="edges">')
    for edge in result.edges:
        lines.append("    " + _line(_edge_points(edge, points), tube * 2.0, style.corridor))
    lines.append("  </g>")

    exit_point = points[result.max_depth.node]
    lines.append('  <g id="doors">')
    lines.append("    " + _line(_edge_points(result.entry_edge, points), tube * 2.0, style.entry))
    lines.append("    " + _line(_edge_points(result.exit_edge, points), tube * 2.0, style.exit))
    lines.append("    " + _circle(exit_point, tube, style.exit))
    lines.append("  </g>")
    return lines


def _edge_points(edge: Edge, points) -> Tuple[Point, Point]:
    return points[edge.u], points[edge.v]


def _circle(center: Point, radius: float, fill: str) -> str:
    return (
        f'<circle cx="{_format_float(center.x)}" cy="{_format_float(center.y)}" '
        f'r="{_format_float(radius)}" fill="{fill}"/>'
    )


def _line(segment: Tuple[Point, Point], width: float, stroke: str) -> str:
    a, b = segment
    return (
        f'<line x1="{_format_float(a.x)}" y1="{_format_float(a.y)}" '
        f'x2="{_format_float(b.x)}" y2="{_format_float(b.y)}" '
        f'stroke="{stroke}" stroke-width="{_format_float(width)}" stroke-linecap="round"/>'
    )


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
