"""Maze → SVG document generation helpers."""

from .generator import RenderStyle, generate_svg_document, write_svg

__all__ = [
    "RenderStyle",
    "generate_svg_document",
    "write_svg",
]
