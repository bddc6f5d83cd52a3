from .geometry import Point, angle_between, orientation, turn_angle
from .segments import ribbon, ribbons_intersect, segments_intersect, shrink_segment
from .heap import BoundedMaxHeap
from .knn import EmptyIndexError, Neighbor, NeighborIndex
from .model import Edge, GrowthResult, MaxDepth, MazeConfig, MazeError, MazeResult, Node, NodeId
from .config import get_default_config, set_default_config
from .sampling import GridLayout, RejectionSampler, SpiralLayout, make_generator, sampling_radius
from .maze import MazeBuilder, build_index, grow_maze, make_nodes, node_distance
from .pipeline import build_maze, sentinel_nodes
from .validate import ValidationError, validate_maze, validate_points
from .svg import RenderStyle, generate_svg_document, write_svg

__all__ = [
    'Point',
    'angle_between',
    'orientation',
    'turn_angle',
    'ribbon',
    'ribbons_intersect',
    'segments_intersect',
    'shrink_segment',
    'BoundedMaxHeap',
    'EmptyIndexError',
    'Neighbor',
    'NeighborIndex',
    'Edge',
    'GrowthResult',
    'MaxDepth',
    'MazeConfig',
    'MazeError',
    'MazeResult',
    'Node',
    'NodeId',
    'get_default_config',
    'set_default_config',
    'GridLayout',
    'RejectionSampler',
    'SpiralLayout',
    'make_generator',
    'sampling_radius',
    'MazeBuilder',
    'build_index',
    'grow_maze',
    'make_nodes',
    'node_distance',
    'build_maze',
    'sentinel_nodes',
    'ValidationError',
    'validate_maze',
    'validate_points',
    'RenderStyle',
    'generate_svg_document',
    'write_svg',
]
