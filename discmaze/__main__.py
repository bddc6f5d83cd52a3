import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from discmaze import (
    MazeConfig,
    MazeError,
    ValidationError,
    build_maze,
    get_default_config,
    validate_maze,
    write_svg,
)
from discmaze.model import LAYOUTS, TRAVERSALS

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_config(args: argparse.Namespace) -> MazeConfig:
    config = get_default_config()
    if args.radius is not None:
        config = config.rescaled(args.radius)
    overrides = {}
    for name in ("layout", "traversal", "fan_out", "max_turn", "max_attempts"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.time_budget is not None:
        overrides["time_budget"] = args.time_budget if args.time_budget > 0 else None
    return dataclasses.replace(config, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Grow a maze inside a disc and write it as SVG")
    parser.add_argument("output", help="Path of the SVG file to write")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (default: fresh entropy)",
    )
    parser.add_argument("--radius", type=float, help="Disc radius; other lengths scale with it")
    parser.add_argument(
        "--time-budget",
        type=float,
        help="Seconds spent sampling points (0 disables the time limit)",
    )
    parser.add_argument("--max-attempts", type=int, help="Cap on sampled candidate points")
    parser.add_argument("--layout", choices=LAYOUTS, help="Point layout")
    parser.add_argument("--traversal", choices=TRAVERSALS, help="Growth order")
    parser.add_argument("--fan-out", type=int, help="Nearest neighbours tried per node")
    parser.add_argument("--max-turn", type=float, help="Largest heading change in radians")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Re-check maze invariants before writing",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        config = _build_config(args)
        config.validate()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise SystemExit(2)

    rng = np.random.default_rng(args.seed)
    try:
        result = build_maze(config, rng)
        if args.validate:
            validate_maze(result, config)
            logger.info("Maze invariants hold")
    except (MazeError, ValidationError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1)

    path = write_svg(args.output, result, config)
    print(f"Scanned {result.attempts} point(s), kept {len(result.nodes)}")
    print(f"Edges: {len(result.edges)}")
    print(f"Exit: {result.max_depth.node!r} at depth {result.max_depth.depth}")
    print(f"SVG written to {path}")


if __name__ == "__main__":
    main(sys.argv[1:])
