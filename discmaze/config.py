"""Process-wide default maze configuration."""

from __future__ import annotations

import copy

from .model import MazeConfig

_DEFAULT_CONFIG = MazeConfig()


def get_default_config() -> MazeConfig:
    return copy.deepcopy(_DEFAULT_CONFIG)


def set_default_config(config: MazeConfig) -> None:
    global _DEFAULT_CONFIG
    config.validate()
    _DEFAULT_CONFIG = copy.deepcopy(config)
