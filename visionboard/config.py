"""Process-wide default physics configuration."""

from __future__ import annotations

import copy

from .model import PhysicsConfig

_PHYSICS_CONFIG = PhysicsConfig()


def get_physics_config() -> PhysicsConfig:
    return copy.deepcopy(_PHYSICS_CONFIG)


def set_physics_config(config: PhysicsConfig) -> None:
    global _PHYSICS_CONFIG
    _PHYSICS_CONFIG = copy.deepcopy(config)


def reset_physics_config() -> None:
    set_physics_config(PhysicsConfig())
