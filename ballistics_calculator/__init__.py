"""Projectile trajectories on 2D and 3D vector algebra."""

import logging

from .simulation import (
    STANDARD_GRAVITY,
    NeverLandsError,
    Projectile,
    SimulationConfig,
    SimulationState,
    Trajectory,
)
from .vector_math import Vec2D, Vec2DSphere, Vec3D, Vec3DSphere

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NeverLandsError",
    "Projectile",
    "STANDARD_GRAVITY",
    "SimulationConfig",
    "SimulationState",
    "Trajectory",
    "Vec2D",
    "Vec2DSphere",
    "Vec3D",
    "Vec3DSphere",
]
