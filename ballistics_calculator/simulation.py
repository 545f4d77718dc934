from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Union

import numpy as np

from .vector_math import Vec2D, Vec3D

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665  # m/s^2

Cartesian = Union[Vec2D, Vec3D]


class NeverLandsError(ValueError):
    """The projectile never returns to ground level."""


@dataclass(slots=True, frozen=True)
class SimulationConfig:
    ground_level: float = 0.0
    time_step: float = 0.01  # seconds between trajectory samples


@dataclass(slots=True)
class SimulationState:
    time: float
    position: Cartesian
    velocity: Cartesian

    @property
    def speed(self) -> float:
        return self.velocity.length()

    @property
    def height(self) -> float:
        return float(self.position.as_array()[-1])


def _copy(vec: Cartesian) -> Cartesian:
    return replace(vec)


def _propagate(state: SimulationState, gravity: float, time_delta: float) -> SimulationState:
    """Exact constant-gravity state ``time_delta`` seconds after ``state``."""
    pos = state.position.as_array()
    vel = state.velocity.as_array()
    acc = np.zeros(len(vel), dtype=np.float64)
    acc[-1] = -gravity
    kind = type(state.velocity)
    return SimulationState(
        time=state.time + time_delta,
        position=kind.from_array(pos + vel * time_delta + 0.5 * acc * time_delta**2),
        velocity=kind.from_array(vel + acc * time_delta),
    )


class Projectile:
    """Point mass under constant downward gravity, no drag.

    Height is the last component: ``y`` for ``Vec2D`` and ``z`` for ``Vec3D``.
    ``gravity`` is the magnitude of the downward acceleration and stays fixed
    for the lifetime of the projectile.
    """

    def __init__(
        self,
        velocity: Cartesian,
        gravity: float = STANDARD_GRAVITY,
        position: Optional[Cartesian] = None,
        config: SimulationConfig = SimulationConfig(),
    ) -> None:
        if not isinstance(velocity, (Vec2D, Vec3D)):
            raise TypeError(f"Velocity must be Vec2D or Vec3D, got {type(velocity).__name__}")
        if position is None:
            position = type(velocity).from_array(np.zeros(len(velocity.as_array())))
        elif type(position) is not type(velocity):
            raise TypeError(
                f"Position {type(position).__name__} does not match "
                f"velocity {type(velocity).__name__}"
            )
        self.config = config
        self._gravity = float(gravity)
        self.state = SimulationState(
            time=0.0,
            position=_copy(position),
            velocity=_copy(velocity),
        )
        logger.debug(
            "Projectile launched from %s with velocity %s, gravity %.5g",
            position, velocity, self._gravity,
        )

    @property
    def gravity(self) -> float:
        return self._gravity

    @property
    def velocity(self) -> Cartesian:
        return self.state.velocity

    @property
    def position(self) -> Cartesian:
        return self.state.position

    def state_at(self, time_delta: float) -> SimulationState:
        """Exact kinematic state ``time_delta`` seconds from now."""
        return _propagate(self.state, self._gravity, time_delta)

    def advance(self, time_delta: float) -> None:
        self.state = self.state_at(time_delta)

    def snapshot(self) -> SimulationState:
        return SimulationState(
            time=self.state.time,
            position=_copy(self.state.position),
            velocity=_copy(self.state.velocity),
        )

    def _vertical_speed(self) -> float:
        return float(self.state.velocity.as_array()[-1])

    def time_to_impact(self, launch_height: Optional[float] = None) -> float:
        """Seconds until height returns to ``config.ground_level``.

        Solves ``h0 + vz*t - g*t**2/2 = ground`` and picks the later root.
        Raises ``NeverLandsError`` if there is no such non-negative root,
        which includes every case with zero gravity and no downward velocity.
        """
        h0 = self.state.height if launch_height is None else launch_height
        vz = self._vertical_speed()
        g = self._gravity
        c = h0 - self.config.ground_level

        if g == 0:
            if vz < 0 and c >= 0:
                return -c / vz
            logger.debug("Zero gravity with vertical speed %.5g: never lands", vz)
            raise NeverLandsError(
                f"No gravity and vertical speed {vz} never reaches ground level"
            )

        a = -0.5 * g
        discriminant = vz**2 - 4 * a * c
        if discriminant < 0:
            logger.debug("Negative discriminant %.5g: never lands", discriminant)
            raise NeverLandsError(
                f"Height {h0} with vertical speed {vz} never reaches ground level"
            )
        root = math.sqrt(discriminant)
        later = max((-vz + root) / (2 * a), (-vz - root) / (2 * a))
        if later < 0:
            raise NeverLandsError(f"Ground level was only reached in the past ({later:.5g} s)")
        return later

    def time_to_apex(self) -> float:
        """Seconds until vertical speed reaches zero, 0 if it never rises again."""
        vz = self._vertical_speed()
        if self._gravity <= 0 or vz <= 0:
            return 0.0
        return vz / self._gravity

    def apex(self) -> SimulationState:
        return self.state_at(self.time_to_apex())

    def impact(self) -> SimulationState:
        return self.state_at(self.time_to_impact())

    def trajectory(self, time_step: Optional[float] = None) -> Trajectory:
        step = self.config.time_step if time_step is None else time_step
        return Trajectory(self, step)


class Trajectory:
    """Positions sampled every ``time_step`` seconds from launch to impact.

    The launch state is copied on creation, so iterating again restarts from
    the same point and later calls to ``Projectile.advance`` have no effect.
    The last sample is always the impact position.
    """

    def __init__(self, projectile: Projectile, time_step: float) -> None:
        if not time_step > 0:
            raise ValueError(f"Time step must be positive, got {time_step}")
        self.time_step = float(time_step)
        self.gravity = projectile.gravity
        self.ground_level = projectile.config.ground_level
        self._launch = projectile.snapshot()
        self.impact_time = projectile.time_to_impact()
        logger.debug(
            "Trajectory with step %.5g s lands after %.5g s",
            self.time_step, self.impact_time,
        )

    def __len__(self) -> int:
        return math.ceil(self.impact_time / self.time_step) + 1 if self.impact_time > 0 else 1

    def _state_at(self, time_delta: float) -> SimulationState:
        return _propagate(self._launch, self.gravity, time_delta)

    def states(self) -> Iterator[SimulationState]:
        n_steps = len(self) - 1
        for i in range(n_steps):
            yield self._state_at(i * self.time_step)
        impact = self._state_at(self.impact_time)
        # exact ground height at the final sample
        coords = impact.position.as_array()
        coords[-1] = self.ground_level
        impact.position = type(impact.position).from_array(coords)
        yield impact

    def __iter__(self) -> Iterator[Cartesian]:
        for state in self.states():
            yield state.position

    @property
    def range(self) -> float:
        """Horizontal distance from launch to impact."""
        delta = self._state_at(self.impact_time).position - self._launch.position
        if isinstance(delta, Vec3D):
            return delta.length_xy()
        return abs(delta.x)
