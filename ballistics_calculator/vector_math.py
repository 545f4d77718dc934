"""Cartesian and spherical vector types for planar and 3D ballistics.

Spherical conventions:

* ``Vec3DSphere.azimuth`` is measured in the xy-plane from the +x axis.
* ``Vec3DSphere.polar`` is measured from the +z axis.
* ``Vec2DSphere.polar`` is measured from the +x axis (the elevation angle).

A zero-length vector has no direction. Converting one to spherical form
yields all-zero angles instead of NaN, and rescaling one leaves it at zero.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable

import numpy as np

Vector = np.ndarray


def to_vector(value: Iterable[float] | Vector) -> Vector:
    """Convert any iterable to a float64 numpy vector."""
    return np.asarray(list(value), dtype=np.float64)


def magnitude(vec: Vector) -> float:
    """Euclidean norm without overflow or underflow of the squares."""
    return math.hypot(*vec)


@dataclass(slots=True)
class Vec3DSphere:
    azimuth: float
    polar: float
    radius: float

    def to_vec(self) -> Vec3D:
        sin_polar = math.sin(self.polar)
        return Vec3D(
            x=self.radius * math.cos(self.azimuth) * sin_polar,
            y=self.radius * math.sin(self.azimuth) * sin_polar,
            z=self.radius * math.cos(self.polar),
        )


@dataclass(slots=True)
class Vec2DSphere:
    polar: float
    radius: float

    def to_vec(self) -> Vec2D:
        return Vec2D(
            x=self.radius * math.cos(self.polar),
            y=self.radius * math.sin(self.polar),
        )


class _Cartesian:
    """Shared arithmetic for the Cartesian vector types."""

    __slots__ = ()

    def as_array(self) -> Vector:
        raise NotImplementedError

    @classmethod
    def from_array(cls, values: Iterable[float] | Vector):
        return cls(*(float(v) for v in to_vector(values)))

    def length(self) -> float:
        return magnitude(self.as_array())

    def update_length(self, new: float) -> None:
        """Rescale to length ``new`` in place, keeping the direction.

        The zero vector has no direction and stays at zero.
        """
        if new < 0:
            raise ValueError(f"Length must be non-negative, got {new}")
        if self.length() == 0:
            return
        sphere = self.to_sphere()
        sphere.radius = new
        cartesian = sphere.to_vec()
        for name in self.__slots__:
            setattr(self, name, getattr(cartesian, name))

    def _check_peer(self, other) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def __add__(self, other):
        self._check_peer(other)
        return type(self).from_array(self.as_array() + other.as_array())

    def __sub__(self, other):
        self._check_peer(other)
        return type(self).from_array(self.as_array() - other.as_array())

    def __mul__(self, scalar: float):
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return type(self).from_array(self.as_array() * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return type(self).from_array(-self.as_array())


@dataclass(slots=True)
class Vec3D(_Cartesian):
    """A 3D Cartesian vector; z is height."""

    x: float
    y: float
    z: float

    def as_array(self) -> Vector:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def length_xy(self) -> float:
        """Length of the projection onto the xy-plane."""
        return math.hypot(self.x, self.y)

    def to_2d(self) -> Vec2D:
        """Collapse onto the vertical plane containing the vector.

        x becomes the horizontal distance and y the height. Only valid while
        the horizontal direction of flight does not change.
        """
        return Vec2D(x=self.length_xy(), y=self.z)

    def to_sphere(self) -> Vec3DSphere:
        radius = self.length()
        if radius == 0:
            return Vec3DSphere(azimuth=0.0, polar=0.0, radius=0.0)
        # atan2(0, 0) is 0, so vectors along z get azimuth 0
        return Vec3DSphere(
            azimuth=math.atan2(self.y, self.x),
            polar=math.atan2(self.length_xy(), self.z),
            radius=radius,
        )


@dataclass(slots=True)
class Vec2D(_Cartesian):
    """A planar Cartesian vector: (horizontal distance, height)."""

    x: float
    y: float

    def as_array(self) -> Vector:
        return np.array([self.x, self.y], dtype=np.float64)

    def to_sphere(self) -> Vec2DSphere:
        radius = self.length()
        if radius == 0:
            return Vec2DSphere(polar=0.0, radius=0.0)
        return Vec2DSphere(polar=math.atan2(self.y, self.x), radius=radius)
