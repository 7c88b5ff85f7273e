"""
Geometric Primitives for the gear model and File I/O.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union, TYPE_CHECKING
from numbers import Real
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass
class Vector:
    """
    A vector in the drawing plane representing direction and magnitude.
    """
    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Vector.")

    def __sub__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector from a Vector.")

    def __mul__(self, scalar: float) -> Vector:
        if not isinstance(scalar, Real):
            raise TypeError("A Vector can only be scaled by a real number.")
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if not isinstance(scalar, Real):
            raise TypeError("A Vector can only be divided by a real number.")
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction of the vector in radians, measured from +X."""
        return math.atan2(self.y, self.x)

    @staticmethod
    def from_polar(radius: float, angle_rad: float) -> Vector:
        return Vector(radius * math.cos(angle_rad), radius * math.sin(angle_rad))

    def rotate(self, angle_rad: float) -> Vector:
        """Rotate vector around the origin."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass
class Point:
    """A simple geometric point in world (or screen) space."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: Point, tol: float = 1e-9) -> bool:
        return self.distance_to(other) <= tol

    def copy(self) -> Point:
        return Point(self.x, self.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])

    @staticmethod
    def from_array(a: npt.ArrayLike) -> Point:
        arr = np.asarray(a, dtype=np.float64).reshape(-1)
        return Point(float(arr[0]), float(arr[1]))
