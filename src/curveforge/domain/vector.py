"""Immutable 2D vector type.

Vector2 doubles as point and direction. All arithmetic returns new
instances; nothing in the library mutates a vector after creation.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

VectorLike = Union["Vector2", Sequence[float]]


@dataclass(frozen=True, slots=True)
class Vector2:
    """A point or direction in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    @classmethod
    def of(cls, value: VectorLike) -> "Vector2":
        """Coerce a Vector2 or an (x, y) pair into a Vector2.

        Args:
            value: Vector2 instance or any two-element sequence of numbers

        Returns:
            Vector2 instance (the same object when already a Vector2)

        Raises:
            TypeError: If value is not a two-element sequence
        """
        if isinstance(value, Vector2):
            return value
        if len(value) != 2:
            raise TypeError(f"Expected an (x, y) pair, got {value!r}")
        return cls(float(value[0]), float(value[1]))

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        """Build a vector from a polar angle in radians."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> "Vector2":
        """Return the unit vector in the same direction.

        A zero-length vector normalizes to the zero vector instead of
        raising, so callers can test the result for length themselves.
        """
        length = self.length
        if length == 0.0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / length, self.y / length)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        return self.x * other.y - self.y * other.x

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def perpendicular(self) -> "Vector2":
        """Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)."""
        return Vector2(-self.y, self.x)

    def rotated(self, angle: float) -> "Vector2":
        """Rotate around the origin by angle radians (counter-clockwise)."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def angle(self) -> float:
        """Polar angle in radians, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def lerp(self, other: "Vector2", t: float) -> "Vector2":
        return Vector2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def is_close(self, other: "Vector2", tolerance: float = 1e-9) -> bool:
        return self.distance_to(other) <= tolerance

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vector2":
        return cls(x=float(data["x"]), y=float(data["y"]))
