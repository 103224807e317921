"""Cubic Bezier segment.

A CubicSegment is the building block of every Contour. It is immutable:
subdivision, transformation and reversal all return new segments.
"""

from dataclasses import dataclass
from typing import Any

from curveforge.domain._bezier import cubic_extrema, flatten_cubic, split_cubic
from curveforge.domain.transform import Transform
from curveforge.domain.vector import Vector2
from curveforge.exceptions import InvalidParameter


def _clamp01(t: float) -> float:
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else t


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """A cubic Bezier arc from p0 to p3 with handles p1 and p2.

    Attributes:
        p0: Start point
        p1: Outgoing handle of p0
        p2: Incoming handle of p3
        p3: End point
    """

    p0: Vector2
    p1: Vector2
    p2: Vector2
    p3: Vector2

    @classmethod
    def line(cls, start: Vector2, end: Vector2) -> "CubicSegment":
        """Build a straight segment with handles at the chord thirds."""
        return cls(start, start.lerp(end, 1 / 3), start.lerp(end, 2 / 3), end)

    @property
    def points(self) -> tuple[Vector2, Vector2, Vector2, Vector2]:
        return (self.p0, self.p1, self.p2, self.p3)

    def position(self, t: float) -> Vector2:
        """Evaluate the curve at t (clamped to [0, 1]).

        B(t) = (1-t)^3 p0 + 3(1-t)^2 t p1 + 3(1-t) t^2 p2 + t^3 p3
        """
        t = _clamp01(t)
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        return Vector2(
            a * self.p0.x + b * self.p1.x + c * self.p2.x + d * self.p3.x,
            a * self.p0.y + b * self.p1.y + c * self.p2.y + d * self.p3.y,
        )

    def tangent(self, t: float) -> Vector2:
        """First derivative at t, not normalized.

        B'(t) = 3(1-t)^2 (p1-p0) + 6(1-t)t (p2-p1) + 3t^2 (p3-p2)
        """
        t = _clamp01(t)
        mt = 1.0 - t
        a = 3.0 * mt * mt
        b = 6.0 * mt * t
        c = 3.0 * t * t
        d01 = self.p1 - self.p0
        d12 = self.p2 - self.p1
        d23 = self.p3 - self.p2
        return Vector2(
            a * d01.x + b * d12.x + c * d23.x,
            a * d01.y + b * d12.y + c * d23.y,
        )

    def second_derivative(self, t: float) -> Vector2:
        t = _clamp01(t)
        a = self.p2 - self.p1 * 2.0 + self.p0
        b = self.p3 - self.p2 * 2.0 + self.p1
        return (a * (1.0 - t) + b * t) * 6.0

    def curvature(self, t: float) -> float:
        """Signed curvature at t; positive when turning counter-clockwise.

        Returns 0.0 where the derivative vanishes.
        """
        d1 = self.tangent(t)
        speed = d1.length
        if speed < 1e-12:
            return 0.0
        return d1.cross(self.second_derivative(t)) / (speed * speed * speed)

    def approximate_length(self, samples: int = 32) -> float:
        """Approximate arc length with a polyline of `samples` uniform steps.

        Args:
            samples: Number of steps, at least 2

        Returns:
            Sum of distances between consecutive evaluated points

        Raises:
            InvalidParameter: If samples is less than 2
        """
        if samples < 2:
            raise InvalidParameter("samples", samples, "must be at least 2")

        total = 0.0
        previous = self.p0
        for i in range(1, samples + 1):
            current = self.position(i / samples)
            total += previous.distance_to(current)
            previous = current
        return total

    def chord(self) -> Vector2:
        return self.p3 - self.p0

    def is_degenerate(self, epsilon: float = 1e-12) -> bool:
        """True when all four control points coincide."""
        return all(p.distance_to(self.p0) <= epsilon for p in (self.p1, self.p2, self.p3))

    def split(self, t: float) -> tuple["CubicSegment", "CubicSegment"]:
        """Split at t using De Casteljau subdivision."""
        left, right = split_cubic(self.points, _clamp01(t))
        return CubicSegment(*left), CubicSegment(*right)

    def sub(self, t0: float, t1: float) -> "CubicSegment":
        """Portion of the segment between local parameters t0 and t1.

        When t0 > t1 the portion is returned reversed.
        """
        t0 = _clamp01(t0)
        t1 = _clamp01(t1)
        if t0 > t1:
            return self.sub(t1, t0).reversed()
        if t0 == 0.0 and t1 == 1.0:
            return self
        if t1 == 0.0:
            return CubicSegment(self.p0, self.p0, self.p0, self.p0)

        head, _ = self.split(t1)
        if t0 == 0.0:
            return head
        _, piece = head.split(t0 / t1)
        return piece

    def reversed(self) -> "CubicSegment":
        return CubicSegment(self.p3, self.p2, self.p1, self.p0)

    def transform(self, transform: Transform) -> "CubicSegment":
        return CubicSegment(*(transform.apply(p) for p in self.points))

    def flatten(self, tolerance: float = 0.25) -> list[Vector2]:
        """Adaptive polyline approximation within `tolerance` of the curve."""
        return flatten_cubic(self.points, tolerance)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Tight bounding box including curve extrema.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        ts = [0.0, 1.0]
        ts += cubic_extrema(self.p0.x, self.p1.x, self.p2.x, self.p3.x)
        ts += cubic_extrema(self.p0.y, self.p1.y, self.p2.y, self.p3.y)
        pts = [self.position(t) for t in ts]
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return (min(xs), min(ys), max(xs), max(ys))

    def handle_lengths(self) -> tuple[float, float]:
        """Distances from the endpoints to their handles."""
        return self.p0.distance_to(self.p1), self.p3.distance_to(self.p2)

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CubicSegment":
        return cls(*(Vector2.from_dict(p) for p in data["points"]))
