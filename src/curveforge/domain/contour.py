"""Composite contour made of cubic Bezier segments.

This module defines the path type every fitter produces and every derived
operation consumes:
- Contour: An ordered run of CubicSegments, open or closed
- ContourPoint: Result of a nearest-point query

Global parameter policy: ``t`` in [0, 1] is mapped uniformly by segment
count. With N segments, ``t * N`` selects segment ``floor(t * N)`` and the
fractional part is the local parameter; ``t == 1`` is the end of the last
segment. Values outside [0, 1] are clamped. Arc-length based queries are
available separately (``t_at_length``, ``position_at_length``,
``equidistant_positions``).

Normal orientation: ``normal(t)`` is the unit tangent rotated 90 degrees
counter-clockwise, ``(-y, x)``. For a counter-clockwise closed contour in a
y-up coordinate system it points inwards.
"""

import bisect
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from curveforge.config import get_default_settings
from curveforge.domain.segment import CubicSegment
from curveforge.domain.transform import Transform
from curveforge.domain.vector import Vector2, VectorLike
from curveforge.exceptions import (
    ContourError,
    DegenerateGeometry,
    InsufficientPoints,
    InvalidParameter,
)

if TYPE_CHECKING:
    from curveforge.core.intersections import Intersection, SelfIntersection

_DEGENERATE = 1e-12
_FALLBACK_DIRECTION = Vector2(1.0, 0.0)


def _clamp01(t: float) -> float:
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else t


@dataclass(frozen=True, slots=True)
class ContourPoint:
    """A point on a contour found by a query.

    Attributes:
        t: Global contour parameter of the point
        position: The point itself
        distance: Distance from the query point
    """

    t: float
    position: Vector2
    distance: float


@dataclass(frozen=True)
class Contour:
    """An open or closed path of cubic Bezier segments.

    Contours are immutable; transformations return new instances. Segment
    endpoints must join (C0 continuity) and a closed contour must end where
    it starts.

    Attributes:
        segments: Segments in path order
        closed: Whether the path ends at its start point
        continuity: Allowed gap between joined endpoints, relative to the
            contour's extent (settings default if None)
    """

    segments: tuple[CubicSegment, ...]
    closed: bool = False
    continuity: float | None = field(default=None, repr=False, compare=False, kw_only=True)
    _cached_length: float | None = field(default=None, repr=False, init=False, compare=False)
    _cached_arc_table: tuple[list[float], list[float]] | None = field(
        default=None, repr=False, init=False, compare=False
    )

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        object.__setattr__(self, "segments", segments)

        if not segments:
            raise InsufficientPoints(0, required=1, what="segments")

        tolerance = self._continuity_tolerance()
        for i in range(1, len(segments)):
            gap = segments[i - 1].p3.distance_to(segments[i].p0)
            if gap > tolerance:
                raise ContourError(
                    f"Segment {i} starts {gap:.3g} away from the end of segment {i - 1}"
                )

        if self.closed:
            gap = segments[-1].p3.distance_to(segments[0].p0)
            if gap > tolerance:
                raise ContourError(f"Closed contour ends {gap:.3g} away from its start")

    def _continuity_tolerance(self) -> float:
        scale = max(
            max(abs(s.p0.x), abs(s.p0.y), abs(s.p3.x), abs(s.p3.y)) for s in self.segments
        )
        base = self.continuity
        if base is None:
            base = get_default_settings().tolerance.continuity
        return base * max(1.0, scale)

    @classmethod
    def from_points(
        cls,
        points: Iterable[VectorLike],
        closed: bool = False,
        continuity: float | None = None,
    ) -> "Contour":
        """Build a polyline contour of straight segments.

        Args:
            points: Corner points in order
            closed: Add a closing segment back to the first point
            continuity: Endpoint gap tolerance passed to the contour

        Returns:
            Contour with one straight segment per edge

        Raises:
            InsufficientPoints: If fewer than 2 points are given
        """
        pts = [Vector2.of(p) for p in points]
        if len(pts) < 2:
            raise InsufficientPoints(len(pts))

        segments = [CubicSegment.line(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if closed:
            if pts[-1] != pts[0]:
                segments.append(CubicSegment.line(pts[-1], pts[0]))
            elif len(segments) < 2:
                raise InsufficientPoints(1)
        return cls(tuple(segments), closed, continuity=continuity)

    # Parameter mapping

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def segment_at(self, t: float) -> tuple[int, float]:
        """Map a global parameter to (segment index, local parameter)."""
        n = len(self.segments)
        scaled = _clamp01(t) * n
        index = int(scaled)
        if index >= n:
            return n - 1, 1.0
        return index, scaled - index

    def global_t(self, index: int, local_t: float) -> float:
        """Inverse of segment_at."""
        return (index + _clamp01(local_t)) / len(self.segments)

    # Evaluation

    def position(self, t: float) -> Vector2:
        """Point on the contour at global parameter t."""
        index, local = self.segment_at(t)
        return self.segments[index].position(local)

    def tangent(self, t: float) -> Vector2:
        """Unit tangent at global parameter t.

        When the derivative vanishes (a handle sitting on its endpoint, or a
        collapsed segment) the direction is taken from just inside the
        segment, then from the segment chord, then from the nearest segment
        with a usable direction, and finally (1, 0).
        """
        index, local = self.segment_at(t)
        segment = self.segments[index]

        derivative = segment.tangent(local)
        if derivative.length > _DEGENERATE:
            return derivative.normalized()

        nudged = local + 1e-6 if local < 0.5 else local - 1e-6
        derivative = segment.tangent(nudged)
        if derivative.length > _DEGENERATE:
            return derivative.normalized()

        chord = segment.chord()
        if chord.length > _DEGENERATE:
            return chord.normalized()

        return self._neighbour_direction(index)

    def _neighbour_direction(self, index: int) -> Vector2:
        n = len(self.segments)
        for offset in range(1, n):
            for candidate in (index - offset, index + offset):
                if self.closed:
                    candidate %= n
                elif not 0 <= candidate < n:
                    continue
                chord = self.segments[candidate].chord()
                if chord.length > _DEGENERATE:
                    return chord.normalized()
        return _FALLBACK_DIRECTION

    def normal(self, t: float) -> Vector2:
        """Unit normal at t: the tangent rotated 90 degrees counter-clockwise."""
        return self.tangent(t).perpendicular()

    def curvature(self, t: float) -> float:
        """Signed curvature at t (positive when turning counter-clockwise)."""
        index, local = self.segment_at(t)
        return self.segments[index].curvature(local)

    # Measurement

    def length(self, samples: int | None = None) -> float:
        """Total arc length: the sum of the segment lengths.

        Args:
            samples: Polyline steps per segment (default from settings)

        Returns:
            Approximate arc length
        """
        if samples is not None:
            return sum(s.approximate_length(samples) for s in self.segments)

        if self._cached_length is None:
            steps = get_default_settings().sampling.length_samples
            total = sum(s.approximate_length(steps) for s in self.segments)
            object.__setattr__(self, "_cached_length", total)
        return self._cached_length

    def _arc_table(self) -> tuple[list[float], list[float]]:
        """Cumulative (t, distance) table at the length sampling resolution."""
        if self._cached_arc_table is not None:
            return self._cached_arc_table

        steps = get_default_settings().sampling.length_samples
        n = len(self.segments)
        ts = [0.0]
        distances = [0.0]
        previous = self.segments[0].p0
        total = 0.0
        for index, segment in enumerate(self.segments):
            for i in range(1, steps + 1):
                local = i / steps
                current = segment.position(local)
                total += previous.distance_to(current)
                previous = current
                ts.append((index + local) / n)
                distances.append(total)

        table = (ts, distances)
        object.__setattr__(self, "_cached_arc_table", table)
        return table

    def t_at_length(self, distance: float) -> float:
        """Global parameter reached after travelling `distance` along the contour.

        Distances are clamped to [0, length].

        Raises:
            DegenerateGeometry: If the contour has zero length
        """
        ts, distances = self._arc_table()
        total = distances[-1]
        if total <= _DEGENERATE:
            raise DegenerateGeometry("Cannot parameterize a zero-length contour by arc length")

        distance = max(0.0, min(total, distance))
        i = bisect.bisect_left(distances, distance)
        if i == 0:
            return 0.0
        if i >= len(distances):
            return 1.0

        d0, d1 = distances[i - 1], distances[i]
        if d1 - d0 <= _DEGENERATE:
            return ts[i]
        return ts[i - 1] + (ts[i] - ts[i - 1]) * (distance - d0) / (d1 - d0)

    def position_at_length(self, distance: float) -> Vector2:
        return self.position(self.t_at_length(distance))

    def equidistant_positions(self, count: int) -> list[Vector2]:
        """Points spaced evenly by arc length, both endpoints included.

        Returns an empty list for a zero-length contour or count < 1.
        """
        if count < 1:
            return []
        total = self._arc_table()[1][-1]
        if total <= _DEGENERATE:
            return []
        if count == 1:
            return [self.position(0.0)]
        return [self.position_at_length(total * i / (count - 1)) for i in range(count)]

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Tight bounding box.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        boxes = [s.bounding_box() for s in self.segments]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def knots(self) -> list[Vector2]:
        """On-curve points: segment starts, plus the final end when open."""
        knots = [s.p0 for s in self.segments]
        if not self.closed:
            knots.append(self.segments[-1].p3)
        return knots

    # Approximation

    def sample(self, samples_per_segment: int) -> list[tuple[float, Vector2]]:
        """Uniformly sample every segment.

        Returns:
            (global t, point) pairs from t=0 to t=1 inclusive. For a closed
            contour the last point repeats the first.

        Raises:
            InvalidParameter: If samples_per_segment is less than 1
        """
        if samples_per_segment < 1:
            raise InvalidParameter("samples_per_segment", samples_per_segment, "must be at least 1")

        n = len(self.segments)
        result = [(0.0, self.segments[0].p0)]
        for index, segment in enumerate(self.segments):
            for i in range(1, samples_per_segment + 1):
                local = i / samples_per_segment
                result.append(((index + local) / n, segment.position(local)))
        return result

    def polyline(self, samples_per_segment: int = 16) -> list[Vector2]:
        return [p for _, p in self.sample(samples_per_segment)]

    def flatten(self, tolerance: float | None = None) -> list[Vector2]:
        """Adaptive polyline approximation of the whole contour."""
        if tolerance is None:
            tolerance = get_default_settings().tolerance.flatten
        points = [self.segments[0].p0]
        for segment in self.segments:
            points.extend(segment.flatten(tolerance)[1:])
        return points

    # Derivation

    def sub(self, t0: float, t1: float) -> "Contour":
        """Extract the open sub-curve between global parameters t0 and t1.

        Partial segments are cut with De Casteljau subdivision. When t0 > t1
        a closed contour wraps through its start point, while an open contour
        returns the range reversed. Equal parameters produce a single
        collapsed segment at that position.
        """
        t0 = _clamp01(t0)
        t1 = _clamp01(t1)

        if t0 == t1:
            p = self.position(t0)
            return Contour((CubicSegment(p, p, p, p),), closed=False, continuity=self.continuity)

        if t0 > t1:
            if not self.closed:
                return self.sub(t1, t0).reversed()
            head = self.sub(t0, 1.0).segments if t0 < 1.0 else ()
            tail = self.sub(0.0, t1).segments if t1 > 0.0 else ()
            if not head and not tail:
                return self.sub(0.0, 0.0)
            return Contour(head + tail, closed=False, continuity=self.continuity)

        i0, l0 = self.segment_at(t0)
        i1, l1 = self.segment_at(t1)
        if l1 == 0.0 and i1 > 0:
            i1, l1 = i1 - 1, 1.0

        if i0 == i1:
            piece = self.segments[i0].sub(l0, l1)
            return Contour((piece,), closed=False, continuity=self.continuity)

        pieces: list[CubicSegment] = []
        if l0 < 1.0:
            pieces.append(self.segments[i0].sub(l0, 1.0))
        pieces.extend(self.segments[i0 + 1 : i1])
        if l1 > 0.0:
            pieces.append(self.segments[i1].sub(0.0, l1))
        return Contour(tuple(pieces), closed=False, continuity=self.continuity)

    def reversed(self) -> "Contour":
        return Contour(
            tuple(s.reversed() for s in reversed(self.segments)),
            self.closed,
            continuity=self.continuity,
        )

    def transform(self, transform: Transform) -> "Contour":
        """Apply an affine transform to every control point."""
        return Contour(
            tuple(s.transform(transform) for s in self.segments),
            self.closed,
            continuity=self.continuity,
        )

    def translated(self, offset: VectorLike) -> "Contour":
        return self.transform(Transform.translation(offset))

    def rotated(self, angle: float, center: VectorLike | None = None) -> "Contour":
        return self.transform(Transform.rotation(angle, center))

    def scaled(
        self, sx: float, sy: float | None = None, center: VectorLike | None = None
    ) -> "Contour":
        return self.transform(Transform.scaling(sx, sy, center))

    # Queries

    def nearest(self, point: VectorLike) -> ContourPoint:
        """Find the closest point on the contour to `point`.

        A coarse sampling picks the best bracket, which is then narrowed by
        golden-section search on the global parameter.
        """
        target = Vector2.of(point)
        resolution = get_default_settings().sampling.intersection_resolution
        samples = self.sample(resolution)

        best = min(range(len(samples)), key=lambda i: samples[i][1].distance_to(target))
        lo = samples[max(0, best - 1)][0]
        hi = samples[min(len(samples) - 1, best + 1)][0]

        def dist(t: float) -> float:
            return self.position(t).distance_to(target)

        inv_phi = (math.sqrt(5.0) - 1.0) / 2.0
        a, b = lo, hi
        c = b - inv_phi * (b - a)
        d = a + inv_phi * (b - a)
        fc, fd = dist(c), dist(d)
        for _ in range(60):
            if fc < fd:
                b, d, fd = d, c, fc
                c = b - inv_phi * (b - a)
                fc = dist(c)
            else:
                a, c, fc = c, d, fd
                d = a + inv_phi * (b - a)
                fd = dist(d)

        t = (a + b) / 2.0
        candidates = [(dist(t), t), (dist(samples[best][0]), samples[best][0])]
        distance, t = min(candidates)
        return ContourPoint(t=t, position=self.position(t), distance=distance)

    def self_intersections(self) -> list["SelfIntersection"]:
        """Points where the contour crosses itself."""
        from curveforge.core.intersections import self_intersections

        return self_intersections(self)

    def intersections(self, other: "Contour") -> list["Intersection"]:
        """Points where this contour crosses `other`."""
        from curveforge.core.intersections import intersect

        return intersect(self, other)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the contour
        """
        return {
            "segments": [s.to_dict() for s in self.segments],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        segments = tuple(CubicSegment.from_dict(s) for s in data["segments"])
        return cls(segments, closed=bool(data.get("closed", False)))

