"""Internal cubic Bezier algorithms.

This is an internal module containing the subdivision and flattening
helpers behind CubicSegment. Not intended for public use.
"""

import math

from curveforge.domain.vector import Vector2

CubicPoints = tuple[Vector2, Vector2, Vector2, Vector2]


def split_cubic(points: CubicPoints, t: float) -> tuple[CubicPoints, CubicPoints]:
    """Split a cubic Bezier curve at parameter t using De Casteljau's algorithm.

    Args:
        points: Control points (p0, p1, p2, p3)
        t: Split parameter in [0, 1]

    Returns:
        Tuple of (left, right) control point tuples. The left half covers
        [0, t] and the right half covers [t, 1]; both share the split point.
    """
    p0, p1, p2, p3 = points

    # First level
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    q2 = p2.lerp(p3, t)

    # Second level
    r0 = q0.lerp(q1, t)
    r1 = q1.lerp(q2, t)

    # Third level (point on curve)
    mid = r0.lerp(r1, t)

    return (p0, q0, r0, mid), (mid, r1, q2, p3)


def flatten_cubic(points: CubicPoints, tolerance: float, depth: int = 0) -> list[Vector2]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Args:
        points: Control points (p0, p1, p2, p3)
        tolerance: Maximum distance from true curve
        depth: Current recursion depth (subdivision stops at 16)

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2, p3 = points

    # Flatness: how far the inner control points stray from the chord
    chord = p3 - p0
    chord_length = chord.length
    if chord_length < 1e-12:
        deviation = max(p1.distance_to(p0), p2.distance_to(p0))
    else:
        deviation = max(
            abs(chord.cross(p1 - p0)) / chord_length,
            abs(chord.cross(p2 - p0)) / chord_length,
        )

    if deviation <= tolerance or depth >= 16:
        return [p0, p3]

    left, right = split_cubic(points, 0.5)
    left_points = flatten_cubic(left, tolerance, depth + 1)
    right_points = flatten_cubic(right, tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left_points[:-1] + right_points


def cubic_extrema(a: float, b: float, c: float, d: float) -> list[float]:
    """Parameters in (0, 1) where a 1D cubic Bezier has zero derivative.

    Args:
        a, b, c, d: Scalar control values of the cubic

    Returns:
        Sorted list of parameters strictly inside (0, 1)
    """
    # Derivative coefficients: qa*t^2 + qb*t + qc
    qa = 3 * (-a + 3 * b - 3 * c + d)
    qb = 6 * (a - 2 * b + c)
    qc = 3 * (b - a)

    roots: list[float] = []
    if abs(qa) < 1e-12:
        if abs(qb) > 1e-12:
            roots.append(-qc / qb)
    else:
        disc = qb * qb - 4 * qa * qc
        if disc >= 0:
            sq = math.sqrt(disc)
            roots.append((-qb + sq) / (2 * qa))
            roots.append((-qb - sq) / (2 * qa))

    return sorted(r for r in roots if 0.0 < r < 1.0)
