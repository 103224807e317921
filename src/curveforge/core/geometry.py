"""Flat geometric operations on points and polylines.

This module provides the polygon and line-segment utilities the curve
operations are built on:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Line segment intersection with parameters
- Nearest point on a segment
- Angle between directions

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from curveforge.domain import Vector2


def signed_area(points: Sequence[Vector2]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Vector2(0, 0), Vector2(1, 0), Vector2(1, 1), Vector2(0, 1)]
        >>> signed_area(square)  # CCW square
        1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def distance_to_segment(point: Vector2, seg_start: Vector2, seg_end: Vector2) -> float:
    return nearest_point_on_segment(point, seg_start, seg_end)[1]


def point_in_polygon(point: Vector2, polygon: Sequence[Vector2], boundary: float = 0.0) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.
    Points within `boundary` of an edge are classified as outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary
        boundary: Distance at which a point counts as lying on an edge

    Returns:
        True if point is strictly inside polygon, False otherwise

    Examples:
        >>> square = [Vector2(0, 0), Vector2(2, 0), Vector2(2, 2), Vector2(0, 2)]
        >>> point_in_polygon(Vector2(1, 1), square)  # Center
        True
        >>> point_in_polygon(Vector2(2, 1), square)  # On edge
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        pi, pj = polygon[i], polygon[j]

        if distance_to_segment(point, pj, pi) <= boundary:
            return False

        # Check if ray from point intersects edge (j, i)
        if ((pi.y > y) != (pj.y > y)) and (x < (pj.x - pi.x) * (y - pi.y) / (pj.y - pi.y) + pi.x):
            inside = not inside

        j = i

    return inside


def segment_intersection(
    p1: Vector2, p2: Vector2, p3: Vector2, p4: Vector2
) -> tuple[float, float, Vector2] | None:
    """Find where two line segments cross.

    Uses parametric line equations. Parallel and collinear segments report no
    intersection.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2

    Returns:
        (t, u, point) where t is the parameter along segment 1 and u along
        segment 2, or None if the segments do not cross

    Examples:
        >>> hit = segment_intersection(Vector2(0, 0), Vector2(2, 2), Vector2(0, 2), Vector2(2, 0))
        >>> hit[2]
        Vector2(x=1.0, y=1.0)
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    # Calculate denominator for parametric equations
    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Lines are parallel or coincident
    if abs(denom) < 1e-12:
        return None

    # Calculate parametric values for intersection
    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    # Check if intersection is within both segments
    if 0 <= t <= 1 and 0 <= u <= 1:
        return t, u, Vector2(x1 + t * (x2 - x1), y1 + t * (y2 - y1))

    return None  # Intersection outside segments


def nearest_point_on_segment(
    point: Vector2, seg_start: Vector2, seg_end: Vector2
) -> tuple[Vector2, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Handle zero-length segment
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-24:
        return seg_start, point.distance_to(seg_start)

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Vector2(seg_start.x + t * dx, seg_start.y + t * dy)
    return nearest, math.hypot(point.x - nearest.x, point.y - nearest.y)


def angle_between(a: Vector2, b: Vector2) -> float:
    """Unsigned angle between two directions, in [0, pi]."""
    la, lb = a.length, b.length
    if la < 1e-12 or lb < 1e-12:
        return 0.0
    cos_angle = max(-1.0, min(1.0, a.dot(b) / (la * lb)))
    return math.acos(cos_angle)
