"""Intersections between contours.

Both contours are approximated by polylines sampled uniformly per segment,
and the polyline edges are tested pairwise with exact line-segment
intersection. Global contour parameters are recovered by interpolating the
sample parameters of the crossing edges, so results are accurate to the
sampling resolution. An edge bounding-box check skips most pairs.
"""

import logging
from dataclasses import dataclass

from curveforge.config import CurveForgeSettings, get_default_settings
from curveforge.core.geometry import segment_intersection
from curveforge.domain import Contour, Vector2

logger = logging.getLogger(__name__)

_Edge = tuple[float, float, Vector2, Vector2, tuple[float, float, float, float]]


@dataclass(frozen=True, slots=True)
class Intersection:
    """A crossing between two contours.

    Attributes:
        t_a: Global parameter on the first contour
        t_b: Global parameter on the second contour
        point: Location of the crossing
    """

    t_a: float
    t_b: float
    point: Vector2


@dataclass(frozen=True, slots=True)
class SelfIntersection:
    """A point where a contour crosses itself.

    Attributes:
        t_a: Earlier global parameter of the crossing
        t_b: Later global parameter of the crossing
        point: Location of the crossing
    """

    t_a: float
    t_b: float
    point: Vector2


def _edges(contour: Contour, resolution: int) -> list[_Edge]:
    samples = contour.sample(resolution)
    edges: list[_Edge] = []
    for (t0, p0), (t1, p1) in zip(samples, samples[1:]):
        box = (min(p0.x, p1.x), min(p0.y, p1.y), max(p0.x, p1.x), max(p0.y, p1.y))
        edges.append((t0, t1, p0, p1, box))
    return edges


def _boxes_overlap(a: tuple[float, float, float, float], b: tuple[float, float, float, float]) -> bool:
    return a[0] <= b[2] and b[0] <= a[2] and a[1] <= b[3] and b[1] <= a[3]


def _is_duplicate(point: Vector2, found: list[Vector2], tolerance: float) -> bool:
    return any(point.distance_to(other) <= tolerance for other in found)


def intersect(
    a: Contour, b: Contour, settings: CurveForgeSettings | None = None
) -> list[Intersection]:
    """Find every crossing between two contours.

    Args:
        a: First contour
        b: Second contour
        settings: Library settings (defaults used if None)

    Returns:
        Intersections ordered by their parameter on `a`. Empty when the
        contours do not cross.
    """
    settings = settings or get_default_settings()
    if not _boxes_overlap(a.bounding_box(), b.bounding_box()):
        return []

    resolution = settings.sampling.intersection_resolution
    merge = settings.tolerance.intersection_merge
    edges_a = _edges(a, resolution)
    edges_b = _edges(b, resolution)

    results: list[Intersection] = []
    found: list[Vector2] = []
    for ta0, ta1, pa0, pa1, box_a in edges_a:
        for tb0, tb1, pb0, pb1, box_b in edges_b:
            if not _boxes_overlap(box_a, box_b):
                continue
            hit = segment_intersection(pa0, pa1, pb0, pb1)
            if hit is None:
                continue
            s, u, point = hit
            if _is_duplicate(point, found, merge):
                continue
            found.append(point)
            results.append(
                Intersection(t_a=ta0 + (ta1 - ta0) * s, t_b=tb0 + (tb1 - tb0) * u, point=point)
            )

    results.sort(key=lambda i: i.t_a)
    logger.debug("Found %d intersections between contours", len(results))
    return results


def self_intersections(
    contour: Contour, settings: CurveForgeSettings | None = None
) -> list[SelfIntersection]:
    """Find every point where a contour crosses itself.

    Neighbouring polyline edges always share an endpoint and are skipped,
    as is the first/last pair of a closed contour.

    Args:
        contour: Contour to test
        settings: Library settings (defaults used if None)

    Returns:
        Self-intersections with t_a < t_b, ordered by t_a
    """
    settings = settings or get_default_settings()
    resolution = settings.sampling.intersection_resolution
    merge = settings.tolerance.intersection_merge
    edges = _edges(contour, resolution)
    count = len(edges)

    results: list[SelfIntersection] = []
    found: list[Vector2] = []
    for i in range(count):
        ti0, ti1, pi0, pi1, box_i = edges[i]
        for j in range(i + 2, count):
            if contour.closed and i == 0 and j == count - 1:
                continue
            tj0, tj1, pj0, pj1, box_j = edges[j]
            if not _boxes_overlap(box_i, box_j):
                continue
            hit = segment_intersection(pi0, pi1, pj0, pj1)
            if hit is None:
                continue
            s, u, point = hit
            # Edges joined through collapsed edges touch end-to-start
            if s >= 1.0 - 1e-9 and u <= 1e-9 and pi1.is_close(pj0):
                continue
            if _is_duplicate(point, found, merge):
                continue
            found.append(point)
            results.append(
                SelfIntersection(
                    t_a=ti0 + (ti1 - ti0) * s,
                    t_b=tj0 + (tj1 - tj0) * u,
                    point=point,
                )
            )

    results.sort(key=lambda i: i.t_a)
    logger.debug("Found %d self-intersections", len(results))
    return results
