"""Geometry derived from contours.

Operations that sample a contour and displace, test or measure the samples:
- Ribbons and single-sided offsets along the normal
- Families of parallel offset lines
- Point containment and contour overlap
- Arc-length frames with curvature estimates
- Polyline simplification

Ribbon and offset sampling uses the contour's global parameter at uniform
steps ``t_i = i / (samples - 1)``; for closed contours the last sample
repeats the first. Displacement follows ``Contour.normal``, the tangent
rotated counter-clockwise, so positive widths and distances move to the
left of the direction of travel.

Zero-length contours give empty results instead of raising.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from curveforge.config import CurveForgeSettings, get_default_settings
from curveforge.core.geometry import angle_between, point_in_polygon
from curveforge.core.intersections import intersect
from curveforge.domain import Contour, Vector2, VectorLike
from curveforge.exceptions import InvalidParameter

logger = logging.getLogger(__name__)

WidthFn = Callable[[float], float]

_ZERO_LENGTH = 1e-12


class DerivedKind(Enum):
    """Kind of path handed back to a renderer."""

    RAW = auto()
    RIBBON = auto()
    OFFSET = auto()


@dataclass(frozen=True)
class DerivedPath:
    """A point run tagged with how it was produced.

    Attributes:
        kind: Which operation produced the points
        points: The path itself
        closed: Whether the renderer should close the path
    """

    kind: DerivedKind
    points: tuple[Vector2, ...]
    closed: bool = False


@dataclass(frozen=True)
class Ribbon:
    """Two edges of a band traced along a contour.

    Attributes:
        left: Points displaced along +normal
        right: Points displaced along -normal
    """

    left: tuple[Vector2, ...]
    right: tuple[Vector2, ...]

    def is_empty(self) -> bool:
        return not self.left

    def polygon(self) -> list[Vector2]:
        """Outline as one closed polygon: left forward, right reversed."""
        return list(self.left) + list(reversed(self.right))

    def to_path(self) -> DerivedPath:
        return DerivedPath(DerivedKind.RIBBON, tuple(self.polygon()), closed=True)


@dataclass(frozen=True, slots=True)
class Frame:
    """An arc-length sample of a contour.

    Attributes:
        t: Global contour parameter of the sample
        s: Normalized arc length in [0, 1]
        position: Sample point
        tangent: Unit tangent from finite differences
        normal: Tangent rotated counter-clockwise
        curvature: Unsigned angle change per unit length
    """

    t: float
    s: float
    position: Vector2
    tangent: Vector2
    normal: Vector2
    curvature: float


def _as_width_fn(value: float | WidthFn) -> WidthFn:
    if callable(value):
        return value
    constant = float(value)
    return lambda _t: constant


def _sample_ts(samples: int) -> list[float]:
    if samples < 2:
        raise InvalidParameter("samples", samples, "must be at least 2")
    return [i / (samples - 1) for i in range(samples)]


def build_ribbon(contour: Contour, width: float | WidthFn, samples: int) -> Ribbon:
    """Trace a band of (possibly varying) width along a contour.

    Args:
        contour: Centre line of the band
        width: Full band width, constant or as a function of t
        samples: Number of uniformly spaced samples, at least 2

    Returns:
        Ribbon whose i-th left and right points are width(t_i) apart

    Raises:
        InvalidParameter: If samples is less than 2
    """
    ts = _sample_ts(samples)
    if contour.length() <= _ZERO_LENGTH:
        logger.debug("Skipping ribbon for zero-length contour")
        return Ribbon(left=(), right=())

    width_fn = _as_width_fn(width)
    left: list[Vector2] = []
    right: list[Vector2] = []
    for t in ts:
        p = contour.position(t)
        n = contour.normal(t)
        half = width_fn(t) / 2.0
        left.append(p + n * half)
        right.append(p - n * half)
    return Ribbon(left=tuple(left), right=tuple(right))


def build_offset(contour: Contour, distance: float | WidthFn, samples: int) -> list[Vector2]:
    """Displace samples of a contour along its normal.

    Args:
        contour: Source contour
        distance: Offset distance, constant or as a function of t
        samples: Number of uniformly spaced samples, at least 2

    Returns:
        Offset points, empty for a zero-length contour

    Raises:
        InvalidParameter: If samples is less than 2
    """
    ts = _sample_ts(samples)
    if contour.length() <= _ZERO_LENGTH:
        return []

    distance_fn = _as_width_fn(distance)
    return [contour.position(t) + contour.normal(t) * distance_fn(t) for t in ts]


def offset_family(
    contour: Contour,
    count: int,
    spacing: float,
    samples: int,
    phase: float = 0.0,
) -> list[list[Vector2]]:
    """Build `count` parallel offset lines centred on the contour.

    Line i sits at distance ``(i - (count - 1) / 2 + phase) * spacing``.

    Raises:
        InvalidParameter: If count is negative or samples is less than 2
    """
    if count < 0:
        raise InvalidParameter("count", count, "must not be negative")
    half = (count - 1) / 2.0
    return [
        build_offset(contour, (i - half + phase) * spacing, samples) for i in range(count)
    ]


def contour_polygon(contour: Contour, settings: CurveForgeSettings | None = None) -> list[Vector2]:
    """Polyline approximation of a closed contour without the repeated start."""
    settings = settings or get_default_settings()
    points = contour.polyline(settings.sampling.containment_resolution)
    if contour.closed and len(points) > 1:
        points = points[:-1]
    return points


def containment_test(
    contour: Contour, point: VectorLike, settings: CurveForgeSettings | None = None
) -> bool:
    """Test whether a point lies inside a closed contour.

    Uses the even-odd rule on a polyline approximation. Points on the
    curve itself (within the boundary tolerance, scaled by the contour's
    extent) are outside, even where the curve bulges past the polyline.
    Open contours contain nothing.
    """
    if not contour.closed:
        return False
    settings = settings or get_default_settings()
    target = Vector2.of(point)

    min_x, min_y, max_x, max_y = contour.bounding_box()
    extent = max(abs(min_x), abs(min_y), abs(max_x), abs(max_y))
    boundary = settings.tolerance.boundary * max(1.0, extent)
    if contour.nearest(target).distance <= boundary:
        return False

    polygon = contour_polygon(contour, settings)
    return point_in_polygon(target, polygon, settings.tolerance.boundary)


def contours_overlap(
    a: Contour, b: Contour, settings: CurveForgeSettings | None = None
) -> bool:
    """True when the contours cross or one closed contour encloses the other."""
    settings = settings or get_default_settings()
    if intersect(a, b, settings):
        return True
    if a.closed and containment_test(a, b.position(0.0), settings):
        return True
    if b.closed and containment_test(b, a.position(0.0), settings):
        return True
    return False


def sample_frames(contour: Contour, count: int) -> list[Frame]:
    """Sample a contour uniformly in arc length with tangents and curvature.

    Tangents come from central differences of neighbouring samples (one
    sided at the ends); curvature is the angle between neighbouring
    tangents divided by the distance between their samples.

    Returns:
        Frames in path order, or an empty list when fewer than 3 samples
        can be taken
    """
    total = contour.length()
    if count < 3 or total <= _ZERO_LENGTH:
        return []

    last = count - 1
    ts = [contour.t_at_length(total * i / last) for i in range(count)]
    positions = [contour.position(t) for t in ts]
    tangents: list[Vector2] = []
    for i in range(len(positions)):
        if i == 0:
            direction = positions[1] - positions[0]
        elif i == last:
            direction = positions[i] - positions[i - 1]
        else:
            direction = positions[i + 1] - positions[i - 1]
        tangents.append(direction.normalized())

    frames: list[Frame] = []
    for i, position in enumerate(positions):
        lo = max(0, i - 1)
        hi = min(last, i + 1)
        ds = positions[hi].distance_to(positions[lo])
        curvature = angle_between(tangents[lo], tangents[hi]) / ds if ds > 1e-3 else 0.0
        s = i / last
        frames.append(
            Frame(
                t=ts[i],
                s=s,
                position=position,
                tangent=tangents[i],
                normal=tangents[i].perpendicular(),
                curvature=curvature,
            )
        )
    return frames


def simplify_polyline(points: Sequence[VectorLike], min_distance: float) -> list[Vector2]:
    """Drop points closer than `min_distance` to the previously kept point.

    The first point is always kept, and the last point replaces the final
    kept point when they are too close.
    """
    pts = [Vector2.of(p) for p in points]
    if len(pts) < 3:
        return pts

    kept = [pts[0]]
    for p in pts[1:-1]:
        if p.distance_to(kept[-1]) >= min_distance:
            kept.append(p)

    if len(kept) > 1 and pts[-1].distance_to(kept[-1]) < min_distance:
        kept[-1] = pts[-1]
    else:
        kept.append(pts[-1])
    return kept
