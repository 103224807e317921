"""Hobby curve fitting.

Builds a smooth piecewise-cubic path through an ordered list of points
using John Hobby's algorithm as published for METAFONT:

1. Measure the chords between consecutive knots and the turning angle
   psi at every interior knot.
2. Solve a tridiagonal system (cyclic when closed) for the outgoing angles
   theta, imposing mock-curvature continuity at interior knots and a curl
   condition at the ends of open paths.
3. Derive the incoming angles phi = -psi - theta and turn each
   (theta, phi) pair into Bezier handles with Hobby's velocity function.

Tension divides the handle lengths. The angle solve uses the same tension
but never less than 3/4, the bound below which the mock-curvature system
stops being diagonally dominant.

Coincident consecutive points are merged into one knot before fitting.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from curveforge.config import CurveForgeSettings, get_default_settings
from curveforge.core._linalg import solve_cyclic_tridiagonal, solve_tridiagonal
from curveforge.domain import Contour, CubicSegment, Vector2, VectorLike
from curveforge.exceptions import InsufficientPoints

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2.0)
SQRT5 = math.sqrt(5.0)
MIN_SOLVE_TENSION = 0.75
MAX_VELOCITY = 4.0


@dataclass(frozen=True)
class TangentField:
    """Per-knot fitting state solved by HobbyFitter.

    Chord ``k`` runs from ``knots[k]`` to ``knots[k + 1]`` (wrapping to
    ``knots[0]`` when closed). ``theta[k]`` is the angle between chord ``k``
    and the outgoing tangent at its start; ``phi[k]`` is the angle between
    chord ``k`` and the incoming tangent at its end, measured clockwise.

    Attributes:
        knots: Distinct on-curve points
        closed: Whether the path wraps around
        chords: Chord vectors
        distances: Chord lengths
        psi: Turning angle at each knot (0 at open ends)
        theta: Outgoing angle per chord
        phi: Incoming angle per chord
        tension: Tension used for handle lengths
        curl: Endpoint curl used for open paths
    """

    knots: tuple[Vector2, ...]
    closed: bool
    chords: tuple[Vector2, ...]
    distances: tuple[float, ...]
    psi: tuple[float, ...]
    theta: tuple[float, ...]
    phi: tuple[float, ...]
    tension: float
    curl: float

    @property
    def chord_count(self) -> int:
        return len(self.chords)

    def directions(self) -> list[Vector2]:
        """Unit tangent leaving each chord's start knot."""
        return [
            (chord / dist).rotated(theta)
            for chord, dist, theta in zip(self.chords, self.distances, self.theta, strict=True)
        ]


def velocity(theta: float, phi: float) -> float:
    """Hobby's handle velocity function.

    Returns the handle length for a unit chord before dividing by three
    times the tension. Clamped to [0, 4] as METAFONT does.
    """
    st, ct = math.sin(theta), math.cos(theta)
    sf, cf = math.sin(phi), math.cos(phi)
    numerator = 2.0 + SQRT2 * (st - sf / 16.0) * (sf - st / 16.0) * (ct - cf)
    denominator = 1.0 + 0.5 * (SQRT5 - 1.0) * ct + 0.5 * (3.0 - SQRT5) * cf
    if denominator <= 1e-12:
        return MAX_VELOCITY
    return max(0.0, min(MAX_VELOCITY, numerator / denominator))


def curl_ratio(curl: float, tension: float) -> float:
    """Ratio between the end angle and its neighbour under a curl condition."""
    alpha = 1.0 / tension
    return ((3.0 - alpha) * curl + alpha) / (alpha * curl + 3.0 - alpha)


def _normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    angle = math.fmod(angle, 2.0 * math.pi)
    if angle <= -math.pi:
        angle += 2.0 * math.pi
    elif angle > math.pi:
        angle -= 2.0 * math.pi
    return angle


def _distinct_knots(points: Sequence[Vector2], closed: bool, tolerance: float) -> list[Vector2]:
    """Collapse runs of coincident consecutive points."""
    knots: list[Vector2] = []
    for p in points:
        if not knots or knots[-1].distance_to(p) > tolerance:
            knots.append(p)
    if closed and len(knots) > 1 and knots[-1].distance_to(knots[0]) <= tolerance:
        knots.pop()
    return knots


class HobbyFitter:
    """Fits Hobby curves with a fixed tension and curl.

    Out-of-range tension and curl values are clamped into the ranges of the
    fitting configuration rather than rejected.
    """

    def __init__(
        self,
        tension: float | None = None,
        curl: float | None = None,
        settings: CurveForgeSettings | None = None,
    ) -> None:
        """Initialize fitter.

        Args:
            tension: Handle tension (default from settings)
            curl: Endpoint curl for open curves (default from settings)
            settings: Library settings (defaults used if None)
        """
        self.settings = settings or get_default_settings()
        fitting = self.settings.fitting

        requested_tension = fitting.tension if tension is None else tension
        requested_curl = fitting.curl if curl is None else curl
        self.tension = fitting.clamp_tension(requested_tension)
        self.curl = fitting.clamp_curl(requested_curl)

        if self.tension != requested_tension:
            logger.debug("Tension %.3f clamped to %.3f", requested_tension, self.tension)
        if self.curl != requested_curl:
            logger.debug("Curl %.3f clamped to %.3f", requested_curl, self.curl)

    def solve(self, points: Iterable[VectorLike], closed: bool = False) -> TangentField:
        """Solve for the tangent angles at every knot.

        Args:
            points: Ordered control points
            closed: Whether the curve wraps from the last point to the first

        Returns:
            TangentField holding chords, turning angles and solved angles

        Raises:
            InsufficientPoints: If fewer than 2 distinct points remain
        """
        raw = [Vector2.of(p) for p in points]
        tolerance = self.settings.tolerance.coincident_points
        knots = _distinct_knots(raw, closed, tolerance)
        if len(knots) < 2:
            raise InsufficientPoints(len(knots))
        if len(knots) != len(raw):
            logger.debug("Merged %d coincident points", len(raw) - len(knots))

        count = len(knots)
        chord_count = count if closed else count - 1
        chords = [knots[(k + 1) % count] - knots[k] for k in range(chord_count)]
        distances = [c.length for c in chords]

        psi = [0.0] * count
        for k in range(count):
            if not closed and (k == 0 or k == count - 1):
                continue
            incoming = chords[(k - 1) % chord_count]
            outgoing = chords[k % chord_count]
            psi[k] = _normalize_angle(outgoing.angle() - incoming.angle())

        if closed:
            theta = self._solve_closed(distances, psi)
        elif chord_count == 1:
            theta = [0.0, 0.0]
        else:
            theta = self._solve_open(distances, psi)

        # phi of chord k is the incoming angle at its end knot
        phi = [-psi[(k + 1) % count] - theta[(k + 1) % len(theta)] for k in range(chord_count)]

        return TangentField(
            knots=tuple(knots),
            closed=closed,
            chords=tuple(chords),
            distances=tuple(distances),
            psi=tuple(psi),
            theta=tuple(theta[:chord_count]),
            phi=tuple(phi),
            tension=self.tension,
            curl=self.curl,
        )

    def _coefficients(
        self, d_prev: float, d_next: float
    ) -> tuple[float, float, float, float]:
        """Mock-curvature coefficients (A, B, C, D) for one interior knot."""
        alpha = 1.0 / max(self.tension, MIN_SOLVE_TENSION)
        a = 1.0 / d_prev
        b = (3.0 - alpha) / (alpha * d_prev)
        c = (3.0 - alpha) / (alpha * d_next)
        d = 1.0 / d_next
        return a, b, c, d

    def _solve_open(self, distances: list[float], psi: list[float]) -> list[float]:
        n = len(distances)
        size = n + 1
        lower = [0.0] * size
        diag = [0.0] * size
        upper = [0.0] * size
        rhs = [0.0] * size

        ratio = curl_ratio(self.curl, max(self.tension, MIN_SOLVE_TENSION))

        # theta_0 = ratio * phi_1
        diag[0] = 1.0
        upper[0] = ratio
        rhs[0] = -ratio * psi[1]

        for k in range(1, n):
            a, b, c, d = self._coefficients(distances[k - 1], distances[k])
            lower[k] = a
            diag[k] = b + c
            upper[k] = d
            rhs[k] = -b * psi[k] - d * psi[k + 1]

        # phi_n = ratio * theta_(n-1), with theta_n standing in for -phi_n
        lower[n] = ratio
        diag[n] = 1.0
        rhs[n] = 0.0

        return solve_tridiagonal(lower, diag, upper, rhs)

    def _solve_closed(self, distances: list[float], psi: list[float]) -> list[float]:
        n = len(distances)
        lower = [0.0] * n
        diag = [0.0] * n
        upper = [0.0] * n
        rhs = [0.0] * n

        for k in range(n):
            a, b, c, d = self._coefficients(distances[k - 1], distances[k])
            lower[k] = a
            diag[k] = b + c
            upper[k] = d
            rhs[k] = -b * psi[k] - d * psi[(k + 1) % n]

        return solve_cyclic_tridiagonal(lower, diag, upper, rhs)

    def segments(self, field: TangentField) -> list[CubicSegment]:
        """Turn solved angles into one Bezier segment per chord."""
        count = len(field.knots)
        segments: list[CubicSegment] = []
        for k in range(field.chord_count):
            start = field.knots[k]
            end = field.knots[(k + 1) % count]
            dist = field.distances[k]
            unit = field.chords[k] / dist
            theta = field.theta[k]
            phi = field.phi[k]

            rho = velocity(theta, phi)
            sigma = velocity(phi, theta)
            scale = dist / (3.0 * self.tension)

            handle_out = start + unit.rotated(theta) * (rho * scale)
            handle_in = end - unit.rotated(-phi) * (sigma * scale)
            segments.append(CubicSegment(start, handle_out, handle_in, end))
        return segments

    def fit(self, points: Iterable[VectorLike], closed: bool = False) -> Contour:
        """Fit a smooth contour through points.

        Args:
            points: Ordered control points (Vector2 or (x, y) pairs)
            closed: Whether the curve wraps from the last point to the first

        Returns:
            Contour passing through every distinct point

        Raises:
            InsufficientPoints: If fewer than 2 distinct points are given
        """
        field = self.solve(points, closed)
        contour = Contour(
            tuple(self.segments(field)),
            closed=closed,
            continuity=self.settings.tolerance.continuity,
        )
        logger.debug(
            "Hobby curve fitted: %d knots, %d segments, closed=%s, tension=%.3f",
            len(field.knots), contour.segment_count, closed, self.tension,
        )
        return contour


def fit_hobby_curve(
    points: Iterable[VectorLike],
    closed: bool = False,
    tension: float = 1.0,
    curl: float | None = None,
    settings: CurveForgeSettings | None = None,
) -> Contour:
    """Fit a Hobby curve through points.

    Args:
        points: Ordered control points (Vector2 or (x, y) pairs)
        closed: Whether the curve wraps from the last point to the first
        tension: Handle tension, clamped into the configured range
        curl: Endpoint curl for open curves (default from settings)
        settings: Library settings (defaults used if None)

    Returns:
        Contour with one segment per chord

    Raises:
        InsufficientPoints: If fewer than 2 distinct points are given

    Examples:
        >>> square = [(0, 0), (100, 0), (100, 100), (0, 100)]
        >>> contour = fit_hobby_curve(square, closed=True)
        >>> contour.segment_count
        4
    """
    return HobbyFitter(tension=tension, curl=curl, settings=settings).fit(points, closed)


def fit_contour_points(
    contour: Contour,
    tension: float = 1.0,
    curl: float | None = None,
    settings: CurveForgeSettings | None = None,
) -> Contour:
    """Re-fit a Hobby curve through the on-curve points of a contour.

    Smooths polylines built with Contour.from_points, or derived paths that
    were wrapped back into a contour.
    """
    return fit_hobby_curve(
        contour.knots(), closed=contour.closed, tension=tension, curl=curl, settings=settings
    )
