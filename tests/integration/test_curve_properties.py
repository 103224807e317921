"""End-to-end checks of fitted curves and the geometry derived from them."""

import math
import random

import pytest

from curveforge import (
    Contour,
    InsufficientPoints,
    Transform,
    Vector2,
    build_ribbon,
    fit_hobby_curve,
)
from curveforge.core import sample_frames, simplify_polyline


def _wobbly_ring(seed: int, count: int = 9) -> list[tuple[float, float]]:
    """Points on a randomly perturbed circle, seeded by the caller."""
    rng = random.Random(seed)
    points = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        radius = 100 + rng.uniform(-25, 25)
        points.append((300 + radius * math.cos(angle), 300 + radius * math.sin(angle)))
    return points


def _wander(seed: int, count: int = 7) -> list[tuple[float, float]]:
    """Open random walk heading right."""
    rng = random.Random(seed)
    x, y = 0.0, 0.0
    points = [(x, y)]
    for _ in range(count - 1):
        x += rng.uniform(20, 60)
        y += rng.uniform(-40, 40)
        points.append((x, y))
    return points


@pytest.fixture(params=[1, 2, 3])
def fitted(request: pytest.FixtureRequest) -> tuple[list[tuple[float, float]], Contour]:
    """A closed and an open fitted curve per seed, alternating."""
    seed = request.param
    points = _wobbly_ring(seed) if seed % 2 else _wander(seed)
    return points, fit_hobby_curve(points, closed=seed % 2 == 1)


class TestFittedCurves:
    """Properties every fitted curve should have."""

    def test_continuity(self, fitted: tuple[list, Contour]) -> None:
        """Test positions match on both sides of every segment boundary."""
        _, contour = fitted
        n = contour.segment_count
        for i in range(1, n):
            boundary = i / n
            before = contour.segments[i - 1].position(1.0)
            after = contour.segments[i].position(0.0)
            assert before.distance_to(after) < 1e-9
            assert contour.position(boundary).distance_to(after) < 1e-9

    def test_interpolation(self, fitted: tuple[list, Contour]) -> None:
        """Test the curve passes through every input point."""
        points, contour = fitted
        n = contour.segment_count
        for k, p in enumerate(points):
            assert contour.position(k / n).distance_to(Vector2.of(p)) < 1e-9

    def test_identity_transform(self, fitted: tuple[list, Contour]) -> None:
        _, contour = fitted
        moved = contour.transform(Transform.identity())
        for i in range(21):
            t = i / 20
            assert moved.position(t).distance_to(contour.position(t)) < 1e-12

    def test_sub_full_range(self, fitted: tuple[list, Contour]) -> None:
        _, contour = fitted
        part = contour.sub(0.0, 1.0)
        for i in range(21):
            t = i / 20
            assert part.position(t).distance_to(contour.position(t)) < 1e-9

    def test_sub_partial_matches(self, fitted: tuple[list, Contour]) -> None:
        """Test a partial sub-curve starts and ends on the original."""
        _, contour = fitted
        part = contour.sub(0.23, 0.71)
        assert part.position(0.0).distance_to(contour.position(0.23)) < 1e-9
        assert part.position(1.0).distance_to(contour.position(0.71)) < 1e-9
        assert part.length() < contour.length()

    def test_ribbon_width(self, fitted: tuple[list, Contour]) -> None:
        _, contour = fitted
        ribbon = build_ribbon(contour, 12.0, samples=100)
        for left, right in zip(ribbon.left, ribbon.right, strict=True):
            assert left.distance_to(right) == pytest.approx(12.0)

    def test_equidistant_spacing(self, fitted: tuple[list, Contour]) -> None:
        """Test arc-length samples are evenly spaced along the curve."""
        _, contour = fitted
        points = contour.equidistant_positions(50)
        gaps = [points[i].distance_to(points[i + 1]) for i in range(len(points) - 1)]
        mean = sum(gaps) / len(gaps)
        assert all(g == pytest.approx(mean, rel=0.05) for g in gaps)

    def test_frames_follow_curve(self, fitted: tuple[list, Contour]) -> None:
        _, contour = fitted
        frames = sample_frames(contour, 40)
        assert len(frames) == 40
        assert frames[0].s == 0.0
        assert frames[-1].s == 1.0
        for frame in frames:
            assert frame.tangent.length == pytest.approx(1.0)

    def test_simplified_outline_keeps_ends(self, fitted: tuple[list, Contour]) -> None:
        _, contour = fitted
        outline = contour.polyline(16)
        simplified = simplify_polyline(outline, 10.0)
        assert simplified[0] == outline[0]
        assert simplified[-1] == outline[-1]
        assert len(simplified) < len(outline)


class TestScenarios:
    """Concrete reference cases."""

    def test_square(self) -> None:
        """Test the smoothed square bulges past its perimeter."""
        contour = fit_hobby_curve([(0, 0), (100, 0), (100, 100), (0, 100)], closed=True, tension=1.0)
        assert contour.length() > 400.0
        assert contour.position(0.0).distance_to(Vector2(0, 0)) < 1e-6
        assert contour.position(1.0).distance_to(contour.position(0.0)) < 1e-9

    def test_two_points(self) -> None:
        contour = fit_hobby_curve([(0, 0), (10, 0)], closed=False)
        assert contour.segment_count == 1
        assert contour.position(0.0) == Vector2(0, 0)
        assert contour.position(1.0) == Vector2(10, 0)

    def test_one_point(self) -> None:
        with pytest.raises(InsufficientPoints):
            fit_hobby_curve([(0, 0)], closed=False)

    def test_self_intersection_points_agree(self) -> None:
        """Test both reported parameters land on the crossing."""
        eight = fit_hobby_curve([(0, 0), (100, 100), (100, 0), (0, 100)], closed=True)
        hits = eight.self_intersections()
        assert hits
        for hit in hits:
            assert eight.position(hit.t_a).distance_to(eight.position(hit.t_b)) < 0.5

    def test_intersections_method(self) -> None:
        a = Contour.from_points([(0, 0), (10, 10)])
        b = Contour.from_points([(0, 10), (12, 0)])
        assert len(a.intersections(b)) == 1
