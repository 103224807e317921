"""Unit tests for ribbons, offsets, containment and arc-length frames."""

import math

import pytest

from curveforge.core.derived import (
    DerivedKind,
    build_offset,
    build_ribbon,
    containment_test,
    contour_polygon,
    contours_overlap,
    offset_family,
    sample_frames,
    simplify_polyline,
)
from curveforge.core.hobby import fit_hobby_curve
from curveforge.domain import Contour, CubicSegment, Vector2
from curveforge.exceptions import InvalidParameter

SQUARE = [(0, 0), (100, 0), (100, 100), (0, 100)]


@pytest.fixture
def line() -> Contour:
    """Horizontal line from (0, 0) to (10, 0)."""
    return Contour.from_points([(0, 0), (10, 0)])


@pytest.fixture
def circle() -> Contour:
    """Near-circle of radius 50*sqrt(2) around (50, 50)."""
    return fit_hobby_curve(SQUARE, closed=True)


@pytest.fixture
def collapsed() -> Contour:
    """Zero-length contour."""
    p = Vector2(4, 4)
    return Contour((CubicSegment(p, p, p, p),))


@pytest.fixture
def star() -> Contour:
    """Smooth ten-point star with concave stretches between its tips."""
    points = []
    for i in range(10):
        angle = 2 * math.pi * i / 10
        radius = 100.0 if i % 2 == 0 else 45.0
        points.append((radius * math.cos(angle), radius * math.sin(angle)))
    return fit_hobby_curve(points, closed=True)


class TestRibbon:
    """Tests for build_ribbon function."""

    def test_constant_width(self, line: Contour) -> None:
        """Test edges sit half the width either side of a line."""
        ribbon = build_ribbon(line, 4.0, samples=5)
        assert len(ribbon.left) == len(ribbon.right) == 5
        for i, (left, right) in enumerate(zip(ribbon.left, ribbon.right, strict=True)):
            assert left.distance_to(Vector2(2.5 * i, 2.0)) < 1e-9
            assert right.distance_to(Vector2(2.5 * i, -2.0)) < 1e-9

    def test_width_on_curve(self, circle: Contour) -> None:
        """Test paired edge points are exactly width apart."""
        ribbon = build_ribbon(circle, 8.0, samples=40)
        for left, right in zip(ribbon.left, ribbon.right, strict=True):
            assert left.distance_to(right) == pytest.approx(8.0)

    def test_variable_width(self, line: Contour) -> None:
        """Test width given as a function of t."""
        ribbon = build_ribbon(line, lambda t: 2.0 * t, samples=3)
        widths = [a.distance_to(b) for a, b in zip(ribbon.left, ribbon.right, strict=True)]
        assert widths == pytest.approx([0.0, 1.0, 2.0])

    def test_closed_ribbon_repeats_start(self, circle: Contour) -> None:
        """Test the last sample of a closed contour repeats the first."""
        ribbon = build_ribbon(circle, 2.0, samples=10)
        assert ribbon.left[-1].distance_to(ribbon.left[0]) < 1e-9

    def test_too_few_samples(self, line: Contour) -> None:
        """Test sample count validation."""
        with pytest.raises(InvalidParameter):
            build_ribbon(line, 1.0, samples=1)

    def test_zero_length_contour(self, collapsed: Contour) -> None:
        """Test a collapsed contour gives an empty ribbon."""
        ribbon = build_ribbon(collapsed, 2.0, samples=10)
        assert ribbon.is_empty()
        assert ribbon.polygon() == []

    def test_polygon_and_path(self, line: Contour) -> None:
        """Test ribbon outline runs left forward then right backward."""
        ribbon = build_ribbon(line, 2.0, samples=4)
        polygon = ribbon.polygon()
        assert len(polygon) == 8
        assert polygon[0] == ribbon.left[0]
        assert polygon[-1] == ribbon.right[0]

        path = ribbon.to_path()
        assert path.kind is DerivedKind.RIBBON
        assert path.closed
        assert list(path.points) == polygon


class TestOffsets:
    """Tests for single-sided offsets and offset families."""

    def test_offset_left(self, line: Contour) -> None:
        """Test positive distance moves along the left-hand normal."""
        points = build_offset(line, 3.0, samples=3)
        assert [p.y for p in points] == pytest.approx([3.0, 3.0, 3.0])
        assert [p.x for p in points] == pytest.approx([0.0, 5.0, 10.0])

    def test_offset_circle_inward(self, circle: Contour) -> None:
        """Test positive offsets shrink a counter-clockwise circle."""
        radius = 50.0 * math.sqrt(2.0)
        center = Vector2(50, 50)
        for p in build_offset(circle, 10.0, samples=16):
            assert p.distance_to(center) == pytest.approx(radius - 10.0, abs=0.1)

    def test_offset_zero_length(self, collapsed: Contour) -> None:
        assert build_offset(collapsed, 1.0, samples=5) == []

    def test_family_centred(self, line: Contour) -> None:
        """Test offset lines are centred on the contour."""
        family = offset_family(line, count=3, spacing=2.0, samples=4)
        assert len(family) == 3
        assert [lane[0].y for lane in family] == pytest.approx([-2.0, 0.0, 2.0])

    def test_family_phase(self, line: Contour) -> None:
        """Test phase shifts every line by a fraction of the spacing."""
        family = offset_family(line, count=2, spacing=2.0, samples=4, phase=0.5)
        assert [lane[0].y for lane in family] == pytest.approx([0.0, 2.0])

    def test_family_empty(self, line: Contour) -> None:
        assert offset_family(line, count=0, spacing=1.0, samples=4) == []

    def test_family_negative_count(self, line: Contour) -> None:
        with pytest.raises(InvalidParameter):
            offset_family(line, count=-1, spacing=1.0, samples=4)


class TestContainment:
    """Tests for containment and overlap."""

    def test_square(self) -> None:
        """Test inside, outside and boundary points of a square."""
        square = Contour.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
        assert containment_test(square, (5, 5))
        assert not containment_test(square, (15, 5))
        assert not containment_test(square, (10, 5))

    def test_circle(self, circle: Contour) -> None:
        assert containment_test(circle, (50, 50))
        assert containment_test(circle, Vector2(-15, 50))
        assert not containment_test(circle, (0, -30))

    def test_points_on_curve_are_outside(self, star: Contour) -> None:
        """Test points on the fitted curve count as boundary, not inside."""
        for i in range(200):
            t = i / 200
            assert not containment_test(star, star.position(t)), t

    def test_star_interior(self, star: Contour) -> None:
        """Test the star still contains its centre and points just inside its knots."""
        assert containment_test(star, (0, 0))
        for t in (0.0, 0.1):
            p = star.position(t)
            assert containment_test(star, p * 0.98)
            assert not containment_test(star, p * 1.02)

    def test_open_contains_nothing(self) -> None:
        """Test open contours never contain points."""
        arc = Contour.from_points([(0, 0), (10, 0), (10, 10), (0, 10)])
        assert not containment_test(arc, (5, 5))

    def test_polygon_drops_repeated_start(self) -> None:
        square = Contour.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
        polygon = contour_polygon(square)
        assert polygon[0] == Vector2(0, 0)
        assert polygon[-1] != polygon[0]

    def test_overlap_nested(self, circle: Contour) -> None:
        """Test a contour inside another overlaps it."""
        inner = circle.scaled(0.5, center=(50, 50))
        assert contours_overlap(circle, inner)
        assert contours_overlap(inner, circle)

    def test_overlap_crossing(self, circle: Contour) -> None:
        assert contours_overlap(circle, circle.translated((60, 0)))

    def test_overlap_disjoint(self, circle: Contour) -> None:
        assert not contours_overlap(circle, circle.translated((500, 0)))


class TestFrames:
    """Tests for arc-length frame sampling."""

    def test_line_frames(self, line: Contour) -> None:
        """Test evenly spaced frames on a straight line."""
        frames = sample_frames(line, 11)
        assert len(frames) == 11
        for i, frame in enumerate(frames):
            assert frame.s == pytest.approx(i / 10)
            assert frame.position.distance_to(Vector2(i, 0)) < 1e-6
            assert frame.tangent.distance_to(Vector2(1, 0)) < 1e-9
            assert frame.normal.distance_to(Vector2(0, 1)) < 1e-9
            assert frame.curvature == pytest.approx(0.0, abs=1e-9)

    def test_circle_curvature(self, circle: Contour) -> None:
        """Test interior frames of a circle measure 1 / radius."""
        radius = 50.0 * math.sqrt(2.0)
        frames = sample_frames(circle, 64)
        for frame in frames[2:-2]:
            assert frame.curvature == pytest.approx(1.0 / radius, rel=0.05)

    def test_too_few(self, line: Contour, collapsed: Contour) -> None:
        assert sample_frames(line, 2) == []
        assert sample_frames(collapsed, 10) == []


class TestSimplify:
    """Tests for simplify_polyline function."""

    def test_drops_close_points(self) -> None:
        points = [(0, 0), (0.1, 0), (1, 0), (1.05, 0), (2, 0)]
        assert simplify_polyline(points, 0.5) == [Vector2(0, 0), Vector2(1, 0), Vector2(2, 0)]

    def test_last_point_replaces_close_neighbour(self) -> None:
        points = [(0, 0), (1, 0), (1.2, 0)]
        assert simplify_polyline(points, 0.5) == [Vector2(0, 0), Vector2(1.2, 0)]

    def test_short_input_unchanged(self) -> None:
        assert simplify_polyline([(0, 0), (0.1, 0)], 1.0) == [Vector2(0, 0), Vector2(0.1, 0)]
