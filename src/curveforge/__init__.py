"""curveforge - Smooth Hobby curves and the geometry derived from them.

curveforge fits smooth piecewise-cubic curves through ordered 2D points with
John Hobby's algorithm, then derives ribbons, offset lines, arc-length
samples, intersections and containment results from them. Everything is a
pure function of its inputs, so seeded point generation upstream gives
reproducible drawings downstream.

Example:
    >>> from curveforge import fit_hobby_curve, build_ribbon
    >>> contour = fit_hobby_curve([(0, 0), (100, 0), (100, 100), (0, 100)], closed=True)
    >>> ribbon = build_ribbon(contour, 8.0, samples=100)
"""

__version__ = "0.1.0"

from curveforge.core import (
    build_offset,
    build_ribbon,
    containment_test,
    fit_hobby_curve,
    intersect,
)
from curveforge.domain import Contour, CubicSegment, Transform, Vector2
from curveforge.exceptions import (
    DegenerateGeometry,
    InsufficientPoints,
    InvalidGeometry,
    InvalidParameter,
)

__all__ = [
    "Contour",
    "CubicSegment",
    "DegenerateGeometry",
    "InsufficientPoints",
    "InvalidGeometry",
    "InvalidParameter",
    "Transform",
    "Vector2",
    "__version__",
    "build_offset",
    "build_ribbon",
    "containment_test",
    "fit_hobby_curve",
    "intersect",
]
