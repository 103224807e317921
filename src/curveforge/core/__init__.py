"""Core curve algorithms for curveforge.

This module contains the algorithms that build and query curves:

- Hobby curve fitting (tangent angle solve, handle placement)
- Flat geometry (signed area, point-in-polygon, segment intersection)
- Contour intersections and self-intersections
- Derived geometry (ribbons, offsets, containment, arc-length frames)
- Batch fitting orchestration

All geometry functions are pure and deterministic: the same inputs always
produce the same outputs, and no randomness is used anywhere.

Key functions:
- fit_hobby_curve: Fit a smooth contour through points
- intersect: Crossings between two contours
- self_intersections: Crossings of a contour with itself
- build_ribbon: Band of varying width along a contour
- build_offset: Single-sided displacement along the normal
- containment_test: Point-in-contour test

Key classes:
- HobbyFitter: Fitter with fixed tension and curl
- CurveProcessor: Batch fitting with logging and statistics
"""

from curveforge.core.derived import (
    DerivedKind,
    DerivedPath,
    Frame,
    Ribbon,
    build_offset,
    build_ribbon,
    containment_test,
    contours_overlap,
    offset_family,
    sample_frames,
    simplify_polyline,
)
from curveforge.core.geometry import (
    nearest_point_on_segment,
    point_in_polygon,
    segment_intersection,
    signed_area,
)
from curveforge.core.hobby import HobbyFitter, TangentField, fit_contour_points, fit_hobby_curve
from curveforge.core.intersections import (
    Intersection,
    SelfIntersection,
    intersect,
    self_intersections,
)
from curveforge.core.processor import CurveProcessor, CurveResult

__all__ = [
    # Processor classes
    "CurveProcessor",
    "CurveResult",
    # Derived geometry
    "DerivedKind",
    "DerivedPath",
    "Frame",
    # Fitting
    "HobbyFitter",
    # Intersections
    "Intersection",
    "Ribbon",
    "SelfIntersection",
    "TangentField",
    "build_offset",
    "build_ribbon",
    "containment_test",
    "contours_overlap",
    "fit_contour_points",
    "fit_hobby_curve",
    "intersect",
    # Geometry functions
    "nearest_point_on_segment",
    "offset_family",
    "point_in_polygon",
    "sample_frames",
    "segment_intersection",
    "self_intersections",
    "signed_area",
    "simplify_polyline",
]
