"""Domain models for curveforge.

This module contains the geometric value types the fitter produces and the
derived-geometry operations consume. All models are:

- Immutable (frozen dataclasses; operations return new instances)
- Free of shared state, so they can be handed between threads or processes
- Serializable to plain dictionaries

Key classes:
- Vector2: A 2D point or direction
- Transform: A 2D affine transform
- CubicSegment: A cubic Bezier arc
- Contour: An open or closed run of cubic segments
- ContourPoint: Result of a nearest-point query
"""

from curveforge.domain.contour import Contour, ContourPoint
from curveforge.domain.segment import CubicSegment
from curveforge.domain.transform import Transform
from curveforge.domain.vector import Vector2, VectorLike

__all__: list[str] = [
    # Primitives
    "Vector2",
    "VectorLike",
    "Transform",
    # Paths
    "CubicSegment",
    "Contour",
    "ContourPoint",
]
