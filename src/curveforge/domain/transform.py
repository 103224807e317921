"""Affine transforms for moving contours around.

A Transform is the 2x3 matrix

    | a  c  e |
    | b  d  f |

applied as x' = a*x + c*y + e, y' = b*x + d*y + f. Composition with ``@``
follows matrix order: ``(m @ n).apply(p) == m.apply(n.apply(p))``.
"""

import math
from dataclasses import dataclass

from curveforge.domain.vector import Vector2, VectorLike


@dataclass(frozen=True, slots=True)
class Transform:
    """Immutable 2D affine transform."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, offset: VectorLike) -> "Transform":
        v = Vector2.of(offset)
        return cls(e=v.x, f=v.y)

    @classmethod
    def rotation(cls, angle: float, center: VectorLike | None = None) -> "Transform":
        """Counter-clockwise rotation by angle radians around center."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        rotate = cls(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)
        if center is None:
            return rotate
        pivot = Vector2.of(center)
        return cls.translation(pivot) @ rotate @ cls.translation(-pivot)

    @classmethod
    def scaling(
        cls, sx: float, sy: float | None = None, center: VectorLike | None = None
    ) -> "Transform":
        scale = cls(a=sx, d=sx if sy is None else sy)
        if center is None:
            return scale
        pivot = Vector2.of(center)
        return cls.translation(pivot) @ scale @ cls.translation(-pivot)

    def __matmul__(self, other: "Transform") -> "Transform":
        return Transform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, point: Vector2) -> Vector2:
        return Vector2(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
        )

    def apply_vector(self, vector: Vector2) -> Vector2:
        """Apply the linear part only (no translation)."""
        return Vector2(
            self.a * vector.x + self.c * vector.y,
            self.b * vector.x + self.d * vector.y,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def is_identity(self) -> bool:
        return self == Transform()
