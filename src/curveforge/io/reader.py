"""Point list reader.

This module provides the PointReader class for loading control point sets
from disk into domain models. Two layouts are understood:

JSON, either a bare list of points or an object with a ``curves`` list::

    [[0, 0], [100, 0], [100, 100]]
    {"curves": [{"name": "a", "points": [{"x": 0, "y": 0}, ...], "closed": true}]}

Delimited text (``.csv``, ``.txt`` and anything else), one ``x,y`` or
``x y`` pair per line. Blank lines separate curves; lines starting with
``#`` are comments.
"""

import csv
import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from curveforge.domain import Vector2
from curveforge.exceptions import PointFileError


@dataclass(frozen=True)
class PointSet:
    """A named run of control points waiting to be fitted.

    Attributes:
        name: Label used in logs and output
        points: Control points in order
        closed: Whether the fitted curve should wrap around
        tension: Per-curve tension override (None = use the default)
    """

    name: str
    points: tuple[Vector2, ...]
    closed: bool = False
    tension: float | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "points": [p.to_dict() for p in self.points],
            "closed": self.closed,
            "tension": self.tension,
        }


class PointReader:
    """Loads point sets from JSON or delimited text files.

    Example:
        reader = PointReader(Path("points.json"))
        for point_set in reader.read():
            print(point_set.name, len(point_set.points))
    """

    def __init__(self, path: Path, closed: bool = False) -> None:
        """Initialize the point reader.

        Args:
            path: Path to the point file
            closed: Default closed flag for curves that do not specify one
        """
        self._path = path
        self._closed = closed

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[PointSet]:
        """Read every point set in the file.

        Returns:
            Point sets in file order

        Raises:
            PointFileError: If the file is missing, unreadable or malformed
        """
        if not self._path.exists():
            raise PointFileError(str(self._path), "file not found")

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise PointFileError(str(self._path), str(e)) from e

        if self._path.suffix.lower() == ".json":
            sets = list(self._parse_json(text))
        else:
            sets = list(self._parse_delimited(text))

        if not sets:
            raise PointFileError(str(self._path), "no points found")
        return sets

    def _parse_json(self, text: str) -> Iterator[PointSet]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PointFileError(str(self._path), f"invalid JSON: {e}") from e

        if isinstance(data, list):
            yield PointSet(
                name=self._path.stem,
                points=self._coerce_points(data),
                closed=self._closed,
            )
            return

        if not isinstance(data, dict) or not isinstance(data.get("curves"), list):
            raise PointFileError(str(self._path), "expected a point list or a 'curves' list")

        for index, curve in enumerate(data["curves"]):
            if not isinstance(curve, dict) or "points" not in curve:
                raise PointFileError(str(self._path), f"curve {index} has no 'points'")
            tension = curve.get("tension")
            yield PointSet(
                name=str(curve.get("name", f"{self._path.stem}-{index}")),
                points=self._coerce_points(curve["points"]),
                closed=bool(curve.get("closed", self._closed)),
                tension=float(tension) if tension is not None else None,
            )

    def _parse_delimited(self, text: str) -> Iterator[PointSet]:
        current: list[Vector2] = []
        index = 0
        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if line.startswith("#"):
                continue
            if not line:
                if current:
                    yield self._text_set(current, index)
                    index += 1
                    current = []
                continue

            fields = next(csv.reader([line.replace(" ", ",")]))
            values = [f for f in fields if f]
            if len(values) != 2:
                raise PointFileError(str(self._path), f"line {line_no}: expected 'x,y'")
            try:
                current.append(Vector2(float(values[0]), float(values[1])))
            except ValueError as e:
                raise PointFileError(str(self._path), f"line {line_no}: {e}") from e

        if current:
            yield self._text_set(current, index)

    def _text_set(self, points: list[Vector2], index: int) -> PointSet:
        name = self._path.stem if index == 0 else f"{self._path.stem}-{index}"
        return PointSet(name=name, points=tuple(points), closed=self._closed)

    def _coerce_points(self, raw: Any) -> tuple[Vector2, ...]:
        if not isinstance(raw, list):
            raise PointFileError(str(self._path), "points must be a list")
        points: list[Vector2] = []
        for item in raw:
            try:
                if isinstance(item, dict):
                    points.append(Vector2.from_dict(item))
                else:
                    points.append(Vector2.of(item))
            except (KeyError, TypeError, ValueError) as e:
                raise PointFileError(str(self._path), f"bad point {item!r}") from e
        return tuple(points)
