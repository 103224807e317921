"""Input layer for curveforge.

This module reads control point sets from disk so that the CLI and batch
processing can hand them to the fitter. The geometry core itself never
touches files.

Key classes:
- PointReader: Load point sets from JSON or delimited text
- PointSet: A named run of control points
"""

from curveforge.io.reader import PointReader, PointSet

__all__ = [
    "PointReader",
    "PointSet",
]
