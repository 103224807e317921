"""Unit tests for the point file reader."""

import json
from pathlib import Path

import pytest

from curveforge.domain import Vector2
from curveforge.exceptions import PointFileError
from curveforge.io import PointReader, PointSet


class TestPointReaderJson:
    """Tests for JSON point files."""

    def test_bare_list(self, tmp_path: Path) -> None:
        """Test a bare list of pairs becomes one point set."""
        path = tmp_path / "wave.json"
        path.write_text(json.dumps([[0, 0], [10, 5], [20, 0]]))

        sets = PointReader(path).read()
        assert len(sets) == 1
        assert sets[0].name == "wave"
        assert sets[0].points == (Vector2(0, 0), Vector2(10, 5), Vector2(20, 0))
        assert not sets[0].closed
        assert sets[0].tension is None

    def test_default_closed(self, tmp_path: Path) -> None:
        """Test the reader's closed flag applies to bare lists."""
        path = tmp_path / "loop.json"
        path.write_text(json.dumps([[0, 0], [10, 0], [5, 8]]))
        assert PointReader(path, closed=True).read()[0].closed

    def test_curves_object(self, tmp_path: Path) -> None:
        """Test named curves with per-curve options."""
        path = tmp_path / "shapes.json"
        path.write_text(
            json.dumps(
                {
                    "curves": [
                        {"name": "ring", "points": [{"x": 0, "y": 0}, {"x": 5, "y": 5}], "closed": True},
                        {"points": [[1, 2], [3, 4]], "tension": 1.5},
                    ]
                }
            )
        )

        ring, second = PointReader(path).read()
        assert ring.name == "ring"
        assert ring.closed
        assert ring.points[1] == Vector2(5, 5)
        assert second.name == "shapes-1"
        assert second.tension == 1.5
        assert not second.closed

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[[0, 0], [1,")
        with pytest.raises(PointFileError, match="invalid JSON"):
            PointReader(path).read()

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"points": [[0, 0]]}))
        with pytest.raises(PointFileError, match="curves"):
            PointReader(path).read()

    def test_curve_without_points(self, tmp_path: Path) -> None:
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"curves": [{"name": "x"}]}))
        with pytest.raises(PointFileError, match="curve 0"):
            PointReader(path).read()

    def test_bad_point(self, tmp_path: Path) -> None:
        path = tmp_path / "odd.json"
        path.write_text(json.dumps([[0, 0], [1, 2, 3]]))
        with pytest.raises(PointFileError, match="bad point"):
            PointReader(path).read()

    def test_empty_list(self, tmp_path: Path) -> None:
        """Test an empty point list still yields a (short) point set."""
        path = tmp_path / "empty.json"
        path.write_text("[]")
        sets = PointReader(path).read()
        assert sets[0].points == ()


class TestPointReaderText:
    """Tests for delimited text point files."""

    def test_csv(self, tmp_path: Path) -> None:
        """Test comma separated pairs with comments."""
        path = tmp_path / "path.csv"
        path.write_text("# x,y\n0,0\n10,5\n\n20,0\n")

        sets = PointReader(path).read()
        assert [s.name for s in sets] == ["path", "path-1"]
        assert sets[0].points == (Vector2(0, 0), Vector2(10, 5))
        assert sets[1].points == (Vector2(20, 0),)

    def test_whitespace(self, tmp_path: Path) -> None:
        """Test space separated pairs."""
        path = tmp_path / "path.txt"
        path.write_text("0 0\n1.5   2.5\n")
        sets = PointReader(path).read()
        assert sets[0].points == (Vector2(0, 0), Vector2(1.5, 2.5))

    def test_bad_line(self, tmp_path: Path) -> None:
        path = tmp_path / "path.csv"
        path.write_text("0,0\n1,2,3\n")
        with pytest.raises(PointFileError, match="line 2"):
            PointReader(path).read()

    def test_non_numeric(self, tmp_path: Path) -> None:
        path = tmp_path / "path.csv"
        path.write_text("0,0\nx,y\n")
        with pytest.raises(PointFileError, match="line 2"):
            PointReader(path).read()

    def test_no_points(self, tmp_path: Path) -> None:
        path = tmp_path / "path.csv"
        path.write_text("# nothing here\n\n")
        with pytest.raises(PointFileError, match="no points"):
            PointReader(path).read()


class TestPointReaderErrors:
    """Tests for file-level errors."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test loading a nonexistent file raises PointFileError."""
        reader = PointReader(tmp_path / "missing.json")
        with pytest.raises(PointFileError) as excinfo:
            reader.read()
        assert excinfo.value.reason == "file not found"
        assert "missing.json" in excinfo.value.path

    def test_path_property(self, tmp_path: Path) -> None:
        path = tmp_path / "a.csv"
        assert PointReader(path).path == path


class TestPointSet:
    """Tests for PointSet class."""

    def test_to_dict(self) -> None:
        point_set = PointSet(name="a", points=(Vector2(1, 2),), closed=True, tension=1.2)
        assert point_set.to_dict() == {
            "name": "a",
            "points": [{"x": 1, "y": 2}],
            "closed": True,
            "tension": 1.2,
        }
