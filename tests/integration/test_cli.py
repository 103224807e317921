"""End-to-end tests for the curveforge command line."""

import json
import math
from pathlib import Path

import pytest
from typer.testing import CliRunner

from curveforge import __version__
from curveforge.cli.app import app

runner = CliRunner()

SQUARE = [[0, 0], [100, 0], [100, 100], [0, 100]]


@pytest.fixture
def square_file(tmp_path: Path) -> Path:
    path = tmp_path / "square.json"
    path.write_text(json.dumps(SQUARE))
    return path


@pytest.fixture
def mixed_file(tmp_path: Path) -> Path:
    """Two good curves and one that cannot be fitted."""
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps(
            {
                "curves": [
                    {"name": "ring", "points": SQUARE, "closed": True},
                    {"name": "dot", "points": [[5, 5]]},
                    {"name": "wave", "points": [[0, 0], [30, 40], [80, 10]]},
                ]
            }
        )
    )
    return path


class TestFitCommand:
    """Tests for the fit command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_table_output(self, square_file: Path) -> None:
        """Test the default summary output."""
        result = runner.invoke(app, [str(square_file), "--closed"])
        assert result.exit_code == 0, result.output
        assert "square" in result.output
        assert "Complete" in result.output
        assert "1 curves" in result.output

    def test_json_output(self, square_file: Path) -> None:
        """Test JSON output carries the contour and samples."""
        result = runner.invoke(
            app, [str(square_file), "--closed", "--json", "--samples", "9", "--quiet"]
        )
        assert result.exit_code == 0, result.output

        payload = json.loads(result.stdout)
        assert len(payload) == 1
        curve = payload[0]
        assert curve["name"] == "square"
        assert curve["closed"] is True
        assert curve["segments"] == 4
        assert curve["length"] == pytest.approx(444.3, abs=1.0)
        assert len(curve["contour"]["segments"]) == 4
        assert len(curve["samples"]) == 9
        assert curve["samples"][0] == pytest.approx(curve["samples"][-1])
        assert "ribbon" not in curve

    def test_json_area(self, square_file: Path, tmp_path: Path) -> None:
        """Test closed curves report a signed area and open curves none."""
        result = runner.invoke(app, [str(square_file), "--closed", "--json", "--quiet"])
        assert result.exit_code == 0, result.output
        area = json.loads(result.stdout)[0]["area"]
        assert area == pytest.approx(math.pi * 5000.0, rel=0.01)

        clockwise = tmp_path / "clockwise.json"
        clockwise.write_text(json.dumps(list(reversed(SQUARE))))
        result = runner.invoke(app, [str(clockwise), "--closed", "--json", "--quiet"])
        assert json.loads(result.stdout)[0]["area"] == pytest.approx(-area)

        result = runner.invoke(app, [str(square_file), "--json", "--quiet"])
        assert "area" not in json.loads(result.stdout)[0]

    def test_json_ribbon(self, square_file: Path) -> None:
        """Test ribbon edges are included on request."""
        result = runner.invoke(
            app,
            [str(square_file), "--closed", "--json", "--quiet", "-n", "12", "--ribbon-width", "6"],
        )
        assert result.exit_code == 0, result.output
        ribbon = json.loads(result.stdout)[0]["ribbon"]
        assert len(ribbon["left"]) == len(ribbon["right"]) == 12

    def test_json_intersections(self, tmp_path: Path) -> None:
        """Test self-intersections appear in JSON output."""
        path = tmp_path / "eight.csv"
        path.write_text("0,0\n100,100\n100,0\n0,100\n")
        result = runner.invoke(app, [str(path), "--closed", "--json", "--quiet", "-x"])
        assert result.exit_code == 0, result.output
        crossings = json.loads(result.stdout)[0]["self_intersections"]
        assert crossings
        assert all(c["t_a"] < c["t_b"] for c in crossings)

    def test_failed_curve_exits_nonzero(self, mixed_file: Path) -> None:
        """Test a curve that cannot be fitted fails the run but not the batch."""
        result = runner.invoke(app, [str(mixed_file), "--json", "--quiet"])
        assert result.exit_code == 1

        payload = json.loads(result.stdout)
        assert [c["name"] for c in payload] == ["ring", "dot", "wave"]
        assert "error" in payload[1]
        assert payload[2]["segments"] == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_text("0,0\nnot a point at all\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Could not read points" in result.output

    def test_verbose_and_quiet_conflict(self, square_file: Path) -> None:
        result = runner.invoke(app, [str(square_file), "--verbose", "--quiet"])
        assert result.exit_code == 1
        assert "Cannot use --verbose and --quiet together" in result.output

    def test_unknown_log_level(self, square_file: Path) -> None:
        result = runner.invoke(app, [str(square_file), "--log-level", "LOUD"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.output

    def test_log_file(self, square_file: Path, tmp_path: Path) -> None:
        """Test detailed logs go to the requested file."""
        log_file = tmp_path / "run.log"
        result = runner.invoke(app, [str(square_file), "--quiet", "--log-file", str(log_file)])
        assert result.exit_code == 0, result.output
        assert "Curve fitted" in log_file.read_text()
