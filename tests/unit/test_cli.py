"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from patterin import __version__
from patterin.cli.app import app

runner = CliRunner()


def write_document(path: Path, *point_lists: list[list[float]]) -> Path:
    path.write_text(
        json.dumps({"shapes": [{"points": points} for points in point_lists]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def squares(tmp_path: Path) -> Path:
    """Document with two overlapping 10x10 squares."""
    return write_document(
        tmp_path / "squares.json",
        [[0, 0], [10, 0], [10, 10], [0, 10]],
        [[5, 5], [15, 5], [15, 15], [5, 15]],
    )


class TestCommands:
    """Tests for the CLI commands."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_union_prints_path_data(self, squares: Path):
        """Test union without --output prints path data."""
        result = runner.invoke(app, ["union", str(squares), "--quiet"])

        assert result.exit_code == 0
        assert "M 0 0 L 10 0 L 10 5 L 15 5" in result.output

    def test_union_writes_document(self, squares: Path, tmp_path: Path):
        """Test union with --output writes JSON."""
        output = tmp_path / "merged.json"
        result = runner.invoke(app, ["union", str(squares), "-o", str(output)])

        assert result.exit_code == 0
        assert "Complete" in result.output
        data = json.loads(output.read_text())
        assert len(data["shapes"]) == 1
        assert len(data["shapes"][0]["points"]) == 8

    def test_difference(self, tmp_path: Path):
        """Test difference of two documents."""
        subjects = write_document(tmp_path / "s.json", [[0, 0], [10, 0], [10, 10], [0, 10]])
        clips = write_document(tmp_path / "c.json", [[5, 5], [15, 5], [15, 15], [5, 15]])

        result = runner.invoke(app, ["difference", str(subjects), str(clips), "-q"])

        assert result.exit_code == 0
        assert "M 0 0 L 10 0 L 10 5 L 5 5 L 5 10 L 0 10 Z" in result.output

    def test_offset(self, tmp_path: Path):
        """Test offset with a distance and count."""
        doc = write_document(tmp_path / "s.json", [[0, 0], [10, 0], [10, 10], [0, 10]])
        output = tmp_path / "out.json"

        result = runner.invoke(
            app,
            ["offset", str(doc), "--distance", "1", "--count", "2", "-j", "1", "-o", str(output)],
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert [p[0] for p in data["shapes"][1]["points"]] == [-2, 12, 12, -2]

    def test_offset_requires_distance(self, squares: Path):
        """Test --distance is mandatory."""
        result = runner.invoke(app, ["offset", str(squares)])
        assert result.exit_code != 0

    def test_offset_rejects_low_miter_limit(self, squares: Path):
        """Test miter limits below one are rejected."""
        result = runner.invoke(app, ["offset", str(squares), "-d", "1", "--miter-limit", "0.5"])
        assert result.exit_code != 0

    def test_info(self, tmp_path: Path):
        """Test info lists shapes and violations."""
        doc = write_document(
            tmp_path / "s.json",
            [[0, 0], [10, 0], [10, 10], [0, 10]],
            [[0, 0], [5, 0], [5, 0], [0, 5]],
        )
        result = runner.invoke(app, ["info", str(doc)])

        assert result.exit_code == 0
        assert "2 shapes" in result.output
        assert "ccw" in result.output
        assert "degenerate_topology" in result.output


class TestErrors:
    """Tests for CLI error reporting."""

    def test_missing_input(self, tmp_path: Path):
        """Test a missing file exits with an error."""
        result = runner.invoke(app, ["union", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_directory_input(self, tmp_path: Path):
        """Test a directory is rejected."""
        result = runner.invoke(app, ["info", str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_invalid_document(self, tmp_path: Path):
        """Test malformed documents are reported."""
        doc = tmp_path / "bad.json"
        doc.write_text('{"shapes": [{"points": "nope"}]}', encoding="utf-8")

        result = runner.invoke(app, ["union", str(doc), "-q"])

        assert result.exit_code == 1
        assert "Invalid shape document" in result.output

    def test_undecodable_document(self, tmp_path: Path):
        """Test binary input is reported as a load failure."""
        doc = tmp_path / "binary.json"
        doc.write_bytes(b"\xff\xfe\x00garbage")

        result = runner.invoke(app, ["info", str(doc)])

        assert result.exit_code == 1
        assert "Could not load shapes" in result.output

    def test_degenerate_shape_in_document(self, tmp_path: Path):
        """Test records with too few points are reported."""
        doc = write_document(tmp_path / "bad.json", [[0, 0], [1, 1]])
        result = runner.invoke(app, ["info", str(doc)])

        assert result.exit_code == 1
        assert "shape 0" in result.output
