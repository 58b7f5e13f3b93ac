"""Tests for batch processing orchestration."""

import json
import logging
from pathlib import Path

import pytest

from patterin.config import GeometryConfig, PatterinSettings, ProcessingConfig
from patterin.core.processor import Operation, ShapeProcessor, process_offset
from patterin.domain import Shape, Winding
from patterin.exceptions import ProcessingCancelledError


def rect(x0: float, y0: float, x1: float, y1: float) -> Shape:
    return Shape.from_points([(x0, y0), (x1, y0), (x1, y1), (x0, y1)])


@pytest.fixture
def processor() -> ShapeProcessor:
    """Create a processor that runs everything inline."""
    settings = PatterinSettings(processing=ProcessingConfig(max_workers=1))
    return ShapeProcessor(settings, quiet=True)


@pytest.fixture
def document(tmp_path: Path) -> Path:
    """Write a document with two overlapping squares and one guide."""
    path = tmp_path / "shapes.json"
    shapes = [
        {"points": [[0, 0], [100, 0], [100, 100], [0, 100]], "group": "a"},
        {"points": [[50, 50], [150, 50], [150, 150], [50, 150]]},
        {"points": [[0, 0], [1, 0], [0, 1]], "ephemeral": True},
    ]
    path.write_text(json.dumps({"shapes": shapes}), encoding="utf-8")
    return path


class TestProcessOffset:
    """Tests for process_offset worker function."""

    def test_single_outline(self):
        """Test one offset outline per shape."""
        result = process_offset(rect(0, 0, 10, 10).to_dict(), 1.0, 0, {"miter_limit": 4.0})

        assert "error" not in result
        assert len(result["shapes"]) == 1
        assert Shape.from_dict(result["shapes"][0]).area() == pytest.approx(144)
        assert result["duration_ms"] >= 0

    def test_successive_copies(self):
        """Test count produces growing copies."""
        result = process_offset(rect(0, 0, 10, 10).to_dict(), 1.0, 3, {})
        areas = [Shape.from_dict(d).area() for d in result["shapes"]]
        assert areas == pytest.approx([144, 196, 256])

    def test_error_is_returned_not_raised(self):
        """Test invalid input is reported in the result."""
        result = process_offset({"points": [[0, 0], [1, 1]], "winding": "ccw"}, 1.0, 0, {})

        assert "shapes" not in result
        assert "at least 3 points" in result["error"]
        assert "InvalidGeometryError" in result["traceback"]


class TestShapeProcessor:
    """Tests for ShapeProcessor class."""

    def test_union(self, processor: ShapeProcessor):
        """Test union records statistics."""
        result = processor.union([rect(0, 0, 10, 10), rect(5, 0, 15, 10)])

        assert len(result) == 1
        assert processor.stats.processed_count == 2
        assert processor.stats.loops_produced == 1

    def test_difference(self, processor: ShapeProcessor):
        """Test difference delegates to the boolean engine."""
        result = processor.difference([rect(0, 0, 10, 10)], [rect(5, 5, 15, 15)])
        assert len(result[0].vertices) == 6

    def test_offset_inline_preserves_order(self, processor: ShapeProcessor):
        """Test offset results follow input order."""
        shapes = [rect(0, 0, 10, 10), rect(100, 0, 120, 20)]
        result = processor.offset(shapes, 1.0)

        assert [s.area() for s in result] == pytest.approx([144, 484])
        assert processor.stats.processed_count == 2

    def test_offset_in_worker_processes(self):
        """Test the process pool path yields the same results."""
        processor = ShapeProcessor(PatterinSettings(), quiet=True)
        shapes = [rect(0, 0, 10, 10), rect(100, 0, 120, 20), rect(0, 100, 5, 105)]

        result = processor.offset(shapes, 1.0, max_workers=2)

        assert [s.area() for s in result] == pytest.approx([144, 484, 49])

    def test_offset_reports_progress(self, processor: ShapeProcessor):
        """Test the progress callback sees every shape."""
        calls: list[tuple[int, int]] = []
        processor.offset(
            [rect(0, 0, 1, 1), rect(2, 0, 3, 1)],
            0.5,
            progress_callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(1, 2), (2, 2)]

    def test_offset_interrupt_in_worker_pool(self):
        """Test an interrupt during pool processing raises ProcessingCancelledError."""
        processor = ShapeProcessor(PatterinSettings(), quiet=True)
        shapes = [rect(0, 0, 10, 10), rect(100, 0, 120, 20), rect(0, 100, 5, 105)]

        def interrupt(completed: int, total: int) -> None:
            raise KeyboardInterrupt

        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.offset(shapes, 1.0, max_workers=2, progress_callback=interrupt)

        assert exc_info.value.processed_count == 1
        assert processor.stats.was_cancelled

    def test_process_union_document(self, processor: ShapeProcessor, document: Path, tmp_path: Path):
        """Test document union skips ephemeral shapes and writes output."""
        output = tmp_path / "out.json"
        shapes, stats = processor.process(Operation.UNION, document, output_path=output)

        assert len(shapes) == 1
        assert shapes[0].area() == pytest.approx(17500)
        assert stats.skipped_count == 1
        assert stats.duration_seconds >= 0
        data = json.loads(output.read_text())
        assert len(data["shapes"]) == 1
        assert data["shapes"][0]["group"] == "a"

    def test_process_includes_ephemeral_when_configured(self, document: Path):
        """Test include_ephemeral feeds guides into operations."""
        settings = PatterinSettings(
            processing=ProcessingConfig(max_workers=1, include_ephemeral=True)
        )
        processor = ShapeProcessor(settings, quiet=True)
        shapes, stats = processor.process(Operation.OFFSET, document, distance=1.0)

        assert len(shapes) == 3
        assert stats.skipped_count == 0

    def test_process_difference_document(self, processor: ShapeProcessor, tmp_path: Path):
        """Test document difference produces a hole."""
        subjects = tmp_path / "subjects.json"
        clips = tmp_path / "clips.json"
        subjects.write_text(json.dumps({"shapes": [{"points": [[0, 0], [100, 0], [100, 100], [0, 100]]}]}))
        clips.write_text(json.dumps({"shapes": [{"points": [[25, 25], [75, 25], [75, 75], [25, 75]]}]}))

        shapes, _ = processor.process(Operation.DIFFERENCE, subjects, clip_path=clips)

        assert [s.winding for s in shapes] == [Winding.CCW, Winding.CW]

    def test_process_difference_requires_clips(self, processor: ShapeProcessor, document: Path):
        """Test difference without a clip document is rejected."""
        with pytest.raises(ValueError, match="clip document"):
            processor.process(Operation.DIFFERENCE, document)

    def test_load_validates_with_configured_epsilon(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ):
        """Test loaded shapes are validated with the geometry vector epsilon."""
        path = tmp_path / "short.json"
        points = [[0, 0], [10, 0], [10, 1e-6], [10, 10], [0, 10]]
        path.write_text(json.dumps({"shapes": [{"points": points}]}), encoding="utf-8")

        strict = ShapeProcessor(
            PatterinSettings(geometry=GeometryConfig(vector_epsilon=1e-5)), quiet=True
        )
        with caplog.at_level(logging.WARNING):
            strict.load(path)
        assert "Shape has violations" in caplog.text

        caplog.clear()
        default = ShapeProcessor(PatterinSettings(), quiet=True)
        with caplog.at_level(logging.WARNING):
            default.load(path)
        assert "Shape has violations" not in caplog.text

    def test_process_missing_document(self, processor: ShapeProcessor, tmp_path: Path):
        """Test a missing input raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            processor.process(Operation.UNION, tmp_path / "missing.json")
