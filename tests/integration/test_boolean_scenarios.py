"""End-to-end scenarios combining shapes, offsets, boolean operations and documents."""

import json
import math
from pathlib import Path

import pytest

from patterin.config import PatterinSettings, ProcessingConfig
from patterin.core import Operation, ShapeProcessor, difference, union
from patterin.domain import Shape, Vector, Winding
from patterin.io import ShapeReader, ShapeWriter


def square(size: float, cx: float = 0.0, cy: float = 0.0) -> Shape:
    half = size / 2
    return Shape.from_points(
        [(cx - half, cy - half), (cx + half, cy - half), (cx + half, cy + half), (cx - half, cy + half)]
    )


class TestShapeProperties:
    """Invariants that hold for a range of shapes."""

    @pytest.mark.parametrize("sides", [3, 4, 5, 8, 12])
    def test_area_sign_matches_winding(self, sides: int):
        """Test CCW polygons have positive area and CW negative."""
        shape = Shape.regular_polygon(sides, 10)
        assert shape.area() > 0
        shape.reverse()
        assert shape.winding is Winding.CW
        assert shape.area() < 0

    @pytest.mark.parametrize("sides", [3, 5, 6, 9])
    def test_union_of_single_shape_keeps_area(self, sides: int):
        """Test union([S]) preserves area."""
        shape = Shape.regular_polygon(sides, 7, center=Vector(3, -2))
        result = union([shape])
        assert len(result) == 1
        assert result[0].area() == pytest.approx(shape.area())

    @pytest.mark.parametrize("sides", [4, 6, 10])
    def test_union_with_own_clone(self, sides: int):
        """Test S union clone(S) is a single copy of S."""
        shape = Shape.regular_polygon(sides, 10, rotation_offset=0.3)
        result = union([shape, shape.clone()])
        assert len(result) == 1
        assert result[0].area() == pytest.approx(shape.area())

    @pytest.mark.parametrize("sides", [3, 6, 16])
    def test_difference_with_containing_shape(self, sides: int):
        """Test S minus a larger shape around it is empty."""
        inner = Shape.regular_polygon(sides, 5)
        outer = Shape.regular_polygon(sides, 50)
        assert difference([inner], [outer]) == []


class TestCombinedWorkflows:
    """Multi-step workflows."""

    def test_offset_then_difference_makes_frame(self):
        """Test subtracting an inset from its source leaves a frame."""
        outer = square(100)
        inner = outer.offset_shape(-10)

        frame = difference([outer], [inner])

        assert len(frame) == 2
        assert sum(s.area() for s in frame) == pytest.approx(100 * 100 - 80 * 80)

    def test_rotated_overlap(self):
        """Test union of a square and its 45 degree rotation."""
        a = square(10)
        b = square(10)
        b.rotate(math.pi / 4)

        result = union([a, b])

        assert len(result) == 1
        assert len(result[0].vertices) == 16
        # Regular octagram outline: larger than either square, smaller than both
        assert 100 < result[0].area() < 200

    def test_union_then_offset(self):
        """Test offsetting a merged outline."""
        merged = union([square(10, 0, 0), square(10, 10, 0)])
        assert len(merged) == 1

        grown = merged[0].offset_shape(1)
        bbox = grown.bounding_box()
        assert bbox.width == pytest.approx(22)
        assert bbox.height == pytest.approx(12)

    def test_chained_union_is_stable(self):
        """Test union of an existing union result with a new shape."""
        first = union([square(10, 0, 0), square(10, 5, 5)])
        second = union([*first, square(10, 10, 10)])

        assert len(second) == 1
        assert second[0].area() == pytest.approx(100 * 3 - 25 * 2)


class TestDocumentPipeline:
    """Workflows through shape documents."""

    def test_write_process_read(self, tmp_path: Path):
        """Test a document can be offset and read back."""
        source = tmp_path / "source.json"
        ShapeWriter(source).save([square(10), Shape.regular_polygon(6, 5, center=Vector(50, 0))])

        settings = PatterinSettings(processing=ProcessingConfig(max_workers=1))
        processor = ShapeProcessor(settings, quiet=True)
        output = ShapeWriter.get_result_path(source, Operation.OFFSET.value)

        _, stats = processor.process(Operation.OFFSET, source, output_path=output, distance=2)

        assert output.name == "source-offset.json"
        assert stats.processed_count == 2
        assert stats.error_count == 0

        shapes = ShapeReader(output).read_all()
        assert shapes[0].bounding_box().width == pytest.approx(14)
        assert all(s.validate() == [] for s in shapes)

    def test_hole_round_trip(self, tmp_path: Path):
        """Test hole windings survive being written and read back."""
        result = difference([square(100)], [square(20)])
        path = tmp_path / "holes.json"
        ShapeWriter(path).save(result)

        data = json.loads(path.read_text())
        assert [s["winding"] for s in data["shapes"]] == ["ccw", "cw"]

        reloaded = ShapeReader(path).read_all()
        assert [s.winding for s in reloaded] == [Winding.CCW, Winding.CW]
        assert reloaded[1].area() == pytest.approx(-400)
