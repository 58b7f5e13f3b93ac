"""Tests for miter-aware outline offsetting."""

import math

import pytest

from patterin.config import OffsetConfig
from patterin.core.offset import offset_outline
from patterin.domain import Shape, Vector, Winding


@pytest.fixture
def square() -> Shape:
    """Create a CCW 10x10 square at the origin."""
    return Shape.from_points([(0, 0), (10, 0), (10, 10), (0, 10)])


def _positions(shape: Shape) -> list[Vector]:
    return [v.position for v in shape.vertices]


class TestOffsetOutline:
    """Tests for offset_outline function."""

    def test_square_keeps_sharp_corners(self, square: Shape) -> None:
        """Test right-angle corners are mitered, not bevelled."""
        result = offset_outline(square, 5)

        assert len(result.vertices) == 4
        expected = [Vector(-5, -5), Vector(15, -5), Vector(15, 15), Vector(-5, 15)]
        for actual, wanted in zip(_positions(result), expected):
            assert actual.equals(wanted, 1e-9)

    def test_negative_distance_shrinks(self, square: Shape) -> None:
        """Test insetting a square."""
        result = offset_outline(square, -2)
        assert result.area() == pytest.approx(36)
        assert result.bounding_box().to_tuple() == pytest.approx((2, 2, 8, 8))

    def test_source_is_not_modified(self, square: Shape) -> None:
        """Test the input shape is left untouched."""
        offset_outline(square, 5)
        assert _positions(square) == [Vector(0, 0), Vector(10, 0), Vector(10, 10), Vector(0, 10)]

    def test_hexagon_bounding_box(self) -> None:
        """Test hexagon grows by the miter distance at its pointed corners."""
        hexagon = Shape.regular_polygon(6, 10)
        result = offset_outline(hexagon, 5)

        expected_radius = 10 + 5 / math.cos(math.pi / 6)
        bbox = result.bounding_box()
        assert len(result.vertices) == 6
        assert bbox.width == pytest.approx(2 * expected_radius)
        assert bbox.height == pytest.approx(2 * (10 * math.cos(math.pi / 6) + 5))

    def test_acute_corner_is_bevelled(self) -> None:
        """Test a very sharp corner gains a vertex."""
        sliver = Shape.from_points([(0, 0), (100, -5), (100, 5)])
        result = offset_outline(sliver, 10)

        assert len(result.vertices) == 4
        # The apex is replaced by the two offset edge endpoints
        first, second = result.vertices[0].position, result.vertices[1].position
        assert first.x < 0
        assert second.x < 0
        assert first.distance_to(Vector(0, 0)) == pytest.approx(10)
        assert second.distance_to(Vector(0, 0)) == pytest.approx(10)

    def test_high_miter_limit_keeps_miter(self) -> None:
        """Test the miter limit controls bevelling."""
        sliver = Shape.from_points([(0, 0), (100, -5), (100, 5)])
        result = offset_outline(sliver, 10, miter_limit=100)
        assert len(result.vertices) == 3

    def test_miter_limit_from_config(self) -> None:
        """Test the configured miter limit is used when none is passed."""
        sliver = Shape.from_points([(0, 0), (100, -5), (100, 5)])
        result = offset_outline(sliver, 10, config=OffsetConfig(miter_limit=100))
        assert len(result.vertices) == 3

    def test_collinear_vertex_falls_back_to_normal(self) -> None:
        """Test parallel offset lines push the vertex along its normal."""
        shape = Shape.from_points([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)])
        result = offset_outline(shape, 2)

        assert len(result.vertices) == 5
        assert result.vertices[1].position.equals(Vector(5, -2), 1e-9)

    def test_cw_shape_grows_outward(self, square: Shape) -> None:
        """Test positive distances grow CW shapes too."""
        square.reverse()
        result = offset_outline(square, 1)

        assert result.winding is Winding.CW
        assert abs(result.area()) == pytest.approx(144)

    def test_tags_are_carried_over(self, square: Shape) -> None:
        """Test group and color survive offsetting."""
        square.group = "frame"
        square.color = "blue"
        result = offset_outline(square, 1)
        assert result.group == "frame"
        assert result.color == "blue"


class TestShapeOffset:
    """Tests for the Shape offset API."""

    def test_offset_shape_returns_new_shape(self, square: Shape) -> None:
        """Test offset_shape leaves the original alone."""
        result = square.offset_shape(1)
        assert result is not square
        assert result.area() == pytest.approx(144)
        assert square.area() == pytest.approx(100)

    def test_offset_in_place(self, square: Shape) -> None:
        """Test count=0 replaces the outline and relinks edges."""
        returned = square.offset(1)

        assert returned is square
        assert square.area() == pytest.approx(144)
        assert square.validate() == []
        assert all(e.start.next_edge is e for e in square.edges)

    def test_offset_copies(self, square: Shape) -> None:
        """Test successive copies each grow from the previous one."""
        copies = square.offset(1, count=3)

        assert len(copies) == 3
        widths = [c.bounding_box().width for c in copies]
        assert widths == pytest.approx([12, 14, 16])
        assert square.area() == pytest.approx(100)

    def test_offset_copies_with_original(self, square: Shape) -> None:
        """Test include_original prepends the source shape."""
        copies = square.offset(1, count=2, include_original=True)
        assert copies[0] is square
        assert len(copies) == 3

    def test_expand_and_inset(self, square: Shape) -> None:
        """Test sign-forcing aliases."""
        square.expand(-1)
        assert square.bounding_box().width == pytest.approx(12)
        square.inset(2)
        assert square.bounding_box().width == pytest.approx(8)
