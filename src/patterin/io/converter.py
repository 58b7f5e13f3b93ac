"""Conversion between JSON shape documents and domain shapes.

The on-disk format is a single JSON object::

    {
      "shapes": [
        {"points": [[0, 0], [10, 0], [10, 10]], "winding": "ccw",
         "ephemeral": false, "open": false, "group": null, "color": null}
      ]
    }

Only ``points`` is required. A missing winding is derived from the point order.
"""

from pydantic import BaseModel, Field

from patterin.domain import Shape, Winding


class ShapeRecord(BaseModel):
    """One shape entry in a document."""

    points: list[tuple[float, float]] = Field(
        description="Ordered corner coordinates",
    )
    winding: Winding | None = Field(
        default=None,
        description="Winding tag (derived from point order when omitted)",
    )
    ephemeral: bool = Field(
        default=False,
        description="Construction-only geometry",
    )
    open: bool = Field(
        default=False,
        description="Render without closing the path",
    )
    group: str | None = None
    color: str | None = None


class ShapeDocument(BaseModel):
    """A collection of shapes."""

    shapes: list[ShapeRecord] = Field(default_factory=list)


def record_to_shape(record: ShapeRecord) -> Shape:
    """Build a domain shape from a document record.

    Raises:
        InvalidGeometryError: If the record has fewer than three points
    """
    shape = Shape.from_points(record.points, record.winding)
    shape.ephemeral = record.ephemeral
    shape.open = record.open
    shape.group = record.group
    shape.color = record.color
    return shape


def shape_to_record(shape: Shape) -> ShapeRecord:
    """Convert a domain shape to a document record."""
    return ShapeRecord(
        points=[(v.x, v.y) for v in shape.vertices],
        winding=shape.winding,
        ephemeral=shape.ephemeral,
        open=shape.open,
        group=shape.group,
        color=shape.color,
    )
