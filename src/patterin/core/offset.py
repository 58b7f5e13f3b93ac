"""Miter-aware outline offsetting.

Each corner of the outline is rebuilt from its two adjacent edges, each pushed
along its own outward normal by the offset distance:

- The two offset lines are intersected to form a miter corner.
- If the miter reaches further than ``|distance| * miter_limit`` from the
  original corner, the corner is bevelled: both offset edge endpoints are
  emitted instead of the intersection.
- If the offset lines are parallel, the corner is pushed along its own
  averaged vertex normal.

Self-intersections produced by large insets are not repaired.
"""

import logging

from patterin.config import OffsetConfig
from patterin.core.geometry import line_intersection
from patterin.domain import Shape, Vector

logger = logging.getLogger(__name__)


def offset_outline(
    shape: Shape,
    distance: float,
    miter_limit: float | None = None,
    config: OffsetConfig | None = None,
) -> Shape:
    """Build a new shape whose outline is offset from shape by distance.

    Args:
        shape: Source shape (not modified)
        distance: Positive grows the shape, negative shrinks it
        miter_limit: Overrides the configured miter limit when given
        config: Offset settings (defaults to OffsetConfig())

    Returns:
        New independent shape with the same winding, group and color. If fewer
        than three corner points are produced, an unmodified clone is returned.
    """
    config = config or OffsetConfig()
    limit = config.miter_limit if miter_limit is None else miter_limit
    max_miter = abs(distance) * limit

    vertices = shape.vertices
    edges = shape.edges
    points: list[Vector] = []

    for i, vertex in enumerate(vertices):
        prev_edge = edges[i - 1]
        next_edge = edges[i]

        prev_shift = prev_edge.normal.multiply(distance)
        next_shift = next_edge.normal.multiply(distance)
        prev_start = prev_edge.start.position.add(prev_shift)
        prev_end = prev_edge.end.position.add(prev_shift)
        next_start = next_edge.start.position.add(next_shift)
        next_end = next_edge.end.position.add(next_shift)

        corner = line_intersection(
            prev_start, prev_end, next_start, next_end, config.line_epsilon
        )

        if corner is None:
            points.append(vertex.position.add(vertex.normal.multiply(distance)))
            continue

        miter_length = corner.distance_to(vertex.position)
        if miter_length > max_miter:
            logger.debug(
                "Bevelling corner %d: miter %.4f exceeds limit %.4f",
                i, miter_length, max_miter,
            )
            points.append(prev_end)
            points.append(next_start)
        else:
            points.append(corner)

    if len(points) < 3:
        logger.debug("Offset produced %d points, returning clone", len(points))
        return shape.clone()

    result = Shape.from_points(points, shape.winding)
    result.group = shape.group
    result.color = shape.color
    return result
