"""Geometric helpers shared by the offset and boolean algorithms.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Segment-segment intersection with parameters
- Infinite line intersection
- Signed turn angle between two directions
- Point-to-segment distance and point-in-polygon tests

All functions are pure, stateless, and operate on Vector values.
"""

import math

from patterin.domain import Vector


def signed_area(points: list[Vector]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def segment_intersection(
    p1: Vector, p2: Vector, p3: Vector, p4: Vector, epsilon: float = 1e-8
) -> tuple[Vector, float, float] | None:
    """Find the crossing of segment p1-p2 with segment p3-p4.

    Uses the 2D cross-product determinant of the two direction vectors.
    Determinants below epsilon are treated as parallel (including collinear
    overlap, which produces no crossing).

    Args:
        p1: Start of the first segment
        p2: End of the first segment
        p3: Start of the second segment
        p4: End of the second segment
        epsilon: Parallel threshold for the determinant

    Returns:
        ``(point, t1, t2)`` where t1 and t2 are the parameters along each
        segment (both in [0, 1]), or None if the segments do not meet

    Examples:
        >>> hit = segment_intersection(Vector(0, 0), Vector(2, 2), Vector(0, 2), Vector(2, 0))
        >>> hit[1], hit[2]
        (0.5, 0.5)
    """
    d1 = p2.subtract(p1)
    d2 = p4.subtract(p3)
    denom = d1.cross(d2)

    if abs(denom) < epsilon:
        return None

    d3 = p3.subtract(p1)
    t1 = d3.cross(d2) / denom
    t2 = d3.cross(d1) / denom

    if 0 <= t1 <= 1 and 0 <= t2 <= 1:
        return p1.add(d1.multiply(t1)), t1, t2

    return None


def line_intersection(
    a1: Vector, a2: Vector, b1: Vector, b2: Vector, epsilon: float = 1e-10
) -> Vector | None:
    """Intersect the infinite lines through a1-a2 and b1-b2.

    Args:
        a1: A point on the first line
        a2: Another point on the first line
        b1: A point on the second line
        b2: Another point on the second line
        epsilon: Parallel threshold for the determinant

    Returns:
        Intersection point, or None if the lines are parallel
    """
    d1 = a2.subtract(a1)
    d2 = b2.subtract(b1)
    denom = d1.cross(d2)

    if abs(denom) < epsilon:
        return None

    t = b1.subtract(a1).cross(d2) / denom
    return a1.add(d1.multiply(t))


def turn_angle(incoming: Vector, outgoing: Vector) -> float:
    """Signed angle from incoming to outgoing direction, in (-pi, pi].

    Positive values turn left (counter-clockwise).
    """
    return math.atan2(incoming.cross(outgoing), incoming.dot(outgoing))


def distance_to_segment(point: Vector, a: Vector, b: Vector) -> float:
    """Distance from point to the closest point of segment a-b.

    Degenerate segments are treated as the single point a.
    """
    d = b.subtract(a)
    length_sq = d.length_squared()
    if length_sq < 1e-20:
        return point.distance_to(a)

    t = max(0.0, min(1.0, point.subtract(a).dot(d) / length_sq))
    return point.distance_to(a.add(d.multiply(t)))


def point_in_polygon(point: Vector, polygon: list[Vector]) -> bool:
    """Even-odd ray casting test with a horizontal ray towards +x.

    Results for points exactly on the boundary are unspecified.

    Examples:
        >>> square = [Vector(0, 0), Vector(4, 0), Vector(4, 4), Vector(0, 4)]
        >>> point_in_polygon(Vector(2, 2), square)
        True
        >>> point_in_polygon(Vector(5, 2), square)
        False
    """
    inside = False
    j = len(polygon) - 1

    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > point.y) != (yj > point.y)) and (
            point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi
        ):
            inside = not inside

        j = i

    return inside
