"""Directed edges linking the vertices of a shape.

This module defines:
- Winding: Traversal direction of a closed loop
- Edge: Directed connection between two vertices with a cached outward normal
"""

from enum import Enum

from patterin.domain.vector import Vector
from patterin.domain.vertex import Vertex


class Winding(str, Enum):
    """Traversal direction of a closed loop.

    With the y-axis pointing up:
    - CCW loops have positive signed area
    - CW loops have negative signed area (holes produced by difference)
    """

    CW = "cw"
    CCW = "ccw"

    def opposite(self) -> "Winding":
        return Winding.CW if self is Winding.CCW else Winding.CCW


class Edge:
    """A directed edge from ``start`` to ``end``.

    Edges form a doubly-linked cycle through ``next`` and ``prev`` inside the
    shape that owns them. Creating an edge registers it on both endpoints.

    The outward normal depends on the winding tag: for CCW loops it is the
    direction rotated clockwise, for CW loops it is rotated counter-clockwise.
    Either way it points away from the interior.

    Attributes:
        start: Start vertex
        end: End vertex
        next: Following edge in the loop
        prev: Preceding edge in the loop
    """

    __slots__ = ("start", "end", "next", "prev", "_winding", "_normal")

    def __init__(self, start: Vertex, end: Vertex, winding: Winding = Winding.CCW) -> None:
        self.start = start
        self.end = end
        self.next: Edge | None = None
        self.prev: Edge | None = None
        self._winding = winding
        self._normal: Vector | None = None

        start.next_edge = self
        end.prev_edge = self

    @property
    def winding(self) -> Winding:
        return self._winding

    @winding.setter
    def winding(self, value: Winding) -> None:
        if self._winding is not value:
            self._winding = value
            self.invalidate_normal()

    @property
    def normal(self) -> Vector:
        if self._normal is None:
            self._normal = self.compute_normal()
        return self._normal

    def invalidate_normal(self) -> None:
        """Drop the cached normal here and on both endpoints."""
        self._normal = None
        self.start.invalidate_normal()
        self.end.invalidate_normal()

    def compute_normal(self) -> Vector:
        direction = self.direction()
        if self._winding is Winding.CCW:
            return direction.perpendicular_cw()
        return direction.perpendicular()

    def length(self) -> float:
        return self.start.position.distance_to(self.end.position)

    def direction(self) -> Vector:
        """Unit vector from start to end."""
        return self.direction_raw().normalize()

    def direction_raw(self) -> Vector:
        return self.end.position.subtract(self.start.position)

    def midpoint(self) -> Vector:
        return self.start.position.lerp(self.end.position, 0.5)

    def point_at(self, t: float) -> Vector:
        """Point at parameter t (0 = start, 1 = end)."""
        return self.start.position.lerp(self.end.position, t)

    def is_degenerate(self, epsilon: float = 1e-10) -> bool:
        return self.length() < epsilon

    def intersection_parameters(
        self, other: "Edge", epsilon: float = 1e-10
    ) -> tuple[float, float] | None:
        """Find where this edge crosses another.

        Args:
            other: Edge to test against
            epsilon: Threshold on the cross-product determinant below which the
                edges are treated as parallel

        Returns:
            ``(t, u)`` parameters along this edge and the other edge, both in
            [0, 1], or None for parallel or non-overlapping edges
        """
        p1 = self.start.position
        d1 = self.direction_raw()
        d2 = other.direction_raw()

        denom = d1.cross(d2)
        if abs(denom) < epsilon:
            return None

        d3 = other.start.position.subtract(p1)
        t = d3.cross(d2) / denom
        u = d3.cross(d1) / denom

        if 0 <= t <= 1 and 0 <= u <= 1:
            return t, u
        return None

    def intersect(self, other: "Edge", epsilon: float = 1e-10) -> Vector | None:
        """Intersection point with another edge, or None."""
        params = self.intersection_parameters(other, epsilon)
        if params is None:
            return None
        return self.point_at(params[0])

    def intersect_ray(
        self, origin: Vector, direction: Vector, epsilon: float = 1e-10
    ) -> Vector | None:
        """Intersection of a ray from origin along direction with this edge."""
        d2 = self.direction_raw()
        denom = direction.cross(d2)
        if abs(denom) < epsilon:
            return None

        d3 = self.start.position.subtract(origin)
        t = d3.cross(d2) / denom
        u = d3.cross(direction) / denom

        if t >= 0 and 0 <= u <= 1:
            return origin.add(direction.multiply(t))
        return None

    def distance_to_point(self, point: Vector) -> float:
        """Euclidean distance from point to the closest point of this edge."""
        from patterin.core.geometry import distance_to_segment

        return distance_to_segment(point, self.start.position, self.end.position)

    def clone(self) -> "Edge":
        """Copy with fresh vertices; the copy is not linked into any loop."""
        return Edge(self.start.clone(), self.end.clone(), self._winding)

    def __repr__(self) -> str:
        return f"Edge({self.start!r} -> {self.end!r})"
