"""Closed polygonal shapes built from a cycle of directed edges.

This module defines:
- BoundingBox: Axis-aligned bounds of a shape
- ViolationKind / Violation: Diagnostics reported by Shape.validate()
- Shape: One closed loop of edges with winding, queries and transforms
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from patterin.domain.edge import Edge, Winding
from patterin.domain.vector import Vector
from patterin.domain.vertex import Vertex
from patterin.exceptions import InvalidGeometryError

PointLike = Vector | Sequence[float]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min: Lower-left corner
        max: Upper-right corner
    """

    min: Vector
    max: Vector

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def center(self) -> Vector:
        return self.min.lerp(self.max, 0.5)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y)."""
        return (self.min.x, self.min.y, self.max.x, self.max.y)


class ViolationKind(str, Enum):
    """Kinds of invariant violations reported by Shape.validate()."""

    EMPTY = "empty"
    NOT_CLOSED = "not_closed"
    DISCONNECTED = "disconnected"
    BROKEN_LINK = "broken_link"
    WINDING_MISMATCH = "winding_mismatch"
    DEGENERATE_TOPOLOGY = "degenerate_topology"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single non-fatal diagnostic.

    Attributes:
        kind: What went wrong
        index: Edge index the violation refers to (None for shape-wide issues)
        message: Human-readable description
    """

    kind: ViolationKind
    index: int | None
    message: str


def _as_vector(point: PointLike) -> Vector:
    if isinstance(point, Vector):
        return point
    x, y = point
    return Vector(float(x), float(y))


def _format_number(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class Shape:
    """A closed polygon made of a cyclic chain of edges.

    Vertices and edges are owned exclusively by one shape; ``clone()`` rebuilds
    both rather than sharing them. All transforms mutate in place.

    Attributes:
        edges: Edges in traversal order; ``edges[i].end`` is ``edges[i + 1].start``
        ephemeral: Construction-only geometry, excluded from final output
        open: Render as an open path (no closing instruction)
        group: Opaque group tag passed through untouched
        color: Opaque color tag passed through untouched
    """

    def __init__(self, edges: list[Edge], winding: Winding = Winding.CCW) -> None:
        self.edges = edges
        self._winding = winding
        self.ephemeral = False
        self.open = False
        self.group: str | None = None
        self.color: str | None = None

        for edge in edges:
            edge.winding = winding

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_points(
        cls, points: Iterable[PointLike], winding: Winding | None = None
    ) -> "Shape":
        """Create a shape from an ordered list of points.

        Args:
            points: At least three points, as Vectors or (x, y) pairs
            winding: Winding tag for the shape. When None, it is taken from the
                sign of the signed area so the tag always agrees with area().

        Returns:
            New shape with edges linked into a cycle

        Raises:
            InvalidGeometryError: If fewer than three points are given
        """
        vectors = [_as_vector(p) for p in points]
        if len(vectors) < 3:
            raise InvalidGeometryError(
                f"Shape requires at least 3 points, got {len(vectors)}",
                count=len(vectors),
            )

        if winding is None:
            winding = Winding.CCW if _shoelace(vectors) >= 0 else Winding.CW

        shape = cls(_build_edges(vectors, winding), winding)
        shape.connect_edges()
        return shape

    @classmethod
    def regular_polygon(
        cls,
        sides: int,
        radius: float,
        center: Vector | None = None,
        rotation_offset: float = 0.0,
    ) -> "Shape":
        """Create a regular polygon with vertices on a circle, wound CCW.

        Raises:
            InvalidGeometryError: If sides is less than three
        """
        if sides < 3:
            raise InvalidGeometryError(
                f"Polygon requires at least 3 sides, got {sides}", count=sides
            )

        c = center if center is not None else Vector.zero()
        points = [
            Vector(
                c.x + math.cos(rotation_offset + i / sides * math.tau) * radius,
                c.y + math.sin(rotation_offset + i / sides * math.tau) * radius,
            )
            for i in range(sides)
        ]
        return cls.from_points(points, Winding.CCW)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    @property
    def winding(self) -> Winding:
        return self._winding

    @winding.setter
    def winding(self, value: Winding) -> None:
        self._winding = value
        for edge in self.edges:
            edge.winding = value

    @property
    def vertices(self) -> list[Vertex]:
        """Vertices in traversal order (the start of each edge)."""
        return [edge.start for edge in self.edges]

    @property
    def segments(self) -> list[Edge]:
        return self.edges

    @property
    def closed(self) -> bool:
        if not self.edges:
            return False
        first = self.edges[0]
        last = self.edges[-1]
        return last.end is first.start or last.end.equals(first.start)

    def __len__(self) -> int:
        return len(self.edges)

    def connect_edges(self) -> None:
        """Re-link the edge cycle and invalidate every cached normal.

        Re-tags each edge with the shape winding, rewires next/prev and the
        vertex back-references. Every rebuild of the edge list goes through here.
        """
        n = len(self.edges)
        if n == 0:
            return

        for i, edge in enumerate(self.edges):
            edge.winding = self._winding
            edge.next = self.edges[(i + 1) % n]
            edge.prev = self.edges[(i - 1) % n]

        for edge in self.edges:
            edge.start.next_edge = edge
            edge.end.prev_edge = edge

        for edge in self.edges:
            edge.invalidate_normal()

    def reverse(self) -> None:
        """Flip the traversal direction and the winding tag."""
        if not self.edges:
            return

        points = [v.position for v in reversed(self.vertices)]
        self._winding = self._winding.opposite()
        self.edges = _build_edges(points, self._winding)
        self.connect_edges()

    def validate(self, epsilon: float = 1e-10) -> list[Violation]:
        """Check closure, adjacency and degenerate edges.

        Never raises; an empty list means the shape is well formed.

        Args:
            epsilon: Per-axis tolerance for matching endpoints and for
                zero-length edges
        """
        if not self.edges:
            return [Violation(ViolationKind.EMPTY, None, "Shape has no edges")]

        violations: list[Violation] = []
        n = len(self.edges)

        if not self.closed:
            violations.append(
                Violation(ViolationKind.NOT_CLOSED, None, "Shape is not closed")
            )

        for i, edge in enumerate(self.edges):
            following = self.edges[(i + 1) % n]
            if not edge.end.equals(following.start, epsilon):
                violations.append(
                    Violation(
                        ViolationKind.DISCONNECTED,
                        i,
                        f"Edge {i} end does not match edge {(i + 1) % n} start",
                    )
                )
            if edge.next is not following or following.prev is not edge:
                violations.append(
                    Violation(
                        ViolationKind.BROKEN_LINK,
                        i,
                        f"Edge {i} is not linked to edge {(i + 1) % n}",
                    )
                )
            if edge.winding is not self._winding:
                violations.append(
                    Violation(
                        ViolationKind.WINDING_MISMATCH,
                        i,
                        f"Edge {i} is tagged {edge.winding.value}, "
                        f"shape is {self._winding.value}",
                    )
                )
            if edge.is_degenerate(epsilon):
                violations.append(
                    Violation(
                        ViolationKind.DEGENERATE_TOPOLOGY,
                        i,
                        f"Edge {i} is degenerate (zero length)",
                    )
                )

        return violations

    def remove_degenerate(self, epsilon: float = 1e-10) -> None:
        """Drop zero-length edges and rebuild the cycle from the survivors."""
        points = [e.start.position for e in self.edges if not e.is_degenerate(epsilon)]
        self.edges = _build_edges(points, self._winding) if points else []
        self.connect_edges()

    def clone(self) -> "Shape":
        """Deep copy with new vertices and edges; flags and tags are preserved."""
        shape = Shape(
            _build_edges([v.position for v in self.vertices], self._winding),
            self._winding,
        )
        shape.ephemeral = self.ephemeral
        shape.open = self.open
        shape.group = self.group
        shape.color = self.color
        shape.connect_edges()
        return shape

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def area(self) -> float:
        """Signed area (shoelace); positive for CCW, negative for CW."""
        return _shoelace([v.position for v in self.vertices])

    def centroid(self) -> Vector:
        """Average of the vertex positions."""
        verts = self.vertices
        if not verts:
            return Vector.zero()
        return Vector(
            sum(v.x for v in verts) / len(verts),
            sum(v.y for v in verts) / len(verts),
        )

    def bounding_box(self) -> BoundingBox:
        verts = self.vertices
        if not verts:
            return BoundingBox(Vector.zero(), Vector.zero())

        xs = [v.x for v in verts]
        ys = [v.y for v in verts]
        return BoundingBox(Vector(min(xs), min(ys)), Vector(max(xs), max(ys)))

    def contains_point(self, point: Vector, epsilon: float = 1e-10) -> bool:
        """Test whether point lies inside the shape (ray casting, even-odd).

        A horizontal ray through a vertex makes ray casting unreliable, so when
        the point is within ``epsilon * 100`` of a vertex the test is repeated
        at three jittered positions and decided by vote (two of four).
        """
        if len(self.edges) < 3:
            return False

        result = self._ray_cast(point)

        if self._is_near_vertex(point, epsilon * 100):
            step = epsilon * 10
            jitters = (
                Vector(point.x, point.y + step),
                Vector(point.x, point.y - step),
                Vector(point.x + step, point.y),
            )
            inside_count = int(result) + sum(self._ray_cast(j) for j in jitters)
            return inside_count >= 2

        return result

    def _is_near_vertex(self, point: Vector, threshold: float) -> bool:
        return any(point.distance_to(v.position) < threshold for v in self.vertices)

    def _ray_cast(self, point: Vector) -> bool:
        from patterin.core.geometry import point_in_polygon

        return point_in_polygon(point, [v.position for v in self.vertices])

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def scale(self, factor: float, center: Vector | None = None) -> None:
        """Scale about center (default: centroid)."""
        c = center if center is not None else self.centroid()
        for v in self.vertices:
            v.position = c.add(v.position.subtract(c).multiply(factor))
        self._invalidate_normals()

    def rotate(self, angle: float, center: Vector | None = None) -> None:
        """Rotate counter-clockwise by angle (radians) about center (default: centroid)."""
        c = center if center is not None else self.centroid()
        for v in self.vertices:
            v.position = c.add(v.position.subtract(c).rotate(angle))
        self._invalidate_normals()

    def translate(self, offset: Vector) -> None:
        """Shift every vertex; normals stay valid."""
        for v in self.vertices:
            v._translate_unchecked(offset)

    def move_to(self, position: Vector) -> None:
        """Translate so the centroid lands on position."""
        self.translate(position.subtract(self.centroid()))

    def _invalidate_normals(self) -> None:
        for edge in self.edges:
            edge.invalidate_normal()

    # ------------------------------------------------------------------
    # Offsetting
    # ------------------------------------------------------------------

    def offset_shape(self, distance: float, miter_limit: float = 4.0) -> "Shape":
        """Return a new shape whose outline is offset by distance.

        Positive distances grow the shape, negative distances shrink it.
        Corners whose miter would exceed ``|distance| * miter_limit`` are bevelled.
        """
        from patterin.core.offset import offset_outline

        return offset_outline(self, distance, miter_limit)

    def offset(
        self,
        distance: float,
        count: int = 0,
        miter_limit: float = 4.0,
        include_original: bool = False,
    ) -> "Shape | list[Shape]":
        """Offset in place, or generate successive offset copies.

        Args:
            distance: Offset distance (positive = outward)
            count: 0 replaces this outline in place and returns self; a positive
                count returns that many copies, each offset from the previous one
            miter_limit: Miter limit for sharp corners
            include_original: With count > 0, put this shape first in the result

        Returns:
            This shape when count is 0, otherwise a list of shapes
        """
        if count > 0:
            shapes: list[Shape] = [self] if include_original else []
            current = self
            for _ in range(count):
                current = current.offset_shape(distance, miter_limit)
                shapes.append(current)
            return shapes

        result = self.offset_shape(distance, miter_limit)
        self._winding = result.winding
        self.edges = result.edges
        self.connect_edges()
        return self

    def expand(
        self, distance: float, count: int = 0, miter_limit: float = 4.0
    ) -> "Shape | list[Shape]":
        return self.offset(abs(distance), count, miter_limit)

    def inset(
        self, distance: float, count: int = 0, miter_limit: float = 4.0
    ) -> "Shape | list[Shape]":
        return self.offset(-abs(distance), count, miter_limit)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_path_data(self) -> str:
        """SVG-style path data: move-to, line-to per vertex, Z unless open."""
        verts = self.vertices
        if not verts:
            return ""

        parts = [f"M {_format_number(verts[0].x)} {_format_number(verts[0].y)}"]
        parts.extend(f"L {_format_number(v.x)} {_format_number(v.y)}" for v in verts[1:])
        if not self.open:
            parts.append("Z")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and documents."""
        return {
            "points": [[v.x, v.y] for v in self.vertices],
            "winding": self._winding.value,
            "ephemeral": self.ephemeral,
            "open": self.open,
            "group": self.group,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary.

        Raises:
            InvalidGeometryError: If fewer than three points are present
        """
        winding = Winding(data["winding"]) if data.get("winding") else None
        shape = cls.from_points(data["points"], winding)
        shape.ephemeral = bool(data.get("ephemeral", False))
        shape.open = bool(data.get("open", False))
        shape.group = data.get("group")
        shape.color = data.get("color")
        return shape

    def __repr__(self) -> str:
        return f"Shape({len(self.edges)} edges, {self._winding.value})"


def _shoelace(points: list[Vector]) -> float:
    n = len(points)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        j = (i + 1) % n
        total += points[i].x * points[j].y - points[j].x * points[i].y
    return total / 2.0


def _build_edges(points: list[Vector], winding: Winding) -> list[Edge]:
    vertices = [Vertex(p.x, p.y) for p in points]
    n = len(vertices)
    return [Edge(vertices[i], vertices[(i + 1) % n], winding) for i in range(n)]
