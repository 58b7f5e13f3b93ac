"""Shape corners with a lazily computed outward normal."""

from typing import TYPE_CHECKING

from patterin.domain.vector import Vector

if TYPE_CHECKING:
    from patterin.domain.edge import Edge


class Vertex:
    """A mutable corner of a shape.

    The vertex knows the edge that ends at it (``prev_edge``) and the edge that
    starts at it (``next_edge``). Its normal is the normalized sum of those two
    edge normals, cached until the position or an adjacent edge changes.

    Attributes:
        prev_edge: Edge for which this vertex is the end
        next_edge: Edge for which this vertex is the start
    """

    __slots__ = ("_x", "_y", "_normal", "prev_edge", "next_edge")

    def __init__(self, x: float, y: float) -> None:
        self._x = float(x)
        self._y = float(y)
        self._normal: Vector | None = None
        self.prev_edge: Edge | None = None
        self.next_edge: Edge | None = None

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._set_position(value, self._y)

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._set_position(self._x, value)

    @property
    def position(self) -> Vector:
        return Vector(self._x, self._y)

    @position.setter
    def position(self, value: Vector) -> None:
        self._set_position(value.x, value.y)

    def _set_position(self, x: float, y: float) -> None:
        self._x = float(x)
        self._y = float(y)
        # Moving a corner turns both adjacent edges, which in turn changes
        # the normals of the neighbouring vertices.
        for edge in (self.prev_edge, self.next_edge):
            if edge is not None:
                edge.invalidate_normal()
        self.invalidate_normal()

    def translate(self, offset: Vector) -> None:
        """Shift the vertex by offset, invalidating the affected normals."""
        self._set_position(self._x + offset.x, self._y + offset.y)

    def _translate_unchecked(self, offset: Vector) -> None:
        # Only valid when every vertex of the shape moves by the same offset
        self._x += offset.x
        self._y += offset.y

    @property
    def normal(self) -> Vector:
        """Outward normal, recomputed on first read after invalidation."""
        if self._normal is None:
            self._normal = self.compute_normal()
        return self._normal

    def invalidate_normal(self) -> None:
        self._normal = None

    def compute_normal(self) -> Vector:
        """Average the adjacent edge normals.

        Returns:
            Unit normal pointing away from the shape interior. When the two edge
            normals cancel out, the previous edge's normal is used. An isolated
            vertex has a zero normal.
        """
        if self.prev_edge is not None and self.next_edge is not None:
            prev_normal = self.prev_edge.normal
            total = prev_normal.add(self.next_edge.normal)
            if total.length() < 1e-10:
                return prev_normal
            return total.normalize()

        if self.prev_edge is not None:
            return self.prev_edge.normal
        if self.next_edge is not None:
            return self.next_edge.normal

        return Vector.zero()

    def move_along_normal(self, distance: float) -> None:
        """Displace the vertex along its own normal."""
        n = self.normal
        self._set_position(self._x + n.x * distance, self._y + n.y * distance)

    def clone(self) -> "Vertex":
        """Copy the position only; edge references are not copied."""
        return Vertex(self._x, self._y)

    def equals(self, other: "Vertex", epsilon: float = 1e-10) -> bool:
        return self.position.equals(other.position, epsilon)

    def __repr__(self) -> str:
        return f"Vertex({self._x}, {self._y})"

    @classmethod
    def from_vector(cls, v: Vector) -> "Vertex":
        return cls(v.x, v.y)
