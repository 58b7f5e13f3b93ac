"""Domain models for patterin.

This module contains the geometric primitives of the kernel:

- Vector: Immutable 2D point/direction value
- Vertex: Mutable shape corner with a cached outward normal
- Edge: Directed edge with a cached outward normal, linked into a cycle
- Shape: One closed loop of edges with winding, queries and transforms

Vertices and edges are exclusively owned by a single Shape. Shapes never share
them, so independent shapes may be processed concurrently.
"""

from patterin.domain.edge import Edge, Winding
from patterin.domain.shape import BoundingBox, Shape, Violation, ViolationKind
from patterin.domain.vector import Vector
from patterin.domain.vertex import Vertex

__all__: list[str] = [
    # Enums
    "Winding",
    "ViolationKind",
    # Core types
    "Vector",
    "Vertex",
    "Edge",
    "Shape",
    "BoundingBox",
    "Violation",
]
