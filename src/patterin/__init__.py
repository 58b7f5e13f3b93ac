"""Patterin - A 2D polygon geometry kernel.

Patterin represents closed polygonal shapes as cyclic chains of directed
edges, transforms them in place, offsets their outlines with miter/bevel
corners, and combines them with boolean union and difference.

Example:
    >>> from patterin.domain import Shape
    >>> from patterin.core import difference
    >>> a = Shape.from_points([(0, 0), (10, 0), (10, 10), (0, 10)])
    >>> b = Shape.from_points([(5, 5), (15, 5), (15, 15), (5, 15)])
    >>> len(difference([a], [b])[0].vertices)
    6
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
