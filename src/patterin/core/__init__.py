"""Core algorithms for patterin.

This module contains the core algorithms for:

- Geometry helpers (signed area, segment and line intersection, turn angle)
- Outline offsetting with miter/bevel corners
- Boolean set operations (shatter, filter, stitch)
- Batch processing of shape documents

The kernel services are:
- Stateless (safe for use in worker processes)
- Pure (input shapes are never modified)

Key functions:
- signed_area: Calculate polygon area using shoelace formula
- segment_intersection: Crossing of two segments with parameters
- line_intersection: Crossing of two infinite lines
- offset_outline: Offset a shape outline
- union / difference: Boolean combinations with default tolerances

Key classes:
- BooleanOps: Shatter/filter/stitch pipeline
- ShapeProcessor: Runs operations over shape documents
"""

from patterin.core.boolean import (
    BooleanOps,
    PointLocation,
    StitchState,
    SubEdge,
    difference,
    union,
)
from patterin.core.geometry import (
    distance_to_segment,
    line_intersection,
    point_in_polygon,
    segment_intersection,
    signed_area,
    turn_angle,
)
from patterin.core.offset import offset_outline
from patterin.core.processor import Operation, ShapeProcessor, process_offset

__all__ = [
    # Boolean classes
    "BooleanOps",
    # Processor classes
    "Operation",
    "PointLocation",
    "ShapeProcessor",
    "StitchState",
    "SubEdge",
    "difference",
    # Geometry functions
    "distance_to_segment",
    "line_intersection",
    "offset_outline",
    "point_in_polygon",
    "process_offset",
    "segment_intersection",
    "signed_area",
    "turn_angle",
    "union",
]
