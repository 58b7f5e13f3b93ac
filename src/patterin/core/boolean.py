"""Boolean set operations over shapes (union, difference).

The pipeline has three phases:

1. Shatter: split every edge wherever it crosses an edge of a different
   shape, so each piece lies wholly inside, outside, or on another shape.
2. Filter: keep or drop each piece by testing its midpoint against the other
   shapes. Coincident boundaries are resolved by input order so exactly one
   copy of a duplicated boundary survives. In a difference, an edge shared by
   two subjects stays only where a clip has removed the area across it.
3. Stitch: chain the kept, directed pieces end-to-start into closed loops,
   taking the most-left turn where several pieces leave the same point.

Inputs are cloned and oriented counter-clockwise first; the caller's shapes
are never modified. Empty results are valid and are returned as empty lists.
Holes come back as separate clockwise shapes.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from patterin.config import GeometryConfig
from patterin.core.geometry import (
    distance_to_segment,
    segment_intersection,
    signed_area,
    turn_angle,
)
from patterin.domain import Shape, Vector, Winding

logger = logging.getLogger(__name__)


class PointLocation(Enum):
    """Where a directed piece's midpoint sits relative to a shape.

    BOUNDARY_SAME means the piece runs along a shape edge in the same
    direction (both interiors on the same side); BOUNDARY_OPPOSITE means the
    shapes touch from opposite sides.
    """

    OUTSIDE = auto()
    INSIDE = auto()
    BOUNDARY_SAME = auto()
    BOUNDARY_OPPOSITE = auto()


class StitchState(Enum):
    """States of a single stitch walk."""

    STARTED = auto()
    WALKING = auto()
    CLOSED = auto()
    DEAD_END = auto()


@dataclass(frozen=True, slots=True)
class SubEdge:
    """A directed piece of an input edge produced by shattering.

    Attributes:
        start: Start point
        end: End point
        source: Index of the input shape the piece came from
    """

    start: Vector
    end: Vector
    source: int

    def midpoint(self) -> Vector:
        return self.start.lerp(self.end, 0.5)

    def direction(self) -> Vector:
        return self.end.subtract(self.start)

    def reversed(self) -> "SubEdge":
        return SubEdge(self.end, self.start, self.source)


class BooleanOps:
    """Shatter, filter and stitch shapes into boolean combinations.

    Holds only its tolerance settings; every call is a pure function of the
    shapes passed in.

    Example:
        ops = BooleanOps()
        merged = ops.union([square, shifted_square])
        l_shape = ops.difference([square], [shifted_square])
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        self.config = config or GeometryConfig()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def union(self, shapes: Sequence[Shape]) -> list[Shape]:
        """Merge shapes into the outlines of their combined area.

        Args:
            shapes: Shapes to merge (any winding)

        Returns:
            Resulting loops; disjoint inputs stay separate
        """
        if not shapes:
            return []
        if len(shapes) == 1:
            return [shapes[0].clone()]

        working = [self._prepare(s) for s in shapes]
        pieces = self.shatter(working)
        kept = self.filter_union(pieces, working)
        result = self.stitch(kept, working)

        logger.debug(
            "Union of %d shapes: %d pieces, %d kept, %d loops",
            len(shapes), len(pieces), len(kept), len(result),
        )
        return result

    def difference(
        self, subjects: Sequence[Shape], clips: Sequence[Shape]
    ) -> list[Shape]:
        """Subtract the clip shapes from the subject shapes.

        Overlapping subjects are merged. Clips strictly inside a subject
        produce clockwise hole loops.

        Args:
            subjects: Shapes to cut from
            clips: Shapes to remove

        Returns:
            Remaining loops; an empty list when everything is removed
        """
        if not subjects:
            return []
        if not clips:
            return [s.clone() for s in subjects]

        working = [self._prepare(s) for s in [*subjects, *clips]]
        pieces = self.shatter(working)
        kept = self.filter_difference(pieces, working, len(subjects))
        result = self.stitch(kept, working)

        logger.debug(
            "Difference of %d subjects and %d clips: %d pieces, %d kept, %d loops",
            len(subjects), len(clips), len(pieces), len(kept), len(result),
        )
        return result

    # ------------------------------------------------------------------
    # Shatter
    # ------------------------------------------------------------------

    def shatter(self, shapes: Sequence[Shape]) -> list[SubEdge]:
        """Split every edge at its crossings with edges of other shapes.

        Pairwise and therefore quadratic in the total edge count.

        Args:
            shapes: Working shapes; SubEdge.source indexes into this sequence

        Returns:
            Pieces in input edge order, each tagged with its source shape
        """
        edges = [
            SubEdge(edge.start.position, edge.end.position, index)
            for index, shape in enumerate(shapes)
            for edge in shape.edges
        ]

        t_eps = self.config.split_parameter_epsilon
        splits: dict[int, list[tuple[float, Vector]]] = defaultdict(list)

        for i, a in enumerate(edges):
            for j in range(i + 1, len(edges)):
                b = edges[j]
                if a.source == b.source:
                    continue

                hit = segment_intersection(
                    a.start, a.end, b.start, b.end, self.config.shatter_epsilon
                )
                if hit is None:
                    continue

                point, t1, t2 = hit
                if t_eps < t1 < 1 - t_eps:
                    splits[i].append((t1, point))
                if t_eps < t2 < 1 - t_eps:
                    splits[j].append((t2, point))

        min_length = self.config.min_sub_edge_length
        pieces: list[SubEdge] = []

        for i, edge in enumerate(edges):
            if i not in splits:
                pieces.append(edge)
                continue

            current = edge.start
            for _, point in sorted(splits[i], key=lambda s: s[0]):
                if current.distance_to(point) > min_length:
                    pieces.append(SubEdge(current, point, edge.source))
                current = point

            if current.distance_to(edge.end) > min_length:
                pieces.append(SubEdge(current, edge.end, edge.source))

        return pieces

    # ------------------------------------------------------------------
    # Filter
    # ------------------------------------------------------------------

    def locate(self, shape: Shape, point: Vector, direction: Vector) -> PointLocation:
        """Classify a directed piece's midpoint against a shape.

        Boundary contact is checked first, since ray casting is unreliable for
        points lying exactly on an edge.
        """
        unit = direction.normalize()
        for edge in shape.edges:
            distance = distance_to_segment(point, edge.start.position, edge.end.position)
            if distance >= self.config.boundary_epsilon:
                continue
            edge_dir = edge.direction()
            if abs(edge_dir.cross(unit)) > self.config.coincidence_tolerance:
                # Touches the edge only at a crossing; not a shared boundary
                continue
            if edge_dir.dot(unit) > 0:
                return PointLocation.BOUNDARY_SAME
            return PointLocation.BOUNDARY_OPPOSITE

        if shape.contains_point(point, self.config.containment_epsilon):
            return PointLocation.INSIDE
        return PointLocation.OUTSIDE

    def filter_union(
        self, pieces: Iterable[SubEdge], shapes: Sequence[Shape]
    ) -> list[SubEdge]:
        """Keep pieces not covered by any other shape."""
        peers = range(len(shapes))
        return [p for p in pieces if not self._covered_by_peers(p, shapes, peers)]

    def filter_difference(
        self, pieces: Iterable[SubEdge], shapes: Sequence[Shape], subject_count: int
    ) -> list[SubEdge]:
        """Keep subject pieces outside every clip and clip pieces inside a subject.

        Args:
            pieces: Shattered pieces
            shapes: Working shapes, subjects first then clips
            subject_count: Number of leading shapes that are subjects

        Returns:
            Kept pieces; clip pieces are reversed so they bound holes
        """
        subject_ids = range(subject_count)
        clip_ids = range(subject_count, len(shapes))
        kept: list[SubEdge] = []

        def far_side_kept(p: SubEdge) -> bool:
            # Subjects touching back to back: the shared edge is interior only
            # while the neighbour's side of it survives the clips
            far = self._far_side_point(p)
            return self._in_difference(far, shapes, subject_ids, clip_ids)

        for piece in pieces:
            mid = piece.midpoint()
            direction = piece.direction()

            if piece.source < subject_count:
                removed = any(
                    self.locate(shapes[c], mid, direction)
                    in (PointLocation.INSIDE, PointLocation.BOUNDARY_SAME)
                    for c in clip_ids
                )
                if removed or self._covered_by_peers(
                    piece, shapes, subject_ids, far_side_kept
                ):
                    continue
                kept.append(piece)
            else:
                inside_subject = any(
                    self.locate(shapes[s], mid, direction) is PointLocation.INSIDE
                    for s in subject_ids
                )
                if not inside_subject or self._covered_by_peers(piece, shapes, clip_ids):
                    continue
                kept.append(piece.reversed())

        return kept

    def _covered_by_peers(
        self,
        piece: SubEdge,
        shapes: Sequence[Shape],
        peers: Iterable[int],
        far_side_kept: Callable[[SubEdge], bool] | None = None,
    ) -> bool:
        """Test whether another shape makes this piece interior or duplicated.

        Args:
            piece: Piece to test
            shapes: Working shapes
            peers: Indexes of the shapes to test against
            far_side_kept: Decides a piece running against a peer's boundary.
                When given and it returns False, the area across the shared
                edge is not part of the result, so the piece stays a boundary.

        Returns:
            True if the piece should be dropped
        """
        mid = piece.midpoint()
        direction = piece.direction()

        for index in peers:
            if index == piece.source:
                continue

            location = self.locate(shapes[index], mid, direction)
            if location is PointLocation.INSIDE:
                return True
            if location is PointLocation.BOUNDARY_OPPOSITE:
                if far_side_kept is None or far_side_kept(piece):
                    return True
                continue
            if location is PointLocation.BOUNDARY_SAME and index < piece.source:
                # Duplicated boundary: the lower input index keeps its copy
                return True

        return False

    def _far_side_point(self, piece: SubEdge) -> Vector:
        """Sample point just right of a piece, away from its own interior."""
        normal = piece.direction().normalize().perpendicular_cw()
        return piece.midpoint().add(normal.multiply(self.config.side_sample_distance))

    def _in_difference(
        self,
        point: Vector,
        shapes: Sequence[Shape],
        subject_ids: Iterable[int],
        clip_ids: Iterable[int],
    ) -> bool:
        eps = self.config.containment_epsilon
        return any(shapes[s].contains_point(point, eps) for s in subject_ids) and not any(
            shapes[c].contains_point(point, eps) for c in clip_ids
        )

    # ------------------------------------------------------------------
    # Stitch
    # ------------------------------------------------------------------

    def stitch(self, pieces: Sequence[SubEdge], shapes: Sequence[Shape]) -> list[Shape]:
        """Chain directed pieces end-to-start into closed loops.

        Open chains are dropped. Each loop's winding tag is taken from its
        realized signed area, and its group/color tags from the shape that
        contributed its first piece.

        Args:
            pieces: Kept pieces
            shapes: Working shapes, used for tag inheritance

        Returns:
            One shape per closed loop
        """
        if not pieces:
            return []

        start_map: dict[tuple[float, float], list[int]] = defaultdict(list)
        for i, piece in enumerate(pieces):
            start_map[self._key(piece.start)].append(i)

        unused = dict.fromkeys(range(len(pieces)))
        max_steps = len(pieces) * 2
        result: list[Shape] = []

        while unused:
            first_index = next(iter(unused))
            del unused[first_index]
            first = pieces[first_index]

            chain = [first.start]
            current = first
            state = StitchState.STARTED

            for _ in range(max_steps):
                state = StitchState.WALKING
                candidates = [i for i in start_map.get(self._key(current.end), ()) if i in unused]
                if not candidates:
                    state = StitchState.DEAD_END
                    break

                next_index = candidates[0]
                if len(candidates) > 1:
                    incoming = current.direction()
                    next_index = max(
                        candidates,
                        key=lambda i: turn_angle(incoming, pieces[i].direction()),
                    )

                del unused[next_index]
                current = pieces[next_index]
                chain.append(current.start)

                if current.end.distance_to(chain[0]) < self.config.closure_tolerance:
                    state = StitchState.CLOSED
                    break

            if state is not StitchState.CLOSED:
                logger.debug(
                    "Dropping open chain of %d points starting at (%.4f, %.4f)",
                    len(chain), first.start.x, first.start.y,
                )
                continue

            shape = self._build_loop(chain, shapes[first.source])
            if shape is not None:
                result.append(shape)

        return result

    def _build_loop(self, chain: list[Vector], origin: Shape) -> Shape | None:
        if len(chain) < 3:
            return None

        area = signed_area(chain)
        if abs(area) < self.config.closure_tolerance ** 2:
            logger.debug("Dropping zero-area loop of %d points", len(chain))
            return None

        shape = Shape.from_points(chain, Winding.CCW if area > 0 else Winding.CW)
        shape.group = origin.group
        shape.color = origin.color
        return shape

    def _key(self, point: Vector) -> tuple[float, float]:
        precision = self.config.stitch_key_precision
        return (round(point.x, precision) + 0.0, round(point.y, precision) + 0.0)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _prepare(shape: Shape) -> Shape:
        """Independent CCW copy of shape with its tags."""
        points = [v.position for v in shape.vertices]
        if signed_area(points) < 0:
            points.reverse()

        working = Shape.from_points(points, Winding.CCW)
        working.group = shape.group
        working.color = shape.color
        return working


def union(shapes: Sequence[Shape], config: GeometryConfig | None = None) -> list[Shape]:
    """Union of shapes with default tolerances."""
    return BooleanOps(config).union(shapes)


def difference(
    subjects: Sequence[Shape],
    clips: Sequence[Shape],
    config: GeometryConfig | None = None,
) -> list[Shape]:
    """Subjects minus clips with default tolerances."""
    return BooleanOps(config).difference(subjects, clips)
