"""Contours, shapes and the vertex command stream they are built from.

This module defines:
- VertexKind / Vertex: outline commands as produced by an outline source
- Bounds: axis-aligned box in shape space
- Contour: one closed loop of edge segments
- Shape: a set of contours (outer boundaries plus holes)
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import structlog

from glyphfield.domain.edge import (
    CubicSegment,
    EdgeSegment,
    LinearSegment,
    QuadraticSegment,
    control_points,
    end_point,
    start_point,
)
from glyphfield.domain.vector import Vec2
from glyphfield.exceptions import ContourNotClosedError, VertexCommandError

logger = structlog.get_logger(__name__)

# Maximum gap between a contour's last end point and first start point
CLOSURE_TOLERANCE = 0.001


class VertexKind(IntEnum):
    """Outline command kind.

    Values match the integer codes used by common glyph rasterizers
    (move=1, line=2, quadratic curve=3, cubic curve=4), so raw vertex
    arrays can be passed through unchanged.
    """

    MOVE = 1
    LINE = 2
    QUAD = 3
    CUBIC = 4


@dataclass(frozen=True, slots=True)
class Vertex:
    """A single outline command.

    Attributes:
        kind: Command kind (VertexKind, raw integer code, or command name)
        x: Endpoint X in outline-source units
        y: Endpoint Y in outline-source units
        cx: Control point X (QUAD, first control point for CUBIC)
        cy: Control point Y
        cx1: Second control point X (CUBIC only)
        cy1: Second control point Y (CUBIC only)
    """

    kind: VertexKind | int | str
    x: float
    y: float
    cx: float = 0.0
    cy: float = 0.0
    cx1: float = 0.0
    cy1: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with the command kind and all coordinates
        """
        kind = self.kind.value if isinstance(self.kind, VertexKind) else self.kind
        return {
            "kind": kind,
            "x": self.x,
            "y": self.y,
            "cx": self.cx,
            "cy": self.cy,
            "cx1": self.cx1,
            "cy1": self.cy1,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vertex":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            Vertex instance
        """
        return cls(
            kind=data["kind"],
            x=data["x"],
            y=data["y"],
            cx=data.get("cx", 0.0),
            cy=data.get("cy", 0.0),
            cx1=data.get("cx1", 0.0),
            cy1=data.get("cy1", 0.0),
        )


def resolve_kind(kind: object) -> VertexKind | None:
    """Map a raw command kind to VertexKind.

    Args:
        kind: VertexKind, integer code or case-insensitive command name

    Returns:
        The matching VertexKind, or None if the kind is not recognized
    """
    if isinstance(kind, VertexKind):
        return kind
    if isinstance(kind, str):
        return VertexKind.__members__.get(kind.upper())
    try:
        return VertexKind(kind)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    An empty box has inverted extents (min greater than max), which is what
    accumulating over zero points produces.
    """

    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def include(self, point: Vec2) -> "Bounds":
        return Bounds(
            min(self.min_x, point.x),
            min(self.min_y, point.y),
            max(self.max_x, point.x),
            max(self.max_y, point.y),
        )

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass
class Contour:
    """A closed loop of edge segments.

    Closure (last end point meeting the first start point) is expected from
    the outline source and checked by Shape.validate(), not enforced here.

    Attributes:
        edges: Edge segments in traversal order
    """

    edges: list[EdgeSegment] = field(default_factory=list)

    def add_edge(self, edge: EdgeSegment) -> None:
        self.edges.append(edge)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[EdgeSegment]:
        return iter(self.edges)

    def winding(self) -> int:
        """Orientation of the contour from the shoelace sum.

        Sums (x1 - x0) * (y1 + y0) over the edge chords. In a y-up frame a
        positive sum means clockwise traversal.

        Returns:
            1, -1, or 0 for an empty or zero-area contour
        """
        total = 0.0
        for edge in self.edges:
            p0 = start_point(edge)
            p1 = end_point(edge)
            total += (p1.x - p0.x) * (p1.y + p0.y)

        if total > 0:
            return 1
        if total < 0:
            return -1
        return 0

    def bounds(self) -> Bounds:
        """Box covering every endpoint and control point.

        This over-approximates curved edges; it is only used to fit and centre
        the shape, never to clip.

        Returns:
            Bounds of the contour (empty for a contour without edges)
        """
        box = Bounds()
        for edge in self.edges:
            for point in control_points(edge):
                box = box.include(point)
        return box

    def closing_gap(self) -> float:
        """Distance between the last edge's end and the first edge's start."""
        if not self.edges:
            return 0.0
        return end_point(self.edges[-1]).distance(start_point(self.edges[0]))

    def is_closed(self, tolerance: float = CLOSURE_TOLERANCE) -> bool:
        return self.closing_gap() <= tolerance


@dataclass
class Shape:
    """A set of contours: outer boundaries plus zero or more holes.

    Consistent winding and absence of self-intersection are the outline
    source's responsibility. All edges of a shape live in its contours' edge
    lists and are discarded together with the shape.

    Attributes:
        contours: Contours of the shape
    """

    contours: list[Contour] = field(default_factory=list)

    def add_contour(self) -> Contour:
        contour = Contour()
        self.contours.append(contour)
        return contour

    @property
    def edge_count(self) -> int:
        return sum(len(contour) for contour in self.contours)

    def is_empty(self) -> bool:
        """Check if the shape has no edges at all."""
        return self.edge_count == 0

    def iter_edges(self) -> Iterator[EdgeSegment]:
        for contour in self.contours:
            yield from contour.edges

    def bounds(self) -> Bounds:
        """Union of all contour bounds (empty when the shape has no edges)."""
        box = Bounds()
        for contour in self.contours:
            box = box.union(contour.bounds())
        return box

    def validate(self, tolerance: float = CLOSURE_TOLERANCE) -> bool:
        """Check that every non-empty contour is closed within tolerance.

        Args:
            tolerance: Maximum allowed closing gap in shape units

        Returns:
            True if all contours are closed, False otherwise
        """
        return all(contour.is_closed(tolerance) for contour in self.contours)

    def ensure_closed(self, tolerance: float = CLOSURE_TOLERANCE) -> None:
        """Raise if any contour is open.

        Raises:
            ContourNotClosedError: For the first contour whose gap exceeds tolerance
        """
        for index, contour in enumerate(self.contours):
            gap = contour.closing_gap()
            if gap > tolerance:
                raise ContourNotClosedError(index, gap)

    @classmethod
    def from_vertices(
        cls,
        vertices: Iterable[Vertex],
        scale: float = 1.0,
        flip_y: bool = False,
        strict: bool = False,
    ) -> "Shape":
        """Build a shape from an outline command stream.

        A MOVE command opens a new contour; every other command appends an
        edge starting at the previous end point. Edge commands that arrive
        before the first MOVE have no contour to join and are dropped.

        Args:
            vertices: Outline commands in source units
            scale: Uniform factor applied to all coordinates
            flip_y: Negate Y coordinates (outline sources are usually y-up,
                bitmaps y-down)
            strict: Raise on unrecognized command kinds instead of skipping

        Returns:
            The decoded Shape

        Raises:
            VertexCommandError: If strict and a command kind is not recognized
        """
        shape = cls()
        y_mult = -1.0 if flip_y else 1.0
        current: Contour | None = None
        prev_point = Vec2.ZERO
        skipped = 0

        for index, vertex in enumerate(vertices):
            kind = resolve_kind(vertex.kind)
            if kind is None:
                if strict:
                    raise VertexCommandError(vertex.kind, index)
                skipped += 1
                logger.warning(
                    "Skipping unrecognized vertex command",
                    kind=repr(vertex.kind),
                    index=index,
                )
                continue

            point = Vec2(vertex.x * scale, vertex.y * scale * y_mult)

            if kind is VertexKind.MOVE:
                current = shape.add_contour()
                prev_point = point
                continue

            if current is None:
                logger.debug("Dropping edge before first move", index=index)
                continue

            if kind is VertexKind.LINE:
                current.add_edge(LinearSegment(prev_point, point))
            elif kind is VertexKind.QUAD:
                control = Vec2(vertex.cx * scale, vertex.cy * scale * y_mult)
                current.add_edge(QuadraticSegment(prev_point, control, point))
            else:
                control1 = Vec2(vertex.cx * scale, vertex.cy * scale * y_mult)
                control2 = Vec2(vertex.cx1 * scale, vertex.cy1 * scale * y_mult)
                current.add_edge(CubicSegment(prev_point, control1, control2, point))
            prev_point = point

        if skipped:
            logger.warning("Vertex stream had unrecognized commands", skipped=skipped)

        return shape
