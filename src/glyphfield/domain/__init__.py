"""Domain models for glyphfield.

This module contains the core domain models representing outlines and the
distance field bitmaps generated from them. Models are designed to be:

- Immutable where possible (frozen dataclasses for points and commands)
- Serializable for inter-process communication (parallel baking)
- Independent of fonttools implementation details

Key classes:
- Vec2: A 2D vector in shape space
- SignedDistance: Distance to an edge with an orthogonality tie-breaker
- EdgeColor: Channel mask of an edge
- LinearSegment / QuadraticSegment / CubicSegment: The edge variants
- Vertex: One outline command of a vertex stream
- Contour: A closed loop of edges
- Shape: A set of contours
- MsdfResult: Owned RGB8 bitmap
"""

from glyphfield.domain.bitmap import MsdfResult
from glyphfield.domain.contour import Bounds, Contour, Shape, Vertex, VertexKind
from glyphfield.domain.edge import (
    CubicSegment,
    EdgeColor,
    EdgeSegment,
    LinearSegment,
    QuadraticSegment,
)
from glyphfield.domain.vector import SignedDistance, Vec2

__all__: list[str] = [
    # Enums
    "EdgeColor",
    "VertexKind",
    # Geometry
    "Vec2",
    "SignedDistance",
    "Bounds",
    # Edges
    "EdgeSegment",
    "LinearSegment",
    "QuadraticSegment",
    "CubicSegment",
    # Outline structure
    "Vertex",
    "Contour",
    "Shape",
    # Output
    "MsdfResult",
]
