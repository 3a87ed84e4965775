"""Converters between fonttools outlines and vertex streams.

This module turns fonttools drawing calls into the flat Vertex command
stream consumed by Shape.from_vertices.
"""

from typing import Any

from fontTools.pens.basePen import BasePen

from glyphfield.domain.contour import Vertex, VertexKind
from glyphfield.exceptions import GlyphNotFoundError


class VertexPen(BasePen):
    """Pen that records an outline as Vertex commands.

    BasePen splits TrueType quadratic splines with several off-curve points
    into single quadratic segments (inserting the implied on-curve points),
    and decomposes components when a glyph set is given, so only the
    one-segment callbacks need handling here.

    Each contour is closed explicitly: when the last point does not coincide
    with the contour start a closing LINE is appended.

    Example:
        pen = VertexPen(glyph_set)
        glyph_set["A"].draw(pen)
        shape = Shape.from_vertices(pen.vertices)
    """

    def __init__(self, glyphSet: Any = None) -> None:  # noqa: N803
        super().__init__(glyphSet)
        self.vertices: list[Vertex] = []
        self._start: tuple[float, float] | None = None
        self._last: tuple[float, float] | None = None

    def _moveTo(self, pt: tuple[float, float]) -> None:  # noqa: N802
        self.vertices.append(Vertex(VertexKind.MOVE, pt[0], pt[1]))
        self._start = self._last = pt

    def _lineTo(self, pt: tuple[float, float]) -> None:  # noqa: N802
        self.vertices.append(Vertex(VertexKind.LINE, pt[0], pt[1]))
        self._last = pt

    def _qCurveToOne(  # noqa: N802
        self, pt1: tuple[float, float], pt2: tuple[float, float]
    ) -> None:
        self.vertices.append(
            Vertex(VertexKind.QUAD, pt2[0], pt2[1], cx=pt1[0], cy=pt1[1])
        )
        self._last = pt2

    def _curveToOne(  # noqa: N802
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.vertices.append(
            Vertex(
                VertexKind.CUBIC,
                pt3[0],
                pt3[1],
                cx=pt1[0],
                cy=pt1[1],
                cx1=pt2[0],
                cy1=pt2[1],
            )
        )
        self._last = pt3

    def _closePath(self) -> None:  # noqa: N802
        if self._start is not None and self._last is not None and self._last != self._start:
            self.vertices.append(Vertex(VertexKind.LINE, self._start[0], self._start[1]))
        self._start = self._last = None

    def _endPath(self) -> None:  # noqa: N802
        # Open contours cannot bound an area; close them like closed ones
        self._closePath()


def glyph_to_vertices(glyph_set: Any, name: str) -> list[Vertex]:
    """Draw a glyph from a fonttools glyph set into Vertex commands.

    Composite glyphs are decomposed through the glyph set.

    Args:
        glyph_set: fonttools GlyphSet (from TTFont.getGlyphSet())
        name: Glyph name

    Returns:
        Vertex command stream in font units (y-up)

    Raises:
        GlyphNotFoundError: If the glyph set has no glyph with that name
    """
    if name not in glyph_set:
        raise GlyphNotFoundError(name)

    pen = VertexPen(glyph_set)
    glyph_set[name].draw(pen)
    return pen.vertices
