"""Shared fixtures: small fonts built on the fly with fontTools."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

TEST_UPM = 1000


def _draw_triangle(pen: TTGlyphPen) -> None:
    pen.moveTo((100, 0))
    pen.lineTo((300, 700))
    pen.lineTo((500, 0))
    pen.closePath()


def _draw_ring(pen: TTGlyphPen) -> None:
    # Outer clockwise, inner counter-clockwise (TrueType convention)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    pen.moveTo((200, 100))
    pen.lineTo((400, 100))
    pen.lineTo((400, 600))
    pen.lineTo((200, 600))
    pen.closePath()


def _draw_bowl(pen: TTGlyphPen) -> None:
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((300, 700))
    pen.qCurveTo((600, 700), (600, 350))
    pen.qCurveTo((600, 0), (300, 0))
    pen.closePath()


GLYPH_DRAWERS = {
    "A": _draw_triangle,
    "O": _draw_ring,
    "D": _draw_bowl,
}


def build_test_font(path: Path) -> Path:
    """Write a TrueType font with glyphs A (triangle), O (ring), D (curved) and space.

    Args:
        path: Destination .ttf path

    Returns:
        The path written
    """
    glyph_order = [".notdef", "space", "A", "D", "O"]
    cmap = {ord(" "): "space", ord("A"): "A", ord("D"): "D", ord("O"): "O"}

    fb = FontBuilder(TEST_UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)

    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        drawer = GLYPH_DRAWERS.get(name)
        if drawer is not None:
            drawer(pen)
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Glyphfield Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def test_font(tmp_path: Path) -> Path:
    """Path to a freshly built test font."""
    return build_test_font(tmp_path / "GlyphfieldTest.ttf")
