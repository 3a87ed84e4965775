"""Font and bitmap I/O layer for glyphfield.

This module handles reading font files using fonttools and writing
distance field bitmaps using Pillow. It provides a clean abstraction
layer between those libraries and the domain models.

Key responsibilities:
- Load TTF/OTF fonts
- Convert fonttools outlines to vertex streams
- Map characters to glyphs
- Write bitmaps as PNG, PPM or raw RGB

Key classes:
- FontReader: Load fonts and extract glyph outlines
- VertexPen: fonttools pen recording Vertex commands
- BitmapWriter: Save MSDF bitmaps
"""

from glyphfield.io.converter import VertexPen, glyph_to_vertices
from glyphfield.io.reader import FontReader
from glyphfield.io.writer import BitmapWriter, result_to_image

__all__ = [
    "BitmapWriter",
    "FontReader",
    "VertexPen",
    "glyph_to_vertices",
    "result_to_image",
]
