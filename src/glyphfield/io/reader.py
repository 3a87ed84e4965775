"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files
and extracting glyph outlines as vertex streams.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont

from glyphfield.domain.contour import Vertex
from glyphfield.io.converter import glyph_to_vertices


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    The FontReader provides a high-level interface for loading fonts,
    mapping characters to glyphs and drawing glyph outlines into Vertex
    command streams.

    Example:
        reader = FontReader(Path("font.ttf"))
        reader.load()
        for codepoint, name in reader.iter_encoded_glyphs():
            vertices = reader.get_vertices(name)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def glyph_name_for_char(self, char: str) -> str | None:
        """Look up the glyph mapped to a character.

        Args:
            char: A single character

        Returns:
            Glyph name, or None if the font does not map the character

        Raises:
            RuntimeError: If font has not been loaded yet
            ValueError: If char is not exactly one character
        """
        font = self._require_font()
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")

        cmap = font.getBestCmap() or {}
        return cmap.get(ord(char))

    def iter_encoded_glyphs(self) -> Iterator[tuple[int, str]]:
        """Iterate over (codepoint, glyph name) pairs in codepoint order.

        Only glyphs reachable from the character map are yielded.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        cmap = font.getBestCmap() or {}
        for codepoint in sorted(cmap):
            yield codepoint, cmap[codepoint]

    def get_vertices(self, name: str) -> list[Vertex]:
        """Draw a glyph into a Vertex command stream.

        Args:
            name: Name of the glyph to draw

        Returns:
            Vertex commands in font units (y-up)

        Raises:
            RuntimeError: If font has not been loaded yet
            GlyphNotFoundError: If the font has no glyph with that name
        """
        font = self._require_font()
        return glyph_to_vertices(font.getGlyphSet(), name)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
