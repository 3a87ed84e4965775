"""Unit tests for the font and bitmap I/O layer.

Tests for FontReader, VertexPen, and BitmapWriter.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from PIL import Image

from glyphfield.config import ImageFormat
from glyphfield.domain import MsdfResult, QuadraticSegment, Shape, VertexKind
from glyphfield.exceptions import BitmapWriteError, GlyphNotFoundError
from glyphfield.io.converter import VertexPen, glyph_to_vertices
from glyphfield.io.reader import FontReader
from glyphfield.io.writer import BitmapWriter, result_to_image


@pytest.fixture
def checker() -> MsdfResult:
    """2x2 bitmap with distinct pixels."""
    bitmap = bytearray([255, 0, 0, 0, 255, 0, 0, 0, 255, 10, 20, 30])
    return MsdfResult(bitmap=bitmap, width=2, height=2)


class TestVertexPen:
    """Tests for VertexPen recording."""

    def test_lines_with_closing_edge(self) -> None:
        """Test a closing line is appended when the contour is open."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((10, 10))
        pen.closePath()

        kinds = [v.kind for v in pen.vertices]
        assert kinds == [VertexKind.MOVE, VertexKind.LINE, VertexKind.LINE, VertexKind.LINE]
        assert (pen.vertices[-1].x, pen.vertices[-1].y) == (0, 0)

    def test_no_closing_edge_when_already_closed(self) -> None:
        """Test no extra line when the last point is the start."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((0, 10))
        pen.lineTo((0, 0))
        pen.closePath()
        assert len(pen.vertices) == 4

    def test_quadratic(self) -> None:
        """Test a single quadratic curve."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.qCurveTo((5, 10), (10, 0))
        pen.closePath()

        quad = pen.vertices[1]
        assert quad.kind == VertexKind.QUAD
        assert (quad.x, quad.y, quad.cx, quad.cy) == (10, 0, 5, 10)

    def test_quadratic_spline_split(self) -> None:
        """Test implied on-curve points split a TrueType spline."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.qCurveTo((10, 0), (10, 10), (0, 10))
        pen.closePath()

        quads = [v for v in pen.vertices if v.kind == VertexKind.QUAD]
        assert len(quads) == 2
        assert (quads[0].x, quads[0].y) == (10, 5)
        assert (quads[1].cx, quads[1].cy) == (10, 10)

    def test_cubic(self) -> None:
        """Test a cubic curve keeps both control points."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.curveTo((0, 10), (10, 10), (10, 0))
        pen.closePath()

        cubic = pen.vertices[1]
        assert cubic.kind == VertexKind.CUBIC
        assert (cubic.cx, cubic.cy, cubic.cx1, cubic.cy1) == (0, 10, 10, 10)
        assert (cubic.x, cubic.y) == (10, 0)

    def test_open_path_is_closed(self) -> None:
        """Test endPath closes the contour too."""
        pen = VertexPen()
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((10, 10))
        pen.endPath()
        shape = Shape.from_vertices(pen.vertices)
        assert shape.validate()

    def test_glyph_not_in_glyph_set(self) -> None:
        """Test a missing glyph name."""
        with pytest.raises(GlyphNotFoundError):
            glyph_to_vertices({}, "missing")


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self) -> None:
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self) -> None:
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_format_before_load(self) -> None:
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_units_per_em_before_load(self) -> None:
        """Test accessing units_per_em before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_iter_encoded_glyphs_before_load(self) -> None:
        """Test iterating glyphs before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            list(reader.iter_encoded_glyphs())

    @patch("glyphfield.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_truetype(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test format property for TrueType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "glyf")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.format == "TrueType"

    @patch("glyphfield.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test format property for OpenType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "CFF ")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.otf"))
        reader.load()

        assert reader.format == "OpenType"

    @patch("glyphfield.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_missing_cmap(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test a font without a usable character map."""
        mock_font = MagicMock()
        mock_font.getBestCmap.return_value = None
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.glyph_name_for_char("A") is None
        assert list(reader.iter_encoded_glyphs()) == []

    @patch("glyphfield.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_close(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test closing releases the font."""
        mock_font = MagicMock()
        mock_ttfont.return_value = mock_font

        with FontReader(Path("test.ttf")) as reader:
            assert reader._font is mock_font

        mock_font.close.assert_called_once()
        assert reader._font is None

    def test_real_font_metadata(self, test_font: Path) -> None:
        """Test metadata of a generated TrueType font."""
        with FontReader(test_font) as reader:
            assert reader.format == "TrueType"
            assert reader.units_per_em == 1000
            assert reader.glyph_count == 5

    def test_character_mapping(self, test_font: Path) -> None:
        """Test character to glyph lookup."""
        with FontReader(test_font) as reader:
            assert reader.glyph_name_for_char("A") == "A"
            assert reader.glyph_name_for_char(" ") == "space"
            assert reader.glyph_name_for_char("Z") is None
            with pytest.raises(ValueError):
                reader.glyph_name_for_char("AB")

    def test_iter_encoded_glyphs(self, test_font: Path) -> None:
        """Test encoded glyphs come in codepoint order."""
        with FontReader(test_font) as reader:
            assert list(reader.iter_encoded_glyphs()) == [
                (0x20, "space"),
                (0x41, "A"),
                (0x44, "D"),
                (0x4F, "O"),
            ]

    def test_get_vertices(self, test_font: Path) -> None:
        """Test outlines decode into closed shapes."""
        with FontReader(test_font) as reader:
            triangle = Shape.from_vertices(reader.get_vertices("A"))
            ring = Shape.from_vertices(reader.get_vertices("O"))
            bowl = Shape.from_vertices(reader.get_vertices("D"))
            space = reader.get_vertices("space")

        assert triangle.edge_count == 3
        assert len(ring.contours) == 2
        assert ring.edge_count == 8
        assert bowl.edge_count == 5
        assert sum(isinstance(e, QuadraticSegment) for e in bowl.iter_edges()) == 2
        assert space == []
        for shape in (triangle, ring, bowl):
            assert shape.validate()

    def test_get_vertices_missing(self, test_font: Path) -> None:
        """Test drawing an unknown glyph name."""
        with FontReader(test_font) as reader, pytest.raises(GlyphNotFoundError):
            reader.get_vertices("nonexistent")


class TestBitmapWriter:
    """Tests for BitmapWriter class."""

    def test_path_for(self, tmp_path: Path) -> None:
        """Test file naming with and without codepoints."""
        writer = BitmapWriter(tmp_path, ImageFormat.PNG)
        assert writer.path_for("A", 0x41) == tmp_path / "u0041_A.png"
        assert writer.path_for("a.alt") == tmp_path / "a.alt.png"
        assert writer.path_for("f/i") == tmp_path / "f_i.png"

    def test_extensions(self, tmp_path: Path) -> None:
        """Test extensions per format."""
        assert BitmapWriter(tmp_path, ImageFormat.PPM).path_for("A").suffix == ".ppm"
        assert BitmapWriter(tmp_path, ImageFormat.RAW).path_for("A").suffix == ".rgb"

    def test_write_png(self, tmp_path: Path, checker: MsdfResult) -> None:
        """Test PNG output round-trips the pixels."""
        out_dir = tmp_path / "nested" / "msdf"
        path = BitmapWriter(out_dir, ImageFormat.PNG).write(checker, "A", 0x41)

        assert path.exists()
        with Image.open(path) as image:
            assert image.mode == "RGB"
            assert image.size == (2, 2)
            assert image.getpixel((1, 1)) == (10, 20, 30)

    def test_write_ppm(self, tmp_path: Path, checker: MsdfResult) -> None:
        """Test binary PPM output."""
        path = BitmapWriter(tmp_path, ImageFormat.PPM).write(checker, "A")

        data = path.read_bytes()
        assert data.startswith(b"P6")
        assert data.endswith(checker.to_bytes())

    def test_write_raw(self, tmp_path: Path, checker: MsdfResult) -> None:
        """Test raw output is the bare pixel buffer."""
        path = BitmapWriter(tmp_path, ImageFormat.RAW).write(checker, "A")
        assert path.read_bytes() == checker.to_bytes()

    def test_write_failure(self, tmp_path: Path, checker: MsdfResult) -> None:
        """Test an unwritable destination raises BitmapWriteError."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        writer = BitmapWriter(blocker, ImageFormat.PNG)
        with pytest.raises(BitmapWriteError):
            writer.write(checker, "A")

    def test_result_to_image(self, checker: MsdfResult) -> None:
        """Test conversion to a Pillow image."""
        image = result_to_image(checker)
        assert image.getpixel((0, 0)) == (255, 0, 0)
        assert image.getpixel((0, 1)) == (0, 0, 255)
