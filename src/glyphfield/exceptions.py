"""Exception hierarchy for Glyphfield."""


class GlyphfieldError(Exception):
    """Base exception for all Glyphfield errors."""

    pass


class ShapeError(GlyphfieldError):
    """Errors related to outline input or shape construction."""

    pass


class VertexCommandError(ShapeError):
    """Unrecognized command in a vertex stream."""

    def __init__(self, kind: object, index: int) -> None:
        self.kind = kind
        self.index = index
        super().__init__(f"Unrecognized vertex command {kind!r} at index {index}")


class ContourNotClosedError(ShapeError):
    """A contour does not end where it starts."""

    def __init__(self, contour_index: int, gap: float) -> None:
        self.contour_index = contour_index
        self.gap = gap
        super().__init__(
            f"Contour {contour_index} is not closed (gap of {gap:.6g} units)"
        )


class ConfigurationError(GlyphfieldError):
    """Invalid generation parameters."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class BitmapError(GlyphfieldError):
    """Errors related to MSDF bitmap buffers."""

    pass


class BitmapAllocationError(BitmapError, MemoryError):
    """The output bitmap could not be allocated."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Out of memory allocating {width}x{height} RGB bitmap")


class BitmapReleasedError(BitmapError):
    """Bitmap accessed after it was released."""

    def __init__(self) -> None:
        super().__init__("Bitmap has already been released")


class FontError(GlyphfieldError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class OutputError(GlyphfieldError):
    """Errors related to writing baked bitmaps."""

    pass


class BitmapWriteError(OutputError):
    """Error writing a bitmap file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write bitmap '{path}': {reason}")

