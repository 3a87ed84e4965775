"""Bitmap writer for saving distance field images.

This module provides the BitmapWriter class for saving MSDF bitmaps
as image files with a predictable naming convention.
"""

import re
from pathlib import Path

from PIL import Image

from glyphfield.config import ImageFormat
from glyphfield.domain.bitmap import MsdfResult
from glyphfield.exceptions import BitmapWriteError

_EXTENSIONS: dict[ImageFormat, str] = {
    ImageFormat.PNG: "png",
    ImageFormat.PPM: "ppm",
    ImageFormat.RAW: "rgb",
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def result_to_image(result: MsdfResult) -> Image.Image:
    """Wrap an MSDF bitmap in a Pillow RGB image.

    Args:
        result: Bitmap to convert (must not be released)

    Returns:
        New RGB image holding a copy of the pixel data

    Raises:
        BitmapReleasedError: If the bitmap was released
    """
    return Image.frombytes("RGB", (result.width, result.height), result.to_bytes())


class BitmapWriter:
    """Writes MSDF bitmaps to an output directory.

    File names are derived from the glyph name, prefixed with the codepoint
    when known so that glyphs differing only in case (``A`` and ``a``) do
    not collide on case-insensitive filesystems.

    Example:
        writer = BitmapWriter(Path("msdf"), ImageFormat.PNG)
        path = writer.write(result, "A", codepoint=0x41)
        # msdf/u0041_A.png
    """

    def __init__(self, output_dir: Path, image_format: ImageFormat = ImageFormat.PNG) -> None:
        """Initialize the bitmap writer.

        Args:
            output_dir: Directory receiving the images (created on first write)
            image_format: File format for written bitmaps
        """
        self.output_dir = output_dir
        self.image_format = image_format

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self.image_format]

    def path_for(self, glyph_name: str, codepoint: int | None = None) -> Path:
        """Get the output path for a glyph.

        Args:
            glyph_name: Glyph name
            codepoint: Unicode codepoint mapped to the glyph, if any

        Returns:
            Path inside output_dir

        Examples:
            >>> BitmapWriter(Path("out")).path_for("A", 0x41).name
            'u0041_A.png'
            >>> BitmapWriter(Path("out")).path_for("a/b").name
            'a_b.png'
        """
        stem = _UNSAFE_CHARS.sub("_", glyph_name) or "_"
        if codepoint is not None:
            stem = f"u{codepoint:04X}_{stem}"
        return self.output_dir / f"{stem}.{self.extension}"

    def write(
        self,
        result: MsdfResult,
        glyph_name: str,
        codepoint: int | None = None,
    ) -> Path:
        """Write a bitmap to disk.

        PNG and PPM are encoded with Pillow; RAW writes the bare RGB8
        rows (width * height * 3 bytes, top row first).

        Args:
            result: Bitmap to write
            glyph_name: Glyph name used for the file name
            codepoint: Unicode codepoint used as file name prefix

        Returns:
            Path of the written file

        Raises:
            BitmapWriteError: If the file cannot be written
        """
        path = self.path_for(glyph_name, codepoint)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            if self.image_format is ImageFormat.RAW:
                path.write_bytes(result.to_bytes())
            else:
                image = result_to_image(result)
                image.save(path, format=self.image_format.value.upper())
        except OSError as e:
            raise BitmapWriteError(str(path), str(e)) from e

        return path
