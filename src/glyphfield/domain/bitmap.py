"""MSDF bitmap result.

MsdfResult owns the RGB8 buffer produced by the rasterizer. The buffer has a
single owner (whoever received the result) and is dropped with an explicit
release() call or by leaving a ``with`` block.
"""

from dataclasses import dataclass, field
from typing import Any

from glyphfield.exceptions import BitmapAllocationError, BitmapReleasedError
from glyphfield.utils.geometry import median

CHANNELS = 3


def allocate_bitmap(width: int, height: int, fill: int = 0) -> bytearray:
    """Allocate an RGB8 buffer for a width x height image.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        fill: Byte value to initialize every channel with

    Returns:
        Buffer of width * height * 3 bytes

    Raises:
        BitmapAllocationError: If the buffer cannot be allocated
    """
    try:
        return bytearray([fill]) * (width * height * CHANNELS)
    except MemoryError as e:
        raise BitmapAllocationError(width, height) from e


@dataclass
class MsdfResult:
    """Row-major RGB8 distance field bitmap.

    Attributes:
        bitmap: Pixel data, 3 bytes per pixel, rows top to bottom
        width: Bitmap width in pixels
        height: Bitmap height in pixels
    """

    bitmap: bytearray
    width: int
    height: int
    _released: bool = field(default=False, repr=False)

    @property
    def released(self) -> bool:
        return self._released

    def _buffer(self) -> bytearray:
        if self._released:
            raise BitmapReleasedError()
        return self.bitmap

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Get the (r, g, b) values of a pixel.

        Args:
            x: Column, 0 at the left
            y: Row, 0 at the top

        Returns:
            Tuple of channel values in 0-255

        Raises:
            IndexError: If (x, y) is outside the bitmap
            BitmapReleasedError: If the bitmap was released
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} bitmap")
        buffer = self._buffer()
        idx = (y * self.width + x) * CHANNELS
        return (buffer[idx], buffer[idx + 1], buffer[idx + 2])

    def median_at(self, x: int, y: int) -> int:
        """Median of the three channels at a pixel.

        This is the value a consumer thresholds at 127 to reconstruct the
        outline.
        """
        return int(median(*self.get_pixel(x, y)))

    def to_bytes(self) -> bytes:
        """Copy of the pixel data."""
        return bytes(self._buffer())

    def release(self) -> None:
        """Drop the pixel buffer. Safe to call more than once."""
        self.bitmap = bytearray()
        self._released = True

    def __enter__(self) -> "MsdfResult":
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        self.release()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with raw pixel bytes and dimensions
        """
        return {"bitmap": self.to_bytes(), "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MsdfResult":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            MsdfResult owning a fresh copy of the pixel data
        """
        return cls(bitmap=bytearray(data["bitmap"]), width=data["width"], height=data["height"])
