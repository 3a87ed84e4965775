"""Configuration settings for Glyphfield."""

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Corner detection threshold in radians (about 172 degrees)
DEFAULT_ANGLE_THRESHOLD = 3.0


class ImageFormat(str, Enum):
    """File format for baked bitmaps."""

    PNG = "png"
    PPM = "ppm"
    RAW = "raw"


class MsdfConfig(BaseModel):
    """Parameters for rasterizing one shape into an MSDF bitmap.

    The shape-to-pixel mapping is ``pixel = (shape + translate) * scale``,
    applied per axis.
    """

    width: int = Field(
        default=48,
        ge=1,
        description="Output bitmap width in pixels",
    )
    height: int = Field(
        default=48,
        ge=1,
        description="Output bitmap height in pixels",
    )
    range: float = Field(
        default=4.0,
        gt=0.0,
        description="Distance in shape units mapped across the full 0-255 output range",
    )
    angle_threshold: float = Field(
        default=DEFAULT_ANGLE_THRESHOLD,
        ge=0.0,
        le=math.pi,
        description="Corner detection threshold in radians",
    )
    translate: tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="Offset added to shape coordinates before scaling",
    )
    scale: tuple[float, float] = Field(
        default=(1.0, 1.0),
        description="Shape-to-pixel scale factor per axis",
    )


class GlyphConfig(BaseModel):
    """Configuration for automatically fitted glyph bitmaps."""

    output_size: int = Field(
        default=48,
        ge=8,
        le=1024,
        description="Square output bitmap size in pixels",
    )
    padding: int = Field(
        default=4,
        ge=0,
        le=256,
        description="Empty border kept around the glyph, in pixels",
    )
    range: float = Field(
        default=4.0,
        gt=0.0,
        description="Distance range in output pixels",
    )
    angle_threshold: float = Field(
        default=DEFAULT_ANGLE_THRESHOLD,
        ge=0.0,
        le=math.pi,
        description="Corner detection threshold in radians",
    )
    flip_y: bool = Field(
        default=True,
        description="Flip font y-up coordinates into bitmap y-down orientation",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch baking."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = run inline)",
    )
    skip_empty: bool = Field(
        default=True,
        description="Skip glyphs without outlines (spaces and similar)",
    )
    strict_vertices: bool = Field(
        default=False,
        description="Fail on unrecognized vertex commands instead of skipping them",
    )


class OutputConfig(BaseModel):
    """Where and how baked bitmaps are written."""

    output_dir: Path = Field(
        default=Path("msdf"),
        description="Directory receiving one bitmap file per glyph",
    )
    image_format: ImageFormat = Field(
        default=ImageFormat.PNG,
        description="Bitmap file format",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphfieldSettings(BaseModel):
    """Main application settings."""

    glyph: GlyphConfig = Field(default_factory=GlyphConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphfieldSettings:
    """Get default application settings."""
    return GlyphfieldSettings()
