"""Configuration management for glyphfield.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MsdfConfig: Rasterization parameters for a single bitmap
- GlyphConfig: Fitted glyph bitmap settings
- ProcessingConfig: Batch baking settings
- OutputConfig: Bitmap file output settings
- LoggingConfig: Logging settings
- GlyphfieldSettings: Main application settings
"""

from glyphfield.config.settings import (
    DEFAULT_ANGLE_THRESHOLD,
    GlyphConfig,
    GlyphfieldSettings,
    ImageFormat,
    LoggingConfig,
    MsdfConfig,
    OutputConfig,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_ANGLE_THRESHOLD",
    "GlyphConfig",
    "GlyphfieldSettings",
    "ImageFormat",
    "LoggingConfig",
    "MsdfConfig",
    "OutputConfig",
    "ProcessingConfig",
    "get_default_settings",
]
