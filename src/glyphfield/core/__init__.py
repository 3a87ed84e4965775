"""Core algorithms for glyphfield.

This module contains the main algorithms for:
- Edge coloring (assigning channels so corners stay sharp)
- MSDF rasterization (per-channel signed distances, winding test)
- Batch baking (parallel generation of glyph bitmaps)
"""

from glyphfield.core.baker import GlyphBaker, bake_glyph
from glyphfield.core.coloring import (
    angle_between,
    color_contour,
    color_edges,
    find_corners,
    is_corner,
)
from glyphfield.core.generator import (
    EDGE_VALUE,
    calculate_winding,
    distance_to_pixel,
    generate_msdf,
    generate_msdf_for_glyph,
    pixel_to_distance,
)

__all__ = [
    "EDGE_VALUE",
    "GlyphBaker",
    "angle_between",
    "bake_glyph",
    "calculate_winding",
    "color_contour",
    "color_edges",
    "distance_to_pixel",
    "find_corners",
    "generate_msdf",
    "generate_msdf_for_glyph",
    "is_corner",
    "pixel_to_distance",
]
