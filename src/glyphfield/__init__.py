"""Glyphfield - Bake multi-channel signed distance fields from vector outlines.

Glyphfield converts closed outlines made of line, quadratic and cubic
segments into MSDF bitmaps: RGB images whose per-pixel channel median
reconstructs the signed distance to the outline while keeping corners sharp.
Text renderers sample these bitmaps to draw crisp glyphs at any scale.

Example:
    $ glyphfield Roboto-Regular.ttf --chars "ABC" --size 64

This will write msdf/u0041_A.png, msdf/u0042_B.png and msdf/u0043_C.png.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
