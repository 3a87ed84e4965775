"""Multi-channel signed distance field rasterization.

For every output pixel the generator finds, per color channel, the nearest
edge whose color includes that channel, decides inside/outside with a
winding-number test, and encodes the signed distance into one byte:

    pixel = clamp(0.5 - distance / (2 * range), 0, 1) * 255

so the outline sits at 127, ``-range`` (deep inside) at 255 and ``+range``
(far outside) at 0. The median of the three channels reconstructs the
distance to the outline with sharp corners intact.

Generation is O(pixels x edges) and meant to run once, at atlas bake time.
"""

import math
from dataclasses import dataclass, field

import structlog

from glyphfield.config import DEFAULT_ANGLE_THRESHOLD, MsdfConfig
from glyphfield.core.coloring import color_edges
from glyphfield.domain import MsdfResult, Shape, SignedDistance, Vec2
from glyphfield.domain.bitmap import CHANNELS, allocate_bitmap
from glyphfield.domain.edge import point_at, signed_distance
from glyphfield.exceptions import ConfigurationError
from glyphfield.utils.geometry import clamp

logger = structlog.get_logger(__name__)

# Value of a pixel exactly on the outline
EDGE_VALUE = 127

# Polyline samples per edge for the winding test
WINDING_SAMPLES = 8


@dataclass
class ChannelDistances:
    """Closest edge distance seen so far for each channel."""

    r: SignedDistance = field(default=SignedDistance.INFINITE)
    g: SignedDistance = field(default=SignedDistance.INFINITE)
    b: SignedDistance = field(default=SignedDistance.INFINITE)


def distance_to_pixel(distance: float, range_: float) -> int:
    """Encode a signed distance into a channel byte.

    Args:
        distance: Signed distance (negative inside, positive outside)
        range_: Distance mapped across the full output range

    Returns:
        Channel value in 0-255 (truncated, so 0 maps to 127)

    Examples:
        >>> distance_to_pixel(0.0, 4.0)
        127
        >>> distance_to_pixel(-2.0, 4.0)
        191
    """
    normalized = clamp(0.5 - distance / (2.0 * range_), 0.0, 1.0)
    return int(normalized * 255.0)


def pixel_to_distance(value: int, range_: float) -> float:
    """Decode a channel byte back into an approximate signed distance.

    Inverse of distance_to_pixel for distances within ``[-range, range]``,
    accurate to one quantization step (``2 * range / 255``).

    Args:
        value: Channel value in 0-255
        range_: Distance range used when encoding

    Returns:
        Signed distance in the same units as range_
    """
    return (0.5 - value / 255.0) * 2.0 * range_


def calculate_winding(point: Vec2, shape: Shape) -> int:
    """Winding number of the shape around a point.

    Each edge is approximated by a polyline of WINDING_SAMPLES segments.
    Every polyline segment crossing the horizontal ray to the right of the
    point adds +1 when it goes up and -1 when it goes down.

    Args:
        point: Test point in shape space
        shape: Shape to test against

    Returns:
        Signed crossing count; nonzero means inside
    """
    total = 0
    for contour in shape.contours:
        for edge in contour.edges:
            prev = point_at(edge, 0.0)
            for i in range(1, WINDING_SAMPLES + 1):
                cur = point_at(edge, i / WINDING_SAMPLES)
                if (prev.y <= point.y < cur.y) or (cur.y <= point.y < prev.y):
                    t = (point.y - prev.y) / (cur.y - prev.y)
                    x_intersect = prev.x + t * (cur.x - prev.x)
                    if point.x < x_intersect:
                        total += 1 if cur.y > prev.y else -1
                prev = cur
    return total


def _channel_distances(point: Vec2, shape: Shape) -> ChannelDistances:
    dists = ChannelDistances()
    for contour in shape.contours:
        for edge in contour.edges:
            dist = signed_distance(edge, point)
            color = edge.color
            if color.has_red() and dist.is_closer(dists.r):
                dists.r = dist
            if color.has_green() and dist.is_closer(dists.g):
                dists.g = dist
            if color.has_blue() and dist.is_closer(dists.b):
                dists.b = dist
    return dists


def generate_msdf(shape: Shape, config: MsdfConfig | None = None) -> MsdfResult:
    """Rasterize a shape into an MSDF bitmap.

    Edges are (re)colored in place first. Pixel centres are mapped to shape
    space through the inverse of ``pixel = (shape + translate) * scale``.

    Args:
        shape: Shape to rasterize; edge colors are overwritten
        config: Output size, range, corner threshold and transform

    Returns:
        MsdfResult owning a width x height RGB8 buffer

    Raises:
        ConfigurationError: If a scale component is zero
        BitmapAllocationError: If the output buffer cannot be allocated
    """
    if config is None:
        config = MsdfConfig()

    scale_x, scale_y = config.scale
    translate_x, translate_y = config.translate
    if scale_x == 0 or scale_y == 0:
        raise ConfigurationError("scale must be nonzero on both axes")

    color_edges(shape, config.angle_threshold)

    width = config.width
    height = config.height
    range_ = config.range
    bitmap = allocate_bitmap(width, height)

    for y in range(height):
        py = (y + 0.5) / scale_y - translate_y
        for x in range(width):
            point = Vec2((x + 0.5) / scale_x - translate_x, py)

            dists = _channel_distances(point, shape)
            inside = calculate_winding(point, shape) != 0
            sign = -1.0 if inside else 1.0

            idx = (y * width + x) * CHANNELS
            bitmap[idx] = distance_to_pixel(sign * abs(dists.r.distance), range_)
            bitmap[idx + 1] = distance_to_pixel(sign * abs(dists.g.distance), range_)
            bitmap[idx + 2] = distance_to_pixel(sign * abs(dists.b.distance), range_)

    logger.debug(
        "MSDF generated",
        width=width,
        height=height,
        edges=shape.edge_count,
        range=range_,
    )

    return MsdfResult(bitmap=bitmap, width=width, height=height)


def generate_msdf_for_glyph(
    shape: Shape,
    output_size: int = 48,
    padding: int = 4,
    range_: float = 4.0,
    angle_threshold: float = DEFAULT_ANGLE_THRESHOLD,
) -> MsdfResult:
    """Rasterize a shape fitted and centred in a square bitmap.

    The shape's bounds are scaled uniformly to fit ``output_size - 2 *
    padding`` pixels and centred. ``range_`` is given in output pixels and
    converted to shape units with the same factor, so edge sharpness is the
    same for every glyph size.

    A shape without geometry (no edges, or inverted bounds) is not an error:
    it yields a uniform bitmap at the edge value 127.

    Args:
        shape: Shape to rasterize; edge colors are overwritten
        output_size: Width and height of the bitmap in pixels
        padding: Border in pixels left around the glyph
        range_: Distance range in output pixels
        angle_threshold: Corner detection threshold in radians

    Returns:
        MsdfResult of output_size x output_size pixels

    Raises:
        ConfigurationError: If the padding leaves no room for the glyph
        BitmapAllocationError: If the output buffer cannot be allocated
    """
    if output_size <= 0:
        raise ConfigurationError(f"output size must be positive, got {output_size}")

    bounds = shape.bounds()
    if bounds.is_empty():
        logger.debug("Empty shape, emitting flat bitmap", size=output_size)
        return MsdfResult(
            bitmap=allocate_bitmap(output_size, output_size, fill=EDGE_VALUE),
            width=output_size,
            height=output_size,
        )

    available = output_size - 2 * padding
    if available <= 0:
        raise ConfigurationError(
            f"padding {padding} leaves no room in a {output_size}px bitmap"
        )

    glyph_width = bounds.width
    glyph_height = bounds.height
    scale_x = available / glyph_width if glyph_width > 0 else math.inf
    scale_y = available / glyph_height if glyph_height > 0 else math.inf
    scale = min(scale_x, scale_y)
    if math.isinf(scale):
        # Single point: nothing to fit, keep shape units as pixels
        scale = 1.0

    offset_x = (output_size - glyph_width * scale) / 2.0
    offset_y = (output_size - glyph_height * scale) / 2.0

    config = MsdfConfig(
        width=output_size,
        height=output_size,
        range=range_ / scale,
        angle_threshold=angle_threshold,
        translate=(offset_x / scale - bounds.min_x, offset_y / scale - bounds.min_y),
        scale=(scale, scale),
    )
    return generate_msdf(shape, config)
