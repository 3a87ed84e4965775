"""Edge coloring for multi-channel distance fields.

Each edge is assigned a two-channel color so that the edges meeting at a
corner never share both channels. The median of the three channels then
follows one edge on each side of the corner instead of rounding it off.

Per contour:
1. Detect corners from the turn angle between consecutive edges
2. Walk the contour from the first corner, switching color at every corner
3. Fall back to cycling colors when no corner is found
"""

import math

import structlog

from glyphfield.config import DEFAULT_ANGLE_THRESHOLD
from glyphfield.domain import Contour, EdgeColor, Shape, Vec2
from glyphfield.domain.edge import end_direction, start_direction
from glyphfield.utils.geometry import clamp

logger = structlog.get_logger(__name__)

COLOR_CYCLE: tuple[EdgeColor, EdgeColor, EdgeColor] = (
    EdgeColor.CYAN,
    EdgeColor.MAGENTA,
    EdgeColor.YELLOW,
)


def angle_between(dir1: Vec2, dir2: Vec2) -> float:
    """Angle between two direction vectors.

    Args:
        dir1: First direction (need not be normalized)
        dir2: Second direction (need not be normalized)

    Returns:
        Angle in radians, in [0, pi]

    Examples:
        >>> round(angle_between(Vec2(1.0, 0.0), Vec2(0.0, 1.0)), 4)
        1.5708
    """
    d = dir1.normalize().dot(dir2.normalize())
    return math.acos(clamp(d, -1.0, 1.0))


def is_corner(dir1: Vec2, dir2: Vec2, threshold: float = DEFAULT_ANGLE_THRESHOLD) -> bool:
    """Check whether two consecutive edge directions form a corner.

    The junction's interior angle is pi minus the turn between the outgoing
    tangent of one edge and the incoming tangent of the next. A corner is
    reported when that angle is below ``threshold``: a straight continuation
    has an interior angle of pi and a hairpin one of 0. With the default of
    3.0 radians any turn sharper than about 8 degrees is a corner.

    Args:
        dir1: End direction of the earlier edge
        dir2: Start direction of the later edge
        threshold: Interior angle threshold in radians

    Returns:
        True if the junction counts as a corner

    Examples:
        >>> is_corner(Vec2(1.0, 0.0), Vec2(0.0, 1.0))
        True
        >>> is_corner(Vec2(1.0, 0.0), Vec2(1.0, 0.1))
        False
    """
    return math.pi - angle_between(dir1, dir2) < threshold


def next_color(current: EdgeColor) -> EdgeColor:
    """Advance cyan -> magenta -> yellow -> cyan.

    Colors outside the cycle (white, black, single channels) restart at
    magenta so the result is always a two-channel color.
    """
    if current in COLOR_CYCLE:
        return COLOR_CYCLE[(COLOR_CYCLE.index(current) + 1) % len(COLOR_CYCLE)]
    return EdgeColor.MAGENTA


def find_corners(contour: Contour, threshold: float = DEFAULT_ANGLE_THRESHOLD) -> list[int]:
    """Indices of edges that start at a corner.

    Edge ``i`` starts at a corner when the junction between edge ``i - 1``
    (cyclically) and edge ``i`` is a corner.

    Args:
        contour: Contour to inspect
        threshold: Angle threshold in radians

    Returns:
        Sorted list of edge indices
    """
    edges = contour.edges
    count = len(edges)
    return [
        i
        for i in range(count)
        if is_corner(end_direction(edges[i - 1]), start_direction(edges[i]), threshold)
    ]


def color_contour(contour: Contour, threshold: float = DEFAULT_ANGLE_THRESHOLD) -> None:
    """Assign colors to the edges of one contour in place.

    Args:
        contour: Contour whose edges are recolored
        threshold: Angle threshold in radians for corner detection
    """
    edges = contour.edges
    edge_count = len(edges)

    if edge_count == 0:
        return

    # A lone edge must drive every channel
    if edge_count == 1:
        edges[0].color = EdgeColor.WHITE
        return

    if edge_count == 2:
        edges[0].color = EdgeColor.CYAN
        edges[1].color = EdgeColor.MAGENTA
        return

    corners = find_corners(contour, threshold)

    if not corners:
        for i, edge in enumerate(edges):
            edge.color = COLOR_CYCLE[i % len(COLOR_CYCLE)]
        return

    corner_set = set(corners)
    start = corners[0]
    color = EdgeColor.CYAN
    for offset in range(edge_count):
        i = (start + offset) % edge_count
        edges[i].color = color
        if (i + 1) % edge_count in corner_set:
            color = next_color(color)


def color_edges(shape: Shape, threshold: float = DEFAULT_ANGLE_THRESHOLD) -> None:
    """Color every contour of a shape independently.

    Args:
        shape: Shape whose edges are recolored in place
        threshold: Angle threshold in radians for corner detection
    """
    for contour in shape.contours:
        color_contour(contour, threshold)

    logger.debug(
        "Edges colored",
        contours=len(shape.contours),
        edges=shape.edge_count,
        threshold=threshold,
    )
