"""Edge segment types and their distance queries.

An outline edge is one of exactly three variants:
- LinearSegment: straight line from p0 to p1
- QuadraticSegment: quadratic Bezier with one control point
- CubicSegment: cubic Bezier with two control points

The variant set is closed. The functions in this module dispatch on it with
structural pattern matching, so every query handles all three shapes in one
place. Each segment carries a mutable EdgeColor assigned by the edge colorer.
"""

from dataclasses import dataclass
from enum import IntFlag

from glyphfield.domain.vector import SignedDistance, Vec2
from glyphfield.utils.geometry import clamp, solve_cubic

# Parameter samples used to seed the cubic nearest-point search
CUBIC_SEARCH_SAMPLES = 16
CUBIC_NEWTON_ITERATIONS = 4


class EdgeColor(IntFlag):
    """Channels an edge contributes to.

    Bit flags over the red, green and blue channels. Edge coloring only ever
    assigns two-channel combinations (cyan, magenta, yellow) or white.
    """

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    def has_red(self) -> bool:
        return bool(self & EdgeColor.RED)

    def has_green(self) -> bool:
        return bool(self & EdgeColor.GREEN)

    def has_blue(self) -> bool:
        return bool(self & EdgeColor.BLUE)


@dataclass(slots=True)
class LinearSegment:
    """Straight edge from p0 to p1."""

    p0: Vec2
    p1: Vec2
    color: EdgeColor = EdgeColor.WHITE


@dataclass(slots=True)
class QuadraticSegment:
    """Quadratic Bezier edge.

    Attributes:
        p0: Start point
        p1: Control point
        p2: End point
        color: Channels this edge contributes to
    """

    p0: Vec2
    p1: Vec2
    p2: Vec2
    color: EdgeColor = EdgeColor.WHITE


@dataclass(slots=True)
class CubicSegment:
    """Cubic Bezier edge.

    Attributes:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        color: Channels this edge contributes to
    """

    p0: Vec2
    p1: Vec2
    p2: Vec2
    p3: Vec2
    color: EdgeColor = EdgeColor.WHITE


EdgeSegment = LinearSegment | QuadraticSegment | CubicSegment


def point_at(edge: EdgeSegment, t: float) -> Vec2:
    """Position on the edge at curve parameter t in [0, 1]."""
    match edge:
        case LinearSegment(p0, p1):
            return p0.lerp(p1, t)
        case QuadraticSegment(p0, p1, p2):
            t1 = 1 - t
            return p0 * (t1 * t1) + p1 * (2 * t1 * t) + p2 * (t * t)
        case CubicSegment(p0, p1, p2, p3):
            t1 = 1 - t
            return (
                p0 * (t1 * t1 * t1)
                + p1 * (3 * t1 * t1 * t)
                + p2 * (3 * t1 * t * t)
                + p3 * (t * t * t)
            )
    raise TypeError(f"Not an edge segment: {edge!r}")


def _cubic_derivative(edge: CubicSegment, t: float) -> Vec2:
    t1 = 1 - t
    return (
        (edge.p1 - edge.p0) * (3 * t1 * t1)
        + (edge.p2 - edge.p1) * (6 * t1 * t)
        + (edge.p3 - edge.p2) * (3 * t * t)
    )


def _cubic_second_derivative(edge: CubicSegment, t: float) -> Vec2:
    t1 = 1 - t
    return (edge.p2 - edge.p1 * 2 + edge.p0) * (6 * t1) + (
        edge.p3 - edge.p2 * 2 + edge.p1
    ) * (6 * t)


def direction_at(edge: EdgeSegment, t: float) -> Vec2:
    """Unit tangent of the edge at parameter t.

    When a control point coincides with an endpoint the derivative vanishes
    there; the chord towards the next distinct control point is used instead.
    A fully degenerate edge yields Vec2.ZERO.
    """
    match edge:
        case LinearSegment(p0, p1):
            return (p1 - p0).normalize()
        case QuadraticSegment(p0, p1, p2):
            tangent = (p1 - p0) * (2 * (1 - t)) + (p2 - p1) * (2 * t)
            if tangent.length_squared() == 0:
                tangent = p2 - p0
            return tangent.normalize()
        case CubicSegment(p0, p1, p2, p3):
            tangent = _cubic_derivative(edge, t)
            if tangent.length_squared() == 0:
                if t == 0:
                    tangent = p2 - p0
                elif t == 1:
                    tangent = p3 - p1
                if tangent.length_squared() == 0:
                    tangent = p3 - p0
            return tangent.normalize()
    raise TypeError(f"Not an edge segment: {edge!r}")


def start_direction(edge: EdgeSegment) -> Vec2:
    return direction_at(edge, 0.0)


def end_direction(edge: EdgeSegment) -> Vec2:
    return direction_at(edge, 1.0)


def start_point(edge: EdgeSegment) -> Vec2:
    return edge.p0


def end_point(edge: EdgeSegment) -> Vec2:
    match edge:
        case LinearSegment():
            return edge.p1
        case QuadraticSegment():
            return edge.p2
        case CubicSegment():
            return edge.p3
    raise TypeError(f"Not an edge segment: {edge!r}")


def control_points(edge: EdgeSegment) -> tuple[Vec2, ...]:
    """All defining points of the edge, endpoints included."""
    match edge:
        case LinearSegment(p0, p1):
            return (p0, p1)
        case QuadraticSegment(p0, p1, p2):
            return (p0, p1, p2)
        case CubicSegment(p0, p1, p2, p3):
            return (p0, p1, p2, p3)
    raise TypeError(f"Not an edge segment: {edge!r}")


def _distance_at(edge: EdgeSegment, origin: Vec2, t: float) -> SignedDistance:
    """Distance from origin to the curve point at t, with orthogonality."""
    diff = origin - point_at(edge, t)
    dist = diff.length()
    if dist == 0:
        return SignedDistance(0.0, 0.0)
    return SignedDistance(dist, abs(direction_at(edge, t).cross(diff)) / dist)


def _linear_distance(edge: LinearSegment, origin: Vec2) -> SignedDistance:
    edge_dir = edge.p1 - edge.p0
    to_origin = origin - edge.p0

    length_sq = edge_dir.length_squared()
    if length_sq == 0:
        # Zero-length segment behaves as a point
        return SignedDistance(to_origin.length(), 0.0)

    t = clamp(edge_dir.dot(to_origin) / length_sq, 0.0, 1.0)
    return _distance_at(edge, origin, t)


def _quadratic_distance(edge: QuadraticSegment, origin: Vec2) -> SignedDistance:
    # B(t) = p0 + 2t*ab + t^2*br; the nearest point zeroes (B(t) - origin) . B'(t),
    # which is a cubic in t.
    qa = edge.p0 - origin
    ab = edge.p1 - edge.p0
    br = edge.p2 - edge.p1 - ab

    roots = solve_cubic(
        br.dot(br),
        3 * ab.dot(br),
        2 * ab.dot(ab) + qa.dot(br),
        qa.dot(ab),
    )

    best = SignedDistance.INFINITE
    for t in (0.0, 1.0, *(r for r in roots if 0 < r < 1)):
        candidate = _distance_at(edge, origin, t)
        if candidate.is_closer(best):
            best = candidate
    return best


def _refine_cubic(edge: CubicSegment, origin: Vec2, t: float) -> float:
    """Newton steps on f(t) = (B(t) - origin) . B'(t), clamped to [0, 1]."""
    for _ in range(CUBIC_NEWTON_ITERATIONS):
        diff = point_at(edge, t) - origin
        d1 = _cubic_derivative(edge, t)
        d2 = _cubic_second_derivative(edge, t)

        f = diff.dot(d1)
        f_prime = d1.dot(d1) + diff.dot(d2)
        if abs(f_prime) < 1e-10:
            break
        t = clamp(t - f / f_prime, 0.0, 1.0)
    return t


def _cubic_distance(edge: CubicSegment, origin: Vec2) -> SignedDistance:
    # The exact condition is a quintic; every uniform sample is refined and the
    # closest result kept, as the nearest sample can lie in another basin.
    best = SignedDistance.INFINITE
    for i in range(CUBIC_SEARCH_SAMPLES + 1):
        t = i / CUBIC_SEARCH_SAMPLES
        for candidate_t in (t, _refine_cubic(edge, origin, t)):
            candidate = _distance_at(edge, origin, candidate_t)
            if candidate.is_closer(best):
                best = candidate
    return best


def signed_distance(edge: EdgeSegment, origin: Vec2) -> SignedDistance:
    """Distance from origin to the nearest point of the edge.

    The nearest point is clamped to the segment (t in [0, 1]). The returned
    distance is an unsigned magnitude; inside/outside is decided separately
    by the rasterizer's winding test.

    Args:
        edge: Edge segment to measure against
        origin: Query point in shape space

    Returns:
        SignedDistance with the orthogonality tie-breaker filled in
    """
    match edge:
        case LinearSegment():
            return _linear_distance(edge, origin)
        case QuadraticSegment():
            return _quadratic_distance(edge, origin)
        case CubicSegment():
            return _cubic_distance(edge, origin)
    raise TypeError(f"Not an edge segment: {edge!r}")
