"""Core geometric value types for distance field generation.

This module defines the fundamental value types used throughout glyphfield:
- Vec2: An immutable 2D vector in shape space
- SignedDistance: Distance to a segment plus an orthogonality tie-breaker
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class Vec2:
    """A 2D vector with double precision coordinates.

    Immutable and hashable. Used for points (in shape or pixel space)
    as well as directions.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    ZERO: ClassVar["Vec2"]

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def dot(self, other: "Vec2") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vec2") -> float:
        """2D cross product (z component of the 3D cross product)."""
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vec2":
        """Return the unit vector in the same direction.

        The zero vector normalizes to itself rather than dividing by zero.

        Returns:
            Unit-length vector, or Vec2.ZERO for a zero-length input
        """
        length = self.length()
        if length == 0:
            return Vec2.ZERO
        return Vec2(self.x / length, self.y / length)

    def distance(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def perpendicular(self) -> "Vec2":
        """Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)."""
        return Vec2(-self.y, self.x)

    def lerp(self, other: "Vec2", t: float) -> "Vec2":
        """Linear interpolation from this vector (t=0) to other (t=1)."""
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vec2":
        return cls(x=data["x"], y=data["y"])


Vec2.ZERO = Vec2(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class SignedDistance:
    """Distance from a point to a segment, with a tie-break discriminant.

    When two edges report the same distance (typically at a shared endpoint),
    the one approached more head-on is the better representative of the
    outline there. ``dot`` measures that: 1 when the offset from the nearest
    point is perpendicular to the curve, 0 when it runs along the tangent.

    Attributes:
        distance: Unsigned magnitude of the distance
        dot: Orthogonality discriminant in [0, 1]
    """

    distance: float
    dot: float

    INFINITE: ClassVar["SignedDistance"]

    def is_closer(self, other: "SignedDistance") -> bool:
        """Check whether this distance beats another.

        Args:
            other: Distance to compare against

        Returns:
            True if this distance is smaller, or equal with higher orthogonality
        """
        abs_self = abs(self.distance)
        abs_other = abs(other.distance)
        if abs_self < abs_other:
            return True
        if abs_self > abs_other:
            return False
        return self.dot > other.dot


SignedDistance.INFINITE = SignedDistance(math.inf, 1.0)
