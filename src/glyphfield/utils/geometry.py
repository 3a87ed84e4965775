"""Numeric helpers for edge distance calculations.

This module provides the scalar math used by the edge segment model:
- Clamping and median helpers
- Real-root solvers for quadratic and cubic polynomials

All functions are pure, stateless, and safe to call from worker processes.
"""

import math

# Leading coefficients this many times smaller than the next one are treated
# as zero; the lower-degree solver is more accurate in that regime.
_QUADRATIC_DEGENERATE_RATIO = 1e12
_CUBIC_DEGENERATE_RATIO = 1e6


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to the closed interval [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def median(a: float, b: float, c: float) -> float:
    """Median of three values.

    Examples:
        >>> median(0.2, 0.9, 0.5)
        0.5
    """
    return max(min(a, b), min(max(a, b), c))


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Find the real roots of a*x^2 + b*x + c = 0.

    Falls back to the linear equation when ``a`` is zero or negligible
    relative to ``b``. An identically zero equation has no isolated roots
    and returns an empty list.

    Args:
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant term

    Returns:
        Real roots in ascending order

    Examples:
        >>> solve_quadratic(1.0, -5.0, 6.0)
        [2.0, 3.0]
        >>> solve_quadratic(0.0, 2.0, 4.0)
        [-2.0]
    """
    if a == 0 or abs(b) > _QUADRATIC_DEGENERATE_RATIO * abs(a):
        if b == 0:
            return []
        return [-c / b]

    discriminant = b * b - 4 * a * c
    if discriminant > 0:
        sqrt_d = math.sqrt(discriminant)
        return sorted([(-b - sqrt_d) / (2 * a), (-b + sqrt_d) / (2 * a)])
    if discriminant == 0:
        return [-b / (2 * a)]
    return []


def _solve_cubic_normed(a: float, b: float, c: float) -> list[float]:
    """Real roots of x^3 + a*x^2 + b*x + c = 0 (Cardano / trigonometric)."""
    a2 = a * a
    q = (a2 - 3 * b) / 9.0
    r = (a * (2 * a2 - 9 * b) + 27 * c) / 54.0
    r2 = r * r
    q3 = q * q * q
    a_third = a / 3.0

    if r2 < q3:
        # Three real roots
        t = clamp(r / math.sqrt(q3), -1.0, 1.0)
        theta = math.acos(t)
        m = -2 * math.sqrt(q)
        return sorted(
            [
                m * math.cos(theta / 3.0) - a_third,
                m * math.cos((theta + 2 * math.pi) / 3.0) - a_third,
                m * math.cos((theta - 2 * math.pi) / 3.0) - a_third,
            ]
        )

    u = (1.0 if r < 0 else -1.0) * (abs(r) + math.sqrt(r2 - q3)) ** (1.0 / 3.0)
    v = 0.0 if u == 0 else q / u
    roots = [(u + v) - a_third]
    if u == v or abs(u - v) < 1e-12 * abs(u + v):
        roots.append(-0.5 * (u + v) - a_third)
    return sorted(roots)


def solve_cubic(a: float, b: float, c: float, d: float) -> list[float]:
    """Find the real roots of a*x^3 + b*x^2 + c*x + d = 0.

    Degenerates to solve_quadratic when ``a`` is zero or tiny compared to
    ``b``.

    Args:
        a: Cubic coefficient
        b: Quadratic coefficient
        c: Linear coefficient
        d: Constant term

    Returns:
        Real roots in ascending order (a double root is reported once)

    Examples:
        >>> [round(x, 6) for x in solve_cubic(1.0, -6.0, 11.0, -6.0)]
        [1.0, 2.0, 3.0]
    """
    if a != 0:
        bn = b / a
        if abs(bn) < _CUBIC_DEGENERATE_RATIO:
            return _solve_cubic_normed(bn, c / a, d / a)
    return solve_quadratic(b, c, d)

