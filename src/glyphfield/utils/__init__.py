"""Utility functions for glyphfield.

This module provides utility functions including:

- Logging setup and configuration
- Numeric helpers (clamping, median, polynomial root solvers)
- Progress and statistics tracking helpers
"""

from glyphfield.utils.geometry import (
    clamp,
    median,
    solve_cubic,
    solve_quadratic,
)
from glyphfield.utils.logging import (
    BakeLogger,
    BakeStats,
    configure_logging,
    configure_worker_logging,
)

__all__ = [
    "BakeLogger",
    "BakeStats",
    "clamp",
    "configure_logging",
    "configure_worker_logging",
    "median",
    "solve_cubic",
    "solve_quadratic",
]
