"""
Base value class for densemat.

This module provides the foundation shared by matrix values:
- Fuzzy comparison with tolerances
- Human-readable string output
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / |b| < tol
    ABSOLUTE = "absolute"  # |a - b| < tol


def within_tolerance(a: float, b: float, tolerance: float, mode: str = ToleranceMode.ABSOLUTE) -> bool:
    """
    Compare two floats under a tolerance mode.

    Relative comparison falls back to absolute when ``b`` is zero.

    Raises:
        ValueError: If mode is not a known ToleranceMode
    """
    diff = abs(a - b)
    if mode == ToleranceMode.ABSOLUTE:
        return diff < tolerance
    if mode == ToleranceMode.RELATIVE:
        if b == 0:
            return diff < tolerance
        return diff / abs(b) < tolerance
    raise ValueError(f"Unknown tolerance mode: {mode!r}")


class LinearValue(ABC):
    """
    Base class for linear-algebra value objects.

    Subclasses must implement compare() and to_string(). Concrete
    subclasses inherit from both BaseModel and LinearValue,
    e.g. ``class Matrix(BaseModel, LinearValue):``.
    """

    @abstractmethod
    def compare(self, other: object, tolerance: float | None = None, mode: str = ToleranceMode.ABSOLUTE) -> bool:
        """
        Fuzzy comparison with tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance for comparison
            mode: Tolerance mode (relative or absolute)

        Returns:
            True if values are equal within tolerance
        """

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""

    def __str__(self) -> str:
        return self.to_string()
