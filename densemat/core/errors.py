"""
Library exceptions.

Defines the exception taxonomy raised by matrix construction and arithmetic.
Out-of-range element access raises the builtin IndexError.
"""

from typing import Any, Dict, Optional, Tuple


def format_shape(shape: Tuple[int, int]) -> str:
    """Render a (rows, cols) pair as ``RxC``."""
    return f"{shape[0]}x{shape[1]}"


class DenseMatError(Exception):
    """Base exception for densemat errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DimensionError(DenseMatError, ValueError):
    """Raised when an operation's shape requirement is violated"""

    def __init__(self, message: str, **shapes: Any):
        super().__init__(message=message, details=shapes)

    @classmethod
    def mismatch(cls, operation: str, left: Tuple[int, int], right: Tuple[int, int]) -> "DimensionError":
        """Build the error for two operands whose shapes are incompatible."""
        return cls(
            f"Cannot {operation} {format_shape(left)} and {format_shape(right)} matrices",
            left=left,
            right=right,
        )


class ConfigurationError(DenseMatError, ValueError):
    """Raised when mutually exclusive construction inputs are both supplied"""

    def __init__(self, message: str, *inputs: str):
        super().__init__(message=message, details={"inputs": list(inputs)})
