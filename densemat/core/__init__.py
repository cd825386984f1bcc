"""Core utilities package"""

from .config import settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    DenseMatError,
    DimensionError,
    ConfigurationError,
    format_shape,
)

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "DenseMatError",
    "DimensionError",
    "ConfigurationError",
    "format_shape",
]
