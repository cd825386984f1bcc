"""
Vector helpers over Matrix values.

A vector is a Matrix with ``cols == 1`` (column) or ``rows == 1`` (row).
Component access, length and normalization read the flat data and work for
either orientation; cross() needs exactly three components.
"""

from __future__ import annotations

import math
from typing import Iterable

from .core.errors import DimensionError, format_shape
from .core.logging import get_context_logger
from .matrix import Matrix

logger = get_context_logger(__name__, component="vector")


def column_vector(values: Iterable[float]) -> Matrix:
    """Build an ``n x 1`` column vector."""
    components = list(values)
    return Matrix(len(components), 1, data=components)


def row_vector(values: Iterable[float]) -> Matrix:
    """Build a ``1 x n`` row vector."""
    components = list(values)
    return Matrix(1, len(components), data=components)


def _component(v: Matrix, index: int) -> float:
    if index >= v.data.size:
        raise IndexError(
            f"Vector component {index} out of range ({format_shape(v.shape)} has {v.data.size} components)"
        )
    return float(v.data[index])


def vec_x(v: Matrix) -> float:
    """First component."""
    return _component(v, 0)


def vec_y(v: Matrix) -> float:
    """Second component."""
    return _component(v, 1)


def vec_z(v: Matrix) -> float:
    """Third component."""
    return _component(v, 2)


def length(v: Matrix) -> float:
    """
    Calculate the Euclidean length of the vector.

    All cells are treated as components, regardless of orientation.

    Returns:
        sqrt of the sum of squared components
    """
    return math.sqrt(sum(float(c) ** 2 for c in v.data))


def normalized(v: Matrix) -> Matrix:
    """
    Return the unit vector with the same shape as ``v``.

    A zero-length vector is returned as an unchanged copy.
    """
    magnitude = length(v)
    if magnitude == 0:
        logger.debug("Normalizing zero vector", extra_data={"shape": v.shape})
        return v.copy()
    return Matrix(v.rows, v.cols, data=[float(c) / magnitude for c in v.data])


def is_three_dimensional_vector(v: Matrix) -> bool:
    """True for 3x1 and 1x3 matrices."""
    return v.shape in ((3, 1), (1, 3))


def cross(a: Matrix, b: Matrix) -> Matrix:
    """
    Cross product of two 3-vectors.

    Either operand may be a row or a column vector; the result is always a
    3x1 column vector.

    Raises:
        DimensionError: If either operand is not a 3-vector
    """
    for name, operand in (("left", a), ("right", b)):
        if not is_three_dimensional_vector(operand):
            raise DimensionError(
                f"Cross product needs 3x1 or 1x3 vectors, {name} operand is {format_shape(operand.shape)}",
                left=a.shape,
                right=b.shape,
            )

    ax, ay, az = vec_x(a), vec_y(a), vec_z(a)
    bx, by, bz = vec_x(b), vec_y(b), vec_z(b)
    return column_vector([
        ay * bz - by * az,
        az * bx - bz * ax,
        ax * by - bx * ay,
    ])
