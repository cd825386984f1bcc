"""
Arithmetic over Matrix values.

Products (matrix-matrix and matrix-scalar), their n-ary left fold, and
elementwise n-ary addition and subtraction. Every result owns fresh storage;
operands are never modified.
"""

from __future__ import annotations

import numbers
import operator
from functools import reduce
from typing import Any, Callable

import numpy as np

from .core.errors import DimensionError
from .core.logging import get_context_logger
from .matrix import DTYPE, Matrix

logger = get_context_logger(__name__, component="operators")

Operand = Matrix | float


def is_scalar(value: Any) -> bool:
    """True for real numbers, including NumPy scalars, but not bools."""
    return isinstance(value, (numbers.Real, np.number)) and not isinstance(value, (bool, np.bool_))


def scale(m: Matrix | float, s: Matrix | float) -> Matrix:
    """
    Multiply every element of a matrix by a scalar.

    Accepts ``scale(m, s)`` or ``scale(s, m)``.

    Returns:
        New Matrix with the same shape as the matrix operand
    """
    if isinstance(s, Matrix) and not isinstance(m, Matrix):
        m, s = s, m
    if not isinstance(m, Matrix) or not is_scalar(s):
        raise TypeError(f"scale() needs a Matrix and a scalar, got {type(m).__name__} and {type(s).__name__}")
    return Matrix(m.rows, m.cols, data=m.data * DTYPE(s))


def matmul(a: Matrix, b: Matrix) -> Matrix:
    """
    Matrix product ``a * b``.

    Each result cell starts at zero and accumulates ``a[i, k] * b[k, j]``
    for increasing k in single precision.

    Raises:
        DimensionError: If cols(a) != rows(b)
    """
    if a.cols != b.rows:
        raise DimensionError.mismatch("multiply", a.shape, b.shape)

    logger.debug("Matrix product", extra_data={"left": a.shape, "right": b.shape})

    result = Matrix(a.rows, b.cols)
    out = result.data
    for i, j in result.indices():
        cell = i * b.cols + j
        for k in range(a.cols):
            out[cell] += a.data[i * a.cols + k] * b.data[k * b.cols + j]
    return result


def m_mul(a: Operand, b: Operand) -> Operand:
    """Multiply two operands, dispatching on matrix or scalar kinds."""
    if isinstance(a, Matrix) and isinstance(b, Matrix):
        return matmul(a, b)
    if isinstance(a, Matrix) or isinstance(b, Matrix):
        return scale(a, b)
    if is_scalar(a) and is_scalar(b):
        return a * b
    raise TypeError(f"Cannot multiply {type(a).__name__} by {type(b).__name__}")


def mult(*operands: Operand) -> Operand | None:
    """
    Left fold of m_mul over ``operands``.

    Returns None for no operands. A lone matrix is returned as a copy.

    Examples:
        >>> mult(a, 2.0, b)   # (a * 2.0) * b
    """
    if not operands:
        return None
    logger.debug("n-ary product", extra_data={"operands": len(operands)})
    first = operands[0]
    if isinstance(first, Matrix):
        first = first.copy()
    return reduce(m_mul, operands[1:], first)


def elementwise(op: Callable[[Any, Any], Any], *operands: Matrix, name: str | None = None) -> Matrix | None:
    """
    Fold ``op`` elementwise over equally shaped matrices.

    The accumulator starts as a copy of the first operand; each later operand
    is combined into it cell by cell in storage order.

    Returns:
        The accumulated Matrix, or None for no operands

    Raises:
        TypeError: If an operand is not a Matrix
        DimensionError: If an operand's shape differs from the accumulator's
    """
    if not operands:
        return None

    for operand in operands:
        if not isinstance(operand, Matrix):
            raise TypeError(f"Elementwise operands must be matrices, got {type(operand).__name__}")

    name = name or getattr(op, "__name__", "combine")
    accumulator = operands[0].copy()
    for operand in operands[1:]:
        if operand.shape != accumulator.shape:
            raise DimensionError.mismatch(name, accumulator.shape, operand.shape)

    logger.debug("Elementwise fold", extra_data={"op": name, "operands": len(operands)})

    for operand in operands[1:]:
        acc = accumulator.data
        for idx in range(acc.size):
            acc[idx] = op(acc[idx], operand.data[idx])
    return accumulator


def m_add(*operands: Matrix) -> Matrix | None:
    """Elementwise sum of equally shaped matrices."""
    return elementwise(operator.add, *operands)


def m_sub(*operands: Matrix) -> Matrix | None:
    """Subtract every later operand from the first, elementwise."""
    return elementwise(operator.sub, *operands, name="subtract")
