"""
densemat - dense row-major matrices and vectors

Single-precision Matrix value type with:
- Generator, explicit-data and zero-fill construction
- Matrix and scalar products, elementwise n-ary sums
- Vector helpers over 1-row or 1-column matrices
"""

from .core.errors import ConfigurationError, DenseMatError, DimensionError
from .matrix import Matrix, at, copy, from_generator, print_matrix, set_at, transpose, zeros
from .operators import elementwise, m_add, m_mul, m_sub, matmul, mult, scale
from .value import LinearValue, ToleranceMode
from .vector import (
    column_vector,
    cross,
    is_three_dimensional_vector,
    length,
    normalized,
    row_vector,
    vec_x,
    vec_y,
    vec_z,
)

__all__ = [
    "Matrix",
    "LinearValue",
    "ToleranceMode",
    "DenseMatError",
    "DimensionError",
    "ConfigurationError",
    "zeros",
    "from_generator",
    "at",
    "set_at",
    "copy",
    "transpose",
    "print_matrix",
    "matmul",
    "scale",
    "m_mul",
    "mult",
    "elementwise",
    "m_add",
    "m_sub",
    "column_vector",
    "row_vector",
    "vec_x",
    "vec_y",
    "vec_z",
    "length",
    "normalized",
    "is_three_dimensional_vector",
    "cross",
]
