"""
Dense row-major Matrix value type.

A Matrix owns a flat single-precision buffer of ``rows * cols`` cells,
element (i, j) living at offset ``i * cols + j``. Dimensions are fixed at
construction; cell values change only through set_at().

Vectors are matrices with one dimension equal to 1, see densemat.vector.
"""

from __future__ import annotations

import operator
import sys
from typing import Any, Callable, Iterator, TextIO

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .core.config import settings
from .core.errors import ConfigurationError, DimensionError, format_shape
from .core.logging import get_context_logger
from .value import LinearValue, ToleranceMode, within_tolerance

logger = get_context_logger(__name__, component="matrix")

DTYPE = np.float32

Generator = Callable[[int, int], float]


def _validate_dimension(name: str, value: Any) -> int:
    """Coerce a dimension to int and require it to be positive."""
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Matrix {name} must be an integer, got {value!r}")
    size = operator.index(value)
    if size <= 0:
        raise DimensionError(f"Matrix {name} must be positive, got {size}", **{name: size})
    return size


class Matrix(BaseModel, LinearValue):
    """
    Row-major single-precision matrix.

    Construction picks one of three exclusive modes:

    - ``Matrix(rows, cols, data=...)`` copies ``rows * cols`` values
    - ``Matrix(rows, cols, generator=f)`` calls ``f(i, j)`` for every cell in
      row-major order
    - ``Matrix(rows, cols)`` fills with zeros

    Raises:
        DimensionError: If rows or cols is not positive, or data has the
            wrong number of elements
        ConfigurationError: If both data and generator are supplied
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True, extra="forbid")

    rows: int = Field(frozen=True)
    cols: int = Field(frozen=True)
    data: np.ndarray = Field(frozen=True, repr=False)

    def __init__(
        self,
        rows: int,
        cols: int,
        data: Any | None = None,
        generator: Generator | None = None,
    ) -> None:
        """Initialize a Matrix from explicit data, a generator, or zeros."""
        if data is not None and generator is not None:
            raise ConfigurationError(
                "Matrix accepts either data or a generator, not both", "data", "generator"
            )

        n_rows = _validate_dimension("rows", rows)
        n_cols = _validate_dimension("cols", cols)

        if data is not None:
            buffer = np.array(data, dtype=DTYPE).reshape(-1)
            if buffer.size != n_rows * n_cols:
                raise DimensionError(
                    f"Expected {n_rows * n_cols} values for a {n_rows}x{n_cols} matrix, got {buffer.size}",
                    rows=n_rows,
                    cols=n_cols,
                    length=int(buffer.size),
                )
            mode = "data"
        else:
            buffer = np.zeros(n_rows * n_cols, dtype=DTYPE)
            mode = "generator" if generator is not None else "zeros"

        super().__init__(rows=n_rows, cols=n_cols, data=buffer)

        if generator is not None:
            for i, j in self.indices():
                self.set_at(i, j, generator(i, j))

        logger.debug("Constructed matrix", extra_data={"shape": self.shape, "mode": mode})

    # Storage & access

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (rows, cols)."""
        return (self.rows, self.cols)

    def _offset(self, i: int, j: int) -> int:
        if not 0 <= i < self.rows:
            raise IndexError(f"Row index {i} out of range for {format_shape(self.shape)} matrix")
        if not 0 <= j < self.cols:
            raise IndexError(f"Column index {j} out of range for {format_shape(self.shape)} matrix")
        return i * self.cols + j

    def at(self, i: int, j: int) -> float:
        """Return element (i, j). Negative indices are out of range."""
        return float(self.data[self._offset(i, j)])

    def set_at(self, i: int, j: int, value: float) -> None:
        """Store ``value`` at (i, j) in place."""
        self.data[self._offset(i, j)] = value

    def indices(self) -> Iterator[tuple[int, int]]:
        """Yield every (i, j) in row-major order."""
        for i in range(self.rows):
            for j in range(self.cols):
                yield i, j

    def __getitem__(self, index: tuple[int, int]) -> float:
        """Get element by (row, col)."""
        i, j = index
        return self.at(i, j)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        """Set element by (row, col)."""
        i, j = index
        self.set_at(i, j, value)

    # Derived constructors

    def copy(self) -> Matrix:
        """
        Create a deep copy of the matrix.

        Returns:
            New Matrix with copied data
        """
        return Matrix(self.rows, self.cols, data=self.data)

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> Matrix:
        return self.copy()

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False) -> Matrix:
        """
        Copy with independent storage, shallow or deep.

        Raises:
            ConfigurationError: If update is given; dimensions and data are fixed
        """
        if update:
            raise ConfigurationError("Matrix fields cannot be replaced in a copy", *update)
        return self.copy()

    def transpose(self) -> Matrix:
        """Return a new ``cols x rows`` matrix with element (i, j) = self(j, i)."""
        return Matrix(self.cols, self.rows, generator=lambda i, j: self.at(j, i))

    # Conversions

    def to_numpy(self) -> np.ndarray:
        """Convert to a (rows, cols) NumPy array that owns its data."""
        return self.data.reshape(self.rows, self.cols).copy()

    def to_python(self) -> list[list[float]]:
        """Convert to Python nested list."""
        return self.to_numpy().tolist()

    def to_string(self) -> str:
        """Render one row per line with fixed-width, fixed-precision cells."""
        width = settings.PRINT_WIDTH
        precision = settings.PRINT_PRECISION
        lines = []
        for i in range(self.rows):
            row = self.data[i * self.cols:(i + 1) * self.cols]
            lines.append(" ".join(f"{float(v):{width}.{precision}f}" for v in row))
        return "\n".join(lines)

    # BaseModel.__str__ precedes LinearValue.__str__ in the MRO
    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.rows}, {self.cols}, data={self.data.tolist()!r})"

    # Comparison

    def compare(
        self, other: object, tolerance: float | None = None, mode: str = ToleranceMode.ABSOLUTE
    ) -> bool:
        """Compare matrices element-wise within a tolerance."""
        if not isinstance(other, Matrix):
            return False

        if self.shape != other.shape:
            return False

        if tolerance is None:
            tolerance = settings.COMPARE_TOLERANCE

        return all(
            within_tolerance(float(a), float(b), tolerance, mode)
            for a, b in zip(self.data, other.data)
        )

    def __eq__(self, other: object) -> bool:
        """Exact equality of shape and every cell."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    # Arithmetic operators

    # Make NumPy scalars defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __mul__(self, other: Any) -> Matrix:
        """Matrix product or scalar multiplication."""
        from .operators import is_scalar, m_mul

        if isinstance(other, Matrix) or is_scalar(other):
            return m_mul(self, other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        """Right multiplication (scalar only)."""
        from .operators import is_scalar, m_mul

        if is_scalar(other):
            return m_mul(other, self)
        return NotImplemented

    def __add__(self, other: Any) -> Matrix:
        """Elementwise addition."""
        from .operators import m_add

        if isinstance(other, Matrix):
            return m_add(self, other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        """Elementwise subtraction."""
        from .operators import m_sub

        if isinstance(other, Matrix):
            return m_sub(self, other)
        return NotImplemented

    def __neg__(self) -> Matrix:
        """Negation."""
        from .operators import scale

        return scale(self, -1.0)


# Standalone functions

def zeros(rows: int, cols: int) -> Matrix:
    """Create a zero-filled ``rows x cols`` matrix."""
    return Matrix(rows, cols)


def from_generator(rows: int, cols: int, generator: Generator) -> Matrix:
    """
    Create a matrix whose cells are ``generator(i, j)``.

    The generator is called once per cell in row-major order (i outer,
    j inner), so stateful generators see a deterministic sequence.

    Examples:
        >>> from_generator(2, 3, lambda i, j: i * 3 + j).at(1, 2)
        5.0
    """
    return Matrix(rows, cols, generator=generator)


def at(m: Matrix, i: int, j: int) -> float:
    """Return element (i, j) of ``m``."""
    return m.at(i, j)


def set_at(m: Matrix, i: int, j: int, value: float) -> None:
    """Store ``value`` at (i, j) of ``m`` in place."""
    m.set_at(i, j, value)


def copy(m: Matrix) -> Matrix:
    """Return an independently owned copy of ``m``."""
    return m.copy()


def transpose(m: Matrix) -> Matrix:
    """Return the transpose of ``m``."""
    return m.transpose()


def print_matrix(m: Matrix, file: TextIO | None = None) -> None:
    """Print ``m`` one row per line, for debugging."""
    print(m.to_string(), file=file if file is not None else sys.stdout)
