"""
Shared pytest fixtures and utilities for testing densemat.

This module provides:
- Sample matrices used across test modules
- A tolerance-aware matrix comparison helper
- Isolation of settings overrides
"""

import pytest

from densemat import Matrix
from densemat.core import config


@pytest.fixture
def counting_matrix():
    """2x3 matrix whose cells are i*3 + j, i.e. 0..5 in row-major order."""
    return Matrix(2, 3, generator=lambda i, j: i * 3 + j)


@pytest.fixture
def square_matrix():
    """2x2 matrix [[1, 2], [3, 4]]."""
    return Matrix(2, 2, data=[1, 2, 3, 4])


@pytest.fixture
def assert_matrix_close():
    """Helper to assert two matrices have equal shape and near-equal cells."""
    def _assert_close(actual: Matrix, expected: Matrix, abs_tol: float = 1e-5) -> None:
        """
        Assert that two matrices agree within an absolute tolerance.

        Args:
            actual: Matrix under test
            expected: Reference matrix
            abs_tol: Allowed absolute difference per cell
        """
        assert actual.shape == expected.shape, f"Shape {actual.shape} != {expected.shape}"
        assert actual.to_python() == [
            [pytest.approx(v, abs=abs_tol) for v in row] for row in expected.to_python()
        ], f"Matrices differ:\n{actual}\n!=\n{expected}"

    return _assert_close


@pytest.fixture
def override_settings(monkeypatch):
    """Temporarily override fields on the global settings instance."""
    def _override(**values) -> None:
        for name, value in values.items():
            monkeypatch.setattr(config.settings, name, value)

    return _override
