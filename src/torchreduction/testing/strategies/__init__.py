"""Hypothesis strategies for reduction testing."""

from ._matrices import square_matrices, symmetric_matrices
from ._matrix_sizes import matrix_sizes
from ._real_number_dtypes import real_number_dtypes
from ._swap_sequences import swap_sequences

__all__ = [
    "matrix_sizes",
    "real_number_dtypes",
    "square_matrices",
    "swap_sequences",
    "symmetric_matrices",
]
