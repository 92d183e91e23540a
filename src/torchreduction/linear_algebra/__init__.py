"""Linear algebra operations on PyTorch tensors.

Submodules
----------
decomposition
    Hessenberg and tridiagonal reductions, pivoted LU and the permutation
    tracker shared by pivoted factorizations.
"""

from torchreduction.linear_algebra import decomposition

__all__ = ["decomposition"]
