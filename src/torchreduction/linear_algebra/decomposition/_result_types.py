from typing import NamedTuple

from torch import Tensor


class HessenbergResult(NamedTuple):
    """Result of Hessenberg decomposition A = QHQ^T.

    H is upper (or lower) Hessenberg and Q is orthogonal.
    """

    H: Tensor
    Q: Tensor
    info: Tensor


class TridiagonalResult(NamedTuple):
    """Result of symmetric tridiagonal reduction A = QTQ^T.

    T has ``diagonal`` on its main diagonal and ``off_diagonal[1:]`` on the
    first sub- and super-diagonal. ``off_diagonal[..., 0]`` is always zero.
    """

    diagonal: Tensor  # (..., n)
    off_diagonal: Tensor  # (..., n)
    Q: Tensor  # (..., n, n)
    info: Tensor  # (...)


class PivotedLUResult(NamedTuple):
    """Result of pivoted LU decomposition a[pivots] = LU.

    ``sign`` is the parity of the row permutation, so that for square input
    det(a) = sign * prod(diag(U)).
    """

    L: Tensor
    U: Tensor
    pivots: Tensor
    sign: Tensor
    info: Tensor
