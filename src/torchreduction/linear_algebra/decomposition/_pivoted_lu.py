"""Pivoted LU decomposition."""

import math

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._permutation_tracker import (
    PermutationTracker,
)
from torchreduction.linear_algebra.decomposition._result_types import (
    PivotedLUResult,
)


def _factorize(a: Tensor, tracker: PermutationTracker) -> int:
    """Overwrite ``a`` with its unit-lower and upper factors.

    Returns 0 or the 1-based index of the first exactly zero pivot.
    """
    m, n = a.shape
    info = 0

    for j in range(min(m, n)):
        p = j + int(torch.argmax(a[j:, j].abs()))
        if p != j:
            a[[j, p]] = a[[p, j]]
        tracker.swap(j, p)

        pivot = a[j, j]
        if pivot == 0:
            if info == 0:
                info = j + 1
            continue

        a[j + 1 :, j] /= pivot
        a[j + 1 :, j + 1 :] -= torch.outer(a[j + 1 :, j], a[j, j + 1 :])

    return info


def pivoted_lu(a: Tensor) -> PivotedLUResult:
    r"""
    Pivoted LU decomposition.

    Computes the LU decomposition with row pivoting:

    .. math::

        A[\pi] = LU

    where :math:`\pi` is a row permutation, :math:`L` is unit lower triangular
    (ones on the diagonal), and :math:`U` is upper triangular.

    Parameters
    ----------
    a : Tensor
        Input matrix of shape (..., m, n). Integer tensors are promoted to
        float64.

    Returns
    -------
    PivotedLUResult
        A named tuple containing:

        - **L** (*Tensor*) - Unit lower triangular matrix of shape (..., m, k)
          where k = min(m, n). Has ones on the diagonal.
        - **U** (*Tensor*) - Upper triangular matrix of shape (..., k, n).
        - **pivots** (*Tensor*) - Row permutation of shape (..., m):
          row ``i`` of :math:`LU` is row ``pivots[i]`` of ``a``.
        - **sign** (*Tensor*) - Parity of the permutation, ``+1`` or ``-1``,
          of shape (...).
        - **info** (*Tensor*) - Integer tensor of shape (...). A value of 0
          indicates every pivot is nonzero; ``i > 0`` means ``U[i-1, i-1]``
          is exactly zero and the matrix is singular.

    Raises
    ------
    ValueError
        If input is not at least 2D or is complex.

    Notes
    -----
    At column ``j`` the row with the largest magnitude entry on or below the
    diagonal is exchanged into position ``j``. The exchanges are recorded in
    a :class:`PermutationTracker`, whose order becomes ``pivots`` and whose
    signum becomes ``sign``, so that for square input

    .. math::

        \det(A) = \mathrm{sign} \prod_i U_{ii}.

    Examples
    --------
    >>> import torch
    >>> from torchreduction.linear_algebra.decomposition import pivoted_lu
    >>> a = torch.tensor([[1., 2.], [3., 4.]], dtype=torch.float64)
    >>> result = pivoted_lu(a)
    >>> result.pivots
    tensor([1, 0])
    >>> torch.allclose(result.L @ result.U, a[result.pivots])
    True
    """
    a = torch.as_tensor(a)
    if a.dim() < 2:
        raise ValueError(f"pivoted_lu: a must be at least 2D, got {a.dim()}D")
    if a.is_complex():
        raise ValueError(
            f"pivoted_lu: complex input is not supported, got {a.dtype}"
        )

    dtype = a.dtype if a.is_floating_point() else torch.float64
    batch_shape = a.shape[:-2]
    m, n = a.shape[-2:]
    k = min(m, n)
    count = math.prod(batch_shape)

    factors = a.detach().to(dtype).reshape(count, m, n).clone()
    pivots = torch.empty(count, m, dtype=torch.int64)
    sign = torch.empty(count, dtype=dtype)
    info = torch.empty(count, dtype=torch.int32)

    tracker = PermutationTracker(m)
    for index in range(count):
        tracker.initialize(m)
        info[index] = _factorize(factors[index], tracker)
        pivots[index] = tracker.order()
        sign[index] = tracker.signum()

    L = torch.tril(factors[..., :k], diagonal=-1)
    L = L + torch.eye(m, k, dtype=dtype, device=a.device)
    U = torch.triu(factors[..., :k, :])

    return PivotedLUResult(
        L=L.reshape(*batch_shape, m, k),
        U=U.reshape(*batch_shape, k, n),
        pivots=pivots.reshape(*batch_shape, m).to(a.device),
        sign=sign.reshape(batch_shape).to(a.device),
        info=info.reshape(batch_shape).to(a.device),
    )


def lu_determinant(result: PivotedLUResult) -> Tensor:
    """Determinant of a square matrix from its pivoted LU factors.

    Parameters
    ----------
    result : PivotedLUResult
        Output of :func:`pivoted_lu` for input of shape (..., n, n).

    Returns
    -------
    Tensor
        ``sign * prod(diag(U))`` of shape (...).

    Raises
    ------
    ValueError
        If the factors come from a non-square matrix.
    """
    if result.L.shape[-2] != result.U.shape[-1]:
        raise ValueError(
            "lu_determinant: factors of a square matrix are required, got "
            f"L {tuple(result.L.shape)} and U {tuple(result.U.shape)}"
        )
    return result.sign * torch.diagonal(result.U, dim1=-2, dim2=-1).prod(-1)
