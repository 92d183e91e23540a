"""Symmetric tridiagonal reduction."""

import math
import warnings

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._deferred_tridiagonal import (
    DeferredTridiagonalReducer,
)
from torchreduction.linear_algebra.decomposition._result_types import (
    TridiagonalResult,
)
from torchreduction.linear_algebra.decomposition._simultaneous_tridiagonal import (
    SimultaneousTridiagonalReducer,
)
from torchreduction.linear_algebra.decomposition._tolerances import (
    default_tolerance,
)

_REDUCERS = {
    "simultaneous": SimultaneousTridiagonalReducer,
    "deferred": DeferredTridiagonalReducer,
}


def tridiagonal(
    a: Tensor, *, accumulation: str = "simultaneous"
) -> TridiagonalResult:
    r"""
    Symmetric tridiagonal reduction.

    Computes :math:`A = Q T Q^T` where :math:`A` is symmetric, :math:`Q` is
    orthogonal and :math:`T` is symmetric tridiagonal.

    Parameters
    ----------
    a : Tensor
        Symmetric input matrix of shape (..., n, n). Integer tensors are
        promoted to float64.
    accumulation : {"simultaneous", "deferred"}, default="simultaneous"
        How the orthogonal factor is accumulated. ``"simultaneous"`` applies
        each reflector to ``Q`` as soon as it is applied to ``A``.
        ``"deferred"`` stores the reflectors and builds ``Q`` in a second
        pass once the reduction is complete.

    Returns
    -------
    TridiagonalResult
        A named tuple containing:

        - **diagonal** (*Tensor*) - Main diagonal of :math:`T`, shape (..., n).
        - **off_diagonal** (*Tensor*) - Shape (..., n). Entry ``k`` holds
          :math:`T_{k, k-1} = T_{k-1, k}` for ``k >= 1``; entry ``0`` is zero.
        - **Q** (*Tensor*) - Orthogonal matrix of shape (..., n, n).
        - **info** (*Tensor*) - Integer tensor of shape (...). A value of 0
          indicates successful computation.

    Raises
    ------
    ValueError
        If input is not at least 2D, not square, or complex, or if
        ``accumulation`` is unknown.

    Warns
    -----
    RuntimeWarning
        If the input is not symmetric within the dtype's default tolerance.
        Only the symmetric part is meaningful to the reduction.

    Examples
    --------
    >>> import torch
    >>> from torchreduction.linear_algebra.decomposition import tridiagonal
    >>> a = torch.tensor([[2., 1.], [1., 2.]], dtype=torch.float64)
    >>> result = tridiagonal(a)
    >>> result.diagonal
    tensor([2., 2.], dtype=torch.float64)
    >>> result.off_diagonal
    tensor([0., 1.], dtype=torch.float64)
    """
    if accumulation not in _REDUCERS:
        raise ValueError(
            f"tridiagonal: accumulation must be one of {sorted(_REDUCERS)}, "
            f"got '{accumulation}'"
        )

    a = torch.as_tensor(a)
    if a.dim() < 2:
        raise ValueError(f"tridiagonal: a must be at least 2D, got {a.dim()}D")
    if a.shape[-2] != a.shape[-1]:
        raise ValueError(
            f"tridiagonal: a must be square, got shape {a.shape}"
        )
    if a.is_complex():
        raise ValueError(
            f"tridiagonal: complex input is not supported, got {a.dtype}"
        )

    dtype = a.dtype if a.is_floating_point() else torch.float64
    tol = default_tolerance(dtype)
    symmetric = a.to(dtype)
    scale = max(1.0, symmetric.abs().max().item()) if a.numel() else 1.0
    if not torch.allclose(symmetric, symmetric.mT, rtol=0, atol=tol * scale):
        warnings.warn(
            "tridiagonal: input is not symmetric; the reduction assumes "
            "a symmetric matrix and the result will not satisfy A = QTQ^T.",
            RuntimeWarning,
            stacklevel=2,
        )

    batch_shape = a.shape[:-2]
    n = a.shape[-1]

    reducer = _REDUCERS[accumulation]()
    diagonal = torch.empty(*batch_shape, n, dtype=dtype, device=a.device)
    off_diagonal = torch.empty_like(diagonal)
    Q = torch.empty(*batch_shape, n, n, dtype=dtype, device=a.device)

    count = math.prod(batch_shape)
    for index, matrix in enumerate(a.reshape(count, n, n)):
        reducer.decompose(matrix)
        reducer.supply_diagonal_to(
            diagonal.view(count, n)[index], off_diagonal.view(count, n)[index]
        )
        Q.view(count, n, n)[index] = reducer.get_q()

    info = torch.zeros(batch_shape, dtype=torch.int32, device=a.device)

    return TridiagonalResult(
        diagonal=diagonal, off_diagonal=off_diagonal, Q=Q, info=info
    )
