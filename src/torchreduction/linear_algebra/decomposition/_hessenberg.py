"""Hessenberg decomposition."""

import math

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._decomposition_state import (
    Decomposition,
)
from torchreduction.linear_algebra.decomposition._householder import (
    householder_reflector,
)
from torchreduction.linear_algebra.decomposition._result_types import (
    HessenbergResult,
)


class HessenbergReducer(Decomposition):
    r"""
    Orthogonal similarity reduction of a general square matrix.

    Computes :math:`H = Q^T A Q` where :math:`H` is upper Hessenberg
    (:math:`H_{ij} = 0` for :math:`i > j + 1`) or lower Hessenberg
    (:math:`H_{ij} = 0` for :math:`j > i + 1`).

    The reducer owns one buffer of shape ``(2, n, n)``: slot ``0`` becomes
    ``H`` and slot ``1`` becomes ``Q``. The lower variant runs the column
    elimination of the upper variant on the transposed view of slot ``0``;
    since :math:`A^T = Q H_u Q^T` implies :math:`H_u^T = Q^T A Q`, the same
    ``Q`` is accumulated and slot ``0`` ends up holding the lower form.

    Examples
    --------
    >>> import torch
    >>> reducer = HessenbergReducer()
    >>> reducer.compute(torch.tensor([[1., 2., 3.], [4., 5., 6.], [7., 8., 10.]]))
    True
    >>> reducer.get_h()[2, 0]
    tensor(0.)
    """

    def __init__(self):
        super().__init__()
        self._upper = True

    def compute(self, matrix, upper: bool = True) -> bool:
        """Reduce ``matrix`` to upper (default) or lower Hessenberg form.

        Returns ``False`` if ``matrix`` is not a real square matrix.
        """
        self._begin()
        self._upper = upper

        a = self._working_copy(matrix)
        if a is None:
            self._store = None
            return self._finish(False)

        n = a.shape[0]
        self._store = torch.empty(2, n, n, dtype=a.dtype, device=a.device)
        self._store[0].copy_(a)
        self._store[1].copy_(torch.eye(n, dtype=a.dtype, device=a.device))

        work = self._store[0] if upper else self._store[0].mT
        q = self._store[1]

        for k in range(n - 2):
            reflector = householder_reflector(work[k + 1 :, k], 0)
            if reflector is None:
                continue

            v, tau, beta = reflector

            rows = work[k + 1 :, k:]
            rows -= torch.outer(tau * v, v @ rows)

            columns = work[:, k + 1 :]
            columns -= torch.outer(columns @ v, tau * v)

            work[k + 1, k] = beta
            work[k + 2 :, k] = 0

            trailing = q[:, k + 1 :]
            trailing -= torch.outer(trailing @ v, tau * v)

        return self._finish(True)

    def decompose(self, matrix) -> bool:
        return self.compute(matrix, upper=True)

    def get_h(self) -> Tensor:
        self._require_computed()
        return self._store[0]

    def get_q(self) -> Tensor:
        self._require_computed()
        return self._store[1]

    def is_upper(self) -> bool:
        return self._upper


def hessenberg(a: Tensor, *, upper: bool = True) -> HessenbergResult:
    r"""
    Hessenberg decomposition.

    Computes the Hessenberg decomposition :math:`A = QHQ^T` where :math:`H` is
    upper Hessenberg (has zeros below the first subdiagonal) and :math:`Q` is
    orthogonal. With ``upper=False`` :math:`H` is lower Hessenberg instead
    (zeros above the first superdiagonal).

    The Hessenberg form is useful as an intermediate step in eigenvalue
    algorithms since it preserves eigenvalues while having a simpler structure
    than a general matrix.

    Parameters
    ----------
    a : Tensor
        Input matrix of shape (..., n, n). Integer tensors are promoted to
        float64.
    upper : bool, default=True
        Whether to compute the upper or the lower Hessenberg form.

    Returns
    -------
    HessenbergResult
        A named tuple containing:

        - **H** (*Tensor*) - Hessenberg matrix of shape (..., n, n).
        - **Q** (*Tensor*) - Orthogonal transformation matrix of shape
          (..., n, n). Satisfies :math:`Q Q^T = Q^T Q = I`.
        - **info** (*Tensor*) - Integer tensor of shape (...). A value of 0
          indicates successful computation.

    Raises
    ------
    ValueError
        If input is not at least 2D, not square, or complex.

    Notes
    -----
    The decomposition is computed using Householder reflections. For a matrix
    :math:`A` of size :math:`n \times n`, the algorithm applies at most
    :math:`n-2` Householder transformations. Entries eliminated by a
    reflection are stored as exact zeros.

    Examples
    --------
    >>> import torch
    >>> from torchreduction.linear_algebra.decomposition import hessenberg
    >>> a = torch.tensor([[1., 2., 3.], [4., 5., 6.], [7., 8., 9.]])
    >>> result = hessenberg(a)
    >>> torch.allclose(result.Q @ result.H @ result.Q.mT, a, atol=1e-5)
    True
    """
    a = torch.as_tensor(a)
    if a.dim() < 2:
        raise ValueError(f"hessenberg: a must be at least 2D, got {a.dim()}D")
    if a.shape[-2] != a.shape[-1]:
        raise ValueError(f"hessenberg: a must be square, got shape {a.shape}")
    if a.is_complex():
        raise ValueError(
            f"hessenberg: complex input is not supported, got {a.dtype}"
        )

    batch_shape = a.shape[:-2]
    n = a.shape[-1]

    reducer = HessenbergReducer()
    H, Q = [], []
    for matrix in a.reshape(math.prod(batch_shape), n, n):
        reducer.compute(matrix, upper=upper)
        H.append(reducer.get_h().clone())
        Q.append(reducer.get_q().clone())

    dtype = a.dtype if a.is_floating_point() else torch.float64
    if H:
        H = torch.stack(H).reshape(*batch_shape, n, n)
        Q = torch.stack(Q).reshape(*batch_shape, n, n)
    else:
        H = torch.empty(*batch_shape, n, n, dtype=dtype, device=a.device)
        Q = torch.empty(*batch_shape, n, n, dtype=dtype, device=a.device)

    info = torch.zeros(batch_shape, dtype=torch.int32, device=a.device)

    return HessenbergResult(H=H, Q=Q, info=info)
