"""Tridiagonal reduction with the orthogonal factor accumulated in-pass."""

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._householder import (
    householder_reflector,
)
from torchreduction.linear_algebra.decomposition._reduction_state import (
    ReductionState,
)


class SimultaneousTridiagonalReducer(ReductionState):
    r"""
    Symmetric tridiagonal reduction accumulating ``Q`` in the same pass.

    The reducer owns a single buffer of shape ``(2, n, n)``. Slot ``0`` is
    the elimination workspace, slot ``1`` is the orthogonal factor. Each
    Householder reflector :math:`P_i` is applied to both sides of the
    trailing block of the workspace and, in the same step, to ``Q`` from
    the right, so that after the last step

    .. math::

        Q = P_{n-1} P_{n-2} \cdots P_2, \qquad T = Q^T A Q.

    No backward accumulation pass is needed and :meth:`make_q` returns slot
    ``1`` of the buffer itself.

    Only symmetric input is meaningful; symmetry is not checked.

    Examples
    --------
    >>> import torch
    >>> reducer = SimultaneousTridiagonalReducer()
    >>> reducer.decompose(torch.tensor([[4., 1., 2.], [1., 3., 0.], [2., 0., 1.]]))
    True
    >>> q, t = reducer.get_q(), reducer.get_d()
    """

    def _reduce(self, a: Tensor) -> bool:
        n = a.shape[0]

        self._store = torch.empty(2, n, n, dtype=a.dtype, device=a.device)
        work = self._store[0]
        q = self._store[1]
        work.copy_(a)
        q.copy_(torch.eye(n, dtype=a.dtype, device=a.device))

        for i in range(n - 1, 1, -1):
            reflector = householder_reflector(work[i, :i], i - 1)
            if reflector is None:
                continue

            v, tau, beta = reflector

            # P A P on the leading i x i block as a symmetric rank-2 update.
            block = work[:i, :i]
            p = tau * (block @ v)
            w = p - (0.5 * tau * torch.dot(v, p)) * v
            block -= torch.outer(v, w) + torch.outer(w, v)

            work[i, :i] = 0
            work[:i, i] = 0
            work[i, i - 1] = beta
            work[i - 1, i] = beta

            q[:, :i] -= torch.outer(tau * (q[:, :i] @ v), v)

        self._d = work.diagonal().clone()
        self._e = torch.zeros_like(self._d)
        if n > 1:
            self._e[1:] = work.diagonal(-1)

        return True

    def make_d(self) -> Tensor:
        return self._tridiagonal_matrix()

    def make_q(self) -> Tensor:
        return self._store[1]
