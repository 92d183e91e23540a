"""Tridiagonal reduction with the orthogonal factor accumulated afterwards."""

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._householder import (
    householder_reflector,
)
from torchreduction.linear_algebra.decomposition._reduction_state import (
    ReductionState,
)


class DeferredTridiagonalReducer(ReductionState):
    r"""
    Symmetric tridiagonal reduction with a separate accumulation pass.

    The reducer owns a single ``n x n`` store. During the reduction the
    Householder vector of step ``i`` is kept in row ``i`` left of the
    diagonal, a region no later step touches. Once ``D`` and ``E`` have been
    read off, the store is overwritten in place with

    .. math::

        Q = P_{n-1} P_{n-2} \cdots P_2

    by applying the stored reflectors from the left in ascending order,
    growing the finished block of ``Q`` by one row and column per step.

    Produces the same ``D`` and ``Q`` as
    :class:`SimultaneousTridiagonalReducer` up to rounding.
    """

    def _reduce(self, a: Tensor) -> bool:
        n = a.shape[0]

        self._store = a
        work = self._store
        taus = torch.zeros(n, dtype=a.dtype, device=a.device)
        self._e = torch.zeros(n, dtype=a.dtype, device=a.device)

        for i in range(n - 1, 0, -1):
            reflector = (
                householder_reflector(work[i, :i], i - 1) if i > 1 else None
            )
            if reflector is None:
                self._e[i] = work[i, i - 1]
                continue

            v, tau, beta = reflector

            block = work[:i, :i]
            p = tau * (block @ v)
            w = p - (0.5 * tau * torch.dot(v, p)) * v
            block -= torch.outer(v, w) + torch.outer(w, v)

            self._e[i] = beta
            taus[i] = tau
            work[i, :i] = v

        self._d = work.diagonal().clone()

        self._accumulate(taus)

        return True

    def _accumulate(self, taus: Tensor) -> None:
        work = self._store
        n = work.shape[0]
        m = min(n, 2)

        # Rows below i still hold the reflectors of later steps.
        work[:m, :m] = torch.eye(m, dtype=work.dtype, device=work.device)

        for i in range(2, n):
            q = work[:i, :i]
            v = work[i, :i].clone()
            q -= torch.outer(taus[i] * v, v @ q)

            work[i, :i] = 0
            work[:i, i] = 0
            work[i, i] = 1

    def make_d(self) -> Tensor:
        return self._tridiagonal_matrix()

    def make_q(self) -> Tensor:
        return self._store
