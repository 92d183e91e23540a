"""Contract shared by the symmetric tridiagonal reducers."""

from abc import ABC, abstractmethod
from typing import Optional

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._decomposition_state import (
    Decomposition,
)


class ReductionState(Decomposition, ABC):
    r"""Orthogonal-similarity reduction of a symmetric matrix.

    A concrete reducer copies the input into its in-place store, runs its
    elimination sequence and records the tridiagonal form as a diagonal
    ``D`` and an off-diagonal ``E``, both of length ``n``. ``E[0]`` is
    always zero and ``E[k]`` couples rows ``k - 1`` and ``k``, so the
    reduced matrix is

    .. math::

        T = \mathrm{diag}(D) + \mathrm{diag}(E_{1:}, -1)
            + \mathrm{diag}(E_{1:}, 1) = Q^T A Q.

    Implementations differ in how (and where) they accumulate ``Q``.
    """

    def __init__(self):
        super().__init__()
        self._d: Optional[Tensor] = None
        self._e: Optional[Tensor] = None

    @property
    def min_dimension(self) -> int:
        if self._d is None:
            return 0
        return self._d.numel()

    def decompose(self, matrix) -> bool:
        """Reduce ``matrix`` to tridiagonal form.

        Returns ``False`` (and leaves the reducer in the ``FAILED`` state)
        if ``matrix`` is not a real square matrix.
        """
        self._begin()
        self._d = None
        self._e = None

        a = self._working_copy(matrix)
        if a is None:
            self._store = None
            return self._finish(False)

        return self._finish(self._reduce(a))

    @abstractmethod
    def _reduce(self, a: Tensor) -> bool:
        """Run the elimination on the working copy ``a`` and set ``D``/``E``."""
        ...

    def supply_diagonal_to(self, d: Tensor, e: Tensor) -> bool:
        """Copy ``D`` and ``E`` into caller-provided 1-D tensors.

        Returns ``False`` if either buffer does not have ``min_dimension``
        entries.
        """
        self._require_computed()
        n = self.min_dimension
        if d.numel() != n or e.numel() != n:
            return False
        with torch.no_grad():
            d.copy_(self._d.reshape(d.shape))
            e.copy_(self._e.reshape(e.shape))
        return True

    @abstractmethod
    def make_d(self) -> Tensor:
        """Build the tridiagonal matrix view from ``D`` and ``E``."""
        ...

    @abstractmethod
    def make_q(self) -> Tensor:
        """Build (or expose) the orthogonal factor ``Q``."""
        ...

    def get_d(self) -> Tensor:
        return self._view("D", self.make_d)

    def get_q(self) -> Tensor:
        return self._view("Q", self.make_q)

    def get_diagonal(self) -> Tensor:
        self._require_computed()
        return self._d

    def get_off_diagonal(self) -> Tensor:
        self._require_computed()
        return self._e

    def _tridiagonal_matrix(self) -> Tensor:
        t = torch.diag(self._d)
        if self._e.numel() > 1:
            t = t + torch.diag(self._e[1:], -1) + torch.diag(self._e[1:], 1)
        return t
