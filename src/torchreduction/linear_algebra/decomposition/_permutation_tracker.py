"""Row permutation tracking for pivoted factorizations."""

import torch
from torch import Tensor


class PermutationTracker:
    """Mutable row ordering together with the sign of the permutation.

    Pivoted factorizations exchange rows as they eliminate. The tracker
    records the resulting ordering so that row ``i`` of the factorized
    matrix is row ``order()[i]`` of the original, and keeps the parity of
    the permutation so determinants can be recovered from the factors.

    Parameters
    ----------
    n : int
        Number of rows to track.

    Examples
    --------
    >>> tracker = PermutationTracker(4)
    >>> tracker.swap(0, 2)
    >>> tracker.order()
    tensor([2, 1, 0, 3])
    >>> tracker.signum()
    -1
    >>> tracker.inverse_order()
    tensor([2, 1, 0, 3])
    """

    def __init__(self, n: int):
        self.initialize(n)

    def initialize(self, n: int) -> None:
        """Reset to the identity permutation of size ``n``."""
        self._order = torch.arange(n, dtype=torch.int64)
        self._sign = 1
        self._modified = False

    def swap(self, i: int, j: int) -> None:
        """Exchange the entries at positions ``i`` and ``j``.

        Swapping a position with itself changes nothing, neither the sign
        nor the modified flag.
        """
        if i == j:
            return

        self._order[[i, j]] = self._order[[j, i]]
        self._sign = -self._sign
        self._modified = True

    def order(self) -> Tensor:
        """Current permutation.

        The returned tensor is the tracker's own storage; it changes with
        subsequent calls to :meth:`swap`.
        """
        return self._order

    def inverse_order(self) -> Tensor:
        """Inverse permutation ``inv`` with ``inv[order[i]] == i``."""
        inverse = torch.empty_like(self._order)
        inverse[self._order] = torch.arange(
            self._order.numel(), dtype=self._order.dtype
        )
        return inverse

    def is_modified(self) -> bool:
        return self._modified

    def signum(self) -> int:
        return self._sign

    @property
    def size(self) -> int:
        return self._order.numel()

    def to_matrix(
        self, dtype: torch.dtype = torch.float64, device=None
    ) -> Tensor:
        """Permutation matrix ``P`` with ``P[i, order[i]] == 1``.

        For a matrix ``a`` whose rows were exchanged alongside the tracker,
        ``P @ a`` equals the permuted matrix ``a[order]``.
        """
        n = self.size
        p = torch.zeros(n, n, dtype=dtype, device=device)
        p[torch.arange(n), self._order.to(p.device)] = 1
        return p

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return (
            f"PermutationTracker(order={self._order.tolist()}, "
            f"sign={self._sign}, modified={self._modified})"
        )
