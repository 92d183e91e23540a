"""Lifecycle shared by all reducers."""

import enum
from typing import Callable, Dict, Optional

import torch
from torch import Tensor

from torchreduction.linear_algebra.decomposition._exceptions import (
    NotComputedError,
)


class DecompositionStatus(enum.Enum):
    """State of a reducer instance.

    ``STALE`` is entered as soon as a new computation starts, so views
    from a previous run are never served while the store is overwritten.
    """

    UNINITIALIZED = "uninitialized"
    STALE = "stale"
    COMPUTED = "computed"
    FAILED = "failed"


class Decomposition:
    """Owns the in-place store and guards the lazily built derived views."""

    def __init__(self):
        self._store: Optional[Tensor] = None
        self._status = DecompositionStatus.UNINITIALIZED
        self._views: Dict[str, Tensor] = {}

    @property
    def status(self) -> DecompositionStatus:
        return self._status

    def is_computed(self) -> bool:
        return self._status is DecompositionStatus.COMPUTED

    def reset(self) -> None:
        """Drop the store and all derived views."""
        self._store = None
        self._views.clear()
        self._status = DecompositionStatus.UNINITIALIZED

    def _begin(self) -> None:
        self._views.clear()
        self._status = DecompositionStatus.STALE

    def _finish(self, success: bool) -> bool:
        if success:
            self._status = DecompositionStatus.COMPUTED
        else:
            self._status = DecompositionStatus.FAILED
        return success

    def _require_computed(self) -> None:
        if self._status is not DecompositionStatus.COMPUTED:
            raise NotComputedError(
                f"{type(self).__name__} has no valid decomposition "
                f"(status: {self._status.value})"
            )

    def _view(self, name: str, factory: Callable[[], Tensor]) -> Tensor:
        self._require_computed()
        if name not in self._views:
            self._views[name] = factory()
        return self._views[name]

    @staticmethod
    def _working_copy(matrix) -> Optional[Tensor]:
        """Copy ``matrix`` into a fresh real floating-point tensor.

        Returns ``None`` when the input is not a real square matrix.
        """
        a = torch.as_tensor(matrix)
        if a.dim() != 2 or a.shape[0] != a.shape[1]:
            return None
        if a.is_complex():
            return None
        if not a.is_floating_point():
            a = a.to(torch.float64)
        return a.detach().clone(memory_format=torch.contiguous_format)
