"""Tests for the reducer lifecycle."""

import pytest
import torch

from torchreduction.linear_algebra.decomposition import (
    DecompositionError,
    DecompositionStatus,
    DeferredTridiagonalReducer,
    HessenbergReducer,
    NotComputedError,
    ReductionState,
    SimultaneousTridiagonalReducer,
)


class _RecordingReducer(ReductionState):
    """Reducer that checks the status seen while the reduction runs."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def _reduce(self, a):
        self.seen.append(self.status)
        self._store = a
        self._d = a.diagonal().clone()
        self._e = torch.zeros_like(self._d)
        return True

    def make_d(self):
        return torch.diag(self._d)

    def make_q(self):
        return torch.eye(self._d.numel(), dtype=self._d.dtype)


class TestDecompositionStatus:
    """Tests for the shared state machine."""

    def test_not_computed_error_is_decomposition_error(self):
        assert issubclass(NotComputedError, DecompositionError)
        assert issubclass(DecompositionError, RuntimeError)

    def test_reduction_state_is_abstract(self):
        with pytest.raises(TypeError):
            ReductionState()

    def test_stale_during_computation(self):
        reducer = _RecordingReducer()
        reducer.decompose(torch.eye(2))
        reducer.get_d()

        reducer.decompose(torch.eye(3))

        assert reducer.seen == [
            DecompositionStatus.STALE,
            DecompositionStatus.STALE,
        ]
        assert reducer.status is DecompositionStatus.COMPUTED
        assert reducer.get_d().shape == (3, 3)

    def test_views_cached_until_next_decompose(self):
        reducer = _RecordingReducer()
        reducer.decompose(torch.eye(2))

        first = reducer.get_d()
        assert reducer.get_d() is first

        reducer.decompose(torch.eye(2))
        assert reducer.get_d() is not first

    def test_min_dimension(self):
        reducer = _RecordingReducer()
        assert reducer.min_dimension == 0

        reducer.decompose(torch.eye(4))

        assert reducer.min_dimension == 4

    @pytest.mark.parametrize(
        "reducer_cls",
        [
            SimultaneousTridiagonalReducer,
            DeferredTridiagonalReducer,
            HessenbergReducer,
        ],
    )
    def test_lifecycle(self, reducer_cls):
        reducer = reducer_cls()
        assert reducer.status is DecompositionStatus.UNINITIALIZED
        assert not reducer.is_computed()

        assert reducer.decompose(torch.eye(3, dtype=torch.float64))
        assert reducer.status is DecompositionStatus.COMPUTED
        assert reducer.is_computed()

        assert not reducer.decompose(torch.ones(2, 3))
        assert reducer.status is DecompositionStatus.FAILED
        with pytest.raises(NotComputedError):
            reducer.get_q()

        assert reducer.decompose(torch.eye(3, dtype=torch.float64))
        assert reducer.is_computed()

        reducer.reset()
        assert reducer.status is DecompositionStatus.UNINITIALIZED
