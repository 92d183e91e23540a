"""Tests for Householder reflectors."""

import pytest
import torch

from torchreduction.linear_algebra.decomposition import (
    HouseholderReflector,
    householder_reflector,
)


def as_matrix(reflector: HouseholderReflector) -> torch.Tensor:
    v, tau, _ = reflector
    n = v.numel()
    return torch.eye(n, dtype=v.dtype) - tau * torch.outer(v, v)


class TestHouseholderReflector:
    """Tests for householder_reflector."""

    @pytest.mark.parametrize("pivot", [0, 2, 4])
    def test_annihilates_all_but_pivot(self, pivot):
        torch.manual_seed(1)
        x = torch.randn(5, dtype=torch.float64)

        reflector = householder_reflector(x, pivot)

        expected = torch.zeros(5, dtype=torch.float64)
        expected[pivot] = reflector.beta
        torch.testing.assert_close(
            as_matrix(reflector) @ x, expected, rtol=1e-12, atol=1e-12
        )

    def test_orthogonal_and_symmetric(self):
        torch.manual_seed(2)
        x = torch.randn(6, dtype=torch.float64)

        p = as_matrix(householder_reflector(x, 0))

        torch.testing.assert_close(p, p.mT)
        torch.testing.assert_close(
            p @ p, torch.eye(6, dtype=torch.float64), rtol=1e-12, atol=1e-12
        )

    @pytest.mark.parametrize("alpha", [3.0, -3.0])
    def test_beta_sign_opposes_pivot(self, alpha):
        """The reflected value has the opposite sign of the pivot entry."""
        x = torch.tensor([alpha, 4.0], dtype=torch.float64)

        reflector = householder_reflector(x, 0)

        assert reflector.beta.item() == pytest.approx(
            -5.0 if alpha > 0 else 5.0
        )
        # v[pivot] = alpha + sign(alpha) * norm, up to scaling of v.
        assert reflector.vector[0].item() * alpha > 0
        assert abs(reflector.vector[0].item()) > abs(reflector.vector[1].item())

    def test_preserves_norm(self):
        x = torch.tensor([1.0, 2.0, 2.0], dtype=torch.float64)

        reflector = householder_reflector(x, 1)

        assert abs(reflector.beta.item()) == pytest.approx(3.0)

    def test_zero_subvector_returns_none(self):
        x = torch.tensor([0.0, 7.0, 0.0], dtype=torch.float64)

        assert householder_reflector(x, 1) is None

    def test_zero_vector_returns_none(self):
        assert householder_reflector(torch.zeros(4), 0) is None

    def test_tiny_entries(self):
        """Entries far below the square root of the underflow limit."""
        x = torch.tensor([1e-200, 1e-200, 1e-200], dtype=torch.float64)

        reflector = householder_reflector(x, 0)

        assert reflector is not None
        assert torch.isfinite(reflector.tau)
        assert abs(reflector.beta.item()) == pytest.approx(
            3**0.5 * 1e-200, rel=1e-12
        )

    def test_input_not_modified(self):
        x = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)

        householder_reflector(x, 0)

        assert x.tolist() == [1.0, 2.0, 3.0]
