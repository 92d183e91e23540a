"""Householder reflectors."""

from typing import NamedTuple, Optional

import torch
from torch import Tensor


class HouseholderReflector(NamedTuple):
    """Elementary reflector ``P = I - tau * v v^T``.

    ``P @ x`` equals ``beta`` at the pivot position and zero elsewhere.
    """

    vector: Tensor
    tau: Tensor
    beta: Tensor


def householder_reflector(
    x: Tensor, pivot: int
) -> Optional[HouseholderReflector]:
    r"""
    Build the reflector mapping ``x`` onto a multiple of the pivot unit vector.

    Parameters
    ----------
    x : Tensor
        1-D real tensor to be reflected. Not modified.
    pivot : int
        Index of the entry that is kept; all other entries are annihilated.

    Returns
    -------
    HouseholderReflector or None
        ``None`` when the entries to be annihilated are already (numerically)
        zero. The caller treats this as the identity reflector and skips the
        step.

    Notes
    -----
    To avoid cancellation in :math:`v_p = x_p - \beta` the reflected value
    takes the sign opposite to the pivot, :math:`\beta = -\mathrm{sign}(x_p)
    \|x\|`, so that :math:`v_p = x_p + \mathrm{sign}(x_p) \|x\|`.
    """
    scale = x.abs().max()
    if scale == 0:
        return None

    # The reflector is invariant under scaling of v; working on x / scale
    # keeps v^T v >= 1 and away from underflow.
    y = x / scale
    alpha = y[pivot]

    rest = y.clone()
    rest[pivot] = 0
    sigma = torch.linalg.vector_norm(rest)

    if sigma <= torch.finfo(x.dtype).tiny:
        return None

    norm = torch.hypot(alpha, sigma)
    beta = -torch.copysign(norm, alpha)

    vector = rest
    vector[pivot] = alpha - beta
    tau = 2.0 / torch.dot(vector, vector)

    return HouseholderReflector(vector=vector, tau=tau, beta=beta * scale)
