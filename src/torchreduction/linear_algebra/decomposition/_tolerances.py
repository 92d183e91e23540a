"""Dtype-aware tolerances for the decomposition module."""

import torch


def default_tolerance(dtype: torch.dtype) -> float:
    """Return a dtype-appropriate default tolerance.

    Tolerances are chosen based on the number of significant digits
    available in each dtype:
    - bfloat16: ~3 digits (8-bit mantissa)
    - float16: ~3-4 digits (10-bit mantissa)
    - float32: ~7 digits (23-bit mantissa)
    - float64: ~16 digits (52-bit mantissa)

    Parameters
    ----------
    dtype : torch.dtype
        The tensor dtype.

    Returns
    -------
    float
        Absolute tolerance used for structural checks such as symmetry.
    """
    if dtype == torch.bfloat16:
        return 1e-2
    elif dtype == torch.float16:
        return 1e-3
    elif dtype == torch.float32:
        return 1e-6
    else:  # float64
        return 1e-12
