"""torchreduction: orthogonal-similarity reductions for PyTorch tensors."""

from . import linear_algebra, testing

__all__ = [
    "linear_algebra",
    "testing",
]

__version__ = "0.1.0"
