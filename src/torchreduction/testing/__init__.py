"""Testing utilities for torchreduction.

Provides hypothesis strategies that generate matrices and swap sequences
for property-based tests of the reductions and the permutation tracker.
"""

from . import strategies

__all__ = ["strategies"]
