"""Orthogonal-similarity reductions and pivoting support.

Functions
---------
hessenberg
    Computes the Hessenberg decomposition A = QHQ^T where Q is orthogonal and
    H is upper Hessenberg (zeros below the first subdiagonal) or lower
    Hessenberg (zeros above the first superdiagonal).

tridiagonal
    Reduces a symmetric matrix to tridiagonal form A = QTQ^T, accumulating Q
    either in the same pass as the reduction or in a separate pass.

pivoted_lu
    Computes the pivoted LU decomposition A[pivots] = LU, recording the row
    exchanges and their sign in a PermutationTracker.

lu_determinant
    Determinant of a square matrix from its pivoted LU factors.

Reducers
--------
SimultaneousTridiagonalReducer
    Tridiagonal reducer that applies every reflector to Q as it goes and
    returns its own buffer as Q.

DeferredTridiagonalReducer
    Tridiagonal reducer that stores the reflectors and accumulates Q after
    the reduction, in the same storage.

HessenbergReducer
    Upper or lower Hessenberg reducer.

ReductionState
    Abstract contract of the tridiagonal reducers.

PermutationTracker
    Row ordering and permutation sign under pairwise swaps.

Result Types
------------
HessenbergResult
    Named tuple with H, Q, info.

TridiagonalResult
    Named tuple with diagonal, off_diagonal, Q, info.

PivotedLUResult
    Named tuple with L, U, pivots, sign, info.
"""

from torchreduction.linear_algebra.decomposition._decomposition_state import (
    Decomposition,
    DecompositionStatus,
)
from torchreduction.linear_algebra.decomposition._deferred_tridiagonal import (
    DeferredTridiagonalReducer,
)
from torchreduction.linear_algebra.decomposition._exceptions import (
    DecompositionError,
    NotComputedError,
)
from torchreduction.linear_algebra.decomposition._hessenberg import (
    HessenbergReducer,
    hessenberg,
)
from torchreduction.linear_algebra.decomposition._householder import (
    HouseholderReflector,
    householder_reflector,
)
from torchreduction.linear_algebra.decomposition._permutation_tracker import (
    PermutationTracker,
)
from torchreduction.linear_algebra.decomposition._pivoted_lu import (
    lu_determinant,
    pivoted_lu,
)
from torchreduction.linear_algebra.decomposition._reduction_state import (
    ReductionState,
)
from torchreduction.linear_algebra.decomposition._result_types import (
    HessenbergResult,
    PivotedLUResult,
    TridiagonalResult,
)
from torchreduction.linear_algebra.decomposition._simultaneous_tridiagonal import (
    SimultaneousTridiagonalReducer,
)
from torchreduction.linear_algebra.decomposition._tolerances import (
    default_tolerance,
)
from torchreduction.linear_algebra.decomposition._tridiagonal import (
    tridiagonal,
)

__all__ = [
    "Decomposition",
    "DecompositionError",
    "DecompositionStatus",
    "DeferredTridiagonalReducer",
    "HessenbergReducer",
    "HessenbergResult",
    "HouseholderReflector",
    "NotComputedError",
    "PermutationTracker",
    "PivotedLUResult",
    "ReductionState",
    "SimultaneousTridiagonalReducer",
    "TridiagonalResult",
    "default_tolerance",
    "hessenberg",
    "householder_reflector",
    "lu_determinant",
    "pivoted_lu",
    "tridiagonal",
]
