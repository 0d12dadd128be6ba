"""
matsolve Solver: Gaussian elimination with partial pivoting.

Solves the square system held by a ready EquationSet:
  1. Copy A and b (the set itself is never modified)
  2. Forward elimination, swapping in the largest pivot of each column
  3. Back-substitution from the last row upwards

A pivot counts as zero when |pivot| <= rtol * max|a_ij|, so the
singularity test follows the scale of the data instead of a fixed
cutoff. Singular systems are classified as dependent (infinitely many
solutions) or inconsistent (none) by comparing rank(A) with rank([A|b]).

Usage:
    import matsolve
    eqs = matsolve.EquationSet(2)
    eqs.add_equation([8, -6], 2).add_equation([2, 3], 2)
    x = matsolve.solve(eqs).x
"""

import sys
import time
from dataclasses import dataclass

import numpy as np

from matsolve import fast as _fast
from matsolve.builder import EquationSet
from matsolve.errors import (
    NotReadyError, SingularSystemError, DependentSystemError,
    InconsistentSystemError,
)

BACKENDS = ("numba", "numpy")
DEFAULT_BACKEND = "numba"


def default_rtol(n):
    """Relative pivot tolerance for an n x n system: n * float64 epsilon."""
    return n * float(np.finfo(np.float64).eps)


@dataclass(frozen=True)
class Solution:
    """
    Unique solution of a linear system.

    Fields
    ------
    x : numpy.ndarray
        Solution vector; x[i] is the i-th unknown in declared order.
    residual : float
        ||A x - b||_2 on the original system.
    tolerance : float
        Absolute pivot threshold used during elimination.
    swaps : int
        Number of row interchanges made by partial pivoting.
    backend : str
        'numba' or 'numpy'.
    time : float
        Wall time of the solve in seconds.
    """
    x: np.ndarray
    residual: float
    tolerance: float
    swaps: int
    backend: str
    time: float

    def __post_init__(self):
        self.x.flags.writeable = False

    def __len__(self):
        return len(self.x)

    def __getitem__(self, i):
        return self.x[i]

    def __iter__(self):
        return iter(self.x)

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self.x, dtype=dtype)
        return np.asarray(self.x, dtype=dtype)

    def tolist(self):
        return self.x.tolist()


# ============================================================
# NumPy backend: same algorithm, vectorised row operations
# ============================================================

def _forward_eliminate_numpy(a, b, tol):
    n = a.shape[0]
    swaps = 0
    for k in range(n):
        # argmax keeps the first maximum, like pivot_row_jit
        p = k + int(np.argmax(np.abs(a[k:, k])))
        if abs(a[p, k]) <= tol:
            return k, swaps

        if p != k:
            a[[k, p]] = a[[p, k]]
            b[[k, p]] = b[[p, k]]
            swaps += 1

        f = a[k + 1:, k] / a[k, k]
        a[k + 1:, k + 1:] -= np.outer(f, a[k, k + 1:])
        a[k + 1:, k] = 0.0
        b[k + 1:] -= f * b[k]
    return -1, swaps


def _back_substitute_numpy(a, b):
    n = a.shape[0]
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (b[i] - a[i, i + 1:] @ x[i + 1:]) / a[i, i]
    return x


def _classify_singular(A, b, column, pivot, tol):
    """Pick the SingularSystemError subclass describing A x = b."""
    n = A.shape[0]
    rank_a = int(np.linalg.matrix_rank(A))
    if rank_a == n:
        # numerically full rank, but a pivot fell under a user-chosen rtol
        return SingularSystemError(column, pivot, tol)
    rank_aug = int(np.linalg.matrix_rank(np.column_stack([A, b])))
    if rank_aug > rank_a:
        return InconsistentSystemError(column, pivot, tol)
    return DependentSystemError(column, pivot, tol)


def solve(equation_set, rtol=None, backend=DEFAULT_BACKEND, verbose=False):
    """
    Solve the system held by a ready EquationSet.

    Parameters
    ----------
    equation_set : EquationSet
        Set holding exactly `dimension` equations. Not modified.
    rtol : float, optional
        Relative pivot tolerance. A pivot is rejected when
        |pivot| <= rtol * max|a_ij|. Default: dimension * float64 eps.
    backend : str
        'numba' (JIT kernels, default) or 'numpy' (vectorised rows).
    verbose : bool
        Print size, tolerance and timing info.

    Returns
    -------
    Solution
        Solution vector plus diagnostics.

    Raises
    ------
    NotReadyError
        The set holds fewer than `dimension` equations.
    DependentSystemError, InconsistentSystemError, SingularSystemError
        No pivot above tolerance exists in some column.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")
    if not equation_set.is_ready():
        raise NotReadyError(equation_set.rows_filled, equation_set.dimension)

    n = equation_set.dimension
    if rtol is None:
        rtol = default_rtol(n)
    elif not np.isfinite(rtol) or rtol < 0:
        raise ValueError(f"rtol must be a non-negative finite number, got {rtol!r}")

    A, b = equation_set.as_arrays()
    scale = float(np.max(np.abs(A)))
    tol = rtol * scale

    if verbose:
        print(f"  [matsolve] {n:,} x {n:,}, scale={scale:.3e}, "
              f"tol={tol:.3e}, backend={backend}")
        sys.stdout.flush()

    t0 = time.time()
    a = A.copy()
    rhs = b.copy()
    if backend == "numba":
        status, swaps = _fast.forward_eliminate_jit(a, rhs, tol)
    else:
        status, swaps = _forward_eliminate_numpy(a, rhs, tol)
    status = int(status)

    if status >= 0:
        pivot = float(np.max(np.abs(a[status:, status])))
        err = _classify_singular(A, b, status, pivot, tol)
        if verbose:
            print(f"  [matsolve] SINGULAR at column {status}: {err}")
            sys.stdout.flush()
        raise err

    if backend == "numba":
        x = _fast.back_substitute_jit(a, rhs)
    else:
        x = _back_substitute_numpy(a, rhs)
    elapsed = time.time() - t0

    residual = float(np.linalg.norm(A @ x - b))

    if verbose:
        print(f"  [matsolve] res={residual:.2e}, swaps={int(swaps)} "
              f"[{elapsed:.4f}s]")
        sys.stdout.flush()

    return Solution(
        x=x,
        residual=residual,
        tolerance=tol,
        swaps=int(swaps),
        backend=backend,
        time=elapsed,
    )


def solve_matrix(A, b, **kwargs):
    """
    Solve A x = b given as arrays.

    Shortcut for ``solve(EquationSet.from_arrays(A, b), **kwargs)``.

    Parameters
    ----------
    A : array-like or scipy.sparse matrix, shape (n, n)
    b : array-like, shape (n,)

    Returns
    -------
    Solution
    """
    return solve(EquationSet.from_arrays(A, b), **kwargs)
