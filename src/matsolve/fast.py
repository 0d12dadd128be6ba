"""
matsolve fast: Numba JIT-compiled kernels for the elimination hot loops.

Forward elimination and back-substitution are O(n^3) and O(n^2) scalar
loops; compiling them with numba gives C speed without leaving Python.
The kernels work in place on float64 arrays the caller already owns and
report failures through integer return codes, which the solver turns
into exceptions.
"""

import numpy as np
from numba import njit


# ============================================================
# Pivot search
# ============================================================

@njit(cache=True)
def pivot_row_jit(a, k):
    """Row index in k..n-1 with the largest |a[r, k]|.

    Ties keep the topmost row, so the choice is deterministic.

    Parameters
    ----------
    a : 2D float64 array
        Working matrix.
    k : int
        Pivot column.

    Returns
    -------
    int64
        Index of the pivot row.
    """
    n = a.shape[0]
    best_row = k
    best = abs(a[k, k])
    for r in range(k + 1, n):
        v = abs(a[r, k])
        if v > best:
            best = v
            best_row = r
    return best_row


# ============================================================
# Forward elimination with partial pivoting
# ============================================================

@njit(cache=True)
def forward_eliminate_jit(a, b, tol):
    """Reduce a to upper triangular form in place, mirroring ops on b.

    Rows are swapped to bring the largest candidate into the pivot
    position; columns are never permuted.

    Parameters
    ----------
    a : 2D float64 array, shape (n, n)
        Working coefficient matrix, modified in place.
    b : 1D float64 array, shape (n,)
        Working right-hand side, modified in place.
    tol : float
        Pivots with magnitude <= tol are treated as zero.

    Returns
    -------
    status : int64
        -1 on success, otherwise the column where no usable pivot exists.
    swaps : int64
        Number of row interchanges performed.
    """
    n = a.shape[0]
    swaps = 0
    for k in range(n):
        p = pivot_row_jit(a, k)
        if abs(a[p, k]) <= tol:
            return k, swaps

        if p != k:
            for c in range(n):
                tmp = a[k, c]
                a[k, c] = a[p, c]
                a[p, c] = tmp
            tmp = b[k]
            b[k] = b[p]
            b[p] = tmp
            swaps += 1

        pivot = a[k, k]
        for r in range(k + 1, n):
            f = a[r, k] / pivot
            if f != 0.0:
                a[r, k] = 0.0
                for c in range(k + 1, n):
                    a[r, c] -= f * a[k, c]
                b[r] -= f * b[k]
    return -1, swaps


# ============================================================
# Back-substitution
# ============================================================

@njit(cache=True)
def back_substitute_jit(a, b):
    """Solve an upper triangular system with nonzero diagonal.

    Parameters
    ----------
    a : 2D float64 array, shape (n, n)
        Upper triangular matrix.
    b : 1D float64 array, shape (n,)
        Right-hand side.

    Returns
    -------
    1D float64 array
        Solution x.
    """
    n = a.shape[0]
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        s = b[i]
        for j in range(i + 1, n):
            s -= a[i, j] * x[j]
        x[i] = s / a[i, i]
    return x


def warmup():
    """Trigger JIT compilation with a small dummy system.

    Call this once at startup to keep compilation overhead out of the
    first real solve.
    """
    a = np.array([[2.0, 1.0], [1.0, 3.0]], dtype=np.float64)
    b = np.array([1.0, 2.0], dtype=np.float64)
    forward_eliminate_jit(a, b, 0.0)
    back_substitute_jit(a, b)
