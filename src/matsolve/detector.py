"""
matsolve Detector: structure and conditioning report for a linear system.

Analyzes an EquationSet (in any state) or a square matrix and returns a
report with:
  - Shape, fill state, density
  - Scale of the entries and the default pivot tolerance
  - Condition number and whether elimination is likely to be accurate

Usage:
    import matsolve
    report = matsolve.detect_system(eqs)
    print(report["reason"])
"""

import numpy as np
from scipy import sparse

from matsolve.builder import EquationSet
from matsolve.solver import default_rtol


def detect_system(system):
    """
    Analyze a linear system before solving it.

    Parameters
    ----------
    system : EquationSet, numpy.ndarray or scipy.sparse matrix
        The system (or bare coefficient matrix) to analyze.

    Returns
    -------
    dict
        Structure report with shape, density, scale, tolerance, cond.
    """
    if isinstance(system, EquationSet):
        A = system.coefficients
        n = system.dimension
        rows_filled = system.rows_filled
        state = system.state
        ready = system.is_ready()
    else:
        A = system.toarray() if sparse.issparse(system) else np.asarray(system, dtype=float)
        n = A.shape[1] if A.ndim == 2 else 0
        rows_filled = A.shape[0] if A.ndim == 2 else 0
        state = "matrix"
        ready = A.ndim == 2 and A.shape[0] == A.shape[1] and n > 0

    total = rows_filled * n
    nnz = int(np.count_nonzero(A))
    density = nnz / total if total > 0 else 0
    scale = float(np.max(np.abs(A))) if A.size else 0.0
    tolerance = default_rtol(n) * scale

    report = {
        "shape": (n, n) if isinstance(system, EquationSet) else A.shape,
        "rows_filled": rows_filled,
        "state": state,
        "nnz": nnz,
        "density": round(density, 6),
        "is_square": bool(A.ndim == 2 and (isinstance(system, EquationSet)
                                           or A.shape[0] == A.shape[1])),
        "scale": scale,
        "tolerance": tolerance,
    }

    if not ready:
        report["cond"] = None
        report["well_conditioned"] = None
        report["reason"] = (f"Incomplete ({rows_filled} of {n} equations), "
                            f"cannot judge conditioning")
        return report

    with np.errstate(divide="ignore", invalid="ignore"):
        cond = float(np.linalg.cond(A))
    eps = float(np.finfo(np.float64).eps)

    if not np.isfinite(cond):
        well = False
        reason = "Singular matrix, no unique solution"
    elif cond * eps < 1e-3:
        well = True
        reason = f"Well conditioned (cond={cond:.2e}), pivoted elimination accurate"
    else:
        well = False
        reason = (f"Ill conditioned (cond={cond:.2e}), expect to lose "
                  f"~{int(np.log10(cond))} digits")

    report["cond"] = cond
    report["well_conditioned"] = well
    report["reason"] = reason
    return report
