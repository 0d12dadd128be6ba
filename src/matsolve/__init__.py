"""
matsolve - Incremental square linear system solver
===================================================

Build a system one equation at a time, then solve it with Gaussian
elimination and partial pivoting (Numba JIT kernels).

Quick start:
    import matsolve

    eqs = matsolve.EquationSet(2)
    eqs.add_equation([8.0, -6.0], 2.0)
    eqs.add_equation([2.0, 3.0], 2.0)

    solution = matsolve.solve(eqs)
    solution.x          # array([0.5, 0.33333333])

    # Inspect structure and conditioning first
    report = matsolve.detect_system(eqs)

License: MIT
"""

__version__ = "0.1.0"

from matsolve.equation import Equation
from matsolve.builder import EquationSet
from matsolve.solver import Solution, solve, solve_matrix, default_rtol
from matsolve.detector import detect_system
from matsolve.polynomial import Polynomial
from matsolve.errors import (
    MatSolveError, InvalidDimensionError, DimensionMismatchError,
    NonFiniteValueError, SetAlreadyFullError, NotReadyError,
    SingularSystemError, DependentSystemError, InconsistentSystemError,
    PolynomialBuildError, PolynomialEvaluationError,
)

__all__ = [
    "Equation", "EquationSet", "Solution", "solve", "solve_matrix",
    "default_rtol", "detect_system", "Polynomial",
    "MatSolveError", "InvalidDimensionError", "DimensionMismatchError",
    "NonFiniteValueError", "SetAlreadyFullError", "NotReadyError",
    "SingularSystemError", "DependentSystemError", "InconsistentSystemError",
    "PolynomialBuildError", "PolynomialEvaluationError",
]
