"""
matsolve errors: everything the engine raises.

Shape and value problems are ValueErrors, lifecycle problems (adding to a
full set, solving an unfinished one) and numerical failures are
RuntimeErrors. All of them share MatSolveError so callers can catch the
engine's failures in one place.
"""


class MatSolveError(Exception):
    """Base class for all matsolve errors."""


class InvalidDimensionError(MatSolveError, ValueError):
    """Raised when an equation set is requested with a non-positive dimension."""

    def __init__(self, dimension):
        self.dimension = dimension
        super().__init__(
            f"Dimension must be a positive integer, got {dimension!r}")


class DimensionMismatchError(MatSolveError, ValueError):
    """Raised when a row does not have exactly `dimension` coefficients."""

    def __init__(self, got, expected, message=None):
        self.got = got
        self.expected = expected
        if message is None:
            message = f"Row has {got} coefficients, expected {expected}"
        super().__init__(message)


class NonFiniteValueError(MatSolveError, ValueError):
    """Raised when a coefficient or right-hand side is NaN or infinite."""


class SetAlreadyFullError(MatSolveError, RuntimeError):
    """Raised when an equation is added after the set reached its dimension."""

    def __init__(self, dimension, rows_filled, incoming=1):
        self.dimension = dimension
        self.rows_filled = rows_filled
        self.incoming = incoming
        super().__init__(
            f"Equation set holds {rows_filled} of {dimension} equations, "
            f"cannot add {incoming} more")


class NotReadyError(MatSolveError, RuntimeError):
    """Raised when solving a set that does not hold `dimension` equations yet."""

    def __init__(self, rows_filled, dimension):
        self.rows_filled = rows_filled
        self.dimension = dimension
        super().__init__(
            f"Equation set holds {rows_filled} of {dimension} equations, "
            f"cannot solve yet")


class SingularSystemError(MatSolveError, RuntimeError):
    """Raised when elimination finds no usable pivot in a column.

    Attributes
    ----------
    column : int
        Pivot column where elimination stopped.
    pivot : float
        Largest candidate magnitude found in that column.
    tolerance : float
        Threshold the candidate had to exceed.
    """

    description = "The system of equations has no unique solution"

    def __init__(self, column, pivot, tolerance):
        self.column = column
        self.pivot = pivot
        self.tolerance = tolerance
        super().__init__(
            f"{self.description} (column {column}: "
            f"|pivot|={pivot:.3e} <= tol={tolerance:.3e})")


class DependentSystemError(SingularSystemError):
    """Singular system whose equations are consistent: infinitely many solutions."""

    description = "The system of equations is dependent"


class InconsistentSystemError(SingularSystemError):
    """Singular system whose equations contradict each other: no solution."""

    description = "The system of equations has no solution"


class PolynomialBuildError(MatSolveError, ValueError):
    """Raised when a polynomial coefficient cannot be parsed."""


class PolynomialEvaluationError(MatSolveError, ValueError):
    """Raised when evaluating a polynomial without coefficients."""
