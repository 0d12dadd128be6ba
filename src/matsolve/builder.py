"""
EquationSet: incremental construction of a square linear system.

Rows are appended one equation at a time into a preallocated float64
matrix, so the storage never grows or reallocates while the set fills.
Every rejected row leaves the set exactly as it was.

Lifecycle:  empty -> filling -> ready.  There is no way back.
"""

import numpy as np
from scipy import sparse

from matsolve.equation import Equation
from matsolve.errors import (
    InvalidDimensionError, DimensionMismatchError, NonFiniteValueError,
    SetAlreadyFullError,
)


def _as_float_array(values):
    """Dense float64 view of array-like or scipy.sparse input."""
    if sparse.issparse(values):
        values = values.toarray()
    return np.asarray(values, dtype=np.float64)


class EquationSet:
    """
    Accumulate exactly `dimension` equations of a square linear system.

    Parameters
    ----------
    dimension : int
        Number of unknowns, and therefore of equations. Must be positive.

    Examples
    --------
    >>> eqs = EquationSet(2)
    >>> eqs.add_equation([8.0, -6.0], 2.0).add_equation([2.0, 3.0], 2.0)
    EquationSet(dimension=2, rows=2, state=ready)
    >>> eqs.is_ready()
    True
    """

    def __init__(self, dimension):
        if (isinstance(dimension, (bool, np.bool_))
                or not isinstance(dimension, (int, np.integer))
                or dimension < 1):
            raise InvalidDimensionError(dimension)

        self._dimension = int(dimension)
        self._coefficients = np.zeros((self._dimension, self._dimension),
                                      dtype=np.float64)
        self._rhs = np.zeros(self._dimension, dtype=np.float64)
        self._rows_filled = 0

    @classmethod
    def from_arrays(cls, A, b):
        """
        Build a ready set from a square matrix and right-hand side.

        Parameters
        ----------
        A : array-like or scipy.sparse matrix, shape (n, n)
        b : array-like, shape (n,)

        Returns
        -------
        EquationSet
        """
        matrix = _as_float_array(A)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise DimensionMismatchError(
                matrix.shape, "square", f"Matrix must be square, got shape {matrix.shape}")
        eqs = cls(matrix.shape[0])
        eqs.add_equations(matrix, b)
        return eqs

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_equation(self, coefficients, rhs_value=None):
        """
        Append one equation.

        Parameters
        ----------
        coefficients : array-like, scipy.sparse row or Equation
            Exactly `dimension` coefficients. When an Equation is given,
            its own right-hand side is used and `rhs_value` must be omitted.
        rhs_value : float
            Right-hand side of the equation.

        Returns
        -------
        EquationSet
            self, so calls can be chained.

        Raises
        ------
        SetAlreadyFullError
            The set already holds `dimension` equations.
        DimensionMismatchError
            The row does not have exactly `dimension` coefficients.
        NonFiniteValueError
            A coefficient or the right-hand side is NaN or infinite.
        """
        if isinstance(coefficients, Equation):
            if rhs_value is not None:
                raise TypeError("rhs_value must be omitted when adding an Equation")
            coefficients, rhs_value = coefficients.coefficients, coefficients.rhs
        elif rhs_value is None:
            raise TypeError("add_equation() missing rhs_value")

        if self.is_ready():
            raise SetAlreadyFullError(self._dimension, self._rows_filled)

        row = _as_float_array(coefficients)
        if row.ndim == 2 and 1 in row.shape:
            row = row.ravel()
        if row.ndim != 1 or row.shape[0] != self._dimension:
            raise DimensionMismatchError(row.size, self._dimension)

        value = float(rhs_value)
        if not (np.all(np.isfinite(row)) and np.isfinite(value)):
            raise NonFiniteValueError(
                f"Equation {self._rows_filled} contains NaN or infinite values")

        self._coefficients[self._rows_filled] = row
        self._rhs[self._rows_filled] = value
        self._rows_filled += 1
        return self

    def add_equations(self, rows, rhs_values=None):
        """
        Append several equations at once.

        All rows are validated before any of them is stored, so a failure
        leaves the set unchanged.

        Parameters
        ----------
        rows : 2D array-like, scipy.sparse matrix or iterable of Equation
            One row of `dimension` coefficients per equation.
        rhs_values : array-like, optional
            One right-hand side per row. Omit when `rows` are Equations.

        Returns
        -------
        EquationSet
            self.
        """
        if rhs_values is None:
            equations = list(rows)
            if not all(isinstance(eq, Equation) for eq in equations):
                raise TypeError("add_equations() missing rhs_values")
            rows = [eq.coefficients for eq in equations]
            rhs_values = [eq.rhs for eq in equations]

        block = _as_float_array(rows)
        values = np.asarray(rhs_values, dtype=np.float64).ravel()
        if block.size == 0 and values.size == 0:
            return self

        if block.ndim != 2 or block.shape[1] != self._dimension:
            got = block.shape[1] if block.ndim == 2 else block.size
            raise DimensionMismatchError(got, self._dimension)
        count = block.shape[0]
        if values.shape[0] != count:
            raise DimensionMismatchError(
                values.shape[0], count,
                f"Got {values.shape[0]} right-hand sides for {count} rows")

        if self._rows_filled + count > self._dimension:
            raise SetAlreadyFullError(self._dimension, self._rows_filled, count)
        if not (np.all(np.isfinite(block)) and np.all(np.isfinite(values))):
            raise NonFiniteValueError("Equations contain NaN or infinite values")

        start = self._rows_filled
        self._coefficients[start:start + count] = block
        self._rhs[start:start + count] = values
        self._rows_filled += count
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_ready(self):
        """True when the set holds exactly `dimension` equations."""
        return self._rows_filled == self._dimension

    @property
    def dimension(self):
        return self._dimension

    @property
    def rows_filled(self):
        return self._rows_filled

    @property
    def state(self):
        """'empty', 'filling' or 'ready'."""
        if self._rows_filled == 0:
            return "empty"
        if self._rows_filled < self._dimension:
            return "filling"
        return "ready"

    @property
    def coefficients(self):
        """Read-only copy of the accepted coefficient rows."""
        out = self._coefficients[:self._rows_filled].copy()
        out.flags.writeable = False
        return out

    @property
    def rhs(self):
        """Read-only copy of the accepted right-hand sides."""
        out = self._rhs[:self._rows_filled].copy()
        out.flags.writeable = False
        return out

    def as_arrays(self):
        """Fresh writable copies (A, b) of the accepted rows."""
        return (self._coefficients[:self._rows_filled].copy(),
                self._rhs[:self._rows_filled].copy())

    def equations(self):
        """Accepted rows as Equation objects, in insertion order."""
        return [Equation(tuple(self._coefficients[i]), self._rhs[i])
                for i in range(self._rows_filled)]

    def memory_bytes(self):
        """Memory held by the coefficient matrix and right-hand side."""
        return self._coefficients.nbytes + self._rhs.nbytes

    def __str__(self):
        return "".join(f"{eq}\n" for eq in self.equations())

    def __repr__(self):
        return (f"EquationSet(dimension={self._dimension}, "
                f"rows={self._rows_filled}, state={self.state})")
