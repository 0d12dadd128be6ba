"""
Polynomial: evaluation of a coefficient list with Horner's scheme.
"""

import numpy as np

from matsolve.errors import PolynomialBuildError, PolynomialEvaluationError


class Polynomial:
    """
    Polynomial given by its coefficients, highest degree first.

    Parameters
    ----------
    coefficients : iterable of float
        [a_n, ..., a_1, a_0] for a_n*x^n + ... + a_1*x + a_0.

    Examples
    --------
    >>> p = Polynomial([1, 2, 3])   # x^2 + 2x + 3
    >>> p.evaluate(2.0)
    11.0
    """

    def __init__(self, coefficients):
        self.coefficients = [float(c) for c in coefficients]

    @classmethod
    def from_args(cls, args):
        """Build from command-line style arguments, skipping the program name."""
        args = iter(args)
        next(args, None)
        coefficients = []
        for arg in args:
            try:
                coefficients.append(float(arg))
            except ValueError:
                raise PolynomialBuildError(f"Invalid input coefficient {arg!r}") from None
        return cls(coefficients)

    @property
    def degree(self):
        return len(self.coefficients) - 1

    def evaluate(self, x):
        """Value at x (scalar or numpy array)."""
        if not self.coefficients:
            raise PolynomialEvaluationError("Failed to evaluate polynomial without coefficients")
        if isinstance(x, np.ndarray):
            x = x.astype(np.float64)
            total = np.full(x.shape, self.coefficients[0])
        else:
            total = self.coefficients[0]
        for c in self.coefficients[1:]:
            total = total * x + c
        return total

    __call__ = evaluate

    def __str__(self):
        return str(self.coefficients)

    def __repr__(self):
        return f"Polynomial({self.coefficients})"
