"""
Equation: one row of a linear system.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Equation:
    """
    A single linear equation  c[0]*x0 + c[1]*x1 + ... = rhs.

    Parameters
    ----------
    coefficients : tuple of float
        One coefficient per unknown, in declared unknown order.
    rhs : float
        Right-hand side value.

    Examples
    --------
    >>> eq = Equation((8.0, -6.0), 2.0)
    >>> len(eq)
    2
    >>> str(eq)
    '[8.0, -6.0] = 2.0'
    """
    coefficients: tuple
    rhs: float

    def __post_init__(self):
        object.__setattr__(self, "coefficients",
                           tuple(float(c) for c in self.coefficients))
        object.__setattr__(self, "rhs", float(self.rhs))

    def __len__(self):
        return len(self.coefficients)

    def __str__(self):
        return f"{list(self.coefficients)} = {self.rhs}"
