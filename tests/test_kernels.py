"""Tests for the JIT elimination kernels and the Polynomial helper."""
import numpy as np
import pytest

from matsolve import fast
from matsolve import Polynomial, PolynomialBuildError, PolynomialEvaluationError


# ============================================================
# Pivot search
# ============================================================

class TestPivotRow:
    """pivot_row_jit picks the largest magnitude at or below row k."""

    def test_largest_magnitude(self):
        a = np.array([[1.0, 0.0, 0.0],
                      [3.0, 1.0, 0.0],
                      [-5.0, 0.0, 1.0]])
        assert fast.pivot_row_jit(a, 0) == 2

    def test_tie_keeps_topmost(self):
        a = np.array([[1.0, 0.0], [-1.0, 0.0]])
        assert fast.pivot_row_jit(a, 0) == 0

    def test_ignores_rows_above_k(self):
        a = np.array([[0.0, 9.0], [0.0, 1.0], [0.0, -2.0]])
        assert fast.pivot_row_jit(a, 1) == 2


# ============================================================
# Forward elimination
# ============================================================

class TestForwardElimination:

    def test_upper_triangular(self):
        """8x - 6y = 2, 2x + 3y = 2 reduces to 4.5y = 1.5."""
        a = np.array([[8.0, -6.0], [2.0, 3.0]])
        b = np.array([2.0, 2.0])
        status, swaps = fast.forward_eliminate_jit(a, b, 0.0)
        assert status == -1
        assert swaps == 0
        assert np.array_equal(a, [[8.0, -6.0], [0.0, 4.5]])
        assert np.array_equal(b, [2.0, 1.5])

    def test_swap_moves_rhs_with_row(self):
        a = np.array([[2.0, 3.0], [8.0, -6.0]])
        b = np.array([7.0, 11.0])
        status, swaps = fast.forward_eliminate_jit(a, b, 0.0)
        assert status == -1
        assert swaps == 1
        assert np.array_equal(a[0], [8.0, -6.0])
        assert b[0] == 11.0

    def test_singular_column(self):
        a = np.array([[1.0, 1.0], [2.0, 2.0]])
        b = np.array([2.0, 4.0])
        status, _ = fast.forward_eliminate_jit(a, b, 1e-12)
        assert status == 1

    def test_zero_matrix(self):
        a = np.zeros((3, 3))
        b = np.zeros(3)
        status, swaps = fast.forward_eliminate_jit(a, b, 0.0)
        assert status == 0
        assert swaps == 0

    def test_lower_part_is_zeroed(self):
        rng = np.random.default_rng(5)
        a = rng.standard_normal((6, 6))
        b = rng.standard_normal(6)
        status, _ = fast.forward_eliminate_jit(a, b, 1e-12)
        assert status == -1
        assert np.all(np.tril(a, k=-1) == 0.0)


# ============================================================
# Back-substitution
# ============================================================

class TestBackSubstitution:

    def test_two_by_two(self):
        a = np.array([[8.0, -6.0], [0.0, 4.5]])
        b = np.array([2.0, 1.5])
        x = fast.back_substitute_jit(a, b)
        assert np.allclose(x, [0.5, 1.0 / 3.0])

    def test_matches_triangular_solve(self):
        rng = np.random.default_rng(9)
        a = np.triu(rng.standard_normal((7, 7))) + 5.0 * np.eye(7)
        b = rng.standard_normal(7)
        x = fast.back_substitute_jit(a, b)
        assert np.allclose(a @ x, b)

    def test_warmup(self):
        fast.warmup()


# ============================================================
# Polynomial
# ============================================================

class TestPolynomial:

    def test_horner(self):
        assert Polynomial([1, 2, 3]).evaluate(2.0) == 11.0

    def test_constant(self):
        p = Polynomial([4.0])
        assert p.degree == 0
        assert p(10.0) == 4.0

    def test_array_input(self):
        p = Polynomial([1.0, 0.0, -1.0])
        assert np.array_equal(p(np.array([0.0, 1.0, 2.0])), [-1.0, 0.0, 3.0])
        assert np.array_equal(Polynomial([2.0])(np.array([1.0, 5.0])), [2.0, 2.0])

    def test_from_args_skips_program_name(self):
        p = Polynomial.from_args(["poly", "1", "-2.5", "3"])
        assert p.coefficients == [1.0, -2.5, 3.0]
        assert str(p) == "[1.0, -2.5, 3.0]"

    def test_from_args_invalid(self):
        with pytest.raises(PolynomialBuildError):
            Polynomial.from_args(["poly", "1", "x"])

    def test_empty_evaluation(self):
        with pytest.raises(PolynomialEvaluationError):
            Polynomial.from_args(["poly"]).evaluate(1.0)
