"""
Tests for LUDecomp and QRDecomp.
"""

import numpy as np
import pytest

import vecmat
from vecmat import (
    ComputeConfig,
    DimensionMismatchError,
    InvalidSizeError,
    LUDecomp,
    Matrix,
    NotSquareError,
    OperandTypeError,
    QRDecomp,
    SingularMatrixError,
    Vector,
)


def cofactor_det(rows):
    """Reference determinant by cofactor expansion along the first row."""
    n = len(rows)
    if n == 1:
        return rows[0][0]
    total = 0.0
    for j in range(n):
        minor = [row[:j] + row[j + 1:] for row in rows[1:]]
        total += (-1) ** j * rows[0][j] * cofactor_det(minor)
    return total


def assert_matrix_close(actual, expected, atol=1e-9):
    np.testing.assert_allclose(actual.to_numpy(), np.asarray(expected, dtype=float), rtol=0, atol=atol)


class TestLUConstruction:
    """Test LUDecomp construction and factors."""

    def test_not_square(self, m23):
        with pytest.raises(NotSquareError):
            m23.lu()
        with pytest.raises(ValueError):
            LUDecomp(m23)

    def test_requires_matrix(self):
        with pytest.raises(OperandTypeError):
            LUDecomp([[1, 0], [0, 1]])

    def test_pivoting_permutation_and_sign(self, m33):
        lu = m33.lu()
        assert lu.n == 3
        assert lu.permutation == (2, 0, 1)
        assert lu.sign == 1

    def test_single_swap_sign(self):
        lu = Matrix.from_rows([[0, 1], [1, 0]]).lu()
        assert lu.permutation == (1, 0)
        assert lu.sign == -1
        assert lu.det() == -1.0

    def test_tie_break_lowest_row(self):
        lu = Matrix.from_rows([[1, 2], [-1, 3]]).lu()
        assert lu.permutation == (0, 1)
        assert lu.sign == 1
        assert lu.l().to_list() == [[1.0, 0.0], [-1.0, 1.0]]
        assert lu.u().to_list() == [[1.0, 2.0], [0.0, 5.0]]

    def test_factors_reproduce_permuted_matrix(self, m33):
        lu = m33.lu()
        permuted = Matrix.from_rows([m33.row(p).to_list() for p in lu.permutation])
        assert_matrix_close(lu.l() * lu.u(), permuted.to_list(), atol=1e-12)

    def test_l_is_unit_lower_u_is_upper(self, m33):
        lu = m33.lu()
        lower, upper = lu.l(), lu.u()
        for value, i, j in lower.each_with_indexes():
            if i == j:
                assert value == 1.0
            elif j > i:
                assert value == 0.0
        for value, i, j in upper.each_with_indexes():
            if j < i:
                assert value == 0.0

    def test_decomposition_does_not_alias_source(self, m22):
        lu = m22.lu()
        m22[0, 0] = 100.0
        m22.fill(0)
        assert lu.det() == pytest.approx(-3.0)
        assert lu.solve([5, 14]).to_list() == pytest.approx([1.0, 2.0])

    def test_repr(self, m22):
        assert repr(m22.lu()) == "<LUDecomp n=2 sign=-1>"


class TestLUQueries:
    """Test determinant, solve and inverse."""

    def test_det_2x2(self, m22):
        assert m22.lu().det() == pytest.approx(-3.0)
        assert m22.det() == pytest.approx(-3.0)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_det_matches_cofactor_expansion(self, seed):
        m = Matrix(4, 4).random_fill(seed=seed)
        assert m.det() == pytest.approx(cofactor_det(m.to_list()), rel=1e-9, abs=1e-12)

    def test_det_3x3(self, m33):
        assert m33.det() == pytest.approx(33.0)

    def test_identity(self):
        lu = Matrix.identity_matrix(3).lu()
        assert lu.det() == 1.0
        assert lu.inv() == Matrix.identity_matrix(3)

    def test_inverse_closed_form(self, m22):
        inv = m22.lu().inv()
        expected = [[-5.0 / 3.0, 2.0 / 3.0], [4.0 / 3.0, -1.0 / 3.0]]
        assert_matrix_close(inv, expected, atol=1e-9)

    def test_inverse_times_matrix_is_identity(self, m33):
        inv = m33.inv()
        assert_matrix_close(inv * m33, np.eye(3), atol=1e-9)
        assert_matrix_close(m33 * inv, np.eye(3), atol=1e-9)

    def test_solve(self, m33):
        x = Vector.from_values([1, -2, 0.5])
        b = m33 * x
        np.testing.assert_allclose(m33.lu().solve(b).to_list(), x.to_list(), atol=1e-12)
        np.testing.assert_allclose(m33.solve(b.to_list()).to_list(), x.to_list(), atol=1e-12)

    def test_solve_length_mismatch(self, m22):
        with pytest.raises(DimensionMismatchError):
            m22.lu().solve(Vector.from_values([1, 2, 3]))

    def test_solve_does_not_modify_rhs(self, m22):
        b = Vector.from_values([5, 14])
        m22.lu().solve(b)
        assert b.to_list() == [5.0, 14.0]


class TestLUSingular:
    """Test behavior on singular and nearly singular input."""

    def test_singular_detected(self, singular33):
        lu = singular33.lu()
        assert lu.is_singular()
        assert lu.det() == 0.0

    def test_singular_solve_and_inverse(self, singular33):
        lu = singular33.lu()
        with pytest.raises(SingularMatrixError):
            lu.solve([1, 2, 3])
        with pytest.raises(SingularMatrixError):
            lu.inv()
        with pytest.raises(ArithmeticError):
            singular33.inv()

    def test_zero_matrix_still_factorizes(self):
        lu = Matrix(3, 3).lu()
        assert lu.sign == 1
        assert lu.det() == 0.0
        with pytest.raises(SingularMatrixError):
            lu.solve([0, 0, 0])

    def test_tolerance_argument(self):
        m = Matrix.from_rows([[1e-12, 0], [0, 1]])
        assert m.lu().is_singular()
        relaxed = m.lu(tol=1e-15)
        assert not relaxed.is_singular()
        assert relaxed.det() == pytest.approx(1e-12)
        assert relaxed.tol == 1e-15

    def test_negative_tolerance(self, m22):
        with pytest.raises(ValueError):
            m22.lu(tol=-1.0)

    @pytest.mark.parametrize("tol", [float("nan"), float("inf")])
    def test_non_finite_tolerance(self, tol):
        m = Matrix.from_rows([[1, 2], [2, 4]])
        with pytest.raises(ValueError):
            m.lu(tol=tol)
        with pytest.raises(ValueError):
            m.qr(tol=tol)

    def test_nan_epsilon_keeps_singular_detection(self):
        m = Matrix.from_rows([[1, 2], [2, 4]])
        with pytest.raises(ValueError):
            vecmat.set_epsilon(float("nan"))
        lu = m.lu()
        assert lu.is_singular()
        assert lu.det() == 0.0
        with pytest.raises(SingularMatrixError):
            lu.solve([1, 2])

    def test_configured_tolerance(self):
        m = Matrix.from_rows([[1e-8, 0], [0, 1]])
        assert not m.lu().is_singular()
        with vecmat.config.local(compute=ComputeConfig(epsilon=1e-6)):
            assert m.lu().is_singular()
        assert not m.lu().is_singular()

    def test_tolerance_fixed_at_construction(self):
        m = Matrix.from_rows([[1e-8, 0], [0, 1]])
        lu = m.lu()
        vecmat.set_epsilon(1e-6)
        assert lu.tol == 1e-10
        assert not lu.is_singular()


class TestLUAgainstScipy:
    """Cross-check against scipy.linalg."""

    @pytest.mark.parametrize("n", [2, 5, 8])
    def test_det_and_solve(self, requires_scipy, n):
        import scipy.linalg

        rng = np.random.default_rng(n)
        a = rng.normal(size=(n, n))
        b = rng.normal(size=n)
        m = Matrix.from_rows(a)
        lu = m.lu()

        assert lu.det() == pytest.approx(scipy.linalg.det(a), rel=1e-9)
        np.testing.assert_allclose(lu.solve(b).to_list(), scipy.linalg.solve(a, b), rtol=1e-8, atol=1e-10)
        np.testing.assert_allclose(lu.inv().to_numpy(), scipy.linalg.inv(a), rtol=1e-8, atol=1e-10)

    def test_pivot_order(self, requires_scipy, m33):
        import scipy.linalg

        p, l, u = scipy.linalg.lu(m33.to_numpy())
        lu = m33.lu()
        np.testing.assert_allclose(lu.l().to_numpy(), l, atol=1e-12)
        np.testing.assert_allclose(lu.u().to_numpy(), u, atol=1e-12)


class TestQR:
    """Test Householder QR decomposition."""

    def test_requires_tall_matrix(self, m23):
        with pytest.raises(InvalidSizeError):
            m23.qr()
        with pytest.raises(OperandTypeError):
            QRDecomp(Vector(2))

    def test_factors(self, m32):
        qr = m32.qr()
        q, r = qr.q(), qr.r()
        assert q.shape == (3, 3)
        assert r.shape == (3, 2)
        assert_matrix_close(q * r, m32.to_list(), atol=1e-12)
        assert_matrix_close(q.t() * q, np.eye(3), atol=1e-12)
        for value, i, j in r.each_with_indexes():
            if i > j:
                assert value == 0.0

    def test_square_solve(self, m33):
        x = Vector.from_values([2, 0, -1])
        qr = m33.qr()
        np.testing.assert_allclose(qr.solve(m33 * x).to_list(), x.to_list(), atol=1e-12)

    def test_solve_requires_square(self, m32):
        with pytest.raises(NotSquareError):
            m32.qr().solve([1, 2, 3])

    def test_lstsq_matches_numpy(self, m32):
        b = [1.0, 0.0, 2.0]
        expected, *_ = np.linalg.lstsq(m32.to_numpy(), np.array(b), rcond=None)
        np.testing.assert_allclose(m32.qr().lstsq(b).to_list(), expected, atol=1e-12)

    def test_lstsq_length_mismatch(self, m32):
        with pytest.raises(DimensionMismatchError):
            m32.qr().lstsq([1, 2])

    def test_rank_deficient(self, singular33):
        qr = singular33.qr()
        assert qr.is_singular()
        with pytest.raises(SingularMatrixError):
            qr.solve([1, 2, 3])

    def test_does_not_alias_source(self, m33):
        qr = m33.qr()
        original = m33.to_list()
        m33.zero()
        assert_matrix_close(qr.q() * qr.r(), original, atol=1e-12)

    def test_repr(self, m32):
        assert repr(m32.qr()) == "<QRDecomp 3x2>"
