"""
Tests for the Vector class.
"""

import math

import numpy as np
import pytest

from vecmat import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidFormatError,
    InvalidSizeError,
    Matrix,
    OperandTypeError,
    Vector,
    VecmatError,
)


class TestVectorCreation:
    """Test Vector creation methods."""

    def test_zero_filled(self):
        v = Vector(4)
        assert v.length == 4
        assert len(v) == 4
        assert v.to_list() == [0.0, 0.0, 0.0, 0.0]

    def test_empty_vector_allowed(self):
        v = Vector(0)
        assert v.length == 0
        assert list(v) == []
        assert v.sum() == 0.0

    def test_negative_size(self):
        with pytest.raises(InvalidSizeError):
            Vector(-1)

    def test_non_integer_size(self):
        with pytest.raises(InvalidSizeError):
            Vector(2.5)
        with pytest.raises(InvalidSizeError):
            Vector(True)

    def test_from_values_coerces_to_float(self):
        v = Vector.from_values([1, 2, 3])
        assert v.to_list() == [1.0, 2.0, 3.0]
        assert all(isinstance(x, float) for x in v)

    def test_from_numpy(self):
        v = Vector.from_values(np.array([1.5, 2.5]))
        assert v.to_list() == [1.5, 2.5]

    def test_from_values_owns_storage(self):
        arr = np.array([1.0, 2.0])
        v = Vector.from_values(arr)
        arr[0] = 9.0
        assert v[0] == 1.0
        assert v.to_numpy().dtype == np.float64
        assert v.format == "%10.3f"

    def test_from_values_rejects_non_numeric(self):
        with pytest.raises(OperandTypeError):
            Vector.from_values([1, "two", 3])
        with pytest.raises(TypeError):
            Vector.from_values([1, None])

    def test_from_values_rejects_string(self):
        with pytest.raises(TypeError):
            Vector.from_values("123")

    def test_basis_vector(self):
        assert Vector.basis_vector(3, 1).to_list() == [0.0, 1.0, 0.0]

    def test_vector_literal(self):
        import vecmat
        assert vecmat.vector([1, 2]).to_list() == [1.0, 2.0]


class TestVectorAccess:
    """Test element get/set and bounds checking."""

    def test_get(self, v123):
        assert v123[1] == 2.0
        assert v123.get(2) == 3.0

    def test_set(self, v123):
        v123[0] = 7
        v123.set(2, 1.5)
        assert v123.to_list() == [7.0, 2.0, 1.5]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range(self, v123, index):
        with pytest.raises(IndexOutOfRangeError):
            v123[index]
        with pytest.raises(IndexError):
            v123[index] = 1.0

    def test_set_rejects_non_numeric(self, v123):
        with pytest.raises(TypeError):
            v123[0] = "x"
        assert v123[0] == 1.0

    def test_error_is_vecmat_error(self, v123):
        with pytest.raises(VecmatError):
            v123[5]

    def test_iteration_is_restartable(self, v123):
        assert list(v123) == [1.0, 2.0, 3.0]
        assert list(v123) == [1.0, 2.0, 3.0]
        assert [x for x, _ in zip(v123, range(2))] == [1.0, 2.0]


class TestVectorArithmetic:
    """Test element-wise and scalar arithmetic."""

    def test_add_vectors(self, v123, v321):
        assert (v123 + v321).to_list() == [4.0, 4.0, 4.0]

    def test_add_copy_does_not_mutate(self, v123, v321):
        v123.add(v321)
        assert v123.to_list() == [1.0, 2.0, 3.0]

    def test_add_in_place(self, v123, v321):
        result = v123.add_(v321)
        assert result is v123
        assert v123 == Vector.from_values([4, 4, 4])

    def test_iadd_keeps_identity(self, v123, v321):
        ref = v123
        v123 += v321
        assert v123 is ref
        assert v123.to_list() == [4.0, 4.0, 4.0]

    def test_sub(self, v123, v321):
        assert (v123 - v321).to_list() == [-2.0, 0.0, 2.0]
        v123.sub_(v321)
        assert v123.to_list() == [-2.0, 0.0, 2.0]

    def test_hadamard_product(self, v123, v321):
        assert (v123 * v321) == Vector.from_values([3, 4, 3])
        assert v123.mul(v321).to_list() == [3.0, 4.0, 3.0]

    def test_div(self, v123, v321):
        assert (v123 / v321).to_list() == pytest.approx([1 / 3, 1.0, 3.0])
        v123.div_(v321)
        assert v123.to_list() == pytest.approx([1 / 3, 1.0, 3.0])

    def test_scalar_operators(self, v123):
        assert (v123 + 1).to_list() == [2.0, 3.0, 4.0]
        assert (v123 - 1).to_list() == [0.0, 1.0, 2.0]
        assert (v123 * 2).to_list() == [2.0, 4.0, 6.0]
        assert (v123 / 2).to_list() == [0.5, 1.0, 1.5]
        assert (2 * v123).to_list() == [2.0, 4.0, 6.0]
        assert (1 + v123).to_list() == [2.0, 3.0, 4.0]
        assert (10 - v123).to_list() == [9.0, 8.0, 7.0]
        assert (-v123).to_list() == [-1.0, -2.0, -3.0]

    def test_scalar_methods(self, v123):
        assert v123.scale(3).to_list() == [3.0, 6.0, 9.0]
        assert v123.add_scalar(0.5).to_list() == [1.5, 2.5, 3.5]
        v123.scale_(2).add_scalar_(1)
        assert v123.to_list() == [3.0, 5.0, 7.0]

    def test_numpy_scalar_operand(self, v123):
        assert (v123 * np.float64(2.0)).to_list() == [2.0, 4.0, 6.0]

    def test_division_by_zero_scalar(self, v123):
        with pytest.raises(ZeroDivisionError):
            v123 / 0
        with pytest.raises(ZeroDivisionError):
            v123 /= 0.0
        assert v123.to_list() == [1.0, 2.0, 3.0]

    def test_length_mismatch(self, v123):
        other = Vector.from_values([1, 2])
        with pytest.raises(DimensionMismatchError):
            v123 + other
        with pytest.raises(DimensionMismatchError):
            v123.mul(other)
        with pytest.raises(ValueError):
            v123.dot(other)

    def test_failed_in_place_leaves_receiver_unchanged(self, v123):
        with pytest.raises(DimensionMismatchError):
            v123.add_(Vector(5))
        assert v123.to_list() == [1.0, 2.0, 3.0]

    @pytest.mark.parametrize("operand", ["a", [1, 2, 3], None, object()])
    def test_unsupported_operand_type(self, v123, operand):
        with pytest.raises(OperandTypeError):
            v123 + operand
        with pytest.raises(TypeError):
            v123 * operand

    def test_matrix_operand_rejected(self, v123):
        with pytest.raises(TypeError):
            v123 + Matrix(3, 1)

    def test_numpy_array_operand_rejected(self, v123):
        with pytest.raises(TypeError):
            v123 + np.ones(3)
        with pytest.raises(TypeError):
            np.ones(3) + v123

    def test_scalar_round_trip(self):
        v = Vector.from_values([0.1, -2.5, 1e6, 3.3])
        for k in (0.7, -13.0, 1e-3):
            np.testing.assert_allclose(((v + k) - k).to_list(), v.to_list(), rtol=1e-12, atol=1e-9)


class TestVectorDot:
    """Test dot product."""

    def test_dot(self, v123, v321):
        assert v123.dot(v321) == 10.0
        assert v123 @ v321 == 10.0

    def test_dot_commutes(self):
        rng = np.random.default_rng(7)
        a = Vector.from_values(rng.normal(size=20))
        b = Vector.from_values(rng.normal(size=20))
        assert a.dot(b) == pytest.approx(b.dot(a))

    def test_dot_requires_vector(self, v123):
        with pytest.raises(TypeError):
            v123.dot(2.0)


class TestVectorReductions:
    """Test sum, mean, quantiles and extrema."""

    def test_sum_mean(self, v123):
        assert v123.sum() == 6.0
        assert v123.mean() == 2.0

    def test_median_odd(self):
        assert Vector.from_values([3, 1, 2]).median() == 2.0

    def test_median_even_interpolates(self):
        assert Vector.from_values([4, 1, 3, 2]).median() == 2.5

    def test_quantile_linear_interpolation(self):
        v = Vector.from_values([10, 20, 30, 40, 50])
        assert v.quantile(0.0) == 10.0
        assert v.quantile(1.0) == 50.0
        assert v.quantile(0.25) == 20.0
        assert v.quantile(0.1) == pytest.approx(14.0)

    def test_quantile_matches_numpy(self):
        data = np.random.default_rng(3).normal(size=37)
        v = Vector.from_values(data)
        for q in (0.05, 0.5, 0.9):
            assert v.quantile(q) == pytest.approx(float(np.quantile(data, q)))

    def test_quantile_does_not_reorder(self):
        v = Vector.from_values([3, 1, 2])
        v.median()
        assert v.to_list() == [3.0, 1.0, 2.0]

    def test_quantile_out_of_range(self, v123):
        with pytest.raises(ValueError):
            v123.quantile(1.5)

    def test_empty_reductions(self):
        v = Vector(0)
        for reduce in (v.mean, v.median, v.max, v.min, v.argmax):
            with pytest.raises(InvalidSizeError):
                reduce()

    def test_extrema(self):
        v = Vector.from_values([2, 7, -1, 7, -1])
        assert v.max() == 7.0
        assert v.min() == -1.0
        assert v.argmax() == 1
        assert v.argmin() == 2


class TestVectorRearrangement:
    """Test in-place fill, basis, swap and reverse."""

    def test_fill_zero(self, v123):
        assert v123.fill(2).to_list() == [2.0, 2.0, 2.0]
        assert v123.zero().to_list() == [0.0, 0.0, 0.0]

    def test_basis(self, v123):
        assert v123.basis(2).to_list() == [0.0, 0.0, 1.0]
        with pytest.raises(IndexError):
            v123.basis(3)

    def test_swap(self, v123):
        v123.swap(0, 2)
        assert v123.to_list() == [3.0, 2.0, 1.0]

    def test_reverse(self, v123):
        assert v123.reverse() == Vector.from_values([3, 2, 1])


class TestVectorOrdering:
    """Test size-based ordering and value equality."""

    def test_compare_by_length_only(self):
        small = Vector.from_values([100, 200])
        big = Vector.from_values([1, 1, 1])
        assert small < big
        assert big > small
        assert small.compare(big) == -1
        assert big.compare(small) == 1

    def test_equal_length_different_values_compare_equal(self, v123, v321):
        assert v123.compare(v321) == 0
        assert v123 <= v321 and v123 >= v321
        assert v123 != v321

    def test_value_equality(self, v123):
        assert v123 == Vector.from_values([1.0, 2.0, 3.0])
        assert v123.equals(v123.copy())
        assert v123 != Vector.from_values([1, 2])

    def test_sorted_by_length(self):
        vs = [Vector(3), Vector(1), Vector(2)]
        assert [v.length for v in sorted(vs)] == [1, 2, 3]

    def test_unhashable(self, v123):
        with pytest.raises(TypeError):
            hash(v123)

    def test_compare_with_matrix_fails(self, v123):
        with pytest.raises(TypeError):
            v123 < Matrix(1, 1)


class TestVectorConversion:
    """Test conversion to Matrix, lists and numpy."""

    def test_to_matrix_column(self, v123):
        m = v123.to_matrix()
        assert m.shape == (3, 1)
        assert m.to_list() == [[1.0], [2.0], [3.0]]

    def test_to_matrix_is_a_copy(self, v123):
        m = v123.to_matrix()
        v123[0] = 99
        assert m[0, 0] == 1.0

    def test_transpose_row(self, v123):
        assert v123.t().to_list() == [[1.0, 2.0, 3.0]]

    def test_copy_independent(self, v123):
        c = v123.copy()
        c[0] = 5
        assert v123[0] == 1.0

    def test_to_numpy_independent(self, v123):
        arr = v123.to_numpy()
        arr[0] = 5
        assert v123[0] == 1.0
        assert arr.dtype == np.float64


class TestVectorDisplay:
    """Test repr and boxed rendering."""

    def test_repr(self, v123):
        assert repr(v123) == "V[1.0, 2.0, 3.0]"

    def test_str_default_format(self):
        text = str(Vector.from_values([1.5]))
        lines = text.splitlines()
        assert len(lines) == 3
        assert lines[1] == "⎜      1.500 ⎟"
        assert lines[0].startswith("⎡") and lines[0].endswith("⎤")
        assert lines[2].startswith("⎣") and lines[2].endswith("⎦")

    def test_per_instance_format(self, v123):
        v123.format = "%.1f"
        assert "⎜ 2.0 ⎟" in str(v123)
        other = Vector.from_values([2])
        assert "2.000" in str(other)

    def test_invalid_format(self, v123):
        with pytest.raises(ValueError):
            v123.format = "%d %d"
        with pytest.raises(InvalidFormatError):
            v123.format = "%s %s"
        with pytest.raises(OperandTypeError):
            v123.format = 10
        assert v123.format == "%10.3f"

    def test_format_survives_copy(self, v123):
        v123.format = "%.2f"
        assert v123.copy().format == "%.2f"
        assert (v123 + 1).format == "%.2f"

    def test_nan_formatting(self):
        assert math.isnan(Vector.from_values([float("nan")])[0])
