"""
Tests for the generic matrix engine over Q and Z_p.

Determinants are cross-checked against a Leibniz-formula oracle on
fractions.Fraction.
"""

from fractions import Fraction
from itertools import permutations
from typing import List
import random

import numpy as np
import pytest

from fieldcalc.common import (
    EmptyMatrixError,
    IncompatibleDimensionsError,
    IncompatibleModuloError,
    PrimeField,
    Rational,
)
from fieldcalc.matrix import Matrix, RREFResult


def rational_matrix(rows: List[List[str]]) -> Matrix:
    return Matrix([[Rational.parse(str(cell)) for cell in row] for row in rows])


def residue_matrix(rows: List[List[int]], p: int) -> Matrix:
    field = PrimeField(p)
    return Matrix([[field.element(cell) for cell in row] for row in rows])


def as_strings(matrix: Matrix) -> List[List[str]]:
    return [[entry.get_string() for entry in row] for row in matrix.rows()]


def leibniz_determinant(rows: List[List[int]]) -> Fraction:
    size = len(rows)
    total = Fraction(0)
    for perm in permutations(range(size)):
        inversions = sum(1 for i in range(size) for j in range(i + 1, size) if perm[i] > perm[j])
        term = Fraction(-1 if inversions % 2 else 1)
        for row, col in enumerate(perm):
            term *= rows[row][col]
        total += term
    return total


class TestConstruction:

    def test_dimensions_come_from_entries(self) -> None:
        m = rational_matrix([[1, 2, 3], [4, 5, 6]])
        assert (m.height, m.width) == (2, 3)
        assert m.shape == (2, 3)

    def test_accepts_numpy_object_array(self) -> None:
        entries = np.empty((1, 2), dtype=object)
        entries[0, 0] = Rational.parse("1")
        entries[0, 1] = Rational.parse("2")
        assert as_strings(Matrix(entries)) == [["1", "2"]]

    def test_rejects_empty(self) -> None:
        with pytest.raises(EmptyMatrixError):
            Matrix([])
        with pytest.raises(EmptyMatrixError):
            Matrix([[]])

    def test_rejects_ragged_rows(self) -> None:
        with pytest.raises(IncompatibleDimensionsError):
            rational_matrix([[1, 2], [3]])

    def test_entries_copy_is_detached(self) -> None:
        m = rational_matrix([[1]])
        copy = m.entries
        copy[0, 0] = Rational.parse("5")
        assert m[0, 0] == Rational.parse("1")

    def test_equality(self) -> None:
        assert rational_matrix([[1, 2]]) == rational_matrix([["2/2", "4/2"]])
        assert rational_matrix([[1, 2]]) != rational_matrix([[1], [2]])
        assert rational_matrix([[1, 2]]) != rational_matrix([[1, 3]])

    def test_get_string(self) -> None:
        assert rational_matrix([["1/2", -1], [0, 3]]).get_string() == "1/2 -1\n0 3"


class TestArithmetic:

    def test_add(self) -> None:
        result = rational_matrix([[1, 2], [3, 4]]).add(rational_matrix([["1/2", 0], [-3, 1]]))
        assert as_strings(result) == [["3/2", "2"], ["0", "5"]]

    def test_subtract(self) -> None:
        result = rational_matrix([[1, 2], [3, 4]]).subtract(rational_matrix([[1, 1], [1, 1]]))
        assert as_strings(result) == [["0", "1"], ["2", "3"]]

    def test_add_shape_mismatch(self) -> None:
        with pytest.raises(IncompatibleDimensionsError):
            rational_matrix([[1, 2]]).add(rational_matrix([[1], [2]]))
        with pytest.raises(IncompatibleDimensionsError):
            rational_matrix([[1, 2]]).subtract(rational_matrix([[1, 2, 3]]))

    def test_multiply(self) -> None:
        result = rational_matrix([[1, 2], [3, 4]]).multiply(rational_matrix([[5, 6], [7, 8]]))
        assert as_strings(result) == [["19", "22"], ["43", "50"]]

    def test_multiply_rectangular(self) -> None:
        result = rational_matrix([[1, 2, 3]]) * rational_matrix([[1], [1], [1]])
        assert as_strings(result) == [["6"]]

    def test_multiply_inner_dimension_mismatch(self) -> None:
        a = rational_matrix([[1, 2, 3], [4, 5, 6]])
        b = rational_matrix([[1, 2], [3, 4]])
        with pytest.raises(IncompatibleDimensionsError):
            a.multiply(b)

    def test_residue_multiply_stays_in_field(self) -> None:
        result = residue_matrix([[3, 4]], 5).multiply(residue_matrix([[4], [4]], 5))
        assert result[0, 0].modulo == 5
        assert result[0, 0].value == (12 + 16) % 5

    def test_mixed_moduli_fail(self) -> None:
        with pytest.raises(IncompatibleModuloError):
            residue_matrix([[1]], 5).add(residue_matrix([[1]], 7))

    def test_scalar_multiply(self) -> None:
        result = rational_matrix([[1, -2]]).scalar_multiply(Rational.parse("1/2"))
        assert as_strings(result) == [["1/2", "-1"]]

    def test_negate(self) -> None:
        assert as_strings(-rational_matrix([[1, 0], ["-1/3", 2]])) == [["-1", "0"], ["1/3", "-2"]]
        assert as_strings(residue_matrix([[1, 0]], 7).negate()) == [["6", "0"]]

    def test_operations_do_not_mutate_operands(self) -> None:
        a = rational_matrix([[1, 2], [3, 4]])
        snapshot = as_strings(a)
        a.add(a)
        a.negate()
        a.multiply(a)
        a.rref()
        assert as_strings(a) == snapshot


class TestRREF:

    def test_singular_rational(self) -> None:
        result = rational_matrix([[2, 4], [1, 2]]).rref()
        assert result.rank == 1
        assert result.determinant.is_zero
        assert as_strings(result.rref) == [["1", "2"], ["0", "0"]]

    def test_diagonal(self) -> None:
        rref, rank, determinant = rational_matrix([[2, 0], [0, 3]]).rref()
        assert determinant.get_string() == "6"
        assert rank == 2
        assert as_strings(rref) == [["1", "0"], ["0", "1"]]

    def test_result_type(self) -> None:
        assert isinstance(rational_matrix([[1]]).rref(), RREFResult)

    def test_row_swap_negates_determinant(self) -> None:
        result = rational_matrix([[0, 1], [1, 0]]).rref()
        assert result.determinant.get_string() == "-1"
        assert result.rank == 2

    def test_three_by_three(self) -> None:
        result = rational_matrix([[1, 2, 3], [4, 5, 6], [7, 8, 10]]).rref()
        assert result.determinant.get_string() == "-3"
        assert result.rank == 3
        assert as_strings(result.rref) == [["1", "0", "0"], ["0", "1", "0"], ["0", "0", "1"]]

    def test_wide_matrix(self) -> None:
        result = rational_matrix([[1, 2, 3], [4, 5, 6]]).rref()
        assert as_strings(result.rref) == [["1", "0", "-1"], ["0", "1", "2"]]
        assert result.rank == 2
        assert result.determinant.is_zero

    def test_tall_matrix(self) -> None:
        result = rational_matrix([[1], [2], [3]]).rref()
        assert as_strings(result.rref) == [["1"], ["0"], ["0"]]
        assert result.rank == 1
        assert result.determinant.is_zero

    def test_zero_column_is_skipped(self) -> None:
        result = rational_matrix([[0, 2, 4], [0, 1, 3]]).rref()
        assert as_strings(result.rref) == [["0", "1", "0"], ["0", "0", "1"]]
        assert result.rank == 2

    def test_zero_matrix(self) -> None:
        result = rational_matrix([[0, 0], [0, 0]]).rref()
        assert result.rank == 0
        assert result.determinant.is_zero
        assert as_strings(result.rref) == [["0", "0"], ["0", "0"]]

    def test_residue_determinant(self) -> None:
        result = residue_matrix([[2, 0], [0, 3]], 5).rref()
        assert result.determinant.value == 1
        assert result.determinant.modulo == 5
        assert result.rank == 2

    def test_residue_rank_depends_on_field(self) -> None:
        # det = 2*4 - 3*1 = 5: singular mod 5, invertible over Q
        assert residue_matrix([[2, 3], [1, 4]], 5).rank() == 1
        assert rational_matrix([[2, 3], [1, 4]]).rank() == 2

    def test_determinants_against_leibniz(self) -> None:
        rng = random.Random(42)
        for size in (1, 2, 3, 4):
            for _ in range(5):
                rows = [[rng.randint(-9, 9) for _ in range(size)] for _ in range(size)]
                determinant = rational_matrix(rows).determinant()
                expected = leibniz_determinant(rows)
                assert int(determinant.numerator) == expected.numerator
                assert int(determinant.denominator) == expected.denominator

    def test_rref_of_invertible_is_identity(self) -> None:
        field = PrimeField(101)
        rng = random.Random(9)
        for _ in range(5):
            rows = [[rng.randrange(101) for _ in range(3)] for _ in range(3)]
            matrix = residue_matrix(rows, 101)
            result = matrix.rref()
            if result.determinant.is_zero:
                continue
            identity = [[field.one() if i == j else field.zero() for j in range(3)] for i in range(3)]
            assert result.rref == Matrix(identity)
            assert result.rank == 3
