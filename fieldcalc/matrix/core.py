"""
Matrices over an Arbitrary Field.

Matrix[F] works over any element type satisfying the Field contract
(Rational, Residue, ...). Entries live in a numpy object array; entrywise
operations are vectorised with ``np.frompyfunc`` over the contract's named
methods, so no field type has to support numpy's numeric protocols.

Matrices are values: every operation returns a new Matrix, and the row
reduction works on a private copy of the entries.

Row Reduction (rref):
    1. Forward pass, column by column: take the first non-zero entry at or
       below the current row as pivot, swap it up (negating the running
       determinant on a real swap) and clear the entries below it.
    2. Backward pass over the pivots, bottom-most first: fold the pivot
       into the determinant, scale its row so the pivot is one and clear
       the entries above it.
    3. The determinant is only kept for square matrices of full rank;
       otherwise it is the field's zero.

Example:
    >>> q = Rational.parse
    >>> m = Matrix([[q("2"), q("4")], [q("1"), q("2")]])
    >>> result = m.rref()
    >>> result.rank, result.determinant.get_string()
    (1, '0')
    >>> print(result.rref.get_string())
    1 2
    0 0
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import reduce
from typing import Generic, Iterator, List, Sequence, Tuple, TypeVar, Union
import logging

import numpy as np

from ..common.errors import EmptyMatrixError, IncompatibleDimensionsError
from ..common.field import Field


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Field)

# Entrywise field operations on object arrays
_ADD = np.frompyfunc(lambda a, b: a.add(b), 2, 1)
_SUBTRACT = np.frompyfunc(lambda a, b: a.subtract(b), 2, 1)
_MULTIPLY = np.frompyfunc(lambda a, b: a.multiply(b), 2, 1)


@dataclass(frozen=True)
class RREFResult(Generic[F]):
    """
    Outcome of row reduction.

    Attributes:
        rref: The reduced row echelon form
        rank: Number of pivots found
        determinant: det of the input for square full-rank input, else zero
    """
    rref: "Matrix[F]"
    rank: int
    determinant: F

    def __iter__(self):
        """Allow ``rref, rank, det = matrix.rref()``."""
        return iter((self.rref, self.rank, self.determinant))


class Matrix(Generic[F]):
    """
    A rectangular array of field elements.

    Args:
        entries: Rows of field elements (a sequence of sequences or a 2-D
            numpy object array). All entries must belong to the same field.

    Raises:
        EmptyMatrixError: If there are no rows or no columns
        IncompatibleDimensionsError: If the rows differ in length

    Example:
        >>> field = PrimeField(5)
        >>> a = Matrix([[field.element(1), field.element(2)]])
        >>> a.shape
        (1, 2)
    """

    def __init__(self, entries: Union[Sequence[Sequence[F]], np.ndarray]):
        if isinstance(entries, np.ndarray) and entries.ndim != 2:
            raise IncompatibleDimensionsError(
                f"matrix entries must be 2-dimensional, got {entries.ndim} dimensions")

        rows = [list(row) for row in entries]
        if not rows or not rows[0]:
            raise EmptyMatrixError()

        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise IncompatibleDimensionsError(
                    f"row {index + 1} has {len(row)} entries, expected {width}")

        self._entries = np.empty((len(rows), width), dtype=object)
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                self._entries[i, j] = value

    @classmethod
    def _from_array(cls, array: np.ndarray) -> "Matrix[F]":
        """Wrap an already validated object array without copying."""
        matrix = cls.__new__(cls)
        matrix._entries = array
        return matrix

    # Shape and access

    @property
    def height(self) -> int:
        return self._entries.shape[0]

    @property
    def width(self) -> int:
        return self._entries.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def entries(self) -> np.ndarray:
        """A copy of the entries, safe to mutate."""
        return self._entries.copy()

    def __getitem__(self, index: Tuple[int, int]) -> F:
        row, col = index
        return self._entries[row, col]

    def rows(self) -> List[List[F]]:
        return self._entries.tolist()

    def __iter__(self) -> Iterator[List[F]]:
        return iter(self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(a == b for a, b in zip(self._entries.flat, other._entries.flat))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.height}x{self.width}, {self.rows()!r})"

    def get_string(self) -> str:
        """Rows on separate lines, entries separated by spaces."""
        return "\n".join(
            " ".join(entry.get_string() for entry in row) for row in self.rows())

    def __str__(self) -> str:
        return self.get_string()

    # Identities of the entries' field

    def _zero(self) -> F:
        return self._entries[0, 0].get_zero()

    def _one(self) -> F:
        return self._entries[0, 0].get_one()

    # Arithmetic

    def _check_same_shape(self, other: "Matrix[F]", operation: str) -> None:
        if self.shape != other.shape:
            raise IncompatibleDimensionsError(
                f"cannot {operation} {self.height}x{self.width} and "
                f"{other.height}x{other.width} matrices")

    def add(self, other: "Matrix[F]") -> "Matrix[F]":
        self._check_same_shape(other, "add")
        return Matrix._from_array(_ADD(self._entries, other._entries))

    def subtract(self, other: "Matrix[F]") -> "Matrix[F]":
        self._check_same_shape(other, "subtract")
        return Matrix._from_array(_SUBTRACT(self._entries, other._entries))

    def multiply(self, other: "Matrix[F]") -> "Matrix[F]":
        """
        Standard matrix product.

        Each sum starts from the zero of this matrix's own field, so
        residue products stay in Z_p.

        Raises:
            IncompatibleDimensionsError: If self.width != other.height
        """
        if self.width != other.height:
            raise IncompatibleDimensionsError(
                f"cannot multiply {self.height}x{self.width} by "
                f"{other.height}x{other.width} matrix")

        zero = self._zero()
        product = np.empty((self.height, other.width), dtype=object)
        for i in range(self.height):
            for j in range(other.width):
                terms = _MULTIPLY(self._entries[i, :], other._entries[:, j])
                product[i, j] = reduce(lambda total, term: total.add(term), terms, zero)

        return Matrix._from_array(product)

    def scalar_multiply(self, scalar: F) -> "Matrix[F]":
        return Matrix._from_array(_MULTIPLY(self._entries, scalar))

    def negate(self) -> "Matrix[F]":
        return self.scalar_multiply(self._one().negate())

    # Row reduction

    def rref(self) -> RREFResult[F]:
        """
        Reduced row echelon form, rank and determinant in one pass.

        Pivots are chosen by position (first non-zero entry), which is all
        exact arithmetic needs.

        Returns:
            RREFResult(rref, rank, determinant)
        """
        work = self._entries.copy()
        determinant = self._one()
        pivots: List[Tuple[int, int]] = []
        row = 0

        for col in range(self.width):
            pivot_row = next(
                (i for i in range(row, self.height) if not work[i, col].is_zero), None)
            if pivot_row is None:
                continue

            if pivot_row != row:
                work[[row, pivot_row]] = work[[pivot_row, row]]
                determinant = determinant.negate()

            pivot = work[row, col]
            for i in range(row + 1, self.height):
                if work[i, col].is_zero:
                    continue
                factor = work[i, col].divide(pivot).negate()
                work[i] = _ADD(work[i], _MULTIPLY(work[row], factor))

            pivots.append((row, col))
            row += 1

        for pivot_row, col in reversed(pivots):
            pivot = work[pivot_row, col]
            determinant = determinant.multiply(pivot)
            work[pivot_row] = _MULTIPLY(work[pivot_row], pivot.reciprocal())

            for i in range(pivot_row):
                if work[i, col].is_zero:
                    continue
                factor = work[i, col].negate()
                work[i] = _ADD(work[i], _MULTIPLY(work[pivot_row], factor))

        rank = len(pivots)
        if not (self.height == rank and self.width == rank):
            determinant = determinant.get_zero()

        logger.debug("rref of %dx%d matrix: rank %d", self.height, self.width, rank)
        return RREFResult(Matrix._from_array(work), rank, determinant)

    def rank(self) -> int:
        return self.rref().rank

    def determinant(self) -> F:
        return self.rref().determinant

    # Operators

    def __add__(self, other: "Matrix[F]") -> "Matrix[F]":
        return self.add(other)

    def __sub__(self, other: "Matrix[F]") -> "Matrix[F]":
        return self.subtract(other)

    def __mul__(self, other: Union["Matrix[F]", F]) -> "Matrix[F]":
        if isinstance(other, Matrix):
            return self.multiply(other)
        return self.scalar_multiply(other)

    def __neg__(self) -> "Matrix[F]":
        return self.negate()
