"""
Generic matrix engine.

Matrix[F] offers addition, subtraction, products, scalar multiples,
negation and row reduction (rref with rank and determinant) for any
element type F satisfying the Field contract.

Usage:
    >>> from fieldcalc.common import PrimeField
    >>> from fieldcalc.matrix import Matrix
    >>> field = PrimeField(7)
    >>> m = Matrix([[field.element(2), field.element(0)],
    ...             [field.element(0), field.element(3)]])
    >>> m.rref().determinant
    Residue(6, mod 7)
"""

from .core import Matrix, RREFResult

__all__ = [
    "Matrix",
    "RREFResult",
]
