"""
Exact arithmetic kernel for the field calculator.

This package provides:
    - Arbitrary-precision naturals and integers (Natural, Integer)
    - The Field contract shared by all field element types
    - Rationals (Rational) and prime field residues (Residue, PrimeField)
    - The typed errors raised by all of the above
"""

from .errors import (
    CalculatorError,
    CompositeModuloError,
    DivisionByZeroError,
    EmptyMatrixError,
    IncompatibleDimensionsError,
    IncompatibleModuloError,
    IncompatibleTypeError,
    InvalidDigitError,
    InvalidIntegerError,
    InvalidSyntaxError,
    UndefinedVariableError,
    UnknownCharacterError,
)
from .natural import Natural
from .integer import Integer
from .field import Field, PrimeField, Residue, is_prime
from .rational import Rational

__all__ = [
    "Natural",
    "Integer",
    "Field",
    "PrimeField",
    "Residue",
    "Rational",
    "is_prime",
    # Errors
    "CalculatorError",
    "CompositeModuloError",
    "DivisionByZeroError",
    "EmptyMatrixError",
    "IncompatibleDimensionsError",
    "IncompatibleModuloError",
    "IncompatibleTypeError",
    "InvalidDigitError",
    "InvalidIntegerError",
    "InvalidSyntaxError",
    "UndefinedVariableError",
    "UnknownCharacterError",
]
