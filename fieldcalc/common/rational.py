"""
Exact Rational Numbers.

A Rational is a pair of Integers kept in lowest terms with the sign on the
numerator. Every operation goes back through the constructor, which
simplifies by the gcd of the magnitudes, so there is exactly one
representation of each rational number and dataclass equality is value
equality.

Example:
    >>> half = Rational.parse("2/4")
    >>> half.get_string()
    '1/2'
    >>> half.add(Rational.parse("-3/2")).get_string()
    '-1'
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import DivisionByZeroError, InvalidIntegerError
from .integer import Integer
from .natural import Natural


@dataclass(frozen=True)
class Rational:
    """
    An element of the field Q.

    Attributes:
        numerator: Carries the sign
        denominator: Always positive, coprime to the numerator

    Raises:
        DivisionByZeroError: If constructed with a zero denominator
    """
    numerator: Integer
    denominator: Integer

    def __post_init__(self):
        """Reduce to lowest terms with a positive denominator."""
        if self.denominator.magnitude.is_zero:
            raise DivisionByZeroError()

        gcd = Natural.gcd(self.numerator.magnitude, self.denominator.magnitude)
        negative = self.numerator.is_negative != self.denominator.is_negative
        numerator, _ = self.numerator.magnitude.divide(gcd)
        denominator, _ = self.denominator.magnitude.divide(gcd)

        object.__setattr__(self, "numerator", Integer(negative, numerator))
        object.__setattr__(self, "denominator", Integer(False, denominator))

    @classmethod
    def from_int(cls, value: int) -> Rational:
        return cls(Integer.from_int(value), _INT_ONE)

    @classmethod
    def parse(cls, text: str) -> Rational:
        """
        Parse "p" or "p/q" for integers p and q.

        Raises:
            InvalidIntegerError: If either part is not an integer
            InvalidDigitError: On stray characters inside a part
            DivisionByZeroError: If q is zero
        """
        parts = text.strip().split("/")
        if len(parts) == 1:
            return cls(Integer.parse(parts[0].strip()), _INT_ONE)
        if len(parts) == 2:
            return cls(Integer.parse(parts[0].strip()), Integer.parse(parts[1].strip()))
        raise InvalidIntegerError(text)

    @property
    def is_zero(self) -> bool:
        return self.numerator.is_zero

    @property
    def is_one(self) -> bool:
        return self.numerator.is_one and self.denominator.is_one

    # Field operations: p/q op r/s

    def add(self, other: Rational) -> Rational:
        p, q = self.numerator, self.denominator
        r, s = other.numerator, other.denominator
        return Rational(p.multiply(s).add(q.multiply(r)), q.multiply(s))

    def subtract(self, other: Rational) -> Rational:
        p, q = self.numerator, self.denominator
        r, s = other.numerator, other.denominator
        return Rational(p.multiply(s).subtract(q.multiply(r)), q.multiply(s))

    def multiply(self, other: Rational) -> Rational:
        return Rational(
            self.numerator.multiply(other.numerator),
            self.denominator.multiply(other.denominator),
        )

    def divide(self, other: Rational) -> Rational:
        if other.is_zero:
            raise DivisionByZeroError()
        return Rational(
            self.numerator.multiply(other.denominator),
            self.denominator.multiply(other.numerator),
        )

    def reciprocal(self) -> Rational:
        if self.is_zero:
            raise DivisionByZeroError("zero has no inverse")
        return Rational(self.denominator, self.numerator)

    def negate(self) -> Rational:
        return Rational(self.numerator.negate(), self.denominator)

    def get_zero(self) -> Rational:
        return RATIONAL_ZERO

    def get_one(self) -> Rational:
        return RATIONAL_ONE

    def get_string(self) -> str:
        """"p" for whole numbers, "p/q" otherwise."""
        if self.denominator.is_one:
            return self.numerator.to_decimal_string()
        return f"{self.numerator.to_decimal_string()}/{self.denominator.to_decimal_string()}"

    def __str__(self) -> str:
        return self.get_string()

    def __repr__(self) -> str:
        return f"Rational({self.get_string()})"

    # Operators

    def __add__(self, other: Rational) -> Rational:
        return self.add(other)

    def __sub__(self, other: Rational) -> Rational:
        return self.subtract(other)

    def __mul__(self, other: Rational) -> Rational:
        return self.multiply(other)

    def __truediv__(self, other: Rational) -> Rational:
        return self.divide(other)

    def __neg__(self) -> Rational:
        return self.negate()


_INT_ONE = Integer.from_int(1)

RATIONAL_ZERO = Rational(Integer.from_int(0), _INT_ONE)
RATIONAL_ONE = Rational(_INT_ONE, _INT_ONE)
