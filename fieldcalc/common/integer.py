"""
Arbitrary-Precision Signed Integers.

An Integer is a sign flag plus a Natural magnitude. Addition and
subtraction reduce to Natural add/monus on the four sign combinations;
whenever a monus underflows, the operand with the larger magnitude decides
the sign of the result.

Zero is always stored with ``is_negative = False``.
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidIntegerError
from .natural import Natural, ZERO as NATURAL_ZERO


@dataclass(frozen=True)
class Integer:
    """
    A signed integer of arbitrary size.

    Attributes:
        is_negative: Sign flag (never set for zero)
        magnitude: Absolute value

    Example:
        >>> a = Integer.parse("-12")
        >>> b = Integer.parse("5")
        >>> a.add(b).to_decimal_string()
        '-7'
    """
    is_negative: bool = False
    magnitude: Natural = NATURAL_ZERO

    def __post_init__(self):
        if self.magnitude.is_zero and self.is_negative:
            object.__setattr__(self, "is_negative", False)

    @classmethod
    def from_int(cls, value: int) -> Integer:
        return cls(value < 0, Natural.from_int(abs(value)))

    @classmethod
    def parse(cls, text: str) -> Integer:
        """
        Parse decimal digits with an optional leading minus sign.

        Raises:
            InvalidIntegerError: On empty text or a lone "-"
            InvalidDigitError: On any other non-digit character
        """
        if text == "" or text == "-":
            raise InvalidIntegerError(text)
        if text[0] == "-":
            return cls(True, Natural.parse(text[1:]))
        return cls(False, Natural.parse(text))

    @property
    def is_zero(self) -> bool:
        return self.magnitude.is_zero

    @property
    def is_one(self) -> bool:
        return not self.is_negative and self.magnitude.is_one

    @property
    def absolute_value(self) -> Natural:
        return self.magnitude

    def add(self, other: Integer) -> Integer:
        if self.is_negative == other.is_negative:
            return Integer(self.is_negative, self.magnitude.add(other.magnitude))

        # Opposite signs: subtract magnitudes, larger magnitude wins the sign
        difference, underflow = self.magnitude.monus(other.magnitude)
        if underflow:
            difference, _ = other.magnitude.monus(self.magnitude)
            return Integer(other.is_negative, difference)
        return Integer(self.is_negative, difference)

    def subtract(self, other: Integer) -> Integer:
        return self.add(other.negate())

    def multiply(self, other: Integer) -> Integer:
        return Integer(
            self.is_negative != other.is_negative,
            self.magnitude.multiply(other.magnitude),
        )

    def divide(self, divisor: Natural) -> Integer:
        """Truncated division by a natural; the dividend keeps its sign."""
        quotient, _ = self.magnitude.divide(divisor)
        return Integer(self.is_negative, quotient)

    def negate(self) -> Integer:
        return Integer(not self.is_negative, self.magnitude)

    def to_decimal_string(self) -> str:
        digits = self.magnitude.to_decimal_string()
        return "-" + digits if self.is_negative else digits

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"Integer({self.to_decimal_string()})"

    def __int__(self) -> int:
        value = int(self.magnitude)
        return -value if self.is_negative else value

    def __add__(self, other: Integer) -> Integer:
        return self.add(other)

    def __sub__(self, other: Integer) -> Integer:
        return self.subtract(other)

    def __mul__(self, other: Integer) -> Integer:
        return self.multiply(other)

    def __neg__(self) -> Integer:
        return self.negate()
