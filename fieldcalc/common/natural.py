"""
Arbitrary-Precision Natural Numbers.

A Natural is stored as a tuple of unsigned 32-bit blocks, least significant
block first. Everything else in the kernel (integers, rationals, residue
parsing) is built on the handful of schoolbook algorithms in this module.

Canonical Form:
    - No most-significant zero blocks
    - Zero is the single block (0,)
    Every constructor trims the blocks, so equal numbers always compare
    equal as dataclasses.

Algorithms:
    - Addition: block-wise with carry propagation
    - Monus: block-wise subtraction with borrow; a final borrow means a < b
    - Multiplication: double-and-add over the bits of the multiplier
    - Division: bit-by-bit restoring division
    - GCD: Euclid's algorithm on remainders

Example:
    >>> a = Natural.parse("4294967296")   # 2^32
    >>> a.blocks
    (0, 1)
    >>> str(a.add(Natural.from_int(5)))
    '4294967301'
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

from .errors import DivisionByZeroError, InvalidDigitError


BLOCK_BITS = 32
BLOCK_MASK = (1 << BLOCK_BITS) - 1


def _trim(blocks: Tuple[int, ...]) -> Tuple[int, ...]:
    """Drop most-significant zero blocks, keeping (0,) for zero."""
    size = len(blocks)
    while size > 1 and blocks[size - 1] == 0:
        size -= 1
    if size == 0:
        return (0,)
    return tuple(blocks[:size])


@total_ordering
@dataclass(frozen=True)
class Natural:
    """
    An unsigned integer of arbitrary size.

    Attributes:
        blocks: 32-bit blocks, least significant first

    Example:
        >>> q, r = Natural.from_int(17).divide(Natural.from_int(5))
        >>> (int(q), int(r))
        (3, 2)
    """
    blocks: Tuple[int, ...] = (0,)

    def __post_init__(self):
        """Validate block range and restore canonical form."""
        blocks = tuple(self.blocks)
        for block in blocks:
            if not 0 <= block <= BLOCK_MASK:
                raise ValueError(f"block {block} does not fit in {BLOCK_BITS} bits")
        object.__setattr__(self, "blocks", _trim(blocks))

    @classmethod
    def from_int(cls, value: int) -> Natural:
        """Build a Natural from a non-negative Python int."""
        if value < 0:
            raise ValueError(f"naturals cannot be negative, got {value}")
        blocks = []
        while True:
            blocks.append(value & BLOCK_MASK)
            value >>= BLOCK_BITS
            if value == 0:
                break
        return cls(tuple(blocks))

    @classmethod
    def parse(cls, expansion: str) -> Natural:
        """
        Parse a string of decimal digits.

        Each digit is folded in as ``result * 10 + digit``. The empty
        string parses as zero.

        Raises:
            InvalidDigitError: If any character is not 0-9
        """
        result = ZERO
        for char in expansion:
            if not "0" <= char <= "9":
                raise InvalidDigitError(char)
            result = result.multiply(TEN).add(_DIGITS[ord(char) - ord("0")])
        return result

    # Predicates

    @property
    def is_zero(self) -> bool:
        return self.blocks == (0,)

    @property
    def is_one(self) -> bool:
        return self.blocks == (1,)

    # Arithmetic

    def add(self, other: Natural) -> Natural:
        """Block-wise addition; a carry out of the top block adds a block."""
        if len(self.blocks) >= len(other.blocks):
            longer, shorter = self.blocks, other.blocks
        else:
            longer, shorter = other.blocks, self.blocks

        result = []
        carry = 0
        for i, block in enumerate(longer):
            total = block + (shorter[i] if i < len(shorter) else 0) + carry
            result.append(total & BLOCK_MASK)
            carry = total >> BLOCK_BITS
        if carry:
            result.append(carry)

        return Natural(tuple(result))

    def monus(self, other: Natural) -> Tuple[Natural, bool]:
        """
        Truncated subtraction.

        Returns:
            (self - other, False) when self >= other, otherwise
            (zero, True). The flag is the only comparison primitive.
        """
        width = max(len(self.blocks), len(other.blocks))
        result = []
        borrow = 0
        for i in range(width):
            a = self.blocks[i] if i < len(self.blocks) else 0
            b = other.blocks[i] if i < len(other.blocks) else 0
            difference = a - b - borrow
            borrow = 1 if difference < 0 else 0
            result.append(difference & BLOCK_MASK)

        if borrow:
            return ZERO, True
        return Natural(tuple(result)), False

    def greater_than(self, other: Natural) -> bool:
        """True iff self > other, i.e. other - self underflows."""
        _, negative = other.monus(self)
        return negative

    def double(self) -> Natural:
        return self.add(self)

    def multiply(self, other: Natural) -> Natural:
        """
        Shift-and-add multiplication.

        Walks the bits of ``other`` from the most significant one down,
        doubling an accumulator and adding ``self`` on every set bit.
        """
        result = ZERO
        for block in reversed(other.blocks):
            for offset in range(BLOCK_BITS - 1, -1, -1):
                result = result.double()
                if (block >> offset) & 1:
                    result = result.add(self)
        return result

    def divide(self, other: Natural) -> Tuple[Natural, Natural]:
        """
        Restoring division, one dividend bit at a time.

        Returns:
            (quotient, remainder)

        Raises:
            DivisionByZeroError: If other is zero
        """
        if other.is_zero:
            raise DivisionByZeroError()

        quotient = [0] * len(self.blocks)
        remainder = ZERO
        for index in range(len(self.blocks) - 1, -1, -1):
            block = self.blocks[index]
            for offset in range(BLOCK_BITS - 1, -1, -1):
                remainder = remainder.double()
                if (block >> offset) & 1:
                    remainder = Natural((remainder.blocks[0] | 1,) + remainder.blocks[1:])

                if not other.greater_than(remainder):
                    remainder, _ = remainder.monus(other)
                    quotient[index] |= 1 << offset

        return Natural(tuple(quotient)), remainder

    @staticmethod
    def gcd(a: Natural, b: Natural) -> Natural:
        """Greatest common divisor by Euclid's algorithm (gcd(0, 0) = 0)."""
        while not b.is_zero:
            _, remainder = a.divide(b)
            a, b = b, remainder
        return a

    # Text

    def to_decimal_string(self) -> str:
        """Decimal digits, collected by repeated division by ten."""
        if self.is_zero:
            return "0"

        digits = []
        n = self
        while not n.is_zero:
            n, remainder = n.divide(TEN)
            digits.append(chr(ord("0") + remainder.blocks[0]))
        return "".join(reversed(digits))

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"Natural({self.to_decimal_string()})"

    def __int__(self) -> int:
        value = 0
        for block in reversed(self.blocks):
            value = (value << BLOCK_BITS) | block
        return value

    # Operators

    def __lt__(self, other: Natural) -> bool:
        if not isinstance(other, Natural):
            return NotImplemented
        return other.greater_than(self)

    def __add__(self, other: Natural) -> Natural:
        return self.add(other)

    def __mul__(self, other: Natural) -> Natural:
        return self.multiply(other)

    def __divmod__(self, other: Natural) -> Tuple[Natural, Natural]:
        return self.divide(other)

    def __floordiv__(self, other: Natural) -> Natural:
        return self.divide(other)[0]

    def __mod__(self, other: Natural) -> Natural:
        return self.divide(other)[1]


# Small naturals used by parsing and printing
ZERO = Natural((0,))
ONE = Natural((1,))
TEN = Natural((10,))
_DIGITS = tuple(Natural((digit,)) for digit in range(10))
