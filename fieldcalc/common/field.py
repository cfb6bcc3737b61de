"""
Field Contract and Prime Field Arithmetic.

This module defines the capability set every field element type must offer
so the matrix engine can work over any of them, and implements the prime
fields Z_p on top of it.

Field Contract:
    add, subtract, multiply, divide, reciprocal, negate,
    get_zero, get_one (identities of the element's own field),
    is_zero, get_string (canonical text)

Arithmetic in Z_p:
    - Addition: (a + b) mod p, by wraparound (p fits in 32 bits)
    - Subtraction: (a - b + p) mod p
    - Multiplication: double-and-add over the bits of b
    - Power: square-and-multiply
    - Inversion: a^(p-2) mod p (Fermat's Little Theorem, p prime)

Example:
    >>> field = PrimeField(97)
    >>> a = field.element(45)
    >>> b = field.element(67)
    >>> print(a + b)  # (45 + 67) mod 97 = 15
    15
    >>> (a * a.reciprocal()).get_string()
    '1'
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol, TypeVar

from .errors import (
    CompositeModuloError,
    DivisionByZeroError,
    IncompatibleModuloError,
)
from .integer import Integer
from .natural import Natural


MAX_MODULUS = (1 << 32) - 1

F = TypeVar("F", bound="Field")


class Field(Protocol):
    """
    Operations a field element type provides to generic code.

    Identities are obtained from an existing element, so that elements of
    Z_p can hand out the zero and one of the same Z_p.
    """

    def add(self: F, other: F) -> F: ...

    def subtract(self: F, other: F) -> F: ...

    def multiply(self: F, other: F) -> F: ...

    def divide(self: F, other: F) -> F: ...

    def reciprocal(self: F) -> F: ...

    def negate(self: F) -> F: ...

    def get_zero(self: F) -> F: ...

    def get_one(self: F) -> F: ...

    @property
    def is_zero(self) -> bool: ...

    def get_string(self) -> str: ...


@lru_cache(maxsize=None)
def is_prime(n: int) -> bool:
    """Deterministic trial division up to sqrt(n)."""
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    divisor = 3
    while divisor * divisor <= n:
        if n % divisor == 0:
            return False
        divisor += 2
    return True


def validate_modulus(modulo: int) -> int:
    """
    Check that ``modulo`` can be the order of a field Z_p.

    Raises:
        CompositeModuloError: If modulo is not a prime in [2, 2^32)
    """
    if not 2 <= modulo <= MAX_MODULUS or not is_prime(modulo):
        raise CompositeModuloError(modulo)
    return modulo


@dataclass(frozen=True)
class Residue:
    """
    An element of the prime field Z_p.

    Attributes:
        value: The residue, always in [0, p-1]
        modulo: The prime p

    Two residues can only be combined when their moduli agree; otherwise
    IncompatibleModuloError is raised.

    Example:
        >>> x = Residue(10, 7)
        >>> x.value
        3
        >>> Residue(3, 4)
        Traceback (most recent call last):
        ...
        fieldcalc.common.errors.CompositeModuloError: modulus 4 is not a prime below 2^32
    """
    value: int
    modulo: int

    def __post_init__(self):
        """Reject composite moduli and reduce the value."""
        validate_modulus(self.modulo)
        object.__setattr__(self, "value", self.value % self.modulo)

    def __repr__(self) -> str:
        return f"Residue({self.value}, mod {self.modulo})"

    def __str__(self) -> str:
        return self.get_string()

    def _check_compatible(self, other: Residue) -> None:
        if self.modulo != other.modulo:
            raise IncompatibleModuloError(self.modulo, other.modulo)

    # Field operations

    def add(self, other: Residue) -> Residue:
        """Addition with wraparound: (a + b) mod p"""
        self._check_compatible(other)
        total = self.value + other.value
        if total >= self.modulo:
            total -= self.modulo
        return Residue(total, self.modulo)

    def subtract(self, other: Residue) -> Residue:
        """Subtraction: (a - b + p) mod p"""
        self._check_compatible(other)
        if self.value >= other.value:
            return Residue(self.value - other.value, self.modulo)
        return Residue(self.modulo - (other.value - self.value), self.modulo)

    def multiply(self, other: Residue) -> Residue:
        """
        Multiplication by double-and-add.

        Scans the bits of the multiplier from the least significant one,
        doubling the addend each step, so no intermediate exceeds 2p.
        """
        self._check_compatible(other)
        product = self.get_zero()
        addend = self
        q = other.value
        while q:
            if q & 1:
                product = product.add(addend)
            addend = addend.add(addend)
            q >>= 1
        return product

    def power(self, exponent: int) -> Residue:
        """
        Exponentiation using square-and-multiply.

        A negative exponent raises the reciprocal: a^(-n) = (a^(-1))^n.
        Time complexity: O(log |exponent|) multiplications.

        Raises:
            DivisionByZeroError: If self is zero and exponent is negative
        """
        if exponent < 0:
            return self.reciprocal().power(-exponent)

        result = self.get_one()
        base = self
        while exponent:
            if exponent & 1:
                result = result.multiply(base)
            base = base.multiply(base)
            exponent >>= 1
        return result

    def reciprocal(self) -> Residue:
        """
        Multiplicative inverse via Fermat's Little Theorem: a^(p-2).

        Raises:
            DivisionByZeroError: If self is zero
        """
        if self.is_zero:
            raise DivisionByZeroError("zero has no inverse")
        return self.power(self.modulo - 2)

    def divide(self, other: Residue) -> Residue:
        """
        Division: a * b^(-1) mod p

        Raises:
            IncompatibleModuloError: If the moduli differ
            DivisionByZeroError: If other is zero
        """
        self._check_compatible(other)
        if other.is_zero:
            raise DivisionByZeroError()
        return self.multiply(other.reciprocal())

    def negate(self) -> Residue:
        """Negation: -a = p - a (and -0 = 0)"""
        if self.is_zero:
            return self
        return Residue(self.modulo - self.value, self.modulo)

    def get_zero(self) -> Residue:
        return Residue(0, self.modulo)

    def get_one(self) -> Residue:
        return Residue(1, self.modulo)

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def is_one(self) -> bool:
        return self.value == 1

    def get_string(self) -> str:
        """The value alone; the modulus is known from context."""
        return str(self.value)

    # Operators

    def __add__(self, other: Residue) -> Residue:
        return self.add(other)

    def __sub__(self, other: Residue) -> Residue:
        return self.subtract(other)

    def __mul__(self, other: Residue) -> Residue:
        return self.multiply(other)

    def __truediv__(self, other: Residue) -> Residue:
        return self.divide(other)

    def __neg__(self) -> Residue:
        return self.negate()

    def __pow__(self, exponent: int) -> Residue:
        return self.power(exponent)


class PrimeField:
    """
    A prime field Z_p, used as a factory for its elements.

    The modulus is validated once here, so a PrimeField always denotes a
    genuine field.

    Attributes:
        prime: The prime modulus p

    Example:
        >>> field = PrimeField(7)
        >>> field.parse("-1")
        Residue(6, mod 7)
        >>> PrimeField(4)
        Traceback (most recent call last):
        ...
        fieldcalc.common.errors.CompositeModuloError: modulus 4 is not a prime below 2^32
    """

    def __init__(self, prime: int):
        self.prime = validate_modulus(prime)

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and other.prime == self.prime

    def __hash__(self) -> int:
        return hash(self.prime)

    def element(self, value: int) -> Residue:
        """Create a field element from an integer."""
        return Residue(value % self.prime, self.prime)

    def zero(self) -> Residue:
        """Return the additive identity (0)."""
        return Residue(0, self.prime)

    def one(self) -> Residue:
        """Return the multiplicative identity (1)."""
        return Residue(1, self.prime)

    def parse(self, text: str) -> Residue:
        """
        Parse an integer literal of any size and reduce it into Z_p.

        Negative literals wrap around, so "-1" is p - 1.
        """
        integer = Integer.parse(text.strip())
        _, remainder = integer.magnitude.divide(Natural.from_int(self.prime))
        residue = Residue(int(remainder), self.prime)
        return residue.negate() if integer.is_negative else residue
