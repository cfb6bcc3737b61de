"""
Exception types for the exact arithmetic kernel and the calculator shell.

Every failure is a subclass of CalculatorError, so the read-eval-print loop
can report it and carry on with the next command. Each kind also derives
from the closest builtin exception, which lets plain callers write
``except ValueError`` or ``except ZeroDivisionError``.
"""

from __future__ import annotations
from typing import Optional


class CalculatorError(Exception):
    """Base class for all calculator failures."""


class InvalidDigitError(CalculatorError, ValueError):
    """A character outside 0-9 appeared where a decimal digit was expected."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"invalid digit {symbol!r}")


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Division or reciprocal of zero."""

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class InvalidIntegerError(CalculatorError, ValueError):
    """Malformed integer text (empty, or a lone sign)."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid integer {text!r}")


class CompositeModuloError(CalculatorError, ValueError):
    """A field Z_p was requested with a modulus that is not a 32-bit prime."""

    def __init__(self, modulo: int):
        self.modulo = modulo
        super().__init__(f"modulus {modulo} is not a prime below 2^32")


class IncompatibleModuloError(CalculatorError, ValueError):
    """Residues from two different fields Z_p and Z_q were combined."""

    def __init__(self, modulo1: int, modulo2: int):
        self.modulo1 = modulo1
        self.modulo2 = modulo2
        super().__init__(f"cannot combine elements of Z_{modulo1} and Z_{modulo2}")


class IncompatibleDimensionsError(CalculatorError, ValueError):
    """Matrix shapes do not fit the requested operation."""

    def __init__(self, detail: str = "incompatible matrix dimensions"):
        super().__init__(detail)


class EmptyMatrixError(CalculatorError, ValueError):
    """A matrix with no rows or no columns was constructed."""

    def __init__(self):
        super().__init__("matrices must have at least one row and one column")


class IncompatibleTypeError(CalculatorError, TypeError):
    """A stored value's kind does not match the operation requested on it."""

    def __init__(self, name: str, expected: str, actual: Optional[str] = None):
        self.name = name
        self.expected = expected
        self.actual = actual
        if actual is None:
            message = f"{name!r} cannot be used as {expected}"
        else:
            message = f"{name!r} is {actual}, expected {expected}"
        super().__init__(message)


class UnknownCharacterError(CalculatorError, ValueError):
    """The lexer found a character it does not understand."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"unknown character {char!r}")


class InvalidSyntaxError(CalculatorError, ValueError):
    """A command or expression is malformed."""

    def __init__(self, detail: str = "invalid syntax"):
        super().__init__(detail)


class UndefinedVariableError(CalculatorError, LookupError):
    """A variable was referenced before being defined."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined variable {name!r}")
