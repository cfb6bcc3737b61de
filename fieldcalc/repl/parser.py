"""
Command and Expression Parser.

Commands:
    EXIT                         leave the calculator
    DEF <type> <name>            define a variable (value read on following lines)
    EVAL <type>                  evaluate the expression on the next line

Types:
    Q                            rationals
    Z <p>                        residues modulo the prime p
    Matrix[Q] <h> <w>            rational matrices (dimensions only for DEF)
    Matrix[Z <p>] <h> <w>        residue matrices

Expressions use prefix notation, with optional parentheses for grouping:
    + a b         a + b
    * 2 - x y     2 * (x - y)
    det * A B     det(A * B)
    scale / 1 2 A   A / 2 (literals are integers)

Functions:
    neg, inv, det, rank, rref   one operand
    pow, scale                  two operands
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..common.errors import InvalidSyntaxError
from ..common.field import validate_modulus
from .lexer import Lexer, Token, TokenType


class ValueType(Enum):
    """The four kinds of value the calculator stores and evaluates."""
    RATIONAL = "Q"
    RESIDUE = "Z"
    RATIONAL_MATRIX = "Matrix[Q]"
    RESIDUE_MATRIX = "Matrix[Z]"

    @property
    def is_matrix(self) -> bool:
        return self in (ValueType.RATIONAL_MATRIX, ValueType.RESIDUE_MATRIX)

    @property
    def is_residue(self) -> bool:
        return self in (ValueType.RESIDUE, ValueType.RESIDUE_MATRIX)


@dataclass(frozen=True)
class TypeSpec:
    """
    A value type together with its prime, for the residue kinds.

    Example:
        >>> TypeSpec(ValueType.RESIDUE_MATRIX, 7).describe()
        'Matrix[Z 7]'
    """
    kind: ValueType
    modulo: Optional[int] = None

    def scalar(self) -> TypeSpec:
        """The entry type of a matrix type (scalar types map to themselves)."""
        kind = ValueType.RESIDUE if self.kind.is_residue else ValueType.RATIONAL
        return TypeSpec(kind, self.modulo)

    def matrix(self) -> TypeSpec:
        """The matrix type over the same field."""
        kind = ValueType.RESIDUE_MATRIX if self.kind.is_residue else ValueType.RATIONAL_MATRIX
        return TypeSpec(kind, self.modulo)

    def describe(self) -> str:
        field = f"Z {self.modulo}" if self.kind.is_residue else "Q"
        return f"Matrix[{field}]" if self.kind.is_matrix else field

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Command:
    """A parsed command line."""
    keyword: str
    type_spec: Optional[TypeSpec] = None
    name: Optional[str] = None
    height: int = 0
    width: int = 0


# Expression tree

@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    function: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    operator: str
    left: "Node"
    right: "Node"


Node = Union[Literal, Variable, UnaryOp, BinaryOp]

KEYWORDS = ("EXIT", "DEF", "EVAL")
OPERATORS = ("+", "-", "*", "/")
FUNCTIONS = {
    "neg": 1,
    "inv": 1,
    "det": 1,
    "rank": 1,
    "rref": 1,
    "pow": 2,
    "scale": 2,
}
RESERVED_NAMES = frozenset(KEYWORDS) | frozenset(FUNCTIONS) | {"Q", "Z", "Matrix"}

# 2^32 has ten decimal digits
_MAX_SIZE_DIGITS = 10


def _expect(lexer: Lexer, text: str) -> Token:
    token = lexer.next_token()
    if token.type is not TokenType.SPECIAL or token.text != text:
        found = token.text or "end of line"
        raise InvalidSyntaxError(f"expected {text!r}, found {found!r}")
    return token


def _expect_end(lexer: Lexer) -> None:
    token = lexer.next_token()
    if token.type is not TokenType.END:
        raise InvalidSyntaxError(f"unexpected {token.text!r} at position {token.position + 1}")


def _small_natural(token: Token, message: str) -> int:
    """Value of a non-negative literal with at most as many digits as 2^32."""
    if token.type is not TokenType.LITERAL or token.text.startswith("-"):
        raise InvalidSyntaxError(message)
    digits = token.text.lstrip("0") or "0"
    if len(digits) > _MAX_SIZE_DIGITS:
        raise InvalidSyntaxError(f"{message} (got a {len(digits)}-digit number)")
    return int(digits)


def _parse_modulus(lexer: Lexer) -> int:
    modulo = _small_natural(lexer.next_token(), "Z must be followed by a prime below 2^32")
    return validate_modulus(modulo)


def _parse_dimension(lexer: Lexer) -> int:
    message = "matrix dimensions must be positive integers below 2^32"
    dimension = _small_natural(lexer.next_token(), message)
    if dimension == 0:
        raise InvalidSyntaxError(message)
    return dimension


def _parse_field(lexer: Lexer) -> TypeSpec:
    token = lexer.next_token()
    if token.type is TokenType.NAME and token.text == "Q":
        return TypeSpec(ValueType.RATIONAL)
    if token.type is TokenType.NAME and token.text == "Z":
        return TypeSpec(ValueType.RESIDUE, _parse_modulus(lexer))
    raise InvalidSyntaxError(f"unknown type {token.text or 'end of line'!r}")


def _parse_type(lexer: Lexer) -> TypeSpec:
    token = lexer.peek()
    if token.type is TokenType.NAME and token.text == "Matrix":
        lexer.next_token()
        _expect(lexer, "[")
        field = _parse_field(lexer)
        _expect(lexer, "]")
        return field.matrix()
    return _parse_field(lexer)


def _parse_name(lexer: Lexer) -> str:
    token = lexer.next_token()
    if token.type is not TokenType.NAME:
        raise InvalidSyntaxError("expected a variable name")
    if token.text in RESERVED_NAMES:
        raise InvalidSyntaxError(f"{token.text!r} is reserved")
    return token.text


def parse_command(text: str) -> Command:
    """
    Parse one command line.

    Raises:
        InvalidSyntaxError: On malformed commands
        CompositeModuloError: If a Z type names a non-prime modulus
        UnknownCharacterError: On characters the lexer rejects
    """
    lexer = Lexer(text)
    keyword = lexer.next_token()
    if keyword.type is not TokenType.NAME or keyword.text not in KEYWORDS:
        raise InvalidSyntaxError(f"unknown command {keyword.text or text!r}")

    if keyword.text == "EXIT":
        _expect_end(lexer)
        return Command("EXIT")

    type_spec = _parse_type(lexer)

    if keyword.text == "EVAL":
        _expect_end(lexer)
        return Command("EVAL", type_spec)

    height = width = 0
    if type_spec.kind.is_matrix:
        height = _parse_dimension(lexer)
        width = _parse_dimension(lexer)
    name = _parse_name(lexer)
    _expect_end(lexer)
    return Command("DEF", type_spec, name, height, width)


def _parse_node(lexer: Lexer) -> Node:
    token = lexer.next_token()

    if token.type is TokenType.LITERAL:
        return Literal(token.text)

    if token.type is TokenType.NAME:
        arity = FUNCTIONS.get(token.text)
        if arity == 1:
            return UnaryOp(token.text, _parse_node(lexer))
        if arity == 2:
            left = _parse_node(lexer)
            return BinaryOp(token.text, left, _parse_node(lexer))
        return Variable(token.text)

    if token.type is TokenType.SPECIAL:
        if token.text == "(":
            node = _parse_node(lexer)
            _expect(lexer, ")")
            return node
        if token.text in OPERATORS:
            left = _parse_node(lexer)
            return BinaryOp(token.text, left, _parse_node(lexer))
        raise InvalidSyntaxError(f"unexpected {token.text!r} at position {token.position + 1}")

    raise InvalidSyntaxError("incomplete expression")


def parse_expression(text: str) -> Node:
    """
    Parse a prefix-notation expression into a tree.

    Raises:
        InvalidSyntaxError: On incomplete expressions, trailing tokens or
            nesting deeper than the interpreter's recursion limit
    """
    lexer = Lexer(text)
    try:
        node = _parse_node(lexer)
    except RecursionError:
        raise InvalidSyntaxError("expression nested too deeply") from None
    _expect_end(lexer)
    return node
