"""
Expression evaluation against a variable store.

The expected type of every subexpression follows from the EVAL type: in a
scalar context operands are scalars of the same field, except for ``det``
whose operand is a matrix over that field; in a matrix context operands are
matrices, except for the scalar factor of ``scale``.

``rank`` counts pivots, so it is a function into Q. Its operand is a matrix
over the field of the first matrix variable it mentions (Q when it mentions
none), which makes the rank of a residue matrix available under EVAL Q.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Union
import logging

from ..common.errors import IncompatibleTypeError, InvalidSyntaxError
from ..common.field import PrimeField, Residue
from ..common.rational import Rational
from ..matrix.core import Matrix
from .parser import BinaryOp, Literal, Node, TypeSpec, UnaryOp, ValueType, Variable

if TYPE_CHECKING:
    from .runtime import VariableStore


logger = logging.getLogger(__name__)

Scalar = Union[Rational, Residue]
Value = Union[Scalar, Matrix]


def parse_scalar(text: str, spec: TypeSpec) -> Scalar:
    """Parse a literal as an element of the field named by ``spec``."""
    if spec.kind.is_residue:
        return PrimeField(spec.modulo).parse(text)
    return Rational.parse(text)


def reduce_exponent(digits: str, modulo: int) -> int:
    """
    Reduce a decimal exponent of any length for use in Z_p.

    By Fermat, x^e == x^e' for every x in Z_p when e' is e mod (p - 1)
    moved into [1, p - 1]; only e = 0 maps to 0, so 0^e stays 0 for e > 0.
    The digits are folded one at a time, never converting the whole literal.
    """
    order = modulo - 1
    remainder = 0
    positive = False
    for char in digits:
        remainder = (remainder * 10 + ord(char) - ord("0")) % order
        positive = positive or char != "0"
    if not positive:
        return 0
    return remainder or order


class Evaluator:
    """
    Evaluates expression trees.

    Attributes:
        store: Where variable values are looked up

    Example:
        >>> evaluator = Evaluator(VariableStore())
        >>> evaluator.evaluate(parse_expression("+ 1 / 1 2"),
        ...                    TypeSpec(ValueType.RATIONAL)).get_string()
        '3/2'
    """

    def __init__(self, store: "VariableStore"):
        self.store = store

    def evaluate(self, node: Node, spec: TypeSpec) -> Value:
        """
        Raises:
            InvalidSyntaxError: If the tree is nested deeper than the
                interpreter's recursion limit allows
        """
        logger.debug("evaluating %s expression", spec)
        try:
            if spec.kind.is_matrix:
                return self._evaluate_matrix(node, spec)
            return self._evaluate_scalar(node, spec)
        except RecursionError:
            raise InvalidSyntaxError("expression nested too deeply") from None

    def _matrix_type_of(self, node: Node) -> Optional[TypeSpec]:
        """Type of the first matrix variable in ``node``, reading left to right."""
        pending = [node]
        while pending:
            current = pending.pop()
            if isinstance(current, Variable):
                stored = self.store.type_of(current.name)
                if stored is not None and stored.kind.is_matrix:
                    return stored
            elif isinstance(current, UnaryOp):
                pending.append(current.operand)
            elif isinstance(current, BinaryOp):
                pending.extend((current.right, current.left))
        return None

    def _evaluate_scalar(self, node: Node, spec: TypeSpec) -> Scalar:
        if isinstance(node, Literal):
            return parse_scalar(node.text, spec)

        if isinstance(node, Variable):
            return self.store.lookup(node.name, spec)

        if isinstance(node, UnaryOp):
            if node.function == "neg":
                return self._evaluate_scalar(node.operand, spec).negate()
            if node.function == "inv":
                return self._evaluate_scalar(node.operand, spec).reciprocal()
            if node.function == "det":
                return self._evaluate_matrix(node.operand, spec.matrix()).determinant()
            if node.function == "rank":
                if spec.kind is not ValueType.RATIONAL:
                    raise IncompatibleTypeError("rank", f"a function returning {spec}")
                matrix_spec = self._matrix_type_of(node.operand) or spec.matrix()
                rank = self._evaluate_matrix(node.operand, matrix_spec).rank()
                return Rational.from_int(rank)
            raise IncompatibleTypeError(node.function, "a function on numbers")

        if node.operator == "pow":
            if spec.kind is not ValueType.RESIDUE:
                raise IncompatibleTypeError("pow", f"an operation on {spec}")
            if not isinstance(node.right, Literal):
                raise InvalidSyntaxError("pow needs an integer literal exponent")
            base = self._evaluate_scalar(node.left, spec)
            text = node.right.text
            exponent = reduce_exponent(text.lstrip("-"), spec.modulo)
            return base.power(-exponent if text.startswith("-") else exponent)

        if node.operator == "scale":
            raise IncompatibleTypeError("scale", "a function on numbers")

        left = self._evaluate_scalar(node.left, spec)
        right = self._evaluate_scalar(node.right, spec)
        if node.operator == "+":
            return left.add(right)
        if node.operator == "-":
            return left.subtract(right)
        if node.operator == "*":
            return left.multiply(right)
        return left.divide(right)

    def _evaluate_matrix(self, node: Node, spec: TypeSpec) -> Matrix:
        if isinstance(node, Literal):
            raise IncompatibleTypeError(node.text, spec.describe(), "a number")

        if isinstance(node, Variable):
            return self.store.lookup(node.name, spec)

        if isinstance(node, UnaryOp):
            if node.function == "neg":
                return self._evaluate_matrix(node.operand, spec).negate()
            if node.function == "rref":
                return self._evaluate_matrix(node.operand, spec).rref().rref
            raise IncompatibleTypeError(node.function, f"a function returning {spec}")

        if node.operator == "scale":
            factor = self._evaluate_scalar(node.left, spec.scalar())
            return self._evaluate_matrix(node.right, spec).scalar_multiply(factor)

        if node.operator in ("/", "pow"):
            raise IncompatibleTypeError(node.operator, "an operation on matrices")

        left = self._evaluate_matrix(node.left, spec)
        right = self._evaluate_matrix(node.right, spec)
        if node.operator == "+":
            return left.add(right)
        if node.operator == "-":
            return left.subtract(right)
        return left.multiply(right)
