"""
Command execution and variable storage.

The Runtime owns nothing global: variables live in an explicit
VariableStore, and follow-up input (the value of a DEF, the expression of
an EVAL) is pulled through a ``read_line`` callable, so the same runtime
serves the console loop and tests alike.

Example session (console input after the prompts):
    > DEF Matrix[Q] 2 2 A
    2 4
    1 2
    > EVAL Q
    det A
    RESULT: 0
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging
import re

from ..common.errors import (
    IncompatibleDimensionsError,
    IncompatibleModuloError,
    IncompatibleTypeError,
    UndefinedVariableError,
)
from ..matrix.core import Matrix
from .evaluation import Evaluator, Value, parse_scalar
from .formatting import format_value
from .parser import Command, TypeSpec, parse_command, parse_expression


logger = logging.getLogger(__name__)

_CELL_SEPARATOR = re.compile(r"[\s,;]+")


def split_cells(line: str) -> List[str]:
    """Split one matrix row on whitespace, commas or semicolons."""
    return [cell for cell in _CELL_SEPARATOR.split(line.strip()) if cell]


@dataclass(frozen=True)
class StoredValue:
    type_spec: TypeSpec
    value: Any


class VariableStore:
    """
    Named values of all four kinds.

    A name refers to exactly one value; defining it again, under any type,
    replaces the old value.

    Example:
        >>> store = VariableStore()
        >>> store.define("x", TypeSpec(ValueType.RATIONAL), Rational.from_int(3))
        >>> store.lookup("x", TypeSpec(ValueType.RATIONAL))
        Rational(3)
    """

    def __init__(self):
        self._values: Dict[str, StoredValue] = {}

    def define(self, name: str, type_spec: TypeSpec, value: Value) -> None:
        self._values[name] = StoredValue(type_spec, value)

    def lookup(self, name: str, type_spec: TypeSpec) -> Value:
        """
        Fetch a value, checking it has the requested type.

        Raises:
            UndefinedVariableError: If the name was never defined
            IncompatibleTypeError: If it holds a different kind of value
            IncompatibleModuloError: If it holds residues of another prime
        """
        stored = self._values.get(name)
        if stored is None:
            raise UndefinedVariableError(name)
        if stored.type_spec.kind is not type_spec.kind:
            raise IncompatibleTypeError(name, type_spec.describe(), stored.type_spec.describe())
        if stored.type_spec.modulo != type_spec.modulo:
            raise IncompatibleModuloError(stored.type_spec.modulo, type_spec.modulo)
        return stored.value

    def type_of(self, name: str) -> Optional[TypeSpec]:
        stored = self._values.get(name)
        return stored.type_spec if stored is not None else None

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)


class Runtime:
    """
    Executes calculator commands.

    Args:
        store: Variable storage (a fresh one by default)
        read_line: Called with a prompt to obtain follow-up lines
        input_prompt: Prompt passed to read_line for follow-up lines

    Attributes:
        exit_requested: Set once EXIT has been executed
    """

    def __init__(self, store: Optional[VariableStore] = None,
                 read_line: Callable[[str], str] = input,
                 input_prompt: str = ""):
        self.store = store if store is not None else VariableStore()
        self.read_line = read_line
        self.input_prompt = input_prompt
        self.evaluator = Evaluator(self.store)
        self.exit_requested = False

    def execute(self, text: str) -> Optional[str]:
        """
        Run one command line.

        Returns:
            The rendered result of an EVAL, or None for DEF and EXIT
        """
        command = parse_command(text)
        logger.debug("executing %s", command)

        if command.keyword == "EXIT":
            self.exit_requested = True
            return None

        if command.keyword == "DEF":
            self.define(command)
            return None

        value = self.evaluate(command.type_spec, self._read())
        return format_value(value)

    def evaluate(self, type_spec: TypeSpec, expression: str) -> Value:
        return self.evaluator.evaluate(parse_expression(expression), type_spec)

    def define(self, command: Command) -> None:
        """Read the value of a DEF command and store it."""
        type_spec = command.type_spec
        if type_spec.kind.is_matrix:
            value = self._read_matrix(type_spec, command.height, command.width)
        else:
            value = parse_scalar(self._read(), type_spec)

        self.store.define(command.name, type_spec, value)
        logger.debug("defined %s as %s", command.name, type_spec)

    def _read(self) -> str:
        return self.read_line(self.input_prompt)

    def _read_matrix(self, type_spec: TypeSpec, height: int, width: int) -> Matrix:
        entry_spec = type_spec.scalar()
        rows = []
        for index in range(height):
            cells = split_cells(self._read())
            if len(cells) != width:
                raise IncompatibleDimensionsError(
                    f"row {index + 1} has {len(cells)} entries, expected {width}")
            rows.append([parse_scalar(cell, entry_spec) for cell in cells])
        return Matrix(rows)
