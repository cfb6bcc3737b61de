"""
Calculator shell: the text layer around the arithmetic kernel.

Key Components:
    - Lexer: Splits command and expression lines into tokens
    - parse_command / parse_expression: Build commands and prefix trees
    - Evaluator: Computes expression trees over the stored variables
    - VariableStore: Explicit storage for named values
    - Runtime: Executes DEF / EVAL / EXIT commands

Usage:
    >>> from fieldcalc.repl import Runtime
    >>> lines = iter(["1/2"])
    >>> runtime = Runtime(read_line=lambda prompt: next(lines))
    >>> runtime.execute("DEF Q half")
    >>> lines = iter(["+ half half"])
    >>> runtime.read_line = lambda prompt: next(lines)
    >>> runtime.execute("EVAL Q")
    'RESULT: 1'
"""

from .lexer import Lexer, Token, TokenType
from .parser import (
    Command,
    TypeSpec,
    ValueType,
    parse_command,
    parse_expression,
)
from .evaluation import Evaluator
from .formatting import format_matrix, format_number, format_value
from .runtime import Runtime, VariableStore

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Command",
    "TypeSpec",
    "ValueType",
    "parse_command",
    "parse_expression",
    "Evaluator",
    "Runtime",
    "VariableStore",
    "format_matrix",
    "format_number",
    "format_value",
]
