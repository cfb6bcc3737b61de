"""Text rendering of evaluation results."""

from __future__ import annotations
from typing import Union

from ..common.field import Field
from ..matrix.core import Matrix


def format_number(value: Field) -> str:
    return f"RESULT: {value.get_string()}"


def format_matrix(matrix: Matrix) -> str:
    """
    Render a matrix inside a bracket box, cells left-aligned to the widest.

    Example:
        RESULT:
        ╭         ╮
        │ 1   -1  │
        │ 1/2 0   │
        ╰         ╯
    """
    texts = [[entry.get_string() for entry in row] for row in matrix.rows()]
    cell_width = max(len(text) for row in texts for text in row)
    inner_width = (cell_width + 1) * matrix.width + 1

    lines = ["RESULT:", "╭" + " " * inner_width + "╮"]
    for row in texts:
        lines.append("│ " + "".join(text.ljust(cell_width + 1) for text in row) + "│")
    lines.append("╰" + " " * inner_width + "╯")
    return "\n".join(lines)


def format_value(value: Union[Field, Matrix]) -> str:
    if isinstance(value, Matrix):
        return format_matrix(value)
    return format_number(value)
