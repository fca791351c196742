"""
Error taxonomy for the tensor engine

Every error is raised at the offending call and is fatal to that call only.
All of them derive from ValueError so callers that only catch ValueError
keep working.
"""

from typing import Optional, Sequence


class TensorLogicError(Exception):
    """Base class for einlogic-specific exceptions."""


class ShapeMismatch(TensorLogicError, ValueError):
    """Index, shape, data length or rank inconsistency."""


class DimensionMismatch(TensorLogicError, ValueError):
    """An index token is bound to conflicting sizes."""

    def __init__(self, token: str, sizes: Sequence[int], message: Optional[str] = None):
        self.token = token
        self.sizes = tuple(sizes)
        if message is None:
            message = f"Index '{token}' bound to conflicting sizes {list(self.sizes)}"
        super().__init__(message)


class MalformedEquation(TensorLogicError, ValueError):
    """Empty or syntactically invalid einsum equation."""

    def __init__(self, message: str, equation: str = "", column: Optional[int] = None):
        self.equation = equation
        self.column = column
        super().__init__(f"{message}{_format_location(equation, column)}")


class UnknownIndex(MalformedEquation):
    """Output token that does not appear on the left-hand side."""

    def __init__(self, token: str, equation: str = ""):
        self.token = token
        super().__init__(
            f"Output index '{token}' does not appear in any operand spec",
            equation=equation,
        )


def _format_location(equation: str, column: Optional[int]) -> str:
    if not equation:
        return ""
    if column is None or column < 1:
        return f" in {equation!r}"
    caret = " " * (column - 1) + "^"
    return f" (col {column})\n  {equation}\n  {caret}"
