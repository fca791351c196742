"""
Core einlogic components.
"""

from .exceptions import (
    TensorLogicError,
    ShapeMismatch,
    DimensionMismatch,
    MalformedEquation,
    UnknownIndex,
)
from .tensor import Tensor, create_tensor, from_matrix, from_nested, from_array, scalar, full
from .equation import IndexEquation, parse_equation
from .planner import ContractionPlan, plan_contraction
from .einsum import einsum, contract

__all__ = [
    "TensorLogicError",
    "ShapeMismatch",
    "DimensionMismatch",
    "MalformedEquation",
    "UnknownIndex",
    "Tensor",
    "create_tensor",
    "from_matrix",
    "from_nested",
    "from_array",
    "scalar",
    "full",
    "IndexEquation",
    "parse_equation",
    "ContractionPlan",
    "plan_contraction",
    "einsum",
    "contract",
]
