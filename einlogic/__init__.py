"""
einlogic: a reference tensor engine for Tensor Logic

Einstein summation over named axes, elementwise nonlinearities and a
deterministic pretty-printer. Logic programs, MLPs, transformers, GNNs,
kernel machines and graphical models are all written as calls into it.
Based on "Tensor Logic: The Language of AI" by Pedro Domingos (arXiv:2510.12269)
"""

from .core.exceptions import (
    TensorLogicError,
    ShapeMismatch,
    DimensionMismatch,
    MalformedEquation,
    UnknownIndex,
)
from .core.tensor import Tensor, create_tensor, from_matrix, from_nested, from_array, scalar, full, rename
from .core.equation import IndexEquation, parse_equation
from .core.einsum import einsum, contract
from .ops.elementwise import add, multiply, scale, relu, sigmoid, threshold, tanh, softmax, apply_nonlinearity
from .utils.formatting import PrintOptions, tensor_to_string

__version__ = "0.1.0"
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
    "rename",
    "IndexEquation",
    "parse_equation",
    "einsum",
    "contract",
    "add",
    "multiply",
    "scale",
    "relu",
    "sigmoid",
    "threshold",
    "tanh",
    "softmax",
    "apply_nonlinearity",
    "PrintOptions",
    "tensor_to_string",
]
