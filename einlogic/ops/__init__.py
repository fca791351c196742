"""
Elementwise operations for einlogic.
"""

from .elementwise import (
    add,
    multiply,
    scale,
    relu,
    sigmoid,
    threshold,
    tanh,
    softmax,
    apply_nonlinearity,
)

__all__ = [
    "add",
    "multiply",
    "scale",
    "relu",
    "sigmoid",
    "threshold",
    "tanh",
    "softmax",
    "apply_nonlinearity",
]
