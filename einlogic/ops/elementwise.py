"""
Elementwise tensor operations

Shape-preserving maps over a Tensor's data buffer. Binary operations
require identical index labels (same order) and identical shapes; there is
no implicit broadcasting.
"""

from typing import Optional

import numpy as np
from scipy.special import expit

from ..core.exceptions import ShapeMismatch
from ..core.tensor import Tensor, create_tensor


def _like(x: Tensor, name: str, values: np.ndarray) -> Tensor:
    return create_tensor(name, x.indices, x.shape, values)


def _check_same_layout(a: Tensor, b: Tensor, op: str):
    if a.indices != b.indices:
        raise ShapeMismatch(
            f"{op}: index labels differ: '{a.name}' {list(a.indices)} vs '{b.name}' {list(b.indices)}"
        )
    if a.shape != b.shape:
        raise ShapeMismatch(
            f"{op}: shapes differ: '{a.name}' {a.shape} vs '{b.name}' {b.shape}"
        )


def add(a: Tensor, b: Tensor, name: Optional[str] = None) -> Tensor:
    """
    Elementwise sum

    Args:
        a: First tensor
        b: Second tensor, same indices (same order) and shape as ``a``
        name: Result name (default ``'a+b'``)

    Raises:
        ShapeMismatch: If indices or shapes differ
    """
    _check_same_layout(a, b, "add")
    return _like(a, name or f"{a.name}+{b.name}", a.data + b.data)


def multiply(a: Tensor, b: Tensor, name: Optional[str] = None) -> Tensor:
    """Elementwise (Hadamard) product, same layout rules as ``add``"""
    _check_same_layout(a, b, "multiply")
    return _like(a, name or f"{a.name}*{b.name}", a.data * b.data)


def scale(x: Tensor, factor: float, name: Optional[str] = None) -> Tensor:
    """Multiply every element by a scalar"""
    return _like(x, name or f"{factor:g}*{x.name}", x.data * float(factor))


def relu(x: Tensor, name: Optional[str] = None) -> Tensor:
    """max(0, x)"""
    return _like(x, name or f"relu({x.name})", np.maximum(x.data, 0.0))


def sigmoid(x: Tensor, name: Optional[str] = None) -> Tensor:
    """1 / (1 + e^-x)"""
    return _like(x, name or f"sigmoid({x.name})", expit(x.data))


def threshold(x: Tensor, name: Optional[str] = None) -> Tensor:
    """Heaviside step: 1 where x > 0, else 0"""
    return _like(x, name or f"threshold({x.name})", (x.data > 0.0).astype(np.float64))


def tanh(x: Tensor, name: Optional[str] = None) -> Tensor:
    return _like(x, name or f"tanh({x.name})", np.tanh(x.data))


def softmax(x: Tensor, index: str, name: Optional[str] = None) -> Tensor:
    """
    Softmax along one named axis

    Args:
        x: Input tensor
        index: Label of the axis to normalize over
        name: Result name (default ``'softmax_<index>(x)'``)

    Raises:
        ShapeMismatch: If ``x`` has no axis labeled ``index``
    """
    axis = x.index_of(index)
    values = x.data.reshape(x.shape)
    shifted = np.exp(values - values.max(axis=axis, keepdims=True))
    normalized = shifted / shifted.sum(axis=axis, keepdims=True)
    return _like(x, name or f"softmax_{index}({x.name})", normalized)


_NONLINEARITIES = {
    "relu": relu,
    "sigmoid": sigmoid,
    "threshold": threshold,
    "step": threshold,
    "tanh": tanh,
}


def apply_nonlinearity(x: Tensor, func: Optional[str], name: Optional[str] = None) -> Tensor:
    """
    Apply nonlinearity function by name

    Args:
        x: Input tensor
        func: Function name: 'relu', 'sigmoid', 'threshold' (alias 'step'),
            'tanh', 'identity'
    """
    if func == 'identity' or func is None:
        return x if name is None else _like(x, name, x.data)
    try:
        op = _NONLINEARITIES[func]
    except KeyError:
        raise ValueError(f"Unknown nonlinearity: {func}") from None
    return op(x, name=name)
