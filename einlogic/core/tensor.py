"""
Core tensor value type for Tensor Logic

A Tensor is an immutable, dense, row-major buffer of float64 values whose
axes carry semantic labels (e.g. 'v', 'd_out').
"""

import numbers
import operator
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from .exceptions import ShapeMismatch

ArrayLike = Union[Sequence[float], np.ndarray, torch.Tensor]


def row_major_strides(shape: Sequence[int]) -> Tuple[int, ...]:
    """Element strides for a row-major layout (last axis has stride 1)."""
    strides = [1] * len(shape)
    for axis in range(len(shape) - 2, -1, -1):
        strides[axis] = strides[axis + 1] * shape[axis + 1]
    return tuple(strides)


class Tensor:
    """
    Named, shaped, dense numeric container.

    Tensors are value objects: the data buffer is a private read-only copy,
    and every operation on a Tensor returns a new one. Equality compares
    indices, shape and data; ``name`` is a diagnostic label only.

    Use the module-level constructors (``create_tensor``, ``from_matrix``,
    ``from_nested``, ``from_array``, ``scalar``) rather than calling this
    class directly.
    """

    __slots__ = ("_name", "_indices", "_shape", "_data", "_strides")

    def __init__(
        self,
        name: str,
        indices: Tuple[str, ...],
        shape: Tuple[int, ...],
        data: np.ndarray,
    ):
        data.setflags(write=False)
        self._name = name
        self._indices = indices
        self._shape = shape
        self._data = data
        self._strides = row_major_strides(shape)

    @property
    def name(self) -> str:
        return self._name

    @property
    def indices(self) -> Tuple[str, ...]:
        return self._indices

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def data(self) -> np.ndarray:
        """Flat read-only float64 buffer, first index varying slowest."""
        return self._data

    @property
    def strides(self) -> Tuple[int, ...]:
        return self._strides

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return int(self._data.size)

    def index_of(self, label: str) -> int:
        """Axis position of an index label"""
        try:
            return self._indices.index(label)
        except ValueError:
            raise ShapeMismatch(
                f"Tensor '{self._name}' has no index '{label}' (indices: {list(self._indices)})"
            ) from None

    def offset(self, position: Sequence[int]) -> int:
        """Flat offset of a multi-index"""
        if len(position) != self.rank:
            raise ShapeMismatch(
                f"Tensor '{self._name}' has rank {self.rank}, got a position of length {len(position)}"
            )
        flat = 0
        for axis, (value, dim, stride) in enumerate(zip(position, self._shape, self._strides)):
            if not 0 <= value < dim:
                raise IndexError(
                    f"Position {value} out of range for index '{self._indices[axis]}' of size {dim}"
                )
            flat += value * stride
        return flat

    def item(self, *position: int) -> float:
        """Value at a multi-index; call with no arguments for a scalar"""
        return float(self._data[self.offset(position)])

    def tolist(self) -> List[float]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        """Writable copy reshaped to ``shape``"""
        return self._data.reshape(self._shape).copy()

    def to_torch(self) -> torch.Tensor:
        """float64 torch copy reshaped to ``shape``"""
        return torch.from_numpy(self.to_numpy())

    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        return (
            self._indices == other._indices
            and self._shape == other._shape
            and bool(np.array_equal(self._data, other._data))
        )

    __hash__ = None

    def __repr__(self):
        return f"Tensor('{self._name}', indices={list(self._indices)}, shape={self._shape})"

    def __str__(self):
        from ..utils.formatting import tensor_to_string

        return tensor_to_string(self)


def _as_buffer(name: str, data: ArrayLike) -> np.ndarray:
    if isinstance(data, torch.Tensor):
        data = data.detach().cpu().to(torch.float64).numpy()
    try:
        return np.array(data, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise ShapeMismatch(f"Tensor '{name}': data is not a numeric buffer ({exc})") from exc


def _validate_layout(name: str, indices: Sequence[str], shape: Sequence[int]) -> Tuple[Tuple[str, ...], Tuple[int, ...]]:
    indices = tuple(indices)
    if len(indices) != len(shape):
        raise ShapeMismatch(
            f"Tensor '{name}': {len(indices)} indices {list(indices)} but shape has {len(shape)} dims"
        )
    if len(set(indices)) != len(indices):
        raise ShapeMismatch(f"Tensor '{name}': index labels must be distinct, got {list(indices)}")

    dims = []
    for dim in shape:
        if isinstance(dim, bool):
            raise ShapeMismatch(f"Tensor '{name}': shape entries must be integers, got {list(shape)}")
        try:
            dim = operator.index(dim)
        except TypeError:
            raise ShapeMismatch(
                f"Tensor '{name}': shape entries must be integers, got {list(shape)}"
            ) from None
        if dim <= 0:
            raise ShapeMismatch(f"Tensor '{name}': dimensions must be positive, got {list(shape)}")
        dims.append(dim)
    return indices, tuple(dims)


def create_tensor(
    name: str,
    indices: Sequence[str],
    shape: Sequence[int],
    data: ArrayLike,
) -> Tensor:
    """
    Create a tensor from a flat row-major buffer

    Args:
        name: Diagnostic label
        indices: Axis labels, one per dimension
        shape: Dimension sizes (positive integers; empty for a scalar)
        data: Flat buffer with ``prod(shape)`` values

    Raises:
        ShapeMismatch: If indices, shape and data length disagree
    """
    indices, shape = _validate_layout(name, indices, shape)
    buffer = _as_buffer(name, data)
    expected = int(np.prod(shape, dtype=np.int64)) if shape else 1
    if buffer.size != expected:
        raise ShapeMismatch(
            f"Tensor '{name}': shape {list(shape)} needs {expected} values, got {buffer.size}"
        )
    return Tensor(name, indices, shape, buffer)


def from_matrix(name: str, indices: Sequence[str], rows: Sequence[Sequence[float]]) -> Tensor:
    """Create a rank-2 tensor from a rectangular sequence of rows."""
    if len(indices) != 2:
        raise ShapeMismatch(f"Tensor '{name}': a matrix needs exactly 2 indices, got {list(indices)}")
    if len(rows) == 0 or len(rows[0]) == 0:
        raise ShapeMismatch(f"Tensor '{name}': a matrix needs at least one row and one column")

    width = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != width:
            raise ShapeMismatch(
                f"Tensor '{name}': row {r} has {len(row)} values, expected {width}"
            )
    flat = [value for row in rows for value in row]
    return create_tensor(name, indices, (len(rows), width), flat)


def _infer_shape(name: str, values, depth: int = 0) -> Tuple[int, ...]:
    if isinstance(values, numbers.Real):
        return ()
    if isinstance(values, (np.ndarray, torch.Tensor)):
        return tuple(values.shape)
    if not isinstance(values, Sequence) or isinstance(values, str):
        raise ShapeMismatch(f"Tensor '{name}': unsupported element {values!r} at depth {depth}")
    if len(values) == 0:
        raise ShapeMismatch(f"Tensor '{name}': empty sequence at depth {depth}")

    inner = _infer_shape(name, values[0], depth + 1)
    for item in values[1:]:
        if _infer_shape(name, item, depth + 1) != inner:
            raise ShapeMismatch(f"Tensor '{name}': ragged nesting at depth {depth}")
    return (len(values),) + inner


def from_nested(name: str, indices: Sequence[str], values) -> Tensor:
    """
    Create a tensor of any rank from nested sequences

    ``from_nested('T', ['i', 'j', 'k'], [[[1, 2], [3, 4]], [[5, 6], [7, 8]]])``
    has shape (2, 2, 2).
    """
    shape = _infer_shape(name, values)
    return create_tensor(name, indices, shape, values)


def from_array(name: str, indices: Sequence[str], array: Union[np.ndarray, torch.Tensor]) -> Tensor:
    """Create a tensor from a numpy array or torch tensor, keeping its shape."""
    if isinstance(array, torch.Tensor):
        array = array.detach().cpu().to(torch.float64).numpy()
    array = np.asarray(array, dtype=np.float64)
    return create_tensor(name, indices, array.shape, array)


def scalar(name: str, value: float) -> Tensor:
    """Rank-0 tensor."""
    return create_tensor(name, (), (), [value])


def full(name: str, indices: Sequence[str], shape: Sequence[int], value: float = 0.0) -> Tensor:
    """Tensor with every element equal to ``value``."""
    indices, shape = _validate_layout(name, indices, shape)
    return create_tensor(name, indices, shape, np.full(shape, value, dtype=np.float64))


def rename(tensor: Tensor, name: Optional[str] = None, indices: Optional[Sequence[str]] = None) -> Tensor:
    """Same data under a new name and/or new index labels."""
    return create_tensor(
        tensor.name if name is None else name,
        tensor.indices if indices is None else indices,
        tensor.shape,
        tensor.data,
    )
