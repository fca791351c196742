"""
Deterministic pretty-printing of tensors

Output depends only on the tensor and the arguments, so rendered strings can
be compared against golden outputs.

    rank 0   1.50
    rank 1   [1.00, 2.00]
    rank 2   [1.00, 2.00]
             [3.00, 4.00]
    rank 3   h=0:
               [1.00, 2.00]
               [3.00, 4.00]
             h=1:
               ...
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.tensor import Tensor

DEFAULT_PRECISION = 2


@dataclass(frozen=True)
class PrintOptions:
    """Layout settings for tensor_to_string"""
    indent: int = 2
    separator: str = ", "


def format_value(value: float, precision: int) -> str:
    """Fixed-point rendering; negative zero prints without its sign."""
    text = f"{value:.{precision}f}"
    if text.startswith("-") and not text.strip("-0."):
        return text[1:]
    return text


def _render_row(values: Sequence[float], precision: int, options: PrintOptions) -> str:
    return "[" + options.separator.join(format_value(v, precision) for v in values) + "]"


def _render(
    indices: Sequence[str],
    shape: Sequence[int],
    values: Sequence[float],
    precision: int,
    options: PrintOptions,
) -> List[str]:
    rank = len(shape)
    if rank == 0:
        return [format_value(values[0], precision)]
    if rank == 1:
        return [_render_row(values, precision, options)]
    if rank == 2:
        width = shape[1]
        return [
            _render_row(values[r * width:(r + 1) * width], precision, options)
            for r in range(shape[0])
        ]

    block = len(values) // shape[0]
    pad = " " * options.indent
    lines = []
    for k in range(shape[0]):
        lines.append(f"{indices[0]}={k}:")
        inner = _render(indices[1:], shape[1:], values[k * block:(k + 1) * block], precision, options)
        lines.extend(pad + line for line in inner)
    return lines


def tensor_to_string(
    tensor: Tensor,
    precision: int = DEFAULT_PRECISION,
    options: Optional[PrintOptions] = None,
) -> str:
    """
    Render a tensor with ``precision`` digits after the decimal point

    Args:
        tensor: Tensor to render
        precision: Decimal places (>= 0)
        options: Layout settings; defaults to PrintOptions()

    Returns:
        Rank 0: the number. Rank 1: one bracketed row. Rank 2: one bracketed
        row per value of the first index. Rank >= 3: one labeled block per
        value of the leading index, each rendered as a rank-(n-1) tensor.
    """
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision must be a non-negative integer, got {precision!r}")
    options = options or PrintOptions()
    return "\n".join(
        _render(tensor.indices, tensor.shape, tensor.data.tolist(), precision, options)
    )
