"""
Contraction planner

Binds equation tokens to dimension sizes, checks them for consistency,
splits tokens into free and summed, and works out how each operand is
addressed from a token -> value assignment.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from .equation import IndexEquation
from .exceptions import DimensionMismatch, ShapeMismatch
from .tensor import Tensor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperandAccess:
    """
    How one operand is addressed during contraction.

    ``terms`` holds one ``(token, stride)`` pair per distinct token of the
    operand's spec. A token repeated in the spec (a diagonal) gets a single
    entry whose stride is the sum of the strides of all its axes, so every
    occurrence follows the same loop variable.
    """
    name: str
    terms: Tuple[Tuple[str, int], ...]
    diagonals: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ContractionPlan:
    equation: IndexEquation
    sizes: Mapping[str, int]
    free: Tuple[str, ...]
    summed: Tuple[str, ...]
    operands: Tuple[OperandAccess, ...]

    @property
    def output_indices(self) -> Tuple[str, ...]:
        return self.free

    @property
    def output_shape(self) -> Tuple[int, ...]:
        return tuple(self.sizes[t] for t in self.free)

    @property
    def iteration_count(self) -> int:
        """Product of every distinct token size: the executor's loop count."""
        count = 1
        for size in self.sizes.values():
            count *= size
        return count


def _operand_access(spec: Sequence[str], tensor: Tensor, sizes: Dict[str, int]) -> OperandAccess:
    strides: Dict[str, int] = {}
    axis_sizes: Dict[str, List[int]] = {}
    for token, dim, stride in zip(spec, tensor.shape, tensor.strides):
        strides[token] = strides.get(token, 0) + stride
        axis_sizes.setdefault(token, []).append(dim)

    diagonals = []
    for token, dims in axis_sizes.items():
        if len(dims) > 1:
            if len(set(dims)) != 1:
                raise DimensionMismatch(
                    token,
                    dims,
                    f"Diagonal index '{token}' of '{tensor.name}' spans axes of sizes {dims}",
                )
            diagonals.append(token)
            logger.debug("Collapsing diagonal '%s' of %s (stride %d)", token, tensor.name, strides[token])

        known = sizes.setdefault(token, dims[0])
        if known != dims[0]:
            raise DimensionMismatch(
                token,
                [known, dims[0]],
                f"Index '{token}' has size {known} elsewhere but {dims[0]} in '{tensor.name}'",
            )

    return OperandAccess(
        name=tensor.name,
        terms=tuple(strides.items()),
        diagonals=tuple(diagonals),
    )


def plan_contraction(equation: IndexEquation, operands: Sequence[Tensor]) -> ContractionPlan:
    """
    Validate operands against a parsed equation and build a plan

    Raises:
        ShapeMismatch: Wrong operand count, or an operand whose rank differs
            from the length of its spec
        DimensionMismatch: A token bound to different sizes
    """
    if len(operands) != equation.num_operands:
        raise ShapeMismatch(
            f"Equation '{equation.source}' has {equation.num_operands} operand specs "
            f"but {len(operands)} tensors were given"
        )

    for spec, tensor in zip(equation.operand_specs, operands):
        if not isinstance(tensor, Tensor):
            raise TypeError(f"einsum operands must be Tensor instances, got {type(tensor).__name__}")
        if len(spec) != tensor.rank:
            raise ShapeMismatch(
                f"Spec {list(spec)} has {len(spec)} indices but '{tensor.name}' has rank {tensor.rank}"
            )

    sizes: Dict[str, int] = {}
    accesses = tuple(
        _operand_access(spec, tensor, sizes)
        for spec, tensor in zip(equation.operand_specs, operands)
    )

    free = tuple(equation.output_spec)
    free_set = set(free)
    summed = tuple(t for t in equation.tokens if t not in free_set)

    plan = ContractionPlan(
        equation=equation,
        sizes=MappingProxyType(sizes),
        free=free,
        summed=summed,
        operands=accesses,
    )
    logger.debug(
        "Planned '%s': free=%s summed=%s sizes=%s iterations=%d",
        equation.source, list(free), list(summed), sizes, plan.iteration_count,
    )
    return plan
