"""
Einstein summation over labeled tensors

Reference executor: every output cell is a sum over the Cartesian product
of the summed indices. Work is proportional to the product of the sizes of
all distinct indices (free x summed), times the number of operands. No
contraction-order optimization or fusion is attempted.

Special cases:
    'ij->ji'       transpose
    'ij,jk->ik'    matrix product
    'ij->'         total sum
    'ii->'         trace (diagonal collapse)
    'ii->i'        diagonal
"""

import logging
from itertools import product
from typing import Optional, Sequence

from .equation import IndexEquation, build_equation, parse_equation
from .planner import ContractionPlan, plan_contraction
from .tensor import Tensor, create_tensor

logger = logging.getLogger(__name__)


def _execute(plan: ContractionPlan, operands: Sequence[Tensor], name: str) -> Tensor:
    # Loop variables: free tokens first (output order), then summed tokens.
    slots = {token: i for i, token in enumerate(plan.free + plan.summed)}
    addressing = [
        [(slots[token], stride) for token, stride in access.terms]
        for access in plan.operands
    ]
    buffers = [tensor.data.tolist() for tensor in operands]

    free_ranges = [range(plan.sizes[t]) for t in plan.free]
    summed_ranges = [range(plan.sizes[t]) for t in plan.summed]

    cells = []
    for free_values in product(*free_ranges):
        total = 0.0
        for summed_values in product(*summed_ranges):
            values = free_values + summed_values
            term = 1.0
            for buffer, terms in zip(buffers, addressing):
                offset = 0
                for slot, stride in terms:
                    offset += values[slot] * stride
                term *= buffer[offset]
            total += term
        cells.append(total)

    return create_tensor(name, plan.free, plan.output_shape, cells)


def einsum_parsed(equation: IndexEquation, *operands: Tensor, name: Optional[str] = None) -> Tensor:
    """Contract operands against an already parsed equation."""
    plan = plan_contraction(equation, operands)
    result = _execute(plan, operands, name or f"einsum({equation.source})")
    logger.debug("einsum '%s' -> %r", equation.source, result)
    return result


def einsum(equation: str, *operands: Tensor, name: Optional[str] = None) -> Tensor:
    """
    Einstein summation

    Args:
        equation: Index equation, e.g. 'vu,ud->vd'
        *operands: One Tensor per operand spec; an operand's i-th token binds
            to its i-th axis, whatever that axis is labeled
        name: Name of the result (default ``einsum(<equation>)``)

    Returns:
        New Tensor whose indices are the output tokens

    Raises:
        MalformedEquation, UnknownIndex: Invalid equation
        ShapeMismatch: Operand count or rank does not match the specs
        DimensionMismatch: A token bound to different sizes

    Example:
        Messages = einsum('vu,ud->vd', Adjacency, NodeFeatures)
    """
    return einsum_parsed(parse_equation(equation), *operands, name=name)


def contract(*operands: Tensor, output: Optional[Sequence[str]] = None, name: Optional[str] = None) -> Tensor:
    """
    Einstein summation driven by the operands' own index labels

    Axes that share a label across operands are joined; labels missing from
    ``output`` are summed out. With ``output=None`` the implicit rule keeps
    labels that appear on exactly one operand.

    Example:
        H = contract(Adjacency, NodeFeatures, output=['v', 'd'])
    """
    equation = build_equation([t.indices for t in operands], output)
    return einsum_parsed(parse_equation(equation, word_tokens=True), *operands, name=name)
