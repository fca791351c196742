"""
Self-attention in tensor logic

    Scores[p,q]  = Σ_d Query[p,d] · Key[q,d] / sqrt(D)
    Attn[p,q]    = softmax_q(Scores[p,q])
    Out[p,d]     = Σ_q Attn[p,q] · Value[q,d]

Multi-head attention adds a head index h to every tensor; the same
equations run independently per head, and an output projection sums the
heads back together.
"""

import math

from ..core.einsum import einsum
from ..core.tensor import from_matrix, from_nested
from ..ops.elementwise import scale, softmax
from .steps import ExampleResult

# Three token positions, embedding size 2.
QUERY = [
    [1.0, 0.0],
    [0.0, 1.0],
    [1.0, 1.0],
]
KEY = [
    [1.0, 0.0],
    [0.0, 1.0],
    [0.5, 0.5],
]
VALUE = [
    [1.0, 2.0],
    [3.0, 4.0],
    [5.0, 6.0],
]

# Two heads over the same three positions: [h][p][d].
HEAD_QUERY = [
    QUERY,
    [[0.0, 1.0], [1.0, 0.0], [1.0, -1.0]],
]
HEAD_KEY = [
    KEY,
    [[1.0, 1.0], [0.0, 1.0], [1.0, 0.0]],
]
HEAD_VALUE = [
    VALUE,
    [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]],
]
# Output projection [h][d][e]: head 0 passes through, head 1 swaps its axes.
OUTPUT_PROJECTION = [
    [[1.0, 0.0], [0.0, 1.0]],
    [[0.0, 1.0], [1.0, 0.0]],
]


def run_attention_example() -> ExampleResult:
    result = ExampleResult(
        title="Transformer: Self-Attention",
        description=(
            "Attention compares every query position with every key position by a\n"
            "dot product (an einsum over the embedding axis), normalizes the scores\n"
            "over key positions, and mixes the values with those weights (an einsum\n"
            "over key positions)."
        ),
        code=(
            "Scores[p,q] = Σ_d Query[p,d] · Key[q,d] / √D\n"
            "Attn[p,q] = softmax_q(Scores[p,q])\n"
            "Out[p,d] = Σ_q Attn[p,q] · Value[q,d]"
        ),
    )

    query = result.add_step("Queries", "Query[p,d] for three positions.", from_matrix("Query", ["p", "d"], QUERY))
    key = result.add_step("Keys", "Key[q,d] for the same positions.", from_matrix("Key", ["q", "d"], KEY))
    value = result.add_step("Values", "Value[q,d] carries the content to mix.", from_matrix("Value", ["q", "d"], VALUE))

    scores = einsum("pd,qd->pq", query, key, name="Scores")
    scores = result.add_step(
        "Attention Scores",
        "Scores[p,q] = Σ_d Query[p,d] · Key[q,d] / √D",
        scale(scores, 1.0 / math.sqrt(query.shape[1]), name="Scores"),
        precision=3,
    )
    weights = result.add_step(
        "Attention Weights",
        "Attn[p,q] = softmax over q; every row sums to 1.",
        softmax(scores, "q", name="Attn"),
        precision=3,
    )
    result.add_step(
        "Attention Output",
        "Out[p,d] = Σ_q Attn[p,q] · Value[q,d]",
        einsum("pq,qd->pd", weights, value, name="Out"),
        precision=3,
    )
    return result


def run_multihead_attention_example() -> ExampleResult:
    result = ExampleResult(
        title="Transformer: Multi-Head Attention",
        description=(
            "Each head attends with its own queries, keys and values. Adding a\n"
            "head index h to every tensor runs all heads in one einsum; h is\n"
            "free until the output projection sums over it."
        ),
        code=(
            "Scores[h,p,q] = Σ_d Query[h,p,d] · Key[h,q,d] / √D\n"
            "Attn[h,p,q] = softmax_q(Scores[h,p,q])\n"
            "Heads[h,p,d] = Σ_q Attn[h,p,q] · Value[h,q,d]\n"
            "Out[p,e] = Σ_h Σ_d Heads[h,p,d] · WO[h,d,e]"
        ),
    )

    query = result.add_step(
        "Queries",
        "Query[h,p,d]: one block of queries per head.",
        from_nested("Query", ["h", "p", "d"], HEAD_QUERY),
        precision=1,
    )
    key = result.add_step(
        "Keys",
        "Key[h,q,d] for the same positions.",
        from_nested("Key", ["h", "q", "d"], HEAD_KEY),
        precision=1,
    )
    value = from_nested("Value", ["h", "q", "d"], HEAD_VALUE)
    projection = from_nested("WO", ["h", "d", "e"], OUTPUT_PROJECTION)

    scores = einsum("hpd,hqd->hpq", query, key, name="Scores")
    scores = result.add_step(
        "Attention Scores",
        "Scores[h,p,q] = Σ_d Query[h,p,d] · Key[h,q,d] / √D, per head.",
        scale(scores, 1.0 / math.sqrt(query.shape[2]), name="Scores"),
        precision=3,
    )
    weights = result.add_step(
        "Attention Weights",
        "Attn[h,p,q] = softmax over q within every head.",
        softmax(scores, "q", name="Attn"),
        precision=3,
    )
    heads = result.add_step(
        "Head Outputs",
        "Heads[h,p,d] = Σ_q Attn[h,p,q] · Value[h,q,d]",
        einsum("hpq,hqd->hpd", weights, value, name="Heads"),
        precision=3,
    )
    result.add_step(
        "Combined Output",
        "Out[p,e] = Σ_h Σ_d Heads[h,p,d] · WO[h,d,e] merges the heads.",
        einsum("hpd,hde->pe", heads, projection, name="Out"),
        precision=3,
    )
    return result
