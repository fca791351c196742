"""
Multi-layer perceptrons in tensor logic

A dense layer is an einsum plus a bias and a nonlinearity:

    Y[o]   = f(Σ_i X[i] · W[i,o] + B[o])            one sample
    Y[b,o] = f(Σ_i X[b,i] · W[i,o] + B[o])          a batch

There is no broadcasting, so in the batched form the bias is tiled over the
batch explicitly with an outer product against a vector of ones.
"""

from ..core.einsum import contract
from ..core.tensor import Tensor, create_tensor, from_matrix, full
from ..ops.elementwise import add, sigmoid, threshold
from .steps import ExampleResult

XOR_INPUTS = [
    [0, 0],
    [0, 1],
    [1, 0],
    [1, 1],
]

# Hidden unit 0 fires for OR, unit 1 for AND; the output is OR and not AND.
HIDDEN_WEIGHTS = [
    [1.0, 1.0],
    [1.0, 1.0],
]
HIDDEN_BIAS = [-0.5, -1.5]
OUTPUT_WEIGHTS = [
    [1.0],
    [-1.0],
]
OUTPUT_BIAS = [-0.5]


def dense(x: Tensor, weights: Tensor, bias: Tensor, name: str) -> Tensor:
    """Σ_i X[..,i] · W[i,o] + B[o] for a sample or a batch, labels from the operands."""
    _, out = weights.indices
    if x.rank == 1:
        return add(contract(x, weights, output=[out]), bias, name=name)

    batch = x.indices[0]
    ones = full("Ones", [batch], [x.shape[0]], 1.0)
    tiled = contract(ones, bias, output=[batch, out])
    pre = contract(x, weights, output=[batch, out])
    return add(pre, tiled, name=name)


def run_xor_batch_example() -> ExampleResult:
    result = ExampleResult(
        title="MLP Batch Processing: XOR",
        description=(
            "XOR is not linearly separable, but two threshold layers solve it:\n"
            "the hidden layer computes OR and AND, the output fires for OR but\n"
            "not AND. The whole batch of four inputs runs through one einsum."
        ),
        code=(
            "Hidden[b,h] = H(Σ_i X[b,i] · W1[i,h] + B1[h])\n"
            "Output[b,o] = H(Σ_h Hidden[b,h] · W2[h,o] + B2[o])"
        ),
    )

    x = result.add_step(
        "Input Batch",
        "X[b,i]: the four XOR input pairs, one row per batch element.",
        from_matrix("X", ["b", "i"], XOR_INPUTS),
        precision=0,
    )
    w1 = from_matrix("W1", ["i", "h"], HIDDEN_WEIGHTS)
    b1 = create_tensor("B1", ["h"], [2], HIDDEN_BIAS)
    w2 = from_matrix("W2", ["h", "o"], OUTPUT_WEIGHTS)
    b2 = create_tensor("B2", ["o"], [1], OUTPUT_BIAS)

    hidden_pre = result.add_step(
        "Hidden Pre-activation",
        "Σ_i X[b,i] · W1[i,h] + B1[h]",
        dense(x, w1, b1, name="HiddenPre"),
    )
    hidden = result.add_step(
        "Hidden Layer",
        "Hidden[b,h] = H(...): column 0 is OR, column 1 is AND.",
        threshold(hidden_pre, name="Hidden"),
        precision=0,
    )
    output_pre = dense(hidden, w2, b2, name="OutputPre")
    result.add_step(
        "Output",
        "Output[b,o] = H(...) reproduces XOR: [0, 1, 1, 0].",
        threshold(output_pre, name="Output"),
        precision=0,
    )
    result.add_step(
        "Soft Output",
        "Replacing the step with a sigmoid gives graded confidences.",
        sigmoid(output_pre, name="SoftOutput"),
        precision=3,
    )
    return result


def run_mlp_example() -> ExampleResult:
    result = ExampleResult(
        title="Multi-Layer Perceptron",
        description=(
            "A two-layer perceptron evaluated on one input. Each layer is an\n"
            "einsum that contracts the input axis against a weight matrix, plus a\n"
            "bias and a step nonlinearity. The weights implement XOR."
        ),
        code=(
            "Hidden[h] = H(Σ_i X[i] · W1[i,h] + B1[h])\n"
            "Output[o] = H(Σ_h Hidden[h] · W2[h,o] + B2[o])"
        ),
    )

    x = result.add_step(
        "Input",
        "X[i] = [1, 0]: one XOR input pair.",
        create_tensor("X", ["i"], [2], XOR_INPUTS[2]),
        precision=0,
    )
    w1 = result.add_step(
        "Hidden Weights",
        "W1[i,h]: both hidden units see both inputs.",
        from_matrix("W1", ["i", "h"], HIDDEN_WEIGHTS),
        precision=0,
    )
    b1 = create_tensor("B1", ["h"], [2], HIDDEN_BIAS)
    w2 = from_matrix("W2", ["h", "o"], OUTPUT_WEIGHTS)
    b2 = create_tensor("B2", ["o"], [1], OUTPUT_BIAS)

    hidden_pre = result.add_step(
        "Hidden Pre-activation",
        "Σ_i X[i] · W1[i,h] + B1[h]",
        dense(x, w1, b1, name="HiddenPre"),
    )
    hidden = result.add_step(
        "Hidden Layer",
        "Hidden[h] = H(...): the OR unit fires, the AND unit does not.",
        threshold(hidden_pre, name="Hidden"),
        precision=0,
    )
    output_pre = dense(hidden, w2, b2, name="OutputPre")
    result.add_step(
        "Output",
        "Output[o] = H(...) = 1, since exactly one input is on.",
        threshold(output_pre, name="Output"),
        precision=0,
    )
    result.add_step(
        "Soft Output",
        "A sigmoid in place of the step gives a confidence above 0.5.",
        sigmoid(output_pre, name="SoftOutput"),
        precision=3,
    )
    return result
