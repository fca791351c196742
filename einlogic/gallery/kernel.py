"""
Kernel machines in tensor logic

    Gram[i,j]   = Σ_d X[i,d] · X[j,d]
    K[i,j]      = (Gram[i,j] + 1)^2                  (polynomial kernel)
    Score[j]    = Σ_i Alpha[i] · Y[i] · K[i,j]       (SVM decision values)
"""

from ..core.einsum import einsum
from ..core.tensor import create_tensor, from_matrix, full
from ..ops.elementwise import add, multiply
from .steps import ExampleResult

POINTS = [
    [1.0, 0.0],
    [0.0, 1.0],
    [1.0, 1.0],
]
LABELS = [1.0, -1.0, 1.0]
ALPHAS = [0.5, 0.5, 0.25]


def run_kernel_example() -> ExampleResult:
    result = ExampleResult(
        title="Kernel Machines: Polynomial SVM",
        description=(
            "A kernel machine scores a point by a weighted sum of kernel values\n"
            "against the support vectors. The Gram matrix is one einsum and the\n"
            "decision function is another."
        ),
        code=(
            "K[i,j] = (Σ_d X[i,d] · X[j,d] + 1)^2\n"
            "Score[j] = Σ_i Alpha[i] · Y[i] · K[i,j]"
        ),
    )

    points = from_matrix("X", ["i", "d"], POINTS)
    result.add_step("Support Vectors", "X[i,d]: three points in the plane.", points, precision=1)

    gram = result.add_step(
        "Gram Matrix",
        "Gram[i,j] = Σ_d X[i,d] · X[j,d]",
        einsum("id,jd->ij", points, points, name="Gram"),
        precision=1,
    )
    shifted = add(gram, full("Ones", ["i", "j"], gram.shape, 1.0), name="Gram+1")
    kernel = result.add_step(
        "Polynomial Kernel",
        "K[i,j] = (Gram[i,j] + 1)^2",
        multiply(shifted, shifted, name="K"),
        precision=1,
    )

    labels = create_tensor("Y", ["i"], [3], LABELS)
    alphas = create_tensor("Alpha", ["i"], [3], ALPHAS)
    result.add_step(
        "Decision Values",
        "Score[j] = Σ_i Alpha[i] · Y[i] · K[i,j]; three operands, one einsum.",
        einsum("i,i,ij->j", alphas, labels, kernel, name="Score"),
        precision=2,
    )
    return result
