"""
Logic programming in tensor logic

A relation is a Boolean matrix and a Datalog rule is an einsum followed by a
step function:

    Grandparent(x,z) <- Parent(x,y), Parent(y,z)
    Grandparent[x,z] = H(Σ_y Parent[x,y] · Parent[y,z])
"""

from ..core.einsum import einsum
from ..core.tensor import from_matrix
from ..ops.elementwise import threshold
from .steps import ExampleResult

PEOPLE = ["Alice", "Bob", "Charlie", "Diana"]

# Alice -> Bob, Bob -> Charlie, Bob -> Diana
PARENT = [
    [0, 1, 0, 0],
    [0, 0, 1, 1],
    [0, 0, 0, 0],
    [0, 0, 0, 0],
]


def run_logic_program_example() -> ExampleResult:
    result = ExampleResult(
        title="Logic Programming: Family Relations",
        description=(
            "Facts are Boolean tensors and rules are tensor equations. Joining two\n"
            "relations on a shared variable is an einsum over that variable;\n"
            "projecting a variable away sums over it; the step function maps counts\n"
            "back to truth values."
        ),
        code=(
            "Grandparent[x,z] = H(Σ_y Parent[x,y] · Parent[y,z])\n"
            "HasChild[x] = H(Σ_y Parent[x,y])"
        ),
    )

    parent = result.add_step(
        "Parent Facts",
        "Parent[x,y] = 1 when x is a parent of y (Alice, Bob, Charlie, Diana).",
        from_matrix("Parent", ["x", "y"], PARENT),
        precision=0,
    )

    paths = result.add_step(
        "Join on y",
        "Paths[x,z] = Σ_y Parent[x,y] · Parent[y,z] counts the two-step paths.",
        einsum("xy,yz->xz", parent, parent, name="Paths"),
        precision=0,
    )

    result.add_step(
        "Grandparent Rule",
        "Grandparent[x,z] = H(Paths[x,z]): Alice is grandparent of Charlie and Diana.",
        threshold(paths, name="Grandparent"),
        precision=0,
    )

    result.add_step(
        "Existential Projection",
        "HasChild[x] = H(Σ_y Parent[x,y]): summing y away is 'there exists y'.",
        threshold(einsum("xy->x", parent), name="HasChild"),
        precision=0,
    )
    return result
