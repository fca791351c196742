"""
Graphical models in tensor logic

Factors are tensors, the joint is their product and marginalization is
summation over the eliminated variables:

    Joint[r,s,w] = P(r) · P(s|r) · P(w|r,s)
    P(w)         = Σ_{r,s} Joint[r,s,w]
"""

from ..core.einsum import einsum
from ..core.tensor import create_tensor, from_matrix, from_nested
from .steps import ExampleResult

# Rain -> Sprinkler, (Rain, Sprinkler) -> WetGrass; index 0 = false, 1 = true.
P_RAIN = [0.8, 0.2]
P_SPRINKLER_GIVEN_RAIN = [
    [0.6, 0.4],
    [0.99, 0.01],
]
P_WET_GIVEN_RAIN_SPRINKLER = [
    [[1.0, 0.0], [0.1, 0.9]],
    [[0.2, 0.8], [0.01, 0.99]],
]

# Hidden Markov model: two weather states, two observations.
HMM_INITIAL = [0.6, 0.4]
HMM_TRANSITION = [
    [0.7, 0.3],
    [0.4, 0.6],
]
HMM_EMISSION = [
    [0.9, 0.1],
    [0.2, 0.8],
]
HMM_OBSERVATIONS = [0, 1, 1]


def run_bayesian_network_example() -> ExampleResult:
    result = ExampleResult(
        title="Bayesian Network: Sprinkler",
        description=(
            "Each conditional probability table is a tensor indexed by its\n"
            "variables. Multiplying the factors with an einsum gives the joint;\n"
            "leaving a variable out of the output sums it away."
        ),
        code=(
            "Joint[r,s,w] = P(r) · P(s|r) · P(w|r,s)\n"
            "P(w) = Σ_{r,s} Joint[r,s,w]"
        ),
    )

    rain = result.add_step("P(Rain)", "P(r)", create_tensor("PRain", ["r"], [2], P_RAIN))
    sprinkler = result.add_step(
        "P(Sprinkler | Rain)", "P(s|r): rows are r, columns s.",
        from_matrix("PSprinkler", ["r", "s"], P_SPRINKLER_GIVEN_RAIN),
    )
    wet = result.add_step(
        "P(WetGrass | Rain, Sprinkler)", "P(w|r,s), one block per value of r.",
        from_nested("PWet", ["r", "s", "w"], P_WET_GIVEN_RAIN_SPRINKLER),
    )

    result.add_step(
        "Joint Distribution",
        "Joint[r,s,w] = P(r) · P(s|r) · P(w|r,s); all eight entries sum to 1.",
        einsum("r,rs,rsw->rsw", rain, sprinkler, wet, name="Joint"),
        precision=4,
    )
    result.add_step(
        "Marginal P(WetGrass)",
        "P(w) = Σ_{r,s} P(r) · P(s|r) · P(w|r,s)",
        einsum("r,rs,rsw->w", rain, sprinkler, wet, name="PWetGrass"),
        precision=4,
    )
    return result


def run_hmm_example() -> ExampleResult:
    result = ExampleResult(
        title="Hidden Markov Model: Forward Algorithm",
        description=(
            "The forward algorithm alternates an einsum over the previous state\n"
            "with an elementwise weighting by the emission probability of the\n"
            "observed symbol. The final sum is the likelihood of the sequence."
        ),
        code=(
            "Alpha1[s] = Init[s] · Emit[s,o1]\n"
            "Alpha_t[s'] = Σ_s Alpha_{t-1}[s] · Trans[s,s'] · Emit[s',o_t]\n"
            "P(obs) = Σ_s Alpha_T[s]"
        ),
    )

    initial = create_tensor("Init", ["s"], [2], HMM_INITIAL)
    transition = result.add_step(
        "Transition Matrix", "Trans[s,t] = P(next state t | state s)",
        from_matrix("Trans", ["s", "t"], HMM_TRANSITION),
    )
    emission = result.add_step(
        "Emission Matrix", "Emit[s,o] = P(observation o | state s)",
        from_matrix("Emit", ["s", "o"], HMM_EMISSION),
    )

    def emit_column(symbol: int, label: str):
        # Operands bind by position, so the label is only for display.
        column = [emission.item(s, symbol) for s in range(emission.shape[0])]
        return create_tensor(f"Emit[:,{symbol}]", [label], [len(column)], column)

    alpha = einsum("s,s->s", initial, emit_column(HMM_OBSERVATIONS[0], "s"), name="Alpha1")
    result.add_step("Alpha at t=1", f"Observation {HMM_OBSERVATIONS[0]}", alpha, precision=4)

    for t, symbol in enumerate(HMM_OBSERVATIONS[1:], start=2):
        alpha = einsum("s,st,t->t", alpha, transition, emit_column(symbol, "t"), name=f"Alpha{t}")
        result.add_step(f"Alpha at t={t}", f"Observation {symbol}", alpha, precision=4)

    result.add_step(
        "Sequence Likelihood",
        "P(obs) = Σ_s Alpha_T[s]",
        einsum("s->", alpha, name="Likelihood"),
        precision=5,
    )
    return result
