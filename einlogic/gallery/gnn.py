"""
Graph neural networks in tensor logic

Message passing is Einstein summation over the graph structure:

    H'[v,d'] = sum_u A[v,u] * H[u,d] * W[d,d']

A[v,u] is the adjacency matrix, H[v,d] the node features and W[d,d'] the
learnable weights. The adjacency matrix acts as a selector, exactly like a
relation in a logical rule.
"""

from ..core.einsum import einsum
from ..core.tensor import create_tensor, from_matrix, rename
from ..ops.elementwise import add, relu
from .steps import ExampleResult

# 0: Alice, 1: Bob, 2: Charlie, 3: Diana. Bob is friends with everyone.
ADJACENCY = [
    [0, 1, 0, 0],
    [1, 0, 1, 1],
    [0, 1, 0, 0],
    [0, 1, 0, 0],
]

NODE_FEATURES = [
    0.8, 0.6, 0.3,  # Alice
    0.9, 1.0, 0.5,  # Bob
    0.5, 0.3, 0.4,  # Charlie
    0.7, 0.5, 0.3,  # Diana
]

WEIGHTS = [
    0.5, 0.3, 0.2,
    0.2, 0.6, 0.2,
    0.3, 0.1, 0.6,
]


def run_gnn_example() -> ExampleResult:
    result = ExampleResult(
        title="Graph Neural Network: Message Passing",
        description=(
            "A GNN layer aggregates neighbor features, transforms them with learned\n"
            "weights and adds a residual connection. The aggregation is an einsum\n"
            "over the adjacency matrix, the same join a logical rule performs."
        ),
        code=(
            "// Basic GNN layer:\n"
            "H'[v,d'] = Σ_u A[v,u] · H[u,d] · W[d,d']\n\n"
            "// Graph Attention Networks (GAT):\n"
            "Attention[v,u] = softmax(Query[v,d] · Key[u,d])\n"
            "H'[v,d'] = Σ_u Attention[v,u] · H[u,d] · W[d,d']"
        ),
    )

    adjacency = result.add_step(
        "Graph Structure (Adjacency Matrix)",
        "A[v,u] = 1 when nodes v and u are friends. Alice, Charlie and Diana\n"
        "are each connected only to Bob, the central node.",
        from_matrix("Adjacency", ["v", "u"], ADJACENCY),
        precision=0,
    )

    features = result.add_step(
        "Initial Node Features",
        "Each node carries three features H[v,d]: interest, activity, age group.",
        create_tensor("NodeFeatures", ["v", "d"], [4, 3], NODE_FEATURES),
    )

    weights = result.add_step(
        "Weight Matrix",
        "W[d,d_out] mixes input features into output features. In practice\n"
        "these values are learned by gradient descent.",
        create_tensor("Weights", ["d", "d_out"], [3, 3], WEIGHTS),
    )

    messages = result.add_step(
        "Message Aggregation",
        "Messages[v,d] = Σ_u A[v,u] · H[u,d]\n\n"
        "Bob (node 1) receives H[0] + H[2] + H[3] = [2.0, 1.4, 1.0].",
        einsum("vu,ud->vd", adjacency, features, name="Messages"),
    )

    updated = result.add_step(
        "Feature Transformation",
        "H'[v,d_out] = Σ_d Messages[v,d] · W[d,d_out]",
        einsum("vd,dd_out->vd_out", messages, weights, name="UpdatedFeatures"),
    )

    # The residual needs matching labels: rename the output axis back to d.
    activated = rename(relu(updated), name="Activated", indices=["v", "d"])
    result.add_step(
        "Activation and Residual Connection",
        "H_final[v,d] = ReLU(H'[v,d]) + H[v,d]\n\n"
        "Stacking k such layers lets every node see its k-hop neighborhood.",
        add(activated, features, name="FinalFeatures"),
    )
    return result
