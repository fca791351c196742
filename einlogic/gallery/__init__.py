"""
Example gallery: AI paradigms written as tensor equations.

Each example returns an ExampleResult whose steps can be rendered by any
front end (the CLI prints them).
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .steps import ExampleResult, Step, make_step
from .logic import run_logic_program_example
from .mlp import run_mlp_example, run_xor_batch_example
from .transformer import run_attention_example, run_multihead_attention_example
from .gnn import run_gnn_example
from .kernel import run_kernel_example
from .graphical import run_bayesian_network_example, run_hmm_example

logger = logging.getLogger(__name__)

CATEGORIES = ("symbolic", "neural", "probabilistic", "hybrid")


@dataclass(frozen=True)
class GalleryEntry:
    id: str
    name: str
    category: str
    run: Callable[[], ExampleResult]


EXAMPLES: List[GalleryEntry] = [
    GalleryEntry("logic", "Logic Programming", "symbolic", run_logic_program_example),
    GalleryEntry("mlp", "Multi-Layer Perceptron", "neural", run_mlp_example),
    GalleryEntry("mlp-batch", "MLP Batch Processing (XOR)", "neural", run_xor_batch_example),
    GalleryEntry("transformer", "Transformer (Self-Attention)", "neural", run_attention_example),
    GalleryEntry("multihead", "Multi-Head Attention", "neural", run_multihead_attention_example),
    GalleryEntry("gnn", "Graph Neural Network", "neural", run_gnn_example),
    GalleryEntry("kernel", "Kernel Machines (SVM)", "hybrid", run_kernel_example),
    GalleryEntry("bayesian", "Bayesian Network", "probabilistic", run_bayesian_network_example),
    GalleryEntry("hmm", "Hidden Markov Model", "probabilistic", run_hmm_example),
]


def list_examples(category: Optional[str] = None) -> List[GalleryEntry]:
    if category is None:
        return list(EXAMPLES)
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category} (expected one of {', '.join(CATEGORIES)})")
    return [e for e in EXAMPLES if e.category == category]


def get_example(example_id: str) -> GalleryEntry:
    for entry in EXAMPLES:
        if entry.id == example_id:
            return entry
    raise KeyError(f"Unknown example: {example_id}")


def run_example(example_id: str) -> ExampleResult:
    entry = get_example(example_id)
    logger.info("Running example '%s' (%s)", entry.id, entry.name)
    return entry.run()


__all__ = [
    "CATEGORIES",
    "EXAMPLES",
    "ExampleResult",
    "GalleryEntry",
    "Step",
    "get_example",
    "list_examples",
    "make_step",
    "run_example",
    "run_attention_example",
    "run_bayesian_network_example",
    "run_gnn_example",
    "run_hmm_example",
    "run_kernel_example",
    "run_logic_program_example",
    "run_mlp_example",
    "run_multihead_attention_example",
    "run_xor_batch_example",
]
