"""
Step-by-step example results

Each gallery example returns an ExampleResult: a title, a description, the
tensor-logic equations it demonstrates, and a list of Steps that pair every
intermediate tensor with its rendered string.
"""

from dataclasses import dataclass, field
from typing import List

from ..core.tensor import Tensor
from ..utils.formatting import tensor_to_string


@dataclass
class Step:
    name: str
    explanation: str
    tensor: Tensor
    tensor_string: str


@dataclass
class ExampleResult:
    title: str
    description: str
    code: str
    steps: List[Step] = field(default_factory=list)

    def add_step(self, name: str, explanation: str, tensor: Tensor, precision: int = 2) -> Tensor:
        """Record a step and return its tensor, so calls can be chained inline"""
        self.steps.append(make_step(name, explanation, tensor, precision))
        return tensor

    def step(self, name: str) -> Step:
        for s in self.steps:
            if s.name == name:
                return s
        raise KeyError(f"No step named {name!r} in '{self.title}'")


def make_step(name: str, explanation: str, tensor: Tensor, precision: int = 2) -> Step:
    return Step(
        name=name,
        explanation=explanation,
        tensor=tensor,
        tensor_string=tensor_to_string(tensor, precision),
    )
