"""Tests for elementwise operations."""

import math

import numpy as np
import pytest
import torch

from einlogic.core.exceptions import ShapeMismatch
from einlogic.core.tensor import create_tensor, from_array, from_matrix
from einlogic.ops.elementwise import (
    add, multiply, scale, relu, sigmoid, threshold, tanh, softmax, apply_nonlinearity,
)


@pytest.fixture
def x():
    return create_tensor("X", ["i", "j"], [2, 3], [-2.0, -0.5, 0.0, 0.5, 1.0, 3.0])


class TestBinaryOps:
    def test_add(self):
        a = from_matrix("A", ["i", "j"], [[1, 2], [3, 4]])
        b = from_matrix("B", ["i", "j"], [[10, 20], [30, 40]])
        c = add(a, b)
        assert c.tolist() == [11.0, 22.0, 33.0, 44.0]
        assert c.indices == ("i", "j")
        assert c.name == "A+B"

    def test_add_is_commutative(self):
        a = from_array("A", ["i", "j"], torch.randn(3, 4, dtype=torch.float64))
        b = from_array("B", ["i", "j"], torch.randn(3, 4, dtype=torch.float64))
        assert add(a, b) == add(b, a)

    def test_add_rejects_reordered_indices(self):
        a = from_matrix("A", ["i", "j"], [[1, 2], [3, 4]])
        b = from_matrix("B", ["j", "i"], [[1, 2], [3, 4]])
        with pytest.raises(ShapeMismatch, match="index labels differ"):
            add(a, b)

    def test_add_rejects_different_labels(self):
        a = create_tensor("A", ["v", "d"], [1, 2], [1, 2])
        b = create_tensor("B", ["v", "d_out"], [1, 2], [1, 2])
        with pytest.raises(ShapeMismatch):
            add(a, b)

    def test_add_rejects_different_shapes(self):
        a = create_tensor("A", ["i"], [2], [1, 2])
        b = create_tensor("B", ["i"], [3], [1, 2, 3])
        with pytest.raises(ShapeMismatch, match="shapes differ"):
            add(a, b)

    def test_no_broadcasting(self):
        a = from_matrix("A", ["i", "j"], [[1, 2], [3, 4]])
        b = create_tensor("B", ["j"], [2], [1, 2])
        with pytest.raises(ShapeMismatch):
            add(a, b)

    def test_multiply(self):
        a = create_tensor("A", ["i"], [3], [1, 2, 3])
        b = create_tensor("B", ["i"], [3], [4, 5, 6])
        assert multiply(a, b).tolist() == [4.0, 10.0, 18.0]

    def test_scale(self):
        a = create_tensor("A", ["i"], [2], [1, -2])
        assert scale(a, 0.5).tolist() == [0.5, -1.0]


class TestUnaryOps:
    def test_relu(self, x):
        r = relu(x)
        assert r.tolist() == [0.0, 0.0, 0.0, 0.5, 1.0, 3.0]
        assert r.indices == x.indices and r.shape == x.shape
        assert r.name == "relu(X)"

    def test_relu_properties(self):
        x = from_array("X", ["k"], torch.randn(50, dtype=torch.float64))
        r = relu(x)
        for k in range(x.size):
            assert r.item(k) >= 0.0
            if x.item(k) >= 0.0:
                assert r.item(k) == x.item(k)

    def test_sigmoid(self, x):
        s = sigmoid(x)
        for k, v in enumerate(x.tolist()):
            assert s.tolist()[k] == pytest.approx(1.0 / (1.0 + math.exp(-v)))
        assert sigmoid(create_tensor("z", [], [], [0.0])).item() == 0.5

    def test_sigmoid_stable_for_large_inputs(self):
        z = create_tensor("Z", ["i"], [2], [-1000.0, 1000.0])
        assert sigmoid(z).tolist() == [0.0, 1.0]

    def test_threshold(self, x):
        assert threshold(x).tolist() == [0.0, 0.0, 0.0, 1.0, 1.0, 1.0]

    def test_tanh(self, x):
        assert np.allclose(tanh(x).data, np.tanh(x.data))

    def test_inputs_unchanged(self, x):
        before = x.tolist()
        relu(x)
        sigmoid(x)
        threshold(x)
        assert x.tolist() == before


class TestSoftmax:
    def test_rows_sum_to_one(self):
        s = from_matrix("S", ["p", "q"], [[1, 2, 3], [0, 0, 0]])
        w = softmax(s, "q")
        rows = w.to_numpy()
        assert np.allclose(rows.sum(axis=1), 1.0)
        assert np.allclose(rows[1], 1.0 / 3.0)

    def test_matches_torch(self):
        raw = torch.randn(3, 4, dtype=torch.float64)
        s = from_array("S", ["p", "q"], raw)
        assert torch.allclose(softmax(s, "p").to_torch(), torch.softmax(raw, dim=0))

    def test_unknown_index(self):
        s = from_matrix("S", ["p", "q"], [[1, 2]])
        with pytest.raises(ShapeMismatch):
            softmax(s, "z")


class TestApplyNonlinearity:
    def test_dispatch(self, x):
        assert apply_nonlinearity(x, "relu") == relu(x)
        assert apply_nonlinearity(x, "step") == threshold(x)
        assert apply_nonlinearity(x, "identity") is x
        assert apply_nonlinearity(x, None, name="Y").name == "Y"

    def test_unknown(self, x):
        with pytest.raises(ValueError, match="Unknown nonlinearity"):
            apply_nonlinearity(x, "softsign")
