"""Tests for Tensor construction, invariants, immutability and interop."""

import numpy as np
import pytest
import torch

from einlogic.core.exceptions import ShapeMismatch
from einlogic.core.tensor import (
    Tensor, create_tensor, from_matrix, from_nested, from_array, scalar, full, rename,
    row_major_strides,
)


class TestCreateTensor:
    def test_basic_layout(self):
        t = create_tensor("W", ["d", "d_out"], [2, 3], [1, 2, 3, 4, 5, 6])
        assert t.name == "W"
        assert t.indices == ("d", "d_out")
        assert t.shape == (2, 3)
        assert t.rank == 2
        assert t.size == 6
        assert t.data.dtype == np.float64

    def test_row_major_strides(self):
        t = create_tensor("T", ["a", "b", "c"], [2, 3, 4], range(24))
        assert t.strides == (12, 4, 1)
        assert row_major_strides([5]) == (1,)
        assert row_major_strides([]) == ()

    def test_row_major_addressing(self):
        t = create_tensor("T", ["i", "j"], [2, 3], [0, 1, 2, 10, 11, 12])
        assert t.item(0, 2) == 2.0
        assert t.item(1, 0) == 10.0
        assert t.offset((1, 2)) == 5

    def test_scalar_from_empty_shape(self):
        t = create_tensor("s", [], [], [3.5])
        assert t.rank == 0
        assert t.item() == 3.5

    def test_indices_shape_length_mismatch(self):
        with pytest.raises(ShapeMismatch, match="indices"):
            create_tensor("T", ["i"], [2, 2], [1, 2, 3, 4])

    def test_data_length_mismatch(self):
        with pytest.raises(ShapeMismatch, match="needs 4 values, got 3"):
            create_tensor("T", ["i", "j"], [2, 2], [1, 2, 3])

    def test_scalar_needs_one_value(self):
        with pytest.raises(ShapeMismatch):
            create_tensor("s", [], [], [])

    def test_repeated_labels_rejected(self):
        with pytest.raises(ShapeMismatch, match="distinct"):
            create_tensor("T", ["i", "i"], [2, 2], [1, 2, 3, 4])

    @pytest.mark.parametrize("shape", [[0, 2], [-1, 2], [2.5, 2], [True, 2]])
    def test_non_positive_or_non_integer_dims_rejected(self, shape):
        with pytest.raises(ShapeMismatch):
            create_tensor("T", ["i", "j"], shape, [1, 2])

    def test_non_numeric_data_rejected(self):
        with pytest.raises(ShapeMismatch, match="numeric"):
            create_tensor("T", ["i"], [2], ["a", "b"])

    def test_shape_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            create_tensor("T", ["i"], [3], [1, 2])

    def test_accepts_numpy_and_torch_buffers(self):
        a = create_tensor("A", ["i"], [3], np.array([1.0, 2.0, 3.0]))
        b = create_tensor("B", ["i"], [3], torch.tensor([1.0, 2.0, 3.0]))
        assert a == b


class TestImmutability:
    def test_data_is_read_only(self):
        t = create_tensor("T", ["i"], [2], [1.0, 2.0])
        with pytest.raises(ValueError):
            t.data[0] = 5.0

    def test_caller_buffer_is_copied(self):
        source = np.array([1.0, 2.0])
        t = create_tensor("T", ["i"], [2], source)
        source[0] = 99.0
        assert t.item(0) == 1.0

    def test_to_numpy_returns_writable_copy(self):
        t = create_tensor("T", ["i", "j"], [2, 2], [1, 2, 3, 4])
        arr = t.to_numpy()
        arr[0, 0] = 42.0
        assert arr.shape == (2, 2)
        assert t.item(0, 0) == 1.0

    def test_attributes_are_read_only(self):
        t = create_tensor("T", ["i"], [2], [1.0, 2.0])
        with pytest.raises(AttributeError):
            t.shape = (1, 2)


class TestFromMatrix:
    def test_shape_and_flattening(self):
        t = from_matrix("A", ["v", "u"], [[0, 1, 0], [1, 0, 1]])
        assert t.shape == (2, 3)
        assert t.tolist() == [0.0, 1.0, 0.0, 1.0, 0.0, 1.0]

    def test_ragged_rows_rejected(self):
        with pytest.raises(ShapeMismatch, match="row 1"):
            from_matrix("A", ["i", "j"], [[1, 2], [3]])

    def test_empty_rejected(self):
        with pytest.raises(ShapeMismatch):
            from_matrix("A", ["i", "j"], [])

    def test_needs_two_indices(self):
        with pytest.raises(ShapeMismatch, match="exactly 2 indices"):
            from_matrix("A", ["i"], [[1, 2]])


class TestOtherConstructors:
    def test_from_nested_rank3(self):
        t = from_nested("T", ["i", "j", "k"], [[[1, 2], [3, 4]], [[5, 6], [7, 8]]])
        assert t.shape == (2, 2, 2)
        assert t.item(1, 0, 1) == 6.0

    def test_from_nested_ragged(self):
        with pytest.raises(ShapeMismatch, match="ragged"):
            from_nested("T", ["i", "j"], [[1, 2], [3, 4, 5]])

    def test_from_array_torch(self):
        x = torch.arange(6, dtype=torch.float32).reshape(2, 3)
        t = from_array("X", ["b", "d"], x)
        assert t.shape == (2, 3)
        assert torch.equal(t.to_torch(), x.to(torch.float64))

    def test_scalar(self):
        s = scalar("s", 2.5)
        assert s.shape == ()
        assert s.item() == 2.5

    def test_full(self):
        ones = full("Ones", ["i", "j"], [2, 3], 1.0)
        assert ones.tolist() == [1.0] * 6

    def test_rename_keeps_data(self):
        t = create_tensor("T", ["v", "d_out"], [1, 2], [1, 2])
        r = rename(t, name="R", indices=["v", "d"])
        assert r.name == "R"
        assert r.indices == ("v", "d")
        assert r.tolist() == t.tolist()
        assert t.indices == ("v", "d_out")


class TestTensorValueSemantics:
    def test_equality_ignores_name(self):
        a = create_tensor("A", ["i"], [2], [1, 2])
        b = create_tensor("B", ["i"], [2], [1, 2])
        assert a == b

    def test_equality_includes_indices(self):
        a = create_tensor("A", ["i"], [2], [1, 2])
        b = create_tensor("A", ["j"], [2], [1, 2])
        assert a != b

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(create_tensor("A", ["i"], [1], [1]))

    def test_index_of(self):
        t = create_tensor("T", ["p", "q"], [1, 1], [0])
        assert t.index_of("q") == 1
        with pytest.raises(ShapeMismatch, match="no index 'z'"):
            t.index_of("z")

    def test_item_out_of_range(self):
        t = create_tensor("T", ["i"], [2], [1, 2])
        with pytest.raises(IndexError):
            t.item(2)

    def test_repr_and_str(self):
        t = create_tensor("T", ["i"], [2], [1, 2])
        assert repr(t) == "Tensor('T', indices=['i'], shape=(2,))"
        assert str(t) == "[1.00, 2.00]"
