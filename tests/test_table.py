import numpy as np
import pytest

from ExactMSA.errors import InvalidInput, LogicViolation
from ExactMSA.msa_exact import DenseTable, SparseTable, make_table, table_cells


@pytest.fixture(params=[DenseTable, SparseTable])
def table(request):
    return request.param((3, 4, 2))


class TestTableInterface:
    def test_empty_get(self, table):
        assert table.get((0, 0, 0)) is None
        assert not table.is_computed((2, 3, 1))
        assert table.n_computed == 0

    def test_set_get(self, table):
        table.set((1, 2, 1), -7)
        assert table.get((1, 2, 1)) == -7
        assert (1, 2, 1) in table
        assert table.n_computed == 1

    def test_zero_score_is_stored(self, table):
        table.set((0, 0, 0), 0)
        assert table.get((0, 0, 0)) == 0

    def test_same_value_rewrite_is_accepted(self, table):
        table.set((2, 3, 1), 5)
        table.set((2, 3, 1), 5)
        assert table.get((2, 3, 1)) == 5

    def test_overwrite_raises(self, table):
        table.set((2, 3, 1), 5)
        with pytest.raises(LogicViolation, match="overwrite"):
            table.set((2, 3, 1), 6)

    def test_out_of_range(self, table):
        with pytest.raises(LogicViolation):
            table.get((3, 0, 0))
        with pytest.raises(LogicViolation):
            table.set((0, -1, 0), 1)
        with pytest.raises(LogicViolation):
            table.get((0, 0))

    def test_size(self, table):
        assert table.size == 24


class TestDenseTable:
    def test_strides(self):
        t = DenseTable((3, 4, 2))
        assert t.strides == (8, 2, 1)
        assert t.offset((2, 3, 1)) == 23
        assert t.offset((1, 0, 1)) == np.ravel_multi_index((1, 0, 1), (3, 4, 2))

    def test_to_array(self):
        t = DenseTable((2, 2))
        t.set((1, 0), 9)
        scores, computed = t.to_array()
        assert scores[1, 0] == 9
        assert computed.sum() == 1
        assert t.nbytes == 4 * 8 + 4


class TestMakeTable:
    def test_cells(self):
        assert table_cells((9, 10, 10, 11)) == 9900

    def test_auto_layout(self):
        assert make_table((3, 3)).layout == "dense"
        assert make_table((3, 3), dense_limit=4).layout == "sparse"

    def test_explicit_layout(self):
        assert isinstance(make_table((2,), layout="sparse"), SparseTable)
        with pytest.raises(InvalidInput, match="layout"):
            make_table((2,), layout="tree")

    def test_cell_bound(self):
        with pytest.raises(InvalidInput, match="cell bound"):
            make_table((100, 100, 100), max_cells=10_000)
        assert make_table((100, 100), max_cells=None).size == 10_000

    def test_bad_shape(self):
        with pytest.raises(InvalidInput):
            DenseTable((3, 0))
