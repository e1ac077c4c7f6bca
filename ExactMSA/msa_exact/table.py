"""
N-dimensional memo tables keyed by cursor tuples.

Scores can be zero or negative, so a parallel "computed" flag marks finished
entries instead of a sentinel score. Entries are write-once.

Memory: the table has prod(length_i + 1) cells. DenseTable stores 9 bytes per
cell (int64 score + bool flag) up front; SparseTable only pays for visited
cells but with dict overhead per entry.
"""

from __future__ import annotations
from typing import Dict, Optional, Sequence as SequenceType, Tuple

import numpy as np

from ..errors import InvalidInput, LogicViolation

Cursor = Tuple[int, ...]

DEFAULT_MAX_CELLS = 50_000_000
DEFAULT_DENSE_LIMIT = 5_000_000


def table_cells(shape: SequenceType[int]) -> int:
    cells = 1
    for dim in shape:
        cells *= int(dim)
    return cells


class _BaseTable:
    """Shared bounds checking and write-once bookkeeping"""

    def __init__(self, shape: SequenceType[int]):
        self.shape = tuple(int(d) for d in shape)
        if any(d <= 0 for d in self.shape):
            raise InvalidInput("Table dimensions must be positive",
                               context=f"shape={self.shape}")
        self.size = table_cells(self.shape)

    def _check(self, idx: SequenceType[int]) -> None:
        if len(idx) != len(self.shape):
            raise LogicViolation(
                "Cursor has the wrong number of dimensions",
                context=f"cursor={tuple(idx)}, shape={self.shape}",
            )
        for i, d in zip(idx, self.shape):
            if i < 0 or i >= d:
                raise LogicViolation(
                    "Cursor outside the table",
                    context=f"cursor={tuple(idx)}, shape={self.shape}",
                )

    def _overwrite(self, idx, old: int, new: int) -> None:
        raise LogicViolation(
            "Attempted to overwrite a computed table entry",
            context=f"cursor={tuple(idx)}, stored={old}, new={new}",
        )

    def __contains__(self, idx) -> bool:
        return self.is_computed(idx)


class DenseTable(_BaseTable):
    """Flat numpy arena addressed through row-major strides"""

    layout = "dense"

    def __init__(self, shape: SequenceType[int]):
        super().__init__(shape)
        self._scores = np.zeros(self.size, dtype=np.int64)
        self._computed = np.zeros(self.size, dtype=bool)
        # row-major element strides, last dimension varies fastest
        strides = []
        step = 1
        for d in reversed(self.shape):
            strides.append(step)
            step *= d
        self.strides = tuple(reversed(strides))

    def offset(self, idx: SequenceType[int]) -> int:
        self._check(idx)
        return sum(i * s for i, s in zip(idx, self.strides))

    def is_computed(self, idx: SequenceType[int]) -> bool:
        return bool(self._computed[self.offset(idx)])

    def get(self, idx: SequenceType[int]) -> Optional[int]:
        off = self.offset(idx)
        if self._computed[off]:
            return int(self._scores[off])
        return None

    def set(self, idx: SequenceType[int], score: int) -> None:
        off = self.offset(idx)
        if self._computed[off]:
            old = int(self._scores[off])
            if old != score:
                self._overwrite(idx, old, score)
            return
        self._scores[off] = score
        self._computed[off] = True

    @property
    def n_computed(self) -> int:
        return int(self._computed.sum())

    @property
    def nbytes(self) -> int:
        return self._scores.nbytes + self._computed.nbytes

    def to_array(self) -> Tuple[np.ndarray, np.ndarray]:
        """(scores, computed) reshaped to the table's N-d shape"""
        return (self._scores.reshape(self.shape).copy(),
                self._computed.reshape(self.shape).copy())


class SparseTable(_BaseTable):
    """Dict keyed by cursor tuple; only visited cells cost memory"""

    layout = "sparse"

    def __init__(self, shape: SequenceType[int]):
        super().__init__(shape)
        self._scores: Dict[Cursor, int] = {}

    def is_computed(self, idx: SequenceType[int]) -> bool:
        self._check(idx)
        return tuple(idx) in self._scores

    def get(self, idx: SequenceType[int]) -> Optional[int]:
        self._check(idx)
        return self._scores.get(tuple(idx))

    def set(self, idx: SequenceType[int], score: int) -> None:
        self._check(idx)
        key = tuple(idx)
        old = self._scores.get(key)
        if old is not None:
            if old != score:
                self._overwrite(idx, old, score)
            return
        self._scores[key] = int(score)

    @property
    def n_computed(self) -> int:
        return len(self._scores)

    @property
    def nbytes(self) -> int:
        # rough: key tuple + int + dict slot
        return len(self._scores) * (56 + 8 * len(self.shape) + 28 + 16)


def make_table(
    shape: SequenceType[int],
    layout: str = "auto",
    max_cells: Optional[int] = DEFAULT_MAX_CELLS,
    dense_limit: int = DEFAULT_DENSE_LIMIT,
):
    """
    Allocate a memo table for the given shape.

    Parameters:
    -----------
    shape : sequence of int
        (length_i + 1) for every sequence
    layout : str
        "dense", "sparse" or "auto" (dense up to ``dense_limit`` cells)
    max_cells : int or None
        Refuse tables with more cells than this; None disables the bound
    dense_limit : int
        Cell count above which "auto" switches to the sparse layout
    """
    cells = table_cells(shape)
    if max_cells is not None and cells > max_cells:
        raise InvalidInput(
            "Memo table would exceed the configured cell bound",
            suggestion="Align fewer or shorter sequences, or raise max_cells",
            context=f"shape={tuple(shape)}, cells={cells}, max_cells={max_cells}",
        )
    if layout == "auto":
        layout = "dense" if cells <= dense_limit else "sparse"
    if layout == "dense":
        return DenseTable(shape)
    if layout == "sparse":
        return SparseTable(shape)
    raise InvalidInput(f"Unknown table layout: {layout}",
                       suggestion="Use 'dense', 'sparse' or 'auto'")
