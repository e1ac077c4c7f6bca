"""
Exact MSA Module
Column masks, memo tables and the N-dimensional sum-of-pairs solver
"""

from .masks import (
    ColumnMask,
    generate_masks,
    mask_matrix
)
from .table import (
    DenseTable,
    SparseTable,
    make_table,
    table_cells,
    DEFAULT_MAX_CELLS
)
from .solver import (
    MultiAligner,
    MSAScoreResult,
    predecessor,
    solve,
    solve_async,
    solve_many
)

__all__ = [
    "ColumnMask",
    "generate_masks",
    "mask_matrix",
    "DenseTable",
    "SparseTable",
    "make_table",
    "table_cells",
    "DEFAULT_MAX_CELLS",
    "MultiAligner",
    "MSAScoreResult",
    "predecessor",
    "solve",
    "solve_async",
    "solve_many"
]
