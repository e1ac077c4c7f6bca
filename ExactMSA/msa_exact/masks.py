"""
Column masks
A mask says, for one alignment column, which sequences advance (1) and which
contribute a gap (0). The all-zero mask is never produced.
"""

from __future__ import annotations
from typing import List, Tuple

import numpy as np

from ..errors import InvalidInput

ColumnMask = Tuple[int, ...]


def _all_vectors(n: int) -> List[ColumnMask]:
    """Every binary vector of length n, built one position at a time"""
    if n == 0:
        return [()]
    vectors = []
    for partial in _all_vectors(n - 1):
        vectors.append(partial + (1,))
        vectors.append(partial + (0,))
    return vectors


def generate_masks(n: int) -> List[ColumnMask]:
    """
    All 2^n - 1 non-empty column masks for n sequences.

    Order is descending binary, e.g. n=2 -> [(1, 1), (1, 0), (0, 1)].
    n=0 gives an empty list (its only vector is the all-zero one).
    """
    if n < 0:
        raise InvalidInput("Mask length must be non-negative", context=f"n={n}")
    zero = (0,) * n
    return [v for v in _all_vectors(n) if v != zero]


def mask_matrix(n: int) -> np.ndarray:
    """Masks stacked into a read-only (2^n - 1, n) int8 array"""
    masks = generate_masks(n)
    arr = np.array(masks, dtype=np.int8).reshape(len(masks), n)
    arr.setflags(write=False)
    return arr
