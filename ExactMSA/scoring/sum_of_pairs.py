"""
Sum-of-pairs column scoring
Scores are kept doubled (match=6, mismatch=-4, gap=-3) so every partial sum
stays an integer; divide the final total by ``scale`` exactly once.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence as SequenceType

import numpy as np

from ..errors import InvalidInput
from ..sequence import ALPHABET_SIZE, Symbol, encode_many


# Anything that turns one column (one symbol per sequence) into an int
ColumnScorer = Callable[[SequenceType[Symbol]], int]


def _is_int(x) -> bool:
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)


@dataclass(frozen=True)
class ScoringScheme:
    """Doubled pair scores and the factor that undoes the doubling"""
    match: int = 6
    mismatch: int = -4
    gap: int = -3
    scale: int = 2

    def __post_init__(self):
        for name in ("match", "mismatch", "gap", "scale"):
            if not _is_int(getattr(self, name)):
                raise InvalidInput(
                    f"Scoring value '{name}' must be an integer",
                    suggestion="Double fractional scores and set scale=2",
                    context=f"{name}={getattr(self, name)!r}",
                )
        if self.scale <= 0:
            raise InvalidInput("Scoring scale must be positive",
                               context=f"scale={self.scale}")

    def pair_matrix(self) -> np.ndarray:
        """(5 x 5) int64 matrix of pair scores indexed by symbol code"""
        mat = np.empty((ALPHABET_SIZE, ALPHABET_SIZE), dtype=np.int64)
        for a in Symbol:
            for b in Symbol:
                mat[a, b] = pair_score(a, b, self)
        return mat


DEFAULT_SCHEME = ScoringScheme()


def pair_score(a: Symbol, b: Symbol, scheme: ScoringScheme = DEFAULT_SCHEME) -> int:
    """Score of two symbols sharing a column"""
    if a == Symbol.GAP and b == Symbol.GAP:
        return 0
    if a == Symbol.GAP or b == Symbol.GAP:
        return scheme.gap
    if a != b:
        return scheme.mismatch
    return scheme.match


def column_score(symbols: SequenceType[Symbol],
                 scheme: ScoringScheme = DEFAULT_SCHEME) -> int:
    """Sum of pair scores over every unordered pair i < j in one column"""
    total = 0
    n = len(symbols)
    for i in range(n - 1):
        si = symbols[i]
        for j in range(i + 1, n):
            total += pair_score(si, symbols[j], scheme)
    return total


class SumOfPairsScorer:
    """
    Column scorer backed by a precomputed pair matrix.

    Instances are callables ``scorer(column) -> int`` and are what the
    solver uses unless another scorer is injected.
    """

    def __init__(self, scheme: Optional[ScoringScheme] = None):
        self.scheme = scheme or DEFAULT_SCHEME
        self._matrix = self.scheme.pair_matrix()
        # plain nested lists are faster than numpy for scalar lookups
        self._table = self._matrix.tolist()

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    def __call__(self, symbols: SequenceType[Symbol]) -> int:
        table = self._table
        total = 0
        n = len(symbols)
        for i in range(n - 1):
            row = table[symbols[i]]
            for j in range(i + 1, n):
                total += row[symbols[j]]
        return total

    def __repr__(self) -> str:
        s = self.scheme
        return (f"SumOfPairsScorer(match={s.match}, mismatch={s.mismatch}, "
                f"gap={s.gap}, scale={s.scale})")


def alignment_score(aligned: List[str],
                    scheme: ScoringScheme = DEFAULT_SCHEME) -> int:
    """
    Doubled SP score of a finished (gapped) alignment.

    Parameters:
    -----------
    aligned : list of str
        Aligned rows, all the same length. Non-ACGT characters count as gaps.
    scheme : ScoringScheme
        Pair scores

    Returns:
    --------
    int
        Sum of column scores, still multiplied by ``scheme.scale``
    """
    if not aligned:
        raise InvalidInput("No aligned rows supplied")
    lengths = {len(row) for row in aligned}
    if len(lengths) != 1:
        raise InvalidInput(
            "Aligned rows must all have the same length",
            suggestion="Pad rows with '-' to a common length",
            context=f"lengths={sorted(lengths)}",
        )

    scorer = SumOfPairsScorer(scheme)
    rows = encode_many(aligned)
    total = 0
    for col in range(len(rows[0])):
        total += scorer([row[col] for row in rows])
    return total
