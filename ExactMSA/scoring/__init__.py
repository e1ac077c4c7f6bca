"""
Scoring Module
Sum-of-pairs pair and column scores
"""

from .sum_of_pairs import (
    ColumnScorer,
    ScoringScheme,
    DEFAULT_SCHEME,
    SumOfPairsScorer,
    pair_score,
    column_score,
    alignment_score
)

__all__ = [
    "ColumnScorer",
    "ScoringScheme",
    "DEFAULT_SCHEME",
    "SumOfPairsScorer",
    "pair_score",
    "column_score",
    "alignment_score"
]
