"""
ExactMSA
Exact sum-of-pairs multiple sequence alignment scoring for nucleotide sequences
"""

from .errors import MSAError, InvalidInput, LogicViolation, BudgetExceeded
from .sequence import Symbol, Sequence, encode
from .scoring import ScoringScheme, SumOfPairsScorer, column_score, alignment_score
from .msa_exact import MultiAligner, MSAScoreResult, generate_masks, solve, solve_async, solve_many

__version__ = "0.1.0"

__all__ = [
    "MSAError",
    "InvalidInput",
    "LogicViolation",
    "BudgetExceeded",
    "Symbol",
    "Sequence",
    "encode",
    "ScoringScheme",
    "SumOfPairsScorer",
    "column_score",
    "alignment_score",
    "MultiAligner",
    "MSAScoreResult",
    "generate_masks",
    "solve",
    "solve_async",
    "solve_many"
]
