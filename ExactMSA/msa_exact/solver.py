"""
Exact Multiple Sequence Alignment score (sum-of-pairs)
- N-dimensional DP over cursor tuples, 2^N - 1 column masks per step
- Memoised recursion or layer-by-layer iteration (same scores)
- Async and threaded wrappers for scoring several inputs
"""

from __future__ import annotations
import asyncio
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Literal, Optional, Sequence as SequenceType, Tuple, Union

from ..errors import BudgetExceeded, InvalidInput, LogicViolation
from ..scoring import ColumnScorer, DEFAULT_SCHEME, ScoringScheme, SumOfPairsScorer
from ..sequence import Sequence, Symbol, encode_many
from .masks import ColumnMask, generate_masks
from .table import DEFAULT_MAX_CELLS, DEFAULT_DENSE_LIMIT, Cursor, make_table, table_cells

Boundary = Literal["reference", "global"]
Strategy = Literal["auto", "recursive", "iterative"]

# "auto" stays recursive while the deepest call chain is shorter than this
RECURSION_DEPTH_LIMIT = 500

_BOUNDARIES = ("reference", "global")
_STRATEGIES = ("auto", "recursive", "iterative")


@dataclass
class MSAScoreResult:
    """Optimal score of one exact alignment run plus run statistics"""
    score: float
    raw_score: int
    n_sequences: int
    lengths: Tuple[int, ...]
    n_masks: int
    n_cells: int
    evaluated: int
    boundary: str
    strategy: str
    table_layout: str
    elapsed: float

    def __str__(self) -> str:
        return (
            f"Optimal SP Score: {self.score}\n"
            f"Raw (scaled) score: {self.raw_score}\n"
            f"Sequences: {self.n_sequences} {list(self.lengths)}\n"
            f"Column masks: {self.n_masks}\n"
            f"Table cells: {self.n_cells} ({self.table_layout})\n"
            f"Subproblems evaluated: {self.evaluated}\n"
            f"Boundary: {self.boundary}, Strategy: {self.strategy}\n"
            f"Elapsed: {self.elapsed:.4f}s\n"
        )

    def view(self) -> None:
        print(str(self))


class _SolveContext:
    """Everything one solve call owns; never shared between calls"""

    def __init__(self, seqs: List[Sequence], masks: List[ColumnMask], table,
                 scorer: ColumnScorer, reference: bool,
                 max_evaluations: Optional[int], time_limit: Optional[float]):
        self.seqs = seqs
        self.masks = masks
        self.table = table
        self.scorer = scorer
        self.reference = reference
        self.max_evaluations = max_evaluations
        self.time_limit = time_limit
        self.evaluated = 0
        self.start = time.perf_counter()

    def elapsed(self) -> float:
        return time.perf_counter() - self.start

    def tick(self) -> None:
        self.evaluated += 1
        if self.max_evaluations is not None and self.evaluated > self.max_evaluations:
            raise BudgetExceeded(
                f"Evaluation budget of {self.max_evaluations} subproblems exhausted",
                evaluated=self.evaluated - 1, elapsed=self.elapsed(),
            )
        if self.time_limit is not None and self.elapsed() > self.time_limit:
            raise BudgetExceeded(
                f"Time limit of {self.time_limit}s exceeded",
                evaluated=self.evaluated, elapsed=self.elapsed(),
            )

    def is_base(self, cursor: Cursor) -> bool:
        # reference: any exhausted sequence ends the chain with score 0
        if self.reference:
            return 0 in cursor
        return not any(cursor)

    def column(self, cursor: Cursor, mask: ColumnMask) -> List[Symbol]:
        return [
            seq[c - 1] if m else Symbol.GAP
            for seq, c, m in zip(self.seqs, cursor, mask)
        ]


def predecessor(cursor: Cursor, mask: ColumnMask) -> Optional[Cursor]:
    """cursor - mask, or None when a coordinate would drop below zero"""
    prev = []
    for c, m in zip(cursor, mask):
        x = c - m
        if x < 0:
            return None
        prev.append(x)
    return tuple(prev)


def _cursors_with_sum(upper: Tuple[int, ...], total: int, low: int = 0) -> Iterator[Cursor]:
    """Cursors c with low <= c_i <= upper_i and sum(c) == total"""
    if not upper:
        if total == 0:
            yield ()
        return
    head, tail = upper[0], upper[1:]
    tail_max = sum(tail)
    tail_min = low * len(tail)
    for first in range(max(low, total - tail_max), min(head, total - tail_min) + 1):
        for rest in _cursors_with_sum(tail, total - first, low):
            yield (first,) + rest


class MultiAligner:
    """Exact N-sequence sum-of-pairs aligner (score only)"""

    def __init__(
        self,
        scheme: Optional[ScoringScheme] = None,
        scorer: Optional[ColumnScorer] = None,
        boundary: Boundary = "reference",
        strategy: Strategy = "auto",
        table_layout: str = "auto",
        max_cells: Optional[int] = DEFAULT_MAX_CELLS,
        max_evaluations: Optional[int] = None,
        time_limit: Optional[float] = None,
        dense_limit: int = DEFAULT_DENSE_LIMIT,
    ):
        """
        Initialize aligner

        Parameters:
        -----------
        scheme : ScoringScheme, optional
            Doubled pair scores and scale (default match=6, mismatch=-4, gap=-3)
        scorer : callable, optional
            Column scorer ``scorer(column) -> int``; defaults to a
            SumOfPairsScorer built from ``scheme``
        boundary : str
            "reference" (default): a cursor with any zero coordinate scores 0
            and every subproblem is floored at 0.
            "global": only the empty prefix scores 0; leading gaps are paid for.
        strategy : str
            "recursive", "iterative" or "auto"
        table_layout : str
            "dense", "sparse" or "auto"
        max_cells : int or None
            Upper bound on memo table cells (InvalidInput above it)
        max_evaluations : int or None
            Upper bound on evaluated subproblems (BudgetExceeded above it)
        time_limit : float or None
            Wall-clock limit in seconds (BudgetExceeded above it)
        dense_limit : int
            Cell count above which "auto" layout goes sparse
        """
        if boundary not in _BOUNDARIES:
            raise InvalidInput(f"Unknown boundary: {boundary}",
                               suggestion="Use 'reference' or 'global'")
        if strategy not in _STRATEGIES:
            raise InvalidInput(f"Unknown strategy: {strategy}",
                               suggestion="Use 'auto', 'recursive' or 'iterative'")
        if max_evaluations is not None and max_evaluations < 0:
            raise InvalidInput("max_evaluations must be non-negative")
        if time_limit is not None and time_limit <= 0:
            raise InvalidInput("time_limit must be positive")

        if scheme is None:
            scheme = getattr(scorer, "scheme", None) or DEFAULT_SCHEME
        self.scheme = scheme
        self.scorer = scorer if scorer is not None else SumOfPairsScorer(scheme)
        self.boundary = boundary
        self.strategy = strategy
        self.table_layout = table_layout
        self.max_cells = max_cells
        self.max_evaluations = max_evaluations
        self.time_limit = time_limit
        self.dense_limit = dense_limit

    def _resolve_strategy(self, lengths: Tuple[int, ...]) -> str:
        depth = sum(lengths)
        if self.strategy == "auto":
            return "recursive" if depth < RECURSION_DEPTH_LIMIT else "iterative"
        if self.strategy == "recursive" and depth >= RECURSION_DEPTH_LIMIT:
            raise InvalidInput(
                "Inputs too long for the recursive strategy",
                suggestion="Use strategy='iterative'",
                context=f"recursion depth {depth} >= {RECURSION_DEPTH_LIMIT}",
            )
        return self.strategy

    # -------------------------
    # Search
    # -------------------------
    def _optimal_recursive(self, ctx: _SolveContext, cursor: Cursor) -> int:
        if ctx.is_base(cursor):
            return 0
        cached = ctx.table.get(cursor)
        if cached is not None:
            return cached
        ctx.tick()

        best = 0 if ctx.reference else None
        for mask in ctx.masks:
            prev = predecessor(cursor, mask)
            if prev is None:
                continue
            candidate = self._optimal_recursive(ctx, prev) + ctx.scorer(ctx.column(cursor, mask))
            if best is None or candidate > best:
                best = candidate

        ctx.table.set(cursor, best)
        return best

    def _lookup(self, ctx: _SolveContext, cursor: Cursor) -> int:
        if ctx.is_base(cursor):
            return 0
        value = ctx.table.get(cursor)
        if value is None:
            raise LogicViolation("Predecessor read before it was computed",
                                 context=f"cursor={cursor}")
        return value

    def _optimal_iterative(self, ctx: _SolveContext, target: Cursor,
                           verbose: bool = False) -> int:
        n = len(target)
        # reference: cursors with a zero coordinate are base cases, skip them
        low = 1 if ctx.reference else 0
        first_layer = low * n if ctx.reference else 1
        last_layer = sum(target)
        n_layers = max(1, last_layer - first_layer + 1)

        if verbose:
            print("Computing ", end="")

        for layer in range(first_layer, last_layer + 1):
            for cursor in _cursors_with_sum(target, layer, low):
                ctx.tick()
                best = 0 if ctx.reference else None
                for mask in ctx.masks:
                    prev = predecessor(cursor, mask)
                    if prev is None:
                        continue
                    candidate = self._lookup(ctx, prev) + ctx.scorer(ctx.column(cursor, mask))
                    if best is None or candidate > best:
                        best = candidate
                ctx.table.set(cursor, best)

            if verbose and (layer - first_layer + 1) % max(1, n_layers // 10) == 0:
                print("█", end="", flush=True)

        if verbose:
            print(" 100.0%")

        return self._lookup(ctx, target)

    # -------------------------
    # Public API
    # -------------------------
    def align(
        self,
        sequences: SequenceType[Union[str, Sequence]],
        score_only: bool = False,
        verbose: bool = False,
    ) -> Union[MSAScoreResult, float]:
        """
        Compute the optimal sum-of-pairs alignment score

        Parameters:
        -----------
        sequences : list of str or Sequence
            One or more nucleotide sequences; non-ACGT characters are gaps
        score_only : bool
            If True, return only the (unscaled) score as float
        verbose : bool
            If True, print progress

        Returns:
        --------
        MSAScoreResult or float
        """
        if sequences is None or len(sequences) == 0:
            raise InvalidInput(
                "At least one sequence is required",
                suggestion="Pass a non-empty list of sequences",
            )

        seqs = encode_many(sequences)
        lengths = tuple(len(s) for s in seqs)
        shape = tuple(length + 1 for length in lengths)
        strategy = self._resolve_strategy(lengths)

        if verbose:
            print("\n" + "=" * 70)
            print("EXACT MULTIPLE SEQUENCE ALIGNMENT (SUM-OF-PAIRS)")
            print("=" * 70)
            for i, s in enumerate(seqs):
                print(f"Sequence {i + 1}: {s}")
            print(f"Boundary: {self.boundary}, Strategy: {strategy}")
            print(f"Scorer: {self.scorer!r}")
            print("=" * 70)
            print("\nInitializing memo table...")

        table = make_table(shape, layout=self.table_layout,
                           max_cells=self.max_cells, dense_limit=self.dense_limit)
        masks = generate_masks(len(seqs))

        if verbose:
            print(f"✓ Table initialized: {' x '.join(str(d) for d in shape)} "
                  f"({table.layout}), {len(masks)} column masks")

        ctx = _SolveContext(
            seqs, masks, table, self.scorer,
            reference=(self.boundary == "reference"),
            max_evaluations=self.max_evaluations,
            time_limit=self.time_limit,
        )

        if strategy == "recursive":
            raw = self._optimal_recursive(ctx, lengths)
        else:
            raw = self._optimal_iterative(ctx, lengths, verbose)

        score = float(raw) / self.scheme.scale

        if verbose:
            print(f"\nALIGNMENT SCORE")
            print("=" * 70)
            print(f"Score: {score:.4f} (raw {raw})")
            print(f"Subproblems: {ctx.evaluated} of {table_cells(shape)} cells")
            print(f"Elapsed: {ctx.elapsed():.4f}s")
            print("=" * 70 + "\n")

        if score_only:
            return score

        return MSAScoreResult(
            score=score,
            raw_score=int(raw),
            n_sequences=len(seqs),
            lengths=lengths,
            n_masks=len(masks),
            n_cells=table.size,
            evaluated=ctx.evaluated,
            boundary=self.boundary,
            strategy=strategy,
            table_layout=table.layout,
            elapsed=ctx.elapsed(),
        )


# MAIN CONVENIENCE FUNCTION
def solve(
    sequences: SequenceType[Union[str, Sequence]],
    scheme: Optional[ScoringScheme] = None,
    boundary: Boundary = "reference",
    strategy: Strategy = "auto",
    verbose: bool = False,
    **kwargs,
) -> float:
    """
    Optimal sum-of-pairs score of aligning ``sequences``

    Examples:
    ---------
    >>> solve(["AA", "AA", "AA", "AA"])
    36.0
    >>> solve(["AATTATGG", "ACATTGTTG", "GCCAGGAGG", "AATTTTGAGG"])
    45.0
    """
    aligner = MultiAligner(scheme=scheme, boundary=boundary, strategy=strategy, **kwargs)
    return aligner.align(sequences, score_only=True, verbose=verbose)


async def solve_async(sequences: SequenceType[Union[str, Sequence]], **kwargs) -> float:
    """
    Async version: runs solve() in the default thread pool.
    (Keeps an event loop responsive; does not speed up the search.)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: solve(sequences, **kwargs))


def solve_many(
    batch: SequenceType[SequenceType[Union[str, Sequence]]],
    n_jobs: Optional[int] = None,
    **kwargs,
) -> List[float]:
    """
    Score several independent inputs in a thread pool.

    Every input gets its own table; results come back in input order.
    n_jobs None/0 = all CPUs.
    """
    if n_jobs is None or n_jobs <= 0:
        n_jobs = os.cpu_count() or 1
    with ThreadPoolExecutor(max_workers=n_jobs) as ex:
        return list(ex.map(lambda seqs: solve(seqs, **kwargs), batch))
