import itertools

import numpy as np
import pytest

from ExactMSA.errors import InvalidInput
from ExactMSA.scoring import (
    ScoringScheme,
    SumOfPairsScorer,
    alignment_score,
    column_score,
    pair_score,
)
from ExactMSA.sequence import Symbol

A, C, G, T, GAP = Symbol.A, Symbol.C, Symbol.G, Symbol.T, Symbol.GAP


class TestPairScore:
    def test_reference_constants(self):
        assert pair_score(A, A) == 6
        assert pair_score(A, C) == -4
        assert pair_score(A, GAP) == -3
        assert pair_score(GAP, T) == -3
        assert pair_score(GAP, GAP) == 0

    def test_custom_scheme(self):
        scheme = ScoringScheme(match=2, mismatch=-1, gap=-2, scale=1)
        assert pair_score(G, G, scheme) == 2
        assert pair_score(G, T, scheme) == -1
        assert pair_score(G, GAP, scheme) == -2


class TestColumnScore:
    def test_all_match_column(self):
        # 6 pairs x 6
        assert column_score([A, A, A, A]) == 36

    def test_mixed_column(self):
        # A-A match, two A-gap pairs
        assert column_score([A, A, GAP]) == 6 - 3 - 3

    def test_all_gap_column_is_zero(self):
        assert column_score([GAP, GAP, GAP]) == 0

    def test_short_columns(self):
        assert column_score([]) == 0
        assert column_score([C]) == 0

    def test_scorer_matches_column_score(self):
        scorer = SumOfPairsScorer()
        for col in itertools.product(list(Symbol), repeat=3):
            assert scorer(col) == column_score(col)

    def test_pair_matrix(self):
        mat = SumOfPairsScorer().matrix
        assert mat.shape == (5, 5)
        np.testing.assert_array_equal(mat, mat.T)
        assert mat[GAP, GAP] == 0
        assert mat[A, A] == 6


class TestScheme:
    def test_rejects_fractional_scores(self):
        with pytest.raises(InvalidInput, match="integer"):
            ScoringScheme(match=3.0)

    def test_rejects_bad_scale(self):
        with pytest.raises(InvalidInput, match="positive"):
            ScoringScheme(scale=0)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            ScoringScheme(gap="x")


class TestAlignmentScore:
    def test_identical_rows(self):
        assert alignment_score(["AA", "AA"]) == 12

    def test_gapped_rows(self):
        assert alignment_score(["ACGT", "A-GT"]) == 6 - 3 + 6 + 6

    def test_unequal_rows(self):
        with pytest.raises(InvalidInput, match="same length"):
            alignment_score(["AC", "A"])

    def test_empty(self):
        with pytest.raises(InvalidInput):
            alignment_score([])
