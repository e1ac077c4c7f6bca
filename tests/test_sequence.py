import numpy as np
import pytest

from ExactMSA.sequence import Sequence, Symbol, decode, encode, encode_many


class TestEncode:
    def test_encode_roundtrip_symbols(self):
        seq = encode("AATTATGG")
        A, T, G = Symbol.A, Symbol.T, Symbol.G
        assert list(seq) == [A, A, T, T, A, T, G, G]
        assert len(seq) == 8
        assert decode(seq) == "AATTATGG"

    def test_unrecognised_characters_are_gaps(self):
        # never an error path
        seq = encode("ANA-X?")
        assert list(seq) == [Symbol.A, Symbol.GAP, Symbol.A,
                             Symbol.GAP, Symbol.GAP, Symbol.GAP]

    def test_lower_case_is_not_a_base(self):
        assert all(s == Symbol.GAP for s in encode("acgt"))

    def test_empty(self):
        seq = encode("")
        assert len(seq) == 0
        assert str(seq) == ""

    def test_codes(self):
        codes = encode("ACGT-").codes
        assert codes.dtype == np.int8
        np.testing.assert_array_equal(codes, [0, 1, 2, 3, 4])
        with pytest.raises(ValueError):
            codes[0] = 3


class TestSequenceModel:
    def test_immutable(self):
        seq = encode("ACGT")
        with pytest.raises(AttributeError):
            seq.symbols = ()

    def test_encode_many_passes_sequences_through(self):
        pre = encode("GG")
        out = encode_many(["AC", pre])
        assert out[1] is pre
        assert isinstance(out[0], Sequence)
        assert str(out[0]) == "AC"

    def test_symbol_str(self):
        assert str(Symbol.GAP) == "-"
        assert str(Symbol.C) == "C"
