"""
Sequence Module
Nucleotide symbol model and string encoding
"""

from .alphabet import (
    Symbol,
    Sequence,
    ALPHABET_SIZE,
    encode,
    encode_many,
    encode_symbol,
    decode
)

__all__ = [
    "Symbol",
    "Sequence",
    "ALPHABET_SIZE",
    "encode",
    "encode_many",
    "encode_symbol",
    "decode"
]
