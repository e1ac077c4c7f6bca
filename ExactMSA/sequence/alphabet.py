"""
Nucleotide symbols and sequences
- 4 bases + gap marker, fixed codes A=0, C=1, G=2, T=3, GAP=4
- Unrecognised characters are read as gaps, never rejected
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Tuple, Union

import numpy as np


class Symbol(IntEnum):
    """One alignment symbol"""
    A = 0
    C = 1
    G = 2
    T = 3
    GAP = 4

    def __str__(self) -> str:
        return _SYMBOL_CHARS[self]


_SYMBOL_CHARS = {
    Symbol.A: "A",
    Symbol.C: "C",
    Symbol.G: "G",
    Symbol.T: "T",
    Symbol.GAP: "-",
}

# case-sensitive on purpose: 'a' is not a base here
_CHAR_TO_SYMBOL = {
    "A": Symbol.A,
    "C": Symbol.C,
    "G": Symbol.G,
    "T": Symbol.T,
}

ALPHABET_SIZE = len(Symbol)


@dataclass(frozen=True)
class Sequence:
    """Immutable, 0-indexed run of symbols"""
    symbols: Tuple[Symbol, ...]

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, i: int) -> Symbol:
        return self.symbols[i]

    def __iter__(self):
        return iter(self.symbols)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.symbols)

    @property
    def codes(self) -> np.ndarray:
        """Symbol codes as a read-only int8 array"""
        arr = np.fromiter((int(s) for s in self.symbols), dtype=np.int8,
                          count=len(self.symbols))
        arr.setflags(write=False)
        return arr


def encode_symbol(ch: str) -> Symbol:
    return _CHAR_TO_SYMBOL.get(ch, Symbol.GAP)


def encode(raw: str) -> Sequence:
    """
    Convert a raw string into a Sequence.

    'A', 'C', 'G' and 'T' map to their base; every other character
    (lower case, 'N', '-', ...) maps to Symbol.GAP.
    """
    return Sequence(tuple(encode_symbol(ch) for ch in raw))


def encode_many(raws: Iterable[Union[str, Sequence]]) -> List[Sequence]:
    """Encode a batch; already encoded Sequences pass through untouched"""
    return [r if isinstance(r, Sequence) else encode(r) for r in raws]


def decode(seq: Sequence) -> str:
    return str(seq)
