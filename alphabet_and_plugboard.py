# alphabet_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from debug import Debug
from errors import ConfigurationError, PlugboardError

if TYPE_CHECKING:
    from permutation import Permutation

debug = Debug()

# symbols that delimit cycles and settings lines
RESERVED = frozenset("*()")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered set of distinct symbols, numbered 0..size-1."""

    def __init__(self, symbols: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not symbols:
            raise ConfigurationError("alphabet must not be empty")
        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch.isspace() or ch in RESERVED:
                raise ConfigurationError(f"Symbol {ch!r} cannot be used in an alphabet")
            if ch in self.symbol_to_index:
                raise ConfigurationError(f"Duplicate symbol {ch!r} in alphabet")
            self.symbol_to_index[ch] = i

    def size(self) -> int:
        return len(self.symbols)

    __len__ = size

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index

    __contains__ = contains

    # integer index → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise IndexError(f"Index {index} out of range 0–{hi}")
        return self.symbols[index]

    # symbol → integer index
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise LookupError(f"Symbol {symbol!r} not in alphabet") from None

    def first(self) -> str:
        return self.symbols[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols}>"


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Symmetric swap of symbol pairs; identity when no pairs are given."""

    def __init__(self, alphabet: Alphabet, pairs: Iterable[str | tuple[str, str]] = ()) -> None:
        self.alphabet: Alphabet = alphabet
        self.mapping: list[int] = list(range(alphabet.size()))
        used: set[str] = set()

        for raw in pairs:
            if len(raw) != 2:
                raise PlugboardError(f"Plugboard cycle {''.join(raw)!r} must be exactly 2 symbols")
            a, b = raw
            if a == b:
                raise PlugboardError(f"Plugboard cannot map a symbol to itself: {a}")
            if a in used or b in used:
                dup = a if a in used else b
                raise PlugboardError(f"Symbol {dup!r} already used in plugboard")

            ia, ib = alphabet.to_index(a), alphabet.to_index(b)
            self.mapping[ia], self.mapping[ib] = ib, ia
            used.update((a, b))

    @classmethod
    def from_permutation(cls, perm: "Permutation") -> "Plugboard":
        """Build from a permutation whose cycles are pairs. Two singleton
        cycles in a row form one pair, so "(A)(Z)" plugs A to Z."""
        pairs = []
        pending = ""
        for cycle in perm.cycles:
            if len(cycle) == 1:
                if pending:
                    pairs.append(pending + cycle)
                    pending = ""
                else:
                    pending = cycle
                continue
            if pending:
                raise PlugboardError(f"Plugboard symbol ({pending}) has no partner")
            if len(cycle) != 2:
                raise PlugboardError(f"Plugboard cycle ({cycle}) is not a pair")
            pairs.append(cycle)
        if pending:
            raise PlugboardError(f"Plugboard symbol ({pending}) has no partner")
        return cls(perm.alphabet, pairs)

    def swap(self, signal: int) -> int:
        mapped = self.mapping[signal]
        debug.log("plugboard", f"{signal}->{mapped}")
        return mapped

    forward = swap        # alias: signal in
    backward = swap       # alias: signal out

    def pairs(self) -> list[str]:
        to_symbol = self.alphabet.to_symbol
        return [to_symbol(i) + to_symbol(j) for i, j in enumerate(self.mapping) if i < j]

    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs())}>"
