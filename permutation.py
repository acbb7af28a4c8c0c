# permutation.py
from __future__ import annotations

import re
from collections.abc import Iterable

from alphabet_and_plugboard import Alphabet
from debug import Debug
from errors import ConfigurationError

debug = Debug()

_cycle_re = re.compile(r"\(([^\s()*]+)\)")
_cycles_text_re = re.compile(r"\s*(\([^\s()*]+\)\s*)*")


class Permutation:
    """Substitution over the indices of an alphabet, given in cycle
    notation. Symbols that belong to no cycle map to themselves.

    `cycles` may be a string such as "(AELT) (BKNW)" or an iterable of
    cycle strings ("AELT", "BKNW"). More cycles can be added later with
    `add_cycle`, e.g. when a wiring continues over several config lines.
    """

    def __init__(self, cycles: str | Iterable[str] = "", alphabet: Alphabet | None = None) -> None:
        self.alphabet: Alphabet = alphabet if alphabet is not None else Alphabet()
        self.size = self.alphabet.size()

        # integer lookup tables, identity until a cycle says otherwise
        self._fwd = list(range(self.size))
        self._rev = list(range(self.size))
        self._mapped = [False] * self.size
        self.cycles: list[str] = []

        if isinstance(cycles, str):
            self.add_cycles(cycles)
        else:
            for cycle in cycles:
                self.add_cycle(cycle)

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a classical wiring string, where wiring[i] is the
        image of alphabet[i]."""
        if sorted(wiring) != sorted(alphabet.symbols):
            raise ConfigurationError("wiring must be a permutation of alphabet")

        seen: set[str] = set()
        cycles: list[str] = []
        for start in alphabet.symbols:
            if start in seen:
                continue
            cycle = []
            ch = start
            while ch not in seen:
                seen.add(ch)
                cycle.append(ch)
                ch = wiring[alphabet.to_index(ch)]
            cycles.append("".join(cycle))
        return cls(cycles, alphabet)

    # ── building ─────────────────────────────────────────────────
    def add_cycle(self, cycle: str) -> None:
        """Add the cycle c0->c1->...->cm->c0, where `cycle` is c0c1...cm,
        optionally wrapped in parentheses."""
        body = cycle.strip()
        if body.startswith("(") and body.endswith(")"):
            body = body[1:-1]
        if not body or any(ch.isspace() or ch in "()*" for ch in body):
            raise ConfigurationError(f"Malformed cycle {cycle!r}")

        indices = [self.alphabet.to_index(ch) for ch in body]
        if len(set(indices)) != len(indices):
            raise ConfigurationError(f"Cycle {cycle!r} repeats a symbol")
        for ch, i in zip(body, indices):
            if self._mapped[i]:
                raise ConfigurationError(f"Symbol {ch!r} appears in more than one cycle")

        for cur, nxt in zip(indices, indices[1:] + indices[:1]):
            self._fwd[cur] = nxt
            self._rev[nxt] = cur
            self._mapped[cur] = True
        self.cycles.append(body)
        debug.log("permutation", f"cycle ({body})")

    def add_cycles(self, text: str) -> None:
        """Add every parenthesised cycle in `text`, e.g. "(AE) (BN)"."""
        if not _cycles_text_re.fullmatch(text):
            raise ConfigurationError(f"Malformed cycles {text.strip()!r}")
        for body in _cycle_re.findall(text):
            self.add_cycle(body)

    # ── lookups ──────────────────────────────────────────────────
    def wrap(self, p: int) -> int:
        """Return p modulo the alphabet size, never negative."""
        return p % self.size

    def apply(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    def apply_symbol(self, p: str) -> str:
        return self.alphabet.to_symbol(self.apply(self.alphabet.to_index(p)))

    def invert_symbol(self, c: str) -> str:
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(c)))

    def is_derangement(self) -> bool:
        """True iff every index is explicitly mapped to a different one."""
        return all(self._mapped[i] and self._fwd[i] != i for i in range(self.size))

    def __repr__(self) -> str:
        return "<Permutation " + " ".join(f"({c})" for c in self.cycles) + ">"
