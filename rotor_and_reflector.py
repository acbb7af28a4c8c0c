# rotor_and_reflector.py
from __future__ import annotations

import enum

from alphabet_and_plugboard import Alphabet
from debug import Debug
from errors import ConfigurationError
from permutation import Permutation

debug = Debug()


class Role(enum.Enum):
    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


class Rotor:
    """A substitution unit in one slot of the machine.

    Reflectors, fixed rotors and moving rotors share this class and differ
    only in `role`: only moving rotors advance and have notches, and a
    reflector keeps position 0 and the default ring for good.
    """

    def __init__(self, name: str, permutation: Permutation, role: Role = Role.FIXED,
                 notches: str = "") -> None:
        if notches and role is not Role.MOVING:
            raise ConfigurationError(f"Rotor {name}: only moving rotors have notches")

        self.name = name
        self.permutation = permutation
        self.role = role
        self.alphabet: Alphabet = permutation.alphabet
        self.size = permutation.size

        for ch in notches:
            if ch not in self.alphabet:
                raise LookupError(f"Rotor {name}: notch {ch!r} not in alphabet")
        self.notches = frozenset(notches)

        self.position = 0
        self.ring_setting = self.alphabet.first()

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, Role.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, Role.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, Role.REFLECTOR)

    # ── capabilities ──────────────────────────────────────────────
    def reflecting(self) -> bool:
        return self.role is Role.REFLECTOR

    def rotates(self) -> bool:
        return self.role is Role.MOVING

    def pawl_count(self) -> int:
        return 1 if self.rotates() else 0

    # ── position & ring ───────────────────────────────────────────
    def set_position(self, posn: int | str) -> None:
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)
        elif not (0 <= posn < self.size):
            raise IndexError(f"Rotor {self.name}: position {posn} out of range 0–{self.size - 1}")
        if self.reflecting() and posn != 0:
            raise ConfigurationError("reflector has only one position")
        self.position = posn

    def set_ring(self, ring: str) -> None:
        self.alphabet.to_index(ring)
        if self.reflecting() and ring != self.alphabet.first():
            raise ConfigurationError("reflector has only one ring setting")
        self.ring_setting = ring

    def reset(self) -> None:
        self.position = 0
        self.ring_setting = self.alphabet.first()

    def window(self) -> str:
        """Symbol currently showing in the rotor window."""
        return self.alphabet.to_symbol(self.position)

    # ── stepping ──────────────────────────────────────────────────
    def at_notch(self) -> bool:
        return self.rotates() and self.window() in self.notches

    def advance(self) -> None:
        if not self.rotates():
            return
        self.position = self.permutation.wrap(self.position + 1)
        debug.log("rotor", f"{self.name} -> {self.window()}")

    # ── signal paths ──────────────────────────────────────────────
    def _offset(self) -> int:
        return self.permutation.wrap(self.position - self.alphabet.to_index(self.ring_setting))

    def convert_forward(self, p: int) -> int:
        offset = self._offset()
        mapped = self.permutation.apply(self.permutation.wrap(p + offset))
        return self.permutation.wrap(mapped - offset)

    def convert_backward(self, e: int) -> int:
        offset = self._offset()
        mapped = self.permutation.invert(self.permutation.wrap(e + offset))
        return self.permutation.wrap(mapped - offset)

    # ── niceties ──────────────────────────────────────────────────
    def __repr__(self) -> str:
        return f"<Rotor {self.name} {self.role.name} pos={self.window()} ring={self.ring_setting}>"
