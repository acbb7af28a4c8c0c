# wheels.py
from __future__ import annotations

from typing import Dict

from alphabet_and_plugboard import Alphabet
from config_reader import MachineConfig
from permutation import Permutation
from rotor_and_reflector import Rotor

# ────────────────────────────────────────────────────────────────────────
#  Historical wheel database
# ────────────────────────────────────────────────────────────────────────

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# name: (wiring, notches)
MOVING: Dict[str, tuple[str, str]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
}

# thin fourth-slot wheels of the naval machine
FIXED: Dict[str, str] = {
    "Beta":  "LEYJVCNIXWPBQMDRTAKZGFUHOS",
    "Gamma": "FSOKANUERHMBTIYCWLQPZXVGJD",
}

REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}


def historical_rotors(alphabet: Alphabet | None = None) -> Dict[str, Rotor]:
    """Fresh Rotor objects for every historical wheel, keyed by name."""
    alpha = alphabet if alphabet is not None else Alphabet(Alpha26)
    rotors: Dict[str, Rotor] = {}
    for name, (wiring, notches) in MOVING.items():
        rotors[name] = Rotor.moving(name, Permutation.from_wiring(wiring, alpha), notches)
    for name, wiring in FIXED.items():
        rotors[name] = Rotor.fixed(name, Permutation.from_wiring(wiring, alpha))
    for name, wiring in REFLECTORS.items():
        rotors[name] = Rotor.reflector(name, Permutation.from_wiring(wiring, alpha))
    return rotors


def historical_config(num_slots: int = 4, num_pawls: int = 3) -> MachineConfig:
    """Three-rotor service machine by default; 5 slots / 3 pawls gives
    the naval layout with a fixed thin wheel next to the reflector."""
    alpha = Alphabet(Alpha26)
    return MachineConfig(alpha, num_slots, num_pawls, historical_rotors(alpha))
