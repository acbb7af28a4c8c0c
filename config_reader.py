# config_reader.py
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from alphabet_and_plugboard import Alphabet
from debug import Debug
from errors import ConfigurationError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Role, Rotor

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Regex helpers
# ────────────────────────────────────────────────────────────────────────

_counts_re = re.compile(r"^(\d+)\s+(\d+)$")
_rotor_re = re.compile(r"^([^\s()*]+)\s+([^\s()*]+)\s*(.*)$")


@dataclass(slots=True)
class MachineConfig:
    """Everything needed to build a Machine: alphabet, slot and pawl
    counts, and the named rotors that may be inserted."""

    alphabet: Alphabet
    num_slots: int
    num_pawls: int
    rotors: Dict[str, Rotor] = field(default_factory=dict)

    def build_machine(self) -> Machine:
        return Machine(self.alphabet, self.num_slots, self.num_pawls, self.rotors.values())


# ────────────────────────────────────────────────────────────────────────
#  1. Line parsers
# ────────────────────────────────────────────────────────────────────────


def parse_alphabet(line: str) -> Alphabet:
    text = line.strip()
    if not text or len(text.split()) != 1:
        raise ConfigurationError(f"bad alphabet line {line.strip()!r}")
    return Alphabet(text)


def parse_counts(line: str) -> tuple[int, int]:
    m = _counts_re.match(line.strip())
    if not m:
        raise ConfigurationError(f"expected 'SLOTS PAWLS', got {line.strip()!r}")
    slots, pawls = int(m.group(1)), int(m.group(2))
    if slots < 2 or not (0 <= pawls < slots):
        raise ConfigurationError(f"bad slot/pawl counts {slots} {pawls}")
    return slots, pawls


def parse_rotor(line: str, alphabet: Alphabet) -> Rotor:
    """Parse 'NAME TYPE (cycles)...' where TYPE is M<notches>, N or R."""
    m = _rotor_re.match(line.strip())
    if not m:
        raise ConfigurationError(f"bad rotor description {line.strip()!r}")
    name, kind, cycles = m.groups()

    try:
        role = Role(kind[0])
    except ValueError:
        raise ConfigurationError(f"rotor {name}: unknown type {kind!r}") from None
    notches = kind[1:]
    if notches and role is not Role.MOVING:
        raise ConfigurationError(f"rotor {name}: type {kind!r} cannot carry notches")

    perm = Permutation(cycles, alphabet)
    return Rotor(name, perm, role, notches)


def _check_reflector(rotor: Rotor) -> None:
    perm = rotor.permutation
    if not perm.is_derangement() or any(len(c) != 2 for c in perm.cycles):
        raise ConfigurationError(f"reflector {rotor.name} must pair every symbol")


# ────────────────────────────────────────────────────────────────────────
#  2. Whole-file reader
# ────────────────────────────────────────────────────────────────────────


def read_config(lines: Iterable[str]) -> MachineConfig:
    """Read a machine description: alphabet line, 'SLOTS PAWLS' line, then
    one line per rotor. A line starting with '(' continues the cycles of
    the rotor above it. A blank line after the rotors ends the file."""
    it = iter(lines)
    header = (ln for ln in it if ln.strip())
    try:
        alphabet = parse_alphabet(next(header))
        slots, pawls = parse_counts(next(header))
    except StopIteration:
        raise ConfigurationError("configuration file truncated") from None

    rotors: Dict[str, Rotor] = {}
    last: Rotor | None = None
    for line in it:
        if not line.strip():
            if rotors:
                break
            continue
        if line.lstrip().startswith("("):
            if last is None:
                raise ConfigurationError("cycles given before any rotor")
            last.permutation.add_cycles(line)
            continue
        last = parse_rotor(line, alphabet)
        if last.name in rotors:
            raise ConfigurationError(f"duplicate rotor name {last.name!r}")
        rotors[last.name] = last
        debug.log("config", f"read {last!r}")

    for line in it:
        if line.strip():
            raise ConfigurationError(f"text after the rotor list: {line.strip()!r}")

    for rotor in rotors.values():
        if rotor.reflecting():
            _check_reflector(rotor)
    return MachineConfig(alphabet, slots, pawls, rotors)


def load_config(path: str | Path) -> MachineConfig:
    text = Path(path).read_text(encoding="utf-8")
    return read_config(text.splitlines())
