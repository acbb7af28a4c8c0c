# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from copy import deepcopy

from alphabet_and_plugboard import Alphabet, Plugboard
from debug import Debug
from errors import ConfigurationError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A rotor machine with `num_slots` slots, `num_pawls` of them holding
    moving rotors. Slot 0 is the reflector; the last slot is rightmost and
    sees the keyboard signal first.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_slots: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_slots < 2:
            raise ConfigurationError(f"need at least 2 rotor slots, got {num_slots}")
        if not (0 <= num_pawls < num_slots):
            raise ConfigurationError(f"pawl count {num_pawls} must be in 0–{num_slots - 1}")

        self.alphabet = alphabet
        self.num_slots = num_slots
        self.num_pawls = num_pawls

        self.inventory: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in self.inventory:
                raise ConfigurationError(f"duplicate rotor name {rotor.name!r}")
            if rotor.alphabet != alphabet:
                raise ConfigurationError(f"rotor {rotor.name} uses a different alphabet")
            self.inventory[rotor.name] = rotor

        self.slots: list[Rotor] = []
        self.plugboard = Plugboard(alphabet)

    # ── assembly ────────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with copies of the named rotors, left to right;
        names[0] must be a reflector. Every rotor starts at its 0
        position with the default ring."""
        if len(names) != self.num_slots:
            raise ConfigurationError(
                f"expected {self.num_slots} rotors, got {len(names)}"
            )
        if len(set(names)) != len(names):
            raise ConfigurationError("rotor repeated in slots")

        slots: list[Rotor] = []
        for i, name in enumerate(names):
            try:
                rotor = deepcopy(self.inventory[name])
            except KeyError:
                raise ConfigurationError(f"unknown rotor {name!r}") from None
            if (i == 0) != rotor.reflecting():
                raise ConfigurationError(f"wrong reflector: {name} in slot {i}")
            rotor.reset()
            slots.append(rotor)

        pawls = sum(r.pawl_count() for r in slots)
        if pawls != self.num_pawls:
            raise ConfigurationError(
                f"wrong moving rotors: {pawls} in slots, machine has {self.num_pawls} pawls"
            )
        self.slots = slots
        self.plugboard = Plugboard(self.alphabet)

    def _check_setting(self, setting: str, what: str) -> None:
        need = self.num_slots - 1
        if len(setting) < need:
            raise ConfigurationError(f"{what} too short: {setting!r}")
        if len(setting) > need:
            raise ConfigurationError(f"{what} too long: {setting!r}")
        if len(self.slots) != self.num_slots:
            raise ConfigurationError("no rotors inserted")

    # ── key & ring helpers ──────────────────────────────────────

    def set_positions(self, setting: str) -> None:
        """Rotate slots 1.. to the window symbols in `setting`."""
        self._check_setting(setting, "wheel settings")
        for rotor, symbol in zip(self.slots[1:], setting):
            rotor.set_position(symbol)

    def set_rings(self, rings: str) -> None:
        """Apply ring settings to slots 1.., one symbol each."""
        self._check_setting(rings, "ring settings")
        for rotor, symbol in zip(self.slots[1:], rings):
            rotor.set_ring(symbol)

    def set_plugboard(self, plugboard: Permutation) -> None:
        self.plugboard = Plugboard.from_permutation(plugboard)

    def positions(self) -> str:
        return "".join(r.window() for r in self.slots[1:])

    # ── stepping logic  ─────────────────────────────────────────

    def step(self) -> None:
        """Advance rotors for one key press.

        A pawl pushes its own rotor when that rotor is rightmost or when
        its right neighbour sits at a notch, and then pushes the neighbour
        as well. Notches are read before anything moves, and no rotor moves
        twice in one tick.
        """
        if not self.slots or not self.slots[0].reflecting():
            raise ConfigurationError("wrong reflector")
        pawls = sum(r.pawl_count() for r in self.slots)
        if pawls != self.num_pawls:
            raise ConfigurationError("wrong moving rotors")

        last = len(self.slots) - 1
        to_advance: set[int] = set()
        for i in range(1, last + 1):
            if not self.slots[i].rotates():
                continue
            if i == last:
                to_advance.add(i)
            elif self.slots[i + 1].at_notch():
                to_advance.update((i, i + 1))

        for i in sorted(to_advance):
            self.slots[i].advance()
        if debug.active("stepping"):
            debug.log("stepping", f"slots {sorted(to_advance)} -> {self.positions()}")

    # ── encipher  ───────────────────────────────────────────────

    def _transform(self, signal: int) -> int:
        signal = self.plugboard.forward(signal)

        for rotor in reversed(self.slots):
            signal = rotor.convert_forward(signal)

        for rotor in self.slots[1:]:
            signal = rotor.convert_backward(signal)

        return self.plugboard.backward(signal)

    def convert_index(self, c: int) -> int:
        """Advance the machine, then convert symbol index `c`."""
        self.alphabet.to_symbol(c)
        self.step()
        return self._transform(c)

    def convert(self, msg: str) -> str:
        """Convert every symbol of `msg` in turn; rotor positions carry
        over from one symbol to the next."""
        out = []
        for ch in msg:
            signal = self.alphabet.to_index(ch)
            self.step()
            result = self.alphabet.to_symbol(self._transform(signal))
            debug.log("convert", f"{ch} -> {result} @ {self.positions()}")
            out.append(result)
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self.slots)
        return f"<Machine [{names}] {self.positions()} {self.plugboard!r}>"
