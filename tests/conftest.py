from pathlib import Path

import pytest

from alphabet_and_plugboard import Alphabet
from debug import COMPONENTS, Debug
from wheels import historical_config

CONFIGS = Path(__file__).resolve().parent.parent / "configs"


@pytest.fixture
def alpha():
    return Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


@pytest.fixture
def service_machine():
    """Three-rotor machine: reflector B, rotors I II III at AAA."""
    m = historical_config().build_machine()
    m.insert_rotors(["B", "I", "II", "III"])
    m.set_positions("AAA")
    return m


@pytest.fixture
def make_machine():
    def _make(names=("B", "I", "II", "III"), setting="AAA", rings=None, slots=4, pawls=3):
        m = historical_config(slots, pawls).build_machine()
        m.insert_rotors(list(names))
        m.set_positions(setting)
        if rings:
            m.set_rings(rings)
        return m
    return _make


@pytest.fixture
def enigma_i_conf():
    return CONFIGS / "enigma_i.conf"


@pytest.fixture(autouse=True)
def quiet_debug():
    yield
    dbg = Debug()
    dbg.disable(*COMPONENTS)
    dbg.toggle_global(True)
