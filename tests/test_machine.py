import pytest

from alphabet_and_plugboard import Alphabet
from errors import ConfigurationError, PlugboardError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor
from wheels import historical_config, historical_rotors


# ── known ciphertexts ─────────────────────────────────────────────

def test_repeated_letter(service_machine):
    assert service_machine.convert("AAAAA") == "BDZGO"


def test_known_message_and_back(make_machine):
    assert make_machine().convert("HELLOWORLD") == "ILBDAAMTAZ"
    assert make_machine().convert("ILBDAAMTAZ") == "HELLOWORLD"


def test_ring_settings(make_machine):
    assert make_machine(rings="BBB").convert("AAAAA") == "EWTYX"


def test_plugboard_applies_on_both_sides(service_machine, alpha):
    service_machine.set_plugboard(Permutation("(BQ)", alpha))
    assert service_machine.convert("AAAAA") == "QDZGO"


def test_singleton_plugs_pair_up(make_machine, alpha):
    # A and Z never enter the rotors here, so only the output side swaps
    enc = make_machine()
    enc.set_plugboard(Permutation("(A)(Z)", alpha))
    assert enc.plugboard.forward(0) == 25
    assert enc.convert("HELLOWORLD") == "ILBDZZMTZA"

    dec = make_machine()
    dec.set_plugboard(Permutation("(A)(Z)", alpha))
    assert dec.convert("ILBDZZMTZA") == "HELLOWORLD"


def test_plugboard_rejects_long_cycles(service_machine, alpha):
    with pytest.raises(PlugboardError):
        service_machine.set_plugboard(Permutation("(ABC)", alpha))


def test_self_reciprocal(make_machine, alpha):
    plain = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOGANDKEEPSRUNNINGFORAWHILE" * 3
    plugs = Permutation("(AR) (GK) (OX) (TM) (QZ)", alpha)

    enc = make_machine(("C", "V", "II", "VI"), "XMQ", "HKZ")
    enc.set_plugboard(plugs)
    cipher = enc.convert(plain)
    assert cipher != plain
    assert all(p != c for p, c in zip(plain, cipher))

    dec = make_machine(("C", "V", "II", "VI"), "XMQ", "HKZ")
    dec.set_plugboard(plugs)
    assert dec.convert(cipher) == plain


def test_convert_index(service_machine, alpha):
    assert service_machine.convert_index(0) == alpha.to_index("B")
    assert service_machine.positions() == "AAB"
    with pytest.raises(IndexError):
        service_machine.convert_index(26)


def test_unknown_symbol(service_machine):
    with pytest.raises(LookupError):
        service_machine.convert("AB?")


# ── stepping ──────────────────────────────────────────────────────

def test_rightmost_rotor_steps_every_key(service_machine):
    service_machine.convert("A")
    assert service_machine.positions() == "AAB"


def test_double_step(make_machine):
    m = make_machine(setting="ADU")
    seen = []
    for _ in range(4):
        m.step()
        seen.append(m.positions())
    # II reaches its notch E and is pushed again on the very next key
    assert seen == ["ADV", "AEW", "BFX", "BFY"]


def test_rightmost_at_notch_moves_once(make_machine):
    m = make_machine(setting="AAV")
    m.step()
    assert m.positions() == "ABW"


def test_left_rotor_turnover_chain(make_machine):
    m = make_machine(setting="QEV")
    m.step()
    # III at V pushes II; II at E pushes I and itself; nothing double-moves
    assert m.positions() == "RFW"


def test_fixed_thin_rotor_never_steps(make_machine):
    m = make_machine(("B", "Beta", "I", "II", "III"), "AADU", slots=5, pawls=3)
    for _ in range(3):
        m.step()
    assert m.positions() == "ABFX"


def test_pawl_on_fixed_neighbour_is_ignored(make_machine):
    # I at notch Q next to the thin wheel; the fixed wheel has no pawl
    m = make_machine(("B", "Beta", "I", "II", "III"), "AQEV", slots=5, pawls=3)
    m.step()
    assert m.positions() == "ARFW"


def test_two_pawl_machine_leaves_leftmost_alone(make_machine):
    m = make_machine(("B", "Gamma", "II", "III"), "AAV", pawls=2)
    for _ in range(2):
        m.step()
    assert m.positions() == "ABX"


# ── configuration errors ──────────────────────────────────────────

def test_pawl_count_mismatch():
    m = historical_config(5, 3).build_machine()
    with pytest.raises(ConfigurationError, match="wrong moving rotors"):
        m.insert_rotors(["B", "IV", "I", "II", "III"])


def test_reflector_must_be_first():
    m = historical_config().build_machine()
    with pytest.raises(ConfigurationError, match="wrong reflector"):
        m.insert_rotors(["I", "II", "III", "B"])
    with pytest.raises(ConfigurationError, match="wrong reflector"):
        m.insert_rotors(["B", "C", "II", "III"])


def test_unknown_or_repeated_rotor():
    m = historical_config().build_machine()
    with pytest.raises(ConfigurationError, match="unknown rotor"):
        m.insert_rotors(["B", "I", "II", "IX"])
    with pytest.raises(ConfigurationError):
        m.insert_rotors(["B", "I", "I", "III"])
    with pytest.raises(ConfigurationError):
        m.insert_rotors(["B", "I", "II"])


def test_setting_length(service_machine):
    with pytest.raises(ConfigurationError, match="too short"):
        service_machine.set_positions("AA")
    with pytest.raises(ConfigurationError, match="too long"):
        service_machine.set_positions("AAAA")
    with pytest.raises(ConfigurationError, match="too long"):
        service_machine.set_rings("BBBB")


def test_step_without_rotors():
    m = historical_config().build_machine()
    with pytest.raises(ConfigurationError):
        m.step()
    with pytest.raises(ConfigurationError):
        m.set_positions("AAA")


def test_bad_slot_or_pawl_counts():
    rotors = historical_rotors().values()
    alpha = Alphabet()
    with pytest.raises(ConfigurationError):
        Machine(alpha, 1, 0, rotors)
    with pytest.raises(ConfigurationError):
        Machine(alpha, 4, 4, rotors)


def test_rotor_alphabet_must_match():
    other = Alphabet("ABCD")
    stray = Rotor.fixed("X", Permutation("(AB)", other))
    with pytest.raises(ConfigurationError):
        Machine(Alphabet(), 4, 3, [stray])


def test_duplicate_inventory_names(alpha):
    r = Rotor.fixed("X", Permutation("", alpha))
    with pytest.raises(ConfigurationError):
        Machine(alpha, 4, 3, [r, Rotor.fixed("X", Permutation("", alpha))])


# ── ownership ─────────────────────────────────────────────────────

def test_machines_do_not_share_rotor_state():
    config = historical_config()
    m1, m2 = config.build_machine(), config.build_machine()
    for m in (m1, m2):
        m.insert_rotors(["B", "I", "II", "III"])
        m.set_positions("AAA")
    m1.convert("AAAAAAAA")
    assert m1.positions() == "AAI"
    assert m2.positions() == "AAA"
    assert config.rotors["III"].position == 0


def test_reinsert_resets_positions_and_plugboard(service_machine, alpha):
    service_machine.set_plugboard(Permutation("(BQ)", alpha))
    service_machine.convert("AAA")
    service_machine.insert_rotors(["B", "I", "II", "III"])
    assert service_machine.positions() == "AAA"
    assert service_machine.convert("AAAAA") == "BDZGO"
