# main.py
from __future__ import annotations

import argparse
import io
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from config_reader import MachineConfig, load_config
from debug import COMPONENTS, Debug
from errors import ConfigurationError
from machine import Machine
from permutation import Permutation
from wheels import historical_config

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────

debug = Debug()

BLOCK = 5                      # output group width


# ────────────────────────────────────────────────────────────────────────
#  1. Settings lines
# ────────────────────────────────────────────────────────────────────────


def setup_machine(machine: Machine, line: str) -> None:
    """Configure `machine` from a settings line such as

        * B Beta III IV I AXLE [RINGS] (HQ) (EX) (IP)

    i.e. rotor names for every slot, the window setting, an optional
    ring setting and optional plugboard cycles.
    """
    body = line.strip()
    if not body.startswith("*"):
        raise ConfigurationError(f"settings line must start with '*': {body!r}")
    body = body[1:]

    cut = body.find("(")
    head, cycles = (body, "") if cut == -1 else (body[:cut], body[cut:])
    tokens = head.split()

    n = machine.num_slots
    if len(tokens) not in (n + 1, n + 2):
        raise ConfigurationError(
            f"settings line needs {n} rotors, a setting and optional rings: {line.strip()!r}"
        )

    machine.insert_rotors(tokens[:n])
    machine.set_positions(tokens[n])
    if len(tokens) == n + 2:
        machine.set_rings(tokens[n + 1])
    if cycles.strip():
        machine.set_plugboard(Permutation(cycles, machine.alphabet))
    debug.log("config", f"settings {machine!r}")


# ────────────────────────────────────────────────────────────────────────
#  2. Message processing
# ────────────────────────────────────────────────────────────────────────


def format_groups(text: str, block: int = BLOCK) -> str:
    """Split `text` into space-separated groups of `block` symbols; the
    last group may be shorter."""
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


def process(config: MachineConfig, lines: Iterable[str], out: TextIO) -> None:
    """Run every message in `lines` through a machine built from `config`.
    Lines starting with '*' reconfigure the machine for the lines below."""
    machine = config.build_machine()
    configured = False

    for line in lines:
        line = line.rstrip("\r\n")
        if line.lstrip().startswith("*"):
            setup_machine(machine, line)
            configured = True
        elif not line.strip():
            out.write("\n")
        elif not configured:
            raise ConfigurationError("message given before any settings line")
        else:
            msg = "".join(line.split())
            out.write(format_groups(machine.convert(msg)) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages with a rotor machine")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Message file. Default: standard input")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Result file. Default: standard output")
    p.add_argument("-c", "--config", metavar="FILE", help="Machine description (alphabet, slots/pawls, rotors). Default: historical wheels")
    p.add_argument("--slots", type=int, help="Slot count for the historical wheels. Default: 4")
    p.add_argument("--pawls", type=int, help="Pawl count for the historical wheels. Default: 3")
    p.add_argument("--debug", metavar="COMPONENT", action="append", choices=COMPONENTS, default=[], help=f"Log one engine component ({', '.join(COMPONENTS)}). Repeatable")
    p.add_argument("--log-to", metavar="FILE", help="Also write debug log to FILE")

    args = p.parse_args(argv)
    if args.config and (args.slots is not None or args.pawls is not None):
        p.error("--slots/--pawls only apply to the historical wheels, not --config")
    return args


def load_machine_config(args: argparse.Namespace) -> MachineConfig:
    if args.config:
        return load_config(args.config)
    slots = 4 if args.slots is None else args.slots
    pawls = 3 if args.pawls is None else args.pawls
    return historical_config(slots, pawls)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.debug:
        Debug.configure(log_to=args.log_to)
        debug.enable(*args.debug)

    result = io.StringIO()
    try:
        config = load_machine_config(args)
        if args.input:
            lines = Path(args.input).read_text(encoding="utf-8").splitlines()
        else:
            lines = sys.stdin.read().splitlines()
        process(config, lines, result)

        if args.output:
            Path(args.output).write_text(result.getvalue(), encoding="utf-8")
        else:
            sys.stdout.write(result.getvalue())
    except (ConfigurationError, LookupError, OSError, UnicodeDecodeError) as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
