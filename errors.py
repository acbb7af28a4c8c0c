# errors.py
from __future__ import annotations


class ConfigurationError(ValueError):
    """Malformed machine description: wrong reflector, bad setting
    length, pawl-count mismatch, unknown rotor, bad config file."""


class PlugboardError(ConfigurationError):
    """Plugboard cycle that is not a pair."""
