"""
errors — Exceptions raised outside the pure naming core.

The core (translit, brackets, cover, naming) never raises for string input;
rename failures are per-item and reported, not raised.
"""


class CyrlatError(Exception):
    """Base class for all cyrlat errors."""


class ConfigError(CyrlatError):
    """Invalid configuration file or environment override."""
