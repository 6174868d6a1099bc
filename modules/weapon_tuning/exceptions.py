"""Exception hierarchy for the weapon tuning library."""

from __future__ import annotations


class TunerError(RuntimeError):
    """Base exception for weapon tuning failures."""


class ConfigurationError(TunerError):
    """Raised when the persisted tuning configuration cannot be used."""


class CommandError(TunerError):
    """Raised for operator input that must be rejected with a message."""


class UnknownPropertyError(CommandError, ValueError):
    """Raised when a multiplier property name is not recognised."""
