"""Value types shared by the tuning engine, rule table and persistence layer.

Every tunable quantity is one of three scalar stats carried by a projectile
weapon entity:

``hip_aim_cone``
    Hipfire spread cone.
``aim_sway``
    Aim sway magnitude.
``aim_sway_speed``
    Aim sway speed.

Operators address them through the short aliases ``hipcone``, ``sway`` and
``swayspeed``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Tuple

from .exceptions import ConfigurationError, UnknownPropertyError

__all__ = [
    "STAT_FIELDS",
    "PROPERTY_ALIASES",
    "ClampBounds",
    "MultiplierRule",
    "TunedStats",
    "resolve_property",
]

STAT_FIELDS: Tuple[str, ...] = ("hip_aim_cone", "aim_sway", "aim_sway_speed")

PROPERTY_ALIASES: Mapping[str, str] = {
    "hipcone": "hip_aim_cone",
    "sway": "aim_sway",
    "swayspeed": "aim_sway_speed",
}


def resolve_property(name: str) -> str:
    """Map an operator alias or canonical field name to the canonical field."""

    cleaned = str(name or "").strip().lower()
    if cleaned in PROPERTY_ALIASES:
        return PROPERTY_ALIASES[cleaned]
    if cleaned in STAT_FIELDS:
        return cleaned
    raise UnknownPropertyError("Unknown property. Use: " + " | ".join(PROPERTY_ALIASES))


def _coerce_float(payload: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = payload.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}.") from exc
    if not math.isfinite(number):
        raise ConfigurationError(f"'{key}' must be finite, got {value!r}.")
    return number


@dataclass(frozen=True)
class TunedStats:
    """Immutable stat triple, used for baselines and computed results."""

    hip_aim_cone: float
    aim_sway: float
    aim_sway_speed: float

    @classmethod
    def read_from(cls, entity: Any) -> "TunedStats":
        """Snapshot the live stats of a projectile entity."""

        return cls(
            float(entity.hip_aim_cone),
            float(entity.aim_sway),
            float(entity.aim_sway_speed),
        )

    def write_to(self, entity: Any) -> None:
        entity.hip_aim_cone = self.hip_aim_cone
        entity.aim_sway = self.aim_sway
        entity.aim_sway_speed = self.aim_sway_speed

    def scaled(self, rule: "MultiplierRule") -> "TunedStats":
        return TunedStats(
            self.hip_aim_cone * rule.hip_aim_cone,
            self.aim_sway * rule.aim_sway,
            self.aim_sway_speed * rule.aim_sway_speed,
        )

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.hip_aim_cone, self.aim_sway, self.aim_sway_speed)


@dataclass(frozen=True)
class MultiplierRule:
    """Per-modification scaling factors.  Fresh rules multiply by zero."""

    hip_aim_cone: float = 0.0
    aim_sway: float = 0.0
    aim_sway_speed: float = 0.0

    def with_field(self, field_name: str, value: float) -> "MultiplierRule":
        return replace(self, **{resolve_property(field_name): float(value)})

    def to_payload(self) -> Dict[str, float]:
        return {
            "hip_aim_cone": self.hip_aim_cone,
            "aim_sway": self.aim_sway,
            "aim_sway_speed": self.aim_sway_speed,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "MultiplierRule":
        if not isinstance(payload, Mapping):
            raise ConfigurationError("Attachment multipliers must be a mapping.")
        return cls(
            _coerce_float(payload, "hip_aim_cone"),
            _coerce_float(payload, "aim_sway"),
            _coerce_float(payload, "aim_sway_speed"),
        )


def _clamp(value: float, minimum: float, maximum: float) -> float:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


@dataclass(frozen=True)
class ClampBounds:
    """Global lower and upper bounds applied after multiplication."""

    min_hip_aim_cone: float = 0.0
    max_hip_aim_cone: float = 0.0
    min_aim_sway: float = 0.0
    max_aim_sway: float = 0.0
    min_aim_sway_speed: float = 0.0
    max_aim_sway_speed: float = 0.0

    def apply(self, stats: TunedStats) -> TunedStats:
        """Clamp each component independently to its own bounds."""

        return TunedStats(
            _clamp(stats.hip_aim_cone, self.min_hip_aim_cone, self.max_hip_aim_cone),
            _clamp(stats.aim_sway, self.min_aim_sway, self.max_aim_sway),
            _clamp(stats.aim_sway_speed, self.min_aim_sway_speed, self.max_aim_sway_speed),
        )

    def to_payload(self) -> Dict[str, float]:
        return {
            "min_hip_aim_cone": self.min_hip_aim_cone,
            "max_hip_aim_cone": self.max_hip_aim_cone,
            "min_aim_sway": self.min_aim_sway,
            "max_aim_sway": self.max_aim_sway,
            "min_aim_sway_speed": self.min_aim_sway_speed,
            "max_aim_sway_speed": self.max_aim_sway_speed,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ClampBounds":
        return cls(**{key: _coerce_float(payload, key) for key in cls().to_payload()})
