"""Operator commands for editing and inspecting multiplier rules.

The handler is transport agnostic: it receives already split arguments and
returns a :class:`CommandResult` whose message the caller relays to the
operator (chat, console, CLI).  Permission checks belong to the caller.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .engine import TuningEngine
from .exceptions import CommandError, ConfigurationError, UnknownPropertyError
from .host import Player, is_tunable
from .models import PROPERTY_ALIASES, MultiplierRule
from .rules import TuningRuleTable

__all__ = [
    "CommandResult",
    "SHOW_USAGE",
    "TUNE_USAGE",
    "TuneCommandHandler",
    "format_multiplier",
    "parse_multiplier",
]

PROPERTY_LIST = " | ".join(PROPERTY_ALIASES)
TUNE_USAGE = "Usage: /tuneattach <attachment_shortname> <property> <value>\nProperties: " + PROPERTY_LIST
SHOW_USAGE = "Usage: /showattach <attachment_shortname>"


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str


def parse_multiplier(raw: str) -> float:
    """Parse a finite float, raising :class:`CommandError` otherwise."""

    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise CommandError("Invalid value (must be a number).") from exc
    if not math.isfinite(value):
        raise CommandError("Invalid value (must be a number).")
    return value


def format_multiplier(value: float) -> str:
    """Shortest exact rendering of ``value``; whole numbers drop the ``.0``."""

    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class TuneCommandHandler:
    """Implements ``tuneattach`` and ``showattach``."""

    def __init__(
        self,
        rules: TuningRuleTable,
        engine: Optional[TuningEngine] = None,
        *,
        title: str = "AttachmentTuner",
    ) -> None:
        self.rules = rules
        self.engine = engine
        self.title = title

    def tuneattach(self, player: Optional[Player], args: Sequence[str]) -> CommandResult:
        if len(args) < 3 or not str(args[0]).strip():
            return CommandResult(False, TUNE_USAGE)

        mod_id = str(args[0]).strip().lower()
        prop = str(args[1]).strip().lower()
        try:
            value = parse_multiplier(args[2])
            # validated up front so a bad property never creates a rule
            if prop not in PROPERTY_ALIASES:
                raise UnknownPropertyError("Unknown property. Use: " + PROPERTY_LIST)
        except CommandError as exc:
            return CommandResult(False, str(exc))

        try:
            self.rules.upsert(mod_id, prop, value)
        except ConfigurationError as exc:
            return CommandResult(False, f"[{self.title}] Could not save configuration: {exc}")
        message = f"[{self.title}] Set {mod_id} {prop} multiplier = {format_multiplier(value)}"

        if player is not None and self.engine is not None:
            item = player.get_active_item()
            if item is not None and is_tunable(item):
                self.engine.retune(item)
        return CommandResult(True, message)

    def showattach(self, player: Optional[Player], args: Sequence[str]) -> CommandResult:
        if len(args) < 1:
            return CommandResult(False, SHOW_USAGE)

        mod_id = str(args[0]).strip().lower()
        rule = self.rules.lookup(mod_id)
        if rule is None:
            return CommandResult(False, f"No entry for '{mod_id}'.")
        return CommandResult(True, self.describe(mod_id, rule))

    def describe(self, mod_id: str, rule: MultiplierRule) -> str:
        return (
            f"[{self.title}] {mod_id}\n"
            f"- hipcone x{format_multiplier(rule.hip_aim_cone)}\n"
            f"- sway x{format_multiplier(rule.aim_sway)}\n"
            f"- swayspeed x{format_multiplier(rule.aim_sway_speed)}"
        )
