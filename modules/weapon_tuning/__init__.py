"""Attachment-driven weapon stat tuning.

The package is split into small layers so host bindings and plugins can reuse
any of them on their own:

``models``
    Stat triples, multiplier rules and clamp bounds.
``baseline``
    Keyed store of the untuned stats of every weapon seen so far.
``rules``
    Rule table plus the built-in default rule set.
``config``
    JSON/YAML persistence with default bootstrap.
``engine``
    Recomputes a weapon's stats from its baseline and attached modifications.
``scheduling`` / ``events``
    Deferred execution and the host event adapter.
``commands``
    ``tuneattach`` / ``showattach`` operator commands.
"""
from __future__ import annotations

from plugins import PLUGIN_MANAGER

from .baseline import BaselineStore
from .commands import CommandResult, TuneCommandHandler
from .config import TunerConfigStore
from .engine import TuningEngine
from .events import TuningEventAdapter
from .exceptions import CommandError, ConfigurationError, TunerError, UnknownPropertyError
from .host import is_tunable, iter_attachment_ids, resolve_projectile
from .models import PROPERTY_ALIASES, STAT_FIELDS, ClampBounds, MultiplierRule, TunedStats
from .rules import DEFAULT_ATTACHMENT_IDS, TuningRuleTable
from .scheduling import AsyncioScheduler, DeferredActionQueue

__all__ = [
    "AsyncioScheduler",
    "BaselineStore",
    "ClampBounds",
    "CommandError",
    "CommandResult",
    "ConfigurationError",
    "DEFAULT_ATTACHMENT_IDS",
    "DeferredActionQueue",
    "MultiplierRule",
    "PROPERTY_ALIASES",
    "STAT_FIELDS",
    "TuneCommandHandler",
    "TunedStats",
    "TunerConfigStore",
    "TunerError",
    "TuningEngine",
    "TuningEventAdapter",
    "TuningRuleTable",
    "UnknownPropertyError",
    "is_tunable",
    "iter_attachment_ids",
    "resolve_projectile",
]

PLUGIN_MANAGER.expose_module("modules.weapon_tuning", alias="weapon_tuning")
