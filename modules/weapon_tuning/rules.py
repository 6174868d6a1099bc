"""Per-modification multiplier rules and global clamp bounds.

:class:`TuningRuleTable` is the in-memory form of the persisted configuration.
It is owned by whoever loaded it (normally the mod facade) and handed to the
engine explicitly.  Edits made through :meth:`TuningRuleTable.upsert` are
written back through the bound store so the file never lags behind.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple

from .exceptions import ConfigurationError
from .models import ClampBounds, MultiplierRule, resolve_property

__all__ = [
    "DEFAULT_ATTACHMENT_IDS",
    "RuleTableStore",
    "TuningRuleTable",
]

DEFAULT_ATTACHMENT_IDS: Tuple[str, ...] = (
    "weapon.mod.holosight",
    "weapon.mod.lasersight",
    "weapon.mod.silencer",
    "weapon.mod.muzzlebrake",
    "weapon.mod.flashlight",
    "weapon.mod.burstmodule",
)


class RuleTableStore(Protocol):
    """Persists a table; failures surface as :class:`ConfigurationError`."""

    def save(self, table: "TuningRuleTable") -> None:
        ...


class TuningRuleTable:
    """Mapping from modification identifier to :class:`MultiplierRule`."""

    def __init__(
        self,
        rules: Optional[Mapping[str, MultiplierRule]] = None,
        *,
        bounds: Optional[ClampBounds] = None,
    ) -> None:
        self._rules: Dict[str, MultiplierRule] = dict(rules or {})
        self._bounds = bounds or ClampBounds()
        self._store: Optional[RuleTableStore] = None

    @classmethod
    def defaults(cls) -> "TuningRuleTable":
        """Built-in rule set: common attachments zero every stat."""

        return cls({mod_id: MultiplierRule() for mod_id in DEFAULT_ATTACHMENT_IDS}, bounds=ClampBounds())

    # ------------------------------------------------------------------
    # Persistence binding
    # ------------------------------------------------------------------
    def bind_store(self, store: Optional[RuleTableStore]) -> None:
        self._store = store

    def _commit(self, rules: Dict[str, MultiplierRule], bounds: ClampBounds) -> None:
        """Adopt ``rules`` and ``bounds``, rolling back if the store rejects them."""

        previous = (self._rules, self._bounds)
        self._rules, self._bounds = rules, bounds
        if self._store is None:
            return
        try:
            self._store.save(self)
        except ConfigurationError:
            self._rules, self._bounds = previous
            raise

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def lookup(self, mod_id: str) -> Optional[MultiplierRule]:
        return self._rules.get(mod_id)

    def clamp_bounds(self) -> ClampBounds:
        return self._bounds

    def entries(self) -> Iterable[Tuple[str, MultiplierRule]]:
        return tuple(sorted(self._rules.items()))

    def __contains__(self, mod_id: object) -> bool:
        return mod_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def upsert(self, mod_id: str, field_name: str, value: float) -> MultiplierRule:
        """Set one multiplier of ``mod_id``, creating a zeroed rule if needed."""

        canonical = resolve_property(field_name)
        mod_id = str(mod_id).strip()
        if not mod_id:
            raise ValueError("Modification identifier must be a non-empty string.")
        rule = self._rules.get(mod_id, MultiplierRule()).with_field(canonical, value)
        self._commit({**self._rules, mod_id: rule}, self._bounds)
        return rule

    def set_clamp_bounds(self, bounds: ClampBounds) -> None:
        self._commit(self._rules, bounds)

    def replace_with(self, other: "TuningRuleTable") -> None:
        """Adopt the rules and bounds of ``other`` without persisting."""

        self._rules = dict(other._rules)
        self._bounds = other._bounds

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "attachments": {mod_id: rule.to_payload() for mod_id, rule in self.entries()},
        }
        payload.update(self._bounds.to_payload())
        return payload

    @classmethod
    def from_payload(cls, payload: Any) -> "TuningRuleTable":
        if not isinstance(payload, Mapping):
            raise ConfigurationError("Configuration root must be a mapping.")
        raw_rules = payload.get("attachments")
        if raw_rules is None:
            rules = {mod_id: MultiplierRule() for mod_id in DEFAULT_ATTACHMENT_IDS}
        elif isinstance(raw_rules, Mapping):
            rules = {str(mod_id): MultiplierRule.from_payload(entry) for mod_id, entry in raw_rules.items()}
        else:
            raise ConfigurationError("'attachments' must be a mapping of modification identifiers.")
        return cls(rules, bounds=ClampBounds.from_payload(payload))
