"""Tuning engine: baseline times attached multipliers, clamped, written back.

The engine never multiplies the live stats of a weapon.  Every call to
:meth:`TuningEngine.retune` starts again from the baseline captured the first
time the weapon was seen, so repeated or overlapping change events converge on
the same result instead of compounding.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from .baseline import BaselineStore
from .host import WeaponItem, iter_attachment_ids, resolve_projectile
from .models import TunedStats
from .rules import TuningRuleTable

__all__ = ["RetuneListener", "TuningEngine"]

RetuneListener = Callable[[WeaponItem, TunedStats], None]


class TuningEngine:
    """Recomputes the tunable stats of weapons from their baselines."""

    def __init__(
        self,
        rules: TuningRuleTable,
        baselines: Optional[BaselineStore] = None,
        *,
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.rules = rules
        self._log = logger or print
        self.baselines = baselines if baselines is not None else BaselineStore()
        self._listeners: List[RetuneListener] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, callback: RetuneListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: RetuneListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------
    def compute(self, baseline: TunedStats, mod_ids: Iterable[str]) -> TunedStats:
        """Return ``clamp(baseline * product(multipliers of mod_ids))``.

        Modifications without a rule do not contribute to the product.
        """

        accumulator = baseline
        for mod_id in mod_ids:
            rule = self.rules.lookup(mod_id)
            if rule is None:
                continue
            accumulator = accumulator.scaled(rule)
        return self.rules.clamp_bounds().apply(accumulator)

    def retune(self, weapon: Optional[WeaponItem]) -> Optional[TunedStats]:
        """Apply the current rules to ``weapon``.

        Returns the written stats, or ``None`` when the weapon is gone or has
        no projectile entity.
        """

        entity = resolve_projectile(weapon)
        if entity is None:
            return None
        baseline = self.baselines.ensure_baseline(weapon.uid, entity)
        tuned = self.compute(baseline, iter_attachment_ids(weapon))
        tuned.write_to(entity)
        for callback in list(self._listeners):
            # stats are already written, so a failing listener is only reported
            try:
                callback(weapon, tuned)
            except Exception as exc:
                self._log(f"Retune listener {callback!r} failed for weapon {weapon.uid}: {exc}")
        return tuned

    def restore(self, weapon: Optional[WeaponItem]) -> bool:
        """Write the stored baseline back onto ``weapon`` and forget it."""

        if weapon is None:
            return False
        baseline = self.baselines.evict(weapon.uid)
        entity = resolve_projectile(weapon)
        if baseline is None or entity is None:
            return False
        baseline.write_to(entity)
        return True
