"""Translate host lifecycle notifications into engine calls."""
from __future__ import annotations

from typing import Any, Callable, Hashable, Optional

from .engine import TuningEngine
from .host import HeldEntity, ModContainer, Player, WeaponItem, is_tunable
from .scheduling import Scheduler

__all__ = ["TuningEventAdapter"]

EvictionListener = Callable[[Hashable], None]


class TuningEventAdapter:
    """Schedules deferred retunes and evicts baselines of vanished weapons.

    Retunes are always deferred through ``scheduler`` because the host may
    still be wiring the weapon's modification container when the event fires.
    Evictions run inline; a retune that was already queued for the same
    weapon simply finds nothing to tune.
    """

    def __init__(
        self,
        engine: TuningEngine,
        scheduler: Scheduler,
        *,
        on_evict: Optional[EvictionListener] = None,
    ) -> None:
        self.engine = engine
        self.scheduler = scheduler
        self._on_evict = on_evict

    def schedule_retune(self, weapon: WeaponItem) -> None:
        self.scheduler.call_soon(lambda: self._deferred_retune(weapon))

    def _deferred_retune(self, weapon: WeaponItem) -> None:
        if weapon is None or not is_tunable(weapon):
            return
        self.engine.retune(weapon)

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------
    def on_active_item_changed(
        self,
        player: Optional[Player],
        old_item: Optional[WeaponItem],
        new_item: Optional[WeaponItem],
    ) -> None:
        if new_item is None:
            return
        self.schedule_retune(new_item)

    def on_item_added_to_container(self, container: Optional[ModContainer], item: Any) -> None:
        self._container_changed(container, item)

    def on_item_removed_from_container(self, container: Optional[ModContainer], item: Any) -> None:
        self._container_changed(container, item)

    def _container_changed(self, container: Optional[ModContainer], item: Any) -> None:
        if container is None or item is None:
            return
        parent = getattr(container, "parent", None)
        if parent is None or not is_tunable(parent):
            return
        self.schedule_retune(parent)

    def on_item_dropped(self, item: Optional[WeaponItem], entity: Any = None) -> None:
        if item is None:
            return
        self._evict(item.uid)

    def on_entity_kill(self, entity: Any) -> None:
        if not isinstance(entity, HeldEntity):
            return
        item = entity.get_item()
        if item is not None:
            self._evict(item.uid)

    def _evict(self, weapon_id: Hashable) -> None:
        removed = self.engine.baselines.evict(weapon_id)
        if removed is not None and self._on_evict is not None:
            self._on_evict(weapon_id)
