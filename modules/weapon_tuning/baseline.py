"""Keyed store of untuned weapon stats."""
from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Optional

from .models import TunedStats

__all__ = ["BaselineStore"]


class BaselineStore:
    """Maps weapon identities to the stats they had before any tuning.

    The first :meth:`ensure_baseline` call for a weapon captures a snapshot and
    every later call returns that same snapshot.  Entries only disappear via
    :meth:`evict` or :meth:`clear`; nothing here is persisted.
    """

    def __init__(self) -> None:
        self._baselines: Dict[Hashable, TunedStats] = {}

    def ensure_baseline(self, weapon_id: Hashable, source: Any) -> TunedStats:
        baseline = self._baselines.get(weapon_id)
        if baseline is None:
            baseline = TunedStats.read_from(source)
            self._baselines[weapon_id] = baseline
        return baseline

    def get(self, weapon_id: Hashable) -> Optional[TunedStats]:
        return self._baselines.get(weapon_id)

    def evict(self, weapon_id: Hashable) -> Optional[TunedStats]:
        """Forget ``weapon_id``.  Returns the removed baseline, if any."""

        return self._baselines.pop(weapon_id, None)

    def weapon_ids(self) -> Iterable[Hashable]:
        return tuple(self._baselines)

    def clear(self) -> None:
        self._baselines.clear()

    def __contains__(self, weapon_id: object) -> bool:
        return weapon_id in self._baselines

    def __len__(self) -> int:
        return len(self._baselines)
