from __future__ import annotations

from modules.weapon_tuning import BaselineStore, TunedStats
from tests.stubs import StubProjectile


def test_ensure_baseline_snapshots_once() -> None:
    store = BaselineStore()
    entity = StubProjectile(3.0, 2.0, 1.0)

    first = store.ensure_baseline(42, entity)
    entity.hip_aim_cone = 0.0
    second = store.ensure_baseline(42, entity)

    assert first == TunedStats(3.0, 2.0, 1.0)
    assert second is first
    assert 42 in store
    assert len(store) == 1


def test_evict_is_a_noop_for_unknown_ids() -> None:
    store = BaselineStore()
    assert store.evict("missing") is None
    assert len(store) == 0


def test_evicted_identity_captures_a_fresh_baseline() -> None:
    store = BaselineStore()
    store.ensure_baseline(7, StubProjectile(3.0, 2.0, 1.0))

    removed = store.evict(7)
    fresh = store.ensure_baseline(7, StubProjectile(9.0, 8.0, 7.0))

    assert removed == TunedStats(3.0, 2.0, 1.0)
    assert fresh == TunedStats(9.0, 8.0, 7.0)


def test_clear_and_weapon_ids() -> None:
    store = BaselineStore()
    store.ensure_baseline(1, StubProjectile())
    store.ensure_baseline(2, StubProjectile())

    assert set(store.weapon_ids()) == {1, 2}
    store.clear()
    assert store.get(1) is None
    assert len(store) == 0
