from __future__ import annotations

import pytest

from modules.weapon_tuning import DeferredActionQueue, TuningEngine, TuningEventAdapter
from tests.stubs import StubContainer, StubItem, StubMeleeEntity, StubPlayer, StubWorldEntity, attach, make_weapon


def test_active_item_change_defers_retune(adapter: TuningEventAdapter, queue: DeferredActionQueue) -> None:
    weapon = make_weapon(attachments=("weapon.mod.silencer",))

    adapter.on_active_item_changed(StubPlayer(), None, weapon)

    assert weapon.held_entity.stats() == (2.0, 1.5, 1.0)
    assert queue.run_pending() == 1
    assert weapon.held_entity.stats() == pytest.approx((1.0, 1.2, 1.0))


def test_active_item_change_to_nothing_schedules_nothing(
    adapter: TuningEventAdapter, queue: DeferredActionQueue
) -> None:
    adapter.on_active_item_changed(StubPlayer(), make_weapon(), None)
    assert len(queue) == 0


def test_active_item_change_to_non_weapon_is_a_noop(
    adapter: TuningEventAdapter, queue: DeferredActionQueue, engine: TuningEngine
) -> None:
    adapter.on_active_item_changed(StubPlayer(), None, StubItem("machete", StubMeleeEntity()))
    queue.run_pending()
    assert len(engine.baselines) == 0


def test_attachment_added_retunes_parent_after_settling(
    adapter: TuningEventAdapter, queue: DeferredActionQueue
) -> None:
    weapon = make_weapon()
    mod = attach(weapon, "weapon.mod.holosight")

    adapter.on_item_added_to_container(weapon.contents, mod)
    queue.run_pending()

    assert weapon.held_entity.stats() == pytest.approx((2.0, 0.75, 0.25))


def test_attachment_removed_recomputes_from_baseline(
    adapter: TuningEventAdapter, queue: DeferredActionQueue
) -> None:
    weapon = make_weapon(attachments=("weapon.mod.silencer", "weapon.mod.holosight"))
    adapter.on_active_item_changed(None, None, weapon)
    queue.run_pending()

    removed = weapon.contents.item_list.pop()
    adapter.on_item_removed_from_container(weapon.contents, removed)
    queue.run_pending()

    assert weapon.held_entity.stats() == pytest.approx((1.0, 1.2, 1.0))


def test_duplicate_events_converge(adapter: TuningEventAdapter, queue: DeferredActionQueue) -> None:
    weapon = make_weapon(attachments=("weapon.mod.silencer",))
    for _ in range(3):
        adapter.on_item_added_to_container(weapon.contents, weapon.contents.item_list[0])
        adapter.on_active_item_changed(None, None, weapon)

    assert queue.run_pending() == 6
    assert weapon.held_entity.stats() == pytest.approx((1.0, 1.2, 1.0))


@pytest.mark.parametrize(
    "container",
    [None, StubContainer(parent=None), StubContainer(parent=StubItem("backpack"))],
)
def test_container_events_without_weapon_parent_are_ignored(
    adapter: TuningEventAdapter, queue: DeferredActionQueue, container
) -> None:
    adapter.on_item_added_to_container(container, StubItem("weapon.mod.silencer"))
    adapter.on_item_removed_from_container(container, StubItem("weapon.mod.silencer"))
    assert len(queue) == 0


def test_container_event_without_item_is_ignored(adapter: TuningEventAdapter, queue: DeferredActionQueue) -> None:
    weapon = make_weapon()
    adapter.on_item_added_to_container(weapon.contents, None)
    assert len(queue) == 0


def test_drop_evicts_baseline_immediately(
    adapter: TuningEventAdapter, queue: DeferredActionQueue, engine: TuningEngine
) -> None:
    weapon = make_weapon(attachments=("weapon.mod.silencer",))
    engine.retune(weapon)

    adapter.on_item_dropped(weapon, None)

    assert weapon.uid not in engine.baselines
    assert len(queue) == 0


def test_entity_kill_evicts_through_held_entity(adapter: TuningEventAdapter, engine: TuningEngine) -> None:
    weapon = make_weapon()
    engine.retune(weapon)

    adapter.on_entity_kill(StubWorldEntity())
    assert weapon.uid in engine.baselines

    adapter.on_entity_kill(weapon.held_entity)
    assert weapon.uid not in engine.baselines


def test_entity_kill_for_orphan_held_entity_is_ignored(adapter: TuningEventAdapter, engine: TuningEngine) -> None:
    adapter.on_entity_kill(StubMeleeEntity())
    adapter.on_item_dropped(None)
    assert len(engine.baselines) == 0


def test_queued_retune_after_destroy_is_a_noop(
    adapter: TuningEventAdapter, queue: DeferredActionQueue, engine: TuningEngine
) -> None:
    weapon = make_weapon(attachments=("weapon.mod.silencer",))
    adapter.on_active_item_changed(None, None, weapon)

    weapon.held_entity.is_destroyed = True
    adapter.on_entity_kill(weapon.held_entity)
    queue.run_pending()

    assert weapon.uid not in engine.baselines
    assert weapon.held_entity.stats() == (2.0, 1.5, 1.0)


def test_reused_identity_captures_fresh_baseline(
    adapter: TuningEventAdapter, queue: DeferredActionQueue, engine: TuningEngine
) -> None:
    first = make_weapon(stats=(2.0, 1.5, 1.0), uid=777)
    engine.retune(first)
    adapter.on_item_dropped(first)

    second = make_weapon(stats=(8.0, 6.0, 4.0), uid=777)
    adapter.on_active_item_changed(None, None, second)
    queue.run_pending()

    assert engine.baselines.get(777).as_tuple() == (8.0, 6.0, 4.0)


def test_eviction_listener_only_fires_for_known_weapons(engine: TuningEngine, queue: DeferredActionQueue) -> None:
    evicted = []
    adapter = TuningEventAdapter(engine, queue, on_evict=evicted.append)
    tracked = make_weapon()
    engine.retune(tracked)

    adapter.on_item_dropped(make_weapon())
    adapter.on_item_dropped(tracked)

    assert evicted == [tracked.uid]
