from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from modules.weapon_tuning import (
    ClampBounds,
    DeferredActionQueue,
    MultiplierRule,
    TuningEngine,
    TuningEventAdapter,
    TuningRuleTable,
)
from plugins import PLUGIN_MANAGER
from tests.stubs import StubPermissions, StubPlayer


@pytest.fixture()
def wide_bounds() -> ClampBounds:
    return ClampBounds(
        min_hip_aim_cone=0.0,
        max_hip_aim_cone=100.0,
        min_aim_sway=0.0,
        max_aim_sway=100.0,
        min_aim_sway_speed=0.0,
        max_aim_sway_speed=100.0,
    )


@pytest.fixture()
def rules(wide_bounds: ClampBounds) -> TuningRuleTable:
    """Rule table with open bounds so products are observable."""

    return TuningRuleTable(
        {
            "weapon.mod.silencer": MultiplierRule(0.5, 0.8, 1.0),
            "weapon.mod.holosight": MultiplierRule(1.0, 0.5, 0.25),
        },
        bounds=wide_bounds,
    )


@pytest.fixture()
def engine(rules: TuningRuleTable) -> TuningEngine:
    return TuningEngine(rules)


@pytest.fixture()
def queue() -> DeferredActionQueue:
    return DeferredActionQueue()


@pytest.fixture()
def adapter(engine: TuningEngine, queue: DeferredActionQueue) -> TuningEventAdapter:
    return TuningEventAdapter(engine, queue)


@pytest.fixture()
def permissions() -> StubPermissions:
    return StubPermissions()


@pytest.fixture()
def admin(permissions: StubPermissions) -> StubPlayer:
    player = StubPlayer(user_id="admin")
    permissions.grant("admin", "attachmenttuner.use")
    return player


@pytest.fixture()
def isolated_plugins():
    """Restore the global plugin registry after the test."""

    plugins = dict(PLUGIN_MANAGER._plugins)
    exposed = dict(PLUGIN_MANAGER._exposed)
    yield PLUGIN_MANAGER
    PLUGIN_MANAGER._plugins.clear()
    PLUGIN_MANAGER._plugins.update(plugins)
    PLUGIN_MANAGER._exposed.clear()
    PLUGIN_MANAGER._exposed.update(exposed)
