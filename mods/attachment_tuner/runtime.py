"""Runtime facade that a host binding drives from its plugin hooks."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Hashable, Iterable, Optional, Sequence

from modules.weapon_tuning import (
    BaselineStore,
    CommandResult,
    DeferredActionQueue,
    TuneCommandHandler,
    TunedStats,
    TunerConfigStore,
    TuningEngine,
    TuningEventAdapter,
    TuningRuleTable,
)
from modules.weapon_tuning.host import ModContainer, PermissionService, Player, WeaponItem
from modules.weapon_tuning.scheduling import Scheduler
from plugins import PLUGIN_MANAGER

DEFAULT_STORAGE = Path(__file__).resolve().parent / "data" / "AttachmentTuner.json"

PERMISSION_USE = "attachmenttuner.use"


class AttachmentTunerMod:
    """Tune attachment-influenced hipfire spread and sway on weapons.

    The facade owns the rule table loaded from ``config_path`` and wires it
    into a :class:`TuningEngine`, a :class:`TuningEventAdapter` and the chat
    command handler.  Default attachments zero out sway and hipfire spread.
    """

    name = "AttachmentTuner"
    author = "RikkoMatsumato"
    version = "1.3.4"
    description = (
        "Tune attachment-influenced hipfire spread and sway on weapons. "
        "Automatically removes sway/twitch for default attachments."
    )

    def __init__(
        self,
        *,
        config_path: Optional[Path] = None,
        permissions: Optional[PermissionService] = None,
        scheduler: Optional[Scheduler] = None,
        logger: Optional[Callable[[str], None]] = None,
        autosave: bool = True,
    ) -> None:
        self._log = logger or print
        self.store = TunerConfigStore(config_path or DEFAULT_STORAGE)
        self.rules: TuningRuleTable = self.store.load_or_default(logger=self._prefixed_log)
        self.autosave = autosave
        if autosave:
            self.rules.bind_store(self.store)
        self.permissions = permissions
        self.scheduler = scheduler if scheduler is not None else DeferredActionQueue()
        self.engine = TuningEngine(self.rules, BaselineStore(), logger=self._prefixed_log)
        self.engine.add_listener(self._broadcast_retune)
        self.events = TuningEventAdapter(self.engine, self.scheduler, on_evict=self._broadcast_eviction)
        self.commands = TuneCommandHandler(self.rules, self.engine, title=self.name)
        PLUGIN_MANAGER.expose("attachment_tuner_mod", self)
        PLUGIN_MANAGER.expose("attachment_tuner_engine", self.engine)
        PLUGIN_MANAGER.expose("attachment_tuner_rules", self.rules)

    def _prefixed_log(self, message: str) -> None:
        self._log(f"[{self.name}] {message}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> None:
        if self.permissions is not None:
            self.permissions.register_permission(PERMISSION_USE, self)

    def reload_config(self) -> TuningRuleTable:
        """Re-read the configuration file into the live rule table."""

        self.rules.replace_with(self.store.load_or_default(logger=self._prefixed_log))
        return self.rules

    def save_config(self) -> None:
        self.store.save(self.rules)

    def unload(self, weapons: Iterable[WeaponItem] = ()) -> int:
        """Put the original stats back on ``weapons`` and drop every baseline."""

        restored = 0
        for weapon in weapons:
            if self.engine.restore(weapon):
                restored += 1
        self.engine.baselines.clear()
        if hasattr(self.scheduler, "clear"):
            self.scheduler.clear()
        return restored

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------
    def on_active_item_changed(
        self,
        player: Optional[Player],
        old_item: Optional[WeaponItem],
        new_item: Optional[WeaponItem],
    ) -> None:
        self.events.on_active_item_changed(player, old_item, new_item)

    def on_item_added_to_container(self, container: Optional[ModContainer], item: Any) -> None:
        self.events.on_item_added_to_container(container, item)

    def on_item_removed_from_container(self, container: Optional[ModContainer], item: Any) -> None:
        self.events.on_item_removed_from_container(container, item)

    def on_item_dropped(self, item: Optional[WeaponItem], entity: Any = None) -> None:
        self.events.on_item_dropped(item, entity)

    def on_entity_kill(self, entity: Any) -> None:
        self.events.on_entity_kill(entity)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def has_permission(self, player: Player) -> bool:
        if self.permissions is None:
            return False
        return bool(self.permissions.user_has_permission(player.user_id, PERMISSION_USE))

    def handle_chat_command(self, player: Player, command: str, args: Sequence[str]) -> CommandResult:
        """Dispatch ``tuneattach``/``showattach`` and reply to ``player``."""

        command = str(command).strip().lower().lstrip("/")
        if command == "tuneattach":
            handler = self.commands.tuneattach
        elif command == "showattach":
            handler = self.commands.showattach
        else:
            result = CommandResult(False, f"[{self.name}] Unknown command '{command}'.")
            player.chat_message(result.message)
            return result

        if not self.has_permission(player):
            result = CommandResult(False, f"[{self.name}] You don't have permission to use this command.")
        else:
            result = handler(player, list(args))
            if result.ok and command == "tuneattach":
                self._prefixed_log(f"{player.user_id} ran /tuneattach {' '.join(args)}")
        player.chat_message(result.message)
        return result

    # ------------------------------------------------------------------
    # Plugin broadcasts
    # ------------------------------------------------------------------
    def _broadcast_retune(self, weapon: WeaponItem, stats: TunedStats) -> None:
        PLUGIN_MANAGER.broadcast("on_weapon_retuned", weapon, stats)

    def _broadcast_eviction(self, weapon_id: Hashable) -> None:
        self._prefixed_log(f"Dropped baseline for weapon {weapon_id}.")
        PLUGIN_MANAGER.broadcast("on_baseline_evicted", weapon_id)
