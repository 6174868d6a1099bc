"""Nested plugin used to ensure recursive discovery works."""

from dataclasses import dataclass


@dataclass
class AuditPlugin:
    name: str = "tuning_audit"
    retunes: int = 0

    def on_weapon_retuned(self, weapon, stats):
        self.retunes += 1
        return self.retunes


def setup_plugin(manager, exposed):
    plugin = AuditPlugin()
    manager.expose("tuning_audit", plugin)
    return plugin
