"""Reusable libraries shared by the repository mods.

:mod:`modules.weapon_tuning` holds the host independent tuning engine; mods
under :mod:`mods` bind it to a concrete game server.
"""
from __future__ import annotations

from plugins import PLUGIN_MANAGER

PLUGIN_MANAGER.expose("modules_namespace", __name__)

__all__ = ["PLUGIN_MANAGER"]
