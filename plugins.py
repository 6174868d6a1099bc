"""Global plugin infrastructure for the attachment tuner repository.

A single :data:`PLUGIN_MANAGER` instance is shared by every package.  Modules
publish their runtime objects through :meth:`PluginManager.expose` (the mod
facade, its engine, the rule table, factories) and plugins receive a read-only
view of everything exposed when they register.

Plugins are plain modules providing a ``setup_plugin(manager, exposed)``
callable.  The object it returns may implement any of the tuning hooks, which
the mod invokes through :meth:`PluginManager.broadcast`:

``on_weapon_retuned(weapon, stats)``
    Called after the engine wrote new stats onto a weapon.
``on_baseline_evicted(weapon_id)``
    Called after a dropped or destroyed weapon lost its baseline.
"""
from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from importlib.util import find_spec
import pkgutil
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Optional

__all__ = ["PLUGIN_MANAGER", "PluginManager", "PluginError", "PluginRecord"]

_MISSING = object()

ExportCallback = Callable[[Dict[str, Any], MappingProxyType], None]


class PluginError(RuntimeError):
    """Raised whenever a plugin cannot be registered or executed."""


@dataclass
class PluginRecord:
    """Simple data container describing a registered plugin."""

    name: str
    module: str
    obj: Any


class PluginManager:
    """Co-ordinates plugin registration, exposure and hook broadcasts."""

    def __init__(self) -> None:
        self._plugins: Dict[str, PluginRecord] = {}
        self._exposed: Dict[str, Any] = {}
        self._export_subscribers: List[ExportCallback] = []

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    @property
    def exposed(self) -> MappingProxyType:
        """Immutable view of the currently exposed objects."""

        return MappingProxyType(self._exposed)

    @property
    def plugins(self) -> MappingProxyType:
        return MappingProxyType(self._plugins)

    def expose(self, name: str, obj: Any) -> None:
        """Expose ``obj`` under ``name``, replacing any previous entry."""

        if not name:
            raise PluginError("Exposed names must be non-empty strings.")
        previous = self._exposed.get(name, _MISSING)
        self._exposed[name] = obj
        if previous is _MISSING or previous is not obj:
            self._notify_export_subscribers({name: obj})

    def expose_module(self, module_name: str, alias: Optional[str] = None) -> None:
        """Expose the public attributes of ``module_name`` as a read-only mapping."""

        module = import_module(module_name)
        export: Dict[str, Any] = {
            key: getattr(module, key)
            for key in dir(module)
            if not key.startswith("_")
        }
        self.expose(alias or module_name, MappingProxyType(export))

    def register_plugin(self, module_name: str, attr: str = "setup_plugin") -> PluginRecord:
        """Import ``module_name`` and run its setup callable."""

        if module_name in self._plugins:
            raise PluginError(f"Plugin '{module_name}' is already registered.")

        module = import_module(module_name)
        factory = getattr(module, attr, None)
        if factory is None:
            raise PluginError(f"Plugin '{module_name}' does not provide a '{attr}' callable.")
        if not callable(factory):
            raise PluginError(
                f"Plugin '{module_name}.{attr}' must be callable, got {type(factory)!r}."
            )

        instance = factory(self, self.exposed)
        record = PluginRecord(
            name=getattr(instance, "name", module_name),
            module=module_name,
            obj=instance,
        )
        self._plugins[module_name] = record
        return record

    def unregister_plugin(self, module_name: str) -> Optional[PluginRecord]:
        return self._plugins.pop(module_name, None)

    def broadcast(self, hook: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        """Invoke ``hook`` on all registered plugins and collect responses."""

        responses: Dict[str, Any] = {}
        for name, record in list(self._plugins.items()):
            target = getattr(record.obj, hook, None)
            if target is None:
                continue
            if not callable(target):
                raise PluginError(
                    f"Hook '{hook}' on plugin '{name}' is not callable (got {type(target)!r})."
                )
            responses[name] = target(*args, **kwargs)
        return responses

    def ensure(self, required: Iterable[str]) -> None:
        """Validate that all ``required`` plugins have been registered."""

        missing = [name for name in required if name not in self._plugins]
        if missing:
            raise PluginError("Missing required plugin(s): " + ", ".join(sorted(missing)))

    def subscribe_to_exports(self, callback: ExportCallback, *, replay: bool = True) -> None:
        """Register ``callback`` to receive newly exposed objects."""

        if callback in self._export_subscribers:
            return
        self._export_subscribers.append(callback)
        if replay:
            callback(dict(self._exposed), self.exposed)

    def auto_discover(
        self,
        package: str,
        *,
        attr: str = "setup_plugin",
        match: Optional[Callable[[str], bool]] = None,
    ) -> Dict[str, PluginRecord]:
        """Register every plugin module found below the importable ``package``."""

        spec = find_spec(package)
        if spec is None or not spec.submodule_search_locations:
            raise PluginError(f"Plugin location '{package}' is not an importable package.")
        matcher = match or self._default_auto_discover_match
        discovered: Dict[str, PluginRecord] = {}
        failures: List[str] = []
        for module_info in pkgutil.walk_packages(list(spec.submodule_search_locations), package + "."):
            if not matcher(module_info.name):
                continue
            try:
                discovered[module_info.name] = self.register_plugin(module_info.name, attr=attr)
            except PluginError as exc:
                failures.append(f"- {module_info.name}: {exc}")
        if failures:
            raise PluginError("Failed to auto discover plugin modules:\n" + "\n".join(failures))
        return discovered

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _notify_export_subscribers(self, exposure_diff: Dict[str, Any]) -> None:
        if not self._export_subscribers:
            return
        snapshot = self.exposed
        for callback in list(self._export_subscribers):
            callback(dict(exposure_diff), snapshot)

    @staticmethod
    def _default_auto_discover_match(module_name: str) -> bool:
        base = module_name.rsplit(".", 1)[-1].lower()
        return base.startswith("plugin_") or base.endswith("plugin")


PLUGIN_MANAGER = PluginManager()
PLUGIN_MANAGER.expose("auto_discover_plugins", PLUGIN_MANAGER.auto_discover)
PLUGIN_MANAGER.expose("subscribe_to_exports", PLUGIN_MANAGER.subscribe_to_exports)
