"""Persistence for :class:`~modules.weapon_tuning.rules.TuningRuleTable`.

Configuration files are JSON unless the path ends in ``.yaml``/``.yml``, in
which case PyYAML is used.  A file that is missing, unreadable or malformed is
replaced by the built-in defaults so the next load succeeds::

    store = TunerConfigStore(Path("AttachmentTuner.json"))
    rules = store.load_or_default(logger=print)
    rules.bind_store(store)
    rules.upsert("weapon.mod.silencer", "sway", 0.5)   # saved immediately
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

import yaml

from .exceptions import ConfigurationError
from .rules import TuningRuleTable

__all__ = ["TunerConfigStore", "YAML_SUFFIXES"]

YAML_SUFFIXES = {".yaml", ".yml"}


class TunerConfigStore:
    """Read/write helper for the tuning configuration file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in YAML_SUFFIXES

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> TuningRuleTable:
        """Parse the configuration file, raising :class:`ConfigurationError`."""

        try:
            text = self.path.read_text(encoding="utf8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Cannot read {self.path}: {exc}") from exc
        try:
            payload = yaml.safe_load(text) if self.is_yaml else json.loads(text)
        except (ValueError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot parse {self.path}: {exc}") from exc
        if payload is None:
            raise ConfigurationError("Config read null")
        return TuningRuleTable.from_payload(payload)

    def save(self, table: TuningRuleTable) -> None:
        """Write ``table``, raising :class:`ConfigurationError` when the file cannot be written."""

        payload = table.to_payload()
        if self.is_yaml:
            serialized = yaml.safe_dump(payload, sort_keys=True, default_flow_style=False)
        else:
            serialized = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(serialized, encoding="utf8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot write {self.path}: {exc}") from exc

    def reset(self) -> TuningRuleTable:
        table = TuningRuleTable.defaults()
        self.save(table)
        return table

    def load_or_default(self, *, logger: Optional[Callable[[str], None]] = None) -> TuningRuleTable:
        """Load the configuration, substituting and persisting defaults on failure."""

        logger = logger or print
        if not self.path.exists():
            logger(f"Creating a new configuration file at {self.path}.")
            return self.reset()
        try:
            return self.load()
        except ConfigurationError as exc:
            logger(f"Config error: {exc}")
            return self.reset()
