"""Repository packaged mods.

Mods located here wire the :mod:`modules` libraries into a host binding and
expose their public API through the global :mod:`plugins` manager so
downstream tooling can discover runtime objects and register extensions.

The :class:`AttachmentTunerMod` defined in :mod:`mods.attachment_tuner.runtime`
is exposed immediately for convenience.
"""
from __future__ import annotations

from .attachment_tuner import AttachmentTunerMod

__all__ = ["AttachmentTunerMod"]
