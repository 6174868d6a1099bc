"""Attachment tuner mod package.

``runtime``
    :class:`AttachmentTunerMod`, the facade host bindings call from their
    item, container and entity hooks and from the chat command dispatcher.
``data``
    Shipped default configuration (``AttachmentTuner.json``).
"""
from __future__ import annotations

from plugins import PLUGIN_MANAGER

from .runtime import DEFAULT_STORAGE, PERMISSION_USE, AttachmentTunerMod

__all__ = ["AttachmentTunerMod", "DEFAULT_STORAGE", "PERMISSION_USE"]

PLUGIN_MANAGER.expose("attachment_tuner_mod_factory", AttachmentTunerMod)
PLUGIN_MANAGER.expose_module("mods.attachment_tuner", alias="attachment_tuner")
