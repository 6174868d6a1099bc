"""Structural view of the host game objects the tuning library touches.

The host platform owns weapons, items, players and permissions.  The library
never constructs these objects; it only reads and writes the attributes
declared by the protocols below, which keeps the engine usable with any host
binding (and with the light-weight stubs used by the test-suite).
"""
from __future__ import annotations

from typing import Any, Hashable, Iterator, Optional, Protocol, Sequence, runtime_checkable

__all__ = [
    "HeldEntity",
    "ItemDefinition",
    "ModContainer",
    "ModItem",
    "PermissionService",
    "Player",
    "ProjectileEntity",
    "WeaponItem",
    "is_tunable",
    "iter_attachment_ids",
    "resolve_projectile",
]


@runtime_checkable
class ProjectileEntity(Protocol):
    """Held entity with projectile-firing capability and tunable stats."""

    hip_aim_cone: float
    aim_sway: float
    aim_sway_speed: float
    is_destroyed: bool


class ItemDefinition(Protocol):
    shortname: str


class ModItem(Protocol):
    info: Optional[ItemDefinition]


class ModContainer(Protocol):
    parent: Optional["WeaponItem"]
    item_list: Sequence[Optional[ModItem]]


class WeaponItem(Protocol):
    uid: Hashable
    contents: Optional[ModContainer]

    def get_held_entity(self) -> Any:
        ...


@runtime_checkable
class HeldEntity(Protocol):
    def get_item(self) -> Optional[WeaponItem]:
        ...


class Player(Protocol):
    user_id: str

    def get_active_item(self) -> Optional[WeaponItem]:
        ...

    def chat_message(self, message: str) -> None:
        ...


class PermissionService(Protocol):
    def register_permission(self, permission: str, owner: Any) -> None:
        ...

    def user_has_permission(self, user_id: str, permission: str) -> bool:
        ...


def resolve_projectile(item: Optional[WeaponItem]) -> Optional[ProjectileEntity]:
    """Return the live projectile entity behind ``item`` or ``None``.

    Items without a held entity, entities that do not carry the tunable stats
    and destroyed entities all resolve to ``None``.
    """

    if item is None:
        return None
    getter = getattr(item, "get_held_entity", None)
    if getter is None:
        return None
    entity = getter()
    if entity is None or not isinstance(entity, ProjectileEntity):
        return None
    if entity.is_destroyed:
        return None
    return entity


def is_tunable(item: Optional[WeaponItem]) -> bool:
    return resolve_projectile(item) is not None


def iter_attachment_ids(item: WeaponItem) -> Iterator[str]:
    """Yield the shortnames of modifications attached to ``item`` in order."""

    contents = getattr(item, "contents", None)
    if contents is None:
        return
    for mod_item in contents.item_list:
        info = getattr(mod_item, "info", None) if mod_item is not None else None
        if info is None:
            continue
        shortname = getattr(info, "shortname", None)
        if not shortname:
            continue
        yield str(shortname)
