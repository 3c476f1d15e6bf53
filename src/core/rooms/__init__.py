"""Rooms core package.

Les imports sont effectués de manière lazy : le mapper et les modèles restent
importables sans charger aiohttp (utilisé par le provisioner via core.synapse).
"""
from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # aide mypy/IDE sans exécuter les imports au runtime initial
	from .mapper import map_room  # noqa: F401
	from .models import SourceRoom, TargetRoom, TargetRoomDraft, WireRoom  # noqa: F401
	from .provisioner import RoomProvisioner  # noqa: F401
	from .registrar import MembershipRegistrar  # noqa: F401

__all__ = [
	"map_room", "MembershipRegistrar", "RoomProvisioner",
	"SourceRoom", "TargetRoom", "TargetRoomDraft", "WireRoom",
]

_LAZY = {
	"map_room": "core.rooms.mapper",
	"MembershipRegistrar": "core.rooms.registrar",
	"RoomProvisioner": "core.rooms.provisioner",
	"SourceRoom": "core.rooms.models",
	"TargetRoom": "core.rooms.models",
	"TargetRoomDraft": "core.rooms.models",
	"WireRoom": "core.rooms.models",
}


def __getattr__(name: str):  # lazy resolution
	if name in _LAZY:
		mod = import_module(_LAZY[name])
		return getattr(mod, name)
	raise AttributeError(name)
