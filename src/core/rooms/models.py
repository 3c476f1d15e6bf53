"""
Modèles de données du pipeline de migration des rooms.

Deux formes distinctes côté Matrix :
- `TargetRoomDraft` : forme interne, porte l'identité du créateur le temps de la construction
- `WireRoom` : forme envoyée au homeserver, ne porte jamais le créateur

La conversion passe uniquement par `TargetRoomDraft.to_wire()`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple


class RoomType(str, Enum):
    """Types de room Rocket.Chat (champ `t` de l'export)."""

    DIRECT = "d"
    CHAT = "c"
    PRIVATE = "p"
    LIVE = "l"


class RoomPreset(str, Enum):
    PRIVATE = "private_chat"
    PUBLIC = "public_chat"
    TRUSTED = "trusted_private_chat"


class RoomVisibility(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class EntityType(IntEnum):
    """Type d'entité dans la table des correspondances."""

    USER = 0
    ROOM = 1
    MESSAGE = 2


@dataclass(frozen=True)
class SourceRoom:
    """Room telle qu'exportée par Rocket.Chat (immuable).

    `room_type` garde la valeur brute si elle ne correspond à aucun `RoomType` connu,
    le refus est laissé au mapper.
    """

    id: str
    room_type: RoomType | str
    uids: Tuple[str, ...] = ()
    owner_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_direct(self) -> bool:
        return self.room_type == RoomType.DIRECT

    @classmethod
    def from_export(cls, doc: Dict[str, Any]) -> "SourceRoom":
        raw_type = doc.get("t")
        try:
            room_type: RoomType | str = RoomType(raw_type)
        except ValueError:
            room_type = str(raw_type)
        owner = doc.get("u") or {}
        return cls(
            id=str(doc["_id"]),
            room_type=room_type,
            uids=tuple(doc.get("uids") or ()),
            owner_id=owner.get("_id") if isinstance(owner, dict) else None,
            name=doc.get("name") or None,
            description=doc.get("description") or None,
        )


@dataclass(frozen=True)
class WireRoom:
    """Corps JSON de `createRoom`."""

    name: Optional[str] = None
    room_alias_name: Optional[str] = None
    topic: Optional[str] = None
    is_direct: Optional[bool] = None
    preset: Optional[RoomPreset] = None
    visibility: Optional[RoomVisibility] = None
    federate: bool = False

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"creation_content": {"m.federate": self.federate}}
        for key in ("name", "room_alias_name", "topic", "is_direct"):
            value = getattr(self, key)
            if value is not None:
                body[key] = value
        if self.preset is not None:
            body["preset"] = self.preset.value
        if self.visibility is not None:
            body["visibility"] = self.visibility.value
        return body


@dataclass
class TargetRoomDraft:
    name: Optional[str] = None
    room_alias_name: Optional[str] = None
    topic: Optional[str] = None
    is_direct: Optional[bool] = None
    preset: Optional[RoomPreset] = None
    visibility: Optional[RoomVisibility] = None
    federate: bool = False
    creator_id: str = ""

    def to_wire(self) -> WireRoom:
        return WireRoom(
            name=self.name,
            room_alias_name=self.room_alias_name,
            topic=self.topic,
            is_direct=self.is_direct,
            preset=self.preset,
            visibility=self.visibility,
            federate=self.federate,
        )


@dataclass(frozen=True)
class IdentityMapping:
    source_id: str
    matrix_id: str
    access_token: Optional[str] = None
    type: EntityType = EntityType.USER


@dataclass(frozen=True)
class TargetRoom:
    """Room créée sur le homeserver."""

    room_id: str
    source_id: str
    room: WireRoom
    invited: Tuple[str, ...] = field(default_factory=tuple)


__all__ = [
    "RoomType", "RoomPreset", "RoomVisibility", "EntityType", "SourceRoom",
    "WireRoom", "TargetRoomDraft", "IdentityMapping", "TargetRoom",
]
