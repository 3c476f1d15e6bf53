"""
Traduction d'une room Rocket.Chat en brouillon de room Matrix.

Pur : aucune I/O, seulement des logs de diagnostic.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from .errors import UnsupportedRoomType
from .models import RoomPreset, RoomType, RoomVisibility, SourceRoom, TargetRoomDraft

logger = logging.getLogger(__name__)


def unique_ids(ids: Iterable[str]) -> List[str]:
    # Déduplication en gardant l'ordre de première apparition
    return list(dict.fromkeys(ids))


def map_room(source: SourceRoom, log: logging.Logger | logging.LoggerAdapter | None = None) -> TargetRoomDraft:
    """
    Construit le brouillon Matrix correspondant à `source`.

    Raises :
        UnsupportedRoomType : room `live` ou type inconnu
    """
    log = log or logger
    draft = TargetRoomDraft(federate=False)
    if source.name:
        draft.name = source.name
        draft.room_alias_name = source.name
    if source.description:
        draft.topic = source.description

    if source.room_type == RoomType.DIRECT:
        draft.is_direct = True
        draft.preset = RoomPreset.TRUSTED
        participants = unique_ids(source.uids)
        draft.creator_id = participants[0] if participants else ""
    elif source.room_type == RoomType.CHAT:
        draft.preset = RoomPreset.PUBLIC
        draft.visibility = RoomVisibility.PUBLIC
        draft.creator_id = source.owner_id or ""
    elif source.room_type == RoomType.PRIVATE:
        draft.preset = RoomPreset.PRIVATE
        draft.creator_id = source.owner_id or ""
    else:
        # RoomType.LIVE et toute valeur hors énumération
        room_type = getattr(source.room_type, "value", source.room_type)
        error = UnsupportedRoomType(room_type, source.id)
        log.error("%s", error)
        raise error

    if not draft.creator_id:
        log.warning(
            "Créateur introuvable pour la room %s de type %s",
            source.name,
            getattr(source.room_type, "value", source.room_type),
        )
    return draft


__all__ = ["map_room", "unique_ids"]
