"""
Migration d'un lot de rooms.

Chaque room est traitée indépendamment : une erreur de migration ou du store est journalisée,
comptée, puis on passe à la suivante. Les rooms déjà présentes dans la table des
correspondances sont ignorées, ce qui rend une relance sans effet sur elles.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List

from core.rooms.errors import InviteOrJoinFailed, MigrationError, UnsupportedRoomType
from core.rooms.models import EntityType, SourceRoom

logger = logging.getLogger(__name__)

STORAGE_ERROR = "StorageError"


@dataclass
class MigrationReport:
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: Counter = field(default_factory=Counter)
    partial: List[str] = field(default_factory=list)
    unmapped: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(self.failures.values())


async def _save_mapping(storage, report: MigrationReport, source: SourceRoom, matrix_room_id: str) -> bool:
    try:
        await storage.save_room_mapping(source.id, matrix_room_id)
    except Exception:
        # La room existe côté Matrix sans correspondance : une relance la recréerait
        logger.exception("Correspondance non enregistrée pour la room %s (%s)", source.id, matrix_room_id)
        report.failures[STORAGE_ERROR] += 1
        report.unmapped.append(matrix_room_id)
        return False
    return True


async def migrate_room(source: SourceRoom, provisioner, storage, report: MigrationReport) -> None:
    try:
        already = await storage.get_mapping(source.id, EntityType.ROOM)
    except Exception:
        logger.exception("Lecture de la correspondance impossible pour la room %s", source.id)
        report.failures[STORAGE_ERROR] += 1
        return
    if already is not None:
        logger.debug("Room %s déjà migrée, ignorée", source.id)
        report.skipped.append(source.id)
        return
    try:
        target = await provisioner.provision(source)
    except UnsupportedRoomType as e:
        logger.warning("Room %s ignorée: %s", source.id, e)
        report.failures[type(e).__name__] += 1
        return
    except InviteOrJoinFailed as e:
        # La room existe : on garde la correspondance pour ne pas la recréer
        logger.exception("Room %s partiellement peuplée", source.id)
        report.failures[type(e).__name__] += 1
        report.partial.append(e.matrix_room_id)
        await _save_mapping(storage, report, source, e.matrix_room_id)
        return
    except MigrationError as e:
        logger.exception("Echec migration room %s", source.id)
        report.failures[type(e).__name__] += 1
        return
    if await _save_mapping(storage, report, source, target.room_id):
        report.created.append(target.room_id)


async def migrate_rooms(rooms: Iterable[SourceRoom], provisioner, storage) -> MigrationReport:
    report = MigrationReport()
    for source in rooms:
        await migrate_room(source, provisioner, storage, report)
    return report


__all__ = ["MigrationReport", "migrate_room", "migrate_rooms"]
