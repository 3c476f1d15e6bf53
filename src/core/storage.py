"""
Façade du store de correspondances et d'appartenances.

Le pipeline dépend de cet objet plutôt que du pool global, ce qui permet
de le remplacer par un double en test.
"""
from __future__ import annotations

from typing import List, Optional

from core.rooms.models import EntityType, IdentityMapping
from db import mappings as mappings_db
from db import memberships as memberships_db


class Storage:
    def __init__(self, pool):
        self.pool = pool

    async def get_mapping(self, rc_id: str, type: EntityType = EntityType.USER) -> Optional[IdentityMapping]:
        return await mappings_db.get_mapping(self.pool, rc_id, type)

    async def save_room_mapping(self, rc_id: str, matrix_room_id: str):
        await mappings_db.save_mapping(
            self.pool, IdentityMapping(source_id=rc_id, matrix_id=matrix_room_id, type=EntityType.ROOM)
        )

    async def get_memberships(self, room_id: str) -> List[str]:
        return await memberships_db.get_memberships(self.pool, room_id)

    async def create_membership(self, room_id: str, user_id: str):
        await memberships_db.create_membership(self.pool, room_id, user_id)


__all__ = ["Storage"]
