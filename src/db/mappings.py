"""
Helpers base de données pour les correspondances d'identifiants Rocket.Chat -> Matrix.
"""
from __future__ import annotations

import asyncpg
from typing import Optional

from core.rooms.models import EntityType, IdentityMapping


async def get_mapping(pool: asyncpg.Pool, rc_id: str, type: EntityType) -> Optional[IdentityMapping]:
    q = "SELECT rc_id, type, matrix_id, access_token FROM id_mapping WHERE rc_id=$1 AND type=$2"
    async with pool.acquire() as conn:
        row = await conn.fetchrow(q, rc_id, int(type))
    if row is None:
        return None
    return IdentityMapping(
        source_id=row["rc_id"],
        matrix_id=row["matrix_id"],
        access_token=row["access_token"],
        type=EntityType(row["type"]),
    )


async def save_mapping(pool: asyncpg.Pool, mapping: IdentityMapping):
    q = """
    INSERT INTO id_mapping(rc_id, type, matrix_id, access_token, updated_at)
    VALUES($1,$2,$3,$4,NOW())
    ON CONFLICT (rc_id, type) DO UPDATE SET matrix_id = EXCLUDED.matrix_id, access_token = EXCLUDED.access_token, updated_at = NOW()
    """
    async with pool.acquire() as conn:
        await conn.execute(q, mapping.source_id, int(mapping.type), mapping.matrix_id, mapping.access_token)


__all__ = ["get_mapping", "save_mapping"]
