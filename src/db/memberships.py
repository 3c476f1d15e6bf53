"""
Helpers base de données pour les appartenances aux rooms Rocket.Chat.

La création est idempotente : un doublon (room, user) est ignoré.
"""
from __future__ import annotations

import asyncpg
from typing import List


async def create_membership(pool: asyncpg.Pool, room_id: str, user_id: str):
    q = "INSERT INTO membership(room_id, user_id) VALUES($1,$2) ON CONFLICT (room_id, user_id) DO NOTHING"
    async with pool.acquire() as conn:
        await conn.execute(q, room_id, user_id)


async def get_memberships(pool: asyncpg.Pool, room_id: str) -> List[str]:
    q = "SELECT user_id FROM membership WHERE room_id=$1 ORDER BY created_at, user_id"
    async with pool.acquire() as conn:
        rows = await conn.fetch(q, room_id)
    return [r["user_id"] for r in rows]


__all__ = ["create_membership", "get_memberships"]
