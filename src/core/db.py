"""
Abstraction pour PostgreSQL via asyncpg.

Principes :
- Un pool global unique, créé à la demande (`get_pool`)
- Fonctions utilitaires atomiques (pas d'ORM) pour garder le contrôle
- Schéma minimal : correspondances d'identifiants (`id_mapping`) et appartenances aux rooms (`membership`)
"""
from __future__ import annotations

import asyncpg
import logging

logger = logging.getLogger(__name__)

_pool = None


# Correspondances Rocket.Chat -> Matrix (type : 0 user, 1 room, 2 message)
CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS id_mapping (
    rc_id TEXT NOT NULL,
    type SMALLINT NOT NULL,
    matrix_id TEXT NOT NULL,
    access_token TEXT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (rc_id, type)
);

CREATE TABLE IF NOT EXISTS membership (
    room_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (room_id, user_id)
);
CREATE INDEX IF NOT EXISTS idx_membership_room ON membership(room_id);
"""


async def get_pool(dsn: str):
    """
    Retourne (et crée si nécessaire) le pool asyncpg.
    Args :
        dsn : URL de connexion Postgres
    """
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(dsn, min_size=1, max_size=10)
        logger.info("Pool asyncpg initialisé")
    return _pool


async def close_pool():
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Pool asyncpg fermé")


async def ensure_schema(pool: asyncpg.Pool):
    """
    Vérifie et crée le schéma requis si absent.
    """
    async with pool.acquire() as conn:
        await conn.execute(CREATE_TABLES_SQL)
        logger.info("Schéma vérifié (id_mapping, membership)")
