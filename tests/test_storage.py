"""Tests for the asyncpg helpers behind the Storage facade."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.rooms.models import EntityType
from core.storage import Storage


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.fixture
def pool(conn):
    @asynccontextmanager
    async def acquire():
        yield conn

    mock = MagicMock()
    mock.acquire = acquire
    return mock


class TestStorage:

    @pytest.mark.asyncio
    async def test_get_mapping_builds_identity(self, pool, conn):
        conn.fetchrow.return_value = {"rc_id": "alice", "type": 0, "matrix_id": "@alice:x", "access_token": "t"}

        mapping = await Storage(pool).get_mapping("alice")

        assert mapping.matrix_id == "@alice:x"
        assert mapping.access_token == "t"
        assert mapping.type is EntityType.USER
        assert conn.fetchrow.await_args.args[1:] == ("alice", 0)

    @pytest.mark.asyncio
    async def test_get_mapping_absent(self, pool, conn):
        conn.fetchrow.return_value = None

        assert await Storage(pool).get_mapping("ghost") is None

    @pytest.mark.asyncio
    async def test_create_membership_is_idempotent_insert(self, pool, conn):
        await Storage(pool).create_membership("room", "alice")

        sql, *args = conn.execute.await_args.args
        assert "ON CONFLICT (room_id, user_id) DO NOTHING" in sql
        assert args == ["room", "alice"]

    @pytest.mark.asyncio
    async def test_get_memberships_returns_ids(self, pool, conn):
        conn.fetch.return_value = [{"user_id": "alice"}, {"user_id": "bob"}]

        assert await Storage(pool).get_memberships("room") == ["alice", "bob"]

    @pytest.mark.asyncio
    async def test_save_room_mapping_upserts_room_type(self, pool, conn):
        await Storage(pool).save_room_mapping("GENERAL", "!general:x")

        sql, *args = conn.execute.await_args.args
        assert "ON CONFLICT (rc_id, type) DO UPDATE" in sql
        assert args == ["GENERAL", 1, "!general:x", None]
