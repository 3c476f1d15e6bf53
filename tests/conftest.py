"""Doubles partagés : store en mémoire et client Matrix factice."""

from unittest.mock import AsyncMock

import pytest

from core.rooms.models import EntityType, IdentityMapping, RoomType, SourceRoom


class FakeStorage:
    """Store en mémoire avec la même interface que core.storage.Storage."""

    def __init__(self, mappings=None, memberships=None):
        self.mappings = dict(mappings or {})
        self.memberships = {k: list(v) for k, v in (memberships or {}).items()}
        self.created = []
        self.room_mappings = {}

    async def get_mapping(self, rc_id, type=EntityType.USER):
        if type == EntityType.ROOM:
            matrix_id = self.room_mappings.get(rc_id)
            return IdentityMapping(rc_id, matrix_id, type=EntityType.ROOM) if matrix_id else None
        return self.mappings.get(rc_id)

    async def get_memberships(self, room_id):
        return list(self.memberships.get(room_id, []))

    async def create_membership(self, room_id, user_id):
        self.created.append((room_id, user_id))
        members = self.memberships.setdefault(room_id, [])
        if user_id not in members:
            members.append(user_id)

    async def save_room_mapping(self, rc_id, matrix_room_id):
        self.room_mappings[rc_id] = matrix_room_id


def user(rc_id, token="tok"):
    return IdentityMapping(rc_id, f"@{rc_id}:example.org", token)


@pytest.fixture
def storage():
    return FakeStorage(
        mappings={uid: user(uid, f"tok-{uid}") for uid in ("alice", "bob", "carol")},
    )


@pytest.fixture
def client():
    mock = AsyncMock()
    mock.create_room = AsyncMock(return_value="!new:example.org")
    mock.invite = AsyncMock(return_value=None)
    mock.join = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def chat_room():
    return SourceRoom(
        id="GENERAL",
        room_type=RoomType.CHAT,
        owner_id="alice",
        name="general",
        description="Discussions générales",
    )


@pytest.fixture
def direct_room():
    return SourceRoom(id="alicebob", room_type=RoomType.DIRECT, uids=("alice", "bob", "alice"))
